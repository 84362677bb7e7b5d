"""Service layer for the pet feeder backend."""
