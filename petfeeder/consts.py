"""Project constants."""

PROJECT_NAME = "petfeeder"
PROJECT_DESCRIPTION = "Flask backend for managing a smart pet feeder"
API_TITLE = "petfeeder API"
API_DESCRIPTION = "REST API for feeding schedules, dispensing and device telemetry"
DEFAULT_BACKEND_PORT = 3000

# Seeded administrator account; factory reset restores this password
DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "1234"

# Header the feeder uses to present its shared secret
DEVICE_API_KEY_HEADER = "X-API-Key"
