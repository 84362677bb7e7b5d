# Vulture whitelist: parameters required by callback signatures
# that vulture incorrectly reports as unused.
#
# Run vulture with: vulture petfeeder/ vulture_whitelist.py --min-confidence 80

# Flask error handler signature (error)
error  # unused variable

# Alembic migration module attributes read by the script directory
revision  # unused variable
down_revision  # unused variable
branch_labels  # unused variable
depends_on  # unused variable

# TYPE_CHECKING guard (unsatisfiable 'if' condition is expected)
from typing import TYPE_CHECKING

TYPE_CHECKING  # unused variable
