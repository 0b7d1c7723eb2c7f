"""Application constants."""

from decimal import Decimal

# Position counters. Exercise order is zero-based, set numbers start at 1.
EXERCISE_ORDER_START = 0
SET_NUMBER_START = 1

# Set limits
MIN_REPS = 1
MAX_REPS = 1000
MIN_REST_SECONDS = 0
MAX_REST_SECONDS = 3600  # 1 hour
MAX_WEIGHT_KG = Decimal("9999.99")  # Numeric(6, 2)

# Field lengths
WORKOUT_NAME_MAX_LENGTH = 100
EXERCISE_NAME_MAX_LENGTH = 200

# Catalog search
DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 50
