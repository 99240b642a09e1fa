"""Constants for yield allocation and projection."""

# Scoring
DEFAULT_RISK_FREE_RATE = 2.0  # percent

# Allocation bounds (percent of the invested amount)
MIN_ALLOCATION_PCT = 5.0
MAX_ALLOCATION_PCT = 60.0
MIN_BASE_WEIGHT = 0.1

# Smallest position the allocator will open (currency units)
MIN_LOT_SIZE = 100.0

# Random factor applied to each weight: uniform in [low, low + span)
RANDOM_FACTOR_LOW = 0.8
RANDOM_FACTOR_SPAN = 0.4

# Risk profiles: name -> (max risk score, diversification factor)
RISK_PROFILES = {
    "conservative": (3, 0.8),
    "moderate": (6, 0.6),
    "aggressive": (10, 0.4),
}
CONSERVATIVE_MAX_TOLERANCE = 3
MODERATE_MAX_TOLERANCE = 7

MIN_RISK_TOLERANCE = 1
MAX_RISK_TOLERANCE = 10

# Liquidity tier -> confidence contribution (anything else scores 1)
LIQUIDITY_SCORES = {
    "very_high": 5,
    "high": 4,
    "medium": 3,
    "low": 2,
}
UNKNOWN_LIQUIDITY_SCORE = 1
MAX_LIQUIDITY_SCORE = 5

# Confidence blend
CONFIDENCE_TARGET_POSITIONS = 5
CONFIDENCE_DIVERSIFICATION_WEIGHT = 0.4
CONFIDENCE_LIQUIDITY_WEIGHT = 0.6

MAX_DIVERSIFICATION_SCORE = 10

# Simulation
DAYS_PER_YEAR = 365
WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12
VOLATILITY_PER_RISK_POINT = 0.01  # daily percent per risk point

# Rounding precision, in decimal places
CENTS = 2
BASIS_POINTS = 4
WHOLE = 0
