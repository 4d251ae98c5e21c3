"""
Constants for the Craftgate client.
"""

# API Configuration
PRODUCTION_BASE_URL = "https://api.craftgate.io"
SANDBOX_BASE_URL = "https://sandbox-api.craftgate.io"
DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRY_DELAY = 0.5
DEFAULT_MAX_RETRIES = 3
DEFAULT_BACKOFF_FACTOR = 2.0
DEFAULT_MAX_DELAY = 30.0

# Authentication Configuration
HEADER_API_KEY = "x-api-key"
HEADER_RND_KEY = "x-rnd-key"
HEADER_AUTH_VERSION = "x-auth-version"
HEADER_SIGNATURE = "x-signature"
AUTH_VERSION = "1"
NONCE_LENGTH = 64
MIN_NONCE_LENGTH = 32

# Error codes at or above this value are payment (bank/gateway) errors
PAYMENT_ERROR_CODE_THRESHOLD = 10000
