"""Common configuration constants used across the application."""

# HTTP and Network Constants
DEFAULT_TIMEOUT = 30.0
"""Default per-attempt HTTP request timeout in seconds"""

DEFAULT_RPC_URL = "https://blockstream.info/api"
"""Default block explorer API base URL"""

DEFAULT_LATEST_BLOCK_ENDPOINT = "/blocks"
"""Endpoint returning the most recent blocks (newest first)"""

# Retry Configuration
MAX_RETRIES = 3
"""Default number of additional attempts after the first failed one"""

RETRY_BASE_DELAY = 1.0
"""Base delay for exponential backoff in seconds"""

RETRY_BACKOFF_MULTIPLIER = 2.0
"""Growth factor applied to the delay for each further attempt"""

RETRY_MAX_DELAY = 10.0
"""Maximum delay between retries in seconds"""

PIPELINE_RETRY_DELAY = 1.0
"""Base delay between whole-pipeline re-runs in seconds"""

# Color Derivation
DEFAULT_ALGORITHM = "sha256"
"""Digest used to spread the block hash over the palette"""

DIGEST_HEX_LENGTH = 64
"""Length of a hex-encoded 256-bit digest"""

SEGMENT_LENGTH = 6
"""Hex characters of digest consumed per palette color"""

DEFAULT_PALETTE_SIZE = 6
"""Number of colors derived per run"""

DEFAULT_SATURATION_RANGE = (0.6, 0.9)
"""Saturation bounds as fractions of 100%"""

DEFAULT_LIGHTNESS_RANGE = (0.4, 0.7)
"""Lightness bounds as fractions of 100%"""

# Output
DEFAULT_CONFIG_PATH = "inputs/config.json"
"""Pipeline configuration file, relative to the working directory"""

DEFAULT_OUTPUT_DIR = "public"
"""Directory served by static hosting"""

CSS_FILENAME = "colors.css"
JSON_FILENAME = "colors.json"
HTML_FILENAME = "colors-preview.html"


__all__ = [
    "CSS_FILENAME",
    "DEFAULT_ALGORITHM",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_LATEST_BLOCK_ENDPOINT",
    "DEFAULT_LIGHTNESS_RANGE",
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_PALETTE_SIZE",
    "DEFAULT_RPC_URL",
    "DEFAULT_SATURATION_RANGE",
    "DEFAULT_TIMEOUT",
    "DIGEST_HEX_LENGTH",
    "HTML_FILENAME",
    "JSON_FILENAME",
    "MAX_RETRIES",
    "PIPELINE_RETRY_DELAY",
    "RETRY_BACKOFF_MULTIPLIER",
    "RETRY_BASE_DELAY",
    "RETRY_MAX_DELAY",
    "SEGMENT_LENGTH",
]
