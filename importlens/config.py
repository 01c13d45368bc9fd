"""importlens configuration - constants only.

CRITICAL: This file should contain ONLY configuration constants.
NO business logic. Per-language syntax lives in importlens.grammars.
"""


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

# Environment variables read by importlens.utils.logging.configure_logging()
LOG_LEVEL_ENV = "IMPORTLENS_LOG_LEVEL"
LOG_JSON_ENV = "IMPORTLENS_LOG_JSON"
LOG_FILE_ENV = "IMPORTLENS_LOG_FILE"

DEFAULT_LOG_LEVEL = "INFO"

# NDJSON numeric levels, compatible with Pino consumers
LOG_LEVEL_NUMBERS = {
    "TRACE": 10,
    "DEBUG": 20,
    "INFO": 30,
    "SUCCESS": 30,
    "WARNING": 40,
    "ERROR": 50,
    "CRITICAL": 60,
}


# =============================================================================
# SOURCE TEXT
# =============================================================================

# Encoding assumed when extract() receives bytes
SOURCE_ENCODING = "utf-8"

# Tab stops used when measuring statement indentation
TAB_WIDTH = 8


# =============================================================================
# NORMALIZATION
# =============================================================================

# Repeated relative_depth times when a relative import names no module
# ("from .. import x" -> source_module "..")
PARENT_SENTINEL = "."
