"""
Application-level constants for hardcoded business logic.

These values represent core catalog behavior and should NEVER be changed
via environment variables or configuration. For configurable values
(database URL, URL prefix, logging), see catalog/settings.py.
"""

# ============================================================================
# Field Constraints
# ============================================================================

# Author first/family name length bounds
NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 100

# Genre name minimum length (no upper bound beyond the column type)
GENRE_NAME_MIN_LENGTH = 1
GENRE_NAME_TAKEN = "Genre name already in use"

# ============================================================================
# Derived Attributes
# ============================================================================

# Returned by lifespan when either date is missing
LIFESPAN_UNKNOWN = "unknown"

# Display format for formatted dates (YYYY-MM-DD)
DISPLAY_DATE_FORMAT = "%Y-%m-%d"

# ============================================================================
# View Names
# ============================================================================

AUTHOR_LIST_VIEW = "author_list"
AUTHOR_DETAIL_VIEW = "author_detail"
AUTHOR_FORM_VIEW = "author_form"
AUTHOR_DELETE_VIEW = "author_delete"

GENRE_LIST_VIEW = "genre_list"
GENRE_DETAIL_VIEW = "genre_detail"
GENRE_FORM_VIEW = "genre_form"
GENRE_DELETE_VIEW = "genre_delete"

# ============================================================================
# Logging Constants
# ============================================================================

# Maximum size of a single structured log line in bytes
MAX_LOG_SIZE_BYTES = 100000

# Request correlation header and the length ids are cut to
CORRELATION_ID_HEADER = "X-Correlation-ID"
CORRELATION_ID_LENGTH = 8
