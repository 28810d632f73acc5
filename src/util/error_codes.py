# Error codes are grouped by category, see util.errors for the matching classes
# 1xxx: Validation
# 2xxx: Not Found
# 7xxx: Configuration
# 8xxx: Internal

# Validation
UNSUPPORTED_DIALECT = 1001
INVALID_CONTEXT_OPTIONS = 1002
UNKNOWN_DIALECT = 1003

# Not Found
UNSUPPORTED_CONTEXT = 2001
INVALID_ESCAPER_CLASS = 2002

# Configuration
INVALID_DEFAULT_DIALECT = 7001

# Internal
MALFORMED_INPUT = 8001
