"""
Version constants for the formatter.

Bump FORMATTER_VERSION whenever the classification rules or the wire framing change,
since either alters the bytes sent for the same input.
"""

# API Version
API_VERSION = "1.0.0"

# Component versions (update these when implementations change)
FORMATTER_VERSION = "formdata-formatter-1.0.0"
PARSER_VERSION = "xml-loader-1.0.0"
