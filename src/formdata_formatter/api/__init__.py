# HTTP API for the formatter
