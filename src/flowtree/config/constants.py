"""Configuration constants.

Values here are protocol constraints and implementation details, not
user-configurable. For configurable values, see models.py.
"""

DEFAULT_PORT = 8011
"""Port the tree service listens on unless configured otherwise."""

PORT_MIN = 0
PORT_MAX = 65535
"""Valid port range."""

DEFAULT_MAX_SOURCE_BYTES = 5 * 1024 * 1024
"""Default cap on a single request body."""

WARNINGS_HEADER = "X-FlowTree-Warnings"
"""Response header carrying the number of build warnings."""

REQUEST_ID_HEADER = "X-Request-ID"
"""Response header echoing the request correlation ID."""
