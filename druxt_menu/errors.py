"""Error types raised by druxt-menu itself.

HTTP and transport failures are not wrapped: they surface as the
``httpx.HTTPStatusError`` / ``httpx.TransportError`` raised by the client.
"""


class ConfigurationError(ValueError):
    """Raised when the module is constructed or configured incorrectly."""
