class LocationCodeError(Exception):
    """Base class for errors raised by this package."""


class InvalidQueryError(LocationCodeError, ValueError):
    """Caller supplied a malformed country code, coordinate or radius."""


class BootstrapError(LocationCodeError):
    """Reference data could not be fetched; the service must not start."""

    def __init__(self, failures: dict):
        self.failures = dict(failures)
        detail = "; ".join(f"{name}: {err}" for name, err in self.failures.items())
        super().__init__(f"could not fetch reference data ({detail})")


class ConfigurationError(LocationCodeError):
    pass


class LocationCodeClientError(LocationCodeError):
    """A remote lookup failed (transport, status or body)."""
