class WheelError(Exception):
    pass


class InvalidConfiguration(WheelError, ValueError):
    """Raised when a wheel cannot be built from the supplied options."""


class InvalidWeights(WheelError, ValueError):
    """Raised when weights do not form a usable probability distribution."""
