"""
Unit Engine Errors
==================

Every violation detected by the units engine is a programming defect in the
calling formula, so nothing here is retried or recovered from. All errors share
the ``UnitsError`` base so callers can catch the whole family at once.
"""


class UnitsError(Exception):
    """Base class for all units engine failures."""
    pass


class InvalidValueError(UnitsError, ValueError):
    """A scalar that is not a finite real number reached the engine."""

    def __init__(self, value, why: str = "value must be a finite real number"):
        UnitsError.__init__(self, f"Invalid value {value!r}: {why}")
        self.value = value


class DimensionMismatchError(UnitsError):
    """Two dimension vectors that had to be equal were not."""

    def __init__(self, left, right, operation: str):
        UnitsError.__init__(
            self,
            f"Dimensions must match for {operation}: [{left}] vs [{right}]"
        )
        self.left = left
        self.right = right
        self.operation = operation


class InvalidPowerError(UnitsError):
    """A root was taken of a quantity whose exponents do not divide evenly."""

    def __init__(self, dimensions):
        UnitsError.__init__(
            self,
            f"Cannot take square root of [{dimensions}]: every exponent must be even"
        )
        self.dimensions = dimensions


class RegistryConfigurationError(UnitsError):
    """A unit declaration is malformed. Raised once, while the registry is built."""

    def __init__(self, unit: str, why: str):
        UnitsError.__init__(self, f"Bad unit declaration '{unit}': {why}")
        self.unit = unit


class UnknownUnitError(UnitsError, KeyError):
    """A unit name or symbol is not in the registry."""

    def __init__(self, token: str):
        UnitsError.__init__(self, f"Unknown unit: '{token}'")
        self.token = token

    def __str__(self) -> str:
        return self.args[0]
