"""
Quantity Engine
===============

A ``Quantity`` is a number together with its physical dimension. The value is
always held in canonical form, relative to the base units of its dimension
vector, so two quantities with matching dimensions can be added or compared
directly without any further conversion.

Usage:
    >>> from coralchem.units import Q, Terms, Units

    >>> depth = Terms.centimeters(250)
    >>> depth.normalize(Units.meters)
    2.5

    # Composite units arise from arithmetic
    >>> speed = Terms.meters(10) / Terms.seconds(2)
    >>> speed.normalize(Units.centimeters_per_second)
    500.0

    # Strings work too
    >>> Q("25 degC").to("K")
    298.15

    # Mixing dimensions fails fast
    >>> Terms.kelvin(300) + Terms.molarity(1)
    Traceback (most recent call last):
    ...
    DimensionMismatchError: Dimensions must match for add: [K] vs [mol m^-3]
"""

from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterator, Mapping, Optional, Tuple, Union

from coralchem.units.catalog import REGISTRY
from coralchem.units.errors import DimensionMismatchError, InvalidValueError, UnknownUnitError
from coralchem.units.registry import DIMENSIONLESS, BaseUnit, Dimensions, Unit, UnitRegistry, vectors_match


UnitLike = Union[str, Unit]
Operand = Union['Quantity', int, float]

ACIDITY = Dimensions.of(BaseUnit.PH)


def _check_value(value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidValueError(value, "value must be a real number")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidValueError(value)
    return value


# =============================================================================
# QUANTITY
# =============================================================================

@dataclass(frozen=True, eq=False)
class Quantity:
    """
    Immutable (canonical value, dimension vector) pair.

    Build quantities with ``Quantity.from_unit``, ``Terms.<unit>(value)`` or
    ``Q(value, unit)``. The raw constructor takes a value that is already in
    base units.
    """
    value: float
    dimensions: Dimensions = DIMENSIONLESS

    def __post_init__(self):
        object.__setattr__(self, 'value', _check_value(self.value))
        if not isinstance(self.dimensions, Dimensions):
            object.__setattr__(self, 'dimensions', Dimensions.from_accumulator(dict(self.dimensions)))

    @classmethod
    def from_unit(cls, value: float, unit: UnitLike,
                  registry: Optional[UnitRegistry] = None) -> Quantity:
        """
        Create a quantity from a value expressed in a named unit.

        The unit's scale (or offset, for offset units such as Celsius) is
        folded into the stored value immediately.

        Raises:
            InvalidValueError: If value is not a finite real number
            UnknownUnitError: If the unit is not registered
        """
        resolved = (REGISTRY if registry is None else registry).get(unit)
        value = _check_value(value)
        if resolved.has_offset:
            return cls(value + resolved.offset, resolved.dimensions)
        return cls(value * resolved.scale, resolved.dimensions)

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def normalize(self, unit: UnitLike, registry: Optional[UnitRegistry] = None) -> float:
        """
        Numeric value of this quantity expressed in ``unit``.

        Raises:
            DimensionMismatchError: If the unit measures a different dimension
        """
        target = (REGISTRY if registry is None else registry).get(unit)
        if not vectors_match(self.dimensions, target.dimensions):
            raise DimensionMismatchError(self.dimensions, target.dimensions,
                                         f"normalize to '{target.symbol}'")
        return (self.value - target.offset) / target.scale

    to = normalize

    def is_compatible(self, unit: UnitLike, registry: Optional[UnitRegistry] = None) -> bool:
        """Check if conversion to ``unit`` is possible"""
        try:
            target = (REGISTRY if registry is None else registry).get(unit)
        except UnknownUnitError:
            return False
        return vectors_match(self.dimensions, target.dimensions)

    @property
    def si(self) -> float:
        """Value in base units"""
        return self.value

    def number(self) -> float:
        """Plain number of a dimensionless quantity."""
        return self.normalize('number')

    def concentration_h(self) -> Quantity:
        """
        Concentration of H+ (mol/l) for an acidity quantity.

        This is the one logarithmic conversion in the engine, so it lives here
        rather than in the registry, whose conversions are all linear.
        """
        if self.dimensions != ACIDITY:
            raise DimensionMismatchError(self.dimensions, ACIDITY, "acidity to concentration")
        return Quantity.from_unit(10.0 ** -self.value, 'molarity')

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    @staticmethod
    def _coerce(other: Operand, operation: str) -> Quantity:
        if isinstance(other, Quantity):
            return other
        if isinstance(other, numbers.Real) and not isinstance(other, bool):
            return Quantity(other)
        raise TypeError(f"Cannot {operation} Quantity and {type(other).__name__}")

    def _require_match(self, other: Quantity, operation: str) -> None:
        if not vectors_match(self.dimensions, other.dimensions):
            raise DimensionMismatchError(self.dimensions, other.dimensions, operation)

    def add(self, other: Operand) -> Quantity:
        other = self._coerce(other, 'add')
        self._require_match(other, 'add')
        return Quantity(self.value + other.value, self.dimensions)

    def sub(self, other: Operand) -> Quantity:
        other = self._coerce(other, 'subtract')
        self._require_match(other, 'sub')
        return self.add(other.negate())

    def negate(self) -> Quantity:
        return Quantity(-self.value, self.dimensions)

    def mul(self, other: Operand) -> Quantity:
        other = self._coerce(other, 'multiply')
        return Quantity(self.value * other.value, self.dimensions * other.dimensions)

    def cmul(self, n: float) -> Quantity:
        """Multiply by a plain number."""
        return self.mul(Quantity(n))

    def div(self, other: Operand) -> Quantity:
        other = self._coerce(other, 'divide')
        return Quantity(self.value / other.value, self.dimensions / other.dimensions)

    def sqrt(self) -> Quantity:
        """
        Square root. Every exponent in the dimension vector must be even.

        Raises:
            InvalidPowerError: If any exponent is odd
            InvalidValueError: If the value is negative
        """
        dimensions = self.dimensions.halve()
        if self.value < 0:
            raise InvalidValueError(self.value, "square root of a negative quantity")
        return Quantity(math.sqrt(self.value), dimensions)

    def power(self, exp: Union[int, float]) -> Quantity:
        """Integer powers of any quantity; real powers of dimensionless ones."""
        try:
            if isinstance(exp, numbers.Integral) and not isinstance(exp, bool):
                return Quantity(self.value ** int(exp), self.dimensions ** int(exp))
            if not self.dimensions.is_dimensionless():
                raise DimensionMismatchError(self.dimensions, DIMENSIONLESS, f"power {exp}")
            return Quantity(self.number() ** exp)
        except (OverflowError, ZeroDivisionError) as e:
            raise InvalidValueError(self.value, f"power {exp}: {e}") from e

    def abs(self) -> Quantity:
        return Quantity(abs(self.value), self.dimensions)

    def natural_logarithm(self) -> Quantity:
        """Natural logarithm of a positive dimensionless quantity."""
        n = self.number()
        if n <= 0:
            raise InvalidValueError(n, "logarithm of a non-positive number")
        return Quantity(math.log(n))

    def exp(self) -> Quantity:
        """e raised to a dimensionless quantity."""
        n = self.number()
        try:
            return Quantity(math.exp(n))
        except OverflowError as e:
            raise InvalidValueError(n, "exponential overflows") from e

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def less_than(self, other: Operand) -> bool:
        other = self._coerce(other, 'compare')
        self._require_match(other, 'less_than')
        return self.value < other.value

    def equals(self, other: Operand) -> bool:
        other = self._coerce(other, 'compare')
        self._require_match(other, 'equality')
        return self.value == other.value

    def is_negative(self) -> bool:
        return self.value < 0

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: Operand) -> Quantity:
        return self.add(other)

    def __radd__(self, other: Operand) -> Quantity:
        return self._coerce(other, 'add').add(self)

    def __sub__(self, other: Operand) -> Quantity:
        return self.sub(other)

    def __rsub__(self, other: Operand) -> Quantity:
        return self._coerce(other, 'subtract').sub(self)

    def __mul__(self, other: Operand) -> Quantity:
        return self.mul(other)

    def __rmul__(self, other: Operand) -> Quantity:
        return self._coerce(other, 'multiply').mul(self)

    def __truediv__(self, other: Operand) -> Quantity:
        return self.div(other)

    def __rtruediv__(self, other: Operand) -> Quantity:
        return self._coerce(other, 'divide').div(self)

    def __pow__(self, exp: Union[int, float]) -> Quantity:
        return self.power(exp)

    def __neg__(self) -> Quantity:
        return self.negate()

    def __abs__(self) -> Quantity:
        return self.abs()

    def __lt__(self, other: Operand) -> bool:
        return self.less_than(other)

    def __le__(self, other: Operand) -> bool:
        return self.less_than(other) or self.equals(other)

    def __gt__(self, other: Operand) -> bool:
        return self._coerce(other, 'compare').less_than(self)

    def __ge__(self, other: Operand) -> bool:
        return self.__gt__(other) or self.equals(other)

    def __eq__(self, other) -> bool:
        if not isinstance(other, (Quantity, numbers.Real)) or isinstance(other, bool):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self) -> int:
        # Dimensionless quantities compare equal to plain numbers
        if self.dimensions.is_dimensionless():
            return hash(self.value)
        return hash((self.value, self.dimensions))

    def __repr__(self) -> str:
        return f"Quantity({self.value!r}, [{self.dimensions}])"

    def __str__(self) -> str:
        if self.value != 0 and (abs(self.value) < 0.001 or abs(self.value) > 10000):
            return f"{self.value:.4e} {self.dimensions}"
        return f"{self.value:.4f} {self.dimensions}"


# =============================================================================
# CONSTRUCTION HELPERS
# =============================================================================

_QUANTITY_PATTERN = re.compile(r'^([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*(.+)$')


def parse_quantity(s: str) -> Tuple[float, str]:
    """Parse '4 cm' or '0.5 mol/l' into (value, unit)"""
    match = _QUANTITY_PATTERN.match(s.strip())
    if not match:
        raise InvalidValueError(s, "cannot parse quantity string")
    return float(match.group(1)), match.group(2).strip()


def Q(value: Union[float, str], unit: Optional[UnitLike] = None) -> Quantity:
    """
    Create a quantity from a value and a unit name or symbol.

        >>> Q(10, "cm/s")
        >>> Q("7.76 pH")
    """
    if isinstance(value, str) and unit is None:
        value, unit = parse_quantity(value)
    if unit is None:
        raise UnknownUnitError("<missing unit>")
    return Quantity.from_unit(value, unit)


def ph_from_concentration(concentration: Quantity) -> Quantity:
    """Inverse of ``Quantity.concentration_h``: pH of an H+ concentration."""
    molarity = concentration.normalize('molarity')
    if molarity <= 0:
        raise InvalidValueError(molarity, "concentration must be positive")
    return Quantity.from_unit(-math.log10(molarity), 'ph')


# =============================================================================
# NAMESPACES
# =============================================================================

class _UnitNamespace:
    """Attribute access to registered units: ``Units.molarity``."""

    __slots__ = ('_registry', '_entries')

    def __init__(self, registry: UnitRegistry, entries: Mapping[str, object]):
        object.__setattr__(self, '_registry', registry)
        object.__setattr__(self, '_entries', MappingProxyType(dict(entries)))

    def __getattr__(self, name: str):
        try:
            return self._entries[name]
        except KeyError:
            raise AttributeError(f"No unit named '{name}'") from None

    def __setattr__(self, name, value):
        raise AttributeError("Unit namespaces are read-only")

    def __delattr__(self, name):
        raise AttributeError("Unit namespaces are read-only")

    def __getitem__(self, name: str):
        return self._entries[self._registry.get(name).name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name) -> bool:
        return name in self._entries

    def __dir__(self):
        return list(self._entries)


def _constructor(unit: Unit, registry: UnitRegistry) -> Callable[[float], Quantity]:
    def construct(value: float) -> Quantity:
        return Quantity.from_unit(value, unit, registry)

    construct.__name__ = unit.name
    construct.__qualname__ = f"Terms.{unit.name}"
    construct.__doc__ = f"Quantity from a value in {unit.symbol}."
    return construct


def unit_namespace(registry: UnitRegistry) -> _UnitNamespace:
    return _UnitNamespace(registry, {u.name: u for u in registry})


def term_namespace(registry: UnitRegistry) -> _UnitNamespace:
    return _UnitNamespace(registry, {u.name: _constructor(u, registry) for u in registry})


# Units.<name> -> Unit, Terms.<name>(value) -> Quantity
Units = unit_namespace(REGISTRY)
Terms = term_namespace(REGISTRY)
