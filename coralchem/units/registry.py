"""
Unit Registry
=============

Catalog of named units and their reduction to base dimensions.

A unit is either a *base unit*, one of the irreducible dimensions listed in
``BaseUnit``, or a *derived unit* built from previously declared units raised
to integer powers, with an optional scale and (for single-dimension units only)
an additive offset.

Declarations are resolved once, in order, by ``build_registry`` into an arena
of ``Unit`` records indexed by a compact integer id. After that the registry
is read-only: there is no way to add, remove, or change a unit.

    >>> registry = build_registry([
    ...     base_unit('meters', 'm', BaseUnit.METERS),
    ...     base_unit('seconds', 's', BaseUnit.SECONDS),
    ...     derived_unit('centimeters', 'cm', 'meters', scale=0.01),
    ...     derived_unit('centimeters_per_second', 'cm/s', 'centimeters', ('seconds', -1)),
    ... ])
    >>> registry.reduce('cm/s')
    (0.01, Dimensions(m s^-1))
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from coralchem.units.errors import InvalidPowerError, RegistryConfigurationError, UnknownUnitError

logger = logging.getLogger(__name__)


# =============================================================================
# BASE DIMENSIONS
# =============================================================================

class BaseUnit(IntEnum):
    """Irreducible dimensions. The integer value is the base-unit id."""
    KELVIN = 0
    SALINITY = 1
    PH = 2                    # acidity, logarithmic
    MOLES = 3
    GRAMS = 4
    METERS = 5
    SECONDS = 6
    COULOMBS = 7
    JOULES = 8


BASE_SYMBOLS = {
    BaseUnit.KELVIN: 'K',
    BaseUnit.SALINITY: 'psu',
    BaseUnit.PH: 'pH',
    BaseUnit.MOLES: 'mol',
    BaseUnit.GRAMS: 'g',
    BaseUnit.METERS: 'm',
    BaseUnit.SECONDS: 's',
    BaseUnit.COULOMBS: 'C',
    BaseUnit.JOULES: 'J',
}


# =============================================================================
# DIMENSION VECTORS
# =============================================================================

Component = Tuple[BaseUnit, int]


def merge(accumulator: Dict[BaseUnit, int], incoming: Iterable[Component], multiplier: int) -> Dict[BaseUnit, int]:
    """
    Fold ``incoming`` into ``accumulator``, scaling each exponent by ``multiplier``.

    Entries whose exponent reaches zero are removed, so the accumulator never
    holds a zero power. This is the only place dimension vectors are combined.
    """
    for base, power in incoming:
        total = accumulator.get(base, 0) + power * multiplier
        if total == 0:
            accumulator.pop(base, None)
        else:
            accumulator[base] = total
    return accumulator


@dataclass(frozen=True)
class Dimensions:
    """
    Dimension vector: canonical tuple of (base unit, exponent) pairs.

    Pairs are sorted by base-unit id and never hold a zero exponent, so two
    vectors describing the same dimension compare equal and hash alike.

        molarity -> Dimensions(mol m^-3)
        diffusivity -> Dimensions(m^2 s^-1)
    """
    components: Tuple[Component, ...] = ()

    @classmethod
    def of(cls, base: BaseUnit, power: int = 1) -> Dimensions:
        return cls.from_accumulator({base: power})

    @classmethod
    def from_accumulator(cls, accumulator: Mapping[BaseUnit, int]) -> Dimensions:
        return cls(tuple(
            (BaseUnit(base), int(power))
            for base, power in sorted(accumulator.items())
            if power != 0
        ))

    def __iter__(self) -> Iterator[Component]:
        return iter(self.components)

    def __len__(self) -> int:
        return len(self.components)

    def __mul__(self, other: Dimensions) -> Dimensions:
        """Multiply quantities -> add exponents"""
        return Dimensions.from_accumulator(merge(dict(self.components), other, 1))

    def __truediv__(self, other: Dimensions) -> Dimensions:
        """Divide quantities -> subtract exponents"""
        return Dimensions.from_accumulator(merge(dict(self.components), other, -1))

    def __pow__(self, exp: int) -> Dimensions:
        """Raise to power -> multiply all exponents"""
        if exp == 0:
            return DIMENSIONLESS
        return Dimensions.from_accumulator(merge({}, self, exp))

    def halve(self) -> Dimensions:
        """Exponents of the square root. Every exponent must be even."""
        if any(power % 2 for _, power in self.components):
            raise InvalidPowerError(self)
        return Dimensions(tuple((base, power // 2) for base, power in self.components))

    def is_dimensionless(self) -> bool:
        return not self.components

    def power_of(self, base: BaseUnit) -> int:
        return dict(self.components).get(base, 0)

    def __str__(self) -> str:
        parts = []
        for base, power in self.components:
            symbol = BASE_SYMBOLS[base]
            parts.append(symbol if power == 1 else f"{symbol}^{power}")
        return ' '.join(parts) if parts else '1'

    def __repr__(self) -> str:
        return f"Dimensions({self})"


DIMENSIONLESS = Dimensions()


def vectors_match(a: Iterable[Component], b: Iterable[Component]) -> bool:
    """True when both vectors hold exactly the same (base, exponent) pairs."""
    a_pairs = list(a)
    b_pairs = list(b)
    return len(a_pairs) == len(b_pairs) and dict(a_pairs) == dict(b_pairs)


# =============================================================================
# UNIT DECLARATIONS
# =============================================================================

Factor = Tuple[str, int]


@dataclass(frozen=True)
class UnitDef:
    """Declaration of a single unit, before resolution."""
    name: str                              # Registry key (e.g., "molarity")
    symbol: str                            # Display symbol (e.g., "mol/l")
    base: Optional[BaseUnit] = None        # Set for base units only
    factors: Tuple[Factor, ...] = ()       # (unit name, exponent) for derived units
    scale: float = 1.0                     # Applied on top of the factors
    offset: float = 0.0                    # Interval-vs-absolute shift (temperature)
    description: str = ""


def base_unit(name: str, symbol: str, base: BaseUnit, description: str = "") -> UnitDef:
    return UnitDef(name, symbol, base=base, description=description)


def derived_unit(name: str, symbol: str, *factors: Union[str, Factor],
                 scale: float = 1.0, offset: float = 0.0, description: str = "") -> UnitDef:
    """
    Declare a derived unit.

    Factors are unit names (power 1) or (unit name, exponent) pairs, e.g.
    ``derived_unit('molarity', 'mol/l', 'moles', ('liters', -1))``.
    A unit with no factors is dimensionless.
    """
    normalized = tuple(
        (factor, 1) if isinstance(factor, str) else (factor[0], int(factor[1]))
        for factor in factors
    )
    return UnitDef(name, symbol, factors=normalized, scale=scale, offset=offset,
                   description=description)


@dataclass(frozen=True)
class Unit:
    """
    Resolved registry entry.

    ``scale`` and ``dimensions`` are the unit's reduction to base units:
    one of this unit equals ``scale`` in the base units of ``dimensions``
    (plus ``offset`` for offset units).
    """
    id: int
    name: str
    symbol: str
    scale: float
    dimensions: Dimensions
    offset: float = 0.0
    base: Optional[BaseUnit] = None
    description: str = ""

    @property
    def is_base(self) -> bool:
        return self.base is not None

    @property
    def has_offset(self) -> bool:
        return self.offset != 0.0

    def __repr__(self) -> str:
        return f"Unit({self.name!r}, '{self.symbol}')"


# =============================================================================
# REDUCTION
# =============================================================================

def reduce_factors(factors: Sequence[Factor], lookup: Callable[[str], Unit],
                   scale: float = 1.0) -> Tuple[float, Dimensions]:
    """
    Reduce a list of (unit name, exponent) factors to (scale, dimensions).

    Each factor's own reduction is raised to its exponent: scales multiply,
    dimension vectors merge with the exponent as multiplier.
    """
    accumulator: Dict[BaseUnit, int] = {}
    for name, power in factors:
        unit = lookup(name)
        scale *= unit.scale ** power
        merge(accumulator, unit.dimensions, power)
    return scale, Dimensions.from_accumulator(accumulator)


def _resolve(definition: UnitDef, unit_id: int, lookup: Callable[[str], Unit]) -> Unit:
    name = definition.name

    if not isinstance(definition.scale, (int, float)) or isinstance(definition.scale, bool) \
            or not math.isfinite(definition.scale) or definition.scale <= 0:
        raise RegistryConfigurationError(name, f"scale must be a positive finite number, got {definition.scale!r}")
    if not isinstance(definition.offset, (int, float)) or not math.isfinite(definition.offset):
        raise RegistryConfigurationError(name, f"offset must be a finite number, got {definition.offset!r}")

    if definition.base is not None:
        if definition.factors or definition.scale != 1.0 or definition.offset:
            raise RegistryConfigurationError(name, "a base unit cannot declare factors, scale or offset")
        return Unit(unit_id, name, definition.symbol, 1.0, Dimensions.of(definition.base),
                    base=definition.base, description=definition.description)

    for factor_name, power in definition.factors:
        if power == 0:
            raise RegistryConfigurationError(name, f"factor '{factor_name}' has exponent 0")
        factor = lookup(factor_name)
        if factor.has_offset:
            raise RegistryConfigurationError(
                name, f"offset unit '{factor_name}' cannot be composed into another unit"
            )

    scale, dimensions = reduce_factors(definition.factors, lookup, float(definition.scale))

    if definition.offset:
        if definition.scale != 1.0:
            raise RegistryConfigurationError(name, "an offset unit cannot also declare a scale")
        if len(dimensions) != 1 or dimensions.components[0][1] != 1 or scale != 1.0:
            raise RegistryConfigurationError(
                name, f"an offset needs exactly one base dimension with power 1, got [{dimensions}]"
            )

    return Unit(unit_id, name, definition.symbol, scale, dimensions,
                offset=float(definition.offset), description=definition.description)


# =============================================================================
# REGISTRY
# =============================================================================

class UnitRegistry:
    """
    Immutable catalog of resolved units.

    Units are addressable by integer id, by name, or by symbol.
    """

    def __init__(self, units: Sequence[Unit]):
        self._units: Tuple[Unit, ...] = tuple(units)
        self._by_name: Mapping[str, Unit] = MappingProxyType({u.name: u for u in self._units})
        self._by_symbol: Mapping[str, Unit] = MappingProxyType({u.symbol: u for u in self._units})

    @property
    def units(self) -> Tuple[Unit, ...]:
        return self._units

    @property
    def names(self) -> List[str]:
        return list(self._by_name)

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self) -> Iterator[Unit]:
        return iter(self._units)

    def __contains__(self, token) -> bool:
        try:
            self.get(token)
        except UnknownUnitError:
            return False
        return True

    def __getitem__(self, token: Union[int, str, Unit]) -> Unit:
        if isinstance(token, int) and not isinstance(token, bool):
            if 0 <= token < len(self._units):
                return self._units[token]
            raise UnknownUnitError(str(token))
        return self.get(token)

    def get(self, token: Union[str, Unit]) -> Unit:
        """
        Look up a unit by name or symbol, with forgiving matching.

        A resolved ``Unit`` is returned as is, whichever registry built it,
        since it already carries its own scale, offset and dimensions.
        """
        if isinstance(token, Unit):
            return token

        if not isinstance(token, str):
            raise UnknownUnitError(repr(token))

        if token in self._by_name:
            return self._by_name[token]
        if token in self._by_symbol:
            return self._by_symbol[token]

        # "Grams per mole" -> grams_per_mole
        as_name = '_'.join(token.strip().lower().split())
        if as_name in self._by_name:
            return self._by_name[as_name]

        # "mol / l" -> mol/l
        no_space = token.replace(" ", "")
        if no_space in self._by_symbol:
            return self._by_symbol[no_space]

        raise UnknownUnitError(token)

    def reduce(self, unit: Union[str, Unit]) -> Tuple[float, Dimensions]:
        """Reduce a unit to (scale, dimension vector) in base units."""
        resolved = self.get(unit)
        return resolved.scale, resolved.dimensions

    def compatible_units(self, dimensions: Dimensions) -> List[Unit]:
        """All units whose reduced dimensions match ``dimensions``."""
        return [u for u in self._units if vectors_match(u.dimensions, dimensions)]


def build_registry(definitions: Iterable[UnitDef]) -> UnitRegistry:
    """
    Resolve unit declarations, in order, into an immutable registry.

    A derived unit may only refer to units declared before it.

    Raises:
        RegistryConfigurationError: On any malformed declaration
    """
    units: List[Unit] = []
    by_name: Dict[str, Unit] = {}
    symbols: Dict[str, str] = {}

    def lookup(name: str) -> Unit:
        if name not in by_name:
            raise RegistryConfigurationError(current, f"unknown factor unit '{name}'")
        return by_name[name]

    for definition in definitions:
        current = definition.name
        if definition.name in by_name:
            raise RegistryConfigurationError(definition.name, "declared twice")
        if definition.symbol in symbols:
            raise RegistryConfigurationError(
                definition.name, f"symbol '{definition.symbol}' already used by '{symbols[definition.symbol]}'"
            )

        unit = _resolve(definition, len(units), lookup)
        units.append(unit)
        by_name[unit.name] = unit
        symbols[unit.symbol] = unit.name

    registry = UnitRegistry(units)
    logger.debug(f"Unit registry built: {len(registry)} units, "
                 f"{sum(1 for u in registry if u.is_base)} base dimensions")
    return registry
