"""
Dimensional analysis for every formula in coralchem.

    from coralchem.units import Terms, Units, Q

    Terms.<unit>(value)      -> Quantity
    quantity.normalize(Units.<unit>) -> float

Sub-modules
-----------
registry
    Base dimensions, unit declarations, reduction and the immutable registry.
catalog
    The compiled-in unit table and the process-wide ``REGISTRY``.
quantity
    The ``Quantity`` value type and the ``Units`` / ``Terms`` namespaces.
errors
    ``UnitsError`` and its subclasses.
"""

from coralchem.units.errors import (
    UnitsError,
    InvalidValueError,
    DimensionMismatchError,
    InvalidPowerError,
    RegistryConfigurationError,
    UnknownUnitError,
)
from coralchem.units.registry import (
    BaseUnit,
    Dimensions,
    DIMENSIONLESS,
    Unit,
    UnitDef,
    UnitRegistry,
    base_unit,
    build_registry,
    derived_unit,
    merge,
    reduce_factors,
    vectors_match,
)
from coralchem.units.catalog import REGISTRY, SEAWATER_DENSITY_KG_PER_L, UNIT_DEFINITIONS
from coralchem.units.quantity import (
    ACIDITY,
    Q,
    Quantity,
    Terms,
    Units,
    parse_quantity,
    ph_from_concentration,
    term_namespace,
    unit_namespace,
)

__all__ = [
    # errors
    'UnitsError', 'InvalidValueError', 'DimensionMismatchError', 'InvalidPowerError',
    'RegistryConfigurationError', 'UnknownUnitError',
    # registry
    'BaseUnit', 'Dimensions', 'DIMENSIONLESS', 'Unit', 'UnitDef', 'UnitRegistry',
    'base_unit', 'build_registry', 'derived_unit', 'merge', 'reduce_factors', 'vectors_match',
    # catalog
    'REGISTRY', 'SEAWATER_DENSITY_KG_PER_L', 'UNIT_DEFINITIONS',
    # quantity
    'ACIDITY', 'Q', 'Quantity', 'Terms', 'Units', 'parse_quantity', 'ph_from_concentration',
    'term_namespace', 'unit_namespace',
]
