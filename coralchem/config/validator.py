"""
coralchem Configuration Validator

Scenario files must set every parameter a figure depends on. Values are
quantity strings ("29.5 degC", "0.0148 l/s") parsed with ``coralchem.units.Q``.

Usage:
    from coralchem.config.validator import ConfigurationError, validate_section

    # In load_config():
    validate_section(config, 'future', config_path)
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from coralchem.units import Q, Quantity, UnitsError


class ConfigurationError(Exception):
    """
    Raised when scenario configuration is missing or malformed.

    The message says exactly which keys to add or fix.
    """
    pass


# Required fields per kind of section
REQUIRED_FIELDS = {
    'scenario': [
        'temperature',
        'salinity',
        'dic',
        'ph',
    ],
    'bjerrum': [
        'temperature',
        'salinity',
        'start_ph',
        'end_ph',
        'num_points',
    ],
    'cell': [
        'power',
        'amps',
        'chlorine_rate',
        'primary_volume',
        'secondary_volume',
        'outflow',
        'interface_size',
        'interface_current',
        'wind_speed',
    ],
    'chlorine': [
        'half_life',
        'pnec',
    ],
}

# Top-level section -> kind
SECTIONS = {
    'present': 'scenario',
    'future': 'scenario',
    'bjerrum': 'bjerrum',
    'cell': 'cell',
    'chlorine': 'chlorine',
}


def _frame(title: str, body: str) -> str:
    return (
        f"\n{'='*60}\n"
        f"CONFIGURATION ERROR: {title}\n"
        f"{'='*60}\n"
        f"{body}"
        f"{'='*60}"
    )


def validate_required(
    config: Dict[str, Any],
    required_keys: List[str],
    section: str,
    config_path: Optional[Path] = None,
) -> None:
    """
    Validate that all required configuration keys are present.

    Args:
        config: Configuration dictionary
        required_keys: List of keys that must be present and not None
        section: Section name (for error message)
        config_path: Path to config file (for error message)

    Raises:
        ConfigurationError: If any required key is missing or None
    """
    missing = [key for key in required_keys if key not in config or config[key] is None]

    if missing:
        location = f"File: {config_path}\n" if config_path else ""
        raise ConfigurationError(_frame(
            "Missing required parameters",
            f"{location}"
            f"Section: {section}\n\n"
            f"Missing fields:\n"
            f"{''.join(f'  - {k}' + chr(10) for k in missing)}\n"
            f"Add to your config.yaml:\n\n"
            f"{section}:\n"
            f"{''.join(f'  {k}: <value>' + chr(10) for k in missing)}\n"
        ))


def validate_section(config: Dict[str, Any], section: str, config_path: Optional[Path] = None) -> None:
    """
    Validate one top-level section of a scenario config.

    Args:
        config: Full configuration dictionary
        section: One of 'present', 'future', 'bjerrum', 'cell', 'chlorine'
        config_path: Path to config file (for error message)

    Raises:
        ConfigurationError: If the section is unknown, not a mapping, or incomplete
    """
    if section not in SECTIONS:
        raise ConfigurationError(f"Unknown config section: {section}")

    values = config.get(section)
    if not isinstance(values, dict):
        raise ConfigurationError(_frame(
            f"{section} must be a mapping",
            f"Got: {values!r}\n\n",
        ))

    validate_required(values, REQUIRED_FIELDS[SECTIONS[section]], section, config_path)


def validate_config(config: Dict[str, Any], config_path: Optional[Path] = None) -> None:
    """Validate every section, plus the top-level target pH."""
    validate_required(config, ['target_ph'], '<top level>', config_path)
    for section in SECTIONS:
        validate_section(config, section, config_path)


def validate_or_die(config: Dict[str, Any], config_path: Optional[Path] = None) -> None:
    """
    Validate configuration. Exit with error code 1 if invalid.

    Use this at entry points for clear error messages and clean exit.
    """
    try:
        validate_config(config, config_path)
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


def require_quantity(values: Dict[str, Any], key: str, unit: str, section: str = "") -> Quantity:
    """
    Get a configuration value as a Quantity compatible with ``unit``.

    Bare numbers are read in ``unit``; strings must carry their own unit.

    Raises:
        ConfigurationError: If the key is missing, unparsable, or the wrong dimension
    """
    validate_required(values, [key], section)
    raw = values[key]

    try:
        quantity = Q(raw, unit) if isinstance(raw, (int, float)) else Q(str(raw))
    except (UnitsError, ValueError) as e:
        raise ConfigurationError(_frame(
            f"{section}.{key} is not a quantity",
            f"Got: {raw!r}\n{e}\n\n"
            f"Expected a number or a string like '<value> <unit>'.\n",
        )) from e

    if not quantity.is_compatible(unit):
        raise ConfigurationError(_frame(
            f"{section}.{key} has the wrong dimension",
            f"Got: {raw!r} [{quantity.dimensions}]\n"
            f"Expected something convertible to {unit}.\n\n",
        ))

    return quantity
