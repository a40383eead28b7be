#!/usr/bin/env python3
"""
coralchem Wiki Figures
======================

Regenerates every figure quoted on the coral wiki from a scenario config, and
optionally checks them against a file of expected values.

Scenarios:
    present - conditions near Opunohu Bay, Moorea, 2006-2010
    future  - the same grid point, 2096-2100 (GFDL-ESM2M, rcp85)

Figures:
    saturation_present, saturation_future      aragonite Omega
    electrolysis_potential                     V, future conditions
    hydroxide_requirement                      mol/l, future -> target pH
    hydroxide_fraction.<species>               share of the requirement
    electrolysis_limit                         l/s per cell power
    neutralize_requirement                     mol m^-2 h^-1 at cell wind speed
    chlorine_design{1,2,3}                     g
    bleach_design{1,2,3}                       ml of household bleach
    dilution_volume_design3                    m^3 to reach PNEC
    ion_movement_loss                          fraction of current
    ion_movement_dilution_volume               m^3 to reach PNEC

Output (with --output DIR):
    DIR/bjerrum.parquet - carbonate fractions against pH
    DIR/figures.json    - every scalar figure

Expected-value file (YAML):
    electrolysis_potential: -1.829128647204989
    bjerrum:
      co2: [0.9845..., ...]

Exit codes:
    0 - all figures computed (and matched, with --expected)
    1 - configuration error
    2 - figure mismatch

Usage:
    python -m coralchem.entry_points.wiki
    python -m coralchem.entry_points.wiki --config scenario.yaml --output out/
    python -m coralchem.entry_points.wiki --expected wiki.yaml --rel-tol 1e-9
"""

import argparse
import copy
import json
import logging
import math
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import polars as pl
import yaml

from coralchem.chemistry.carbonate import generate_bjerrum_data
from coralchem.chemistry.chlorine import design1, design2, design3
from coralchem.chemistry.electrolysis import electrolysis_limit, electrolysis_potential, hydroxide_contributors
from coralchem.chemistry.exchange import neutralize_requirement
from coralchem.chemistry.migration import electrolysis_ion_movement
from coralchem.chemistry.saturation import aragonite_saturation
from coralchem.config.validator import ConfigurationError, require_quantity, validate_or_die
from coralchem.units import Quantity, Terms

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================

DEFAULT_CONFIG = {
    # GFDL-ESM2M, grid point (66,130), five-year means
    'present': {
        'temperature': '27.6 degC',
        'salinity': '35.4 psu',
        'dic': '0.002037928 mol/l',
        'ph': '8.08 pH',
    },
    'future': {
        'temperature': '29.5 degC',
        'salinity': '35.4 psu',
        'dic': '0.002229376 mol/l',
        'ph': '7.76 pH',
    },
    'target_ph': '8.2 pH',
    'bjerrum': {
        'temperature': '28 degC',
        'salinity': '35 psu',
        'start_ph': 4,
        'end_ph': 10,
        'num_points': 20,
    },
    'cell': {
        'power': '100 W',
        'amps': '40 A',
        'chlorine_rate': '0.0122 g/s',
        'primary_volume': '1000 l',
        'secondary_volume': '333 l',
        'outflow': '0.0148 l/s',
        'interface_size': '100 cm^2',
        'interface_current': '1 cm/s',
        'wind_speed': '6 m/s',
    },
    'chlorine': {
        'half_life': '1 h',
        'pnec': '4.2e-8 g/l',
    },
}

# Household bleach: 5.25% NaOCl, 48% of which is available chlorine.
BLEACH_CHLORINE_FRACTION = 0.48 * 0.0525


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load scenario config, section by section over DEFAULT_CONFIG.

    A section given in the file overrides only the keys it names.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is not None:
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            user_config = yaml.safe_load(f) or {}

        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Config file must hold a mapping: {config_path}")

        for key, value in user_config.items():
            if isinstance(value, dict) and isinstance(config.get(key), dict):
                config[key].update(value)
            else:
                config[key] = value

    return config


@dataclass(frozen=True)
class Scenario:
    """Water conditions for one period."""
    temperature: Quantity
    salinity: Quantity
    dic: Quantity
    ph: Quantity


def load_scenario(config: Dict[str, Any], section: str) -> Scenario:
    values = config[section]
    return Scenario(
        temperature=require_quantity(values, 'temperature', 'kelvin', section),
        salinity=require_quantity(values, 'salinity', 'salinity', section),
        dic=require_quantity(values, 'dic', 'molarity', section),
        ph=require_quantity(values, 'ph', 'ph', section),
    )


# =============================================================================
# FIGURES
# =============================================================================

def compute_bjerrum(config: Dict[str, Any]) -> pl.DataFrame:
    values = config['bjerrum']
    return generate_bjerrum_data(
        require_quantity(values, 'temperature', 'kelvin', 'bjerrum'),
        require_quantity(values, 'salinity', 'salinity', 'bjerrum'),
        float(values['start_ph']),
        float(values['end_ph']),
        int(values['num_points']),
    )


def compute_figures(config: Dict[str, Any]) -> Dict[str, float]:
    """
    Compute every scalar figure.

    Raises:
        ConfigurationError: If a config value is malformed
    """
    present = load_scenario(config, 'present')
    future = load_scenario(config, 'future')
    target_ph = require_quantity(config, 'target_ph', 'ph', '<top level>')

    cell = config['cell']
    power = require_quantity(cell, 'power', 'watts', 'cell')
    amps = require_quantity(cell, 'amps', 'amperes', 'cell')
    chlorine_rate = require_quantity(cell, 'chlorine_rate', 'grams_per_second', 'cell')
    primary_volume = require_quantity(cell, 'primary_volume', 'liters', 'cell')
    secondary_volume = require_quantity(cell, 'secondary_volume', 'liters', 'cell')
    outflow = require_quantity(cell, 'outflow', 'liters_per_second', 'cell')
    interface_size = require_quantity(cell, 'interface_size', 'square_centimeters', 'cell')
    interface_current = require_quantity(cell, 'interface_current', 'centimeters_per_second', 'cell')
    wind_speed = require_quantity(cell, 'wind_speed', 'meters_per_second', 'cell')

    half_life = require_quantity(config['chlorine'], 'half_life', 'seconds', 'chlorine')
    pnec = require_quantity(config['chlorine'], 'pnec', 'grams_per_liter', 'chlorine')

    figures = {}

    # -------------------------------------------------------------------------
    # Climate
    # -------------------------------------------------------------------------
    figures['saturation_present'] = aragonite_saturation(present.temperature, present.salinity,
                                                         present.dic, present.ph)
    figures['saturation_future'] = aragonite_saturation(future.temperature, future.salinity,
                                                        future.dic, future.ph)

    # -------------------------------------------------------------------------
    # Electrolysis
    # -------------------------------------------------------------------------
    figures['electrolysis_potential'] = electrolysis_potential(
        future.temperature, future.salinity, future.ph
    ).normalize('volts')

    contributors = hydroxide_contributors(future.temperature, future.salinity, future.dic,
                                          future.ph, target_ph)
    requirement = Terms.molarity(0)
    for amount in contributors.values():
        requirement = requirement.add(amount)
    figures['hydroxide_requirement'] = requirement.normalize('molarity')
    for name, amount in contributors.items():
        figures[f'hydroxide_fraction.{name}'] = amount.div(requirement).number()

    figures['electrolysis_limit'] = electrolysis_limit(
        power, future.temperature, future.salinity, future.dic, future.ph, target_ph
    ).normalize('liters_per_second')

    figures['neutralize_requirement'] = neutralize_requirement(
        future.temperature, future.salinity, future.dic, future.ph, target_ph, wind_speed
    ).normalize('moles_per_square_meter_hour')

    # -------------------------------------------------------------------------
    # Chlorine
    # -------------------------------------------------------------------------
    chlorine = [
        design1(chlorine_rate, half_life),
        design2(chlorine_rate, half_life, primary_volume, outflow),
        design3(chlorine_rate, half_life, primary_volume, outflow, secondary_volume),
    ]
    for i, amount in enumerate(chlorine, start=1):
        grams = amount.normalize('grams')
        figures[f'chlorine_design{i}'] = grams
        figures[f'bleach_design{i}'] = grams / BLEACH_CHLORINE_FRACTION
    figures['dilution_volume_design3'] = chlorine[2].div(pnec).normalize('cubic_meters')

    # -------------------------------------------------------------------------
    # Ion movement
    # -------------------------------------------------------------------------
    movement = electrolysis_ion_movement(
        temperature=future.temperature, salinity=future.salinity, dic=future.dic,
        amps=amps, half_life=half_life, volume=primary_volume, outflow=outflow,
        interface_size=interface_size, current=interface_current,
        start_ph=future.ph, end_ph=target_ph,
    )
    figures['ion_movement_loss'] = movement.migration_loss + movement.diffusion_loss
    figures['ion_movement_dilution_volume'] = movement.chlorine_release.div(pnec).normalize('cubic_meters')

    return figures


# =============================================================================
# CHECKS
# =============================================================================

def _close(actual: float, expected: float, rel_tol: float) -> bool:
    return math.isclose(actual, expected, rel_tol=rel_tol, abs_tol=0.0)


def check_expected(figures: Dict[str, float], bjerrum: pl.DataFrame,
                   expected: Dict[str, Any], rel_tol: float) -> List[str]:
    """
    Compare figures against expected values.

    Returns:
        One message per mismatch (empty when everything matches)
    """
    mismatches = []

    for name, want in expected.items():
        if name == 'bjerrum':
            for column, values in want.items():
                if column not in bjerrum.columns:
                    mismatches.append(f"bjerrum.{column}: no such column")
                    continue
                got = bjerrum[column].to_list()
                if len(got) != len(values):
                    mismatches.append(f"bjerrum.{column}: expected {len(values)} rows, got {len(got)}")
                    continue
                for i, (g, w) in enumerate(zip(got, values)):
                    if not _close(g, float(w), rel_tol):
                        mismatches.append(f"bjerrum.{column}[{i}]: expected {w}, got {g}")
            continue

        if name not in figures:
            mismatches.append(f"{name}: no such figure")
        elif not _close(figures[name], float(want), rel_tol):
            mismatches.append(f"{name}: expected {want}, got {figures[name]}")

    return mismatches


def load_expected(path: Path) -> Dict[str, Any]:
    with open(path) as f:
        expected = yaml.safe_load(f) or {}
    if not isinstance(expected, dict):
        raise ConfigurationError(f"Expected-value file must hold a mapping: {path}")
    return expected


def write_outputs(output_dir: Path, figures: Dict[str, float], bjerrum: pl.DataFrame) -> Tuple[Path, Path]:
    output_dir.mkdir(parents=True, exist_ok=True)

    bjerrum_path = output_dir / 'bjerrum.parquet'
    bjerrum.write_parquet(bjerrum_path)

    figures_path = output_dir / 'figures.json'
    with open(figures_path, 'w') as f:
        json.dump(figures, f, indent=2)

    return bjerrum_path, figures_path


# =============================================================================
# MAIN
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="coralchem Wiki - regenerate and check published figures"
    )
    parser.add_argument('--config', '-c', type=Path,
                        help='Scenario YAML (overrides built-in defaults)')
    parser.add_argument('--expected', '-e', type=Path,
                        help='YAML of expected figure values to check against')
    parser.add_argument('--rel-tol', type=float, default=1e-9,
                        help='Relative tolerance for --expected (default: 1e-9)')
    parser.add_argument('--output', '-o', type=Path,
                        help='Directory for bjerrum.parquet and figures.json')

    args = parser.parse_args(argv)

    logger.info("=" * 60)
    logger.info("CORALCHEM WIKI FIGURES")
    logger.info("=" * 60)

    start = time.time()

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return 1
    validate_or_die(config, args.config)

    try:
        bjerrum = compute_bjerrum(config)
        figures = compute_figures(config)
        expected = load_expected(args.expected) if args.expected else None
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return 1

    logger.info(f"Bjerrum table: {len(bjerrum)} rows")
    for name, value in figures.items():
        logger.info(f"  {name:<40} {value:.6g}")

    if args.output:
        bjerrum_path, figures_path = write_outputs(args.output, figures, bjerrum)
        logger.info(f"Wrote {bjerrum_path}")
        logger.info(f"Wrote {figures_path}")

    if expected is not None:
        mismatches = check_expected(figures, bjerrum, expected, args.rel_tol)
        if mismatches:
            for message in mismatches:
                logger.error(f"Mismatch! {message}")
            logger.error(f"{len(mismatches)} figure(s) out of sync with {args.expected}")
            return 2
        logger.info(f"All {len(expected)} expected entries match {args.expected}")

    logger.info(f"Complete: {time.time() - start:.2f}s")
    return 0


if __name__ == '__main__':
    sys.exit(main())
