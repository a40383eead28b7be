"""
Test Wiki Entry Point and Config
================================
"""

import json

import pytest
import yaml


# =============================================================================
# CONFIG
# =============================================================================

def test_default_config_is_valid():
    """Built-in defaults pass validation."""
    from coralchem.config.validator import validate_config
    from coralchem.entry_points.wiki import DEFAULT_CONFIG

    validate_config(DEFAULT_CONFIG)


def test_missing_field_message():
    """Missing keys are listed in the error."""
    from coralchem.config.validator import ConfigurationError, validate_section

    config = {'future': {'temperature': '29.5 degC', 'salinity': None}}

    with pytest.raises(ConfigurationError) as exc:
        validate_section(config, 'future')

    message = str(exc.value)
    assert 'CONFIGURATION ERROR' in message
    assert '  - salinity' in message
    assert '  - dic' in message
    assert '  - temperature' not in message


def test_unknown_and_malformed_sections():
    """Sections must be known mappings."""
    from coralchem.config.validator import ConfigurationError, validate_section

    with pytest.raises(ConfigurationError):
        validate_section({}, 'past')

    with pytest.raises(ConfigurationError):
        validate_section({'cell': 'big'}, 'cell')


def test_validate_or_die_exits():
    """Invalid config exits with code 1."""
    from coralchem.config.validator import validate_or_die

    with pytest.raises(SystemExit) as exc:
        validate_or_die({'target_ph': '8.2 pH'})

    assert exc.value.code == 1


def test_require_quantity():
    """Strings carry units; bare numbers take the default unit."""
    from coralchem.config.validator import ConfigurationError, require_quantity

    values = {'t': '25 degC', 'n': 300, 'bad': '12 furlongs', 'wrong': '3 m'}

    assert require_quantity(values, 't', 'kelvin').normalize('kelvin') == pytest.approx(298.15)
    assert require_quantity(values, 'n', 'kelvin').normalize('kelvin') == pytest.approx(300)

    with pytest.raises(ConfigurationError):
        require_quantity(values, 'bad', 'kelvin')

    with pytest.raises(ConfigurationError):
        require_quantity(values, 'wrong', 'kelvin')

    with pytest.raises(ConfigurationError):
        require_quantity(values, 'absent', 'kelvin')


def test_load_config_merges_sections(tmp_path):
    """A config file overrides only the keys it names."""
    from coralchem.entry_points.wiki import DEFAULT_CONFIG, load_config

    path = tmp_path / 'config.yaml'
    path.write_text(yaml.safe_dump({'future': {'ph': '7.9 pH'}, 'target_ph': '8.1 pH'}))

    config = load_config(path)

    assert config['future']['ph'] == '7.9 pH'
    assert config['future']['temperature'] == DEFAULT_CONFIG['future']['temperature']
    assert config['target_ph'] == '8.1 pH'
    assert DEFAULT_CONFIG['future']['ph'] == '7.76 pH'


def test_load_config_missing_file(tmp_path):
    """A named config file must exist."""
    from coralchem.config.validator import ConfigurationError
    from coralchem.entry_points.wiki import load_config

    with pytest.raises(ConfigurationError):
        load_config(tmp_path / 'nope.yaml')


# =============================================================================
# FIGURES
# =============================================================================

def test_compute_figures():
    """Every figure is computed from the defaults."""
    from coralchem.entry_points.wiki import DEFAULT_CONFIG, compute_figures

    figures = compute_figures(DEFAULT_CONFIG)

    assert figures['electrolysis_potential'] == pytest.approx(-1.829128647204989, rel=1e-9)
    assert figures['saturation_future'] < figures['saturation_present']
    assert figures['chlorine_design3'] < figures['chlorine_design2'] < figures['chlorine_design1']
    assert figures['bleach_design1'] == pytest.approx(figures['chlorine_design1'] / 0.48 / 0.0525)

    fractions = [v for k, v in figures.items() if k.startswith('hydroxide_fraction.')]
    assert len(fractions) == 6
    assert sum(fractions) == pytest.approx(1.0)


def test_check_expected():
    """Mismatches are reported by name."""
    import polars as pl

    from coralchem.entry_points.wiki import check_expected

    figures = {'a': 1.0, 'b': 2.0}
    bjerrum = pl.DataFrame({'ph': [4.0, 5.0], 'co2': [0.9, 0.8]})

    assert check_expected(figures, bjerrum, {'a': 1.0, 'bjerrum': {'co2': [0.9, 0.8]}}, 1e-9) == []

    mismatches = check_expected(
        figures, bjerrum,
        {'a': 1.1, 'c': 3.0, 'bjerrum': {'co2': [0.9, 0.7], 'co3': [0.1, 0.2], 'ph': [4.0]}},
        1e-9,
    )

    assert any(m.startswith('a:') for m in mismatches)
    assert any(m.startswith('c: no such figure') for m in mismatches)
    assert any(m.startswith('bjerrum.co2[1]') for m in mismatches)
    assert any(m.startswith('bjerrum.co3: no such column') for m in mismatches)
    assert any(m.startswith('bjerrum.ph: expected 1 rows') for m in mismatches)
    assert len(mismatches) == 5


def test_main_writes_outputs(tmp_path):
    """--output writes the Bjerrum parquet and figures JSON."""
    import polars as pl

    from coralchem.entry_points.wiki import main

    assert main(['--output', str(tmp_path)]) == 0

    bjerrum = pl.read_parquet(tmp_path / 'bjerrum.parquet')
    assert len(bjerrum) == 21

    with open(tmp_path / 'figures.json') as f:
        figures = json.load(f)
    assert 'electrolysis_limit' in figures


def test_main_expected_match_and_mismatch(tmp_path):
    """Matching expectations exit 0; mismatches exit 2."""
    from coralchem.entry_points.wiki import main

    good = tmp_path / 'good.yaml'
    good.write_text(yaml.safe_dump({'electrolysis_potential': -1.829128647204989}))
    bad = tmp_path / 'bad.yaml'
    bad.write_text(yaml.safe_dump({'electrolysis_potential': -2.0}))

    assert main(['--expected', str(good), '--rel-tol', '1e-6']) == 0
    assert main(['--expected', str(bad)]) == 2


def test_main_config_error(tmp_path, capsys):
    """Malformed config values exit 1 with a framed message."""
    from coralchem.entry_points.wiki import main

    config = tmp_path / 'config.yaml'
    config.write_text(yaml.safe_dump({'cell': {'power': '100 furlongs'}}))

    assert main(['--config', str(config)]) == 1
    assert 'CONFIGURATION ERROR' in capsys.readouterr().err


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
