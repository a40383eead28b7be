"""
Test Chemistry
==============

Future conditions are the 2096-2100 means near Opunohu Bay, Moorea.
"""

import math

import pytest


def _future():
    from coralchem.units import Terms

    return dict(
        temperature=Terms.celsius(29.5),
        salinity=Terms.salinity(35.4),
        dic=Terms.molarity(0.002229376),
        ph=Terms.ph(7.76),
    )


def _present():
    from coralchem.units import Terms

    return dict(
        temperature=Terms.celsius(27.6),
        salinity=Terms.salinity(35.4),
        dic=Terms.molarity(0.002037928),
        ph=Terms.ph(8.08),
    )


# =============================================================================
# CONSTANTS
# =============================================================================

def test_seawater_concentration_scales_with_salinity():
    """Ion concentrations scale linearly from S=35."""
    from coralchem.constants import seawater_concentration
    from coralchem.units import Terms

    assert seawater_concentration("Cl-", Terms.salinity(35)).normalize('moles_per_seawater_kg') == pytest.approx(0.567)
    assert seawater_concentration("Cl-", Terms.salinity(70)).normalize('moles_per_seawater_kg') == pytest.approx(1.134)

    with pytest.raises(KeyError):
        seawater_concentration("Xe", Terms.salinity(35))


def test_species_table():
    """Charged species carry conductivity and charge."""
    from coralchem.constants import SPECIES

    assert SPECIES["SO4^{2-}"].charge.number() == -2
    assert SPECIES["H+"].conductivity.normalize('siemens_square_centimeters_per_mole') == pytest.approx(349.6)
    assert SPECIES["CO2"].charge is None


# =============================================================================
# CARBONATE
# =============================================================================

def test_ionization_constants():
    """pK1 ~ 5.84, pK2 ~ 8.96 at 25C, S=35."""
    from coralchem.chemistry.carbonate import association_k1, association_k2
    from coralchem.units import Terms

    T, S = Terms.celsius(25), Terms.salinity(35)
    pK1 = -math.log10(association_k1(T, S).normalize('moles_per_seawater_kg'))
    pK2 = -math.log10(association_k2(T, S).normalize('moles_per_seawater_kg'))

    assert 5.8 < pK1 < 5.9
    assert 8.9 < pK2 < 9.0


def test_carbonate_species_sum_to_dic():
    """CO2 + HCO3- + CO3^{2-} == DIC."""
    from coralchem.chemistry.carbonate import carbonate_concentrations

    f = _future()
    species = carbonate_concentrations(f['temperature'], f['salinity'], f['dic'], f['ph'])

    assert species.total.normalize('molarity') == pytest.approx(0.002229376, rel=1e-12)
    assert species.hco3 > species.co3 > species.co2


def test_carbonate_keeps_dic_units():
    """Species come back in the dimension of DIC."""
    from coralchem.chemistry.carbonate import carbonate_concentrations
    from coralchem.units import Terms

    f = _future()
    species = carbonate_concentrations(f['temperature'], f['salinity'],
                                       Terms.moles_per_seawater_kg(1), f['ph'])

    assert species.co2.is_compatible('moles_per_seawater_kg')


def test_bjerrum_table():
    """Bjerrum fractions at 28C, S=35 match the published plot data."""
    from coralchem.chemistry.carbonate import generate_bjerrum_data
    from coralchem.units import Terms

    df = generate_bjerrum_data(Terms.celsius(28), Terms.salinity(35), 4, 10, 20)

    assert df.columns == ['ph', 'co2', 'hco3', 'co3']
    assert len(df) == 21

    assert df['ph'][0] == 4
    assert df['ph'][11] == 7.300000000000001
    assert df['ph'][20] == 10

    assert df['co2'][0] == pytest.approx(0.984521075526212, rel=1e-9)
    assert df['hco3'][0] == pytest.approx(0.015478732301200735, rel=1e-9)
    assert df['co3'][0] == pytest.approx(1.9217258716646177e-7, rel=1e-9)
    assert df['hco3'][11] == pytest.approx(0.9463875181866063, rel=1e-9)
    assert df['co3'][20] == pytest.approx(0.9254536717150231, rel=1e-9)

    totals = (df['co2'] + df['hco3'] + df['co3']).to_list()
    assert totals == pytest.approx([1.0] * 21)


def test_bjerrum_rejects_empty_range():
    """num_points must be positive."""
    from coralchem.chemistry.carbonate import generate_bjerrum_data
    from coralchem.units import Terms

    with pytest.raises(ValueError):
        generate_bjerrum_data(Terms.celsius(28), Terms.salinity(35), 4, 10, 0)


def test_density_h2o():
    """A liter of S=35 seawater holds ~0.989 kg of water."""
    from coralchem.chemistry.carbonate import density_h2o, molarity_to_molality
    from coralchem.units import Terms

    T, S = Terms.celsius(25), Terms.salinity(35)

    assert density_h2o(T, S).normalize('kilograms_per_liter') == pytest.approx(1.025 * (1 - 0.035))
    assert molarity_to_molality(T, S, Terms.molarity(1)).normalize('moles_per_kilogram') == \
        pytest.approx(1 / 0.989125)


# =============================================================================
# SATURATION
# =============================================================================

def test_ksp_aragonite():
    """pKsp of aragonite ~ 6.19 at 25C, S=35."""
    from coralchem.chemistry.saturation import association_ksp_aragonite
    from coralchem.units import Terms

    ksp = association_ksp_aragonite(Terms.celsius(25), Terms.salinity(35))
    pksp = -math.log10(ksp.normalize('moles_squared_per_seawater_kg_squared'))

    assert 6.1 < pksp < 6.3


def test_calcium_concentration():
    """Ca scales with salinity."""
    from coralchem.chemistry.saturation import calcium_concentration
    from coralchem.units import Terms

    ca = calcium_concentration(Terms.salinity(35))

    assert ca.normalize('moles_per_seawater_kg') == pytest.approx(0.010269)


def test_aragonite_saturation_falls():
    """Omega drops from ~4 today to ~2.4 by 2100."""
    from coralchem.chemistry.saturation import aragonite_saturation

    present = aragonite_saturation(**_present())
    future = aragonite_saturation(**_future())

    assert 3.5 < present < 4.5
    assert 2.0 < future < 3.0
    assert future < present


# =============================================================================
# ELECTROLYSIS
# =============================================================================

def test_electrolysis_potential():
    """Nernst potential for future conditions."""
    from coralchem.chemistry.electrolysis import electrolysis_potential

    f = _future()
    potential = electrolysis_potential(f['temperature'], f['salinity'], f['ph'])

    assert potential.normalize('volts') == pytest.approx(-1.829128647204989, rel=1e-9)


def test_hydroxide_contributors():
    """HCO3- dominates the buffering; fractions sum to 1."""
    from coralchem.chemistry.electrolysis import hydroxide_contributors, hydroxide_requirement
    from coralchem.units import Terms

    f = _future()
    target = Terms.ph(8.2)
    contributors = hydroxide_contributors(f['temperature'], f['salinity'], f['dic'], f['ph'], target)
    requirement = hydroxide_requirement(f['temperature'], f['salinity'], f['dic'], f['ph'], target)

    assert set(contributors) == {"H+", "OH-", "CO2", "HCO3-", "B(OH)4-", "SO4^{2-}"}
    assert 2e-4 < requirement.normalize('molarity') < 3.5e-4

    fractions = {name: v.div(requirement).number() for name, v in contributors.items()}
    assert sum(fractions.values()) == pytest.approx(1.0)
    assert max(fractions, key=fractions.get) == "HCO3-"
    assert 0.7 < fractions["HCO3-"] < 0.9
    assert all(v > 0 for v in fractions.values())


def test_hydroxide_requires_rising_ph():
    """end pH must exceed start pH."""
    from coralchem.chemistry.electrolysis import hydroxide_contributors
    from coralchem.units import Terms

    f = _future()

    with pytest.raises(ValueError):
        hydroxide_contributors(f['temperature'], f['salinity'], f['dic'], Terms.ph(8.2), Terms.ph(7.76))


def test_electrolysis_requirement_scales_with_volume():
    """Charge is linear in volume."""
    from coralchem.chemistry.electrolysis import electrolysis_requirement
    from coralchem.units import Terms

    f = _future()
    args = (f['temperature'], f['salinity'], f['dic'])
    one = electrolysis_requirement(*args, Terms.liters(1), f['ph'], Terms.ph(8.2))
    ten = electrolysis_requirement(*args, Terms.liters(10), f['ph'], Terms.ph(8.2))

    assert one.is_compatible('amp_seconds')
    assert ten.normalize('amp_seconds') == pytest.approx(10 * one.normalize('amp_seconds'))


def test_electrolysis_limit():
    """A 100 W cell alkalizes ~2 l/s."""
    from coralchem.chemistry.electrolysis import electrolysis_limit
    from coralchem.units import Terms

    f = _future()
    limit = electrolysis_limit(Terms.watts(100), f['temperature'], f['salinity'], f['dic'],
                               f['ph'], Terms.ph(8.2))

    assert 1.5 < limit.normalize('liters_per_second') < 3.0


# =============================================================================
# CHLORINE
# =============================================================================

def test_steady_state_amount():
    """Rate times mean lifetime."""
    from coralchem.chemistry.chlorine import steady_state_amount
    from coralchem.units import Terms

    amount = steady_state_amount(Terms.grams_per_second(1), Terms.seconds(math.log(2)))

    assert amount.normalize('grams') == pytest.approx(1.0)


def test_chlorine_designs():
    """Each compartment cuts the chlorine released."""
    from coralchem.chemistry.chlorine import design1, design2, design3
    from coralchem.units import Terms

    rate = Terms.grams_per_second(0.01)
    half_life = Terms.hours(1)
    volume = Terms.liters(1000)
    outflow = Terms.liters_per_second(0.01)

    c1 = design1(rate, half_life).normalize('grams')
    c2 = design2(rate, half_life, volume, outflow).normalize('grams')
    c3 = design3(rate, half_life, volume, outflow, Terms.liters(36)).normalize('grams')

    assert c1 == pytest.approx(0.01 * 3600 / math.log(2))
    assert c2 / c1 == pytest.approx(0.01 * 3600 / math.log(2) / 1000)
    # 36 l at 0.01 l/s is one half-life
    assert c3 / c2 == pytest.approx(0.5)


# =============================================================================
# EXCHANGE
# =============================================================================

def test_transfer_velocity_regimes():
    """Liss-Merlivat regimes, corrected to Sc=360."""
    from coralchem.chemistry.exchange import transfer_velocity
    from coralchem.units import Terms

    def kw(u):
        return transfer_velocity(Terms.meters_per_second(u)).normalize('centimeters_per_hour')

    assert kw(2) == pytest.approx(0.34 * 0.6 ** (-2 / 3))
    assert kw(6) == pytest.approx((2.85 * 6 - 9.65) * 0.6 ** -0.5)
    assert kw(14) == pytest.approx((5.9 * 14 - 49.3) * 0.6 ** -0.5)


def test_neutralize_requirement():
    """~1.7 mmol m^-2 h^-1 at 6 m/s."""
    from coralchem.chemistry.exchange import neutralize_requirement
    from coralchem.units import Terms

    f = _future()
    requirement = neutralize_requirement(f['temperature'], f['salinity'], f['dic'],
                                         f['ph'], Terms.ph(8.2), Terms.meters_per_second(6))

    assert 1e-3 < requirement.normalize('moles_per_square_meter_hour') < 3e-3


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
