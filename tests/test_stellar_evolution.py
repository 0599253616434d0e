import math

import pytest

from stellar_evolution import (
    StellarStage,
    absolute_magnitude,
    classify_stage,
    effective_temperature,
    luminosity,
    main_sequence_lifetime,
    radius,
    spectral_type,
)


def test_main_sequence_lifetime():
    assert main_sequence_lifetime(1.0, 0.0) == pytest.approx(10.0)
    # 低金属丰度寿命更长
    assert main_sequence_lifetime(1.0, -5.0) == pytest.approx(20.0)
    # 因子下限 0.3
    assert main_sequence_lifetime(1.0, 4.0) == pytest.approx(3.0)
    assert main_sequence_lifetime(4.0, 0.0) == pytest.approx(10.0 / 32.0)


@pytest.mark.parametrize(
    "mass, expected",
    [
        (0.3, 0.23 * 0.3 ** 2.3),
        (1.0, 1.0),
        (1.5, 1.5 ** 4),
        (10.0, 1.4 * 10.0 ** 3.5),
        (30.0, 960000.0),
    ],
)
def test_main_sequence_luminosity(mass, expected):
    assert luminosity(mass, StellarStage.MAIN_SEQUENCE) == pytest.approx(expected)


def test_post_main_sequence_luminosity():
    assert luminosity(2.0, StellarStage.SUB_GIANT) == pytest.approx(200.0)
    assert luminosity(2.0, StellarStage.RED_GIANT) == pytest.approx(200.0)
    assert luminosity(1.0, StellarStage.WHITE_DWARF) == pytest.approx(0.01)
    assert luminosity(20.0, StellarStage.NEUTRON_STAR) == pytest.approx(0.0001)


@pytest.mark.parametrize(
    "mass, expected",
    [(0.2, 3400.0), (1.0, 6100.0), (2.0, 7400.0), (5.0, 8800.0)],
)
def test_main_sequence_temperature(mass, expected):
    assert effective_temperature(mass, StellarStage.MAIN_SEQUENCE) == pytest.approx(expected)


def test_stage_temperatures():
    assert effective_temperature(1.0, StellarStage.SUB_GIANT) == 5200.0
    assert effective_temperature(1.0, StellarStage.RED_GIANT) == 4200.0
    assert effective_temperature(1.0, StellarStage.WHITE_DWARF) == 8000.0
    assert effective_temperature(12.0, StellarStage.NEUTRON_STAR) == 1_000_000.0


def test_radius_stefan_boltzmann():
    assert radius(1.0, 5778.0) == pytest.approx(1.0)
    assert radius(4.0, 5778.0 / 2.0) == pytest.approx(8.0)


def test_absolute_magnitude():
    assert absolute_magnitude(1.0) == pytest.approx(4.83)
    assert absolute_magnitude(100.0) == pytest.approx(-0.17)


@pytest.mark.parametrize(
    "teff, letter",
    [
        (3000.0, "M"),
        (3499.0, "M"),
        (3500.0, "K"),
        (4999.0, "K"),
        (5000.0, "G"),
        (5999.0, "G"),
        (6000.0, "F"),
        (7499.0, "F"),
        (7500.0, "A"),
        (9999.0, "A"),
        (10000.0, "B"),
        (29999.0, "B"),
        (30000.0, "O"),
        (1_000_000.0, "O"),
    ],
)
def test_spectral_type_buckets(teff, letter):
    assert spectral_type(teff) == letter


@pytest.mark.parametrize(
    "mass, age, stage",
    [
        (1.0, 5.0, StellarStage.MAIN_SEQUENCE),
        (1.0, 11.0, StellarStage.SUB_GIANT),
        (1.0, 13.0, StellarStage.RED_GIANT),
        (1.0, 50.0, StellarStage.WHITE_DWARF),
        (10.0, 1.0, StellarStage.NEUTRON_STAR),
        (10.0, 0.01, StellarStage.MAIN_SEQUENCE),
    ],
)
def test_classify_stage(mass, age, stage):
    assert classify_stage(mass, age, 0.0) == stage


def test_classify_stage_boundary_is_exclusive():
    t_ms = main_sequence_lifetime(2.0, 0.1)
    assert classify_stage(2.0, math.nextafter(t_ms, 0.0), 0.1) == StellarStage.MAIN_SEQUENCE
    assert classify_stage(2.0, t_ms, 0.1) == StellarStage.SUB_GIANT
