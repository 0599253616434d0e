import math

import numpy as np
import pytest

from imf import (
    KROUPA_SEGMENTS,
    M_MAX,
    M_MIN,
    invert_power_law,
    mean_imf_mass,
    sample_kroupa_mass,
    sample_kroupa_masses,
)
from seeded_random import SeededGenerator


def test_masses_within_bounds():
    masses = sample_kroupa_masses(SeededGenerator(2024), 20000)
    assert masses.min() >= M_MIN
    assert masses.max() <= M_MAX


def test_segment_fractions():
    masses = sample_kroupa_masses(SeededGenerator(8), 20000)
    assert abs(np.mean(masses < 0.5) - 0.5) < 0.02
    assert abs(np.mean(masses >= 1.0) - 0.1) < 0.01


def test_vectorised_matches_sequential():
    a = SeededGenerator(77)
    b = SeededGenerator(77)
    sequential = [sample_kroupa_mass(a) for _ in range(50)]
    assert sample_kroupa_masses(b, 50).tolist() == sequential


@pytest.mark.parametrize("m_lo, m_hi, alpha", [seg[1:] for seg in KROUPA_SEGMENTS])
def test_invert_power_law_endpoints(m_lo, m_hi, alpha):
    assert math.isclose(invert_power_law(0.0, m_lo, m_hi, alpha), m_lo)
    assert math.isclose(invert_power_law(1.0, m_lo, m_hi, alpha), m_hi)


def test_invert_power_law_alpha_one_has_no_nan():
    for u in (0.0, 0.25, 0.5, 1.0):
        m = invert_power_law(u, 0.1, 10.0, 1.0)
        assert not math.isnan(m)
        assert 0.1 - 1e-12 <= m <= 10.0 + 1e-12
    assert math.isclose(invert_power_law(0.5, 0.1, 10.0, 1.0), 1.0)


def test_first_mass_for_seed_42():
    assert sample_kroupa_mass(SeededGenerator(42)) == pytest.approx(0.70365075239805175, rel=1e-12)


def test_mean_imf_mass_leaves_rng_untouched():
    rng = SeededGenerator(7)
    mean = mean_imf_mass(rng, 1024)
    assert 0.4 < mean < 0.9
    assert rng.next_uint64() == SeededGenerator(7).next_uint64()
