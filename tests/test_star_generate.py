import threading

import pytest

from galactic_models import REGION_MODELS, GalacticComponent, SimulationConfig
from seeded_random import SeededGenerator
from star_generate import (
    StarFieldGenerator,
    estimate_star_count,
    generate,
    generate_in_background,
    sample_position,
)
from stellar_evolution import StellarStage, main_sequence_lifetime


def _config(**overrides):
    params = dict(component=GalacticComponent.THIN_DISK, seed=42)
    params.update(overrides)
    return SimulationConfig(**params)


def test_golden_thin_disk_seed_42():
    systems = generate(_config())
    assert len(systems) == 80

    first = systems[0]
    assert first.mass == pytest.approx(0.70365075239805175, rel=1e-9)
    assert first.age_gyr == pytest.approx(1.0454803061258575, rel=1e-9)
    assert first.metallicity == pytest.approx(-0.17837724272555136, rel=1e-9)
    assert first.stage is StellarStage.MAIN_SEQUENCE
    assert first.spectral_type == "G"
    assert first.temperature_k == pytest.approx(5566.5713543164929, rel=1e-9)
    assert first.absolute_magnitude_v == pytest.approx(6.3564284361551131, rel=1e-9)
    assert first.apparent_magnitude_v == pytest.approx(18.156428436155114, rel=1e-9)
    assert first.extinction_av == pytest.approx(1.8)
    assert first.position_pc.x == pytest.approx(0.90062508766639582, rel=1e-9)
    assert first.position_pc.y == pytest.approx(-0.98072339814956067, rel=1e-9)
    assert first.position_pc.z == pytest.approx(163.68613085485984, rel=1e-9)

    second = systems[1]
    assert second.mass == pytest.approx(0.1501242420037536, rel=1e-9)
    assert second.spectral_type == "M"
    assert second.apparent_magnitude_v == pytest.approx(22.961088151205171, rel=1e-9)


def test_golden_binary_count_seed_42():
    systems = generate(_config())
    assert sum(len(s.companions) for s in systems) == 31
    assert sum(s.mass for s in systems) == pytest.approx(41.143625569947602, rel=1e-9)


def test_determinism():
    for component in GalacticComponent:
        config = _config(component=component, seed=1234, volume=500.0)
        assert generate(config) == generate(config)


def test_different_seeds_differ():
    assert generate(_config(seed=1)) != generate(_config(seed=2))


def test_unseeded_run_reports_reproducible_seed():
    generator = StarFieldGenerator(_config(seed=None))
    assert isinstance(generator.seed, int)
    first = generator.run()
    assert generator.run() == first
    assert generate(_config(seed=generator.seed)) == first


def test_count_floor():
    assert len(generate(_config(volume=0.0))) == 1
    assert len(generate(_config(volume=-100.0))) == 1
    halo_far = _config(component=GalacticComponent.HALO, volume=1.0, galactocentric_radius=60.0, midplane_height=30.0)
    assert len(generate(halo_far)) == 1


def test_count_from_density_and_volume():
    region = REGION_MODELS[GalacticComponent.GLOBULAR_CLUSTER]
    config = _config(component=GalacticComponent.GLOBULAR_CLUSTER, volume=100.0)
    assert estimate_star_count(region, config, SeededGenerator(1)) == 150
    assert len(generate(config)) == 150


def test_target_mass_scenario():
    systems = generate(_config(seed=7, desired_stellar_mass=1000.0))
    assert len(systems) == 1641
    total = sum(s.mass for s in systems)
    assert total == pytest.approx(1000.0, rel=0.15)


def test_target_mass_estimate_does_not_shift_main_stream():
    plain = generate(_config(seed=7))
    with_target = generate(_config(seed=7, desired_stellar_mass=200.0))
    assert with_target[0] == plain[0]
    assert with_target[:10] == plain[:10]


def test_target_mass_floor_gives_one_star():
    assert len(generate(_config(desired_stellar_mass=1e-6))) == 1


def test_no_binaries():
    for seed in (1, 2, 3):
        systems = generate(_config(seed=seed, include_binaries=False, volume=3000.0))
        assert all(s.companions == () for s in systems)


def test_companion_validity():
    for component in GalacticComponent:
        for s in generate(_config(component=component, seed=5, volume=2000.0)):
            assert len(s.companions) <= 1
            for c in s.companions:
                assert 0.08 <= c.mass <= s.mass
                assert 0.0 <= c.eccentricity <= 0.95


def test_stage_consistency():
    systems = generate(_config(component=GalacticComponent.BULGE, seed=9, volume=2000.0))
    for s in systems:
        lifetime = main_sequence_lifetime(s.mass, s.metallicity)
        if s.age_gyr < lifetime:
            assert s.stage is StellarStage.MAIN_SEQUENCE
        elif s.mass > 8.0:
            assert s.stage is StellarStage.NEUTRON_STAR
        else:
            assert s.stage is not StellarStage.MAIN_SEQUENCE
        assert 0.08 <= s.mass <= 50.0
        assert s.luminosity_solar >= 0.0001


def test_old_populations_have_evolved_stars():
    systems = generate(_config(component=GalacticComponent.GLOBULAR_CLUSTER, seed=4, volume=1000.0))
    stages = {s.stage for s in systems}
    assert StellarStage.MAIN_SEQUENCE in stages
    assert stages - {StellarStage.MAIN_SEQUENCE}


def test_magnitude_increases_with_distance():
    near = generate(_config(seed=5, distance_from_observer=1.0))
    far = generate(_config(seed=5, distance_from_observer=2.0))
    assert len(near) == len(far)
    for a, b in zip(near, far):
        assert a.mass == b.mass
        assert b.apparent_magnitude_v > a.apparent_magnitude_v


def test_extinction_drops_off_the_plane():
    in_plane = generate(_config(seed=5, volume=100.0))[0]
    above = generate(_config(seed=5, volume=100.0, midplane_height=0.15))[0]
    assert above.extinction_av == pytest.approx(in_plane.extinction_av / 2.718281828459045)


def test_position_sampling_stays_in_cylinder():
    region = REGION_MODELS[GalacticComponent.THIN_DISK]
    rng = SeededGenerator(3)
    radial_extent = (1000.0 / 3.141592653589793) ** (1.0 / 3.0)
    zs = []
    for _ in range(2000):
        p = sample_position(region, 1000.0, rng)
        assert (p.x ** 2 + p.y ** 2) ** 0.5 <= radial_extent + 1e-9
        zs.append(p.z)
    # z 以 pc 为单位，与盘标高同量级
    assert max(abs(z) for z in zs) > 300.0


def test_unknown_component_returns_empty():
    assert generate(SimulationConfig(component="spiralArm", seed=1)) == []


def test_generate_in_background_hands_off_once():
    received = []
    done = threading.Event()

    def on_done(systems):
        received.append(systems)
        done.set()

    future = generate_in_background(_config(), on_done)
    result = future.result(timeout=30)
    assert done.wait(timeout=30)
    assert len(received) == 1
    assert received[0] is result
    assert result == generate(_config())
