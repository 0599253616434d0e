"""
星场生成器

SimulationConfig -> [StellarSystem]
流程: 数密度 x 体积 (或目标总质量) 定星数 -> 逐颗抽样质量/年龄/金属丰度
-> 演化阶段与物理量 -> 位置/速度 -> 消光与视星等 -> 伴星
"""

import math
from concurrent.futures import ThreadPoolExecutor

from galactic_models import DUST_MODELS, REGION_MODELS, StellarSystem, Vector3D
from imf import mean_imf_mass, sample_kroupa_mass
from population import sample_age, sample_binary_companions, sample_metallicity, sample_velocity
from seeded_random import SeededGenerator, flexible_generator
from stellar_evolution import (
    MIN_LUMINOSITY,
    absolute_magnitude,
    classify_stage,
    effective_temperature,
    luminosity,
    radius,
    spectral_type,
)

# =========================
# 基本参数
# =========================

MEAN_MASS_SAMPLES = 1024
MEAN_MASS_FLOOR = 0.1  # Msun
MIN_DISTANCE_PC = 1.0


def round_half_up(x):
    return int(math.floor(x + 0.5))


def estimate_star_count(region, config, rng):
    """
    默认: max(1, round(密度 x 体积))
    给定目标总质量时: 用 rng 副本抽 1024 个 IMF 质量估计平均质量，
    星数 = max(1, round(目标质量 / 平均质量))，主随机序列不受影响。
    """
    density = region.density(config.galactocentric_radius, config.midplane_height)
    count = max(1, round_half_up(density * config.volume))
    if config.desired_stellar_mass is not None:
        mean_mass = mean_imf_mass(rng, MEAN_MASS_SAMPLES)
        count = max(1, round_half_up(config.desired_stellar_mass / max(mean_mass, MEAN_MASS_FLOOR)))
    return count


def sample_position(region, volume, rng):
    """
    把体积近似成半径 (V/pi)^(1/3) 的圆柱：
    盘面内按面积均匀 (R sqrt(u))，垂直方向按星族标高做高斯；三个分量都是 pc
    """
    radial_extent = (max(volume, 0.0) / math.pi) ** (1.0 / 3.0)
    r = radial_extent * math.sqrt(rng.uniform())
    theta = 2.0 * math.pi * rng.uniform()
    z = rng.gaussian(0.0, region.vertical_scale_height)
    return Vector3D(x=r * math.cos(theta), y=r * math.sin(theta), z=z)


class StarFieldGenerator:
    def __init__(self, config):
        self.config = config
        # 未给 seed 时在这里读一次熵源，之后整个运行都是确定的
        self.seed = flexible_generator(config.seed).seed

    def run(self):
        config = self.config
        region = REGION_MODELS.get(config.component)
        dust = DUST_MODELS.get(config.component)
        if region is None or dust is None:
            return []

        rng = SeededGenerator(self.seed)
        star_count = estimate_star_count(region, config, rng)

        # 所有恒星共享同一观测距离
        distance_pc = max(config.distance_from_observer * 1000.0, MIN_DISTANCE_PC)
        extinction = dust.visual_extinction(config.distance_from_observer, config.midplane_height)
        distance_modulus = 5.0 * math.log10(distance_pc) - 5.0

        systems = []
        for _ in range(star_count):
            mass = sample_kroupa_mass(rng)
            age = sample_age(config.component, rng)
            metallicity = sample_metallicity(config.component, config.galactocentric_radius, rng)
            stage = classify_stage(mass, age, metallicity)

            lum = max(MIN_LUMINOSITY, luminosity(mass, stage))
            teff = effective_temperature(mass, stage)
            abs_mag = absolute_magnitude(lum)

            position = sample_position(region, config.volume, rng)
            velocity = sample_velocity(config.component, rng)

            if config.include_binaries:
                companions = sample_binary_companions(config.component, mass, rng)
            else:
                companions = ()

            systems.append(
                StellarSystem(
                    component=config.component,
                    position_pc=position,
                    velocity_kms=velocity,
                    mass=mass,
                    age_gyr=age,
                    metallicity=metallicity,
                    stage=stage,
                    luminosity_solar=lum,
                    temperature_k=teff,
                    radius_solar=radius(lum, teff),
                    absolute_magnitude_v=abs_mag,
                    apparent_magnitude_v=abs_mag + distance_modulus + extinction,
                    spectral_type=spectral_type(teff),
                    extinction_av=extinction,
                    companions=companions,
                )
            )

        return systems


def generate(config):
    return StarFieldGenerator(config).run()


def generate_in_background(config, on_done=None):
    """
    在单个工作线程里生成，完成后把整份结果一次性交给 on_done。
    返回 Future；生成失败时 on_done 不会被调用，异常留在 Future 里。
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="starfield")
    future = executor.submit(generate, config)
    executor.shutdown(wait=False)

    if on_done is not None:

        def _deliver(done):
            if done.exception() is None:
                on_done(done.result())

        future.add_done_callback(_deliver)
    return future
