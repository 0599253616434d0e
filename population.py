"""
按星族抽样：年龄、金属丰度、速度、双星伴星
"""

import math

from galactic_models import REGION_MODELS, SOLAR_RADIUS_KPC, Companion, GalacticComponent, Vector3D

# =========================
# 年龄分布 (Gyr)
# =========================

# 薄盘: 指数衰减的恒星形成史
THIN_DISK_AGE_SCALE = 6.0
THIN_DISK_AGE_RANGE = (0.1, 10.0)

# 其他星族: 高斯 (均值, sigma, 下限, 上限)；越界直接截断，不重抽
AGE_PROFILES = {
    GalacticComponent.THICK_DISK: (10.0, 1.0, 8.0, 12.0),
    GalacticComponent.BULGE: (9.5, 1.5, 6.0, 13.0),
    GalacticComponent.HALO: (12.0, 0.7, 10.0, 13.5),
    GalacticComponent.GLOBULAR_CLUSTER: (12.5, 0.5, 11.0, 13.5),
}

# =========================
# 金属丰度
# =========================

# 径向梯度 (dex / kpc)
METALLICITY_GRADIENTS = {
    GalacticComponent.THIN_DISK: -0.07,
    GalacticComponent.THICK_DISK: -0.03,
    GalacticComponent.BULGE: 0.02,
    GalacticComponent.HALO: -0.01,
    GalacticComponent.GLOBULAR_CLUSTER: -0.005,
}
METALLICITY_RANGE = (-2.5, 0.5)

# =========================
# 双星参数
# =========================

COMPANION_MIN_MASS = 0.08
LOG_SEPARATION_MEAN = math.log10(30.0)  # log10(AU)
LOG_SEPARATION_SIGMA = 0.8
ECCENTRICITY_MEAN = 0.4
ECCENTRICITY_SIGMA = 0.2
ECCENTRICITY_MAX = 0.95
KEPLER_MASS_FLOOR = 0.1  # Msun


def clamp(value, lo, hi):
    return min(max(value, lo), hi)


def sample_age(component, rng):
    if component == GalacticComponent.THIN_DISK:
        age = rng.exponential(THIN_DISK_AGE_SCALE)
        return clamp(age, *THIN_DISK_AGE_RANGE)
    mean, sigma, lo, hi = AGE_PROFILES[component]
    return clamp(rng.gaussian(mean, sigma), lo, hi)


def sample_metallicity(component, radius, rng):
    """[Fe/H]: 高斯，均值随银心距线性变化"""
    model = REGION_MODELS[component]
    mean = model.metallicity_mean + METALLICITY_GRADIENTS[component] * (radius - SOLAR_RADIUS_KPC)
    return clamp(rng.gaussian(mean, model.metallicity_sigma), *METALLICITY_RANGE)


def sample_velocity(component, rng):
    sigma = REGION_MODELS[component].velocity_dispersion
    return Vector3D(
        x=rng.gaussian(0.0, sigma.x),
        y=rng.gaussian(0.0, sigma.y),
        z=rng.gaussian(0.0, sigma.z),
    )


def kepler_period_years(semi_major_axis_au, total_mass):
    """开普勒第三定律 P^2 = a^3 / M (年, AU, Msun)"""
    return math.sqrt(semi_major_axis_au ** 3 / max(total_mass, KEPLER_MASS_FLOOR))


def sample_binary_companions(component, primary_mass, rng):
    """
    单伴星模型: 返回空元组或只含一个 Companion 的元组

    质量比 q = u^0.5，伴星质量截断在 [0.08, 主星质量]；
    半长轴 log-normal，偏心率截断高斯。
    """
    binary_fraction = REGION_MODELS[component].binary_fraction
    if rng.uniform() > binary_fraction:
        return ()

    mass_ratio = rng.uniform() ** 0.5
    mass = max(COMPANION_MIN_MASS, min(primary_mass * mass_ratio, primary_mass))
    semi_major_axis = 10.0 ** rng.gaussian(LOG_SEPARATION_MEAN, LOG_SEPARATION_SIGMA)
    eccentricity = clamp(rng.gaussian(ECCENTRICITY_MEAN, ECCENTRICITY_SIGMA), 0.0, ECCENTRICITY_MAX)
    period = kepler_period_years(semi_major_axis, primary_mass + mass)
    return (
        Companion(
            mass=mass,
            semi_major_axis_au=semi_major_axis,
            eccentricity=eccentricity,
            period_years=period,
        ),
    )
