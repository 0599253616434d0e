import math
from enum import Enum

# =========================
# 太阳参考值
# =========================

SUN_TEFF = 5778.0
SUN_MV = 4.83

# 光度下限 (Lsun)，由调用方施加
MIN_LUMINOSITY = 0.0001


class StellarStage(str, Enum):
    MAIN_SEQUENCE = "mainSequence"
    SUB_GIANT = "subGiant"
    RED_GIANT = "redGiant"
    WHITE_DWARF = "whiteDwarf"
    NEUTRON_STAR = "neutronStar"


# 演化阶段判定的阈值
NEUTRON_STAR_MIN_MASS = 8.0
SUB_GIANT_LIFETIME_FACTOR = 1.2
RED_GIANT_LIFETIME_FACTOR = 5.0

# 非主序阶段的固定温度 (K)
STAGE_TEMPERATURE = {
    StellarStage.SUB_GIANT: 5200.0,
    StellarStage.RED_GIANT: 4200.0,
    StellarStage.WHITE_DWARF: 8000.0,
    StellarStage.NEUTRON_STAR: 1_000_000.0,
}

# 光谱型温度上界 (K)，由冷到热
SPECTRAL_THRESHOLDS = (
    (3500.0, "M"),
    (5000.0, "K"),
    (6000.0, "G"),
    (7500.0, "F"),
    (10000.0, "A"),
    (30000.0, "B"),
)


def main_sequence_lifetime(mass, metallicity):
    """主序寿命 (Gyr)，金属丰度越高寿命越短，因子下限 0.3"""
    metallicity_factor = max(0.3, 1.0 - 0.2 * metallicity)
    return metallicity_factor * 10.0 * mass ** (-2.5)


def luminosity(mass, stage):
    if stage == StellarStage.MAIN_SEQUENCE:
        # 质光关系的四段幂律
        if mass < 0.43:
            return 0.23 * mass ** 2.3
        if mass < 2.0:
            return mass ** 4.0
        if mass < 20.0:
            return 1.4 * mass ** 3.5
        return 32000.0 * mass
    if stage in (StellarStage.SUB_GIANT, StellarStage.RED_GIANT):
        return 50.0 * mass ** 2.0
    if stage == StellarStage.WHITE_DWARF:
        return 0.01 * mass ** 2.0
    return MIN_LUMINOSITY


def effective_temperature(mass, stage):
    if stage == StellarStage.MAIN_SEQUENCE:
        if mass < 0.5:
            return 3100.0 + 1500.0 * mass
        if mass < 1.5:
            return 5200.0 + 1800.0 * (mass - 0.5)
        if mass < 3.0:
            return 6800.0 + 1200.0 * (mass - 1.5)
        return 8000.0 + 400.0 * (mass - 3.0)
    return STAGE_TEMPERATURE[stage]


def radius(lum, teff):
    """Stefan-Boltzmann: L = R^2 (T/T_sun)^4"""
    return math.sqrt(lum) * (SUN_TEFF / teff) ** 2


def absolute_magnitude(lum):
    return SUN_MV - 2.5 * math.log10(lum)


def spectral_type(teff):
    for upper, letter in SPECTRAL_THRESHOLDS:
        if teff < upper:
            return letter
    return "O"


def classify_stage(mass, age, metallicity):
    """
    根据年龄与主序寿命一次性判定演化阶段 (不做时间演化)

    age < t_ms              -> 主序
    质量 > 8                 -> 中子星
    age < 1.2 t_ms          -> 亚巨星
    age < 5 t_ms            -> 红巨星
    其余                     -> 白矮星
    """
    t_ms = main_sequence_lifetime(mass, metallicity)
    if age < t_ms:
        return StellarStage.MAIN_SEQUENCE
    if mass > NEUTRON_STAR_MIN_MASS:
        return StellarStage.NEUTRON_STAR
    if age < t_ms * SUB_GIANT_LIFETIME_FACTOR:
        return StellarStage.SUB_GIANT
    if age < t_ms * RED_GIANT_LIFETIME_FACTOR:
        return StellarStage.RED_GIANT
    return StellarStage.WHITE_DWARF
