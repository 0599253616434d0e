"""
生成结果的物理一致性校验
"""

import json
import math
import sys

from galactic_models import StellarSystem
from imf import M_MAX, M_MIN
from population import COMPANION_MIN_MASS, ECCENTRICITY_MAX, kepler_period_years
from stellar_evolution import (
    MIN_LUMINOSITY,
    absolute_magnitude,
    classify_stage,
    radius,
    spectral_type,
)

# 相对误差容限
REL_TOL = 1e-6


def load_stars(filename="star_map.json"):
    try:
        with open(filename, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        print(f"Error: 无法读取 {filename}: {e}")
        return None
    return [StellarSystem.from_dict(s) for s in data["stars"]]


def validate_system(system) -> tuple[bool, list[str]]:
    """
    严格校验单个恒星系统
    返回: (is_valid, errors)
    """
    errors = []

    # 1. 质量范围
    if not (M_MIN <= system.mass <= M_MAX):
        errors.append(f"主星质量越界: {system.mass:.4f} Msun")

    # 2. 伴星
    if len(system.companions) > 1:
        errors.append(f"伴星数量 {len(system.companions)} > 1")
    for c in system.companions:
        if not (COMPANION_MIN_MASS <= c.mass <= system.mass):
            errors.append(f"伴星质量 {c.mass:.4f} 不在 [{COMPANION_MIN_MASS}, {system.mass:.4f}]")
        if not (0.0 <= c.eccentricity <= ECCENTRICITY_MAX):
            errors.append(f"偏心率越界: e={c.eccentricity:.3f}")
        expected = kepler_period_years(c.semi_major_axis_au, system.mass + c.mass)
        if not math.isclose(c.period_years, expected, rel_tol=REL_TOL):
            errors.append(f"开普勒周期不一致: P={c.period_years:.4g} yr, 计算={expected:.4g} yr")

    # 3. 演化阶段
    stage = classify_stage(system.mass, system.age_gyr, system.metallicity)
    if stage != system.stage:
        errors.append(f"演化阶段不一致: {system.stage.value}, 计算={stage.value}")

    # 4. 斯特藩-玻尔兹曼
    if system.luminosity_solar < MIN_LUMINOSITY:
        errors.append(f"光度低于下限: {system.luminosity_solar:.2e} Lsun")
    else:
        r_calc = radius(system.luminosity_solar, system.temperature_k)
        if not math.isclose(system.radius_solar, r_calc, rel_tol=REL_TOL):
            errors.append(f"半径不一致: R={system.radius_solar:.4g}, 计算={r_calc:.4g}")

        m_calc = absolute_magnitude(system.luminosity_solar)
        if not math.isclose(system.absolute_magnitude_v, m_calc, rel_tol=REL_TOL, abs_tol=1e-9):
            errors.append(f"绝对星等不一致: M={system.absolute_magnitude_v:.3f}, 计算={m_calc:.3f}")

    # 5. 光谱型 ↔ 温度
    expected_type = spectral_type(system.temperature_k)
    if system.spectral_type != expected_type:
        errors.append(f"光谱型 {system.spectral_type} 与温度 {system.temperature_k:.0f}K 不符 (应为 {expected_type})")

    # 6. 视星等不应比绝对星等减去消光后更亮 (距离至少 1 pc)
    if system.apparent_magnitude_v - system.extinction_av < system.absolute_magnitude_v - 5.0 - 1e-9:
        errors.append("视星等比 1pc 处还亮")

    return len(errors) == 0, errors


def validate_star_map(systems):
    """拆分为 (通过, [(system, errors)])"""
    valid = []
    flagged = []
    for s in systems:
        ok, errors = validate_system(s)
        if ok:
            valid.append(s)
        else:
            flagged.append((s, errors))
    return valid, flagged


def print_validation(valid, flagged, limit=20):
    print(f"检测完成: 正常恒星 {len(valid)} 颗, 异常恒星 {len(flagged)} 颗。")
    for i, (s, errors) in enumerate(flagged[:limit]):
        print(f"[{i + 1}] {s.spectral_type} {s.stage.value} {s.mass:.3f} Msun")
        for r in errors:
            print(f"    - {r}")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    path = argv[0] if argv else "star_map.json"
    stars = load_stars(path)
    if stars is None:
        return 1
    valid, flagged = validate_star_map(stars)
    print_validation(valid, flagged)
    return 1 if flagged else 0


if __name__ == "__main__":
    sys.exit(main())
