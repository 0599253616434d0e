import math

import numpy as np

# =========================
# IMF 参数 (Kroupa 型折线幂律)
# =========================

M_MIN = 0.08
M_MAX = 50.0

# (累积概率上界, 质量下限, 质量上限, 幂指数 alpha)
KROUPA_SEGMENTS = (
    (0.5, 0.08, 0.5, 1.3),
    (0.9, 0.5, 1.0, 2.3),
    (1.0, 1.0, M_MAX, 2.7),
)


def invert_power_law(u, m_lo, m_hi, alpha):
    """
    p(m) ∝ m^-alpha 在 [m_lo, m_hi] 上的逆 CDF

    y = m_lo^(1-a) + u * (m_hi^(1-a) - m_lo^(1-a)),  m = y^(1/(1-a))
    alpha = 1 时退化为对数均匀分布。
    """
    exponent = 1.0 - alpha
    if abs(exponent) < 1e-12:
        return m_lo * math.exp(u * math.log(m_hi / m_lo))
    lo = m_lo ** exponent
    hi = m_hi ** exponent
    return (lo + u * (hi - lo)) ** (1.0 / exponent)


def sample_kroupa_mass(rng, segments=KROUPA_SEGMENTS):
    """一次均匀抽样 -> 选段 -> 段内解析反演"""
    u = rng.uniform()
    cdf_lo = 0.0
    last = len(segments) - 1
    for i, (cdf_hi, m_lo, m_hi, alpha) in enumerate(segments):
        if u < cdf_hi or i == last:
            width = cdf_hi - cdf_lo
            local_u = (u - cdf_lo) / width if width > 0 else 0.0
            mass = invert_power_law(local_u, m_lo, m_hi, alpha)
            # 浮点误差可能越界一点点
            return min(max(mass, m_lo), m_hi)
        cdf_lo = cdf_hi


def sample_kroupa_masses(rng, size):
    """顺序抽取 size 个质量 (与逐个调用 sample_kroupa_mass 完全一致)"""
    return np.fromiter((sample_kroupa_mass(rng) for _ in range(size)), dtype=float, count=size)


def mean_imf_mass(rng, samples=1024):
    """在 rng 的副本上估计平均恒星质量，不推进 rng 本身"""
    masses = sample_kroupa_masses(rng.fork(), samples)
    return float(masses.sum() / samples)
