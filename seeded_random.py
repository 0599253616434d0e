"""
可复现的伪随机数发生器 (splitmix64)

整个星场生成流程唯一的随机源：同一个 seed 永远给出同一串 64 位整数，
uniform / gaussian / exponential 全部由 next_uint64() 派生。
"""

import copy
import math
import secrets

# =========================
# 常数
# =========================

GOLDEN_GAMMA = 0x9E3779B97F4A7C15
MASK_64 = 0xFFFFFFFFFFFFFFFF

# 与 Double(UInt64.max) 相同：转成浮点后即 2^64
_UINT64_MAX = float(MASK_64)

# exponential() 的 u 截断，避免 log(0)
EXPONENTIAL_U_FLOOR = 1e-12


class SeededGenerator:
    """splitmix64: 状态每次加黄金比例常数，再做两轮 xor-shift / 乘法混合。"""

    def __init__(self, seed: int):
        seed &= MASK_64
        # seed = 0 会退化，换成黄金比例常数
        self.seed = seed if seed != 0 else GOLDEN_GAMMA
        self._state = self.seed

    @classmethod
    def from_entropy(cls):
        return cls(secrets.randbits(64))

    def next_uint64(self) -> int:
        self._state = (self._state + GOLDEN_GAMMA) & MASK_64
        z = self._state
        z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK_64
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK_64
        return z ^ (z >> 31)

    def uniform(self) -> float:
        return self.next_uint64() / _UINT64_MAX

    def gaussian(self, mean=0.0, sigma=1.0) -> float:
        """Box-Muller，第一个均匀数为 0 时重抽"""
        u1 = self.uniform()
        while u1 <= 0.0:
            u1 = self.uniform()
        u2 = self.uniform()
        z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
        return z0 * sigma + mean

    def exponential(self, scale: float) -> float:
        u = min(max(self.uniform(), EXPONENTIAL_U_FLOOR), 1.0 - EXPONENTIAL_U_FLOOR)
        return -scale * math.log(1.0 - u)

    def fork(self):
        """复制当前状态；副本消耗随机数不影响主序列"""
        return copy.copy(self)

    def __repr__(self):
        return f"SeededGenerator(seed={self.seed:#018x})"


def flexible_generator(seed=None) -> SeededGenerator:
    """
    seed 给定 -> 直接使用；
    seed 为 None -> 构造时从系统熵源读取一次，之后完全确定。
    """
    if seed is None:
        return SeededGenerator.from_entropy()
    return SeededGenerator(seed)
