#!/usr/bin/env python3
"""
统计生成星场的分布情况：光谱型、演化阶段、双星比例、视星等直方图
"""

import sys
from collections import Counter

import numpy as np

from stellar_evolution import StellarStage
from verify_stat import load_stars

SPECTRAL_ORDER = ["O", "B", "A", "F", "G", "K", "M"]


def summarize(systems):
    """返回统计结果字典 (空列表时各项为 0)"""
    count = len(systems)
    masses = np.array([s.mass for s in systems], dtype=float)
    app_mags = np.array([s.apparent_magnitude_v for s in systems], dtype=float)

    types = Counter(s.spectral_type for s in systems)
    stages = Counter(s.stage for s in systems)
    binaries = sum(1 for s in systems if s.companions)

    summary = {
        "count": count,
        "spectral_types": {t: types.get(t, 0) for t in SPECTRAL_ORDER},
        "stages": {st.value: stages.get(st, 0) for st in StellarStage},
        "binary_count": binaries,
        "binary_fraction": binaries / count if count else 0.0,
        "total_mass": float(masses.sum()),
        "mean_mass": float(masses.mean()) if count else 0.0,
        "app_mag_min": float(app_mags.min()) if count else None,
        "app_mag_max": float(app_mags.max()) if count else None,
        "app_mag_histogram": [],
    }

    if count:
        # 1 等宽的区间，边界取整
        lo = np.floor(app_mags.min())
        hi = np.floor(app_mags.max()) + 1.0
        counts, edges = np.histogram(app_mags, bins=np.arange(lo, hi + 0.5, 1.0))
        summary["app_mag_histogram"] = [
            (float(edges[i]), float(edges[i + 1]), int(counts[i])) for i in range(len(counts))
        ]
    return summary


def print_report(summary):
    total = summary["count"]
    print(f"{'=' * 50}")
    print("星场统计报告")
    print(f"{'=' * 50}")
    print(f"恒星总数: {total}")
    print(f"总质量: {summary['total_mass']:.2f} Msun (平均 {summary['mean_mass']:.3f} Msun)")
    print(f"双星: {summary['binary_count']} ({summary['binary_fraction']:.1%})")
    print()

    print("光谱型分布:")
    for t, n in summary["spectral_types"].items():
        pct = n / total * 100 if total else 0.0
        print(f"  {t}: {n:>8}  {pct:6.2f}%")
    print()

    print("演化阶段分布:")
    for st, n in summary["stages"].items():
        print(f"  {st:<14} {n:>8}")
    print()

    histogram = summary["app_mag_histogram"]
    if histogram:
        print("视星等分布:")
        max_count = max(n for _, _, n in histogram) or 1
        for lo, hi, n in histogram:
            bar = "█" * int(n / max_count * 30)
            print(f"  {lo:>5.1f} ~ {hi:<5.1f} {n:>8}  {bar}")
        print(f"最亮: {summary['app_mag_min']:.2f}  最暗: {summary['app_mag_max']:.2f}")


def draw_ascii_map(systems, width=60, height=24):
    """
    可视化：x/y 平面 (俯视) 的 ASCII 密度图
    返回字符行列表，同时打印
    """
    grid = np.zeros((height, width), dtype=int)
    if systems:
        xs = np.array([s.position_pc.x for s in systems])
        ys = np.array([s.position_pc.y for s in systems])
        extent = max(np.abs(xs).max(), np.abs(ys).max(), 1e-9)

        cols = ((xs / extent + 1.0) / 2.0 * (width - 1)).astype(int)
        rows = ((1.0 - (ys / extent + 1.0) / 2.0) * (height - 1)).astype(int)
        # 边界保护
        cols = np.clip(cols, 0, width - 1)
        rows = np.clip(rows, 0, height - 1)
        np.add.at(grid, (rows, cols), 1)

    # 字符映射表 (从稀疏到密集)
    chars = " .-:;+=*#%@"
    max_count = grid.max()

    lines = ["+" + "-" * width + "+"]
    for r in range(height):
        line = ""
        for c in range(width):
            n = grid[r, c]
            if n == 0:
                line += " "
            else:
                line += chars[max(1, int(n / max_count * (len(chars) - 1)))]
        lines.append("|" + line + "|")
    lines.append("+" + "-" * width + "+")

    for line in lines:
        print(line)
    return lines


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    path = argv[0] if argv else "star_map.json"
    stars = load_stars(path)
    if stars is None:
        return 1
    print(f"成功加载 {len(stars)} 颗恒星数据。")
    print_report(summarize(stars))
    draw_ascii_map(stars)
    return 0


if __name__ == "__main__":
    sys.exit(main())
