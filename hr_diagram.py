"""
验证图表：赫罗图、距盘面高度 vs 视星等
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from verify_stat import validate_star_map  # noqa: E402

# 颜色映射 (光谱类型 -> RGB Hex)
COLOR_MAP = {
    "O": "#9bb0ff",  # 蓝
    "B": "#aabfff",  # 蓝白
    "A": "#cad7ff",  # 白
    "F": "#f8f7ff",  # 黄白
    "G": "#fff4ea",  # 黄 (太阳)
    "K": "#ffd2a1",  # 橙
    "M": "#ffcc6f",  # 红
}


def plot_hr_diagram(systems, path):
    valid, flagged = validate_star_map(systems)
    flagged_systems = [s for s, _ in flagged]

    plt.figure(figsize=(12, 10))
    ax = plt.gca()
    ax.set_facecolor("#101018")

    plt.scatter(
        [s.temperature_k for s in valid],
        [s.absolute_magnitude_v for s in valid],
        c=[COLOR_MAP.get(s.spectral_type, "#ffffff") for s in valid],
        s=15,
        alpha=0.8,
        edgecolors="none",
        label="Valid Stars",
    )
    if flagged_systems:
        plt.scatter(
            [s.temperature_k for s in flagged_systems],
            [s.absolute_magnitude_v for s in flagged_systems],
            c="red",
            marker="x",
            s=50,
            linewidth=1.5,
            label="Problematic Stars",
        )

    plt.xscale("log")
    ax.invert_xaxis()  # 温度逆序
    ax.invert_yaxis()  # 星等逆序
    plt.title(f"Hertzsprung-Russell Diagram\n(Flagged: {len(flagged_systems)} stars)", fontsize=16)
    plt.xlabel("Temperature (K)", fontsize=12)
    plt.ylabel("Absolute Magnitude (Mv)", fontsize=12)
    plt.grid(True, which="both", ls="-", alpha=0.2)
    plt.legend()

    plt.savefig(path, dpi=150, bbox_inches="tight")
    plt.close()
    return path


def plot_distance_magnitude(systems, path):
    """视星等随样本体积内垂直偏移的分布"""
    plt.figure(figsize=(12, 8))
    plt.scatter(
        [abs(s.position_pc.z) for s in systems],
        [s.apparent_magnitude_v for s in systems],
        c=[COLOR_MAP.get(s.spectral_type, "#ffffff") for s in systems],
        s=10,
        alpha=0.5,
        edgecolors="grey",
        linewidths=0.2,
    )
    plt.axhline(y=6.5, color="green", linestyle="--", linewidth=2, label="Naked Eye Limit (6.5)")
    plt.xlabel("|z| offset (pc)", fontsize=12)
    plt.ylabel("Apparent Magnitude (m)", fontsize=12)
    plt.title("Vertical Offset vs. Apparent Magnitude", fontsize=16)
    plt.gca().invert_yaxis()
    plt.legend()
    plt.grid(True, alpha=0.3)

    plt.savefig(path, dpi=150, bbox_inches="tight")
    plt.close()
    return path
