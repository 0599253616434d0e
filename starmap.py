#!/usr/bin/env python3
"""
命令行入口：按星族参数生成星场并保存为 JSON 星图

    starmap --component thinDisk --volume 1000 --seed 42 -o star_map.json
"""

import argparse
import json
import sys
from collections import Counter

from analyze_star_distribution import print_report, summarize
from galactic_models import (
    DEFAULT_DISTANCE_KPC,
    DEFAULT_HEIGHT_KPC,
    DEFAULT_RADIUS_KPC,
    DEFAULT_VOLUME_PC3,
    GalacticComponent,
    SimulationConfig,
    StellarSystem,
)
from hr_diagram import plot_distance_magnitude, plot_hr_diagram
from seeded_random import MASK_64
from star_generate import StarFieldGenerator
from verify_stat import print_validation, validate_star_map

# =========================
# 基本参数
# =========================

DEFAULT_OUTPUT = "star_map.json"
SPECTRAL_ORDER = ["O", "B", "A", "F", "G", "K", "M"]


# =========================
# JSON 星图
# =========================


def build_star_map(systems, config, seed):
    """metadata 里记录实际使用的 seed，未指定 seed 的运行也能复现"""
    types = Counter(s.spectral_type for s in systems)
    metadata = {
        "config": config.to_dict(),
        "effective_seed": seed,
        "star_count": len(systems),
        "spectral_types": {t: types.get(t, 0) for t in SPECTRAL_ORDER},
        "binary_count": sum(1 for s in systems if s.companions),
    }
    return {"metadata": metadata, "stars": [s.to_dict() for s in systems]}


def dumps_star_map(document):
    return json.dumps(document, indent=2, sort_keys=True, ensure_ascii=False)


def save_star_map(document, path):
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps_star_map(document))
        f.write("\n")


def load_star_map(path):
    """返回 (metadata, [StellarSystem])"""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    systems = [StellarSystem.from_dict(s) for s in data["stars"]]
    return data.get("metadata", {}), systems


# =========================
# 参数解析
# =========================


def _seed(value):
    seed = int(value)
    if not 0 <= seed <= MASK_64:
        raise argparse.ArgumentTypeError(f"seed must be in [0, {MASK_64}]")
    return seed


def build_parser():
    parser = argparse.ArgumentParser(
        prog="starmap",
        description="Generate a statistically plausible stellar population for a galactic region",
    )
    parser.add_argument(
        "--component",
        default=GalacticComponent.THIN_DISK.value,
        choices=[c.value for c in GalacticComponent],
        help="galactic region archetype (default: thinDisk)",
    )
    parser.add_argument("--volume", type=float, default=DEFAULT_VOLUME_PC3, help="sampling volume in pc^3")
    parser.add_argument("--radius", type=float, default=DEFAULT_RADIUS_KPC, help="galactocentric radius in kpc")
    parser.add_argument("--height", type=float, default=DEFAULT_HEIGHT_KPC, help="height above the mid-plane in kpc")
    parser.add_argument("--distance", type=float, default=DEFAULT_DISTANCE_KPC, help="distance from observer in kpc")
    parser.add_argument("--stellar-mass", type=float, default=None, help="target total stellar mass in Msun")
    parser.add_argument("--seed", type=_seed, default=None, help="64-bit seed (random if omitted)")
    parser.add_argument("--no-binaries", action="store_true", help="do not sample binary companions")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT, help="output JSON path ('-' for stdout)")
    parser.add_argument("--quiet", action="store_true", help="suppress progress output")
    parser.add_argument("--verify", action="store_true", help="run physical consistency checks on the result")
    parser.add_argument("--report", action="store_true", help="print population statistics")
    parser.add_argument("--hr-diagram", metavar="PNG", default=None, help="save an H-R diagram to this path")
    parser.add_argument("--magnitude-plot", metavar="PNG", default=None, help="save a |z| vs apparent magnitude plot")
    return parser


def config_from_args(args, parser):
    if args.volume <= 0:
        parser.error("--volume must be positive")
    if args.distance < 0:
        parser.error("--distance must not be negative")
    if args.stellar_mass is not None and args.stellar_mass <= 0:
        parser.error("--stellar-mass must be positive")

    return SimulationConfig(
        component=GalacticComponent.parse(args.component),
        volume=args.volume,
        galactocentric_radius=args.radius,
        midplane_height=args.height,
        distance_from_observer=args.distance,
        seed=args.seed,
        desired_stellar_mass=args.stellar_mass,
        include_binaries=not args.no_binaries,
    )


# =========================
# 执行
# =========================


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    config = config_from_args(args, parser)

    to_stdout = args.output == "-"
    verbose = not (args.quiet or to_stdout)

    generator = StarFieldGenerator(config)
    if verbose:
        print(f"Generating {config.component.value} stars (seed {generator.seed})...")
    systems = generator.run()

    document = build_star_map(systems, config, generator.seed)
    if to_stdout:
        print(dumps_star_map(document))
    else:
        save_star_map(document, args.output)
        if verbose:
            print(f"Saved to {args.output} ({len(systems)} stars total)")

    if verbose:
        types = document["metadata"]["spectral_types"]
        total = max(len(systems), 1)
        print("\nSpectral type distribution:")
        for t in SPECTRAL_ORDER:
            print(f"{t}: {types[t] / total * 100:.2f}%")

    exit_code = 0
    if args.verify:
        valid, flagged = validate_star_map(systems)
        if verbose:
            print_validation(valid, flagged)
        if flagged:
            exit_code = 1

    if args.report and verbose:
        print_report(summarize(systems))

    if args.hr_diagram:
        plot_hr_diagram(systems, args.hr_diagram)
        if verbose:
            print(f"图表已保存: {args.hr_diagram}")

    if args.magnitude_plot:
        plot_distance_magnitude(systems, args.magnitude_plot)
        if verbose:
            print(f"图表已保存: {args.magnitude_plot}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
