"""
银河系星族模型与数据结构

五种区域原型 (薄盘 / 厚盘 / 核球 / 银晕 / 球状星团) 的参数表、尘埃消光模型，
以及一次生成请求 (SimulationConfig) 和生成结果 (StellarSystem)。
"""

import math
from dataclasses import dataclass, field
from enum import Enum

from stellar_evolution import StellarStage

# 太阳的银心距 (kpc)
SOLAR_RADIUS_KPC = 8.2


class GalacticComponent(str, Enum):
    THIN_DISK = "thinDisk"
    THICK_DISK = "thickDisk"
    BULGE = "bulge"
    HALO = "halo"
    GLOBULAR_CLUSTER = "globularCluster"

    @classmethod
    def parse(cls, name):
        for component in cls:
            if component.value == name:
                return component
        valid = ", ".join(c.value for c in cls)
        raise ValueError(f"Unknown component: {name!r} (expected one of: {valid})")


@dataclass(frozen=True)
class Vector3D:
    x: float
    y: float
    z: float

    def to_dict(self):
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_dict(cls, data):
        return cls(x=float(data["x"]), y=float(data["y"]), z=float(data["z"]))


@dataclass(frozen=True)
class GalacticRegionModel:
    base_number_density: float  # stars / pc^3 (太阳半径处)
    radial_scale_length: float  # kpc
    vertical_scale_height: float  # pc
    age_range: tuple  # (min, max) Gyr
    metallicity_mean: float
    metallicity_sigma: float
    velocity_dispersion: Vector3D  # km/s
    binary_fraction: float

    def density(self, radius, height):
        """径向指数盘 x 垂直指数衰减；height 单位 kpc"""
        radial = math.exp(-(radius - SOLAR_RADIUS_KPC) / self.radial_scale_length)
        vertical = math.exp(-abs(height * 1000.0) / self.vertical_scale_height)
        return self.base_number_density * radial * vertical


@dataclass(frozen=True)
class DustModel:
    extinction_coefficient: float  # mag / kpc (盘面)
    scale_height: float  # pc

    def visual_extinction(self, distance, height):
        """A_V；distance 与 height 单位均为 kpc"""
        attenuation = math.exp(-abs(height * 1000.0) / self.scale_height)
        return self.extinction_coefficient * distance * attenuation


# =========================
# 星族参数表
# =========================

REGION_MODELS = {
    GalacticComponent.THIN_DISK: GalacticRegionModel(
        base_number_density=0.08,
        radial_scale_length=2.6,
        vertical_scale_height=300.0,
        age_range=(0.0, 10.0),
        metallicity_mean=0.0,
        metallicity_sigma=0.2,
        velocity_dispersion=Vector3D(30.0, 20.0, 15.0),
        binary_fraction=0.44,
    ),
    GalacticComponent.THICK_DISK: GalacticRegionModel(
        base_number_density=0.003,
        radial_scale_length=3.6,
        vertical_scale_height=900.0,
        age_range=(8.0, 12.0),
        metallicity_mean=-0.5,
        metallicity_sigma=0.3,
        velocity_dispersion=Vector3D(60.0, 45.0, 35.0),
        binary_fraction=0.35,
    ),
    GalacticComponent.BULGE: GalacticRegionModel(
        base_number_density=0.4,
        radial_scale_length=1.0,
        vertical_scale_height=400.0,
        age_range=(8.0, 12.0),
        metallicity_mean=-0.1,
        metallicity_sigma=0.4,
        velocity_dispersion=Vector3D(110.0, 90.0, 80.0),
        binary_fraction=0.3,
    ),
    GalacticComponent.HALO: GalacticRegionModel(
        base_number_density=0.0001,
        radial_scale_length=15.0,
        vertical_scale_height=5000.0,
        age_range=(10.0, 13.0),
        metallicity_mean=-1.5,
        metallicity_sigma=0.4,
        velocity_dispersion=Vector3D(140.0, 120.0, 100.0),
        binary_fraction=0.15,
    ),
    GalacticComponent.GLOBULAR_CLUSTER: GalacticRegionModel(
        base_number_density=1.5,
        radial_scale_length=0.5,
        vertical_scale_height=20.0,
        age_range=(10.0, 13.0),
        metallicity_mean=-1.0,
        metallicity_sigma=0.2,
        velocity_dispersion=Vector3D(10.0, 10.0, 10.0),
        binary_fraction=0.05,
    ),
}

# 尘埃: 消光系数 (mag/kpc), 标高 (pc)
DUST_MODELS = {
    GalacticComponent.THIN_DISK: DustModel(1.8, 150.0),
    GalacticComponent.THICK_DISK: DustModel(0.9, 300.0),
    GalacticComponent.BULGE: DustModel(2.4, 120.0),
    GalacticComponent.HALO: DustModel(0.3, 800.0),
    GalacticComponent.GLOBULAR_CLUSTER: DustModel(0.6, 60.0),
}


# =========================
# 生成请求
# =========================

DEFAULT_VOLUME_PC3 = 1000.0
DEFAULT_RADIUS_KPC = SOLAR_RADIUS_KPC
DEFAULT_HEIGHT_KPC = 0.0
DEFAULT_DISTANCE_KPC = 1.0


@dataclass(frozen=True)
class SimulationConfig:
    component: GalacticComponent = GalacticComponent.THIN_DISK
    volume: float = DEFAULT_VOLUME_PC3  # pc^3
    galactocentric_radius: float = DEFAULT_RADIUS_KPC  # kpc
    midplane_height: float = DEFAULT_HEIGHT_KPC  # kpc
    distance_from_observer: float = DEFAULT_DISTANCE_KPC  # kpc
    seed: int = None
    desired_stellar_mass: float = None  # Msun
    include_binaries: bool = True

    @classmethod
    def from_mapping(cls, params):
        """从用户输入的字典构造，缺失项取默认值"""
        component = params.get("component", GalacticComponent.THIN_DISK)
        if not isinstance(component, GalacticComponent):
            component = GalacticComponent.parse(component)
        seed = params.get("seed")
        mass = params.get("desired_stellar_mass")
        return cls(
            component=component,
            volume=float(params.get("volume", DEFAULT_VOLUME_PC3)),
            galactocentric_radius=float(params.get("galactocentric_radius", DEFAULT_RADIUS_KPC)),
            midplane_height=float(params.get("midplane_height", DEFAULT_HEIGHT_KPC)),
            distance_from_observer=float(params.get("distance_from_observer", DEFAULT_DISTANCE_KPC)),
            seed=None if seed is None else int(seed),
            desired_stellar_mass=None if mass is None else float(mass),
            include_binaries=bool(params.get("include_binaries", True)),
        )

    def to_dict(self):
        return {
            "component": self.component.value,
            "volume": self.volume,
            "galactocentric_radius": self.galactocentric_radius,
            "midplane_height": self.midplane_height,
            "distance_from_observer": self.distance_from_observer,
            "seed": self.seed,
            "desired_stellar_mass": self.desired_stellar_mass,
            "include_binaries": self.include_binaries,
        }


# =========================
# 生成结果
# =========================


@dataclass(frozen=True)
class Companion:
    mass: float  # Msun
    semi_major_axis_au: float
    eccentricity: float
    period_years: float

    def to_dict(self):
        return {
            "mass": self.mass,
            "semi_major_axis_au": self.semi_major_axis_au,
            "eccentricity": self.eccentricity,
            "period_years": self.period_years,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            mass=float(data["mass"]),
            semi_major_axis_au=float(data["semi_major_axis_au"]),
            eccentricity=float(data["eccentricity"]),
            period_years=float(data["period_years"]),
        )


@dataclass(frozen=True)
class StellarSystem:
    component: GalacticComponent
    position_pc: Vector3D
    velocity_kms: Vector3D
    mass: float
    age_gyr: float
    metallicity: float
    stage: StellarStage
    luminosity_solar: float
    temperature_k: float
    radius_solar: float
    absolute_magnitude_v: float
    apparent_magnitude_v: float
    spectral_type: str
    extinction_av: float
    companions: tuple = field(default_factory=tuple)

    def to_dict(self):
        return {
            "component": self.component.value,
            "position_pc": self.position_pc.to_dict(),
            "velocity_kms": self.velocity_kms.to_dict(),
            "mass": self.mass,
            "age_gyr": self.age_gyr,
            "metallicity": self.metallicity,
            "stage": self.stage.value,
            "luminosity_solar": self.luminosity_solar,
            "temperature_k": self.temperature_k,
            "radius_solar": self.radius_solar,
            "absolute_magnitude_v": self.absolute_magnitude_v,
            "apparent_magnitude_v": self.apparent_magnitude_v,
            "spectral_type": self.spectral_type,
            "extinction_av": self.extinction_av,
            "companions": [c.to_dict() for c in self.companions],
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            component=GalacticComponent.parse(data["component"]),
            position_pc=Vector3D.from_dict(data["position_pc"]),
            velocity_kms=Vector3D.from_dict(data["velocity_kms"]),
            mass=float(data["mass"]),
            age_gyr=float(data["age_gyr"]),
            metallicity=float(data["metallicity"]),
            stage=StellarStage(data["stage"]),
            luminosity_solar=float(data["luminosity_solar"]),
            temperature_k=float(data["temperature_k"]),
            radius_solar=float(data["radius_solar"]),
            absolute_magnitude_v=float(data["absolute_magnitude_v"]),
            apparent_magnitude_v=float(data["apparent_magnitude_v"]),
            spectral_type=data["spectral_type"],
            extinction_av=float(data["extinction_av"]),
            companions=tuple(Companion.from_dict(c) for c in data.get("companions", [])),
        )
