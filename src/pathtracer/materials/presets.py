# materials/presets.py
from pathtracer.core.vector import Vector3
from pathtracer.materials.metal import Metal
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.dielectric import Dielectric


class MetalPresets:
    """Predefined metal materials."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Vector3(0.8, 0.6, 0.2), fuzz=0.3)

    @staticmethod
    def polished_steel() -> Metal:
        return Metal(Vector3(0.7, 0.6, 0.5), fuzz=0.0)


class DielectricPresets:
    """Predefined dielectric materials with realistic refractive indices."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

    @staticmethod
    def water() -> Dielectric:
        return Dielectric(1.33)

    @staticmethod
    def diamond() -> Dielectric:
        return Dielectric(2.42)


class ColorPresets:
    """Common albedo colors for materials."""

    NAVY = Vector3(0.1, 0.2, 0.5)
    OLIVE = Vector3(0.8, 0.8, 0.0)
    BROWN = Vector3(0.4, 0.2, 0.1)
    GRAY = Vector3(0.5, 0.5, 0.5)

    @staticmethod
    def matte(color: Vector3) -> Lambertian:
        """Create a matte material with the given color."""
        return Lambertian(color)
