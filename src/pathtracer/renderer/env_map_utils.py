# renderer/env_map_utils.py
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3

WHITE = Vector3(1.0, 1.0, 1.0)
SKY_BLUE = Vector3(0.5, 0.7, 1.0)


def sky_color(ray: Ray) -> Vector3:
    """
    Background radiance for a ray that escapes the scene.

    Interpolates vertically between white at the horizon-facing bottom
    (unit y = -1) and sky blue at the zenith (unit y = 1).
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t
