# camera/camera.py
import math
from pathtracer.core.vector import DegenerateVectorError, Vector3
from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_disk


class CameraConfiguration:
    """
    Immutable description of a thin-lens camera.

    Args:
        look_from: Eye position.
        look_at: Point the camera aims at.
        up: World up vector, used to roll the camera. Defaults to +y.
        vertical_fov: Vertical field of view in degrees.
        aspect: Image width divided by height.
        aperture: Lens diameter; 0 disables defocus blur.
        focus_dist: Distance to the plane in perfect focus.
        shutter_opened_time: Start of the exposure window.
        shutter_closed_time: End of the exposure window.
    """
    def __init__(self, look_from: Vector3, look_at: Vector3, up: Vector3 = None,
                 vertical_fov: float = 90.0, aspect: float = 2.0, aperture: float = 0.0,
                 focus_dist: float = 1.0, shutter_opened_time: float = 0.0,
                 shutter_closed_time: float = 0.0):
        if not 0 < vertical_fov < 180:
            raise ValueError(f"vertical_fov must be in (0, 180) degrees, got {vertical_fov}")
        if not aspect > 0:
            raise ValueError(f"aspect must be positive, got {aspect}")
        if aperture < 0:
            raise ValueError(f"aperture must not be negative, got {aperture}")
        if not focus_dist > 0:
            raise ValueError(f"focus_dist must be positive, got {focus_dist}")
        if shutter_opened_time > shutter_closed_time:
            raise ValueError(
                f"shutter opens after it closes: {shutter_opened_time} > {shutter_closed_time}")
        self.look_from = look_from
        self.look_at = look_at
        self.up = up if up is not None else Vector3(0, 1, 0)
        self.vertical_fov = vertical_fov
        self.aspect = aspect
        self.aperture = aperture
        self.focus_dist = focus_dist
        self.shutter_opened_time = shutter_opened_time
        self.shutter_closed_time = shutter_closed_time


class Camera:
    def __init__(self, configuration: CameraConfiguration):
        self.configuration = configuration
        theta = math.radians(configuration.vertical_fov)
        half_height = math.tan(theta / 2)
        half_width = configuration.aspect * half_height

        # Orthonormal basis: w points backwards, u right, v up.
        try:
            self.w = (configuration.look_from - configuration.look_at).normalize()
            self.u = configuration.up.cross(self.w).normalize()
        except DegenerateVectorError as e:
            raise ValueError(
                "camera basis is degenerate: look_from equals look_at "
                "or up is parallel to the view direction") from e
        self.v = self.w.cross(self.u)

        focus_dist = configuration.focus_dist
        self.origin = configuration.look_from
        self.lower_left_corner = (self.origin -
                                  (self.u * half_width + self.v * half_height + self.w) * focus_dist)
        self.horizontal = self.u * (2.0 * half_width * focus_dist)
        self.vertical = self.v * (2.0 * half_height * focus_dist)
        self.lens_radius = configuration.aperture / 2.0
        self.shutter_opened_time = configuration.shutter_opened_time
        self.shutter_closed_time = configuration.shutter_closed_time

    def get_ray(self, s: float, t: float, rng) -> Ray:
        """
        Generates the ray through viewport coordinates (s, t) in [0, 1]^2,
        with (0, 0) at the lower left. Jitters the origin over the lens and
        samples a time in the shutter window when those are enabled.
        """
        if self.lens_radius > 0:
            rd = random_in_unit_disk(rng) * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vector3(0, 0, 0)

        if self.shutter_closed_time > self.shutter_opened_time:
            time = rng.uniform(self.shutter_opened_time, self.shutter_closed_time)
        else:
            time = self.shutter_opened_time

        origin = self.origin + offset
        direction = (self.lower_left_corner +
                     self.horizontal * s +
                     self.vertical * t -
                     origin)
        return Ray(origin, direction, time)
