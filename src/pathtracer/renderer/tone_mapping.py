# renderer/tone_mapping.py
import math
import numpy as np
from numba import njit


@njit
def gamma_correct_kernel(linear_image, output_image):
    """
    Gamma 2 encode a linear radiance image into 8-bit channels.
    """
    height, width, channels = linear_image.shape
    for y in range(height):
        for x in range(width):
            for c in range(channels):
                value = min(max(linear_image[y, x, c], 0.0), 1.0)
                output_image[y, x, c] = int(255.99 * math.sqrt(value))


def gamma_correct(linear_image: np.ndarray) -> np.ndarray:
    """
    Apply gamma 2 correction (component-wise square root) to a linear
    (height, width, 3) image and quantise it to uint8.
    """
    linear_image = np.ascontiguousarray(linear_image, dtype=np.float64)
    output = np.zeros(linear_image.shape, dtype=np.uint8)
    gamma_correct_kernel(linear_image, output)
    return output
