# renderer/image_writer.py
import os
import numpy as np
from PIL import Image


def _check_pixels(pixels: np.ndarray) -> np.ndarray:
    pixels = np.asarray(pixels)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"expected a (height, width, 3) pixel buffer, got shape {pixels.shape}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"expected uint8 pixels, got {pixels.dtype}")
    return pixels


def _check_directory(path: str):
    directory = os.path.dirname(os.path.abspath(path))
    if not os.path.isdir(directory):
        raise FileNotFoundError(f"Output directory not found: {directory}")


def save_image(pixels: np.ndarray, path: str) -> str:
    """
    Save a rendered pixel buffer with Pillow. The format follows the file
    extension (.png, .ppm for binary PPM, .jpg, ...). For plain-text PPM use
    write_ppm_ascii.

    Args:
        pixels: uint8 array of shape (height, width, 3), top row first.
        path: Destination file.

    Returns:
        The path written.

    Raises:
        FileNotFoundError: If the destination directory doesn't exist.
        ValueError: If the buffer shape is wrong or the format is unknown.
    """
    pixels = _check_pixels(pixels)
    _check_directory(path)
    try:
        Image.fromarray(pixels).save(path)
    except (KeyError, ValueError) as e:
        raise ValueError(f"Error saving image {path}: {e}") from e
    return path


def write_ppm_ascii(pixels: np.ndarray, path: str) -> str:
    """
    Write the pixel buffer as a plain-text (P3) PPM file.
    """
    pixels = _check_pixels(pixels)
    _check_directory(path)
    height, width, _ = pixels.shape
    with open(path, "w") as f:
        f.write(f"P3\n{width} {height}\n255\n")
        for row in pixels:
            f.write("\n".join(f"{r} {g} {b}" for r, g, b in row))
            f.write("\n")
    return path
