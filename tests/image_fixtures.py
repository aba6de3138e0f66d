"""Synthetic color images and dataset list files for the tests."""

import cv2
import numpy as np

RED = (255, 0, 0)
BLUE = (0, 0, 255)
GREEN = (0, 255, 0)


def solid_image(color, width=8, height=8):
    """(H, W, 3) RGB array filled with one color."""
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[:, :] = color
    return pixels


def speckled_image(color, speck, width=8, height=8):
    """Solid image with a single pixel of another color in the top-left corner."""
    pixels = solid_image(color, width, height)
    pixels[0, 0] = speck
    return pixels


def write_image(path, pixels):
    cv2.imwrite(str(path), cv2.cvtColor(pixels, cv2.COLOR_RGB2BGR))
    return str(path)


def write_list(path, image_paths):
    with open(path, 'w') as f:
        for image_path in image_paths:
            f.write(f"{image_path}\n")
    return str(path)
