"""
Image Loading Module
Handles image decoding, image-list files and dataset loading.
"""

import sys
import cv2
import numpy as np
from typing import List, Tuple, Union
from pathlib import Path
from tqdm import tqdm


class ColorImage:
    """
    Decoded RGB image.

    Pixels are stored as an (H, W, 3) uint8 array in RGB channel order.
    """

    def __init__(self, pixels: np.ndarray, path: str = None):
        pixels = np.asarray(pixels)
        if pixels.ndim == 2:
            pixels = np.stack([pixels] * 3, axis=-1)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) RGB array, got shape {pixels.shape}")

        self.pixels = np.clip(pixels, 0, 255).astype(np.uint8)
        self.path = path

    def width(self) -> int:
        return self.pixels.shape[1]

    def height(self) -> int:
        return self.pixels.shape[0]

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        """Return the (r, g, b) value of the pixel at column x, row y."""
        r, g, b = self.pixels[y, x]
        return int(r), int(g), int(b)

    def __repr__(self) -> str:
        return f"ColorImage({self.width()}x{self.height()}, path={self.path!r})"


def as_image(image: Union[ColorImage, np.ndarray]) -> ColorImage:
    """Wrap a raw RGB (or grayscale) array into a ColorImage."""
    if isinstance(image, ColorImage):
        return image
    return ColorImage(image)


def load_image(image_path: str) -> ColorImage:
    """
    Decode an image file.

    Args:
        image_path: Path to any image format OpenCV can read

    Returns:
        Decoded image

    Raises:
        ValueError: If the file is missing or cannot be decoded
    """
    frame = cv2.imread(str(image_path), cv2.IMREAD_COLOR)

    if frame is None:
        raise ValueError(f"Could not read image: {image_path}")

    # OpenCV decodes to BGR
    return ColorImage(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB), path=str(image_path))


def read_image_list(list_path: str) -> List[str]:
    """
    Read a dataset list file (one image path per line).

    Blank lines are ignored and surrounding whitespace is stripped.

    Raises:
        OSError: If the list file cannot be opened
    """
    with open(list_path, 'r') as f:
        return [line.strip() for line in f if line.strip()]


def load_images(list_path: str, show_progress: bool = True) -> List[ColorImage]:
    """
    Load every readable image listed in a dataset list file.

    Images that cannot be decoded are skipped with a warning.

    Raises:
        OSError: If the list file itself cannot be opened
    """
    image_paths = read_image_list(list_path)
    images = []

    for image_path in tqdm(image_paths, desc=f"Loading {Path(list_path).name}",
                           disable=not show_progress):
        try:
            images.append(load_image(image_path))
        except ValueError:
            print(f"Warning: Image {image_path} not found", file=sys.stderr)

    return images


def load_dataset(positive_list: str, negative_list: str,
                 show_progress: bool = True) -> Tuple[List[ColorImage], List[ColorImage]]:
    """
    Load positive and negative images from their list files.

    Both list files are opened before any image is decoded, so an
    unopenable list fails the whole load.

    Returns:
        Tuple of (positive_images, negative_images)
    """
    for list_path in (positive_list, negative_list):
        if not Path(list_path).is_file():
            raise FileNotFoundError(f"Could not open dataset list: {list_path}")

    positive = load_images(positive_list, show_progress=show_progress)
    negative = load_images(negative_list, show_progress=show_progress)

    return positive, negative
