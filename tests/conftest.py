"""Shared fixtures: synthetic color images and dataset list files."""

import pytest

from image_fixtures import RED, BLUE, solid_image, speckled_image, write_image, write_list


@pytest.fixture
def red_blue_images():
    """Two red positives and two blue negatives."""
    positive = [solid_image(RED), solid_image(RED)]
    negative = [solid_image(BLUE), solid_image(BLUE)]
    return positive, negative


@pytest.fixture
def speckled_images():
    """Red positives and blue negatives that each carry one red pixel."""
    positive = [solid_image(RED) for _ in range(3)]
    negative = [speckled_image(BLUE, RED) for _ in range(3)]
    return positive, negative


@pytest.fixture
def dataset_files(tmp_path):
    """
    Train and test list files over red (positive) and blue (negative) PNGs.

    Returns:
        Dictionary with train_pos, train_neg, test_pos, test_neg list paths
        and red_image, blue_image test image paths
    """
    images = {}
    for name, pixels in [('red', solid_image(RED)), ('blue', solid_image(BLUE)),
                         ('speckled', speckled_image(BLUE, RED))]:
        for i in range(4):
            images[f'{name}{i}'] = write_image(tmp_path / f'{name}{i}.png', pixels)

    return {
        'train_pos': write_list(tmp_path / 'train_pos.txt', [images['red0'], images['red1']]),
        'train_neg': write_list(tmp_path / 'train_neg.txt', [images['speckled0'], images['speckled1']]),
        'test_pos': write_list(tmp_path / 'test_pos.txt', [images['red2'], images['red3']]),
        'test_neg': write_list(tmp_path / 'test_neg.txt', [images['blue2'], images['blue3']]),
        'red_image': images['red2'],
        'blue_image': images['blue2'],
    }
