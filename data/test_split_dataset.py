"""Tests for the dataset splitting script."""

from pathlib import Path

import cv2
import numpy as np
import pytest

from split_dataset import get_images, split_images, split_dataset, save_image_lists, main


def make_images(directory: Path, count: int, ext: str = 'png'):
    directory.mkdir(parents=True, exist_ok=True)
    for i in range(count):
        cv2.imwrite(str(directory / f"img{i}.{ext}"), np.full((4, 4, 3), i * 10, dtype=np.uint8))
    return directory


def test_get_images_finds_supported_formats(tmp_path):
    make_images(tmp_path / 'pos', 2, 'png')
    make_images(tmp_path / 'pos', 1, 'bmp')
    (tmp_path / 'pos' / 'notes.txt').write_text('not an image')

    images = get_images(str(tmp_path / 'pos'))

    assert len(images) == 3
    assert all(not p.endswith('.txt') for p in images)


def test_get_images_rejects_missing_directory(tmp_path):
    with pytest.raises(ValueError):
        get_images(str(tmp_path / 'missing'))


def test_split_images_keeps_sets_disjoint():
    images = [f"img{i}.png" for i in range(8)]

    train, test = split_images(images, test_ratio=0.25, random_seed=1)

    assert len(train) == 6
    assert len(test) == 2
    assert set(train).isdisjoint(test)
    assert sorted(train + test) == sorted(images)


def test_split_images_is_reproducible():
    images = [f"img{i}.png" for i in range(10)]

    assert split_images(images, 0.3, 7) == split_images(images, 0.3, 7)


def test_small_classes_keep_one_image_per_set():
    train, test = split_images(["a.png", "b.png"], test_ratio=0.1)

    assert len(train) == 1
    assert len(test) == 1


def test_split_dataset_writes_list_files(tmp_path):
    make_images(tmp_path / 'pos', 4)
    make_images(tmp_path / 'neg', 4)

    splits = split_dataset(str(tmp_path / 'pos'), str(tmp_path / 'neg'), test_ratio=0.25)
    written = save_image_lists(splits, str(tmp_path / 'lists'))

    assert set(written) == {'train_pos', 'train_neg', 'test_pos', 'test_neg'}
    train_pos = written['train_pos'].read_text().splitlines()
    test_neg = written['test_neg'].read_text().splitlines()
    assert len(train_pos) == 3
    assert len(test_neg) == 1
    assert all(Path(p).exists() for p in train_pos + test_neg)


def test_main_fails_on_empty_directory(tmp_path):
    make_images(tmp_path / 'pos', 2)
    (tmp_path / 'neg').mkdir()

    code = main(['--positive-dir', str(tmp_path / 'pos'), '--negative-dir', str(tmp_path / 'neg'),
                 '--output-dir', str(tmp_path / 'lists')])

    assert code == 1
    assert not (tmp_path / 'lists').exists()
