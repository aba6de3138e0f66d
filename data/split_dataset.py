"""
Dataset Splitting Script
Splits positive and negative image directories into train/test list files.
Ensures no image appears in both sets.
"""

import random
from pathlib import Path
from typing import List, Tuple, Dict
import pandas as pd

IMAGE_EXTENSIONS = ['*.bmp', '*.png', '*.jpg', '*.jpeg', '*.tif', '*.tiff']


def get_images(image_dir: str) -> List[str]:
    """
    Collect all images of a directory (non-recursive), sorted by path.

    Args:
        image_dir: Directory containing images of one class

    Returns:
        List of image paths
    """
    image_dir = Path(image_dir)
    if not image_dir.is_dir():
        raise ValueError(f"Not a directory: {image_dir}")

    images = []
    for ext in IMAGE_EXTENSIONS:
        images.extend(image_dir.glob(ext))
        images.extend(image_dir.glob(ext.upper()))

    return sorted({str(p) for p in images})


def split_images(images: List[str], test_ratio: float = 0.25,
                 random_seed: int = 42) -> Tuple[List[str], List[str]]:
    """
    Split one class of images into train and test sets.

    With at least two images, both sets get at least one image.

    Returns:
        Tuple of (train_images, test_images)
    """
    assert 0.0 <= test_ratio < 1.0, "Test ratio must be in [0, 1)"

    shuffled = list(images)
    random.Random(random_seed).shuffle(shuffled)

    total = len(shuffled)
    n_test = round(total * test_ratio)
    if total >= 2 and test_ratio > 0:
        n_test = min(max(n_test, 1), total - 1)

    return shuffled[n_test:], shuffled[:n_test]


def split_dataset(positive_dir: str, negative_dir: str, test_ratio: float = 0.25,
                  random_seed: int = 42) -> Dict[str, List[str]]:
    """
    Split positive and negative images into train/test sets.

    Returns:
        Dictionary with keys train_pos, train_neg, test_pos, test_neg
    """
    positive = get_images(positive_dir)
    negative = get_images(negative_dir)

    if not positive or not negative:
        raise ValueError(f"No images found in {positive_dir} or {negative_dir}")

    train_pos, test_pos = split_images(positive, test_ratio, random_seed)
    train_neg, test_neg = split_images(negative, test_ratio, random_seed)

    splits = {
        'train_pos': train_pos,
        'train_neg': train_neg,
        'test_pos': test_pos,
        'test_neg': test_neg
    }

    summary = pd.DataFrame([
        {'class': 'positive', 'train': len(train_pos), 'test': len(test_pos)},
        {'class': 'negative', 'train': len(train_neg), 'test': len(test_neg)}
    ])
    print(summary.to_string(index=False))

    return splits


def save_image_lists(splits: Dict[str, List[str]], output_dir: str) -> Dict[str, Path]:
    """
    Write one list file (one image path per line) per split.

    Returns:
        Dictionary mapping split name to the written file
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = {}
    for split_name, image_paths in splits.items():
        output_path = output_dir / f"{split_name}.txt"
        with open(output_path, 'w') as f:
            for image_path in image_paths:
                f.write(f"{image_path}\n")
        written[split_name] = output_path
        print(f"[OK] Saved {len(image_paths)} paths to {output_path}")

    return written


def main(argv=None):
    """Main function for dataset splitting."""
    import argparse

    parser = argparse.ArgumentParser(description='Split image directories into train/test list files')
    parser.add_argument('--positive-dir', type=str, required=True,
                        help='Directory containing positive images')
    parser.add_argument('--negative-dir', type=str, required=True,
                        help='Directory containing negative images')
    parser.add_argument('--output-dir', type=str, default='data',
                        help='Directory to save list files (default: data)')
    parser.add_argument('--test-ratio', type=float, default=0.25,
                        help='Test set ratio (default: 0.25)')
    parser.add_argument('--seed', type=int, default=42,
                        help='Random seed (default: 42)')

    args = parser.parse_args(argv)

    print("=" * 60)
    print("Dataset Splitting Tool")
    print("=" * 60)

    try:
        splits = split_dataset(args.positive_dir, args.negative_dir,
                               test_ratio=args.test_ratio, random_seed=args.seed)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    save_image_lists(splits, args.output_dir)

    print("\n" + "=" * 60)
    print("Dataset splitting completed!")
    print("=" * 60)

    return 0


if __name__ == '__main__':
    exit(main())
