"""
Evaluation Module
Precision/recall at a fixed threshold and leave-one-out threshold calibration.
"""

import sys
import numpy as np
from typing import List, Tuple, Union
from tqdm import tqdm

from .bayes_classifier import BayesClassifier, METHOD_RGB
from .image_loader import ColorImage, load_dataset
from .metrics import TrainingSample, ConfusionCounts, count_outcomes, precision_recall

ImageList = List[Union[ColorImage, np.ndarray]]


class Evaluator:
    """
    Evaluation of the Bayes classifier.

    Holds no dataset state: every call receives its images or list files.
    """

    def __init__(self, show_progress: bool = True):
        self.show_progress = show_progress

    def score_images(self, classifier: BayesClassifier, images: ImageList,
                     desc: str = "Scoring") -> np.ndarray:
        """Predict the positive-class probability of every image."""
        return np.array([
            classifier.predict(image)
            for image in tqdm(images, desc=desc, disable=not self.show_progress)
        ], dtype=np.float64)

    def confusion(self, classifier: BayesClassifier, positive: ImageList,
                  negative: ImageList, threshold: float) -> ConfusionCounts:
        """
        Count TP, TN, FP and FN for test images at a threshold.

        Positive images scoring above the threshold are TP (otherwise FN);
        negative images scoring at or below it are TN (otherwise FP).
        """
        positive_scores = self.score_images(classifier, positive, desc="Scoring positive")
        negative_scores = self.score_images(classifier, negative, desc="Scoring negative")

        probabilities = np.concatenate([positive_scores, negative_scores])
        labels = [True] * len(positive_scores) + [False] * len(negative_scores)

        return count_outcomes(probabilities, labels, threshold)

    def evaluate_images(self, classifier: BayesClassifier, positive: ImageList,
                        negative: ImageList, threshold: float) -> Tuple[float, float]:
        """
        Evaluate a trained classifier on decoded test images.

        Returns:
            Tuple of (precision, recall), where precision = TP / (TP + FN)
            and recall = TP / (TP + FP)
        """
        counts = self.confusion(classifier, positive, negative, threshold)
        return precision_recall(counts)

    def evaluate(self, classifier: BayesClassifier, positive_path: str, negative_path: str,
                 threshold: float, return_counts: bool = False):
        """
        Evaluate a trained classifier on the test dataset list files.

        Unreadable images are skipped with a warning.

        Args:
            return_counts: If True, also return the confusion counts

        Returns:
            Tuple of (precision, recall), or (precision, recall, counts)
            when return_counts is set

        Raises:
            OSError: If a list file cannot be opened
        """
        positive, negative = load_dataset(positive_path, negative_path,
                                          show_progress=self.show_progress)
        counts = self.confusion(classifier, positive, negative, threshold)
        precision, recall = precision_recall(counts)

        if return_counts:
            return precision, recall, counts
        return precision, recall

    def compute_threshold_images(self, positive: ImageList, negative: ImageList,
                                 quantization: int = 16, method: str = METHOD_RGB,
                                 subsampling: bool = False) -> List[TrainingSample]:
        """
        Leave-one-out scores for every training sample.

        Each sample is scored by a fresh classifier trained on all the other
        samples, so no sample is scored by a model that has seen it.

        Returns:
            Positive samples followed by negative samples, in input order
        """
        # Folds concatenate list slices; stacked arrays become lists of images
        positive, negative = list(positive), list(negative)
        samples = []
        folds = [(i, True) for i in range(len(positive))] + [(i, False) for i in range(len(negative))]

        for i, is_positive in tqdm(folds, desc="Leave-one-out", disable=not self.show_progress):
            if is_positive:
                held_out = positive[i]
                train_positive = positive[:i] + positive[i + 1:]
                train_negative = negative
            else:
                held_out = negative[i]
                train_positive = positive
                train_negative = negative[:i] + negative[i + 1:]

            classifier = BayesClassifier(quantization, method, subsampling)
            classifier.train(train_positive, train_negative)
            samples.append(TrainingSample(classifier.predict(held_out), is_positive))

        return samples

    def compute_threshold(self, positive_path: str, negative_path: str,
                          quantization: int = 16, method: str = METHOD_RGB,
                          subsampling: bool = False) -> List[TrainingSample]:
        """
        Leave-one-out scores for the samples of the training list files.

        Returns:
            Scored samples, or an empty list if a list file cannot be opened
        """
        try:
            positive, negative = load_dataset(positive_path, negative_path,
                                              show_progress=self.show_progress)
        except OSError:
            print(f"Error: Failed to open file {positive_path} or {negative_path}.", file=sys.stderr)
            return []

        return self.compute_threshold_images(list(positive), list(negative),
                                             quantization, method, subsampling)
