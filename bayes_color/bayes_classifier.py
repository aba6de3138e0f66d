"""
Bayes Classifier Module
Binary image classification from class-conditional color histograms.

Every visited pixel is classified independently with Bayes' rule and the
image score is the average posterior probability of the positive class.
"""

import numpy as np
from typing import Tuple, List, Union
import pickle

from .histogram import NDHistogram, NORM_SUM, histogram_from_array
from .image_loader import ColorImage, as_image, load_dataset

METHOD_R = 'r'
METHOD_RGB = 'rgb'
METHODS = (METHOD_R, METHOD_RGB)

# Added to a non-positive evidence term to avoid division by zero
EVIDENCE_EPSILON = 1e-5


def validate_quantization(quantization: int) -> int:
    """Check that quantization is a power of 2 in [1, 256]."""
    q = int(quantization)
    if q != quantization or q <= 0 or q > 256 or (q & (q - 1)) != 0:
        raise ValueError("Quantization value must be power of 2 and lower than 256.")
    return q


def validate_method(method: str) -> str:
    """Normalize a color space method name ('r' or 'rgb', any case)."""
    m = str(method).lower()
    if m not in METHODS:
        raise ValueError(f"Unknown method '{method}', expected one of {METHODS}")
    return m


class BayesClassifier:
    """
    Bayes classifier over pixel colors.

    The model holds a positive and a negative histogram of quantized
    colors (red channel only for 'r', full RGB for 'rgb') and the prior
    P(positive) = n_positive / (n_positive + n_negative).

    A classifier is trained exactly once; it can then be used for any
    number of predictions.
    """

    def __init__(self, quantization: int = 16, method: str = METHOD_RGB,
                 subsampling: bool = False):
        """
        Initialize classifier.

        Args:
            quantization: Bucket width for each color channel (power of 2, at most 256)
            method: 'r' to use the red channel only, 'rgb' to use all channels
            subsampling: If True, visit only every 2nd row and column of pixels
        """
        self.quantization = validate_quantization(quantization)
        self.method = validate_method(method)
        self.subsampling = bool(subsampling)
        self.subsample = 2 if self.subsampling else 1

        # Number of histogram cells per channel
        self.num_bins = 256 // self.quantization
        dim = 1 if self.method == METHOD_R else 3

        self.positive_hist = NDHistogram(self.num_bins, dim)
        self.negative_hist = NDHistogram(self.num_bins, dim)

        self.prior = None
        self.positive_samples = 0
        self.negative_samples = 0
        self.training_size = 0
        self._trained = False

    @property
    def is_trained(self) -> bool:
        return self._trained

    def _quantized_coords(self, image: ColorImage) -> Tuple[np.ndarray, ...]:
        """Quantized color coordinates of every visited pixel (one array per histogram axis)."""
        pixels = image.pixels[::self.subsample, ::self.subsample]
        quantized = pixels.reshape(-1, 3).astype(np.intp) // self.quantization

        if self.method == METHOD_R:
            return (quantized[:, 0],)
        return (quantized[:, 0], quantized[:, 1], quantized[:, 2])

    def _add_sample(self, image: ColorImage, positive: bool = True):
        """Add pixels of one image to the class histogram."""
        if positive:
            self.positive_hist.accumulate(self._quantized_coords(image))
            self.positive_samples += 1
        else:
            self.negative_hist.accumulate(self._quantized_coords(image))
            self.negative_samples += 1

    def train(self, positive: List[Union[ColorImage, np.ndarray]],
              negative: List[Union[ColorImage, np.ndarray]]):
        """
        Train the classifier from decoded images.

        Args:
            positive: Images of the positive class
            negative: Images of the negative class

        Raises:
            RuntimeError: If the classifier was already trained
            ValueError: If both image lists are empty
        """
        if self._trained:
            raise RuntimeError("Classifier is already trained; create a new one to retrain")

        if len(positive) + len(negative) == 0:
            raise ValueError("Cannot train on an empty dataset (no positive or negative images)")

        for image in positive:
            self._add_sample(as_image(image), positive=True)

        for image in negative:
            self._add_sample(as_image(image), positive=False)

        # Prior probability P(w) = n_w / n
        self.prior = self.positive_samples / (self.positive_samples + self.negative_samples)
        self.training_size = len(positive) + len(negative)

        self.positive_hist.normalize(NORM_SUM)
        self.negative_hist.normalize(NORM_SUM)

        self._trained = True

    def train_from_files(self, positive_list: str, negative_list: str,
                         show_progress: bool = True):
        """
        Train the classifier from dataset list files.

        Images that cannot be read are skipped with a warning.

        Args:
            positive_list: Text file with one positive image path per line
            negative_list: Text file with one negative image path per line
            show_progress: Show progress bars while loading

        Raises:
            OSError: If a list file cannot be opened
        """
        positive, negative = load_dataset(positive_list, negative_list, show_progress=show_progress)
        self.train(positive, negative)

    def posterior_map(self, image: Union[ColorImage, np.ndarray]) -> np.ndarray:
        """
        Compute P(w|x) for every visited pixel.

        Returns:
            Posterior probabilities (H', W') of the visited pixel grid
        """
        if not self._trained:
            raise RuntimeError("Classifier must be trained before prediction")

        image = as_image(image)
        coords = self._quantized_coords(image)

        # P(x|w) and P(x|-w)
        positive = self.positive_hist.lookup(coords)
        negative = self.negative_hist.lookup(coords)

        # Evidence P(x) = P(x|w)P(w) + P(x|-w)P(-w)
        evidence = self.prior * positive + (1 - self.prior) * negative
        evidence = np.where(evidence > 0, evidence, evidence + EVIDENCE_EPSILON)

        posterior = (positive * self.prior) / evidence

        rows = -(-image.height() // self.subsample)
        cols = -(-image.width() // self.subsample)
        return posterior.reshape(rows, cols)

    def predict(self, image: Union[ColorImage, np.ndarray]) -> float:
        """
        Compute the probability that an image belongs to the positive class.

        Args:
            image: Decoded image or (H, W, 3) RGB array

        Returns:
            Average posterior probability over the visited pixels
        """
        image = as_image(image)
        width, height = image.width(), image.height()

        if width == 0 or height == 0:
            raise ValueError("Cannot predict an empty image")

        posterior = self.posterior_map(image)

        # Average over the (fractional) number of visited pixels
        return float(posterior.sum() / ((width / self.subsample) * (height / self.subsample)))

    def get_training_size(self) -> int:
        """Number of images used for training."""
        return self.training_size

    def save(self, filepath: str):
        """Save the trained classifier to a file."""
        if not self._trained:
            raise RuntimeError("Only a trained classifier can be saved")

        with open(filepath, 'wb') as f:
            pickle.dump({
                'quantization': self.quantization,
                'method': self.method,
                'subsampling': self.subsampling,
                'prior': self.prior,
                'positive_hist': self.positive_hist.data,
                'negative_hist': self.negative_hist.data,
                'positive_samples': self.positive_samples,
                'negative_samples': self.negative_samples,
                'training_size': self.training_size
            }, f)

    def load(self, filepath: str):
        """Load a trained classifier from a file."""
        with open(filepath, 'rb') as f:
            data = pickle.load(f)

        quantization = validate_quantization(data['quantization'])
        method = validate_method(data['method'])
        num_bins = 256 // quantization
        dim = 1 if method == METHOD_R else 3

        positive_hist = histogram_from_array(data['positive_hist'])
        negative_hist = histogram_from_array(data['negative_hist'])
        for histogram in (positive_hist, negative_hist):
            if histogram.dim != dim or histogram.size != num_bins:
                raise ValueError(f"Histogram of shape {histogram.shape} does not match "
                                 f"method '{method}' with quantization {quantization} in {filepath}")

        self.quantization = quantization
        self.method = method
        self.subsampling = bool(data['subsampling'])
        self.subsample = 2 if self.subsampling else 1
        self.num_bins = num_bins
        self.prior = data['prior']
        self.positive_hist = positive_hist
        self.negative_hist = negative_hist
        self.positive_samples = data['positive_samples']
        self.negative_samples = data['negative_samples']
        self.training_size = data['training_size']
        self._trained = True

    def __repr__(self) -> str:
        state = 'trained' if self._trained else 'untrained'
        return (f"BayesClassifier(quantization={self.quantization}, method='{self.method}', "
                f"subsampling={self.subsampling}, {state})")
