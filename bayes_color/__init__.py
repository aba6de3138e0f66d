"""
Color Bayes - Binary Image Classification
Class-conditional color histograms combined per pixel with Bayes' rule.
"""

from .histogram import NDHistogram, NORM_SUM, NORM_MAX
from .image_loader import ColorImage, load_image, load_images, load_dataset, read_image_list
from .bayes_classifier import BayesClassifier, METHOD_R, METHOD_RGB
from .evaluator import Evaluator
from .metrics import TrainingSample, ConfusionCounts, threshold_table, suggest_threshold

__all__ = [
    'NDHistogram',
    'NORM_SUM',
    'NORM_MAX',
    'ColorImage',
    'load_image',
    'load_images',
    'load_dataset',
    'read_image_list',
    'BayesClassifier',
    'METHOD_R',
    'METHOD_RGB',
    'Evaluator',
    'TrainingSample',
    'ConfusionCounts',
    'threshold_table',
    'suggest_threshold'
]
