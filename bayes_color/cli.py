"""
Command line interface.

Variants:
    --evaluate  train on the training lists, report precision/recall on the test lists
    --analyze   leave-one-out scores of the training lists, print a threshold/rate table
    --predict   train on the training lists, print the probability of one image

Usage:
    python run_experiment.py --evaluate --train p1.txt n1.txt --test p2.txt n2.txt --threshold 0.34
    python run_experiment.py --analyze --train p.txt n.txt --output rates.csv --plot rates.png
    python run_experiment.py --predict --image img.bmp --method r --q 32
"""

import argparse
import sys
from pathlib import Path

from .bayes_classifier import BayesClassifier, METHOD_RGB, METHODS
from .evaluator import Evaluator
from .image_loader import load_image
from .metrics import threshold_table, suggest_threshold

DEFAULT_TRAIN_POSITIVE = 'data/train_pos.txt'
DEFAULT_TRAIN_NEGATIVE = 'data/train_neg.txt'
DEFAULT_TEST_POSITIVE = 'data/test_pos.txt'
DEFAULT_TEST_NEGATIVE = 'data/test_neg.txt'
DEFAULT_QUANTIZATION = 16

TABLE_HEADER = ['threshold', 'FP/(TN+FP)', 'TP/(TP+FN)']


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser exiting with status 1 on invalid arguments."""

    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = ArgumentParser(
        description='Binary image classification using a Bayes classifier over pixel colors',
        epilog='Example: %(prog)s --evaluate --train p1.txt n1.txt --test p2.txt n2.txt --threshold 0.34'
    )

    variant = parser.add_mutually_exclusive_group(required=True)
    variant.add_argument('--evaluate', dest='variant', action='store_const', const='evaluate',
                         help='Evaluate the classifier on the test dataset')
    variant.add_argument('--analyze', dest='variant', action='store_const', const='analyze',
                         help='Show table of rates for leave-one-out training samples')
    variant.add_argument('--predict', dest='variant', action='store_const', const='predict',
                         help='Predict probability for a single image')

    parser.add_argument('--train', nargs=2, metavar=('POS', 'NEG'),
                        default=[DEFAULT_TRAIN_POSITIVE, DEFAULT_TRAIN_NEGATIVE],
                        help='Positive and negative training list files')
    parser.add_argument('--test', nargs=2, metavar=('POS', 'NEG'),
                        default=[DEFAULT_TEST_POSITIVE, DEFAULT_TEST_NEGATIVE],
                        help='Positive and negative test list files')
    parser.add_argument('--image', type=str, default=None, help='Image to classify (--predict)')
    parser.add_argument('--threshold', type=float, default=None,
                        help='Positive threshold value (--evaluate)')
    parser.add_argument('--q', dest='quantization', type=int, default=DEFAULT_QUANTIZATION,
                        help='Quantization, i.e. histogram bucket width (default: 16)')
    parser.add_argument('--method', type=str.lower, choices=METHODS, default=METHOD_RGB,
                        help='Use only the R channel or all RGB channels (default: rgb)')
    parser.add_argument('--subsample', action='store_true',
                        help='Subsample images to decrease execution time')
    parser.add_argument('--model', type=str, default=None,
                        help='Load a saved classifier instead of training')
    parser.add_argument('--save-model', type=str, default=None,
                        help='Save the trained classifier to this file')
    parser.add_argument('--output', type=str, default=None,
                        help='Save the threshold table as CSV (--analyze)')
    parser.add_argument('--plot', type=str, default=None,
                        help='Save a threshold curve (--analyze) or confusion matrix (--evaluate)')
    parser.add_argument('--no-progress', action='store_true', help='Hide progress bars')

    return parser


def get_classifier(args) -> BayesClassifier:
    """Load the classifier given by --model, or train one on the --train lists."""
    show_progress = not args.no_progress

    if args.model:
        if not Path(args.model).exists():
            raise FileNotFoundError(f"Classifier not found: {args.model}")
        classifier = BayesClassifier()
        classifier.load(args.model)
        return classifier

    classifier = BayesClassifier(args.quantization, args.method, args.subsample)
    try:
        classifier.train_from_files(args.train[0], args.train[1], show_progress=show_progress)
    except OSError as e:
        raise OSError(f"Failed to open training text file ({e})") from e

    if args.save_model:
        classifier.save(args.save_model)
        print(f"[OK] Saved classifier to {args.save_model}", file=sys.stderr)

    return classifier


def run_analyze(args) -> int:
    evaluator = Evaluator(show_progress=not args.no_progress)

    # Reject a bad configuration before loading any image
    BayesClassifier(args.quantization, args.method, args.subsample)

    training = evaluator.compute_threshold(args.train[0], args.train[1],
                                           args.quantization, args.method, args.subsample)
    if not training:
        print("Error: Failed to load positive or negative training samples.", file=sys.stderr)
        return 1

    table = threshold_table(training)
    table.to_csv(sys.stdout, sep='\t', index=False, header=TABLE_HEADER,
                 float_format='%g', na_rep='nan')

    suggested = suggest_threshold(table)
    print(f"Suggested threshold: {suggested:g}", file=sys.stderr)

    if args.output:
        table.to_csv(args.output, index=False)
        print(f"[OK] Saved threshold table to {args.output}", file=sys.stderr)

    if args.plot:
        from .visualization import plot_threshold_curve
        plot_threshold_curve(table, args.plot, suggested=suggested)

    return 0


def run_evaluate(args) -> int:
    if args.threshold is None or args.threshold < 0:
        print("Error: Use --threshold to define positive threshold value.", file=sys.stderr)
        return 1

    print("=" * 60, file=sys.stderr)
    print("Bayes Classifier Evaluation", file=sys.stderr)
    print("=" * 60, file=sys.stderr)

    classifier = get_classifier(args)
    evaluator = Evaluator(show_progress=not args.no_progress)

    precision, recall, counts = evaluator.evaluate(classifier, args.test[0], args.test[1],
                                                   args.threshold, return_counts=True)

    print(f"Trained on {classifier.get_training_size()} images, tested on "
          f"{counts.positives} positive and {counts.negatives} negative images", file=sys.stderr)
    print(f"TP {counts.tp}  TN {counts.tn}  FP {counts.fp}  FN {counts.fn}", file=sys.stderr)
    print(f"Precision {precision * 100.0:.2f} %")
    print(f"Recall {recall * 100.0:.2f} %")

    if args.plot:
        from .visualization import plot_confusion_matrix
        plot_confusion_matrix(counts, args.plot)

    return 0


def run_predict(args) -> int:
    if not args.image:
        print("Error: Input image not found (use parameter --image).", file=sys.stderr)
        return 1

    classifier = get_classifier(args)
    image = load_image(args.image)

    probability = classifier.predict(image)
    print(f"Posterior probability of sample: {probability * 100:.2f} %")

    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    runners = {
        'evaluate': run_evaluate,
        'analyze': run_analyze,
        'predict': run_predict
    }

    try:
        return runners[args.variant](args)
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
