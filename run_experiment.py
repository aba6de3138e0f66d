"""
Main experiment script - can be run from project root.

Usage:
    python run_experiment.py --analyze --train data/train_pos.txt data/train_neg.txt
    python run_experiment.py --evaluate --threshold 0.37 --subsample
    python run_experiment.py --predict --image img.bmp
"""

import sys

from bayes_color.cli import main


if __name__ == '__main__':
    sys.exit(main())
