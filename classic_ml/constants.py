"""
Default dataset locations and hyperparameters shared by the experiments.
"""

from pathlib import Path

DATA_DIR = Path("data")

LOAN_RAW_CSV = DATA_DIR / "loan_data.csv"
LOAN_CLEAN_CSV = DATA_DIR / "clean_loan_data.csv"
TRAINING_CSV = DATA_DIR / "training.csv"
TEST_CSV = DATA_DIR / "test.csv"
ADVERTISING_CSV = DATA_DIR / "Advertising.csv"
IRIS_CSV = DATA_DIR / "iris.csv"

# FICO range observed in the loan dataset
SCORE_MIN = 640.0
SCORE_MAX = 830.0
# Interest rate (percent) at or below which a loan counts as approved
RATE_THRESHOLD = 12.0

TEST_SIZE = 0.2

LEARNING_RATE = 0.3
MAX_ITER = 100
THRESHOLD = 0.5

# Coefficients of p = 1 / (1 + exp(-13.65 * score + 4.89)) from an earlier run,
# kept as a reference point for the trained model.
BASELINE_WEIGHTS = (13.65, -4.89)

ADVERTISING_TARGET = "Sales"
ADVERTISING_FEATURE = "TV"

RANDOM_STATE = 44111342
CV_FOLDS = 5
FOREST_TREES = 10
FOREST_FEATURES = 2
HIST_BINS = 16
