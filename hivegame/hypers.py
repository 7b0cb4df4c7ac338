"""Hyperparameters for training the game-playing model."""

# 11 pieces per side, plus 4 levels of beetle stacking per side.
INPUT_ENCODED_DIMS = 2 * 11 + (2 * 4)
OUTPUT_LENGTH = 11 * 22 * 7

# Stop a training batch early once the KL divergence gets this high.
CUTOFF_KL = 0.05

# Number of games run in parallel when training or testing.
PARALLEL_GAMES = 8

GAMES_PER_AI_SIMULATION = 250

# Approximate number of frames to gather per training batch.
TARGET_FRAMES_PER_BATCH = 36_000

# Games are cancelled after this many turns.
MAX_TURNS_PER_GAME = 2000

# Only the last frames of each game are kept for training.
MAX_FRAMES_PER_GAME = 60

TRAIN_ITERS_PER_BATCH = 50

BATCH_SIZE = 512

PI_LOSS_RATIO = 1.0
ENTROPY_LOSS_RATIO = 0.0002
MIN_ENTROPY_LOSS_RATIO = 0.0002
MAX_ENTROPY_LOSS_RATIO = 0.0100

INITIAL_LEARNING_RATE = 2e-4
MIN_LEARNING_RATE = 1e-7

APPROXIMATE_TURN_MEMORY = 30
GAMMA = 1.0 - (1.0 / APPROXIMATE_TURN_MEMORY)
LAMBDA = 0.75

MAX_SEQ_LENGTH = 2 * 11

WIN_RATE_TO_FLIP_SIDES = 75.0
WIN_RATE_SMOOTHING_FACTOR = 0.667