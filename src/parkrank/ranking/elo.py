"""Elo rating calculation."""

import math

# Chess-standard K-factor
DEFAULT_K_FACTOR = 32.0


def expected_score(rating_a: float, rating_b: float) -> float:
    """Calculate expected score for A against B.

    Args:
        rating_a: Current Elo rating of A
        rating_b: Current Elo rating of B

    Returns:
        Expected score for A (0.0 to 1.0)
    """
    return 1.0 / (1.0 + math.pow(10.0, (rating_b - rating_a) / 400.0))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up."""
    return math.floor(value + 0.5)


def update_ratings(
    winner_rating: float,
    loser_rating: float,
    k_factor: float = DEFAULT_K_FACTOR,
) -> tuple[int, int]:
    """Calculate new ratings after the winner beat the loser.

    Each rating is rounded independently, so the winner's gain and the
    loser's loss can differ by one point. Ratings are not clamped.

    Args:
        winner_rating: Current rating of the winner
        loser_rating: Current rating of the loser
        k_factor: Maximum rating swing per comparison

    Returns:
        Tuple of (new_winner_rating, new_loser_rating)
    """
    if k_factor <= 0:
        msg = f"k_factor must be positive, got {k_factor}"
        raise ValueError(msg)

    expected_winner = expected_score(winner_rating, loser_rating)
    expected_loser = 1.0 - expected_winner

    new_winner = round_half_up(winner_rating + k_factor * (1.0 - expected_winner))
    new_loser = round_half_up(loser_rating + k_factor * (0.0 - expected_loser))
    return new_winner, new_loser
