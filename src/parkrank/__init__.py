"""Pairwise park voting with Elo ratings and a derived leaderboard."""
