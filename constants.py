"""
constants.py

Shared constants for the Tournament of Jazz bracket application.

This module defines:
  - The four regions and their display labels.
  - The sequential order and names of tournament rounds.
  - The seed pairings for first round matchups.
  - The escalating point value and number of games for each round.
"""

# Regions in fixed bracket order. Round 1 matchups 0-7 belong to the first
# region, 8-15 to the second, and so on.
REGIONS = ["vocalists", "bandleaders", "composers", "soloists"]

REGION_LABELS = {
    "vocalists": "The Vocalists",
    "bandleaders": "The Band Leaders",
    "composers": "The Composers",
    "soloists": "The Soloists",
}

REGION_SUBTITLES = {
    "vocalists": "The Storytellers",
    "bandleaders": "The Architects",
    "composers": "The Authors",
    "soloists": "The Virtuosos",
}

NUM_ROUNDS = 6

# Define the tournament rounds in their sequential order.
ROUND_NAMES = {
    1: "Round of 64",
    2: "Round of 32",
    3: "Sweet 16",
    4: "Elite 8",
    5: "Final Four",
    6: "Championship",
}
ROUND_ORDER = [ROUND_NAMES[r] for r in range(1, NUM_ROUNDS + 1)]

# Define the pairings for the first round matchups within a region.
# Index = region matchup index (0-7), value = (seed A, seed B).
FIRST_ROUND_PAIRINGS = [
    (1, 16),
    (8, 9),
    (5, 12),
    (4, 13),
    (6, 11),
    (3, 14),
    (7, 10),
    (2, 15)
]

SEEDS_PER_REGION = 16
MATCHUPS_PER_REGION = len(FIRST_ROUND_PAIRINGS)

# Points per correct pick double every round.
POINTS_PER_ROUND = {
    1: 1,
    2: 2,
    3: 4,
    4: 8,
    5: 16,
    6: 32
}

GAMES_PER_ROUND = {
    1: 32,
    2: 16,
    3: 8,
    4: 4,
    5: 2,
    6: 1
}

# 32 points available in every round.
MAX_POSSIBLE_SCORE = sum(POINTS_PER_ROUND[r] * GAMES_PER_ROUND[r] for r in range(1, NUM_ROUNDS + 1))

TOTAL_PICKS = sum(GAMES_PER_ROUND.values())

TOURNAMENT_STATUSES = ["setup", "open", "closed", "revealing", "complete"]
