"""
bracket.py

Coordinate arithmetic for the 64-entrant, 6-round single-elimination bracket.

Every matchup is addressed by (round, matchup_index) and stored under the
composite key "{round}-{matchup_index}". No tree is materialized: the two
entrants contesting a round 2+ matchup are always recomputed from the winners
picked in its two parent matchups, and round 1 comes from the seeding table.

Matchup index i in round r is fed by indices 2i and 2i+1 in round r-1.
Rounds 1-4 stay inside one of the four regions; rounds 5 and 6 cross regions.
"""

from dataclasses import dataclass

from constants import (
    REGIONS, FIRST_ROUND_PAIRINGS, NUM_ROUNDS, MATCHUPS_PER_REGION, TOTAL_PICKS
)


class InvalidMatchupError(ValueError):
    """Raised for coordinates or matchup keys that cannot exist in the bracket."""
    pass


@dataclass(frozen=True)
class Entrant:
    """
    A competitor as seen by the bracket logic.

    Any object exposing ``id``, ``seed`` and ``region`` can be passed where an
    entrant is expected; the database ``Artist`` model works as-is.
    """
    id: str
    name: str
    seed: int
    region: str


# ---------------------------
# Coordinates and keys
# ---------------------------
def _check_round(round_num):
    if isinstance(round_num, bool) or not isinstance(round_num, int) or not 1 <= round_num <= NUM_ROUNDS:
        raise InvalidMatchupError(f"Round must be an integer between 1 and {NUM_ROUNDS}, got {round_num!r}")


def _check_coordinate(round_num, matchup_index):
    _check_round(round_num)
    count = matchups_in_round(round_num)
    if isinstance(matchup_index, bool) or not isinstance(matchup_index, int) or not 0 <= matchup_index < count:
        raise InvalidMatchupError(
            f"Matchup index for round {round_num} must be between 0 and {count - 1}, got {matchup_index!r}"
        )


def matchups_in_round(round_num):
    """
    Number of matchups in a round: 32, 16, 8, 4, 2, 1 for rounds 1-6.

    Raises:
        InvalidMatchupError: If round_num is not in 1..6.
    """
    _check_round(round_num)
    return 2 ** (NUM_ROUNDS - round_num)


def matchup_key(round_num, matchup_index):
    """Serialize a coordinate, e.g. (1, 0) -> "1-0"."""
    _check_coordinate(round_num, matchup_index)
    return f"{round_num}-{matchup_index}"


def parse_matchup_key(key):
    """
    Parse a composite key back into (round, matchup_index).

    Raises:
        InvalidMatchupError: If the key is malformed or names a coordinate
        outside the bracket.
    """
    if not isinstance(key, str):
        raise InvalidMatchupError(f"Matchup key must be a string, got {key!r}")
    parts = key.split('-')
    if len(parts) != 2 or not all(p.isdecimal() for p in parts):
        raise InvalidMatchupError(f"Malformed matchup key: {key!r}")
    round_num, matchup_index = int(parts[0]), int(parts[1])
    _check_coordinate(round_num, matchup_index)
    return round_num, matchup_index


def all_keys_for_round(round_num):
    """All matchup keys for a round, in index order."""
    return [matchup_key(round_num, i) for i in range(matchups_in_round(round_num))]


def all_matchup_keys():
    """All 63 matchup keys, round by round."""
    keys = []
    for round_num in range(1, NUM_ROUNDS + 1):
        keys.extend(all_keys_for_round(round_num))
    return keys


# ---------------------------
# Regions
# ---------------------------
def region_for_first_round_matchup(matchup_index):
    """
    Region owning a round 1 matchup. Indices come in contiguous blocks of 8
    per region, in REGIONS order.
    """
    _check_coordinate(1, matchup_index)
    return REGIONS[matchup_index // MATCHUPS_PER_REGION]


def region_for_matchup(round_num, matchup_index):
    """
    Region for a matchup at any round, or None for the cross-region
    Final Four and Championship (rounds 5 and 6).
    """
    _check_coordinate(round_num, matchup_index)
    if round_num >= 5:
        return None
    # Trace back to any round 1 ancestor; only its region matters.
    idx = matchup_index
    for _ in range(round_num, 1, -1):
        idx = idx * 2
    return region_for_first_round_matchup(idx)


# ---------------------------
# Tree navigation
# ---------------------------
def get_parent_matchup_keys(round_num, matchup_index):
    """
    The two matchups in the previous round that feed this one.

    Returns:
        (key_a, key_b) for (round-1, 2i) and (round-1, 2i+1), or None for round 1.
    """
    _check_coordinate(round_num, matchup_index)
    if round_num <= 1:
        return None
    return (
        matchup_key(round_num - 1, matchup_index * 2),
        matchup_key(round_num - 1, matchup_index * 2 + 1),
    )


def get_child_matchup_key(round_num, matchup_index):
    """The matchup the winner advances to, or None after the Championship."""
    _check_coordinate(round_num, matchup_index)
    if round_num >= NUM_ROUNDS:
        return None
    return matchup_key(round_num + 1, matchup_index // 2)


def get_position_in_child(matchup_index):
    """Even indices feed slot "A" of the next matchup, odd indices slot "B"."""
    return "A" if matchup_index % 2 == 0 else "B"


# ---------------------------
# Entrant resolution
# ---------------------------
def _find_by_id(entrants, entrant_id):
    return next((e for e in entrants if e.id == entrant_id), None)


def _find_by_seed(entrants, region, seed):
    return next((e for e in entrants if e.region == region and e.seed == seed), None)


def get_first_round_entrants(entrants, region, region_matchup_index):
    """
    Resolve the two seeded entrants of a round 1 slot within a region.

    Args:
        entrants: The entrant catalog.
        region: One of REGIONS.
        region_matchup_index: 0-7, an index into FIRST_ROUND_PAIRINGS.

    Returns:
        (entrant_a, entrant_b); either side is None when the catalog has no
        entrant for that (region, seed).
    """
    if not 0 <= region_matchup_index < MATCHUPS_PER_REGION:
        raise InvalidMatchupError(f"Region matchup index must be between 0 and 7, got {region_matchup_index!r}")
    seed_a, seed_b = FIRST_ROUND_PAIRINGS[region_matchup_index]
    return _find_by_seed(entrants, region, seed_a), _find_by_seed(entrants, region, seed_b)


def get_region_first_round_matchups(entrants, region):
    """
    All 8 round 1 matchups of a region.

    Returns:
        A list of dicts with "key", "entrant_a" and "entrant_b".
    """
    region_index = REGIONS.index(region)
    matchups = []
    for i in range(MATCHUPS_PER_REGION):
        entrant_a, entrant_b = get_first_round_entrants(entrants, region, i)
        matchups.append({
            "key": matchup_key(1, region_index * MATCHUPS_PER_REGION + i),
            "entrant_a": entrant_a,
            "entrant_b": entrant_b,
        })
    return matchups


def get_matchup_entrants(round_num, matchup_index, picks, entrants):
    """
    The pair of entrants contesting a matchup given the current picks.

    Round 1 comes from the seeding table. For later rounds each side is the
    catalog entrant matching the winner picked in the corresponding parent
    matchup, or None when that parent is undecided or its winner id is unknown.
    """
    _check_coordinate(round_num, matchup_index)
    if round_num == 1:
        region = region_for_first_round_matchup(matchup_index)
        return get_first_round_entrants(entrants, region, matchup_index % MATCHUPS_PER_REGION)

    parent_key_a, parent_key_b = get_parent_matchup_keys(round_num, matchup_index)
    pick_a = picks.get(parent_key_a)
    pick_b = picks.get(parent_key_b)
    entrant_a = _find_by_id(entrants, pick_a.get("winnerId")) if pick_a else None
    entrant_b = _find_by_id(entrants, pick_b.get("winnerId")) if pick_b else None
    return entrant_a, entrant_b


# ---------------------------
# Pick set summaries
# ---------------------------
def count_picks(picks):
    return len(picks)


def is_bracket_complete(picks):
    """True once all 63 matchups have a pick."""
    return count_picks(picks) == TOTAL_PICKS


def get_region_pick_count(picks, region_index):
    """Picks made inside one region across rounds 1-4 (at most 8 + 4 + 2 + 1 = 15)."""
    count = 0
    for round_num in range(1, 5):
        per_region = matchups_in_round(round_num) // len(REGIONS)
        for i in range(per_region):
            if matchup_key(round_num, region_index * per_region + i) in picks:
                count += 1
    return count


def get_region_winner(picks, entrants, region_index):
    """The entrant picked to win a region's Elite 8 matchup, or None."""
    pick = picks.get(matchup_key(4, region_index))
    if not pick:
        return None
    return _find_by_id(entrants, pick.get("winnerId"))
