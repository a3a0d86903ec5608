"""
cascade.py

Keeps a pick set consistent while it is being edited.

A pick set maps matchup keys ("round-index") to {"winnerId": ..., "commentary": ...}.
When the winner of a matchup changes, every later pick along the same path that
still names the old winner is stale and gets cleared. All functions here return
a new mapping and leave the caller's mapping untouched, so a bracket editor is a
loop of new_picks = apply_pick(picks, key, winner_id).
"""

from bracket import matchup_key, parse_matchup_key
from constants import NUM_ROUNDS


def cascade_picks(picks, changed_round, changed_matchup_index, previous_winner_id):
    """
    Clear downstream picks that depended on the previous winner of a matchup.

    Walks the child chain from (changed_round + 1, changed_matchup_index // 2)
    through the Championship and removes every pick whose winner equals
    previous_winner_id. The walk never stops early: the old winner may have
    been carried several rounds deep. The new decision itself is not written.

    Args:
        picks: Current pick set (not modified).
        changed_round: Round of the matchup whose winner changed.
        changed_matchup_index: Index of that matchup within its round.
        previous_winner_id: Winner id before the change, or None if the
            matchup was undecided.

    Returns:
        (updated_picks, cleared_keys)

    Raises:
        InvalidMatchupError: If the changed coordinate is outside the bracket.
    """
    matchup_key(changed_round, changed_matchup_index)  # raises on a bad coordinate
    updated_picks = dict(picks)
    cleared_keys = []
    if not previous_winner_id:
        return updated_picks, cleared_keys

    round_num = changed_round + 1
    index = changed_matchup_index // 2
    while round_num <= NUM_ROUNDS:
        key = matchup_key(round_num, index)
        pick = updated_picks.get(key)
        if pick and pick.get("winnerId") == previous_winner_id:
            del updated_picks[key]
            cleared_keys.append(key)
        round_num += 1
        index //= 2
    return updated_picks, cleared_keys


def apply_pick(picks, key, winner_id):
    """
    Record winner_id for a matchup, cascading away picks that relied on the old winner.

    Picking the winner a matchup already holds changes nothing. Existing
    commentary on the matchup is carried over to the new pick.

    Returns:
        (updated_picks, cleared_keys)
    """
    round_num, matchup_index = parse_matchup_key(key)
    existing = picks.get(key)
    if existing and existing.get("winnerId") == winner_id:
        return dict(picks), []

    previous_winner_id = existing.get("winnerId") if existing else None
    updated_picks, cleared_keys = cascade_picks(picks, round_num, matchup_index, previous_winner_id)
    updated_picks[key] = {
        "winnerId": winner_id,
        "commentary": existing.get("commentary") if existing else None,
    }
    return updated_picks, cleared_keys


def clear_pick(picks, key):
    """Remove the decision for a matchup along with everything that depended on it."""
    round_num, matchup_index = parse_matchup_key(key)
    existing = picks.get(key)
    if not existing:
        return dict(picks), []
    updated_picks, cleared_keys = cascade_picks(picks, round_num, matchup_index, existing.get("winnerId"))
    del updated_picks[key]
    return updated_picks, [key] + cleared_keys


def set_commentary(picks, key, text):
    """Attach commentary to an existing pick; undecided matchups are left alone."""
    parse_matchup_key(key)
    existing = picks.get(key)
    if not existing:
        return dict(picks)
    updated_picks = dict(picks)
    updated_picks[key] = {**existing, "commentary": text}
    return updated_picks
