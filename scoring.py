"""
scoring.py

This module scores participant brackets against the official (master) bracket.

  1. score_submission(): escalating points per round (1, 2, 4, 8, 16, 32), counting only
     rounds up to the reveal cutoff. The maximum possible score (192) does not depend on
     the cutoff.
  2. score_and_rank_submissions(): scores many submissions and assigns standard
     competition ranks (totals 50, 50, 40 rank 1, 1, 3).
  3. build_leaderboard(): loads a tournament's master bracket and submissions from the
     database and ranks them.

Scoring is a pure function of its inputs; nothing here is persisted.
"""

from dataclasses import dataclass, field

from bracket import parse_matchup_key
from config import logger
from constants import NUM_ROUNDS, POINTS_PER_ROUND, GAMES_PER_ROUND
from db import Submission, get_master_bracket


@dataclass
class ScoreResult:
    total: int = 0
    by_round: dict = field(default_factory=dict)
    max_possible: int = 0
    max_possible_by_round: dict = field(default_factory=dict)

    def to_dict(self):
        return {
            "total": self.total,
            "by_round": dict(self.by_round),
            "max_possible": self.max_possible,
            "max_possible_by_round": dict(self.max_possible_by_round),
        }


@dataclass
class RankedSubmission:
    id: str
    display_name: str
    access_token: str
    score: ScoreResult
    rank: int = 0

    def to_dict(self):
        return {
            "id": self.id,
            "display_name": self.display_name,
            "access_token": self.access_token,
            "score": self.score.to_dict(),
            "rank": self.rank,
        }


# ---------------------------
# Step 1: Single Submission
# ---------------------------
def score_submission(participant_picks, official_picks, revealed_through):
    """
    Scores one pick set against the official picks.

    For every revealed round, each official pick in that round earns the round's point
    value when the participant picked the same winner at the same matchup key. Rounds
    above revealed_through score 0.

    Args:
        participant_picks (dict): matchup key -> {"winnerId": ...}
        official_picks (dict): matchup key -> {"winnerId": ...}
        revealed_through (int): Highest revealed round, 0-6.

    Returns:
        ScoreResult
    """
    official_by_round = {r: [] for r in range(1, NUM_ROUNDS + 1)}
    for key, official in official_picks.items():
        round_num, _ = parse_matchup_key(key)
        official_by_round[round_num].append((key, official))

    result = ScoreResult()
    for round_num in range(1, NUM_ROUNDS + 1):
        points = POINTS_PER_ROUND[round_num]
        result.max_possible_by_round[round_num] = points * GAMES_PER_ROUND[round_num]
        result.max_possible += result.max_possible_by_round[round_num]

        if round_num > revealed_through:
            result.by_round[round_num] = 0
            continue

        round_score = 0
        for key, official in official_by_round[round_num]:
            winner_id = official.get("winnerId") if official else None
            if not winner_id:
                continue
            pick = participant_picks.get(key)
            if pick and pick.get("winnerId") == winner_id:
                round_score += points
        result.by_round[round_num] = round_score
        result.total += round_score
    return result


# ---------------------------
# Step 2: Ranking
# ---------------------------
def score_and_rank_submissions(submissions, official_picks, revealed_through):
    """
    Scores every submission and orders them by total, highest first.

    Ties share a rank and the next lower total takes its 1-based position, so totals
    [50, 50, 40] rank [1, 1, 3]. Entries with equal totals keep their input order.

    Args:
        submissions (list of dict): Each with "id", "display_name", "access_token" and "picks".
        official_picks (dict): The master bracket's pick set.
        revealed_through (int): Highest revealed round.

    Returns:
        list of RankedSubmission
    """
    scored = [
        RankedSubmission(
            id=sub["id"],
            display_name=sub["display_name"],
            access_token=sub["access_token"],
            score=score_submission(sub.get("picks") or {}, official_picks, revealed_through),
        )
        for sub in submissions
    ]
    scored.sort(key=lambda entry: entry.score.total, reverse=True)

    current_rank = 1
    for index, entry in enumerate(scored):
        if index > 0 and entry.score.total < scored[index - 1].score.total:
            current_rank = index + 1
        entry.rank = current_rank
    return scored


# ---------------------------
# Step 3: Leaderboard
# ---------------------------
def build_leaderboard(session, tournament):
    """
    Ranks all submissions of a tournament against its master bracket.

    A tournament without a master bracket scores everyone against an empty
    official pick set with nothing revealed.

    Returns:
        (ranked entries, revealed_through)
    """
    master = get_master_bracket(session, tournament.id)
    official_picks = master.picks if master else {}
    revealed_through = master.revealed_through if master else 0
    submissions = (session.query(Submission)
                   .filter_by(tournament_id=tournament.id)
                   .order_by(Submission.created_at)
                   .all())
    ranked = score_and_rank_submissions(
        [s.to_dict() for s in submissions], official_picks, revealed_through
    )
    logger.info(f"Scored {len(ranked)} submissions for '{tournament.name}' through round {revealed_through}")
    return ranked, revealed_through
