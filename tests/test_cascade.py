import pytest

from bracket import InvalidMatchupError
from cascade import cascade_picks, apply_pick, clear_pick, set_commentary


def pick(winner_id, commentary=None):
    return {"winnerId": winner_id, "commentary": commentary}


class TestCascadePicks:

    def test_clears_downstream_chain(self):
        picks = {"1-0": pick("A"), "2-0": pick("A"), "3-0": pick("A")}
        updated, cleared = cascade_picks(picks, 1, 0, "A")
        assert cleared == ["2-0", "3-0"]
        assert updated == {"1-0": pick("A")}

    def test_clears_all_the_way_to_championship(self, chalk_picks):
        champion = chalk_picks["6-0"]["winnerId"]
        assert champion == "vocalists-1"
        updated, cleared = cascade_picks(chalk_picks, 1, 0, champion)
        assert cleared == ["2-0", "3-0", "4-0", "5-0", "6-0"]
        assert len(updated) == 63 - 5

    def test_walk_continues_past_gaps(self):
        picks = {"1-2": pick("A"), "3-0": pick("A"), "5-0": pick("A")}
        updated, cleared = cascade_picks(picks, 1, 2, "A")
        assert cleared == ["3-0", "5-0"]
        assert updated == {"1-2": pick("A")}

    def test_leaves_other_winners_and_unrelated_matchups(self):
        picks = {
            "1-0": pick("A"),
            "2-0": pick("B"),
            "3-0": pick("A"),
            "2-1": pick("A"),
            "1-4": pick("C"),
        }
        updated, cleared = cascade_picks(picks, 1, 0, "A")
        assert cleared == ["3-0"]
        assert updated["2-0"] == pick("B")
        assert updated["2-1"] == pick("A")
        assert updated["1-4"] == pick("C")

    def test_no_previous_winner_is_a_noop(self):
        picks = {"1-0": pick("A"), "2-0": pick("A")}
        updated, cleared = cascade_picks(picks, 1, 0, None)
        assert updated == picks
        assert updated is not picks
        assert cleared == []

    def test_input_is_not_mutated(self):
        picks = {"1-0": pick("A"), "2-0": pick("A")}
        snapshot = dict(picks)
        cascade_picks(picks, 1, 0, "A")
        assert picks == snapshot

    def test_championship_change_has_nothing_downstream(self):
        picks = {"6-0": pick("A")}
        updated, cleared = cascade_picks(picks, 6, 0, "A")
        assert cleared == []
        assert updated == picks

    def test_odd_index_walks_same_chain(self):
        picks = {"2-0": pick("A"), "3-0": pick("A"), "2-1": pick("A")}
        _, cleared = cascade_picks(picks, 1, 1, "A")
        assert cleared == ["2-0", "3-0"]

    @pytest.mark.parametrize("round_num, index", [(0, 0), (7, 0), (1, 32), (5, 2), (-1, 0)])
    def test_invalid_coordinate_raises(self, round_num, index):
        picks = {"1-0": pick("A"), "2-0": pick("A"), "6-0": pick("A")}
        with pytest.raises(InvalidMatchupError):
            cascade_picks(picks, round_num, index, "A")
        with pytest.raises(InvalidMatchupError):
            cascade_picks(picks, round_num, index, None)


class TestApplyPick:

    def test_first_pick(self):
        updated, cleared = apply_pick({}, "1-0", "A")
        assert updated == {"1-0": pick("A")}
        assert cleared == []

    def test_same_winner_is_a_noop(self):
        picks = {"1-0": pick("A", "swing"), "2-0": pick("A")}
        updated, cleared = apply_pick(picks, "1-0", "A")
        assert updated == picks
        assert cleared == []

    def test_changing_winner_cascades_and_keeps_commentary(self):
        picks = {"1-0": pick("A", "the voice"), "2-0": pick("A"), "3-0": pick("A"), "1-1": pick("D")}
        updated, cleared = apply_pick(picks, "1-0", "B")
        assert cleared == ["2-0", "3-0"]
        assert updated == {"1-0": pick("B", "the voice"), "1-1": pick("D")}
        assert picks["1-0"] == pick("A", "the voice")

    def test_rejects_bad_keys(self):
        with pytest.raises(InvalidMatchupError):
            apply_pick({}, "7-0", "A")


class TestClearPick:

    def test_removes_pick_and_dependents(self):
        picks = {"2-1": pick("A"), "3-0": pick("A"), "4-0": pick("A"), "1-3": pick("A")}
        updated, cleared = clear_pick(picks, "2-1")
        assert cleared == ["2-1", "3-0", "4-0"]
        assert updated == {"1-3": pick("A")}

    def test_undecided_matchup(self):
        picks = {"1-0": pick("A")}
        updated, cleared = clear_pick(picks, "1-1")
        assert updated == picks
        assert cleared == []


class TestSetCommentary:

    def test_existing_pick(self):
        picks = {"5-1": pick("A")}
        updated = set_commentary(picks, "5-1", "modal mastery")
        assert updated["5-1"] == pick("A", "modal mastery")
        assert picks["5-1"]["commentary"] is None

    def test_undecided_matchup_is_left_alone(self):
        assert set_commentary({}, "5-1", "too early") == {}
