import pytest

from bracket import (
    InvalidMatchupError, matchups_in_round, matchup_key, parse_matchup_key,
    all_keys_for_round, all_matchup_keys, region_for_first_round_matchup, region_for_matchup,
    get_parent_matchup_keys, get_child_matchup_key, get_position_in_child,
    get_first_round_entrants, get_region_first_round_matchups, get_matchup_entrants,
    count_picks, is_bracket_complete, get_region_pick_count, get_region_winner,
)
from constants import REGIONS


def by_id(catalog, entrant_id):
    return next(e for e in catalog if e.id == entrant_id)


class TestCoordinates:

    def test_round_sizes(self):
        assert [matchups_in_round(r) for r in range(1, 7)] == [32, 16, 8, 4, 2, 1]
        assert sum(matchups_in_round(r) for r in range(1, 7)) == 63

    @pytest.mark.parametrize("round_num", [0, 7, -1, "1", 1.0, True, None])
    def test_invalid_round_fails_fast(self, round_num):
        with pytest.raises(InvalidMatchupError):
            matchups_in_round(round_num)

    def test_key_format(self):
        assert matchup_key(1, 0) == "1-0"
        assert matchup_key(5, 1) == "5-1"
        assert matchup_key(6, 0) == "6-0"
        assert parse_matchup_key("4-3") == (4, 3)
        assert parse_matchup_key("1-31") == (1, 31)

    @pytest.mark.parametrize("key", ["", "1", "1_0", "a-b", "1-0-0", "-1-0", "7-0", "0-0", "2-16", "6-1", " 1-0", None, 10])
    def test_malformed_keys_raise(self, key):
        with pytest.raises(InvalidMatchupError):
            parse_matchup_key(key)

    def test_index_out_of_range_raises(self):
        with pytest.raises(InvalidMatchupError):
            matchup_key(1, 32)
        with pytest.raises(InvalidMatchupError):
            get_parent_matchup_keys(3, 8)
        with pytest.raises(InvalidMatchupError):
            get_child_matchup_key(2, -1)

    def test_all_matchup_keys(self):
        keys = all_matchup_keys()
        assert len(keys) == 63
        assert len(set(keys)) == 63
        assert keys[0] == "1-0"
        assert keys[31] == "1-31"
        assert keys[-1] == "6-0"
        assert all_keys_for_round(5) == ["5-0", "5-1"]


class TestTreeNavigation:

    def test_parents(self):
        assert get_parent_matchup_keys(1, 5) is None
        assert get_parent_matchup_keys(2, 3) == ("1-6", "1-7")
        assert get_parent_matchup_keys(6, 0) == ("5-0", "5-1")

    def test_children(self):
        assert get_child_matchup_key(1, 5) == "2-2"
        assert get_child_matchup_key(5, 1) == "6-0"
        assert get_child_matchup_key(6, 0) is None

    def test_parent_child_duality(self):
        for round_num in range(2, 7):
            for index in range(matchups_in_round(round_num)):
                for parent in get_parent_matchup_keys(round_num, index):
                    assert get_child_matchup_key(*parse_matchup_key(parent)) == matchup_key(round_num, index)

    def test_position_in_child(self):
        assert get_position_in_child(0) == "A"
        assert get_position_in_child(7) == "B"


class TestRegions:

    def test_first_round_partition(self):
        regions = [region_for_first_round_matchup(i) for i in range(32)]
        for block, region in enumerate(REGIONS):
            assert regions[block * 8:(block + 1) * 8] == [region] * 8
        assert set(regions) == set(REGIONS)

    def test_later_rounds(self):
        assert region_for_matchup(2, 4) == "bandleaders"
        assert region_for_matchup(3, 1) == "vocalists"
        assert region_for_matchup(3, 7) == "soloists"
        assert [region_for_matchup(4, i) for i in range(4)] == REGIONS

    def test_cross_region_rounds(self):
        assert region_for_matchup(5, 0) is None
        assert region_for_matchup(5, 1) is None
        assert region_for_matchup(6, 0) is None

    def test_first_round_lookup_rejects_later_indices(self):
        with pytest.raises(InvalidMatchupError):
            region_for_first_round_matchup(32)


class TestEntrants:

    def test_first_round_seeding(self, catalog):
        top, bottom = get_first_round_entrants(catalog, "vocalists", 0)
        assert (top.seed, bottom.seed) == (1, 16)
        top, bottom = get_first_round_entrants(catalog, "soloists", 7)
        assert (top.region, top.seed, bottom.seed) == ("soloists", 2, 15)

    def test_incomplete_catalog_yields_none(self, catalog):
        partial = [e for e in catalog if not (e.region == "composers" and e.seed == 12)]
        assert get_first_round_entrants(partial, "composers", 2)[1] is None
        assert get_first_round_entrants(partial, "composers", 2)[0].seed == 5

    def test_region_first_round_matchups(self, catalog):
        matchups = get_region_first_round_matchups(catalog, "bandleaders")
        assert [m["key"] for m in matchups] == [f"1-{i}" for i in range(8, 16)]
        assert (matchups[1]["entrant_a"].seed, matchups[1]["entrant_b"].seed) == (8, 9)

    def test_round_one_uses_seeding_table(self, catalog):
        entrant_a, entrant_b = get_matchup_entrants(1, 9, {}, catalog)
        assert (entrant_a.region, entrant_a.seed, entrant_b.seed) == ("bandleaders", 8, 9)

    def test_later_round_materializes_from_parent_picks(self, catalog):
        picks = {"1-0": {"winnerId": "vocalists-16"}}
        entrant_a, entrant_b = get_matchup_entrants(2, 0, picks, catalog)
        assert entrant_a == by_id(catalog, "vocalists-16")
        assert entrant_b is None

        picks["1-1"] = {"winnerId": "vocalists-9"}
        assert get_matchup_entrants(2, 0, picks, catalog) == (
            by_id(catalog, "vocalists-16"), by_id(catalog, "vocalists-9")
        )

    def test_unknown_winner_id_resolves_to_none(self, catalog):
        picks = {"4-0": {"winnerId": "nobody"}, "4-1": {"winnerId": "bandleaders-1"}}
        assert get_matchup_entrants(5, 0, picks, catalog) == (None, by_id(catalog, "bandleaders-1"))

    def test_every_side_matches_its_parent(self, catalog, upset_picks):
        for round_num in range(2, 7):
            for index in range(matchups_in_round(round_num)):
                parent_a, parent_b = get_parent_matchup_keys(round_num, index)
                entrant_a, entrant_b = get_matchup_entrants(round_num, index, upset_picks, catalog)
                assert entrant_a.id == upset_picks[parent_a]["winnerId"]
                assert entrant_b.id == upset_picks[parent_b]["winnerId"]


class TestPickSummaries:

    def test_complete_bracket(self, chalk_picks):
        assert count_picks(chalk_picks) == 63
        assert is_bracket_complete(chalk_picks)
        del chalk_picks["6-0"]
        assert not is_bracket_complete(chalk_picks)

    def test_region_pick_count(self, chalk_picks):
        assert all(get_region_pick_count(chalk_picks, i) == 15 for i in range(4))
        assert get_region_pick_count({"1-8": {"winnerId": "x"}, "2-4": {"winnerId": "x"}}, 1) == 2
        assert get_region_pick_count({"1-8": {"winnerId": "x"}}, 0) == 0

    def test_region_winner(self, catalog, chalk_picks):
        assert get_region_winner(chalk_picks, catalog, 2) == by_id(catalog, "composers-1")
        assert get_region_winner({}, catalog, 2) is None
