import pytest

from nexusdfs.models import Lineup, contest_from_entry
from nexusdfs.pool import (
    SelectionCriteria,
    player_exposure,
    score_lineups,
    select_lineups,
    team_stack_exposure,
)
from nexusdfs.pool.scoring import _scoring_workers

from tests.factories import balanced_four_stack, chalky_two_stack, contrarian_no_stack, nexus_four_stack, player


CONTEST = contest_from_entry("LCK Milly Maker", entry_fee=20, field_size=5000)
POSITIONS = ("TOP", "JNG", "MID", "ADC", "SUP", "TEAM")


def _pool_lineup(tag: str, projection: float, *, core: bool = False, stack_team: str | None = None) -> Lineup:
    """Six players on distinct teams unless ``stack_team`` takes the first four."""

    slots = []
    for index, position in enumerate(POSITIONS):
        player_id = "core" if core and index == 0 else f"{tag}-{index}"
        team = stack_team if stack_team and index < 4 else f"{tag}{index}"
        slots.append(player(player_id, position, team, projection))
    return Lineup(lineup_id=tag, captain=slots[2], players=slots[:2] + slots[3:])


def _scored(lineups):
    return score_lineups(lineups, CONTEST, workers=1)


def test_score_lineups_collapses_duplicates():
    reordered = balanced_four_stack()
    reordered = Lineup(captain=reordered.captain, players=list(reversed(reordered.players)))

    candidates = _scored([balanced_four_stack(), chalky_two_stack(), reordered])

    assert [candidate.lineup.lineup_id for candidate in candidates] == ["balanced", "chalky"]
    assert [candidate.count for candidate in candidates] == [2, 1]
    assert candidates[0].nexus_score == 65.0
    assert candidates[0].projection == 420.0


def test_captain_is_part_of_signature():
    base = balanced_four_stack()
    swapped = Lineup(captain=base.players[0], players=[base.captain, *base.players[1:]])
    assert base.signature() != swapped.signature()
    assert len(_scored([base, swapped])) == 2


def test_select_filters_by_stack_and_team():
    candidates = _scored([balanced_four_stack(), chalky_two_stack(), contrarian_no_stack()])

    stacked = select_lineups(candidates, SelectionCriteria(min_stack_size=4))
    assert [item.candidate.lineup.lineup_id for item in stacked.lineups] == ["balanced"]

    no_hle = select_lineups(candidates, SelectionCriteria(exclude_team_codes=("HLE",)))
    assert [item.candidate.lineup.lineup_id for item in no_hle.lineups] == ["balanced"]

    with_player = select_lineups(candidates, SelectionCriteria(include_player_ids=("x-mid",)))
    assert [item.candidate.lineup.lineup_id for item in with_player.lineups] == ["contrarian"]


def test_select_rejects_stacks_over_team_limit():
    five_stack = _pool_lineup("five", 70.0, stack_team="T1")
    five_stack = Lineup(
        lineup_id="five",
        captain=five_stack.captain,
        players=[*five_stack.players[:-1], player("five-t1", "TEAM", "T1", 70.0)],
    )
    candidates = _scored([five_stack, balanced_four_stack()])

    result = select_lineups(candidates, SelectionCriteria())
    assert [item.candidate.lineup.lineup_id for item in result.lineups] == ["balanced"]

    relaxed = select_lineups(candidates, SelectionCriteria(max_from_one_team=None))
    assert len(relaxed.lineups) == 2


def test_select_sorts_and_ranks():
    candidates = _scored([chalky_two_stack(), balanced_four_stack(), contrarian_no_stack()])

    by_roi = select_lineups(candidates, SelectionCriteria())
    assert [item.candidate.lineup.lineup_id for item in by_roi.lineups] == ["balanced", "contrarian", "chalky"]
    assert [item.rank for item in by_roi.lineups] == [1, 2, 3]

    worst_first = select_lineups(candidates, SelectionCriteria(sort_by="strength", sort_direction="asc", limit=1))
    assert [item.candidate.lineup.lineup_id for item in worst_first.lineups] == ["chalky"]


def test_select_thresholds():
    candidates = _scored([chalky_two_stack(), balanced_four_stack(), contrarian_no_stack()])
    chalky_strength = next(c.strength for c in candidates if c.lineup.lineup_id == "chalky")

    result = select_lineups(candidates, SelectionCriteria(min_strength=chalky_strength + 1))
    assert {item.candidate.lineup.lineup_id for item in result.lineups} == {"balanced", "contrarian"}

    result = select_lineups(candidates, SelectionCriteria(min_projection=400.0))
    assert {item.candidate.lineup.lineup_id for item in result.lineups} == {"balanced", "contrarian"}


def test_global_exposure_cap_skips_overused_player():
    with_core = [_pool_lineup(f"a{i}", 75.0 - i, core=True) for i in range(4)]
    without_core = [_pool_lineup(f"b{i}", 60.0 - i) for i in range(4)]
    candidates = _scored(with_core + without_core)

    result = select_lineups(
        candidates,
        SelectionCriteria(max_player_exposure=0.5, limit=4, sort_by="projection"),
    )

    assert [item.candidate.lineup.lineup_id for item in result.lineups] == ["a0", "a1", "b0", "b1"]
    selected = [item.candidate.lineup for item in result.lineups]
    assert player_exposure(selected)["core"] == pytest.approx(0.5)


def test_player_specific_exposure_cap():
    with_core = [_pool_lineup(f"a{i}", 75.0 - i, core=True) for i in range(4)]
    without_core = [_pool_lineup(f"b{i}", 60.0 - i) for i in range(4)]
    candidates = _scored(with_core + without_core)

    result = select_lineups(
        candidates,
        SelectionCriteria(player_exposure_caps=(("core", 0.25),), limit=4, sort_by="projection"),
    )

    assert [item.candidate.lineup.lineup_id for item in result.lineups] == ["a0", "b0", "b1", "b2"]


def test_team_stack_cap():
    stacked = [_pool_lineup(f"s{i}", 75.0 - i, stack_team="T1") for i in range(4)]
    spread = [_pool_lineup(f"u{i}", 60.0 - i) for i in range(4)]
    candidates = _scored(stacked + spread)

    result = select_lineups(
        candidates,
        SelectionCriteria(team_stack_caps=(("T1", 0.5),), limit=4, sort_by="projection"),
    )

    selected = [item.candidate.lineup for item in result.lineups]
    assert [lineup.lineup_id for lineup in selected] == ["s0", "s1", "u0", "u1"]
    assert team_stack_exposure(selected) == {"T1": 0.5}


def test_selection_summaries():
    candidates = _scored([chalky_two_stack(), balanced_four_stack(), balanced_four_stack()])
    result = select_lineups(candidates, SelectionCriteria(min_stack_size=4))

    assert result.summary.available_lineups == 1
    assert result.summary.selected_lineups == 1
    assert result.summary.total_instances == 2
    assert result.summary.roi_std == 0.0
    assert result.pool_summary.available_lineups == 2
    assert result.pool_summary.total_instances == 3


def test_empty_selection_summary():
    result = select_lineups([], SelectionCriteria())
    assert result.lineups == []
    assert result.summary.roi_mean is None
    assert result.summary.nexus_mean is None


def test_exposure_reports():
    lineups = [balanced_four_stack(), chalky_two_stack(), nexus_four_stack()]
    exposure = player_exposure(lineups)
    assert exposure["t1-mid"] == pytest.approx(1 / 3)
    assert team_stack_exposure(lineups) == {"T1": pytest.approx(2 / 3)}
    assert team_stack_exposure(lineups, min_size=2) == {
        "T1": pytest.approx(2 / 3),
        "GEN": pytest.approx(1 / 3),
        "DK": pytest.approx(1 / 3),
        "HLE": pytest.approx(1 / 3),
    }
    assert player_exposure([]) == {}


def test_scoring_workers_env(monkeypatch):
    monkeypatch.delenv("NEXUSDFS_SCORING_WORKERS", raising=False)
    assert _scoring_workers() == 1
    monkeypatch.setenv("NEXUSDFS_SCORING_WORKERS", "3")
    assert _scoring_workers() == 3
    monkeypatch.setenv("NEXUSDFS_SCORING_WORKERS", "0")
    assert _scoring_workers() == 1
    monkeypatch.setenv("NEXUSDFS_SCORING_WORKERS", "many")
    assert _scoring_workers() == 1


def test_parallel_scoring_matches_serial():
    lineups = [_pool_lineup(f"p{i}", 50.0 + i) for i in range(60)]

    serial = score_lineups(lineups, CONTEST, workers=1)
    parallel = score_lineups(lineups, CONTEST, workers=2)

    assert parallel == serial
