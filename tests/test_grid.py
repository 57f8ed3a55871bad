"""Tests for the grid state engine."""

from typing import List, Tuple

import pytest
from hypothesis import given
from hypothesis import strategies as st

from notes.eviction import LowestEviction
from notes.grid import Grid, ToggleResult
from notes.model import PitchRange

BASS = {0: 5, 1: 12, 2: 9, 3: 14}  # F2 C3 A2 D3

toggles = st.lists(
    st.tuples(st.integers(min_value=0, max_value=3), st.integers(min_value=0, max_value=36)),
    max_size=60,
)


class TestInitialState:
    def test_empty_grid(self) -> None:
        grid = Grid()
        assert grid.bars == 4
        for bar in range(4):
            assert grid.active_notes(bar) == frozenset()
            assert grid.chord_label(bar) is None

    def test_locked_notes_prefilled(self) -> None:
        grid = Grid(locked=BASS)
        for bar, index in BASS.items():
            assert grid.active_notes(bar) == frozenset({index})
            assert grid.locked_note(bar) == index
            assert grid.is_locked(bar, index)
            assert grid.chord_label(bar) is None

    def test_invalid_configuration(self) -> None:
        with pytest.raises(ValueError):
            Grid(max_voices=0)
        with pytest.raises(ValueError):
            Grid(max_voices=1, locked=BASS)
        with pytest.raises(ValueError):
            Grid(bars=2, locked=BASS)
        with pytest.raises(ValueError):
            Grid(bars=0)


class TestToggle:
    def test_add_and_remove(self) -> None:
        grid = Grid()
        assert grid.toggle_note(1, 20) is ToggleResult.ADDED
        assert grid.active_notes(1) == frozenset({20})
        assert grid.toggle_note(1, 20) is ToggleResult.REMOVED
        assert grid.active_notes(1) == frozenset()

    def test_label_tracks_mutations(self) -> None:
        grid = Grid(locked=BASS)
        grid.toggle_note(0, 21)  # A3
        assert grid.chord_label(0) is None
        grid.toggle_note(0, 24)  # C4
        assert grid.chord_label(0) == "F Major"
        grid.toggle_note(0, 25)  # C#4
        assert grid.chord_label(0) == "Complex/Inversion"
        grid.toggle_note(0, 25)
        assert grid.chord_label(0) == "F Major"
        grid.toggle_note(0, 24)
        assert grid.chord_label(0) is None

    def test_locked_note_is_a_no_op(self) -> None:
        grid = Grid(locked=BASS)
        grid.toggle_note(0, 21)
        before = grid.active_notes(0)
        for _ in range(5):
            assert grid.toggle_note(0, 5) is ToggleResult.LOCKED
            assert grid.active_notes(0) == before

    def test_locked_note_of_other_bar_is_free(self) -> None:
        grid = Grid(locked=BASS)
        assert grid.toggle_note(1, 5) is ToggleResult.ADDED
        assert grid.active_notes(1) == frozenset({12, 5})

    def test_full_bar_evicts_oldest_user_note(self) -> None:
        grid = Grid(locked=BASS)
        for index in (21, 24, 28):
            grid.toggle_note(0, index)
        assert grid.active_notes(0) == frozenset({5, 21, 24, 28})
        assert grid.toggle_note(0, 30) is ToggleResult.REPLACED
        assert grid.last_evicted == 21
        assert grid.active_notes(0) == frozenset({5, 24, 28, 30})

    def test_lowest_eviction_policy(self) -> None:
        grid = Grid(locked=BASS, eviction=LowestEviction())
        for index in (28, 21, 24):
            grid.toggle_note(0, index)
        grid.toggle_note(0, 30)
        assert grid.last_evicted == 21
        assert grid.active_notes(0) == frozenset({5, 24, 28, 30})

    def test_unbounded(self) -> None:
        grid = Grid(max_voices=None)
        for index in range(10):
            assert grid.toggle_note(2, index) is ToggleResult.ADDED
        assert len(grid.active_notes(2)) == 10

    def test_out_of_range_bar_fails_fast(self) -> None:
        grid = Grid()
        with pytest.raises(AssertionError):
            grid.toggle_note(4, 0)


class TestClear:
    def test_clear_restores_initial_state(self) -> None:
        grid = Grid(locked=BASS)
        for bar in range(4):
            for index in (20, 24, 27):
                grid.toggle_note(bar, index)
        grid.clear()
        for bar in range(4):
            assert grid.active_notes(bar) == frozenset({BASS[bar]})
            assert grid.chord_label(bar) is None

    def test_clear_without_lock(self) -> None:
        grid = Grid()
        grid.toggle_note(3, 0); grid.toggle_note(3, 4); grid.toggle_note(3, 7)
        assert grid.chord_label(3) == "C Major"
        grid.clear()
        assert grid.active_notes(3) == frozenset()
        assert grid.labels() == [None, None, None, None]


def test_as_text() -> None:
    grid = Grid(locked=BASS)
    grid.toggle_note(0, 21)
    grid.toggle_note(0, 24)
    text = grid.as_text(PitchRange())
    lines = text.splitlines()
    assert lines[0] == "My Harmony Composition:"
    assert lines[2] == "Bar 1: F2, A3, C4 [F Major]"
    assert lines[3] == "Bar 2: C3 []"
    assert Grid().as_text(PitchRange()).splitlines()[2] == "Bar 1: (Rest) []"


@given(st.integers(min_value=0, max_value=3), st.integers(min_value=0, max_value=36), toggles)
def test_double_toggle_round_trip(bar: int, index: int, history: List[Tuple[int, int]]) -> None:
    grid = Grid(locked=BASS)
    for b, i in history:
        grid.toggle_note(b, i)
    before = grid.active_notes(bar)
    if index in before:
        return
    grid.toggle_note(bar, index)
    grid.toggle_note(bar, index)
    if len(before) < grid.max_voices:
        assert grid.active_notes(bar) == before
    else:
        # the add evicted a note, so the round trip shrinks the bar by one
        assert grid.active_notes(bar) < before


@given(toggles, st.sampled_from([2, 3, 4, 6]))
def test_ceiling_and_lock_hold(history: List[Tuple[int, int]], voices: int) -> None:
    grid = Grid(max_voices=voices, locked=BASS)
    for bar, index in history:
        grid.toggle_note(bar, index)
        notes = grid.active_notes(bar)
        assert len(notes) <= voices
        assert BASS[bar] in notes


@given(toggles)
def test_labels_match_fresh_classification(history: List[Tuple[int, int]]) -> None:
    from notes.chords import classify

    grid = Grid(locked=BASS)
    for bar, index in history:
        grid.toggle_note(bar, index)
    for bar in range(grid.bars):
        assert grid.chord_label(bar) == classify(grid.active_notes(bar))


def test_locked_map_is_read_only() -> None:
    source = dict(BASS)
    grid = Grid(locked=source)
    source[0] = 30
    assert grid.locked_note(0) == 5
    with pytest.raises(TypeError):
        grid.locked[0] = 30
