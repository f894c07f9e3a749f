"""Tests for pi.prompt.list_engine -- filtering, cursor, paging, selection."""

from __future__ import annotations

import pytest

from pi.prompt.errors import InvalidConfigurationError
from pi.prompt.fuzzy import contains_scorer
from pi.prompt.keys import KeyEvent
from pi.prompt.list_engine import ListEngine, ListOption, paginate

FRUITS = ["apple", "banana", "cherry"]
GREEK = ["alpha", "beta", "gamma", "delta"]


def values(engine: ListEngine) -> list:
    return [option.value for option in engine.visible]


class TestListOption:
    def test_str_is_value_str(self) -> None:
        assert str(ListOption(3, 12)) == "12"

    def test_equality(self) -> None:
        assert ListOption(0, "a") == ListOption(0, "a")
        assert ListOption(0, "a") != ListOption(1, "a")


class TestListEngineFiltering:
    def test_everything_visible_initially(self) -> None:
        engine = ListEngine(FRUITS)
        assert values(engine) == FRUITS
        assert engine.cursor == 0
        assert engine.current() == ListOption(0, "apple")

    def test_filter_hides_non_matching(self) -> None:
        engine = ListEngine(FRUITS)
        assert engine.set_filter_input("an") is True
        assert values(engine) == ["banana"]
        assert engine.current() == ListOption(1, "banana")

    def test_no_match_leaves_no_cursor(self) -> None:
        engine = ListEngine(FRUITS)
        engine.set_filter_input("zzz")
        assert engine.visible == []
        assert engine.cursor is None
        assert engine.current() is None
        assert engine.move_cursor(1) is False

    def test_clearing_filter_restores_all(self) -> None:
        engine = ListEngine(FRUITS, filter_input="che")
        assert values(engine) == ["cherry"]
        engine.set_filter_input("")
        assert values(engine) == FRUITS

    def test_best_match_first(self) -> None:
        engine = ListEngine(["xyzabc", "abcxyz", "aabbcc"])
        engine.set_filter_input("abc")
        assert values(engine)[0] == "abcxyz"

    def test_equal_scores_keep_original_order(self) -> None:
        engine = ListEngine(["b1", "a1", "c1"], scorer=contains_scorer)
        engine.set_filter_input("1")
        assert values(engine) == ["b1", "a1", "c1"]

    def test_without_score_sorting(self) -> None:
        engine = ListEngine(["xyzabc", "abcxyz"], sort_by_score=False)
        engine.set_filter_input("abc")
        assert values(engine) == ["xyzabc", "abcxyz"]

    def test_scorer_receives_label_value_and_index(self) -> None:
        calls = []

        def scorer(text, value, label, index):
            calls.append((text, value, label, index))
            return 0

        ListEngine([7, 8], scorer=scorer, labeler=lambda v: f"#{v}")
        assert calls == [("", 7, "#7", 0), ("", 8, "#8", 1)]

    def test_filter_key_editing(self) -> None:
        engine = ListEngine(FRUITS)
        engine.handle_filter_key(KeyEvent.char("c"))
        engine.handle_filter_key(KeyEvent.char("h"))
        assert engine.filter.value == "ch"
        assert values(engine) == ["cherry"]
        engine.handle_filter_key(KeyEvent.named("backspace"))
        engine.handle_filter_key(KeyEvent.named("backspace"))
        assert values(engine) == FRUITS


class TestListEngineCursorAfterFilter:
    def test_reset_cursor_moves_to_top(self) -> None:
        engine = ListEngine(GREEK, starting_cursor=3)
        engine.set_filter_input("ta")
        assert values(engine) == ["beta", "delta"]
        assert engine.cursor == 0

    def test_keep_cursor_on_same_option(self) -> None:
        engine = ListEngine(GREEK, starting_cursor=3, reset_cursor=False)
        engine.set_filter_input("ta")
        assert engine.current() == ListOption(3, "delta")

    def test_keep_cursor_clamps_when_option_disappears(self) -> None:
        engine = ListEngine(GREEK, starting_cursor=2, reset_cursor=False)
        engine.set_filter_input("ta")
        current = engine.current()
        assert current is not None
        assert current.value in ("beta", "delta")
        assert engine.cursor is not None
        assert 0 <= engine.cursor < len(engine.visible)


class TestListEngineMotion:
    def test_clamped_motion(self) -> None:
        engine = ListEngine(FRUITS)
        assert engine.move_cursor(-1) is False
        assert engine.cursor == 0
        engine.move_cursor(10)
        assert engine.cursor == 2

    def test_wrapping_motion(self) -> None:
        engine = ListEngine(FRUITS)
        assert engine.move_cursor(-1, wrap=True) is True
        assert engine.cursor == 2
        engine.move_cursor(1, wrap=True)
        assert engine.cursor == 0

    def test_paging(self) -> None:
        engine = ListEngine(list(range(10)), page_size=3)
        engine.page_down()
        assert engine.cursor == 3
        engine.page_up()
        assert engine.cursor == 0
        engine.move_to_end()
        assert engine.cursor == 9
        assert engine.page_down() is False
        engine.move_to_start()
        assert engine.cursor == 0

    def test_starting_cursor_is_clamped(self) -> None:
        assert ListEngine(FRUITS, starting_cursor=99).cursor == 2

    def test_invalid_page_size(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            ListEngine(FRUITS, page_size=0)


class TestPagination:
    def test_everything_fits(self) -> None:
        assert paginate(5, 3, 2) == (0, 3)

    def test_pinned_to_top(self) -> None:
        assert paginate(5, 20, 1) == (0, 5)

    def test_centred(self) -> None:
        assert paginate(5, 20, 10) == (8, 13)

    def test_pinned_to_bottom(self) -> None:
        assert paginate(5, 20, 19) == (15, 20)

    def test_page_contains_cursor(self) -> None:
        for cursor in range(20):
            start, end = paginate(4, 20, cursor)
            assert start <= cursor < end
            assert end - start == 4

    def test_current_page(self) -> None:
        engine = ListEngine(list(range(10)), page_size=3)
        page = engine.current_page()
        assert [o.value for o in page.items] == [0, 1, 2]
        assert page.cursor == 0
        assert page.first and not page.last
        assert page.more_below

        engine.move_to_end()
        page = engine.current_page()
        assert [o.value for o in page.items] == [7, 8, 9]
        assert page.cursor == 2
        assert page.last and page.more_above

    def test_empty_page(self) -> None:
        engine = ListEngine(FRUITS)
        engine.set_filter_input("zzz")
        page = engine.current_page()
        assert page.items == ()
        assert page.cursor is None
        assert page.total == 0


class TestListEngineSelection:
    def test_toggle(self) -> None:
        engine = ListEngine(FRUITS)
        assert engine.toggle_current()
        assert engine.is_selected(0)
        engine.toggle_current()
        assert not engine.is_selected(0)

    def test_selected_options_in_original_order(self) -> None:
        engine = ListEngine(FRUITS)
        engine.move_to_end()
        engine.toggle_current()
        engine.move_to_start()
        engine.toggle_current()
        assert engine.selected_options() == [ListOption(0, "apple"), ListOption(2, "cherry")]

    def test_select_all_includes_hidden_options(self) -> None:
        engine = ListEngine(FRUITS)
        engine.set_filter_input("che")
        engine.select_all()
        assert engine.selected_indices == [0, 1, 2]
        engine.clear_all()
        assert engine.selected_indices == []

    def test_selection_survives_filtering(self) -> None:
        engine = ListEngine(FRUITS, selected=[1])
        engine.set_filter_input("che")
        engine.toggle_current()
        engine.set_filter_input("")
        assert engine.selected_indices == [1, 2]

    def test_toggle_with_nothing_visible(self) -> None:
        engine = ListEngine(FRUITS)
        engine.set_filter_input("zzz")
        assert engine.toggle_current() is False
