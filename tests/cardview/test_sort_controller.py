import pytest

from cardstack.core.errors import ConsistencyError
from cardstack.cardview.controllers.sort_controller import SortController, compare_values
from cardstack.cardview.ingestion import ingest


def numbered(values):
    return ingest([{"id": str(i), "caption": f"c{i}", "n": v} for i, v in enumerate(values)], dict)


class TestSortController:
    """Tests for property sorting."""

    def test_numeric_ascending(self):
        controller = SortController()
        controller.sort_by_field("n", "ASC")

        assert [c.properties["n"] for c in controller.apply(numbered([3, 1, 2]))] == [1, 2, 3]

    def test_numeric_descending(self):
        controller = SortController()
        controller.sort_by_field("n", "DESC")

        assert [c.properties["n"] for c in controller.apply(numbered([3, 1, 2]))] == [3, 2, 1]

    def test_default_order_is_descending(self):
        controller = SortController()
        controller.sort_by_field("n")

        assert not controller.ascending
        assert [c.properties["n"] for c in controller.apply(numbered([1, 3, 2]))] == [3, 2, 1]

    def test_unknown_order_is_descending(self):
        controller = SortController()
        controller.sort_by_field("n", "sideways")

        assert controller.order == "DESC"

    def test_floats_and_ints_mix(self):
        controller = SortController()
        controller.sort_by_field("n", "ASC")

        assert [c.properties["n"] for c in controller.apply(numbered([2.5, 1, 3]))] == [1, 2.5, 3]

    def test_strings_honour_order(self):
        cards = ingest(
            [{"id": str(i), "caption": c, "name": c} for i, c in enumerate(["Charlie", "Alpha", "Bravo"])],
            dict,
        )
        controller = SortController()

        controller.sort_by_field("name", "ASC")
        assert [c.caption for c in controller.apply(cards)] == ["Alpha", "Bravo", "Charlie"]

        controller.sort_by_field("name", "DESC")
        assert [c.caption for c in controller.apply(cards)] == ["Charlie", "Bravo", "Alpha"]

    def test_strings_ignore_case(self):
        cards = ingest(
            [{"id": str(i), "caption": c, "name": c} for i, c in enumerate(["banana", "Cherry", "apple"])],
            dict,
        )
        controller = SortController()

        controller.sort_by_field("name", "ASC")
        assert [c.caption for c in controller.apply(cards)] == ["apple", "banana", "Cherry"]

        controller.sort_by_field("name", "DESC")
        assert [c.caption for c in controller.apply(cards)] == ["Cherry", "banana", "apple"]

    def test_stable_for_ties(self):
        cards = numbered([1, 1, 0])
        controller = SortController()
        controller.sort_by_field("n", "DESC")

        assert [c.id for c in controller.apply(cards)] == ["0", "1", "2"]

    def test_apply_returns_new_list(self):
        cards = numbered([2, 1])
        controller = SortController()
        controller.sort_by_field("n", "ASC")

        result = controller.apply(cards)

        assert result is not cards
        assert [c.properties["n"] for c in cards] == [2, 1]

    def test_mixed_types_raise(self):
        controller = SortController()
        controller.sort_by_field("n", "ASC")

        with pytest.raises(ConsistencyError):
            controller.apply(numbered([1, "two"]))

    def test_missing_values_raise(self):
        cards = ingest([{"id": "a", "n": 1}, {"id": "b"}], dict)
        controller = SortController()
        controller.sort_by_field("n", "ASC")

        with pytest.raises(ConsistencyError):
            controller.apply(cards)

    def test_no_sort_field_keeps_order(self):
        cards = numbered([2, 3, 1])

        assert [c.id for c in SortController().apply(cards)] == ["0", "1", "2"]


def test_compare_values_case_only_difference_is_not_a_tie():
    assert compare_values("apple", "Banana") < 0
    assert compare_values("Apple", "apple") != 0
    assert compare_values("apple", "apple") == 0


def test_compare_values_rejects_booleans():
    with pytest.raises(ConsistencyError):
        compare_values(True, 1)
