"""Unit tests for the progress aggregator.

Progress is the rounded share of checked checklist items.
"""

from __future__ import annotations

import pytest

from domain.project.entities import ChecklistItem
from domain.project.progress import (
    DEFAULT_CHECKLIST,
    category_progress,
    checklist_categories,
    compute_progress,
    default_checklist,
)
from domain.shared.value_objects import Progress


def _items(checked: int, total: int) -> list:
    return [
        ChecklistItem(category="Site Preparation", label=f"Step {i}", is_checked=i < checked)
        for i in range(total)
    ]


class TestComputeProgress:
    """Percentage over the whole checklist."""

    def test_empty_checklist_is_zero(self):
        assert compute_progress([]) == 0

    def test_none_checked(self):
        assert compute_progress(_items(0, 4)) == 0

    def test_all_checked(self):
        assert compute_progress(_items(4, 4)) == 100

    @pytest.mark.parametrize(
        "checked,total,expected",
        [
            (1, 3, 33),
            (2, 3, 67),
            (1, 8, 13),  # 12.5 rounds half up
            (1, 9, 11),
            (6, 9, 67),
        ],
    )
    def test_rounds_half_up(self, checked, total, expected):
        assert compute_progress(_items(checked, total)) == expected

    @pytest.mark.parametrize("total", range(1, 25))
    def test_stays_within_bounds(self, total):
        values = [compute_progress(_items(checked, total)) for checked in range(total + 1)]

        assert all(0 <= value <= 100 for value in values)
        assert values[0] == 0
        assert values[-1] == 100
        assert values == sorted(values)

    def test_accepts_generators(self, checklist):
        assert compute_progress(item for item in checklist) == 33

    def test_toggle_twice_restores_progress(self, checklist):
        before = compute_progress(checklist)
        checklist[1].toggle()
        assert compute_progress(checklist) == 67
        checklist[1].toggle()
        assert compute_progress(checklist) == before


class TestCategories:
    """Per-category breakdown."""

    def test_categories_in_first_appearance_order(self, checklist):
        checklist.append(ChecklistItem(category="Electrical", label="Fixtures Installed"))
        assert checklist_categories(checklist) == ["Electrical", "Ceiling"]

    def test_category_progress(self, checklist):
        assert category_progress(checklist) == {"Electrical": 50, "Ceiling": 0}

    def test_category_progress_empty(self):
        assert category_progress([]) == {}


class TestDefaultChecklist:
    """Template the new projects start from."""

    def test_fresh_unchecked_items(self):
        items = default_checklist()
        assert len(items) == len(DEFAULT_CHECKLIST) == 9
        assert not any(item.is_checked for item in items)

    def test_categories(self):
        assert checklist_categories(default_checklist()) == [
            "Site Preparation",
            "Electrical",
            "Ceiling",
            "Wall Concepts",
        ]

    def test_copies_are_independent(self):
        first, second = default_checklist(), default_checklist()
        first[0].toggle()
        assert not second[0].is_checked
        assert first[0].id != second[0].id


class TestProgressValue:
    """Progress value object."""

    def test_from_ratio_empty_total(self):
        assert Progress.from_ratio(0, 0) == Progress.zero()

    def test_complete(self):
        assert Progress.from_ratio(3, 3).is_complete
        assert str(Progress.complete()) == "100%"

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            Progress(101)
