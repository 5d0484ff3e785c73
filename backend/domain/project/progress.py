"""
Project Domain - Progress aggregation.

A project's completion percentage is derived from its execution checklist
and nothing else: task completion and material stages do not count.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Tuple

from domain.shared.value_objects import Progress

from .entities import ChecklistItem


# Execution checklist every new project starts from, in display order
DEFAULT_CHECKLIST: Tuple[Tuple[str, str], ...] = (
    ("Site Preparation", "Permits Acquired"),
    ("Site Preparation", "Area Cleared"),
    ("Electrical", "Layout Marked"),
    ("Electrical", "Wiring Installed"),
    ("Electrical", "Fixtures Installed"),
    ("Ceiling", "Frame Installed"),
    ("Ceiling", "Drywall Completed"),
    ("Wall Concepts", "Paint Applied"),
    ("Wall Concepts", "Wallpaper Installed"),
)


def compute_progress(items: Iterable[ChecklistItem]) -> int:
    """
    Percentage of checked items, rounded half up.

    An empty checklist is 0%: nothing has been done yet.
    """
    items = list(items)
    checked = sum(1 for item in items if item.is_checked)
    return Progress.from_ratio(checked, len(items)).percent


def checklist_categories(items: Iterable[ChecklistItem]) -> List[str]:
    """Distinct categories in order of first appearance."""
    seen: Dict[str, None] = {}
    for item in items:
        seen.setdefault(item.category, None)
    return list(seen)


def items_in_category(items: Iterable[ChecklistItem], category: str) -> List[ChecklistItem]:
    return [item for item in items if item.category == category]


def category_progress(items: Iterable[ChecklistItem]) -> Dict[str, int]:
    """Per-category completion, keyed in first-appearance order."""
    items = list(items)
    return {
        category: compute_progress(items_in_category(items, category))
        for category in checklist_categories(items)
    }


def default_checklist() -> List[ChecklistItem]:
    """Fresh, unchecked copies of the default execution checklist."""
    return [
        ChecklistItem(category=category, label=label)
        for category, label in DEFAULT_CHECKLIST
    ]
