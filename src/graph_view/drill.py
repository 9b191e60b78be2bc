from __future__ import annotations

import calendar
import logging

from diary_entries.models import FilterState

from .models import Dimension, DrillStep

logger = logging.getLogger("graph-view-drill")

LIST_FILTERS: dict[Dimension, str] = {
    Dimension.TAG: "selected_tags",
    Dimension.ENTITY: "selected_entities",
    Dimension.ENTITY_TYPE: "selected_entity_types",
    Dimension.MOOD: "selected_moods",
    Dimension.COUNTRY: "selected_countries",
    Dimension.CITY: "selected_cities",
}


def month_range(value: str) -> tuple[str, str]:
    """'YYYY-MM' -> ('YYYY-MM-01', 'YYYY-MM-<last day>'); unparseable keys give an open range."""
    try:
        year_text, month_text = value.split("-")[:2]
        year, month = int(year_text), int(month_text)
        last_day = calendar.monthrange(year, month)[1]
    except ValueError:
        return "", ""
    return f"{year:04d}-{month:02d}-01", f"{year:04d}-{month:02d}-{last_day:02d}"


def narrow_filters(filters: FilterState, mode: Dimension, value: str) -> tuple[FilterState, bool]:
    """Return a copy of ``filters`` constrained to one group key.

    The flag tells whether a list filter actually gained the value, which is
    what an exact undo needs to know.
    """
    narrowed = filters.copy()
    field_name = LIST_FILTERS.get(mode)
    if field_name is not None:
        values: list[str] = getattr(narrowed, field_name)
        if value in values:
            return narrowed, False
        values.append(value)
        return narrowed, True

    if mode is Dimension.DATE:
        narrowed.start_date, narrowed.end_date = month_range(value)
    elif mode is Dimension.DAY:
        narrowed.start_date = value
        narrowed.end_date = value
    return narrowed, False


class DrillNavigator:
    """Stack of entered clusters, kept in lock-step with the filter state."""

    def __init__(self) -> None:
        self.steps: list[DrillStep] = []

    @property
    def depth(self) -> int:
        return len(self.steps)

    @property
    def at_root(self) -> bool:
        return not self.steps

    def used_modes(self) -> set[Dimension]:
        return {step.mode for step in self.steps}

    def enter(self, filters: FilterState, mode: Dimension, value: str, label: str) -> FilterState:
        narrowed, added = narrow_filters(filters, mode, value)
        self.steps.append(
            DrillStep(
                mode=mode,
                value=value,
                label=label,
                added_value=added,
                previous_range=(filters.start_date, filters.end_date),
            )
        )
        logger.info("drill enter mode=%s value=%s depth=%d", mode.value, value, self.depth)
        return narrowed

    def back(self, filters: FilterState) -> FilterState:
        if not self.steps:
            return filters.copy()

        step = self.steps.pop()
        restored = filters.copy()
        field_name = LIST_FILTERS.get(step.mode)
        if field_name is not None:
            if step.added_value:
                values: list[str] = getattr(restored, field_name)
                if step.value in values:
                    values.remove(step.value)
        elif step.mode in (Dimension.DATE, Dimension.DAY):
            restored.start_date, restored.end_date = self._surviving_range(step)

        logger.info("drill back mode=%s value=%s depth=%d", step.mode.value, step.value, self.depth)
        return restored

    def _surviving_range(self, popped: DrillStep) -> tuple[str, str]:
        for step in reversed(self.steps):
            if step.mode is Dimension.DATE:
                return month_range(step.value)
        return popped.previous_range

    def reset(self) -> FilterState:
        self.steps.clear()
        logger.info("drill reset")
        return FilterState()
