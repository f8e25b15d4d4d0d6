# client/app/services/slots/selection.py
"""
Single-selection state for the slot grid.

States: no selection | slot X selected.
select(Y) moves to "Y selected" only when Y is an unbooked slot of the grid.
Booked or unknown targets are ignored: no exception, no state change.
"""

import logging
from typing import Iterable

from .calculator import Slot

logger = logging.getLogger(__name__)


class SlotSelection:
    """Selected slot label, owned by the booking draft, not by the grid."""

    def __init__(self, selected: str | None = None):
        self.selected = selected

    def select(self, label: str, slots: Iterable[Slot]) -> bool:
        """
        Try to select label against the current grid.

        Returns:
            True if the selection changed to label, False if ignored.
        """
        slot = next((s for s in slots if s.label == label), None)

        if slot is None:
            logger.debug("Ignoring selection of %s: not on the grid", label)
            return False

        if slot.is_booked:
            logger.debug("Ignoring selection of %s: already booked", label)
            return False

        self.selected = label
        return True

    def clear(self) -> None:
        self.selected = None

    def apply(self, slots: Iterable[Slot]) -> list[Slot]:
        """Re-mark is_selected on an existing grid."""
        return [
            Slot(label=s.label, is_booked=s.is_booked, is_selected=s.label == self.selected)
            for s in slots
        ]

    def __repr__(self) -> str:
        return f"SlotSelection(selected={self.selected!r})"
