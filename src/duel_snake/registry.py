"""Two-slot occupancy registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

SLOTS: tuple[int, int] = (1, 2)
AI_NAME = "AI"


@dataclass(frozen=True)
class HumanOccupant:
    """A player bound to a live connection."""

    connection_id: str
    name: str

    @property
    def is_ai(self) -> bool:
        return False


@dataclass(frozen=True)
class AiOccupant:
    """The scripted opponent. It has no connection."""

    name: str = AI_NAME

    @property
    def is_ai(self) -> bool:
        return True


Occupant = HumanOccupant | AiOccupant


def other_slot(slot: int) -> int:
    """Return the opposing slot id."""
    if slot not in SLOTS:
        raise KeyError(f"Unknown slot {slot}.")
    return 2 if slot == 1 else 1


class SlotRegistry:
    """Maps the two player slots to their occupants.

    At most one occupant per slot; a connection holds at most one slot and
    display names are unique (case-insensitive) among current occupants.
    """

    def __init__(self) -> None:
        self._slots: dict[int, Occupant | None] = {slot: None for slot in SLOTS}

    def occupant(self, slot: int) -> Occupant | None:
        if slot not in self._slots:
            raise KeyError(f"Unknown slot {slot}.")
        return self._slots[slot]

    def occupied_slots(self) -> list[int]:
        return [s for s in SLOTS if self._slots[s] is not None]

    @property
    def is_full(self) -> bool:
        return all(o is not None for o in self._slots.values())

    @property
    def is_empty(self) -> bool:
        return all(o is None for o in self._slots.values())

    def slot_of(self, connection_id: str) -> int | None:
        """Return the slot held by *connection_id*, if any."""
        for slot, occ in self._slots.items():
            if isinstance(occ, HumanOccupant) and occ.connection_id == connection_id:
                return slot
        return None

    def name_taken(self, name: str) -> bool:
        folded = name.casefold()
        return any(
            occ is not None and occ.name.casefold() == folded
            for occ in self._slots.values()
        )

    def claim(self, occupant: Occupant, slot: int | None = None) -> int:
        """Bind *occupant* to *slot*, or to the lowest free slot.

        Raises ``ValueError`` when no suitable slot is free, the name is in
        use, or the connection already holds a slot.
        """
        if isinstance(occupant, HumanOccupant) and (
            self.slot_of(occupant.connection_id) is not None
        ):
            raise ValueError("Connection already holds a slot.")
        if self.name_taken(occupant.name):
            raise ValueError(f"Name {occupant.name!r} is already in use.")

        if slot is None:
            free = [s for s in SLOTS if self._slots[s] is None]
            if not free:
                raise ValueError("Game is full.")
            slot = free[0]
        elif self.occupant(slot) is not None:
            raise ValueError(f"Slot {slot} is already occupied.")

        self._slots[slot] = occupant
        logger.info("Slot %d claimed by %r (ai=%s).", slot, occupant.name, occupant.is_ai)
        return slot

    def release(self, slot: int) -> Occupant | None:
        """Clear *slot* and return whoever held it."""
        occ = self.occupant(slot)
        self._slots[slot] = None
        if occ is not None:
            logger.info("Slot %d released by %r.", slot, occ.name)
        return occ
