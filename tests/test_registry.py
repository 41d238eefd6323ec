"""Tests for the two-slot registry."""

import pytest

from duel_snake.registry import (
    AiOccupant,
    HumanOccupant,
    SlotRegistry,
    other_slot,
)


class TestClaim:
    def test_lowest_free_slot_first(self):
        reg = SlotRegistry()
        assert reg.claim(HumanOccupant("c1", "ann")) == 1
        assert reg.claim(HumanOccupant("c2", "bob")) == 2
        assert reg.is_full

    def test_third_claim_rejected(self):
        reg = SlotRegistry()
        reg.claim(HumanOccupant("c1", "ann"))
        reg.claim(HumanOccupant("c2", "bob"))
        with pytest.raises(ValueError, match="full"):
            reg.claim(HumanOccupant("c3", "cy"))

    def test_explicit_slot(self):
        reg = SlotRegistry()
        assert reg.claim(AiOccupant(), 2) == 2
        assert reg.occupied_slots() == [2]
        with pytest.raises(ValueError, match="occupied"):
            reg.claim(HumanOccupant("c1", "ann"), 2)

    def test_duplicate_name_rejected(self):
        reg = SlotRegistry()
        reg.claim(HumanOccupant("c1", "Ann"))
        with pytest.raises(ValueError, match="in use"):
            reg.claim(HumanOccupant("c2", "ann"))

    def test_connection_holds_one_slot(self):
        reg = SlotRegistry()
        reg.claim(HumanOccupant("c1", "ann"))
        with pytest.raises(ValueError, match="already holds"):
            reg.claim(HumanOccupant("c1", "other"))

    def test_unknown_slot(self):
        reg = SlotRegistry()
        with pytest.raises(KeyError):
            reg.occupant(3)


class TestLookupAndRelease:
    def test_slot_of(self):
        reg = SlotRegistry()
        reg.claim(HumanOccupant("c1", "ann"))
        reg.claim(AiOccupant())
        assert reg.slot_of("c1") == 1
        assert reg.slot_of("nobody") is None

    def test_release(self):
        reg = SlotRegistry()
        occ = HumanOccupant("c1", "ann")
        reg.claim(occ)
        assert reg.release(1) == occ
        assert reg.is_empty
        assert reg.release(1) is None

    def test_occupant_kinds(self):
        assert not HumanOccupant("c1", "ann").is_ai
        assert AiOccupant().is_ai
        assert AiOccupant().name == "AI"


class TestOtherSlot:
    def test_pairs(self):
        assert other_slot(1) == 2
        assert other_slot(2) == 1

    def test_invalid(self):
        with pytest.raises(KeyError):
            other_slot(0)
