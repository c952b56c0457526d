"""
Tests for settings parsing
"""
import pytest

from ratify.config import Settings


def test_seed_roster_parses_pairs():
    settings = Settings(seed_members=" Alice:1111 , Bob:222233,")
    assert settings.seed_roster == [("Alice", "1111"), ("Bob", "222233")]


def test_seed_roster_empty():
    assert Settings(seed_members="").seed_roster == []


@pytest.mark.parametrize("seed", ["Alice", "Alice:", ":1111"])
def test_seed_roster_rejects_malformed_entries(seed):
    with pytest.raises(ValueError, match="Name:PIN"):
        Settings(seed_members=seed).seed_roster


@pytest.mark.parametrize("pin", ["12", "12ab", "1234567890123", "١٢٣٤"])
def test_seed_roster_rejects_bad_pins(pin):
    with pytest.raises(ValueError, match="4-12 digits"):
        Settings(seed_members=f"Alice:{pin}").seed_roster
