"""Shared test fixtures for apnetcfg."""

import pathlib

import pytest


FIXTURES_DIR = pathlib.Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def state_dir(tmp_path):
    """A state directory with both default networks enabled."""
    state = tmp_path / "wifi"
    guest = state / "guest"
    guest.mkdir(parents=True)
    (state / "box_name").write_text("example-SSID\n")
    (state / "enabled").write_text("")
    (state / "password").write_text("foobarpassprivate\n")
    (guest / "enabled").write_text("")
    (guest / "password").write_text("foobarpasspublic\n")
    return state
