from __future__ import annotations

import pytest

from config import DEFAULT_CONSTANTS, DEFAULT_SAVE_DB_PATH, constants_from_env, load_constants, save_db_path_from_env


def test_overrides_are_applied_without_touching_defaults():
    c = load_constants({"EVENT_RATE": 0, "SAVE_SLOT_IDS": [1, 2, 3, 4]})
    assert c.EVENT_RATE == 0.0 and isinstance(c.EVENT_RATE, float)
    assert c.SAVE_SLOT_IDS == (1, 2, 3, 4)
    assert DEFAULT_CONSTANTS.EVENT_RATE == 0.65


def test_unknown_and_out_of_range_overrides_fail():
    with pytest.raises(ValueError, match="Unknown game constant"):
        load_constants({"EVENT_RATEE": 0.1})
    with pytest.raises(ValueError):
        load_constants({"EVENT_RATE": 1.5})
    with pytest.raises(ValueError):
        load_constants({"EFFECT_WEEKS_MIN": 0})
    with pytest.raises(ValueError):
        load_constants({"TRAINING_GAIN_DIVISOR": 0})


def test_constants_from_env():
    assert constants_from_env({}) is DEFAULT_CONSTANTS
    c = constants_from_env({"STRIKE_FORCE_CONSTANTS": '{"SEASON_LENGTH": 10}'})
    assert c.SEASON_LENGTH == 10
    with pytest.raises(ValueError):
        constants_from_env({"STRIKE_FORCE_CONSTANTS": "[1, 2]"})
    with pytest.raises(ValueError):
        constants_from_env({"STRIKE_FORCE_CONSTANTS": "{oops"})


def test_save_db_path_from_env():
    assert save_db_path_from_env({}) == DEFAULT_SAVE_DB_PATH
    assert save_db_path_from_env({"STRIKE_FORCE_SAVE_DB": " /tmp/x.sqlite3 "}) == "/tmp/x.sqlite3"
