from __future__ import annotations

import dataclasses
import json

import pytest

from career.profile import new_career_state
from challenges.types import WeeklyChallenge
from errors import CORRUPTED_STATE, INVALID_SLOT, NO_ACTIVE_GAME, CareerError, SaveCorruptedError
from jobs.types import JobContract
from saves.codec import SAVE_FORMAT_VERSION, decode_slot, encode_slot, state_violations
from saves.repo import SqliteSaveStore


@pytest.fixture
def state(new_profile_data, constants):
    return new_career_state(new_profile_data, 555, constants)


def _tampered(raw: str, mutate) -> str:
    doc = json.loads(raw)
    mutate(doc)
    return json.dumps(doc)


def test_round_trip_preserves_state(state, constants, make_effect, make_event):
    rich = dataclasses.replace(
        state,
        active_effects=(make_effect("inj", "injury", weeks=2),),
        pending_event=make_event(),
        effect_seq=4,
        job=JobContract(job_id="retail", title="Retail Associate", weekly_pay=450, energy_cost=20, weeks_remaining=5),
    )
    raw = encode_slot(2, rich, "2025-03-01T10:00:00Z")
    decoded, last_saved = decode_slot(raw, constants, expected_slot_id=2)
    assert decoded == rich
    assert last_saved == "2025-03-01T10:00:00Z"
    assert json.loads(raw)["save_format_version"] == SAVE_FORMAT_VERSION


def test_consistent_state_has_no_violations(state, constants):
    assert state_violations(state, constants) == []


def test_claimed_but_incomplete_challenge_is_corruption(state, constants):
    bad = WeeklyChallenge(id="x", metric="games", name="", description="", target=3, progress=1, claimed=True)
    broken = dataclasses.replace(state, challenges=dataclasses.replace(state.challenges, challenges=(bad,)))
    with pytest.raises(SaveCorruptedError) as exc:
        decode_slot(encode_slot(1, broken, "t"), constants)
    assert exc.value.code == CORRUPTED_STATE
    assert any("claimed but incomplete" in i for i in exc.value.details["issues"])


def test_zero_week_effect_is_corruption(state, constants, make_effect):
    broken = dataclasses.replace(state, active_effects=(make_effect(weeks=0),))
    with pytest.raises(SaveCorruptedError):
        decode_slot(encode_slot(1, broken, "t"), constants)


def test_finished_job_left_on_the_state_is_corruption(state, constants):
    stale = JobContract(job_id="retail", title="", weekly_pay=450, energy_cost=20, weeks_remaining=0)
    with pytest.raises(SaveCorruptedError) as exc:
        decode_slot(encode_slot(1, dataclasses.replace(state, job=stale), "t"), constants)
    assert any("weeks_remaining" in i for i in exc.value.details["issues"])


def test_negative_money_is_corruption(state, constants):
    broken = dataclasses.replace(state, profile=dataclasses.replace(state.profile, money=-1))
    with pytest.raises(SaveCorruptedError):
        decode_slot(encode_slot(1, broken, "t"), constants)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda d: d.update(save_format_version=99),
        lambda d: d["state"]["profile"].update(money=999999),
        lambda d: d.update(slot_id=3),
        lambda d: d.pop("state"),
    ],
)
def test_document_tampering_is_detected(state, constants, mutate):
    raw = _tampered(encode_slot(1, state, "t"), mutate)
    with pytest.raises(SaveCorruptedError):
        decode_slot(raw, constants, expected_slot_id=1)


def test_unreadable_json_is_corruption(constants):
    with pytest.raises(SaveCorruptedError) as exc:
        decode_slot("{not json", constants)
    assert "invalid JSON" in exc.value.details["reason"]


def test_sqlite_store_round_trip(tmp_path):
    with SqliteSaveStore(tmp_path / "saves.sqlite3") as store:
        assert store.load_all() == {}
        store.write_slot(1, "{}", save_format_version=1, saved_at="a")
        store.write_slot(1, "{\"v\":2}", save_format_version=1, saved_at="b")
        row = store.read_slot(1)
        assert (row.payload_json, row.saved_at) == ("{\"v\":2}", "b")
        assert list(store.load_all()) == [1]
        assert store.clear_slot(1) is True
        assert store.clear_slot(1) is False
        assert store.read_slot(1) is None


def test_sqlite_store_survives_reopen(tmp_path):
    path = tmp_path / "saves.sqlite3"
    with SqliteSaveStore(path) as store:
        store.write_slot(3, "{}", save_format_version=1, saved_at="x")
    with SqliteSaveStore(path) as store:
        assert store.read_slot(3).saved_at == "x"


def test_sqlite_writes_inside_an_outer_transaction(tmp_path):
    with SqliteSaveStore(tmp_path / "saves.sqlite3") as store:
        with store.transaction():
            store.write_slot(1, "{}", save_format_version=1, saved_at="a")
            store.write_slot(2, "{}", save_format_version=1, saved_at="a")
        assert sorted(store.load_all()) == [1, 2]

        with pytest.raises(RuntimeError):
            with store.transaction():
                store.write_slot(3, "{}", save_format_version=1, saved_at="b")
                raise RuntimeError("abort")
        assert store.read_slot(3) is None


def test_failed_inner_write_keeps_the_outer_one(tmp_path):
    with SqliteSaveStore(tmp_path / "saves.sqlite3") as store:
        with store.transaction():
            store.write_slot(1, "{}", save_format_version=1, saved_at="a")
            with pytest.raises(RuntimeError):
                with store.transaction() as cur:
                    cur.execute("DELETE FROM save_slots WHERE slot_id=1;")
                    raise RuntimeError("abort")
        assert store.read_slot(1).saved_at == "a"


def test_registry_lifecycle(registry, new_profile_data):
    slots = registry.list_slots()
    assert [s.slot_id for s in slots] == [1, 2, 3]
    assert all(s.is_empty for s in slots)

    engine = registry.start_new_game(2, new_profile_data)
    assert registry.active_slot_id == 2
    assert registry.list_slots()[1].summary()["player_name"] == "Jamie Pinsetter"

    engine.play_game()
    registry.save_current_game()
    registry.exit_to_menu()
    assert registry.active_engine is None

    loaded = registry.load_game(2)
    assert loaded.profile.total_games_played == 1

    registry.delete_game(2)
    assert registry.active_engine is None
    assert registry.list_slots()[1].is_empty


def test_unsaved_progress_is_dropped_on_exit(registry, new_profile_data):
    registry.start_new_game(1, new_profile_data).play_game()
    registry.exit_to_menu()
    assert registry.load_game(1).profile.total_games_played == 0

    registry.load_game(1).play_game()
    registry.exit_to_menu(save=True)
    assert registry.load_game(1).profile.total_games_played == 1


def test_registry_slot_errors(registry, new_profile_data):
    for bad in (0, 4, "x"):
        with pytest.raises(CareerError) as exc:
            registry.start_new_game(bad, new_profile_data)
        assert exc.value.code == INVALID_SLOT

    with pytest.raises(CareerError) as exc:
        registry.load_game(1)
    assert exc.value.code == INVALID_SLOT

    with pytest.raises(CareerError) as exc:
        registry.delete_game(1)
    assert exc.value.code == INVALID_SLOT

    with pytest.raises(CareerError) as exc:
        registry.save_current_game()
    assert exc.value.code == NO_ACTIVE_GAME


def test_corrupted_slot_is_listed_and_refused(registry, new_profile_data):
    registry.start_new_game(3, new_profile_data)
    registry.exit_to_menu()
    store = registry._store
    row = store.read_slot(3)
    store.write_slot(3, row.payload_json.replace('"money":', '"money":-', 1), save_format_version=1, saved_at="t")

    listed = registry.list_slots()[2]
    assert listed.corrupted and not listed.is_empty

    with pytest.raises(SaveCorruptedError):
        registry.load_game(3)

    registry.delete_game(3)
    assert registry.list_slots()[2].is_empty
