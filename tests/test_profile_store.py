# ---------- TESTS FOR PROFILE STORE ----------

import pytest

from skillpath.config.profile_schemas import DEFAULT_PROFILE
from skillpath.config.validation_constants import TOTAL_STEPS
from skillpath.utils.exceptions import InvalidStep
from skillpath.utils.local_store import SESSION_SCOPE, KeyValueStore
from skillpath.wizard.profile_store import ProfileStore


@pytest.fixture
def store():
    return ProfileStore()


def test_new_store_starts_from_defaults(store):
    profile = store.get()
    assert profile == DEFAULT_PROFILE
    assert profile["current_step"] == 1


def test_get_returns_a_copy(store):
    profile = store.get()
    profile["certificate_urls"].append("https://example.com/cert.pdf")
    assert store.get()["certificate_urls"] == []


def test_patch_is_a_shallow_merge(store):
    store.patch({"job_title": "Engineer"})
    profile = store.patch({"current_salary": 7000})

    assert profile["job_title"] == "Engineer"
    assert profile["current_salary"] == 7000
    assert profile["country"] == "Malaysia"


def test_patch_replaces_nested_values(store):
    store.patch({"salary_projection": {"current": 1, "projected": 2, "reason": "x"}})
    profile = store.patch({"salary_projection": {"current": 3, "projected": 4, "reason": "y"}})
    assert profile["salary_projection"] == {"current": 3, "projected": 4, "reason": "y"}


def test_patch_keeps_unknown_keys(store):
    profile = store.patch({"favourite_colour": "teal"})
    assert profile["favourite_colour"] == "teal"


def test_patch_clamps_current_step(store):
    assert store.patch({"current_step": 42})["current_step"] == TOTAL_STEPS
    assert store.patch({"current_step": -3})["current_step"] == 1


def test_patch_increments_revision(store):
    revision = store.revision
    store.patch({"job_title": "Engineer"})
    assert store.revision == revision + 1


def test_advance_stops_at_last_step(store):
    for _ in range(TOTAL_STEPS + 3):
        store.advance()
    assert store.current_step == TOTAL_STEPS


def test_retreat_stops_at_first_step(store):
    store.advance()
    store.retreat()
    store.retreat()
    assert store.current_step == 1


def test_go_to_valid_step(store):
    assert store.go_to(5) == 5
    assert store.get()["current_step"] == 5


@pytest.mark.parametrize("step", [0, TOTAL_STEPS + 1, -1, "3", 2.0, True])
def test_go_to_invalid_step_leaves_profile_unchanged(store, step):
    store.patch({"job_title": "Engineer"})
    before = store.get()

    with pytest.raises(InvalidStep):
        store.go_to(step)

    assert store.get() == before


def test_reset_restores_defaults_and_bumps_epoch(store):
    store.patch({"job_title": "Engineer", "skill_gaps": [{"name": "Go"}]})
    store.go_to(4)
    epoch = store.epoch

    profile = store.reset()

    assert profile == DEFAULT_PROFILE
    assert store.current_step == 1
    assert store.epoch == epoch + 1


def test_store_persists_to_backing_and_restores():
    backing = KeyValueStore()
    store = ProfileStore(session_id="abc", backing=backing)
    store.patch({"job_title": "Engineer"})
    store.advance()

    assert backing.get(f"{SESSION_SCOPE}abc")["job_title"] == "Engineer"

    restored = ProfileStore(session_id="abc", backing=backing)
    assert restored.get()["job_title"] == "Engineer"
    assert restored.current_step == 2


def test_restored_step_is_clamped():
    backing = KeyValueStore()
    backing.set(f"{SESSION_SCOPE}abc", {"current_step": 99})
    assert ProfileStore(session_id="abc", backing=backing).current_step == TOTAL_STEPS
