# ---------- TESTS FOR PERSISTENCE GATEWAY ----------

import re

import pytest
from unittest.mock import MagicMock

from skillpath.utils.local_store import PROFILE_SCOPE
from skillpath.wizard.persistence import PersistenceGateway, new_share_id


@pytest.fixture
def remote():
    """Dict-backed stand-in for the remote profile store."""
    records = {}
    put = MagicMock(side_effect=lambda share_id, snapshot: records.__setitem__(share_id, snapshot))
    get = MagicMock(side_effect=lambda share_id: records.get(share_id))
    return records, put, get


def test_new_share_id_is_url_safe():
    share_id = new_share_id()
    assert re.fullmatch(r"[A-Za-z0-9_-]{10}", share_id)
    assert new_share_id() != share_id


def test_publish_mints_id_and_stores_remotely(local_store, remote):
    records, put, get = remote
    gateway = PersistenceGateway(local_store, put, get)

    share_id = gateway.publish({"job_title": "Engineer"})

    assert records[share_id]["job_title"] == "Engineer"
    assert records[share_id]["share_id"] == share_id
    assert "completed_at" in records[share_id]
    assert local_store.get(f"{PROFILE_SCOPE}{share_id}") is None


def test_publish_twice_keeps_one_record(local_store, remote):
    records, put, get = remote
    gateway = PersistenceGateway(local_store, put, get)

    share_id = gateway.publish({"job_title": "Engineer"})
    again = gateway.publish({"job_title": "Senior Engineer", "share_id": share_id})

    assert again == share_id
    assert list(records) == [share_id]
    assert gateway.fetch(share_id)["job_title"] == "Senior Engineer"


def test_remote_failure_falls_back_to_local(local_store):
    put = MagicMock(side_effect=Exception("Network unreachable"))
    get = MagicMock(side_effect=Exception("Network unreachable"))
    gateway = PersistenceGateway(local_store, put, get)

    share_id = gateway.publish({"job_title": "Engineer"})

    assert local_store.get(f"{PROFILE_SCOPE}{share_id}")["job_title"] == "Engineer"
    assert gateway.fetch(share_id)["job_title"] == "Engineer"


def test_local_mode_uses_local_store(local_store):
    # Remote store is disabled by the test settings
    gateway = PersistenceGateway(local_store)

    share_id = gateway.publish({"job_title": "Engineer"})

    assert gateway.fetch(share_id)["share_id"] == share_id


def test_fetch_unknown_id_returns_none(local_store, remote):
    records, put, get = remote
    gateway = PersistenceGateway(local_store, put, get)

    assert gateway.fetch("doesnotexist") is None
    assert gateway.fetch("") is None


def test_fetch_prefers_remote(local_store, remote):
    records, put, get = remote
    records["abc"] = {"share_id": "abc", "job_title": "Remote"}
    local_store.set(f"{PROFILE_SCOPE}abc", {"share_id": "abc", "job_title": "Local"})
    gateway = PersistenceGateway(local_store, put, get)

    assert gateway.fetch("abc")["job_title"] == "Remote"
