# ---------- TESTS FOR DYNAMODB MANAGER ----------

import json

import pytest
from unittest.mock import MagicMock, patch

from skillpath.config import settings
from skillpath.utils.dynamodb_manager import get_dynamodb_resource, get_profile, put_profile
from skillpath.utils.exceptions import ExternalServiceError

mock_snapshot = {
    "share_id": "Ab3_k9Zx-Q",
    "job_title": "Engineer",
    "completed_at": "2024-05-01T10:00:00+00:00",
    "skill_gaps": [{"name": "Go", "priority": "High", "impact": "+10%"}],
}


# Mock DynamoDB table
@pytest.fixture
def mock_dynamodb_table():
    """Create a mock DynamoDB table."""
    table = MagicMock()
    table.put_item = MagicMock()
    table.get_item = MagicMock(return_value={})
    return table


# Mock DynamoDB resource
@pytest.fixture
def mock_dynamodb_resource(mock_dynamodb_table):
    """Create a mock DynamoDB resource."""
    resource = MagicMock()
    resource.Table = MagicMock(return_value=mock_dynamodb_table)
    return resource


def test_resource_disabled_in_local_mode():
    assert get_dynamodb_resource() is None


def test_put_profile_without_remote_store_raises():
    with pytest.raises(ExternalServiceError):
        put_profile("Ab3_k9Zx-Q", mock_snapshot)


@patch("skillpath.utils.dynamodb_manager.get_dynamodb_resource")
def test_put_profile_writes_item(mock_get_resource, mock_dynamodb_resource, mock_dynamodb_table):
    mock_get_resource.return_value = mock_dynamodb_resource

    completed_at = put_profile("Ab3_k9Zx-Q", mock_snapshot)

    assert completed_at == "2024-05-01T10:00:00+00:00"
    mock_dynamodb_resource.Table.assert_called_with(settings.DYNAMODB_TABLE_NAME)
    item = mock_dynamodb_table.put_item.call_args.kwargs["Item"]
    assert item["share_id"] == "Ab3_k9Zx-Q"
    assert item["job_title"] == "Engineer"
    assert json.loads(item["profile"]) == mock_snapshot


@patch("skillpath.utils.dynamodb_manager.get_dynamodb_resource")
def test_put_profile_reraises_errors(mock_get_resource, mock_dynamodb_resource, mock_dynamodb_table):
    mock_get_resource.return_value = mock_dynamodb_resource
    mock_dynamodb_table.put_item.side_effect = Exception("ProvisionedThroughputExceeded")

    with pytest.raises(Exception, match="ProvisionedThroughputExceeded"):
        put_profile("Ab3_k9Zx-Q", mock_snapshot)


@patch("skillpath.utils.dynamodb_manager.get_dynamodb_resource")
def test_get_profile_decodes_item(mock_get_resource, mock_dynamodb_resource, mock_dynamodb_table):
    mock_get_resource.return_value = mock_dynamodb_resource
    mock_dynamodb_table.get_item.return_value = {
        "Item": {
            "share_id": "Ab3_k9Zx-Q",
            "profile": json.dumps({"job_title": "Engineer"}),
            "completed_at": "2024-05-01T10:00:00+00:00",
        }
    }

    profile = get_profile("Ab3_k9Zx-Q")

    mock_dynamodb_table.get_item.assert_called_with(Key={"share_id": "Ab3_k9Zx-Q"})
    assert profile == {
        "job_title": "Engineer",
        "completed_at": "2024-05-01T10:00:00+00:00",
        "share_id": "Ab3_k9Zx-Q",
    }


@patch("skillpath.utils.dynamodb_manager.get_dynamodb_resource")
def test_get_profile_not_found(mock_get_resource, mock_dynamodb_resource):
    mock_get_resource.return_value = mock_dynamodb_resource
    assert get_profile("missing") is None


@patch("skillpath.utils.dynamodb_manager.get_dynamodb_resource")
def test_get_profile_swallows_errors(mock_get_resource, mock_dynamodb_resource, mock_dynamodb_table):
    mock_get_resource.return_value = mock_dynamodb_resource
    mock_dynamodb_table.get_item.side_effect = Exception("AccessDenied")

    assert get_profile("Ab3_k9Zx-Q") is None
