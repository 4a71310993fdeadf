"""HazardMapClient tests, against the app and against stub transports."""

import uuid

import httpx
import pytest

from hazardmap.client.api_client import ApiClientError, HazardMapClient


@pytest.fixture
def api(client):
    return HazardMapClient(base_url="http://testserver/api", http=client)


def _names():
    uid = uuid.uuid4().hex[:6]
    return f"cli_{uid}", f"cli_{uid}@test.com"


def test_client_lifecycle_against_app(api):
    username, email = _names()
    user = api.create_user(username, email)
    assert user["username"] == username

    hazard = api.create_hazard(25.2, 55.3, "spill", user["id"])
    assert hazard["status"] == "open"
    assert any(h["id"] == hazard["id"] for h in api.fetch_hazards())

    claimed = api.claim_hazard(hazard["id"], user["id"])
    assert claimed["status"] == "claimed"
    done = api.complete_hazard(hazard["id"], user["id"])
    assert done["status"] == "completed"

    assert api.get_hazard(hazard["id"])["completed_by"] == user["id"]
    assert api.delete_hazard(hazard["id"]) == {"message": "Hazard deleted successfully"}
    assert api.get_user(user["id"])["email"] == email
    assert any(u["id"] == user["id"] for u in api.fetch_users())
    assert api.health() == {"status": "ok"}


def test_server_message_is_carried(api):
    username, email = _names()
    user = api.create_user(username, email)
    hazard = api.create_hazard(1.0, 1.0, "claimed twice")
    api.claim_hazard(hazard["id"], user["id"])

    with pytest.raises(ApiClientError) as exc:
        api.claim_hazard(hazard["id"], user["id"])
    assert exc.value.status_code == 400
    assert exc.value.message == "Hazard is not available to claim"


def test_duplicate_user_error(api):
    username, email = _names()
    api.create_user(username, email)
    with pytest.raises(ApiClientError) as exc:
        api.create_user(username, email)
    assert exc.value.status_code == 409
    assert "already exists" in str(exc.value)


def test_network_failure_uses_fallback_message():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(transport=httpx.MockTransport(refuse))
    api = HazardMapClient(base_url="http://hazards.invalid/api", http=http)

    with pytest.raises(ApiClientError) as exc:
        api.complete_hazard(1, 2)
    assert exc.value.message == "Failed to complete hazard"
    assert exc.value.status_code is None


def test_non_json_error_body_uses_fallback_message():
    http = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(502, text="Bad gateway")))
    api = HazardMapClient(base_url="http://hazards.invalid/api", http=http)

    with pytest.raises(ApiClientError) as exc:
        api.claim_hazard(1, 2)
    assert exc.value.message == "Failed to claim hazard"
    assert exc.value.status_code == 502


def test_legacy_error_key_is_understood():
    http = httpx.Client(
        transport=httpx.MockTransport(lambda request: httpx.Response(403, json={"error": "Not yours"}))
    )
    api = HazardMapClient(base_url="http://hazards.invalid/api", http=http)

    with pytest.raises(ApiClientError) as exc:
        api.complete_hazard(1, 2)
    assert exc.value.message == "Not yours"


def test_request_shape():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = request.content
        return httpx.Response(201, json={"id": 1})

    http = httpx.Client(transport=httpx.MockTransport(handler))
    api = HazardMapClient(base_url="http://hazards.invalid/api/", http=http)
    api.create_hazard(1.5, 2.5, "leak", 7)

    assert seen["method"] == "POST"
    assert seen["url"] == "http://hazards.invalid/api/hazards"
    assert b'"userId":7' in seen["body"].replace(b" ", b"")
