"""Tests for the HTTP group store, using httpx's mock transport."""

import json

import httpx
import pytest
from tests.conftest import make_group

from eurorank.stores import GroupNotFound, StoreError
from eurorank.stores.http import HttpGroupStore

BASE_URL = "https://ranking.example.com"


def make_store(handler) -> HttpGroupStore:
    return HttpGroupStore(base_url=BASE_URL, transport=httpx.MockTransport(handler))


class TestHttpGroupStore:
    def test_list_groups(self):
        group = make_group("Party", {"Ann": [1, 0]})

        def handler(request):
            assert request.method == "GET"
            assert str(request.url) == f"{BASE_URL}/api/groups"
            return httpx.Response(200, json=[group.to_dict()])

        assert make_store(handler).list_groups() == [group]

    def test_get_group_scans_list(self):
        group = make_group("Party", {"Ann": [1, 0]})
        store = make_store(lambda request: httpx.Response(200, json=[group.to_dict()]))
        assert store.get_group("g-party") == group
        with pytest.raises(GroupNotFound):
            store.get_group("other")

    def test_upsert_sends_put(self):
        group = make_group("Party", {"Ann": [1, 0]})
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=group.to_dict())

        make_store(handler).upsert_group(group)
        assert seen["method"] == "PUT"
        assert seen["body"]["id"] == "g-party"
        assert seen["body"]["gameStarted"] is True
        assert seen["body"]["participants"][0]["rankings"] == [1, 0]
        assert seen["body"]["participants"][0]["status"] == "submitted"

    def test_upsert_unknown_group(self):
        store = make_store(lambda request: httpx.Response(404, json={"error": "Group not found"}))
        with pytest.raises(GroupNotFound, match="Group not found"):
            store.upsert_group(make_group("Party", {"Ann": []}))

    def test_create_sends_post(self):
        def handler(request):
            body = json.loads(request.content)
            assert request.method == "POST"
            assert body == {"name": "Party", "hostId": "h1"}
            return httpx.Response(200, json={
                "id": "new", "name": "Party", "hostId": "h1", "participants": [],
                "createdAt": 1, "lastUpdated": 1, "gameStarted": False,
            })

        assert make_store(handler).create_group("Party", "h1").id == "new"

    def test_create_validates_locally(self):
        store = make_store(lambda request: pytest.fail("should not send"))
        with pytest.raises(StoreError, match="Host ID"):
            store.create_group("Party", "")

    def test_delete_sends_id(self):
        group = make_group("Party", {"Ann": []})

        def handler(request):
            assert request.method == "DELETE"
            assert json.loads(request.content) == {"id": "g-party"}
            return httpx.Response(200, json=group.to_dict())

        assert make_store(handler).delete_group("g-party").id == "g-party"

    def test_server_error(self):
        store = make_store(lambda request: httpx.Response(500, json={"error": "boom"}))
        with pytest.raises(StoreError, match="500"):
            store.list_groups()

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(StoreError, match="Error contacting"):
            make_store(handler).list_groups()

    def test_invalid_json(self):
        store = make_store(lambda request: httpx.Response(200, content=b"<html>"))
        with pytest.raises(StoreError, match="invalid JSON"):
            store.list_groups()

    @pytest.mark.parametrize("records", [
        [{"name": "Party"}],
        ["g-party"],
        [{"id": "g1", "name": "Party", "hostId": "h1", "participants": "xy"}],
    ])
    def test_malformed_group(self, records):
        store = make_store(lambda request: httpx.Response(200, json=records))
        with pytest.raises(StoreError, match="malformed group"):
            store.list_groups()

    def test_malformed_group_on_update(self):
        store = make_store(lambda request: httpx.Response(200, json={"id": "g-party"}))
        with pytest.raises(StoreError, match="malformed group"):
            store.upsert_group(make_group("Party", {"Ann": []}))

    def test_env_configuration(self, monkeypatch):
        monkeypatch.setenv("EURORANK_API_URL", "https://env.example.com/")
        monkeypatch.setenv("EURORANK_HTTP_TIMEOUT", "5")
        store = HttpGroupStore()
        assert store.base_url == "https://env.example.com"
        assert store.timeout == 5.0
