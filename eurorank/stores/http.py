"""Group store backed by the /api/groups HTTP endpoint."""

import logging
import os
from typing import Any

import httpx

from eurorank.models import Group
from eurorank.stores import register_store
from eurorank.stores.base import GroupNotFound, GroupStore, StoreError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://eurovision-ranking.vercel.app"
DEFAULT_TIMEOUT = 30.0
GROUPS_PATH = "/api/groups"


@register_store("http")
class HttpGroupStore(GroupStore):
    """Reads and writes groups through the web app's groups endpoint.

    The base URL and timeout default to the EURORANK_API_URL and
    EURORANK_HTTP_TIMEOUT environment variables. The endpoint can only
    update groups it created, so upserting an unknown id raises
    GroupNotFound.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = (
            base_url or os.environ.get("EURORANK_API_URL") or DEFAULT_API_URL
        ).rstrip("/")
        if timeout is None:
            timeout = float(os.environ.get("EURORANK_HTTP_TIMEOUT", DEFAULT_TIMEOUT))
        self.timeout = timeout
        self._transport = transport

    def list_groups(self) -> list[Group]:
        data = self._request("GET")
        if not isinstance(data, list):
            raise StoreError("Groups endpoint did not return a list")
        return [_decode_group(g) for g in data]

    def upsert_group(self, group: Group) -> Group:
        data = self._request("PUT", json={
            "id": group.id,
            "name": group.name,
            "participants": [p.to_dict() for p in group.participants],
            "gameStarted": group.game_started,
        })
        return _decode_group(data)

    def create_group(self, name: str, host_id: str) -> Group:
        if not name:
            raise StoreError("Group name is required")
        if not host_id:
            raise StoreError("Host ID is required")
        return _decode_group(self._request("POST", json={"name": name, "hostId": host_id}))

    def delete_group(self, group_id: str) -> Group:
        return _decode_group(self._request("DELETE", json={"id": group_id}))

    def _request(self, method: str, json: dict[str, Any] | None = None) -> Any:
        """Send one request to the groups endpoint and return the decoded body."""
        url = self.base_url + GROUPS_PATH
        try:
            with httpx.Client(
                follow_redirects=True, timeout=self.timeout, transport=self._transport
            ) as client:
                response = client.request(method, url, json=json)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise GroupNotFound(_error_message(e.response)) from e
            raise StoreError(
                f"HTTP error from groups endpoint: {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise StoreError(f"Error contacting groups endpoint: {e}") from e
        except ValueError as e:
            raise StoreError(f"Groups endpoint returned invalid JSON: {e}") from e


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return "Group not found"
    if isinstance(body, dict) and body.get("error"):
        return body["error"]
    return "Group not found"


def _decode_group(data: Any) -> Group:
    """Build a Group from a server record, raising StoreError if it is malformed."""
    try:
        return Group.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise StoreError(f"Groups endpoint returned a malformed group: {e!r}") from e
