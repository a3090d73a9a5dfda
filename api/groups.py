"""Vercel serverless function for the shared groups endpoint."""

import json
import logging
import sys
from pathlib import Path

# Add the project root to the path so we can import eurorank
sys.path.insert(0, str(Path(__file__).parent.parent))

from eurorank.models import Participant
from eurorank.stores import GroupNotFound, StoreError, create_store

logger = logging.getLogger(__name__)

# Lives as long as the function instance does
store = create_store("memory")


def handler(request):
    """Handle requests to list, create, update and delete groups.

    Accepts:
    - GET: all groups, or one group when an "id" query parameter is given
    - POST with JSON body: {"name": ..., "hostId": ...}
    - PUT with JSON body: {"id": ..., "name"?, "participants"?, "gameStarted"?}
    - DELETE with JSON body: {"id": ...}
    """
    # Handle CORS preflight
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )

    try:
        if request.method == "GET":
            group_id = (getattr(request, "query", None) or {}).get("id")
            if group_id:
                return create_response(store.get_group(group_id).to_dict())
            return create_response([g.to_dict() for g in store.list_groups()])

        if request.method not in ("POST", "PUT", "DELETE"):
            return create_response(
                {"error": "Method not allowed."},
                status=405,
            )

        data = read_json(request)

        if request.method == "POST":
            if not data.get("name"):
                return create_response({"error": "Group name is required"}, status=400)
            if not data.get("hostId"):
                return create_response({"error": "Host ID is required"}, status=400)
            group = store.create_group(data["name"], data["hostId"])
            return create_response(group.to_dict())

        if not data.get("id"):
            return create_response({"error": "Group ID is required"}, status=400)

        if request.method == "DELETE":
            return create_response(store.delete_group(data["id"]).to_dict())

        group = store.get_group(data["id"])
        if data.get("name"):
            group.name = data["name"]
        if data.get("participants") is not None:
            group.participants = [Participant.from_dict(p) for p in data["participants"]]
        if data.get("gameStarted") is not None:
            group.game_started = bool(data["gameStarted"])
        return create_response(store.upsert_group(group).to_dict())

    except GroupNotFound:
        return create_response({"error": "Group not found"}, status=404)
    except json.JSONDecodeError as e:
        return create_response({"error": f"Invalid JSON: {e}"}, status=400)
    except (KeyError, TypeError, ValueError, StoreError) as e:
        return create_response({"error": f"Invalid group data: {e}"}, status=400)
    except Exception as e:
        logger.exception("Unhandled error in groups endpoint")
        return create_response({"error": f"Internal error: {e}"}, status=500)


def read_json(request) -> dict:
    """Decode a JSON object from the request body."""
    body = request.body.decode("utf-8") if request.body else "{}"
    data = json.loads(body)
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def create_response(body, status: int = 200, headers: dict = None):
    """Create a response object for Vercel."""
    response_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }
    if headers:
        response_headers.update(headers)

    if isinstance(body, (dict, list)):
        body = json.dumps(body)

    # Return in format expected by Vercel Python runtime
    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }
