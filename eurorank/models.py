"""Core data models for catalog items, groups and ranking results."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Self


def now_ms() -> int:
    """Current wall-clock time in milliseconds, the unit group records use."""
    return int(time.time() * 1000)


def _or_now(value: int | None) -> int:
    return now_ms() if value is None else value


@dataclass
class Item:
    """A single entry in the catalog being ranked.

    The ranking engine only ever sees the item's index in the catalog; the
    remaining fields are display metadata.
    """
    name: str
    artist: str = ""
    song: str = ""
    flag: str = ""
    audio_file: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "artist": self.artist,
            "song": self.song,
            "flag": self.flag,
            "audioFile": self.audio_file,
        }


@dataclass
class Placement:
    """An item's placement in a ranking.

    Attributes:
        item: Catalog index of the item
        rank: 1-indexed placement (tied items share the same rank)
        tied: Whether this item is tied with others at this rank
    """
    item: int
    rank: int
    tied: bool

    def to_dict(self) -> dict[str, Any]:
        return {"item": self.item, "rank": self.rank, "tied": self.tied}

    @classmethod
    def build_ranking(
        cls, ordered: list[int | list[int]]
    ) -> list[Self]:
        """Build a list of Placements from an ordered list.

        Args:
            ordered: Items in order from 1st to last place. Each element is
                either a single index (int) or a list of indices (list[int])
                for tied items.

        Returns:
            List of Placement objects with correct ranks and tied flags.
        """
        placements = []
        rank = 1
        for entry in ordered:
            if isinstance(entry, list):
                for item in entry:
                    placements.append(cls(item=item, rank=rank, tied=True))
                rank += len(entry)
            else:
                placements.append(cls(item=entry, rank=rank, tied=False))
                rank += 1

        return placements


class ParticipantStatus(str, Enum):
    """Where a participant is in their own ranking session."""
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    SUBMITTED = "submitted"

    @classmethod
    def parse(cls, value: str) -> Self:
        """Parse a status string, accepting the older client vocabulary."""
        if isinstance(value, cls):
            return value
        legacy = _LEGACY_STATUSES.get(value)
        if legacy is not None:
            return cls(legacy)
        return cls(value)


# Values written by earlier versions of the web client
_LEGACY_STATUSES = {
    "waiting": "not-started",
    "ready": "not-started",
    "ranking": "in-progress",
    "completed": "submitted",
}


@dataclass
class Participant:
    """A member of a group and the ranking they submitted (if any)."""
    id: str
    name: str
    rankings: list[int] = field(default_factory=list)
    timestamp: int = field(default_factory=now_ms)
    status: ParticipantStatus = ParticipantStatus.NOT_STARTED

    @property
    def has_submitted(self) -> bool:
        return self.status is ParticipantStatus.SUBMITTED and len(self.rankings) > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "rankings": list(self.rankings),
            "timestamp": self.timestamp,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["id"],
            name=data["name"],
            rankings=[int(i) for i in data.get("rankings") or []],
            timestamp=_or_now(data.get("timestamp")),
            status=ParticipantStatus.parse(data.get("status") or "not-started"),
        )


@dataclass
class Group:
    """A shared ranking group.

    Attributes:
        id: Unique group identifier
        name: Display name chosen by the host
        participants: Members of the group, in join order
        host_id: Participant id of the group's creator
        game_started: Whether the host has opened ranking to all members
        created_at: Creation time in milliseconds
        last_updated: Last modification time in milliseconds
    """
    id: str
    name: str
    host_id: str
    participants: list[Participant] = field(default_factory=list)
    game_started: bool = False
    created_at: int = field(default_factory=now_ms)
    last_updated: int = field(default_factory=now_ms)

    def get_participant(self, participant_id: str) -> Participant | None:
        """Get a participant by id, or None if they are not in the group."""
        for p in self.participants:
            if p.id == participant_id:
                return p
        return None

    def submitted_participants(self) -> list[Participant]:
        """Participants who have submitted a final ranking."""
        return [p for p in self.participants if p.has_submitted]

    def touch(self) -> None:
        self.last_updated = now_ms()

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape used by the groups endpoint."""
        return {
            "id": self.id,
            "name": self.name,
            "participants": [p.to_dict() for p in self.participants],
            "createdAt": self.created_at,
            "hostId": self.host_id,
            "gameStarted": self.game_started,
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["id"],
            name=data["name"],
            host_id=data["hostId"],
            participants=[Participant.from_dict(p) for p in data.get("participants") or []],
            game_started=bool(data.get("gameStarted", False)),
            created_at=_or_now(data.get("createdAt")),
            last_updated=_or_now(data.get("lastUpdated")),
        )
