"""Orchestrator: connect ranking sessions to group storage."""

import logging
from dataclasses import dataclass
from typing import Any

from eurorank.aggregation import GroupResult, aggregate_group
from eurorank.engine import RankingError, RankingSession
from eurorank.models import Group, Participant, ParticipantStatus
from eurorank.stores.base import GroupNotFound, GroupStore, StoreError

logger = logging.getLogger(__name__)


class FlowError(Exception):
    """Error while moving a ranking between a session and a group."""
    pass


@dataclass
class GroupResults:
    """Aggregated group ranking plus completion counters."""
    group: Group
    result: GroupResult

    @property
    def num_submitted(self) -> int:
        return self.result.details["num_submitted"]

    @property
    def num_participants(self) -> int:
        return self.result.details["num_participants"]

    @property
    def all_submitted(self) -> bool:
        return self.num_participants > 0 and self.num_submitted == self.num_participants

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "group_id": self.group.id,
            "group_name": self.group.name,
            "num_submitted": self.num_submitted,
            "num_participants": self.num_participants,
            "submitted": [
                {"name": p.name, "rankings": p.rankings}
                for p in sorted(self.group.submitted_participants(), key=lambda p: p.name)
            ],
            **self.result.to_dict(),
        }


def start_ranking(store: GroupStore, group_id: str, participant_id: str) -> Group:
    """Mark a participant as ranking once the host has started the game.

    Raises:
        FlowError: If the group or participant is unknown, or the game has
            not been started
    """
    group, participant = _load_participant(store, group_id, participant_id)
    if not group.game_started:
        raise FlowError(f"The host has not started group {group.name!r} yet")

    if participant.status is ParticipantStatus.NOT_STARTED:
        participant.status = ParticipantStatus.IN_PROGRESS
        group = _save(store, group)
        logger.info("Participant %s started ranking in group %s", participant_id, group_id)
    return group


def complete_session(
    session: RankingSession,
    store: GroupStore | None = None,
    group_id: str | None = None,
    participant_id: str | None = None,
) -> list[int]:
    """Take the final ranking from a finished session.

    When a group is given, the ranking is also written to the participant's
    record with status submitted.

    Returns:
        Item indices from best to worst

    Raises:
        FlowError: If the session is not finished, or the group write fails
    """
    try:
        if not session.is_complete:
            raise FlowError(
                f"Ranking is not finished: {session.remaining_comparisons()} "
                f"comparisons remain"
            )
        ranking = session.current_ranking()
    except RankingError as e:
        logger.exception("Cannot complete ranking session")
        raise FlowError(f"Ranking session is not usable: {e}") from e

    if store is None:
        return ranking
    if group_id is None:
        raise FlowError("A group id is required to submit to a group")
    if participant_id is None:
        raise FlowError("A participant id is required to submit to a group")

    group, participant = _load_participant(store, group_id, participant_id)
    participant.rankings = list(ranking)
    participant.status = ParticipantStatus.SUBMITTED
    _save(store, group)
    logger.info("Participant %s submitted a ranking to group %s", participant_id, group_id)
    return ranking


def group_results(store: GroupStore, group_id: str, item_count: int) -> GroupResults:
    """Aggregate every submitted ranking in a group.

    Raises:
        FlowError: If the group is unknown or a stored ranking is invalid
    """
    group = _load_group(store, group_id)
    try:
        result = aggregate_group(group, item_count)
    except ValueError as e:
        raise FlowError(f"Group {group.name!r} holds an invalid ranking: {e}") from e
    return GroupResults(group=group, result=result)


def _load_group(store: GroupStore, group_id: str) -> Group:
    try:
        return store.get_group(group_id)
    except GroupNotFound as e:
        raise FlowError(f"Group not found: {group_id}") from e
    except StoreError as e:
        raise FlowError(f"Could not load group {group_id}: {e}") from e


def _load_participant(
    store: GroupStore, group_id: str, participant_id: str
) -> tuple[Group, Participant]:
    group = _load_group(store, group_id)
    participant = group.get_participant(participant_id)
    if participant is None:
        raise FlowError(f"Participant {participant_id} is not in group {group.name!r}")
    return group, participant


def _save(store: GroupStore, group: Group) -> Group:
    try:
        return store.upsert_group(group)
    except StoreError as e:
        logger.exception("Failed to save group %s", group.id)
        raise FlowError(f"Could not save group {group.id}: {e}") from e
