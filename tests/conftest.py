"""Shared test helpers."""

import random

import pytest

from eurorank.engine import RankingSession
from eurorank.models import Group, Participant, ParticipantStatus
from eurorank.stores.memory import InMemoryGroupStore


def answer_with_order(session: RankingSession, order: list[int], first_pair=None) -> list:
    """Answer every presented pair consistently with a total order.

    Args:
        session: An initialized session
        order: Item indices from best to worst
        first_pair: The pair returned by initialize()

    Returns:
        The pairs that were presented, in order.
    """
    position = {item: i for i, item in enumerate(order)}
    presented = []
    pair = first_pair
    while pair is not None:
        presented.append(pair)
        a, b = pair
        if position[a] < position[b]:
            pair = session.record_comparison(a, b)
        else:
            pair = session.record_comparison(b, a)
    return presented


def make_group(name: str, participants: dict[str, list[int]], game_started=True) -> Group:
    """Build a Group from a compact {participant_name: rankings} table.

    Participants with a non-empty ranking are marked submitted; the others
    are still ranking. The first participant is the host.
    """
    members = []
    for i, (member, rankings) in enumerate(participants.items()):
        status = ParticipantStatus.SUBMITTED if rankings else ParticipantStatus.IN_PROGRESS
        members.append(Participant(
            id=f"p{i}", name=member, rankings=list(rankings), timestamp=0, status=status,
        ))
    return Group(
        id=f"g-{name.lower().replace(' ', '-')}",
        name=name,
        host_id="p0",
        participants=members,
        game_started=game_started,
        created_at=0,
        last_updated=0,
    )


@pytest.fixture
def session():
    return RankingSession(rng=random.Random(1234))


@pytest.fixture
def store():
    return InMemoryGroupStore()
