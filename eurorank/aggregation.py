"""Combine individual rankings into a group ranking."""

from dataclasses import dataclass, field
from typing import Any

from eurorank.models import Group, Placement


@dataclass
class GroupResult:
    """Aggregated ranking for a group.

    Attributes:
        order: Item indices from 1st to last place (stable by index on ties)
        final_ranking: Placements, with items on equal score sharing a rank
        details: Scores and per-participant breakdowns for transparency
    """
    order: list[int]
    final_ranking: list[Placement]
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "order": self.order,
            "final_ranking": [p.to_dict() for p in self.final_ranking],
            "details": self.details,
        }


def positional_scores(
    rankings: list[list[int]], item_count: int
) -> tuple[dict[int, int], dict[int, list[int]]]:
    """Score items by their positions across several rankings.

    The item at position p (0-indexed) of a ranking earns item_count - p
    points, so 1st place earns item_count points and last place earns 1.

    Returns (scores dict, breakdowns dict mapping item -> points per ranking).

    Raises:
        ValueError: If a ranking is not a permutation of range(item_count)
    """
    scores: dict[int, int] = {i: 0 for i in range(item_count)}
    breakdowns: dict[int, list[int]] = {i: [] for i in range(item_count)}

    for ranking in rankings:
        awarded = {i: 0 for i in range(item_count)}
        for position, item in enumerate(ranking):
            if not 0 <= item < item_count:
                raise ValueError(
                    f"Ranking refers to item {item}, catalog has {item_count} items"
                )
            awarded[item] += item_count - position
        if sorted(ranking) != list(range(item_count)):
            raise ValueError(
                f"Ranking {ranking} must list each of the {item_count} items exactly once"
            )
        for item, points in awarded.items():
            scores[item] += points
            breakdowns[item].append(points)

    return scores, breakdowns


def rank_by_score(scores: dict[int, int]) -> tuple[list[int], list[int | list[int]]]:
    """Order items by descending score.

    Returns (flat order with ties kept in index order, grouped order where
    tied items are sublists).
    """
    order = sorted(scores, key=lambda i: (-scores[i], i))

    grouped: list[int | list[int]] = []
    i = 0
    while i < len(order):
        j = i + 1
        while j < len(order) and scores[order[j]] == scores[order[i]]:
            j += 1
        if j - i == 1:
            grouped.append(order[i])
        else:
            grouped.append(order[i:j])
        i = j

    return order, grouped


def aggregate_group(group: Group, item_count: int) -> GroupResult:
    """Aggregate the submitted rankings of a group.

    Only participants whose status is submitted and whose ranking is
    non-empty contribute.
    """
    submitted = group.submitted_participants()
    scores, breakdowns = positional_scores(
        [p.rankings for p in submitted], item_count
    )
    order, grouped = rank_by_score(scores)

    return GroupResult(
        order=order,
        final_ranking=Placement.build_ranking(grouped),
        details={
            "scores": scores,
            "breakdowns": {
                item: {"participants": [p.name for p in submitted], "points": breakdowns[item]}
                for item in range(item_count)
            },
            "max_possible": item_count * len(submitted),
            "num_submitted": len(submitted),
            "num_participants": len(group.participants),
        },
    )
