"""Simulate a group ranking night.

Creates a group in an in-memory store, adds participants with fake names
(faker with a fixed seed), lets each of them rank the catalog through a
pairwise session answering from a hidden random preference order, submits
every ranking and prints the combined group result.

Usage:
    python scripts/simulate_group.py
    python scripts/simulate_group.py --participants 6 --catalog entries.json
"""

import argparse
import random
import sys
from pathlib import Path

from faker import Faker

sys.path.insert(0, str(Path(__file__).parent.parent))

from eurorank.catalog import DEFAULT_CATALOG, describe_ranking, load_catalog
from eurorank.engine import RankingSession
from eurorank.flow import complete_session, group_results, start_ranking
from eurorank.models import Participant
from eurorank.stores import create_store

SEED = 20240511


def rank_with_preference(session: RankingSession, preference: list[int]) -> int:
    """Answer every pair from a fixed preference order. Returns questions asked."""
    position = {item: i for i, item in enumerate(preference)}
    asked = 0
    pair = session.initialize(len(preference))
    while pair is not None:
        a, b = pair
        asked += 1
        if position[a] < position[b]:
            pair = session.record_comparison(a, b)
        else:
            pair = session.record_comparison(b, a)
    return asked


def main():
    parser = argparse.ArgumentParser(description=__doc__.split("\n")[0])
    parser.add_argument("--participants", type=int, default=4,
                        help="Number of group members (default: 4)")
    parser.add_argument("--catalog", type=Path,
                        help="JSON catalog file (default: built-in entries)")
    parser.add_argument("--seed", type=int, default=SEED,
                        help=f"Random seed (default: {SEED})")
    args = parser.parse_args()

    catalog = load_catalog(args.catalog) if args.catalog else DEFAULT_CATALOG
    rng = random.Random(args.seed)
    fake = Faker()
    Faker.seed(args.seed)

    store = create_store("memory")
    names = [fake.first_name() for _ in range(args.participants)]
    group = store.create_group(f"{fake.city()} Watch Party", host_id="p0")
    group.participants = [Participant(id=f"p{i}", name=name) for i, name in enumerate(names)]
    group.game_started = True
    store.upsert_group(group)

    total = len(catalog) * (len(catalog) - 1) // 2
    for participant in group.participants:
        start_ranking(store, group.id, participant.id)
        preference = list(range(len(catalog)))
        rng.shuffle(preference)
        session = RankingSession(rng=rng)
        asked = rank_with_preference(session, preference)
        ranking = complete_session(session, store, group.id, participant.id)
        print(f"{participant.name}: {asked} of {total} questions asked")
        print(describe_ranking(ranking, catalog))
        print()

    results = group_results(store, group.id, len(catalog))
    print(f"Group: {group.name} ({results.num_submitted} of "
          f"{results.num_participants} completed)")
    scores = results.result.details["scores"]
    for placement in results.result.final_ranking:
        item = catalog[placement.item]
        tie = " (tied)" if placement.tied else ""
        print(f"{placement.rank}. {item.name} - {scores[placement.item]} pts{tie}")


if __name__ == "__main__":
    main()
