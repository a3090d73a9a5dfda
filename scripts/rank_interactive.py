"""Rank the catalog from the terminal, one pair at a time.

Usage:
    python scripts/rank_interactive.py
    python scripts/rank_interactive.py --catalog entries.json
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from eurorank.catalog import DEFAULT_CATALOG, describe_ranking, load_catalog
from eurorank.engine import RankingSession


def describe(item) -> str:
    if item.artist and item.song:
        return f"{item.name}: {item.artist} - {item.song}"
    return item.name


def ask(catalog, a: int, b: int) -> tuple[int, int]:
    """Prompt until the user picks one of the pair. Returns (winner, loser)."""
    while True:
        print(f"  1) {describe(catalog[a])}")
        print(f"  2) {describe(catalog[b])}")
        answer = input("Which do you prefer? [1/2] ").strip()
        if answer == "1":
            return a, b
        if answer == "2":
            return b, a
        print("Please answer 1 or 2.")


def main():
    parser = argparse.ArgumentParser(description=__doc__.split("\n")[0])
    parser.add_argument("--catalog", type=Path,
                        help="JSON catalog file (default: built-in entries)")
    args = parser.parse_args()

    catalog = load_catalog(args.catalog) if args.catalog else DEFAULT_CATALOG
    session = RankingSession()
    pair = session.initialize(len(catalog))

    try:
        while pair is not None:
            print(f"\n[{session.progress_percent()}% done]")
            winner, loser = ask(catalog, *pair)
            pair = session.record_comparison(winner, loser)
    except (KeyboardInterrupt, EOFError):
        print("\nStopped early. Ranking so far:")
        print(describe_ranking(session.current_ranking(), catalog))
        return

    print(f"\nYour ranking after {session.decisions} of "
          f"{session.total_comparisons()} possible questions:")
    print(describe_ranking(session.current_ranking(), catalog))


if __name__ == "__main__":
    main()
