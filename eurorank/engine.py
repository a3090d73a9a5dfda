"""Pairwise ranking engine.

Builds a total order over a catalog of items from a sequence of "which do you
prefer" answers. Each answer is recorded in a dominance matrix that is kept
transitively closed, so a pair whose outcome is already implied by earlier
answers is never presented.
"""

import logging
import math
import random

logger = logging.getLogger(__name__)

Pair = tuple[int, int]


class RankingError(ValueError):
    """Base class for invalid calls into a ranking session."""
    pass


class InvalidItemCount(RankingError):
    """Raised when a session is initialized with a negative or non-integer count."""
    pass


class InvalidIndex(RankingError):
    """Raised when a comparison names an item outside the catalog, or the same
    item as both winner and loser."""
    pass


class SessionNotInitialized(RankingError):
    """Raised when a session is used before initialize() has been called."""
    pass


class ContradictoryComparison(RankingError):
    """Raised when a vote would contradict a preference already established.

    This can only happen when the caller submits a pair it was not given:
    settled pairs are never presented.
    """
    pass


class RankingSession:
    """One user's pairwise ranking session.

    Holds the dominance matrix, the shuffled queue of pending pairs and the
    item count. ``dominance[i][j]`` is True when item i is known, directly or
    transitively, to outrank item j.

    Usage:
        >>> session = RankingSession()
        >>> pair = session.initialize(4)
        >>> while pair is not None:
        ...     winner, loser = pair  # ask the user instead
        ...     pair = session.record_comparison(winner, loser)
        >>> session.current_ranking()
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()
        self._item_count: int | None = None
        self._dominance: list[list[bool]] = []
        self._pairs: list[Pair] = []
        self._position = 0
        self.decisions = 0

    @property
    def initialized(self) -> bool:
        return self._item_count is not None

    @property
    def item_count(self) -> int:
        self._require_initialized()
        return self._item_count

    @property
    def is_complete(self) -> bool:
        """Whether every pair has been settled."""
        return self.remaining_comparisons() == 0

    def initialize(self, item_count: int) -> Pair | None:
        """Start a new session over ``item_count`` items.

        Any previous state is discarded.

        Returns:
            The first pair to present, or None if fewer than two items.

        Raises:
            InvalidItemCount: If item_count is negative or not an integer
        """
        if isinstance(item_count, bool) or not isinstance(item_count, int):
            raise InvalidItemCount(f"Item count must be an integer, got {item_count!r}")
        if item_count < 0:
            raise InvalidItemCount(f"Item count must not be negative, got {item_count}")

        self._item_count = item_count
        self._dominance = [[False] * item_count for _ in range(item_count)]
        self._pairs = [
            (i, j)
            for i in range(item_count)
            for j in range(i + 1, item_count)
        ]
        self._rng.shuffle(self._pairs)
        self._position = 0
        self.decisions = 0

        logger.debug("Initialized ranking session: %d items, %d pairs",
                     item_count, len(self._pairs))
        return self._next_pair()

    def record_comparison(self, winner: int, loser: int) -> Pair | None:
        """Record that ``winner`` is preferred over ``loser``.

        A vote that is already implied changes nothing and simply returns the
        next pair.

        Returns:
            The next undetermined pair, or None once the ranking is complete.

        Raises:
            SessionNotInitialized: If initialize() has not been called
            InvalidIndex: If either index is out of range, or they are equal
            ContradictoryComparison: If loser is already known to outrank winner
        """
        self._require_initialized()
        self._check_index(winner, "winner")
        self._check_index(loser, "loser")
        if winner == loser:
            raise InvalidIndex(f"An item cannot be compared with itself (index {winner})")

        d = self._dominance
        if d[winner][loser]:
            logger.debug("Redundant vote %d > %d ignored", winner, loser)
            return self._next_pair()
        if d[loser][winner]:
            raise ContradictoryComparison(
                f"Item {loser} is already ranked above item {winner}"
            )

        d[winner][loser] = True
        n = self._item_count

        # Everything above the winner now also beats everything below the loser
        for i in range(n):
            if not d[i][winner]:
                continue
            for j in range(n):
                if d[loser][j]:
                    d[i][j] = True

        for i in range(n):
            if d[i][winner]:
                d[i][loser] = True
            if d[loser][i]:
                d[winner][i] = True

        self.decisions += 1
        logger.debug("Recorded %d > %d (%d decisions)", winner, loser, self.decisions)
        return self._next_pair()

    def current_ranking(self) -> list[int]:
        """Item indices from best to worst.

        Items are ordered by how many other items they are known to outrank.
        Equal counts, which only occur before the session is complete, are
        ordered by catalog index.
        """
        self._require_initialized()
        counts = [sum(row) for row in self._dominance]
        return sorted(range(self._item_count), key=lambda i: (-counts[i], i))

    def rank_of(self, item: int) -> int | None:
        """Get the 1-indexed rank of an item, or None if the index is invalid."""
        ranking = self.current_ranking()
        if isinstance(item, bool) or not isinstance(item, int):
            return None
        if not 0 <= item < len(ranking):
            return None
        return ranking.index(item) + 1

    def beats(self, a: int, b: int) -> bool:
        """Whether item a is known to outrank item b."""
        self._require_initialized()
        self._check_index(a, "a")
        self._check_index(b, "b")
        return self._dominance[a][b]

    def total_comparisons(self) -> int:
        """The largest number of comparisons that could ever be asked."""
        n = self.item_count
        return n * (n - 1) // 2

    def remaining_comparisons(self) -> int:
        """Number of pending pairs whose outcome is not yet known.

        Includes the pair currently being presented.
        """
        self._require_initialized()
        return sum(
            1 for a, b in self._pairs[self._position:]
            if not self._settled(a, b)
        )

    def progress_percent(self) -> int:
        """Share of comparisons already settled, as a whole percentage."""
        total = self.total_comparisons()
        if total == 0:
            return 100
        # Halves round up
        return math.floor(100 * (total - self.remaining_comparisons()) / total + 0.5)

    def _next_pair(self) -> Pair | None:
        # The pair at the current position stays there until it is settled.
        while self._position < len(self._pairs):
            a, b = self._pairs[self._position]
            if not self._settled(a, b):
                return a, b
            self._position += 1
        return None

    def _settled(self, a: int, b: int) -> bool:
        return self._dominance[a][b] or self._dominance[b][a]

    def _check_index(self, index: int, label: str) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidIndex(f"{label} must be an integer index, got {index!r}")
        if not 0 <= index < self._item_count:
            raise InvalidIndex(
                f"{label} index {index} is out of range for {self._item_count} items"
            )

    def _require_initialized(self) -> None:
        if self._item_count is None:
            raise SessionNotInitialized("Call initialize() before using the session")
