import random
from typing import Iterable, List, Optional

from errors import DomainError, ErrorKind


MAX_REVIEWERS = 2


def _candidate_ids(candidates) -> List[str]:
    """Unique user ids of the candidates, sorted so a seeded rng is reproducible"""
    return sorted({candidate.user_id for candidate in candidates})


class ReviewerSelector:
    """
    Random, unweighted reviewer picking over a candidate pool.

    Knows nothing about persistence or PR state. Owns its own
    random.Random, pass `seed` (or an rng) for deterministic results.
    """

    def __init__(self, rng: Optional[random.Random] = None, seed=None):
        self._rng = rng if rng is not None else random.Random(seed)

    def select_reviewers(self, candidates, limit: int = MAX_REVIEWERS) -> List[str]:
        """
        Pick up to `limit` reviewer ids.

        With no more candidates than `limit` every candidate is returned in
        random order, otherwise a uniform sample without replacement.
        """
        ids = _candidate_ids(candidates)
        if not ids or limit <= 0:
            return []
        return self._rng.sample(ids, min(limit, len(ids)))

    def select_replacement(self, candidates, excluded: Iterable[str]) -> str:
        """Pick one id not present in `excluded`, or raise NO_CANDIDATE"""
        excluded = set(excluded)
        available = [user_id for user_id in _candidate_ids(candidates) if user_id not in excluded]
        if not available:
            raise DomainError(ErrorKind.NO_CANDIDATE)
        return self._rng.choice(available)
