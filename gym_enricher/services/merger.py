"""Merging of search candidates gathered from multiple providers."""
from typing import Dict, Iterable, List, Optional, Tuple

from ..models import SearchCandidate
from ..utils.logger import logger


class CandidateMerger:
    """Collapses all candidates for one gym into a single winner.

    Rules:
    - Candidates sharing the exact ``(name, address)`` pair are duplicates
    - Within a duplicate group the highest confidence wins; on a tie the
      first one seen is kept
    - Survivors are ranked by confidence, highest first

    Keys are compared verbatim. Names or addresses that differ only in
    spacing or punctuation are treated as distinct places.
    """

    def deduplicate(self, candidates: Iterable[SearchCandidate]) -> List[SearchCandidate]:
        """Drop duplicates and rank the survivors.

        Args:
            candidates: Candidates from every provider and query for one gym

        Returns:
            One candidate per key, sorted by descending confidence
        """
        unique: Dict[Tuple[str, str], SearchCandidate] = {}
        total = 0

        for candidate in candidates:
            total += 1
            existing = unique.get(candidate.dedup_key)
            if existing is None or candidate.confidence > existing.confidence:
                unique[candidate.dedup_key] = candidate

        # sorted() is stable, so equal confidences keep first-seen order
        survivors = sorted(unique.values(), key=lambda c: c.confidence, reverse=True)
        logger.debug(f"Merged {total} candidates into {len(survivors)} unique places")
        return survivors

    def merge(self, candidates: Iterable[SearchCandidate]) -> Optional[SearchCandidate]:
        """Pick the winning candidate.

        Args:
            candidates: Candidates for one gym

        Returns:
            Highest-confidence candidate, or None if there were none
        """
        survivors = self.deduplicate(candidates)
        return survivors[0] if survivors else None


# Convenience function
def merge_candidates(candidates: Iterable[SearchCandidate]) -> Optional[SearchCandidate]:
    """Convenience function to merge candidates with default rules.

    Args:
        candidates: Candidates for one gym

    Returns:
        Winning candidate or None
    """
    return CandidateMerger().merge(candidates)
