"""Search query generation for gym names."""
import re
from typing import List, Tuple

# Company markers are removed before bare parentheses so "(주)" is caught whole.
CORPORATE_MARKERS = re.compile(r"주식회사|\(주\)|\(유\)|（주）|（유）|[㈜㈐㈑㈒㈓㈔㈕㈖㈗㈘㈙]")
PARENTHESES = re.compile(r"[()（）]")
WHITESPACE = re.compile(r"\s+")

FITNESS_SUFFIX = "헬스"
BRANCH_SUFFIX = "점"

# (source term, replacement), applied to the first occurrence only
SYNONYMS: Tuple[Tuple[str, str], ...] = (
    ("짐", "GYM"),
    ("헬스", "피트니스"),
    ("피트니스", "헬스"),
)


class QueryPlanner:
    """Turns a stored gym name into a handful of search strings."""

    def __init__(self, synonyms: Tuple[Tuple[str, str], ...] = SYNONYMS):
        self.synonyms = synonyms

    @staticmethod
    def clean_name(name: str) -> str:
        """Strip corporate markers and collapse whitespace.

        Args:
            name: Raw gym name as stored

        Returns:
            Cleaned name
        """
        cleaned = CORPORATE_MARKERS.sub("", name)
        cleaned = PARENTHESES.sub("", cleaned)
        return WHITESPACE.sub(" ", cleaned).strip()

    def plan(self, gym_name: str) -> List[str]:
        """Build the ordered, de-duplicated query list for a gym.

        Args:
            gym_name: Raw gym name

        Returns:
            Distinct non-empty queries, most specific first
        """
        cleaned = self.clean_name(gym_name)
        if not cleaned:
            return []

        first_token = cleaned.split(" ")[0]
        queries = [
            f"{cleaned} {FITNESS_SUFFIX}",
            cleaned,
            f"{first_token} {FITNESS_SUFFIX}",
        ]

        for source, target in self.synonyms:
            if source in cleaned:
                queries.append(cleaned.replace(source, target, 1))

        if cleaned.endswith(BRANCH_SUFFIX):
            queries.append(cleaned[: -len(BRANCH_SUFFIX)].strip())

        # dict preserves first-seen order
        return list(dict.fromkeys(q for q in queries if q.strip()))


# Global planner instance
query_planner = QueryPlanner()
