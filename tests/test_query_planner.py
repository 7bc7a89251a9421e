"""Tests for the query planner."""
import pytest

from gym_enricher.services.query_planner import QueryPlanner


@pytest.fixture
def planner():
    return QueryPlanner()


class TestCleanName:
    """Tests for corporate marker stripping."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("파워짐(주) 강남점", "파워짐 강남점"),
            ("주식회사 바디스페이스", "바디스페이스"),
            ("㈜머슬팩토리   역삼", "머슬팩토리 역삼"),
            ("스포애니(유)", "스포애니"),
            ("(강남) 헬스클럽", "강남 헬스클럽"),
            ("  짐박스  ", "짐박스"),
        ],
    )
    def test_clean_name(self, raw, expected):
        """Test markers and parentheses are removed and spacing collapsed."""
        assert QueryPlanner.clean_name(raw) == expected


class TestPlan:
    """Tests for query generation."""

    def test_branch_gym_name(self, planner):
        """Test the cleaned, synonym and branch-stripped forms are all present."""
        queries = planner.plan("파워짐(주) 강남점")

        assert "파워짐 강남점 헬스" in queries
        assert "파워짐 강남점" in queries
        assert "파워짐 헬스" in queries
        assert "파워GYM 강남점" in queries
        assert "파워짐 강남" in queries

    def test_base_queries_come_first(self, planner):
        """Test the three base queries lead the list in order."""
        queries = planner.plan("바디스페이스 역삼")
        assert queries[:3] == ["바디스페이스 역삼 헬스", "바디스페이스 역삼", "바디스페이스 헬스"]

    def test_fitness_synonyms_both_ways(self, planner):
        """Test 헬스 and 피트니스 substitute for each other."""
        assert "강남피트니스" in planner.plan("강남헬스")
        assert "강남헬스" in planner.plan("강남피트니스")

    def test_queries_are_unique_and_non_empty(self, planner):
        """Test duplicates collapse and no blank query is produced."""
        queries = planner.plan("헬스")

        assert len(queries) == len(set(queries))
        assert all(q.strip() for q in queries)
        assert queries == ["헬스 헬스", "헬스", "피트니스"]

    def test_single_token_name(self, planner):
        """Test a one-word name yields overlapping base queries only once."""
        queries = planner.plan("바디스페이스")
        assert queries == ["바디스페이스 헬스", "바디스페이스"]

    def test_name_without_branch_suffix(self, planner):
        """Test no branch variant is added when the name does not end in 점."""
        queries = planner.plan("점프 피트니스")
        assert "프 피트니스" not in queries
        assert all(not q.endswith("점") for q in queries)

    @pytest.mark.parametrize("raw", ["", "   ", "(주)", "주식회사"])
    def test_empty_after_cleaning(self, planner, raw):
        """Test names that clean to nothing produce no queries."""
        assert planner.plan(raw) == []
