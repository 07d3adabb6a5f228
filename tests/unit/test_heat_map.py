"""Tests for per-file hits and the ranked heat map."""

from pathlib import Path

from heat_reporter.core.heat_map import MAXIMUM_FILES_TO_SHOW, Map
from heat_reporter.models.backtrace import Backtrace
from heat_reporter.models.hit import WEIGHTS, Hit
from heat_reporter.models.issue_type import IssueType


class TestHit:
    """Test logging issues against a single file."""

    def test_weight_and_count(self) -> None:
        """Test an error and a failure on the same line."""
        hit = Hit("lib/invoice.py")
        hit.log(IssueType.ERROR, 12)
        hit.log(IssueType.FAILURE, 12)

        assert hit.weight == WEIGHTS[IssueType.ERROR] + WEIGHTS[IssueType.FAILURE]
        assert hit.count == 2
        assert hit.line_types(12) == [IssueType.ERROR, IssueType.FAILURE]
        assert hit.line_numbers == [12]

    def test_duplicates_count(self) -> None:
        """Test the same type on the same line counts every time."""
        hit = Hit("lib/invoice.py")
        hit.log(IssueType.FAILURE, 5)
        hit.log(IssueType.FAILURE, 5)

        assert hit.weight == 2 * WEIGHTS[IssueType.FAILURE]
        assert hit.count == 2
        assert hit.line_types(5) == [IssueType.FAILURE]
        assert hit.repeated_line_numbers() == [5]

    def test_weights_are_ordered_by_severity(self) -> None:
        """Test heavier weights for more severe issue types."""
        assert (
            WEIGHTS[IssueType.ERROR]
            > WEIGHTS[IssueType.BROKEN]
            > WEIGHTS[IssueType.FAILURE]
            > WEIGHTS[IssueType.SKIPPED]
            > WEIGHTS[IssueType.PAINFUL]
            >= WEIGHTS[IssueType.SLOW]
            > WEIGHTS[IssueType.SUCCESS]
        )

    def test_line_numbers_sorted_and_unique(self) -> None:
        """Test line numbers come back in order without repeats."""
        hit = Hit("lib/invoice.py")
        for line in (30, 4, 30, 12):
            hit.log(IssueType.SKIPPED, line)

        assert hit.line_numbers == [4, 12, 30]

    def test_restricted_to_types(self) -> None:
        """Test weight and count for a subset of issue types."""
        hit = Hit("lib/invoice.py")
        hit.log(IssueType.ERROR, 1)
        hit.log(IssueType.SLOW, 2)
        hit.log(IssueType.SLOW, 3)

        assert hit.weight_for([IssueType.SLOW]) == 2
        assert hit.count_for([IssueType.SLOW]) == 2
        assert hit.count_for([IssueType.FAILURE]) == 0

    def test_critical_issues(self) -> None:
        """Test critical issue detection."""
        hit = Hit("lib/invoice.py")
        hit.log(IssueType.SKIPPED, 1)
        assert not hit.critical_issues

        hit.log(IssueType.BROKEN, 2)
        assert hit.critical_issues

    def test_keeps_backtrace(self) -> None:
        """Test the backtrace that led to a line is remembered."""
        backtrace = Backtrace(["/a.py:1"])
        hit = Hit("lib/invoice.py")
        hit.log(IssueType.ERROR, 1, backtrace)

        assert hit.lines[1][0].backtrace == backtrace

    def test_missing_file_mtime(self, project_dir: Path) -> None:
        """Test modification lookups for a file that's gone."""
        hit = Hit(str(project_dir / "lib" / "gone.py"))

        assert hit.age_in_seconds == -1

    def test_to_dict(self, source_file: Path) -> None:
        """Test the serializable form."""
        hit = Hit(str(source_file))
        hit.log(IssueType.ERROR, 9)
        hit.log(IssueType.FAILURE, 9)
        hit.log(IssueType.SKIPPED, 2)

        assert hit.to_dict() == {
            "file": "lib/invoice.py",
            "weight": 10,
            "count": 3,
            "lines": [
                {"line": 2, "types": ["skipped"], "count": 1},
                {"line": 9, "types": ["error", "failure"], "count": 2},
            ],
        }
        assert hit.to_dict([IssueType.ERROR]) == {
            "file": "lib/invoice.py",
            "weight": 5,
            "count": 1,
            "lines": [{"line": 9, "types": ["error"], "count": 1}],
        }


class TestMap:
    """Test aggregating hits across files and ranking them."""

    def test_add_creates_hits_per_file(self) -> None:
        """Test hits are keyed by path."""
        heat_map = Map()
        heat_map.add("a.py", 1, IssueType.ERROR)
        heat_map.add("a.py", 2, IssueType.ERROR)
        hit = heat_map.add("b.py", 1, IssueType.FAILURE)

        assert len(heat_map) == 2
        assert hit is heat_map.hits["b.py"]
        assert heat_map.hits["a.py"].count == 2

    def test_single_occurrence_never_ranks(self) -> None:
        """Test a file hit only once isn't a hot spot."""
        heat_map = Map()
        heat_map.add("once.py", 1, IssueType.ERROR)
        heat_map.add("twice.py", 1, IssueType.SKIPPED)
        heat_map.add("twice.py", 2, IssueType.SKIPPED)

        assert [hit.path for hit in heat_map.rank()] == ["twice.py"]

    def test_ranked_by_weight(self) -> None:
        """Test heavier files come first."""
        heat_map = Map()
        heat_map.add("light.py", 1, IssueType.SLOW)
        heat_map.add("light.py", 2, IssueType.SLOW)
        heat_map.add("heavy.py", 1, IssueType.ERROR)
        heat_map.add("heavy.py", 1, IssueType.ERROR)

        assert [hit.path for hit in heat_map.rank()] == ["heavy.py", "light.py"]

    def test_ties_keep_insertion_order(self) -> None:
        """Test equally weighted files stay in the order first hit."""
        heat_map = Map()
        for path in ("b.py", "a.py", "c.py"):
            heat_map.add(path, 1, IssueType.FAILURE)
            heat_map.add(path, 2, IssueType.FAILURE)

        assert [hit.path for hit in heat_map.rank()] == ["b.py", "a.py", "c.py"]

    def test_limited_to_top_files(self) -> None:
        """Test only the hottest files are kept."""
        heat_map = Map()
        for index in range(MAXIMUM_FILES_TO_SHOW + 3):
            for _ in range(index + 2):
                heat_map.add(f"file_{index}.py", 1, IssueType.FAILURE)

        ranked = heat_map.rank()

        assert len(ranked) == MAXIMUM_FILES_TO_SHOW
        assert ranked[0].path == f"file_{MAXIMUM_FILES_TO_SHOW + 2}.py"

    def test_ranking_restricted_to_types(self) -> None:
        """Test only the given types count toward ranking."""
        heat_map = Map()
        heat_map.add("slow.py", 1, IssueType.SLOW)
        heat_map.add("slow.py", 2, IssueType.SLOW)
        heat_map.add("failing.py", 1, IssueType.FAILURE)
        heat_map.add("failing.py", 1, IssueType.FAILURE)

        ranked = heat_map.rank([IssueType.ERROR, IssueType.BROKEN, IssueType.FAILURE])

        assert [hit.path for hit in ranked] == ["failing.py"]

    def test_slow_tests_rank_on_a_clean_run(self) -> None:
        """Test slow tests alone still make a hot spot."""
        heat_map = Map()
        heat_map.add("slow.py", 1, IssueType.SLOW)
        heat_map.add("slow.py", 2, IssueType.PAINFUL)

        ranked = heat_map.rank([IssueType.SKIPPED, IssueType.PAINFUL, IssueType.SLOW])

        assert [hit.path for hit in ranked] == ["slow.py"]
        assert ranked[0].weight_for([IssueType.PAINFUL, IssueType.SLOW]) > 0

    def test_to_list(self, source_file: Path) -> None:
        """Test the serializable ranked list."""
        heat_map = Map()
        heat_map.add(str(source_file), 9, IssueType.ERROR)
        heat_map.add(str(source_file), 9, IssueType.ERROR)

        assert heat_map.to_list() == [
            {
                "file": "lib/invoice.py",
                "weight": 10,
                "count": 2,
                "lines": [{"line": 9, "types": ["error"], "count": 2}],
            }
        ]
