"""Tests for filters, filter evaluation and grouping."""

import pytest
from covconfig import BlockFilter
from covconfig import Filter
from covconfig import InvalidFilterArgumentError
from covconfig import SourceFile
from covconfig import StringFilter
from covconfig import apply_filters
from covconfig import group_files
from covconfig import parse_filter


class ExtensionFilter(Filter):
    """Custom filter matching files by extension."""

    def matches(self, source_file):
        return source_file.filename.endswith(self.filter_argument)


class TestParseFilter:
    """Test parse_filter dispatch."""

    def test_string_becomes_string_filter(self):
        """Test a string builds a substring filter."""
        parsed = parse_filter("app/models")
        assert isinstance(parsed, StringFilter)
        assert parsed.matches(SourceFile("/repo/app/models/user.rb"))
        assert not parsed.matches(SourceFile("/repo/lib/foo.rb"))

    def test_callable_becomes_block_filter(self):
        parsed = parse_filter(lambda f: f.filename.endswith("environment.rb"))
        assert isinstance(parsed, BlockFilter)
        assert parsed.matches(SourceFile("/repo/config/environment.rb"))
        assert not parsed.matches(SourceFile("/repo/config/routes.rb"))

    def test_filter_proc_becomes_block_filter(self):
        parsed = parse_filter(filter_proc=lambda f: True)
        assert isinstance(parsed, BlockFilter)
        assert parsed.matches(SourceFile("/anything.py"))

    def test_instance_passes_through(self):
        """Test pre-built filters are returned unchanged."""
        instance = ExtensionFilter(".pyx")
        assert parse_filter(instance) is instance

    def test_string_wins_over_filter_proc(self):
        parsed = parse_filter("vendor/", lambda f: True)
        assert parsed == StringFilter("vendor/")

    @pytest.mark.parametrize("argument", [None, 42, ["vendor/"]])
    def test_invalid_argument_raises(self, argument):
        with pytest.raises(InvalidFilterArgumentError, match="string or a predicate"):
            parse_filter(argument)

    def test_invalid_argument_is_type_error(self):
        """Test callers catching TypeError also catch the filter error."""
        with pytest.raises(TypeError):
            parse_filter()


class TestFilters:
    """Test filter matching."""

    def test_block_filter_coerces_to_bool(self):
        block = BlockFilter(lambda f: f.filename.count("/"))
        assert block.matches(SourceFile("/a/b.py")) is True
        assert block.matches(SourceFile("b.py")) is False

    def test_string_filter_equality(self):
        assert StringFilter("lib/") == StringFilter("lib/")
        assert StringFilter("lib/") != StringFilter("app/")
        assert StringFilter("lib/") != BlockFilter("lib/")

    def test_base_filter_is_abstract(self):
        """Test Filter cannot be instantiated without a matches implementation."""
        with pytest.raises(TypeError):
            Filter("x")

    def test_subclass_without_matches_is_abstract(self):
        class Incomplete(Filter):
            pass

        with pytest.raises(TypeError):
            Incomplete("x")


class TestApplyFilters:
    """Test apply_filters."""

    @pytest.fixture
    def files(self):
        return [
            SourceFile("/repo/app/models/user.py"),
            SourceFile("/repo/tests/test_user.py"),
            SourceFile("/repo/vendor/six.py"),
            SourceFile("/repo/app/views/home.py"),
        ]

    def test_no_filters_keeps_everything(self, files):
        assert apply_filters(files, []) == files

    def test_any_matching_filter_excludes(self, files):
        """Test a file is excluded when any filter matches it."""
        filters = [StringFilter("/tests/"), BlockFilter(lambda f: "vendor" in f.filename)]
        kept = apply_filters(files, filters)
        assert [f.filename for f in kept] == ["/repo/app/models/user.py", "/repo/app/views/home.py"]

    def test_filter_order_does_not_matter(self, files):
        filters = [StringFilter("/tests/"), StringFilter("/vendor/")]
        assert apply_filters(files, filters) == apply_filters(files, list(reversed(filters)))


class TestGroupFiles:
    """Test group_files."""

    @pytest.fixture
    def files(self):
        return [
            SourceFile("/repo/app/models/user.py"),
            SourceFile("/repo/app/models/admin_user.py"),
            SourceFile("/repo/app/views/home.py"),
            SourceFile("/repo/lib/util.py"),
        ]

    def test_no_groups(self, files):
        """Test no Ungrouped bucket is created when no groups exist."""
        assert group_files(files, {}) == {}

    def test_groups_and_ungrouped(self, files):
        groups = {"Models": StringFilter("app/models"), "Views": StringFilter("app/views")}
        grouped = group_files(files, groups)

        assert list(grouped) == ["Models", "Views", "Ungrouped"]
        assert [f.filename for f in grouped["Models"]] == [
            "/repo/app/models/user.py",
            "/repo/app/models/admin_user.py",
        ]
        assert [f.filename for f in grouped["Ungrouped"]] == ["/repo/lib/util.py"]

    def test_file_can_be_in_several_groups(self, files):
        groups = {"App": StringFilter("/app/"), "Users": StringFilter("user")}
        grouped = group_files(files, groups)
        assert files[0] in grouped["App"]
        assert files[0] in grouped["Users"]

    def test_no_ungrouped_when_everything_grouped(self, files):
        grouped = group_files(files, {"All": StringFilter("/repo/")})
        assert list(grouped) == ["All"]

    def test_empty_group_kept(self, files):
        grouped = group_files(files, {"Helpers": StringFilter("app/helpers")})
        assert grouped["Helpers"] == []
        assert len(grouped["Ungrouped"]) == 4
