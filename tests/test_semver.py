"""Tests for the semantic version model."""

import pytest

from versioning.errors import NotSemverError
from versioning.semver import compare, is_prerelease, parse, semver_or_none, sort_descending


class TestParse:
    """Parsing and re-serialization."""

    @pytest.mark.parametrize("text", [
        "0.0.0",
        "1.2.3",
        "10.20.30",
        "1.0.0-alpha",
        "1.0.0-alpha.1",
        "1.0.0-0.3.7",
        "1.0.0-x.7.z.92",
        "1.0.0+20130313144700",
        "1.0.0-beta+exp.sha.5114f85",
    ])
    def test_round_trip(self, text):
        assert str(parse(text)) == text

    def test_fields(self):
        v = parse("1.2.3-alpha.1+build.5")
        assert (v.major, v.minor, v.patch) == (1, 2, 3)
        assert tuple(v.prerelease) == ("alpha", "1")
        assert tuple(v.build) == ("build", "5")

    @pytest.mark.parametrize("text", ["main", "v1.2.3", "1.2", "1", "01.2.3", "1.2.3.4", "", "^1.0.0"])
    def test_not_semver(self, text):
        with pytest.raises(NotSemverError):
            parse(text)
        assert semver_or_none(text) is None

    def test_not_semver_is_value_error(self):
        with pytest.raises(ValueError):
            parse("latest")


class TestOrdering:
    """Precedence follows semver 2.0.0."""

    def test_precedence_chain(self):
        chain = [
            "1.0.0-alpha",
            "1.0.0-alpha.1",
            "1.0.0-alpha.beta",
            "1.0.0-beta",
            "1.0.0-beta.2",
            "1.0.0-beta.11",
            "1.0.0-rc.1",
            "1.0.0",
            "1.0.1",
            "1.1.0",
            "2.0.0",
        ]
        parsed = [parse(v) for v in chain]
        for lower, higher in zip(parsed, parsed[1:]):
            assert compare(lower, higher) == -1
            assert compare(higher, lower) == 1

    def test_numeric_fields_compare_numerically(self):
        assert compare(parse("1.10.0"), parse("1.9.0")) == 1

    def test_equal(self):
        assert compare(parse("1.2.3"), parse("1.2.3")) == 0

    def test_build_metadata_ignored(self):
        assert compare(parse("1.0.0+a"), parse("1.0.0+b")) == 0


class TestHelpers:
    """is_prerelease and sort_descending."""

    def test_is_prerelease(self):
        assert is_prerelease("1.0.0-rc.1")
        assert not is_prerelease("1.0.0")
        assert not is_prerelease("1.0.0+build")
        assert not is_prerelease("main")

    def test_sort_descending_puts_opaque_last(self):
        versions = ["1.0.0", "main", "1.10.0", "2.0.0-rc.1", "1.2.0", "dev"]
        assert sort_descending(versions) == ["2.0.0-rc.1", "1.10.0", "1.2.0", "1.0.0", "main", "dev"]

    def test_sort_descending_empty(self):
        assert sort_descending([]) == []
