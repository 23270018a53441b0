"""Tests for the owner allow-list."""

from __future__ import annotations

import pytest

from badgerelay.allowlist import is_allowed, parse_allowlist
from badgerelay.errors import ConfigError


class TestIsAllowed:
    def test_empty_list_allows_everyone(self) -> None:
        assert is_allowed((), "anyone")
        assert is_allowed([], "")

    def test_member_is_allowed(self) -> None:
        assert is_allowed(["alice", "bob"], "alice")
        assert is_allowed(["alice", "bob"], "bob")

    def test_non_member_is_rejected(self) -> None:
        assert not is_allowed(["alice", "bob"], "mallory")

    def test_match_is_case_sensitive(self) -> None:
        assert not is_allowed(["alice", "bob"], "Alice")

    def test_no_prefix_or_substring_match(self) -> None:
        assert not is_allowed(["alice"], "alic")
        assert not is_allowed(["alice"], "alice2")

    def test_whitespace_is_significant(self) -> None:
        assert not is_allowed(["alice"], " alice")

    def test_accepts_generator(self) -> None:
        assert is_allowed((name for name in ["acme"]), "acme")


class TestParseAllowlist:
    def test_none_is_empty(self) -> None:
        assert parse_allowlist(None) == ()

    def test_empty_string_is_empty(self) -> None:
        assert parse_allowlist("") == ()

    def test_comma_separated(self) -> None:
        assert parse_allowlist("alice,bob") == ("alice", "bob")

    def test_preserves_order(self) -> None:
        assert parse_allowlist("zed,alice,bob") == ("zed", "alice", "bob")

    def test_drops_empty_fragments(self) -> None:
        assert parse_allowlist("alice,,bob,") == ("alice", "bob")

    def test_entries_kept_verbatim(self) -> None:
        assert parse_allowlist("Alice, bob") == ("Alice", " bob")

    @pytest.mark.parametrize("raw", [["alice", "bob"], ("alice", "bob")])
    def test_sequence_input(self, raw: object) -> None:
        assert parse_allowlist(raw) == ("alice", "bob")  # type: ignore[arg-type]

    @pytest.mark.parametrize("raw", [",", ",,,", [""], ["", ""]])
    def test_separators_only_raises(self, raw: object) -> None:
        with pytest.raises(ConfigError, match="no owner names"):
            parse_allowlist(raw)  # type: ignore[arg-type]

    def test_empty_sequence_is_empty(self) -> None:
        assert parse_allowlist([]) == ()
