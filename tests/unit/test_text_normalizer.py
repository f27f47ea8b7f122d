"""Unit tests for slug generation, ordering helpers and session-id parsing."""

from __future__ import annotations

from datetime import datetime

import pytest

from auto_minutes.utils.session_ids import (
    format_session_header,
    is_valid_session_id,
    parse_session_timestamp,
)
from auto_minutes.utils.text_normalizer import (
    slugify,
    sort_collection_ids,
    sort_display_names,
)

# ======================================================================
# slugify
# ======================================================================


class TestSlugify:
    def test_lowercases_and_joins_words(self) -> None:
        assert slugify("TLS (Transport Layer Security)") == "tls-transport-layer-security"

    def test_trims_leading_and_trailing_separators(self) -> None:
        assert slugify("  --6LO!! ") == "6lo"

    def test_collapses_runs(self) -> None:
        assert slugify("a  &  b") == "a-b"

    def test_non_ascii_only_becomes_empty(self) -> None:
        assert slugify("ÉÉ") == ""


# ======================================================================
# Ordering
# ======================================================================


class TestSortCollectionIds:
    def test_numeric_ascending(self) -> None:
        assert sort_collection_ids(["12", "3", "101"]) == ["3", "12", "101"]

    def test_accepts_ints_and_dedupes(self) -> None:
        assert sort_collection_ids([118, "118", 9]) == ["9", "118"]

    def test_non_numeric_after_numeric(self) -> None:
        assert sort_collection_ids(["interim", "5", "alpha"]) == ["5", "alpha", "interim"]


class TestSortDisplayNames:
    def test_case_insensitive(self) -> None:
        assert sort_display_names(["tls", "QUIC", "acme"]) == ["acme", "QUIC", "tls"]


# ======================================================================
# Session ids
# ======================================================================


class TestSessionIds:
    @pytest.mark.parametrize(
        "session_id",
        ["IETF123-6LO-20250723-0730", "IETF118-TLS-WG-20231106-0930"],
    )
    def test_valid_ids(self, session_id: str) -> None:
        assert is_valid_session_id(session_id) is True

    @pytest.mark.parametrize(
        "session_id",
        ["IETF123-6LO-2025072-0730", "123-6LO-20250723-0730", "IETF123-20250723-0730", None],
    )
    def test_invalid_ids(self, session_id) -> None:
        assert is_valid_session_id(session_id) is False

    def test_parse_timestamp(self) -> None:
        assert parse_session_timestamp("IETF123-6LO-20250723-0730") == datetime(2025, 7, 23, 7, 30)

    @pytest.mark.parametrize(
        "session_id",
        ["IETF123-6LO-2025073-0730", "IETF123-6LO-20250723-730", "IETF123-6LO-20251323-0730", "x"],
    )
    def test_parse_malformed_returns_none(self, session_id: str) -> None:
        assert parse_session_timestamp(session_id) is None

    def test_header_format(self) -> None:
        assert (
            format_session_header("IETF118-TLS-20231106-0930")
            == "**Session Date/Time:** 06 Nov 2023 09:30\n\n"
        )

    def test_header_omitted_when_malformed(self) -> None:
        assert format_session_header("IETF118-TLS-2023116-0930") == ""
