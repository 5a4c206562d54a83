"""
Unit tests for path parsing and id generation.
"""

from datetime import datetime

import pytest
from freezegun import freeze_time

from budget_flow_mcp.utils.id_utils import generate_node_id
from budget_flow_mcp.utils.paths import format_path, parse_path


class TestParsePath:
    """Tests for parse_path function."""

    def test_parse_plain_dotted_path(self):
        """Test parsing 'etf.msciworld'."""
        assert parse_path("etf.msciworld") == ("etf", "msciworld")

    def test_parse_subcategories_path(self):
        """Test that explicit subCategories hops are dropped."""
        assert parse_path("etf.subCategories.msciworld") == ("etf", "msciworld")

    def test_parse_single_segment(self):
        """Test parsing a top-level id."""
        assert parse_path("bankbook") == ("bankbook",)

    def test_parse_empty_string(self):
        """Test that an empty string is the savings root."""
        assert parse_path("") == ()

    def test_sequences_pass_through(self):
        """Test that lists and tuples are kept as-is."""
        assert parse_path(["etf", "s&p500"]) == ("etf", "s&p500")
        assert parse_path(("a.b", "subCategories")) == ("a.b", "subCategories")

    def test_format_path(self):
        """Test encoding a path as a dotted string."""
        assert format_path(("crypto", "bitcoin")) == "crypto.bitcoin"
        assert format_path(()) == ""


class TestGenerateNodeId:
    """Tests for generate_node_id function."""

    @freeze_time("2026-01-15 12:00:00")
    def test_id_is_millisecond_timestamp(self):
        """Test that ids are the current time in milliseconds."""
        expected = str(int(datetime.now().timestamp() * 1000))
        assert generate_node_id() == expected

    @freeze_time("2026-01-15 12:00:00")
    def test_id_skips_taken_values(self):
        """Test that colliding ids are incremented until free."""
        first = generate_node_id()
        taken = {first, str(int(first) + 1)}
        assert generate_node_id(taken) == str(int(first) + 2)

    def test_id_ignores_unrelated_existing_ids(self):
        """Test that non-numeric ids never collide."""
        node_id = generate_node_id({"rent", "food"})
        assert node_id.isdigit()

    @pytest.mark.parametrize("existing", [[], ["x"], ("y", "z")])
    def test_id_accepts_any_iterable(self, existing):
        """Test that existing ids can be given as any iterable."""
        assert generate_node_id(existing) not in existing
