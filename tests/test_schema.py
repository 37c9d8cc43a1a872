"""
Tests for collection name validation and statement building.

Collection names are the only caller input that ends up in SQL text, so they
must be rejected before any statement is built.
"""

import pytest

from jsonstash.exceptions import MalformedQuery
from jsonstash.storage.sqlite import schema
from jsonstash.storage.sqlite.config import MAX_COLLECTION_NAME_LENGTH


class TestCollectionNameValidation:
    """Test validate_collection_name / quote_identifier."""

    @pytest.mark.parametrize("name", ["items", "Items_2", "_private", "a"])
    def test_valid_names_pass_through(self, name):
        assert schema.validate_collection_name(name) == name

    @pytest.mark.parametrize(
        "name",
        [
            "",
            "2items",
            "items; DROP TABLE users",
            'items"',
            "it'ems",
            "my-items",
            "items table",
            "user:1",
        ],
    )
    def test_invalid_names_rejected(self, name):
        with pytest.raises(MalformedQuery):
            schema.validate_collection_name(name)

    def test_non_string_rejected(self):
        with pytest.raises(MalformedQuery):
            schema.validate_collection_name(None)

    def test_reserved_prefix_rejected(self):
        with pytest.raises(MalformedQuery, match="reserved"):
            schema.validate_collection_name("sqlite_master")

    def test_length_limit(self):
        schema.validate_collection_name("a" * MAX_COLLECTION_NAME_LENGTH)
        with pytest.raises(MalformedQuery):
            schema.validate_collection_name("a" * (MAX_COLLECTION_NAME_LENGTH + 1))

    def test_quote_identifier(self):
        assert schema.quote_identifier("items") == '"items"'


class TestLikePrefixEscaping:
    """Test escape_like_prefix."""

    def test_plain_prefix(self):
        assert schema.escape_like_prefix("user:") == "user:%"

    def test_empty_prefix_matches_everything(self):
        assert schema.escape_like_prefix("") == "%"

    def test_percent_escaped(self):
        assert schema.escape_like_prefix("50%") == "50\\%%"

    def test_underscore_escaped(self):
        assert schema.escape_like_prefix("a_b") == "a\\_b%"

    def test_escape_char_escaped(self):
        assert schema.escape_like_prefix("a\\b") == "a\\\\b%"

    def test_quotes_left_alone(self):
        # Bound as a parameter, so quotes need no escaping
        assert schema.escape_like_prefix("o'brien") == "o'brien%"


class TestStatements:
    """Statement builders quote the table and bind every value."""

    def test_create_collection(self):
        assert schema.create_collection_sql("items") == (
            'CREATE TABLE IF NOT EXISTS "items" (ID TEXT PRIMARY KEY, json TEXT)'
        )

    def test_prefix_select_uses_escape_clause(self):
        sql = schema.select_by_prefix_sql("items")
        assert sql.endswith("WHERE ID LIKE ? ESCAPE '\\'")
        assert '"items"' in sql

    def test_builders_validate_name(self):
        builders = [
            schema.create_collection_sql,
            schema.select_all_sql,
            schema.select_by_key_sql,
            schema.select_by_prefix_sql,
            schema.insert_sql,
            schema.update_sql,
            schema.upsert_sql,
            schema.delete_all_sql,
            schema.delete_by_key_sql,
        ]
        for build in builders:
            with pytest.raises(MalformedQuery):
                build("bad name")

    def test_write_statements_are_parameterized(self):
        assert schema.insert_sql("items").count("?") == 2
        assert schema.update_sql("items").count("?") == 2
        assert schema.delete_by_key_sql("items").count("?") == 1
