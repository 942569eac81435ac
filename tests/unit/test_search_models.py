"""Unit tests for search data models."""

import pytest

from lexsearch.search.models import (
    IndexOptions,
    IndexStrategy,
    ManyValues,
    QueryPlan,
    SingleValue,
    field_value_from,
)


pytestmark = pytest.mark.unit


class TestFieldValueFrom:
    def test_string_is_single_value(self):
        value = field_value_from("red fox")

        assert value == SingleValue("red fox")
        assert value.texts == ("red fox",)

    def test_list_is_many_values(self):
        value = field_value_from(["red fox", "blue whale"])

        assert isinstance(value, ManyValues)
        assert value.texts == ("red fox", "blue whale")

    def test_tuple_is_many_values(self):
        assert field_value_from(("a", "b")) == ManyValues(("a", "b"))

    def test_non_string_elements_are_dropped(self):
        assert field_value_from(["fox", 3, None, ["nested"]]) == ManyValues(("fox",))

    @pytest.mark.parametrize("raw", [None, 42, 4.2, True, {"title": "fox"}, b"fox"])
    def test_non_text_values_are_skipped(self, raw):
        assert field_value_from(raw) is None

    def test_empty_string_is_still_text(self):
        assert field_value_from("") == SingleValue("")


class TestIndexOptions:
    def test_defaults(self):
        options = IndexOptions()

        assert options.strategy is IndexStrategy.TOKENIZED
        assert options.id_field == "_id"
        assert options.index_trailing_word is False

    def test_strategy_accepts_wire_names(self):
        assert IndexOptions(strategy="noTokens").strategy is IndexStrategy.NO_TOKENS
        assert IndexOptions(strategy="tokenized").strategy is IndexStrategy.TOKENIZED

    def test_unknown_strategy_is_rejected(self):
        with pytest.raises(ValueError):
            IndexOptions(strategy="fuzzy")

    def test_options_are_frozen(self):
        options = IndexOptions()

        with pytest.raises(AttributeError):
            options.id_field = "id"  # type: ignore[misc]


def test_query_plan_is_a_value_object() -> None:
    first = QueryPlan(query="Fox", prefix="fox", lower=b"fox", upper=b"fox\xff", is_phrase=False)
    second = QueryPlan(query="Fox", prefix="fox", lower=b"fox", upper=b"fox\xff", is_phrase=False)

    assert first == second
