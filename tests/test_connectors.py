"""
Tests for the TheMealDB connector using a mocked requests session.

These tests never touch the network. They verify that:
- Each operation calls the right endpoint with the right query parameters
- Payloads are normalized into MealRecord
- "No match" payloads ({"meals": null}) become empty results, not errors
- Network, HTTP and JSON failures surface as TransportError
"""

from unittest.mock import Mock

import pytest
import requests

from mealfinder.connectors.base import TransportError
from mealfinder.connectors.mealdb_connector import MealDBConnector

BASE_URL = "https://example.test/api/json/v1/1/"

ARRABIATA = {
    "idMeal": "52771",
    "strMeal": "Spicy Arrabiata Penne",
    "strCategory": "Vegetarian",
    "strArea": "Italian",
    "strInstructions": "Bring a large pot of water to a boil.",
    "strMealThumb": "https://example.test/images/arrabiata.jpg",
    "strTags": "Pasta,Curry",
    "strYoutube": "https://www.youtube.com/watch?v=1IszT_guI08",
    "strSource": None,
    "strIngredient1": "penne rigate",
    "strMeasure1": "1 pound",
    "strIngredient2": "olive oil",
    "strMeasure2": "1/4 cup",
    "strIngredient3": "",
    "strMeasure3": " ",
}


def _response(payload=None, status_code=200, json_error=None):
    response = Mock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    else:
        response.raise_for_status.return_value = None
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def _connector(response=None, side_effect=None):
    session = Mock()
    if side_effect is not None:
        session.get.side_effect = side_effect
    else:
        session.get.return_value = response
    return MealDBConnector(base_url=BASE_URL, timeout=5, session=session), session


class TestMealDBConnectorSetup:
    """Tests for connector construction."""

    def test_explicit_base_url_gets_trailing_slash(self):
        """Test base URL is normalized to end with exactly one slash."""
        connector = MealDBConnector(base_url="https://example.test/api//", session=Mock())
        assert connector.base_url == "https://example.test/api/"

    def test_defaults_come_from_config(self, monkeypatch):
        """Test base URL and timeout fall back to environment configuration."""
        monkeypatch.setenv("MEALDB_BASE_URL", "https://mirror.test/v1")
        monkeypatch.setenv("MEALDB_TIMEOUT_SECONDS", "3")
        connector = MealDBConnector(session=Mock())
        assert connector.base_url == "https://mirror.test/v1/"
        assert connector.timeout == 3.0


class TestListCategories:
    """Tests for list_categories."""

    def test_returns_category_names(self):
        """Test categories are read from the meals array of list.php."""
        connector, session = _connector(_response({
            "meals": [{"strCategory": "Beef"}, {"strCategory": "Seafood"}, {"strCategory": ""}]
        }))

        assert connector.list_categories() == ["Beef", "Seafood"]
        session.get.assert_called_once_with(BASE_URL + "list.php", params={"c": "list"}, timeout=5)

    def test_accepts_categories_key(self):
        """Test a payload keyed by 'categories' is also understood."""
        connector, _ = _connector(_response({"categories": [{"strCategory": "Dessert"}]}))
        assert connector.list_categories() == ["Dessert"]

    def test_empty_payload_is_not_an_error(self):
        """Test a payload without categories yields an empty list."""
        connector, _ = _connector(_response({"meals": None}))
        assert connector.list_categories() == []

    @pytest.mark.parametrize("payload", [
        {"categories": 42},
        {"meals": "oops"},
        {"meals": {"strCategory": "Beef"}},
    ])
    def test_non_list_rows_raise_transport_error(self, payload):
        """Test a rows value that is not an array is a parse failure."""
        connector, _ = _connector(_response(payload))
        with pytest.raises(TransportError) as exc_info:
            connector.list_categories()
        assert exc_info.value.endpoint == "list.php"

    def test_connection_error_raises_transport_error(self):
        """Test network failures are wrapped in TransportError."""
        connector, _ = _connector(side_effect=requests.exceptions.ConnectionError("boom"))
        with pytest.raises(TransportError) as exc_info:
            connector.list_categories()
        assert exc_info.value.endpoint == "list.php"


class TestSearchByTerm:
    """Tests for search_by_term."""

    def test_normalizes_full_records(self):
        """Test search results are mapped into MealRecord with detail fields."""
        connector, session = _connector(_response({"meals": [ARRABIATA]}))

        meals = connector.search_by_term("arrabiata")

        session.get.assert_called_once_with(BASE_URL + "search.php", params={"s": "arrabiata"}, timeout=5)
        assert len(meals) == 1
        meal = meals[0]
        assert meal.id == "52771"
        assert meal.name == "Spicy Arrabiata Penne"
        assert meal.thumbnail_url == "https://example.test/images/arrabiata.jpg"
        assert meal.category == "Vegetarian"
        assert meal.area == "Italian"
        assert meal.tags == ["Pasta", "Curry"]
        assert meal.source_url is None
        assert [(i.name, i.measure) for i in meal.ingredients] == [
            ("penne rigate", "1 pound"),
            ("olive oil", "1/4 cup"),
        ]

    def test_no_matches_returns_empty_list(self):
        """Test {"meals": null} means no matches, not an error."""
        connector, _ = _connector(_response({"meals": None}))
        assert connector.search_by_term("zzzz") == []

    def test_records_without_id_are_skipped(self):
        """Test malformed records are dropped while the rest are kept."""
        connector, _ = _connector(_response({
            "meals": [{"strMeal": "No id"}, ARRABIATA, "not-a-dict"]
        }))
        meals = connector.search_by_term("penne")
        assert [m.id for m in meals] == ["52771"]

    def test_empty_term_is_rejected(self):
        """Test an empty term is a programming error, not a request."""
        connector, session = _connector(_response({"meals": None}))
        with pytest.raises(ValueError):
            connector.search_by_term("  ")
        session.get.assert_not_called()

    def test_http_error_raises_transport_error(self):
        """Test non-2xx responses raise TransportError."""
        connector, _ = _connector(_response(status_code=503))
        with pytest.raises(TransportError, match="HTTP 503"):
            connector.search_by_term("chicken")

    def test_timeout_raises_transport_error(self):
        """Test timeouts raise TransportError."""
        connector, _ = _connector(side_effect=requests.exceptions.Timeout())
        with pytest.raises(TransportError, match="timed out"):
            connector.search_by_term("chicken")

    def test_invalid_json_raises_transport_error(self):
        """Test undecodable bodies raise TransportError."""
        connector, _ = _connector(_response(json_error=ValueError("Expecting value")))
        with pytest.raises(TransportError, match="not valid JSON"):
            connector.search_by_term("chicken")

    def test_unexpected_payload_shape_raises_transport_error(self):
        """Test a non-list meals value is treated as a parse failure."""
        connector, _ = _connector(_response({"meals": "oops"}))
        with pytest.raises(TransportError):
            connector.search_by_term("chicken")


class TestFilterByCategory:
    """Tests for filter_by_category."""

    def test_backfills_category(self):
        """Test the requested category is set on every reduced record."""
        connector, session = _connector(_response({
            "meals": [
                {"idMeal": "1", "strMeal": "Baked salmon", "strMealThumb": "https://example.test/1.jpg"},
                {"idMeal": "2", "strMeal": "Fish pie", "strMealThumb": "https://example.test/2.jpg"},
            ]
        }))

        meals = connector.filter_by_category("Seafood")

        session.get.assert_called_once_with(BASE_URL + "filter.php", params={"c": "Seafood"}, timeout=5)
        assert [m.category for m in meals] == ["Seafood", "Seafood"]
        assert meals[0].area is None

    def test_unknown_category_returns_empty_list(self):
        """Test an unknown category yields no records."""
        connector, _ = _connector(_response({"meals": None}))
        assert connector.filter_by_category("Nope") == []


class TestLookupById:
    """Tests for lookup_by_id."""

    def test_returns_record(self):
        """Test a known id returns its record."""
        connector, session = _connector(_response({"meals": [ARRABIATA]}))

        meal = connector.lookup_by_id("52771")

        session.get.assert_called_once_with(BASE_URL + "lookup.php", params={"i": "52771"}, timeout=5)
        assert meal is not None
        assert meal.name == "Spicy Arrabiata Penne"

    def test_unknown_id_returns_none(self):
        """Test an unknown id returns None instead of raising."""
        connector, _ = _connector(_response({"meals": None}))
        assert connector.lookup_by_id("0") is None
