"""Tests for mapping SPARQL rows to transactions."""

import logging

import pytest

from property_prices.data.mapper import map_property_type, parse_transaction
from property_prices.errors import IncompleteRecordError
from property_prices.models.property import PropertyTransaction, PropertyType
from tests.helpers import LRCOMMON, binding


class TestMapPropertyType:
    @pytest.mark.parametrize(
        "suffix, expected",
        [
            ("detached", PropertyType.DETACHED),
            ("semi-detached", PropertyType.SEMI_DETACHED),
            ("terraced", PropertyType.TERRACED),
            ("flat-maisonette", PropertyType.FLAT),
        ],
    )
    def test_known_uris(self, suffix, expected):
        assert map_property_type(f"{LRCOMMON}{suffix}") == expected

    def test_unknown_uri_falls_back_to_other(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = map_property_type(f"{LRCOMMON}otherPropertyType")
        assert result == PropertyType.OTHER
        assert "Unknown property type" in caplog.text

    def test_missing_uri_is_other(self):
        assert map_property_type(None) == PropertyType.OTHER
        assert map_property_type("") == PropertyType.OTHER


class TestParseTransaction:
    def test_full_row(self):
        row = binding(
            amount="500000",
            date="2024-01-01",
            postcode="SW1A 1AA",
            property_type="flat-maisonette",
            street="Test Street",
            town="LONDON",
            paon="10",
            saon="Apt 2",
            county="GREATER LONDON",
        )

        assert parse_transaction(row) == PropertyTransaction(
            price=500000,
            date="2024-01-01",
            postcode="SW1A 1AA",
            property_type=PropertyType.FLAT,
            street="Test Street",
            city="LONDON",
            paon="10",
            saon="Apt 2",
            county="GREATER LONDON",
        )

    def test_optional_fields_default(self):
        row = {
            "amount": {"value": "123000"},
            "date": {"value": "2019-03-04"},
            "propertyType": {"value": f"{LRCOMMON}detached"},
        }

        result = parse_transaction(row)

        assert result.postcode == ""
        assert result.street == ""
        assert result.city == ""
        assert result.paon is None
        assert result.saon is None

    def test_estate_type_new_build_and_category(self):
        row = binding(
            estateType=f"{LRCOMMON}leasehold",
            newBuild="false",
            category="Standard price paid transaction",
        )

        result = parse_transaction(row)

        assert result.estate_type == "leasehold"
        assert result.new_build is False
        assert result.transaction_category == "Standard price paid transaction"

    @pytest.mark.parametrize("missing", ["amount", "date", "propertyType"])
    def test_missing_required_field(self, missing):
        row = binding()
        del row[missing]

        with pytest.raises(IncompleteRecordError, match="Missing required property data"):
            parse_transaction(row)

    @pytest.mark.parametrize("blank", ["amount", "date", "propertyType"])
    def test_blank_required_field(self, blank):
        row = binding()
        row[blank]["value"] = ""

        with pytest.raises(IncompleteRecordError, match=f"Missing required property data.*{blank}"):
            parse_transaction(row)

    def test_required_field_without_value(self):
        row = binding()
        row["amount"] = {"type": "literal"}

        with pytest.raises(IncompleteRecordError, match="amount"):
            parse_transaction(row)

    @pytest.mark.parametrize("amount", ["n/a", "NaN", "Infinity"])
    def test_unparseable_amount(self, amount):
        with pytest.raises(IncompleteRecordError, match="Invalid amount"):
            parse_transaction(binding(amount=amount))

    def test_unknown_type_never_fails(self):
        row = binding(property_type="something-new")
        assert parse_transaction(row).property_type == PropertyType.OTHER

    def test_category_always_one_of_five(self):
        uris = ["detached", "semi-detached", "terraced", "flat-maisonette", "bungalow", ""]
        categories = {parse_transaction(binding(property_type=u)).property_type for u in uris}
        assert categories <= set(PropertyType)
