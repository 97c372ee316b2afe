"""Tests for the catalog models."""

from __future__ import annotations

import json

import pytest

from diga_contracts import (
    Address,
    Diga,
    DigaModule,
    DigaVerzeichnis,
    Manufacturer,
    PrescriptionUnit,
    Price,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def sample() -> DigaVerzeichnis:
    return DigaVerzeichnis(
        digas=[
            Diga(
                id="ce-1",
                diga_id="00100",
                name="SleepWell",
                listing_status="permanent",
                languages=["de"],
                manufacturer=Manufacturer(
                    id="org-1",
                    name="Schlaf GmbH",
                    address=Address(lines=["Hauptstraße 1"], postal_code="10115"),
                ),
                modules=[
                    DigaModule(
                        id="mod-1",
                        prescription_units=[
                            PrescriptionUnit(
                                id="cid-1",
                                pzn="12345678",
                                price=Price(amount=199.0),
                            )
                        ],
                    )
                ],
            )
        ]
    )


class TestAliases:
    """JSON keys are camelCase."""

    def test_camel_case_keys(self, sample):
        data = sample.model_dump(by_alias=True)
        diga = data["digas"][0]

        assert diga["digaId"] == "00100"
        assert diga["listingStatus"] == "permanent"
        assert "validFrom" in diga
        assert diga["manufacturer"]["address"]["postalCode"] == "10115"
        assert diga["modules"][0]["prescriptionUnits"][0]["pzn"] == "12345678"

    def test_populate_by_alias(self):
        unit = PrescriptionUnit.model_validate({"id": "cid", "validFrom": "2021-01-01"})

        assert unit.valid_from == "2021-01-01"

    def test_populate_by_name(self):
        unit = PrescriptionUnit(id="cid", valid_to="2022-12-31")

        assert unit.valid_to == "2022-12-31"


class TestDefaults:
    def test_empty_catalog(self):
        assert DigaVerzeichnis().digas == []

    def test_price_default_currency(self):
        assert Price(amount=1.5).currency == "EUR"

    def test_optional_fields_default_to_none(self):
        diga = Diga(id="ce-1")

        assert diga.name is None
        assert diga.manufacturer is None
        assert diga.modules == []
        assert diga.languages == []


class TestJsonRoundTrip:
    """JSON output validates back into an equal catalog."""

    def test_round_trip(self, sample):
        text = sample.model_dump_json(by_alias=True)

        assert DigaVerzeichnis.model_validate_json(text) == sample

    def test_non_ascii_preserved(self, sample):
        text = sample.model_dump_json(by_alias=True)

        assert "Hauptstraße" in text
        assert json.loads(text)["digas"][0]["manufacturer"]["name"] == "Schlaf GmbH"
