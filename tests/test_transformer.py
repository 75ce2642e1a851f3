"""Tests for mapping click records to host rows."""

import time
from datetime import datetime

import pytest

from app.connectors.shorten.transformer import map_to_rows
from app.core.field_registry import (
    ConceptType,
    FieldDefinition,
    SemanticType,
    all_fields,
    format_date,
    format_hour,
    schema_for,
)


@pytest.fixture
def tokyo_tz(monkeypatch):
    """Run the process in UTC+9 for the duration of a test."""
    monkeypatch.setenv("TZ", "Asia/Tokyo")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


class TestFormatting:
    """Test timestamp formatting."""

    def test_date_is_utc(self):
        # 2023-11-14T22:13:20Z
        assert format_date(1700000000000) == "20231114"

    def test_date_near_midnight_utc(self):
        # 2023-11-14T23:59:59Z
        assert format_date(1700006399000) == "20231114"
        assert format_date(1700006400000) == "20231115"

    def test_hour_uses_local_time_zone(self):
        """Hour is local time while date is UTC; this mismatch is preserved."""
        expected = datetime.fromtimestamp(1700000000).strftime("%H")
        assert format_hour(1700000000000) == expected
        assert len(format_hour(1700000000000)) == 2

    @pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
    def test_hour_local_while_date_utc(self, tokyo_tz):
        # 2023-11-14T22:13:20Z is 07:13 on the 15th in Tokyo
        assert format_hour(1700000000000) == "07"
        assert format_date(1700000000000) == "20231114"

    def test_missing_timestamp(self):
        assert format_date(None) == ""
        assert format_hour(None) == ""


class TestMapToRows:
    """Test row construction."""

    def test_date_and_batch_count(self):
        fields = schema_for(["date", "clickCount"])
        records = [{"createdAt": 1700000000000}, {"createdAt": 1700003600000}]

        rows = map_to_rows(fields, records)

        assert len(rows) == 2
        assert rows[0]["values"] == ["20231114", 2]
        assert rows[1]["values"] == ["20231114", 2]

    def test_click_count_is_batch_size(self, sample_clicks):
        records = sample_clicks + [dict(sample_clicks[0], alias="other")]
        rows = map_to_rows(schema_for(["aliasName", "clickCount"]), records)
        assert [r["values"][1] for r in rows] == [3, 3, 3]

    def test_row_order_follows_records(self, sample_clicks):
        rows = map_to_rows(schema_for(["browser"]), sample_clicks)
        assert [r["values"] for r in rows] == [["Chrome"], ["Safari"]]

    def test_all_fields(self, sample_clicks):
        rows = map_to_rows(all_fields(), sample_clicks[:1])
        assert rows[0]["values"] == [
            "promo",
            "a1",
            "Chrome",
            "US",
            "20231114",
            format_hour(1700000000000),
            "https://example.com/landing",
            "short.fyi",
            "Windows",
            1,
        ]

    def test_operating_system_reads_os(self, sample_clicks):
        rows = map_to_rows(schema_for(["opreatingSystem"]), sample_clicks)
        assert [r["values"][0] for r in rows] == ["Windows", "iOS"]

    def test_unknown_field_maps_to_empty_string(self, sample_clicks):
        unknown = FieldDefinition(
            id="referrer",
            concept_type=ConceptType.DIMENSION,
            semantic_type=SemanticType.TEXT,
        )
        fields = [unknown] + schema_for(["country"])
        rows = map_to_rows(fields, sample_clicks)
        assert [r["values"] for r in rows] == [["", "US"], ["", "IL"]]

    def test_missing_record_key_is_none(self):
        rows = map_to_rows(schema_for(["browser", "date"]), [{"createdAt": 1700000000000}])
        assert rows[0]["values"] == [None, "20231114"]

    def test_empty_records(self):
        assert map_to_rows(all_fields(), []) == []
        assert map_to_rows([], []) == []

    def test_no_requested_fields(self, sample_clicks):
        rows = map_to_rows([], sample_clicks)
        assert rows == [{"values": []}, {"values": []}]

    def test_catalog_fields_never_default_to_empty(self, sample_clicks):
        """Every catalog field resolves through its own extractor."""
        for field in all_fields():
            value = map_to_rows([field], sample_clicks[:1])[0]["values"][0]
            assert value != "", field.id
