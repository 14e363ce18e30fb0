"""
Tests for scanner payload parsing.
"""

import json

import pytest

from sneaker_secure.core.exceptions import ValidationError
from sneaker_secure.scanning import ScanPayload, parse_scan_payload


class TestParseScanPayload:
    """Accepting and rejecting decoded scanner payloads."""

    def test_minimal_payload(self) -> None:
        payload = parse_scan_payload('{"id": "abc"}')
        assert isinstance(payload, ScanPayload)
        assert payload.id == "abc"
        assert payload.name == ""
        assert payload.gallery == []

    def test_full_payload_to_item(self) -> None:
        raw = json.dumps(
            {
                "id": " abc ",
                "name": "Air Jordan 1",
                "description": "Chicago",
                "imageUrl": "https://example.com/aj1.jpg",
                "manufactureNumber": 555088,
                "gallery": ["https://example.com/1.jpg"],
                "history": [{"name": "Factory", "date": "2023-01-01"}],
                "extra": "ignored",
            }
        )
        item = parse_scan_payload(raw).to_item()

        assert item.id == "abc"
        assert item.image_url == "https://example.com/aj1.jpg"
        assert item.manufacture_number == "555088"
        assert item.gallery == ["https://example.com/1.jpg"]
        assert item.history[0].name == "Factory"

    def test_bytes_and_mapping(self) -> None:
        assert parse_scan_payload(b'{"id": "abc"}').id == "abc"
        assert parse_scan_payload({"id": "abc"}).id == "abc"

    @pytest.mark.parametrize(
        "raw",
        ["not json at all", "[1, 2, 3]", '"abc"', "{}", '{"id": ""}', '{"id": "   "}'],
    )
    def test_rejects_malformed(self, raw: str) -> None:
        with pytest.raises(ValidationError):
            parse_scan_payload(raw)

    def test_rejects_numeric_id(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_scan_payload('{"id": 123}')
        assert exc_info.value.field == "id"

    def test_names_offending_field(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_scan_payload('{"id": "abc", "gallery": "not-a-list"}')
        assert exc_info.value.field == "gallery"

    def test_rejects_unsupported_type(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_scan_payload(12345)  # type: ignore[arg-type]
        assert exc_info.value.field == "payload"
