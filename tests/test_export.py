from datetime import date

import pytest
from pydantic import ValidationError

from recipient_csv.batch import render_each
from recipient_csv.export import export_filename, recipients_to_csv, template_csv
from recipient_csv.models import RecipientRecord
from recipient_csv.parse import parse_recipients


def test_template_parses():
    text = template_csv()
    assert not text.endswith("\n")
    result = parse_recipients(text)
    assert [r.certification_id for r in result.recipients] == ["CERT-001", "CERT-002", "CERT-003"]


def test_exported_recipients_parse_back():
    records = [
        RecipientRecord(name="Doe, Jane", certification_id="CERT-001", email="jane@example.com"),
        RecipientRecord(name='Say "Hi"', certification_id="CERT-002"),
        RecipientRecord(name="Line\nBreak", certification_id="CERT-003"),
    ]
    assert parse_recipients(recipients_to_csv(records)).recipients == records


def test_export_filename():
    name = export_filename("My Event: 2025 / Day 1", 12, today=date(2025, 3, 4))
    assert name == "participants_my_event_2025_day_1_12_2025-03-04.csv"


def test_render_each_continues_after_failure():
    records = [
        RecipientRecord(name="A", certification_id="CERT-001"),
        RecipientRecord(name="B", certification_id="CERT-002"),
        RecipientRecord(name="C", certification_id="CERT-003"),
    ]

    def render(record):
        if record.certification_id == "CERT-002":
            raise RuntimeError("template missing")
        return record.name.encode()

    outcome = render_each(records, render)

    assert outcome.artifacts == {
        "certificate_CERT-001.png": b"A",
        "certificate_CERT-003.png": b"C",
    }
    assert [(f.certification_id, f.error) for f in outcome.failures] == [
        ("CERT-002", "template missing")
    ]


def test_exported_quoted_values_parse_back():
    records = [
        RecipientRecord(name='"Hi"', certification_id="CERT-001"),
        RecipientRecord(name='""', certification_id="CERT-002"),
    ]
    text = recipients_to_csv(records)
    assert '"""Hi"""' in text
    assert parse_recipients(text).recipients == records


def test_blank_name_is_rejected_by_model():
    with pytest.raises(ValidationError):
        RecipientRecord(name="   ", certification_id="CERT-001")
    with pytest.raises(ValidationError):
        RecipientRecord(name="Alice", certification_id=" ")
