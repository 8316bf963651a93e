"""Structured Logging — tests for the JSON formatter."""

import json
import logging

from crowdfund.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "crowdfund.services.funding_ledger", logging.INFO, __file__, 1,
        "Donation recorded", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_extra_fields_surface_in_output():
    line = JSONFormatter().format(_record(campaign_id=3, donation_id=11))
    payload = json.loads(line)
    assert payload["message"] == "Donation recorded"
    assert payload["level"] == "INFO"
    assert payload["campaign_id"] == 3
    assert payload["donation_id"] == 11
    assert "user_id" not in payload


def test_non_json_values_are_stringified():
    payload = json.loads(JSONFormatter().format(_record(state=object())))
    assert payload["state"].startswith("<object")
