import asyncio
import json
from datetime import datetime, timezone

import pytest

from app.config import Settings
from submission import handler
from submission.utils import utc_timestamp


def test_parse_body_variants():
    assert handler.parse_body(b'{"name": "ann"}') == {"name": "ann"}
    assert handler.parse_body(json.dumps(json.dumps({"name": "ann"}))) == {"name": "ann"}
    assert handler.parse_body({"name": "ann"}) == {"name": "ann"}


@pytest.mark.parametrize("raw", [b"", None, b"null"])
def test_parse_body_empty(raw):
    with pytest.raises(TypeError):
        handler.parse_body(raw)


def test_parse_body_malformed():
    with pytest.raises(ValueError):
        handler.parse_body(b"{oops")


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        ("", ""),
        (0, ""),
        (False, ""),
        (True, "true"),
        (42, "42"),
        ("  spaced out  ", "spaced out"),
        ("x" * 200, "x" * 128),
        (0.0, ""),
        (1.0, "1"),
        (2.5, "2.5"),
        ({}, "[object Object]"),
        ({"a": 1}, "[object Object]"),
        ([], ""),
        (["a", 1, None, True], "a,1,,true"),
        ([["a", "b"], "c"], "a,b,c"),
    ],
)
def test_normalize_field(value, expected):
    assert handler.normalize_field(value) == expected


def test_trim_happens_before_truncation():
    assert handler.normalize_field("   " + "y" * 130) == "y" * 128


def test_answers_match_ignores_case():
    assert handler.answers_match("bAnAnA", "Banana")
    assert not handler.answers_match("banan", "Banana")


def test_build_payload():
    payload = handler.build_payload("ann")
    assert payload["name"] == "ann"
    assert payload["source"] == "puzzle-site"
    datetime.strptime(payload["timestamp"], "%Y-%m-%dT%H:%M:%S.%fZ")


def test_utc_timestamp_format():
    moment = datetime(2026, 10, 18, 9, 15, 2, 123456, tzinfo=timezone.utc)
    assert utc_timestamp(moment) == "2026-10-18T09:15:02.123Z"


def test_handle_submission_flow(forwarded):
    settings = Settings(secret_word="Banana", log_endpoint="https://logs.example.com/hook", log_timeout=2.5)

    assert asyncio.run(handler.handle_submission({"name": "ann", "answer": "apple"}, settings)) == (
        200,
        {"success": False},
    )
    assert asyncio.run(handler.handle_submission({"name": "ann", "answer": "BANANA"}, settings)) == (
        200,
        {"success": True},
    )
    assert forwarded[0]["timeout"] == 2.5
    assert forwarded[0]["token"] is None


def test_handle_submission_missing_secret_logs(capsys):
    status, body = asyncio.run(handler.handle_submission({"name": "ann", "answer": "x"}, Settings()))
    assert status == 500
    assert body == {"success": False, "error": "Configuration error"}
    assert "SECRET_WORD not set" in capsys.readouterr().out


def test_object_answer_is_not_empty(forwarded):
    settings = Settings(secret_word="[object Object]")
    assert asyncio.run(handler.handle_submission({"name": "ann", "answer": {}}, settings)) == (
        200,
        {"success": True},
    )
