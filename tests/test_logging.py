import json
import logging
import sys

from netwise.logging import JsonFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "netwise.websocket_handlers", logging.INFO, __file__, 1, "Reply %s", ("delivered",), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_renders_message_and_extra() -> None:
    line = JsonFormatter().format(_record(client="127.0.0.1:5000", chars=12))
    payload = json.loads(line)

    assert payload["level"] == "INFO"
    assert payload["logger"] == "netwise.websocket_handlers"
    assert payload["message"] == "Reply delivered"
    assert payload["client"] == "127.0.0.1:5000"
    assert payload["chars"] == 12
    assert "time" in payload


def test_json_formatter_omits_record_internals() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    for key in ("args", "msg", "pathname", "lineno", "thread", "processName"):
        assert key not in payload


def test_json_formatter_includes_traceback() -> None:
    try:
        raise RuntimeError("upstream down")
    except RuntimeError:
        record = logging.LogRecord(
            "netwise", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
        )

    payload = json.loads(JsonFormatter().format(record))

    assert "RuntimeError: upstream down" in payload["exc_info"]
