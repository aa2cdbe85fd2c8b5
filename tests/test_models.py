import json

import pytest

from netwise.models import GenerateContentRequest, finish_reason, parse_prompt, reply_text


def test_parse_prompt_envelope() -> None:
    raw = json.dumps({"type": "prompt", "prompt": "What does ARP do?"})
    assert parse_prompt(raw) == "What does ARP do?"


def test_parse_prompt_envelope_without_type() -> None:
    assert parse_prompt('{"prompt": "DNS?"}') == "DNS?"


def test_parse_prompt_keeps_whitespace() -> None:
    assert parse_prompt(json.dumps({"type": "prompt", "prompt": "  "})) == "  "


@pytest.mark.parametrize(
    "raw",
    [
        "What is a subnet mask?",
        "{broken json",
        '{"type": "prompt"}',
        '{"prompt": 42}',
        '["prompt"]',
        "42",
        '"quoted"',
        "",
    ],
)
def test_parse_prompt_falls_back_to_raw(raw: str) -> None:
    assert parse_prompt(raw) == raw


def test_single_turn_request_shape() -> None:
    body = GenerateContentRequest.single_turn("be brief", "hello")

    assert body.model_dump(exclude_none=True) == {
        "system_instruction": {"parts": [{"text": "be brief"}]},
        "contents": [{"role": "user", "parts": [{"text": "hello"}]}],
    }


def test_reply_text_reads_first_part_only() -> None:
    body = {
        "candidates": [
            {"content": {"parts": [{"text": "first"}, {"text": 7}]}},
            5,
            {"content": {"parts": [{"text": "other candidate"}]}},
        ],
        "usageMetadata": {"totalTokenCount": 12},
    }

    assert reply_text(body) == "first"


@pytest.mark.parametrize(
    "body",
    [
        {},
        [],
        None,
        "text",
        {"candidates": "x"},
        {"candidates": [None]},
        {"candidates": [{"content": []}]},
        {"candidates": [{"content": {"parts": {"text": "X"}}}]},
        {"candidates": [{"content": {"parts": [{"text": 7}]}}]},
        {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
    ],
)
def test_reply_text_absent(body) -> None:
    assert reply_text(body) is None


def test_finish_reason() -> None:
    assert finish_reason({"candidates": [{"finishReason": "SAFETY"}]}) == "SAFETY"
    assert finish_reason({"candidates": [{"finishReason": 3}]}) is None
    assert finish_reason([]) is None
