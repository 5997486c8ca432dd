from __future__ import annotations

import json
import random

import pytest

from careersync.errors import MalformedModelOutput
from careersync.services.normalizer import (
    FALLBACK_MATCHING_SKILLS,
    fallback_analysis,
    normalize_analysis,
    parse_analysis,
)

VALID_REPLY = json.dumps(
    {
        "score": 82,
        "matchingSkills": ["SQL", "APIs"],
        "missingSkills": [],
        "strengths": ["Experience"],
        "suggestions": ["Add metrics"],
    }
)


def test_parses_well_formed_reply() -> None:
    result = parse_analysis(VALID_REPLY)
    assert result.score == 82
    assert result.matching_skills == ["SQL", "APIs"]
    assert result.missing_skills == []
    assert result.strengths == ["Experience"]
    assert result.suggestions == ["Add metrics"]
    assert result.degraded is False


@pytest.mark.parametrize("score, expected", [(150, 100), (-5, 0), (73.6, 74), ("64", 64), ("91%", 91)])
def test_score_is_coerced_into_range(score, expected) -> None:
    assert parse_analysis(json.dumps({"score": score})).score == expected


def test_missing_or_non_array_lists_become_empty() -> None:
    result = parse_analysis(json.dumps({"score": 40, "matchingSkills": "SQL", "strengths": None}))
    assert result.matching_skills == []
    assert result.missing_skills == []
    assert result.strengths == []
    assert result.suggestions == []


def test_list_items_are_cleaned() -> None:
    result = parse_analysis(json.dumps({"score": 40, "matchingSkills": ["SQL", " SQL ", "", 3, {"x": 1}, True]}))
    assert result.matching_skills == ["SQL", "3"]


def test_code_fences_and_trailing_commentary_are_tolerated() -> None:
    fenced = "```json\n" + VALID_REPLY + "\n```"
    fence_on_json_line = "```json\n" + VALID_REPLY + "```"
    single_line = "```" + VALID_REPLY + "```"
    chatty = "Here you go:\n" + VALID_REPLY + "\nHope this helps!"
    assert parse_analysis(fenced).score == 82
    assert parse_analysis(fence_on_json_line).score == 82
    assert parse_analysis(single_line).matching_skills == ["SQL", "APIs"]
    assert parse_analysis(chatty).score == 82


@pytest.mark.parametrize(
    "raw",
    [
        "Sorry, I cannot help.",
        "[1, 2, 3]",
        json.dumps({"matchingSkills": ["SQL"]}),
        json.dumps({"score": "high"}),
        json.dumps({"score": True}),
        "{not json}",
    ],
)
def test_unusable_replies_are_rejected(raw: str) -> None:
    with pytest.raises(MalformedModelOutput):
        parse_analysis(raw)


def test_fallback_has_placeholder_content_and_score_in_range() -> None:
    rng = random.Random(0)
    for _ in range(50):
        result = fallback_analysis(rng)
        assert 50 <= result.score < 90
        assert result.degraded is True
        assert result.matching_skills == FALLBACK_MATCHING_SKILLS
        assert result.missing_skills and result.strengths and result.suggestions


def test_fallback_score_follows_injected_random_source() -> None:
    assert fallback_analysis(random.Random(3)).score == fallback_analysis(random.Random(3)).score


def test_normalize_never_raises() -> None:
    rng = random.Random(1)
    assert normalize_analysis(VALID_REPLY, rng).degraded is False
    assert normalize_analysis("Sorry, I cannot help.", rng).degraded is True
    assert normalize_analysis(None, rng).degraded is True
    assert normalize_analysis("", rng).degraded is True


def test_huge_integer_score_is_clamped() -> None:
    raw = '{"score": 1' + "0" * 400 + ', "matchingSkills": ["SQL"]}'
    result = normalize_analysis(raw, random.Random(1))
    assert result.degraded is False
    assert result.score == 100
    assert result.matching_skills == ["SQL"]


def test_deeply_nested_reply_degrades_to_fallback() -> None:
    raw = '{"score": ' + "[" * 5000 + "}"
    result = normalize_analysis(raw, random.Random(1))
    assert result.degraded is True
    assert 50 <= result.score < 90
