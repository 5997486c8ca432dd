import json
import logging
import math
import random
import re
from typing import Any, Dict, List, Optional

from careersync.errors import MalformedModelOutput
from careersync.schemas.analysis import AnalysisResult

logger = logging.getLogger("careersync.normalizer")

FALLBACK_SCORE_RANGE = (50, 90)
FALLBACK_MATCHING_SKILLS = ["Problem Solving", "Team Collaboration"]
FALLBACK_MISSING_SKILLS = ["Specific Technical Skills", "Industry Experience"]
FALLBACK_STRENGTHS = ["Strong educational background", "Relevant experience"]
FALLBACK_SUGGESTIONS = ["Add quantifiable achievements", "Include recent project details"]

FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_-]*")

LIST_FIELDS = {
    "matchingSkills": "matching_skills",
    "missingSkills": "missing_skills",
    "strengths": "strengths",
    "suggestions": "suggestions",
}


def _strip_fences(text: str) -> str:
    # Some models wrap JSON in ```json ... ``` fences, sometimes on a single line.
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = FENCE_OPEN.sub("", cleaned, count=1)
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def _decode(text: str, raw: str) -> Any:
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise MalformedModelOutput(f"Reply is not JSON: {exc}", raw=raw) from exc


def _load_object(raw: str) -> Dict[str, Any]:
    try:
        data = _decode(_strip_fences(raw), raw)
    except MalformedModelOutput:
        # Some models append commentary after the JSON; cut at the last closing brace.
        start, end = raw.find("{"), raw.rfind("}")
        if start == -1 or end <= start:
            raise
        data = _decode(raw[start : end + 1], raw)
    if not isinstance(data, dict):
        raise MalformedModelOutput("Reply is JSON but not an object", raw=raw)
    return data


def _coerce_score(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return max(0, min(100, value))
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return None
    if not isinstance(value, float) or math.isnan(value) or math.isinf(value):
        return None
    return max(0, min(100, int(round(value))))


def _coerce_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    items: List[str] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            continue
        text = str(item).strip()
        if text and text not in items:
            items.append(text)
    return items


def parse_analysis(raw: str) -> AnalysisResult:
    """Parse a model reply into an AnalysisResult.

    Raises MalformedModelOutput when the reply is not a JSON object with a
    numeric score. Missing or non-array list fields become empty lists.
    """
    data = _load_object(raw)
    score = _coerce_score(data.get("score"))
    if score is None:
        raise MalformedModelOutput("Reply has no numeric score", raw=raw)
    lists = {attr: _coerce_list(data.get(key)) for key, attr in LIST_FIELDS.items()}
    return AnalysisResult(score=score, degraded=False, **lists)


def fallback_analysis(rng: random.Random) -> AnalysisResult:
    low, high = FALLBACK_SCORE_RANGE
    return AnalysisResult(
        score=rng.randrange(low, high),
        matching_skills=list(FALLBACK_MATCHING_SKILLS),
        missing_skills=list(FALLBACK_MISSING_SKILLS),
        strengths=list(FALLBACK_STRENGTHS),
        suggestions=list(FALLBACK_SUGGESTIONS),
        degraded=True,
    )


def normalize_analysis(raw: Optional[str], rng: random.Random) -> AnalysisResult:
    """Always returns a well-shaped result; ``raw=None`` means the model call itself failed."""
    if raw is None:
        logger.warning("No model reply, using fallback analysis")
        return fallback_analysis(rng)
    try:
        return parse_analysis(raw)
    except MalformedModelOutput as exc:
        logger.warning("Malformed model reply (%s): %r", exc, raw[:200])
        return fallback_analysis(rng)
