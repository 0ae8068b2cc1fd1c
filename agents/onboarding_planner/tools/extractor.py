"""
Response Extractor

Turns free-form model text into a validated PlanResponse. Models often wrap
JSON in markdown fences or surround it with prose, so extraction tries a
fenced block first and falls back to the widest {...} span.
"""

import json
import re
from typing import Any

import structlog
from pydantic import ValidationError

from ..errors import ExtractionError, PlanParseError, PlanValidationError
from ..schemas.plan import PlanResponse

logger = structlog.get_logger(__name__)

FENCED_JSON_PATTERN = re.compile(r"```(?:json)?[ \t]*\n?([\s\S]*?)\n?```")
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

REQUIRED_FIELDS = (
    "executiveSummary",
    "recommendedEntityType",
    "confidenceScores",
    "selectedTaskTemplateIds",
    "planSummary",
)


def response_text(content: Any) -> str:
    """
    Concatenate the text segments of a model response.

    Content is either a plain string or an ordered list of parts, where
    each part is a string or a dict such as {"type": "text", "text": ...}.
    Non-text parts (tool calls, images) are dropped.
    """
    if isinstance(content, str):
        return content
    if not isinstance(content, list):
        return ""

    segments = []
    for part in content:
        if isinstance(part, str):
            segments.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            segments.append(part.get("text", ""))
    return "\n".join(segments)


def extract_json_text(text: str) -> str:
    """Return the JSON-looking region of ``text``."""
    match = FENCED_JSON_PATTERN.search(text)
    if match:
        return match.group(1)

    match = JSON_OBJECT_PATTERN.search(text)
    if match:
        return match.group(0)

    logger.warning("No JSON found in model response", preview=text[:200])
    raise ExtractionError("Failed to extract JSON from AI response")


def extract_json_object(text: str) -> dict[str, Any]:
    """Extract and parse the JSON object embedded in ``text``."""
    json_text = extract_json_text(text)
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.warning("Model JSON did not parse", error=str(e), preview=json_text[:200])
        raise PlanParseError("Failed to parse AI response as JSON") from e

    if not isinstance(data, dict):
        raise PlanParseError("AI response JSON is not an object")
    return data


def _is_present(field: str, value: Any) -> bool:
    if field in ("executiveSummary", "confidenceScores"):
        return isinstance(value, dict)
    if field == "selectedTaskTemplateIds":
        return isinstance(value, list) and len(value) > 0
    return bool(value)


def parse_plan_response(text: str) -> PlanResponse:
    """
    Extract, parse and validate the model's plan.

    Raises:
        ExtractionError: no JSON-like region in the text
        PlanParseError: region is not a JSON object
        PlanValidationError: a required field is missing or malformed
    """
    data = extract_json_object(text)

    missing = [field for field in REQUIRED_FIELDS if not _is_present(field, data.get(field))]
    if missing:
        raise PlanValidationError(missing)

    try:
        return PlanResponse.model_validate(data)
    except ValidationError as e:
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise PlanValidationError(fields) from e
