"""
Extraction of structured JSON from free-form model output.

The model is asked to wrap its answer in a ```json fenced block. Model output
is not deterministic, so a missing or malformed block degrades to an empty
result instead of failing the request.
"""

import json
import logging
import re

from ...models import ExtractionOutcome, ExtractionStatus

logger = logging.getLogger(__name__)

# First ```json ... ``` block; non-greedy so a second block is never swallowed
JSON_BLOCK_PATTERN = re.compile(r"```json(.*?)```", re.DOTALL)


def extract_json_block(text: str | None) -> ExtractionOutcome:
    """
    Pull the first fenced JSON block out of model text and parse it.

    Args:
        text: Raw text returned by the model.

    Returns:
        ExtractionOutcome. On PARSED, ``data`` holds the decoded value as-is;
        on NO_BLOCK or INVALID_JSON, ``data`` is an empty dict.
    """
    match = JSON_BLOCK_PATTERN.search(text or "")
    if match is None:
        logger.warning("No code block with JSON found in AI response.")
        return ExtractionOutcome(
            status=ExtractionStatus.NO_BLOCK,
            reason="No ```json code block in model output",
        )

    try:
        data = json.loads(match.group(1).strip())
    except json.JSONDecodeError as e:
        logger.error("Error parsing JSON from AI response: %s", e)
        return ExtractionOutcome(
            status=ExtractionStatus.INVALID_JSON,
            reason=str(e),
        )

    return ExtractionOutcome(status=ExtractionStatus.PARSED, data=data)
