"""
LLM Utilities - OpenAI API Integration and JSON Extraction.

This module provides utilities for interacting with OpenAI's chat completion
API and processing its responses. It is the single interface used by the
question generator and the skill analyzer.

Key Functions:
    - call_llm: Central function for all LLM API calls with automatic retry logic
    - extract_json: Extracts the JSON object from a response that may be
      wrapped in markdown code blocks or contain extra explanatory text
    - parse_json_object: extract_json + json.loads, raising ExternalServiceError

Features:
    - Lazy OpenAI client initialization (no client when AI is disabled)
    - Automatic retry with exponential backoff for transient failures
    - JSON object response format
    - Response validation and comprehensive error handling

Environment Variables:
    OPENAI_API_KEY: OpenAI API key (absent = AI disabled, callers fall back)
    OPENAI_MODEL: Model name to use (default: "gpt-4o-mini")
"""

import json
import time
from typing import Any, Dict, Optional

from openai import OpenAI
from openai import RateLimitError, APIConnectionError, APITimeoutError

from skillpath.config import settings
from skillpath.utils.exceptions import ExternalServiceError
from skillpath.utils.logger import get_logger

logger = get_logger(__name__)

_client: Optional[OpenAI] = None


def get_client() -> OpenAI:
    """Get or create the OpenAI client using lazy initialization.

    Raises:
        ExternalServiceError: If no API key is configured.
    """
    global _client
    if _client is None:
        if not settings.ai_enabled():
            raise ExternalServiceError("OPENAI_API_KEY is not configured")
        _client = OpenAI(api_key=settings.OPENAI_API_KEY)
    return _client


def call_llm(
    system_prompt: str,
    user_prompt: str,
    max_tokens: int = 2000,
    max_retries: int = 2,
    retry_delay: float = 1.0,
    json_mode: bool = True,
) -> str:
    """Call the OpenAI chat completion API with system and user prompts.

    Used by:
        - QuestionGeneratorAgent: Generate assessment questions
        - SkillAnalyzerAgent: Produce the analysis bundle

    Args:
        system_prompt: System prompt defining the role and the output schema.
        user_prompt: User prompt containing the JSON-encoded input data.
        max_tokens: Maximum number of tokens in the response.
        max_retries: Maximum number of retry attempts for transient failures.
        retry_delay: Initial delay between retries in seconds. Uses exponential
            backoff: retry_delay, retry_delay*2, retry_delay*4, ...
        json_mode: Request a JSON object response format.

    Returns:
        The response text of the first choice.

    Raises:
        ExternalServiceError: If AI is disabled or the response has no content.
        RateLimitError, APIConnectionError, APITimeoutError: After all retries.
        Exception: For other non-retryable errors (e.g., authentication).
    """

    client = get_client()
    retryable_errors = (RateLimitError, APIConnectionError, APITimeoutError)

    request = {
        "model": settings.OPENAI_MODEL,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "max_tokens": max_tokens,
        "temperature": 0.4,
    }
    if json_mode:
        request["response_format"] = {"type": "json_object"}

    for attempt in range(max_retries + 1):
        try:
            response = client.chat.completions.create(**request)
            break

        except retryable_errors as e:
            if attempt < max_retries:
                delay = retry_delay * (2**attempt)
                logger.warning(
                    f"LLM API call failed (attempt {attempt + 1}/{max_retries + 1}): "
                    f"{type(e).__name__}. Retrying in {delay:.1f}s..."
                )
                time.sleep(delay)
            else:
                logger.error(
                    f"LLM API call failed after {max_retries + 1} attempts: {type(e).__name__}"
                )
                raise
        except Exception as e:
            logger.error(
                f"LLM API call failed with non-retryable error: {type(e).__name__}: {str(e)}"
            )
            raise

    if not response or not getattr(response, "choices", None):
        raise ExternalServiceError("OpenAI API returned no choices")

    message = response.choices[0].message
    text = getattr(message, "content", None)
    if text is None:
        raise ExternalServiceError("OpenAI API returned None content in response")

    logger.debug("LLM response: %s", text[:500])

    return text


def extract_json(text: str) -> Optional[str]:
    """Extract the first JSON object from LLM response text.

    Finds the first opening brace and balances braces to the matching
    closing brace, which handles markdown code fences and explanatory text
    around the object.

    Args:
        text: Raw LLM response text.

    Returns:
        The extracted JSON string, or None if no object is found. The string is
        not validated.

    Example:
        Input: "Here you go: ```json\\n{\\"questions\\": []}\\n```"
        Output: '{"questions": []}'
    """

    start = text.find("{")
    if start == -1:
        return None

    brace = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        char = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            brace += 1
        elif char == "}":
            brace -= 1
            if brace == 0:
                return text[start : i + 1]

    return None


def parse_json_object(text: str) -> Dict[str, Any]:
    """Parse the JSON object contained in an LLM response.

    Raises:
        ExternalServiceError: If no JSON object can be parsed.
    """
    json_text = extract_json(text or "")
    if json_text is None:
        raise ExternalServiceError("LLM response contains no JSON object")
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise ExternalServiceError(f"Failed to parse JSON response from LLM: {e}") from e
    if not isinstance(data, dict):
        raise ExternalServiceError("LLM response JSON is not an object")
    return data
