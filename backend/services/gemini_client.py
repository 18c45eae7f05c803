"""Google Gemini API wrapper with error handling."""

import logging

from google import genai
from google.genai import errors, types

from services.errors import EmptyProviderContentError, ProviderHTTPError
from services.prompt_builder import ANALYSIS_RESPONSE_SCHEMA, SYSTEM_PROMPT

logger = logging.getLogger(__name__)

_clients: dict[str, genai.Client] = {}


def get_client(api_key: str) -> genai.Client:
    if api_key not in _clients:
        _clients[api_key] = genai.Client(api_key=api_key)
    return _clients[api_key]


async def generate_text(
    prompt: str,
    *,
    api_key: str,
    model: str = "gemini-2.5-flash",
    temperature: float = 0.3,
    max_output_tokens: int = 2000,
) -> str:
    """Send a prompt to Gemini and return the raw text of its reply."""
    client = get_client(api_key)

    try:
        response = await client.aio.models.generate_content(
            model=model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=SYSTEM_PROMPT,
                temperature=temperature,
                max_output_tokens=max_output_tokens,
                response_mime_type="application/json",
                response_schema=ANALYSIS_RESPONSE_SCHEMA,
            ),
        )
    except errors.APIError as e:
        logger.error("Gemini API error (%s): %s", e.code, e.message)
        raise ProviderHTTPError(e.message or None, upstream_status=e.code) from e

    text = response.text
    if not text or not text.strip():
        logger.error("Gemini returned no content")
        raise EmptyProviderContentError()

    logger.debug("Raw Gemini output: %s", text)
    return text
