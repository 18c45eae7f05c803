"""Analysis flow for a single request.

1. Input validation (both fields present, within length limits)
2. Credential check (no outbound call without a key)
3. Prompt construction
4. Gemini call
5. JSON recovery from the reply
6. Optional strict shape check
"""

import logging
from typing import Any

from pydantic import ValidationError

from config import Settings
from models.requests import AnalysisRequest
from models.responses import AnalysisResult
from services import gemini_client, prompt_builder, response_parser
from services.errors import (
    InputTooLongError,
    MissingCredentialError,
    MissingInputError,
    ResultShapeError,
)

logger = logging.getLogger(__name__)


def validate_request(request: AnalysisRequest, settings: Settings) -> tuple[str, str]:
    """Return (resume, job_description) or raise on missing/oversized input."""
    resume = request.resume or ""
    job_description = request.job_description or ""

    missing = []
    if not resume.strip():
        missing.append("resume")
    if not job_description.strip():
        missing.append("jobDescription")
    if missing:
        raise MissingInputError(missing)

    if len(resume) > settings.max_resume_chars:
        raise InputTooLongError("Resume", settings.max_resume_chars)
    if len(job_description) > settings.max_job_description_chars:
        raise InputTooLongError("Job description", settings.max_job_description_chars)

    return resume, job_description


async def analyze(request: AnalysisRequest, settings: Settings) -> Any:
    """Run the analysis and return the model's parsed JSON reply."""
    resume, job_description = validate_request(request, settings)

    if not settings.gemini_api_key:
        logger.error("No GEMINI_API_KEY set - refusing to call Gemini")
        raise MissingCredentialError()

    prompt = prompt_builder.build_analysis_prompt(resume, job_description)
    raw = await gemini_client.generate_text(
        prompt,
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        temperature=settings.llm_temperature,
        max_output_tokens=settings.llm_max_output_tokens,
    )

    result = response_parser.parse_model_output(
        raw, excerpt_chars=settings.diagnostic_excerpt_chars
    )

    if settings.strict_result_schema:
        try:
            AnalysisResult.model_validate(result, strict=True)
        except ValidationError as e:
            logger.error("Model output failed shape check: %s", e)
            raise ResultShapeError() from e

    return result
