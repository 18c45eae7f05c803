from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_settings
from config import Settings, settings
from models.requests import AnalysisRequest
from models.responses import AnalysisResult, ErrorResponse
from services import resume_analyzer

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


@router.get("/health")
async def health(current: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "gemini_configured": bool(current.gemini_api_key),
    }


@router.post(
    "/api/analyze",
    responses={
        200: {"model": AnalysisResult},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
@limiter.limit(settings.rate_limit)
async def analyze(
    request: Request,
    body: AnalysisRequest | None = None,
    current: Settings = Depends(get_settings),
):
    return await resume_analyzer.analyze(body or AnalysisRequest(), current)
