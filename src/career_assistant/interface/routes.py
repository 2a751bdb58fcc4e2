"""API routes — thin controllers that delegate to the gateway."""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from career_assistant.domain.entities import ProviderConfig
from career_assistant.domain.exceptions import ProviderError
from career_assistant.interface.dependencies import get_gateway, get_provider_config
from career_assistant.interface.schemas import (
    ChatRequest,
    CoverLetterRequest,
    DeepThinkRequest,
    ErrorResponse,
    JobListingOut,
    JobMetadataOut,
    JobMetadataRequest,
    JobSearchRequest,
    ProviderStatusResponse,
    ReferralMessageOut,
    ReferralRequest,
    ResumeAnalysisOut,
    ResumeAnalyzeRequest,
    ResumeTailorRequest,
    TailoredResumeOut,
    TextResponse,
)
from career_assistant.services.career_gateway import CareerGateway

logger = logging.getLogger(__name__)

router = APIRouter()

_PROVIDER_ERRORS: dict[int | str, dict[str, Any]] = {
    499: {"model": ErrorResponse, "description": "Request cancelled"},
    502: {"model": ErrorResponse, "description": "LLM provider error or undecodable reply"},
    503: {"model": ErrorResponse, "description": "LLM provider not configured"},
}


@router.get("/provider", response_model=ProviderStatusResponse)
async def provider_status(
    config: ProviderConfig = Depends(get_provider_config),
    gateway: CareerGateway = Depends(get_gateway),
) -> ProviderStatusResponse:
    """Report which provider is active and whether it can serve requests."""
    return ProviderStatusResponse(
        provider=config.kind.value,
        model=config.model,
        readiness=gateway.readiness.value,
    )


# ── Chat ────────────────────────────────────────────────────────────────────


@router.post("/chat", responses=_PROVIDER_ERRORS)
async def chat(
    body: ChatRequest,
    gateway: CareerGateway = Depends(get_gateway),
) -> StreamingResponse:
    """Stream the assistant's reply as plain text."""
    chunks = gateway.stream_chat(body.turns(), body.message)
    # Pull the first chunk eagerly so setup failures still map to an HTTP status.
    try:
        first: str | None = await chunks.__anext__()
    except StopAsyncIteration:
        first = None
    return StreamingResponse(_relay(first, chunks), media_type="text/plain; charset=utf-8")


async def _relay(first: str | None, chunks: AsyncIterator[str]) -> AsyncIterator[str]:
    if first is None:
        return
    yield first
    try:
        async for chunk in chunks:
            yield chunk
    except ProviderError as exc:
        logger.warning("Chat stream aborted: %s", exc)
        yield f"\n[Error: {exc}]"


@router.post("/chat/deep-think", response_model=TextResponse, responses=_PROVIDER_ERRORS)
async def deep_think(
    body: DeepThinkRequest,
    gateway: CareerGateway = Depends(get_gateway),
) -> TextResponse:
    text = await gateway.deep_reasoning(body.turns(), body.prompt)
    return TextResponse(text=text)


# ── Jobs ────────────────────────────────────────────────────────────────────


@router.post("/jobs/search", response_model=list[JobListingOut], responses=_PROVIDER_ERRORS)
async def search_jobs(
    body: JobSearchRequest,
    gateway: CareerGateway = Depends(get_gateway),
) -> list[JobListingOut]:
    listings = await gateway.search_jobs(body.query)
    return [JobListingOut.model_validate(job) for job in listings]


@router.post("/jobs/metadata", response_model=JobMetadataOut, responses=_PROVIDER_ERRORS)
async def job_metadata(
    body: JobMetadataRequest,
    gateway: CareerGateway = Depends(get_gateway),
) -> JobMetadataOut:
    meta = await gateway.extract_job_metadata(body.text)
    return JobMetadataOut.model_validate(meta)


# ── Resume ──────────────────────────────────────────────────────────────────


@router.post("/resume/analyze", response_model=ResumeAnalysisOut, responses=_PROVIDER_ERRORS)
async def analyze_resume(
    body: ResumeAnalyzeRequest,
    gateway: CareerGateway = Depends(get_gateway),
) -> ResumeAnalysisOut:
    analysis = await gateway.analyze_resume(body.resume_text)
    return ResumeAnalysisOut.model_validate(analysis)


@router.post("/resume/tailor", response_model=TailoredResumeOut, responses=_PROVIDER_ERRORS)
async def tailor_resume(
    body: ResumeTailorRequest,
    gateway: CareerGateway = Depends(get_gateway),
) -> TailoredResumeOut:
    tailored = await gateway.tailor_resume(
        body.resume_text, body.job_description, body.target_market
    )
    return TailoredResumeOut.model_validate(tailored)


@router.post("/cover-letter", response_model=TextResponse, responses=_PROVIDER_ERRORS)
async def cover_letter(
    body: CoverLetterRequest,
    gateway: CareerGateway = Depends(get_gateway),
) -> TextResponse:
    text = await gateway.generate_cover_letter(body.resume_text, body.job_description)
    return TextResponse(text=text)


@router.post("/referral", response_model=ReferralMessageOut, responses=_PROVIDER_ERRORS)
async def referral(
    body: ReferralRequest,
    gateway: CareerGateway = Depends(get_gateway),
) -> ReferralMessageOut:
    message = await gateway.generate_referral(
        body.resume_text,
        body.job_description,
        body.referrer_name,
        body.relationship,
        body.platform,
    )
    return ReferralMessageOut.model_validate(message)
