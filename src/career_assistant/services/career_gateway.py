"""Career gateway — one method per assistant feature.

The gateway depends only on the :class:`CompletionBackend` port.  Which
provider sits behind it (native SDK, OpenAI-compatible HTTP, or an
unconfigured placeholder) is decided once, at construction time, by the
backend factory; feature methods never branch on provider kind.

Decode failures are handled per feature:

* resume analysis and tailoring raise :class:`ResponseDecodeError`;
* job search, referral messages and job-metadata extraction fall back to an
  empty or placeholder value.
"""

from __future__ import annotations

import inspect
import logging
from typing import AsyncIterator, Awaitable, Callable, Sequence

from career_assistant.domain.entities import (
    ConversationTurn,
    JobListing,
    JobMetadata,
    ReferralMessage,
    ResumeAnalysis,
    TailoredResume,
)
from career_assistant.domain.exceptions import ProviderConnectionError, ResponseDecodeError
from career_assistant.domain.ports.completion_backend import CompletionBackend
from career_assistant.domain.value_objects import CancelToken, Readiness
from career_assistant.services import output_schemas, prompts
from career_assistant.services.response_decoder import (
    decode_json,
    to_job_listings,
    to_job_metadata,
    to_referral_message,
    to_resume_analysis,
    to_tailored_resume,
)

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[str], "Awaitable[None] | None"]


class CareerGateway:
    """Builds feature prompts, dispatches them, and normalises the replies.

    Parameters
    ----------
    backend:
        The provider variant chosen for this gateway's configuration.  The
        gateway owns it and closes it in :meth:`close`.
    """

    def __init__(self, backend: CompletionBackend) -> None:
        self._backend = backend

    @property
    def readiness(self) -> Readiness:
        return self._backend.readiness

    async def close(self) -> None:
        await self._backend.close()

    # ── Chat ────────────────────────────────────────────────────────────

    def stream_chat(
        self,
        history: Sequence[ConversationTurn],
        message: str,
        *,
        cancel: CancelToken | None = None,
    ) -> AsyncIterator[str]:
        """Stream the assistant's reply to *message*.

        *history* is copied immediately, so later changes by the caller do
        not reach the request.
        """
        turns = (*history, ConversationTurn.user(message))
        return self._backend.stream(
            turns, system_prompt=prompts.CHAT_SYSTEM_INSTRUCTION, cancel=cancel
        )

    async def chat_turn(
        self,
        history: Sequence[ConversationTurn],
        message: str,
        on_chunk: ChunkCallback,
        *,
        cancel: CancelToken | None = None,
    ) -> None:
        """Deliver each reply fragment to *on_chunk*, in order."""
        async for chunk in self.stream_chat(history, message, cancel=cancel):
            result = on_chunk(chunk)
            if inspect.isawaitable(result):
                await result

    async def deep_reasoning(
        self,
        history: Sequence[ConversationTurn],
        prompt: str,
        *,
        cancel: CancelToken | None = None,
    ) -> str:
        turns = (*history, ConversationTurn.user(prompt))
        text = await self._backend.complete(turns, reasoning=True, cancel=cancel)
        return text or prompts.NO_RESPONSE_TEXT

    # ── Jobs ────────────────────────────────────────────────────────────

    async def search_jobs(
        self, query: str, *, cancel: CancelToken | None = None
    ) -> list[JobListing]:
        """Generate listings for *query*; unparseable output yields ``[]``."""
        logger.info("Searching jobs for %r", query)
        raw = await self._backend.complete_structured(
            prompts.job_search_prompt(query),
            output_schemas.JOB_LISTINGS,
            system_prompt=prompts.JOB_SEARCH_SYSTEM_INSTRUCTION,
            cancel=cancel,
        )
        try:
            return to_job_listings(decode_json(raw))
        except ResponseDecodeError as exc:
            logger.warning("Discarding unparseable job listings: %s", exc)
            return []

    async def extract_job_metadata(
        self, page_text: str, *, cancel: CancelToken | None = None
    ) -> JobMetadata:
        """Pull title and company out of scraped text.

        Falls back to ``Unknown`` when the reply cannot be decoded or the
        provider cannot be reached.
        """
        try:
            raw = await self._backend.complete_structured(
                prompts.job_metadata_prompt(page_text),
                output_schemas.JOB_METADATA,
                cancel=cancel,
            )
            return to_job_metadata(decode_json(raw))
        except (ResponseDecodeError, ProviderConnectionError) as exc:
            logger.warning("Job metadata extraction fell back to Unknown: %s", exc)
            return JobMetadata.unknown()

    # ── Resume ──────────────────────────────────────────────────────────

    async def analyze_resume(
        self, resume_text: str, *, cancel: CancelToken | None = None
    ) -> ResumeAnalysis:
        raw = await self._backend.complete_structured(
            prompts.resume_analysis_prompt(resume_text),
            output_schemas.RESUME_ANALYSIS,
            cancel=cancel,
        )
        return to_resume_analysis(decode_json(raw))

    async def tailor_resume(
        self,
        resume_text: str,
        job_description: str,
        target_market: str = "Global",
        *,
        cancel: CancelToken | None = None,
    ) -> TailoredResume:
        """Rewrite the resume for one job and market.

        The prompt forbids invented contact details; the reply is not
        checked for compliance.
        """
        logger.info("Tailoring resume for market %s", target_market)
        raw = await self._backend.complete_structured(
            prompts.tailor_resume_prompt(resume_text, job_description, target_market),
            output_schemas.TAILORED_RESUME,
            cancel=cancel,
        )
        return to_tailored_resume(decode_json(raw))

    async def generate_cover_letter(
        self,
        resume_text: str,
        job_description: str,
        *,
        cancel: CancelToken | None = None,
    ) -> str:
        """Markdown cover letter; ``""`` when the model returns nothing."""
        prompt = prompts.cover_letter_prompt(resume_text, job_description)
        return await self._backend.complete([ConversationTurn.user(prompt)], cancel=cancel)

    async def generate_referral(
        self,
        resume_text: str,
        job_description: str,
        referrer_name: str,
        relationship: str,
        platform: str,
        *,
        cancel: CancelToken | None = None,
    ) -> ReferralMessage:
        """Draft a referral request; unparseable output yields an empty message."""
        raw = await self._backend.complete_structured(
            prompts.referral_prompt(
                resume_text, job_description, referrer_name, relationship, platform
            ),
            output_schemas.REFERRAL_MESSAGE,
            cancel=cancel,
        )
        try:
            return to_referral_message(decode_json(raw))
        except ResponseDecodeError as exc:
            logger.warning("Discarding unparseable referral message: %s", exc)
            return ReferralMessage.empty()
