"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from career_assistant.domain.entities import ChatRole, ConversationTurn


class _CamelModel(BaseModel):
    """Accepts and emits camelCase keys, like the browser client sends."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ── Requests ────────────────────────────────────────────────────────────────


class TurnIn(_CamelModel):
    role: ChatRole
    content: str

    @field_validator("role", mode="before")
    @classmethod
    def _model_means_assistant(cls, v: object) -> object:
        # Gemini-style histories call the assistant "model".
        return "assistant" if v == "model" else v

    def to_turn(self) -> ConversationTurn:
        return ConversationTurn(role=self.role, text=self.content)


class _HistoryRequest(_CamelModel):
    history: list[TurnIn] = Field(default_factory=list)

    def turns(self) -> list[ConversationTurn]:
        return [t.to_turn() for t in self.history]


class ChatRequest(_HistoryRequest):
    """Request body for ``POST /chat``."""

    message: str = Field(min_length=1)


class DeepThinkRequest(_HistoryRequest):
    """Request body for ``POST /chat/deep-think``."""

    prompt: str = Field(min_length=1)


class JobSearchRequest(_CamelModel):
    query: str

    @field_validator("query")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "query must not be empty."
            raise ValueError(msg)
        return stripped


class JobMetadataRequest(_CamelModel):
    text: str


class ResumeAnalyzeRequest(_CamelModel):
    resume_text: str = Field(min_length=1)


class ResumeTailorRequest(_CamelModel):
    resume_text: str = Field(min_length=1)
    job_description: str = Field(min_length=1)
    target_market: str = "Global"


class CoverLetterRequest(_CamelModel):
    resume_text: str
    job_description: str


class ReferralRequest(_CamelModel):
    resume_text: str
    job_description: str
    referrer_name: str = Field(min_length=1)
    relationship: str
    platform: Literal["Email", "LinkedIn"]


# ── Responses ───────────────────────────────────────────────────────────────


class TextResponse(BaseModel):
    text: str


class JobListingOut(_CamelModel):
    id: str
    title: str
    company: str
    location: str
    match_score: int | float
    salary: str | None = None
    type: str = ""
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    posted_at: str = ""


class JobMetadataOut(_CamelModel):
    title: str
    company: str


class ResumeAnalysisOut(_CamelModel):
    score: int | float
    summary: str
    strengths: list[str]
    weaknesses: list[str]
    improvements: list[str]


class JobInsightsOut(_CamelModel):
    salary_raw: str
    salary_in_inr: str = Field(alias="salaryInINR")
    monthly_in_hand_inr: str = Field(alias="monthlyInHandINR")
    visa_likelihood: str
    visa_reasoning: str
    cost_of_living_analysis: str


class AtsCheckItemOut(_CamelModel):
    item: str
    passed: bool


class TailoredResumeOut(_CamelModel):
    candidate_name: str
    target_job_title: str
    target_country: str
    original_score: int | float
    shortlisting_chance_before: str
    shortlisting_chance_after: str
    improvement_summary: str
    job_hunt_strategy: list[str]
    analysis: ResumeAnalysisOut
    international_insights: JobInsightsOut
    tailored_resume_markdown: str
    missing_keywords: list[str]
    ats_checklist: list[AtsCheckItemOut]
    cover_letter_markdown: str | None = None


class ReferralMessageOut(_CamelModel):
    subject: str
    message_body: str
    explanation: str


class ProviderStatusResponse(BaseModel):
    provider: str
    model: str
    readiness: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
