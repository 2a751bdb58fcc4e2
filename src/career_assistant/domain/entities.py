"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ProviderFamily(str, Enum):
    """How a provider is reached."""

    NATIVE = "native"
    GENERIC = "generic"


class ProviderKind(str, Enum):
    """Supported LLM providers."""

    GEMINI = "gemini"
    GROQ = "groq"
    OLLAMA = "ollama"
    OPENAI_COMPATIBLE = "openai-compatible"

    @property
    def family(self) -> ProviderFamily:
        if self is ProviderKind.GEMINI:
            return ProviderFamily.NATIVE
        return ProviderFamily.GENERIC

    @property
    def default_endpoint(self) -> str | None:
        return _DEFAULT_ENDPOINTS.get(self)

    @property
    def default_model(self) -> str:
        return _DEFAULT_MODELS[self]

    @property
    def default_reasoning_model(self) -> str | None:
        return _DEFAULT_REASONING_MODELS.get(self)

    @property
    def requires_credential(self) -> bool:
        """Local providers run without an API key."""
        return self is not ProviderKind.OLLAMA


OPENAI_DEFAULT_ENDPOINT = "https://api.openai.com/v1"

_DEFAULT_ENDPOINTS: dict[ProviderKind, str] = {
    ProviderKind.GROQ: "https://api.groq.com/openai/v1",
    ProviderKind.OLLAMA: "http://localhost:11434/v1",
    ProviderKind.OPENAI_COMPATIBLE: OPENAI_DEFAULT_ENDPOINT,
}

_DEFAULT_MODELS: dict[ProviderKind, str] = {
    ProviderKind.GEMINI: "gemini-3-flash-preview",
    ProviderKind.GROQ: "llama3-70b-8192",
    ProviderKind.OLLAMA: "llama3",
    ProviderKind.OPENAI_COMPATIBLE: "gpt-4o",
}

_DEFAULT_REASONING_MODELS: dict[ProviderKind, str] = {
    ProviderKind.GEMINI: "gemini-3-pro-preview",
}


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Which backend to talk to and how.

    Built once from user settings; a changed configuration means a new
    gateway.  ``endpoint`` is stored exactly as supplied; defaults are
    resolved per call and never written back.
    """

    kind: ProviderKind
    model: str
    credential: str | None = None
    endpoint: str | None = None
    reasoning_model: str | None = None

    @property
    def has_credential(self) -> bool:
        return bool(self.credential)

    def resolve_endpoint(self) -> str:
        """Base URL for generic providers, without a trailing slash."""
        base = self.endpoint or self.kind.default_endpoint or OPENAI_DEFAULT_ENDPOINT
        return base.rstrip("/")


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    """One chronological entry of a conversation."""

    role: ChatRole
    text: str

    @classmethod
    def user(cls, text: str) -> ConversationTurn:
        return cls(role=ChatRole.USER, text=text)

    @classmethod
    def assistant(cls, text: str) -> ConversationTurn:
        return cls(role=ChatRole.ASSISTANT, text=text)

    @classmethod
    def system(cls, text: str) -> ConversationTurn:
        return cls(role=ChatRole.SYSTEM, text=text)


# ── Structured results ──────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class JobListing:
    """A generated job posting.  ``match_score`` is passed through untouched."""

    id: str
    title: str
    company: str
    location: str
    match_score: int | float
    salary: str | None = None
    type: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)
    posted_at: str = ""


@dataclass(frozen=True, slots=True)
class ResumeAnalysis:
    score: int | float
    summary: str
    strengths: list[str]
    weaknesses: list[str]
    improvements: list[str]


@dataclass(frozen=True, slots=True)
class JobInsights:
    """Market-specific salary and visa estimates for a tailored application."""

    salary_raw: str
    salary_in_inr: str
    monthly_in_hand_inr: str
    visa_likelihood: str
    visa_reasoning: str
    cost_of_living_analysis: str


@dataclass(frozen=True, slots=True)
class AtsCheckItem:
    item: str
    passed: bool


@dataclass(frozen=True, slots=True)
class TailoredResume:
    """Everything returned by a resume-tailoring run."""

    candidate_name: str
    target_job_title: str
    target_country: str
    original_score: int | float
    shortlisting_chance_before: str
    shortlisting_chance_after: str
    improvement_summary: str
    job_hunt_strategy: list[str]
    analysis: ResumeAnalysis
    international_insights: JobInsights
    tailored_resume_markdown: str
    missing_keywords: list[str]
    ats_checklist: list[AtsCheckItem]
    cover_letter_markdown: str | None = None


@dataclass(frozen=True, slots=True)
class ReferralMessage:
    subject: str
    message_body: str
    explanation: str

    @classmethod
    def empty(cls) -> ReferralMessage:
        return cls(subject="", message_body="", explanation="")


@dataclass(frozen=True, slots=True)
class JobMetadata:
    title: str
    company: str

    @classmethod
    def unknown(cls) -> JobMetadata:
        return cls(title="Unknown", company="Unknown")
