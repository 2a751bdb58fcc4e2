"""Decode raw model text into typed results.

The text must parse as one JSON value as-is: no fence stripping, no repair.
Any parse failure or shape mismatch raises :class:`ResponseDecodeError`;
whether that is fatal is each feature's decision.
"""

from __future__ import annotations

import json
from typing import Any

from career_assistant.domain.entities import (
    AtsCheckItem,
    JobInsights,
    JobListing,
    JobMetadata,
    ReferralMessage,
    ResumeAnalysis,
    TailoredResume,
)
from career_assistant.domain.exceptions import ResponseDecodeError


def decode_json(raw: str) -> Any:
    """Parse *raw* as a single JSON value."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ResponseDecodeError(f"Model returned invalid JSON: {exc}", raw=raw) from exc


# ── Field helpers ───────────────────────────────────────────────────────────


def _obj(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ResponseDecodeError(f"Expected a JSON object for {where}.")
    return value


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ResponseDecodeError(f"Field '{key}' missing or not a string.")
    return value


def _opt_str(data: dict[str, Any], key: str, default: str | None = "") -> str | None:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ResponseDecodeError(f"Field '{key}' is not a string.")
    return value


def _number(data: dict[str, Any], key: str) -> int | float:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ResponseDecodeError(f"Field '{key}' missing or not a number.")
    return value


def _str_list(data: dict[str, Any], key: str, *, required: bool = True) -> list[str]:
    value = data.get(key)
    if value is None and not required:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ResponseDecodeError(f"Field '{key}' missing or not a list of strings.")
    return list(value)


# ── Feature decoders ────────────────────────────────────────────────────────


def to_job_listings(data: Any) -> list[JobListing]:
    if not isinstance(data, list):
        raise ResponseDecodeError("Expected a JSON array of job listings.")

    listings = []
    for entry in data:
        item = _obj(entry, "job listing")
        raw_id = item.get("id")
        if isinstance(raw_id, int) and not isinstance(raw_id, bool):
            raw_id = str(raw_id)
        if not isinstance(raw_id, str):
            raise ResponseDecodeError("Field 'id' missing or not a string.")
        listings.append(
            JobListing(
                id=raw_id,
                title=_str(item, "title"),
                company=_str(item, "company"),
                location=_str(item, "location"),
                match_score=_number(item, "matchScore"),
                salary=_opt_str(item, "salary", default=None),
                type=_opt_str(item, "type") or "",
                description=_opt_str(item, "description") or "",
                tags=_str_list(item, "tags", required=False),
                posted_at=_opt_str(item, "postedAt") or "",
            )
        )
    return listings


def to_resume_analysis(data: Any) -> ResumeAnalysis:
    item = _obj(data, "resume analysis")
    return ResumeAnalysis(
        score=_number(item, "score"),
        summary=_str(item, "summary"),
        strengths=_str_list(item, "strengths"),
        weaknesses=_str_list(item, "weaknesses"),
        improvements=_str_list(item, "improvements"),
    )


def _to_insights(data: Any) -> JobInsights:
    item = _obj(data, "internationalInsights")
    return JobInsights(
        salary_raw=_str(item, "salaryRaw"),
        salary_in_inr=_str(item, "salaryInINR"),
        monthly_in_hand_inr=_str(item, "monthlyInHandINR"),
        visa_likelihood=_str(item, "visaLikelihood"),
        visa_reasoning=_str(item, "visaReasoning"),
        cost_of_living_analysis=_str(item, "costOfLivingAnalysis"),
    )


def _to_checklist(data: Any) -> list[AtsCheckItem]:
    if not isinstance(data, list):
        raise ResponseDecodeError("Field 'atsChecklist' missing or not a list.")
    checks = []
    for entry in data:
        item = _obj(entry, "atsChecklist entry")
        passed = item.get("passed")
        if not isinstance(passed, bool):
            raise ResponseDecodeError("Field 'passed' missing or not a boolean.")
        checks.append(AtsCheckItem(item=_str(item, "item"), passed=passed))
    return checks


def to_tailored_resume(data: Any) -> TailoredResume:
    item = _obj(data, "tailored resume")
    return TailoredResume(
        candidate_name=_str(item, "candidateName"),
        target_job_title=_str(item, "targetJobTitle"),
        target_country=_str(item, "targetCountry"),
        original_score=_number(item, "originalScore"),
        shortlisting_chance_before=_str(item, "shortlistingChanceBefore"),
        shortlisting_chance_after=_str(item, "shortlistingChanceAfter"),
        improvement_summary=_str(item, "improvementSummary"),
        job_hunt_strategy=_str_list(item, "jobHuntStrategy"),
        analysis=to_resume_analysis(item.get("analysis")),
        international_insights=_to_insights(item.get("internationalInsights")),
        tailored_resume_markdown=_str(item, "tailoredResumeMarkdown"),
        missing_keywords=_str_list(item, "missingKeywords"),
        ats_checklist=_to_checklist(item.get("atsChecklist")),
        cover_letter_markdown=_opt_str(item, "coverLetterMarkdown", default=None),
    )


def to_referral_message(data: Any) -> ReferralMessage:
    item = _obj(data, "referral message")
    return ReferralMessage(
        subject=_str(item, "subject"),
        message_body=_str(item, "messageBody"),
        explanation=_str(item, "explanation"),
    )


def to_job_metadata(data: Any) -> JobMetadata:
    item = _obj(data, "job metadata")
    return JobMetadata(title=_str(item, "title"), company=_str(item, "company"))
