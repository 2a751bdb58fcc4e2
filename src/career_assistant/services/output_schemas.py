"""Canonical output structure for every JSON-returning feature.

Each schema here is the single source for both the native provider's
enforced schema and the structure spelled out to generic providers.
"""

from __future__ import annotations

from career_assistant.domain.value_objects import OutputSchema as S

_STRINGS = S.array(S.string())

JOB_LISTINGS = S.array(
    S.object(
        {
            "id": S.string("unique_string"),
            "title": S.string("Job Title"),
            "company": S.string("Company Name"),
            "location": S.string("City, Country or Remote"),
            "salary": S.string("$XXXk - $XXXk"),
            "type": S.string(enum=("Full-time", "Contract", "Part-time")),
            "description": S.string("Short description (2 sentences)"),
            "matchScore": S.integer("0-100 based on relevance"),
            "tags": _STRINGS,
            "postedAt": S.string("2d ago"),
        },
        required=("id", "title", "company", "location", "matchScore"),
    )
)

RESUME_ANALYSIS = S.object(
    {
        "score": S.integer("0-100"),
        "summary": S.string("Overall impression"),
        "strengths": _STRINGS,
        "weaknesses": _STRINGS,
        "improvements": _STRINGS,
    }
)

_CHANCE = ("Low", "Medium", "High")

TAILORED_RESUME = S.object(
    {
        "candidateName": S.string("First Last"),
        "targetJobTitle": S.string("Job Title"),
        "targetCountry": S.string("Target country"),
        "originalScore": S.integer("0-100"),
        "shortlistingChanceBefore": S.string(enum=_CHANCE),
        "shortlistingChanceAfter": S.string(enum=_CHANCE),
        "improvementSummary": S.string("Briefly explain changes."),
        "jobHuntStrategy": _STRINGS,
        "analysis": RESUME_ANALYSIS,
        "internationalInsights": S.object(
            {
                "salaryRaw": S.string("e.g. $120,000 / year"),
                "salaryInINR": S.string("e.g. ₹1,00,00,000 / year"),
                "monthlyInHandINR": S.string("e.g. ₹5,50,000 (approx)"),
                "visaLikelihood": S.string(enum=("High", "Medium", "Low", "Remote Only")),
                "visaReasoning": S.string("One sentence explanation."),
                "costOfLivingAnalysis": S.string("Brief comment on salary vs city cost."),
            }
        ),
        "tailoredResumeMarkdown": S.string("# Name\\n\\n## Summary\\n..."),
        "missingKeywords": _STRINGS,
        "atsChecklist": S.array(
            S.object({"item": S.string("Check description"), "passed": S.boolean()})
        ),
    }
)

REFERRAL_MESSAGE = S.object(
    {
        "subject": S.string("Subject line (keep it catchy/personal)"),
        "messageBody": S.string("The message text"),
        "explanation": S.string("Why you wrote it this way"),
    }
)

JOB_METADATA = S.object(
    {
        "title": S.string("Job title"),
        "company": S.string("Company name"),
    }
)
