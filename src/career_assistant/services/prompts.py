"""Prompt templates for every gateway feature.

Large free text (resumes, job descriptions, scraped pages) is cut to a fixed
prefix before it is embedded, which bounds request size and cost.
"""

from __future__ import annotations

# ── Truncation limits (characters) ──────────────────────────────────────────

ANALYSIS_RESUME_LIMIT = 20_000
TAILOR_RESUME_LIMIT = 20_000
TAILOR_JOB_LIMIT = 10_000
COVER_LETTER_RESUME_LIMIT = 5_000
COVER_LETTER_JOB_LIMIT = 2_000
REFERRAL_RESUME_LIMIT = 3_000
REFERRAL_JOB_LIMIT = 1_000
METADATA_TEXT_LIMIT = 1_000

JOB_SEARCH_RESULTS = 6


def truncate(text: str, limit: int) -> str:
    """Return the first *limit* characters of *text*."""
    return text[:limit]


# ── System instructions ─────────────────────────────────────────────────────

CHAT_SYSTEM_INSTRUCTION = """\
You are JobRight AI, an advanced career assistant.
Your goal is to help users find the right job, improve their resumes, and \
navigate their careers.
Be professional, encouraging, and concise. Use Markdown for formatting."""

JOB_SEARCH_SYSTEM_INSTRUCTION = """\
You are a job search engine. Generate realistic, high-quality job listings \
based on the user's query.
Return ONLY valid JSON: an array of job objects. Give every listing a unique \
id, a short two-sentence description and a matchScore from 0 to 100 based \
on relevance to the query."""

NO_RESPONSE_TEXT = "No response generated."


# ── Feature prompts ─────────────────────────────────────────────────────────


def job_search_prompt(query: str) -> str:
    return f'Generate {JOB_SEARCH_RESULTS} realistic job listings for: "{query}".'


def resume_analysis_prompt(resume_text: str) -> str:
    resume = truncate(resume_text, ANALYSIS_RESUME_LIMIT)
    return f"""\
Analyze this resume text and provide structured feedback.
Score it from 0 to 100, give an overall impression, and list concrete \
strengths, weaknesses and actionable improvements.

RESUME TEXT:
{resume}"""


def tailor_resume_prompt(resume_text: str, job_description: str, target_market: str) -> str:
    resume = truncate(resume_text, TAILOR_RESUME_LIMIT)
    job = truncate(job_description, TAILOR_JOB_LIMIT)
    return f"""\
You are an expert International Resume Strategist.

GOAL: Tailor the candidate's resume to the Job Description (JD) specifically \
for the job market in: {target_market}.

INPUT DATA:
RESUME: {resume}
JD: {job}
TARGET COUNTRY: {target_market}

INSTRUCTIONS:
1. Format nuances: apply {target_market}-specific formatting norms (standard \
sizing, spelling, date formats).
2. Content: use JD keywords. Remove irrelevant information.
3. Data integrity (CRITICAL):
   - Do NOT invent or add placeholders for contact details (LinkedIn, \
Portfolio, Phone, Email) that are NOT in the input RESUME.
   - If a field such as LinkedIn is missing in the source, omit it from the header.
   - Do NOT output text like "[Insert Link]" or "linkedin.com/in/[username]".
4. International insights:
   - Extract the salary from the JD, or estimate it from role, location and \
company tier.
   - Convert that salary to INR (Indian Rupees) at approximate market rates.
   - Estimate the monthly in-hand salary in INR after a rough tax deduction \
for that country.
   - Estimate visa sponsorship likelihood from company size and type \
(Big Tech/MNC = High, Startup = Low).
5. Write the tailored resume body as Markdown in tailoredResumeMarkdown.
6. Do NOT generate a cover letter."""


def cover_letter_prompt(resume_text: str, job_description: str) -> str:
    resume = truncate(resume_text, COVER_LETTER_RESUME_LIMIT)
    job = truncate(job_description, COVER_LETTER_JOB_LIMIT)
    return f"""\
Write a professional cover letter for this candidate based on the JD.
Resume: {resume}
JD: {job}

Output ONLY the markdown text of the letter."""


def referral_prompt(
    resume_text: str,
    job_description: str,
    referrer_name: str,
    relationship: str,
    platform: str,
) -> str:
    resume = truncate(resume_text, REFERRAL_RESUME_LIMIT)
    job = truncate(job_description, REFERRAL_JOB_LIMIT)
    return f"""\
You are a human ghostwriter. Write a referral request message for me to send \
to {referrer_name}.

CONTEXT:
My Resume Snippet: {resume}
Job Description Snippet: {job}
Relationship to Referrer: {relationship} (Adjust tone based on this. \
Cold = Polite/Direct, Alumni = Warm/Common ground, Friend = Casual).
Platform: {platform}

STRICT RULES FOR HUMAN-LIKE TONE:
1. NO AI buzzwords. Banned words: "Thrilled", "Passionate", "Delve", \
"Showcase", "Realm", "I hope this email finds you well", "I am writing to express".
2. Get to the point immediately.
3. For LinkedIn: max 75 words. A subject line is rarely needed, but provide one anyway.
4. For Email: max 150 words.
5. Include a specific "why me": one key achievement from the resume that fits the JD.
6. End with a low-friction call to action (e.g. "Open to a 5-min chat?" or \
"Could you pass my resume along?")."""


def job_metadata_prompt(page_text: str) -> str:
    text = truncate(page_text, METADATA_TEXT_LIMIT)
    return f"Extract the job title and company from: {text}"
