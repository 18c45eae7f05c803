"""Prompt and response schema for the Gemini analysis call."""

from google.genai import types

SYSTEM_PROMPT = (
    "You are a career coach and ATS specialist. Always respond with valid JSON only. "
    "No markdown formatting, no code blocks, just pure JSON."
)


def _string_list() -> types.Schema:
    return types.Schema(type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING))


ANALYSIS_RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "matchScore": types.Schema(type=types.Type.INTEGER),
        "verdict": types.Schema(type=types.Type.STRING),
        "matchedSkills": _string_list(),
        "missingSkills": _string_list(),
        "roadmap": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "skill": types.Schema(type=types.Type.STRING),
                    "why": types.Schema(type=types.Type.STRING),
                    "resource": types.Schema(type=types.Type.STRING),
                    "priority": types.Schema(
                        type=types.Type.STRING, enum=["High", "Medium", "Low"]
                    ),
                },
                required=["skill", "why", "resource", "priority"],
            ),
        ),
        "tips": _string_list(),
    },
    required=["matchScore", "verdict", "matchedSkills", "missingSkills", "roadmap", "tips"],
)


def build_analysis_prompt(resume_text: str, job_description: str) -> str:
    """Resume vs. JD match analysis with a learning roadmap for the gaps."""
    return f"""You are an expert career coach and ATS (Applicant Tracking System) specialist. Analyse the provided resume against the job description.

Return ONLY a valid JSON object with this exact structure (no markdown, no explanation, just JSON):

{{
  "matchScore": <integer 0-100>,
  "verdict": "<one sentence verdict about the match>",
  "matchedSkills": ["skill1", "skill2", ...],
  "missingSkills": ["skill1", "skill2", ...],
  "roadmap": [
    {{
      "skill": "<skill name>",
      "why": "<why this skill matters for this specific job>",
      "resource": "<specific free resource to learn this: course name, platform, or official docs>",
      "priority": "<High | Medium | Low>"
    }}
  ],
  "tips": [
    "<specific actionable resume improvement tip 1>",
    "<specific actionable resume improvement tip 2>",
    "<specific actionable resume improvement tip 3>",
    "<specific actionable resume improvement tip 4>"
  ]
}}

Rules:
- matchScore should reflect how well the resume matches the JD (0 = no match, 100 = perfect match)
- matchedSkills: skills/tools/technologies mentioned in BOTH resume and JD
- missingSkills: skills/tools/technologies required by JD but NOT in resume
- roadmap: only for missing skills, ordered by priority (High first), max 8 items
- tips: specific actionable advice to improve the resume for THIS job, not generic advice
- Keep skill names concise (e.g. "React.js" not "Experience with React.js framework")
- resource should be specific (e.g. "freeCodeCamp React Course" not just "YouTube")

RESUME:
{resume_text}

JOB DESCRIPTION:
{job_description}"""
