"""
AI Relay Service.

Forwards user text to Google Gemini with a fixed system instruction and hands
back the model's answer. Nothing here interprets the answer beyond parsing the
resume-extraction reply as JSON.
"""

import json
import logging

import google.generativeai as genai

from app.core.config import settings

logger = logging.getLogger(__name__)


class AIServiceError(Exception):
    """Raised when the completion API fails or returns an unusable answer."""


SUMMARY_INSTRUCTION = (
    "You are an expert in resume writing. Your task is to enhance the "
    "professional summary of a resume. The summary should be 1-2 sentences "
    "also highlighting key skills, experience, and career objectives. Make it "
    "compelling and ATS-friendly and only return text no options or anything else."
)

JOB_DESCRIPTION_INSTRUCTION = (
    "You are an expert in resume writing. Your task is to enhance the job "
    "description of a resume. The job description should be only 1-2 sentences "
    "also highlighting key responsibilities and achievements. Use action verbs "
    "and quantifiable results where possible. Make it ATS-friendly and only "
    "return text no options or anything else."
)

EXTRACTION_INSTRUCTION = "You are an expert AI agent to extract data from resume."

EXTRACTION_PROMPT = """extract data from this resume: {resume_text}

Provide data in the following JSON format with no additional text before or after, using the following schema keys:
{{
  "professional_summary": "",
  "skills": ["skill1", "skill2"],
  "personal_info": {{
    "image": "",
    "full_name": "",
    "profession": "",
    "email": "",
    "phone": "",
    "location": "",
    "linkedin": "",
    "website": ""
  }},
  "experience": [
    {{
      "company": "",
      "position": "",
      "start_date": "YYYY-MM",
      "end_date": "YYYY-MM (or null if is_current is true)",
      "description": "",
      "is_current": false
    }}
  ],
  "projects": [
    {{
      "name": "",
      "type": "",
      "description": ""
    }}
  ],
  "education": [
    {{
      "institution": "",
      "degree": "",
      "field": "",
      "graduation_date": "YYYY-MM",
      "gpa": ""
    }}
  ]
}}
"""


def configure_gemini() -> None:
    """
    Configure the Gemini API with the API key.

    Raises:
        AIServiceError: If no API key is set
    """
    if not settings.GEMINI_API_KEY:
        logger.error("❌ GEMINI_API_KEY not set")
        raise AIServiceError("AI service is not configured")
    genai.configure(api_key=settings.GEMINI_API_KEY)


def _complete(system_instruction: str, user_content: str, json_output: bool = False) -> str:
    """Send one system instruction and one user message, return the reply text."""
    configure_gemini()

    generation_config = None
    if json_output:
        generation_config = genai.GenerationConfig(response_mime_type="application/json")

    try:
        model = genai.GenerativeModel(
            settings.GEMINI_MODEL,
            system_instruction=system_instruction,
        )
        logger.info("📡 Sending request to Gemini (%s)...", settings.GEMINI_MODEL)
        response = model.generate_content(user_content, generation_config=generation_config)
        text = response.text
    except Exception as e:
        logger.error("❌ Gemini API error: %s", e)
        raise AIServiceError(f"AI request failed: {e}") from e

    if not text:
        raise AIServiceError("AI returned an empty response")

    logger.info("✅ Gemini response received (%d chars)", len(text))
    return text


def enhance_professional_summary(user_content: str) -> str:
    """Rewrite a professional summary. Returns the model's text verbatim."""
    return _complete(SUMMARY_INSTRUCTION, user_content)


def enhance_job_description(user_content: str) -> str:
    """Rewrite one job description. Returns the model's text verbatim."""
    return _complete(JOB_DESCRIPTION_INSTRUCTION, user_content)


def extract_resume_data(resume_text: str) -> dict:
    """
    Extract structured resume data from plain resume text.

    The returned object is whatever JSON the model produced; its shape is not
    checked.

    Raises:
        AIServiceError: On API failure, invalid JSON, or a non-object JSON value
    """
    prompt = EXTRACTION_PROMPT.format(resume_text=resume_text)
    raw = _complete(EXTRACTION_INSTRUCTION, prompt, json_output=True)

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error("❌ AI returned invalid JSON: %s", raw[:200])
        raise AIServiceError(f"AI returned invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise AIServiceError("AI returned JSON that is not an object")

    return data
