"""
Resume structuring: raw resume text in, structured resume data out.
Plain text generation plus the same tolerant JSON extraction the portfolio
workflow uses.
"""
import logging
from typing import Any, Dict

from app.services.generation_client import TextGenerator
from app.tools.json_extraction import extract_json_object
from app.workflows.portfolio.prompts import build_resume_extraction_prompt

logger = logging.getLogger(__name__)

LIST_SECTIONS = ("experience", "education", "skills", "projects", "certifications", "achievements", "languages")


def normalize_structured_resume(data: Dict[str, Any]) -> Dict[str, Any]:
    """Make sure every section the portfolio prompt relies on is present."""
    if not isinstance(data.get("personal_info"), dict):
        data["personal_info"] = {}
    if not isinstance(data.get("professional_summary"), str):
        data["professional_summary"] = ""
    for section in LIST_SECTIONS:
        value = data.get(section)
        if value is None:
            data[section] = []
        elif not isinstance(value, list):
            data[section] = [value]
    return data


async def extract_structured_resume(resume_text: str, generator: TextGenerator) -> Dict[str, Any]:
    """Ask the model for structured resume data.

    Raises:
        ValueError: when there is no text to work with.
        GenerationError / UnparseableResponseError: when the model call or parsing fails.
    """
    if not resume_text or not resume_text.strip():
        raise ValueError("No resume text to extract from")

    response_text = await generator.generate(build_resume_extraction_prompt(resume_text))
    data = extract_json_object(response_text)
    logger.info("Extracted structured resume with sections: %s", sorted(data.keys()))
    return normalize_structured_resume(data)
