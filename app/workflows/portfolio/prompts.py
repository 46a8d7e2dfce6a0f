import json
from typing import Any, Dict

PORTFOLIO_PROMPT_TEMPLATE = """You are a meticulous and detail-oriented web developer. Your primary and most critical task is to build a portfolio website that includes EVERY piece of data from the provided JSON object. Do not omit any details.

**Resume Data:**
---
{resume_json}
---

**--- MANDATORY INSTRUCTIONS ---**

**1. DATA COMPLETENESS (ABSOLUTE PRIORITY):**
    * **Display Everything:** You MUST render every single field from the provided JSON that has a value. For example, if a `linkedin` URL is present, you MUST create a link for it. If there are 5 skills in the skills array, all 5 MUST be displayed.
    * **Iterate All Arrays:** For arrays like "experience", "education", and "projects", you MUST iterate through every single object in the array and render its content. There are no exceptions.
    * **Invent Missing Details:** If a key exists but its value is empty (e.g., `professional_summary: ""`), you MUST creatively write professional-sounding placeholder content. For example, if the summary is missing, write a compelling one based on the user's most recent job title. Never leave a section blank.

**2. STYLISH & MODERN DESIGN (SECONDARY PRIORITY):**
    * **Theme:** Create a clean, elegant, and professional design with excellent readability.
    * **CSS:** Use a modern color scheme, good typography (e.g., from Google Fonts), and layout techniques like Flexbox or Grid. Use CSS custom properties for colors.
    * **Visuals:** Use subtle `box-shadow` for depth on elements, `border-radius` for soft corners, and smooth `transition` effects for hover states on all links and buttons.
    * **Responsiveness:** The layout must be fully responsive.

**3. TECHNICAL SPECIFICATIONS:**
    * **HTML:** Generate a complete HTML structure in the 'html' field. Use semantic tags. Include an empty `<style></style>` in the head and an empty `<script></script>` before the closing body tag as placeholders.
    * **CSS:** Generate all CSS in the 'css' field.
    * **JavaScript:** Generate JavaScript for smooth scrolling and simple on-scroll animations in the 'js' field.

**FINAL COMMAND:** Return ONLY a valid JSON object with the keys "html", "css", and "js". Your primary goal is data integrity. Verify that every piece of data from the input JSON is present in your generated HTML.
"""

RESUME_EXTRACTION_PROMPT_TEMPLATE = """Please extract information from this resume and return it as a clean JSON object.

Return ONLY valid JSON with these fields:
- personal_info: object with name, title, email, phone, location, website, linkedin, github
- professional_summary: string
- experience: array of objects with company, position, location, start_date, end_date, description, achievements
- education: array of objects with institution, degree, field, start_date, end_date, gpa
- skills: array of strings
- projects: array of objects with name, description, technologies, url
- certifications: array of objects with name, issuer, date
- achievements: array of strings
- languages: array of objects with language, proficiency

Make sure the JSON is valid and parseable. Use empty arrays [] for missing sections.

Resume text:
{resume_text}

JSON:
"""


def build_portfolio_prompt(structured_data: Dict[str, Any]) -> str:
    """Render the portfolio generation prompt.

    The data is embedded with `json.dumps(..., indent=2)` without key sorting,
    so the same mapping always yields the same prompt and keys keep their
    input order.
    """
    resume_json = json.dumps(structured_data, indent=2, ensure_ascii=False, default=str)
    return PORTFOLIO_PROMPT_TEMPLATE.format(resume_json=resume_json)


def build_resume_extraction_prompt(resume_text: str) -> str:
    return RESUME_EXTRACTION_PROMPT_TEMPLATE.format(resume_text=resume_text)
