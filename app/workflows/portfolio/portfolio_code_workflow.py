"""
Portfolio code workflow

Structured resume data -> prompt -> Gemini -> tolerant JSON extraction, then
the two-phase save when the request names a user.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from sqlalchemy.orm import Session

from app.core.errors import PersistenceError
from app.schemas.portfolio import GeneratePortfolioResult, PortfolioCode
from app.services.generation_client import TextGenerator
from app.services.portfolio_service import current_time_ms, save_generated_portfolio
from app.tools.json_extraction import parse_portfolio_code
from app.workflows.portfolio.prompts import build_portfolio_prompt

logger = logging.getLogger(__name__)

FALLBACK_HTML = """
<!DOCTYPE html>
<html>
  <head>
    <title>My Portfolio</title>
    <style></style>
  </head>
  <body>
    <h1>Hello, World!</h1>
    <p>Could not generate portfolio. This is fallback content.</p>
    <script></script>
  </body>
</html>"""

FALLBACK_CSS = "body { font-family: sans-serif; text-align: center; color: #333; }"

FALLBACK_JS = 'console.log("Portfolio generation failed.");'


def fallback_portfolio() -> PortfolioCode:
    return PortfolioCode(html=FALLBACK_HTML, css=FALLBACK_CSS, js=FALLBACK_JS)


async def generate_portfolio_code(structured_data: Dict[str, Any], generator: TextGenerator) -> PortfolioCode:
    """Prompt the model and recover the html/css/js triple from its answer."""
    prompt = build_portfolio_prompt(structured_data)
    response_text = await generator.generate(prompt)
    return parse_portfolio_code(response_text)


async def run_portfolio_generation(
    structured_data: Dict[str, Any],
    *,
    generator: TextGenerator,
    db: Optional[Session] = None,
    user_id: Optional[str] = None,
    clock: Callable[[], int] = current_time_ms,
) -> GeneratePortfolioResult:
    """Run the whole workflow and always produce a successful result.

    Any failure while prompting, calling the model or parsing its answer
    yields the fallback content and skips persistence. A persistence failure
    keeps the generated content and reports it through `persistenceError`.
    """
    print("🤖 Generating portfolio code...")
    try:
        code = await generate_portfolio_code(structured_data, generator)
    except Exception as e:
        logger.exception("Error generating portfolio code: %s", e)
        print("💡 Falling back to placeholder portfolio code.")
        return GeneratePortfolioResult(portfolio=fallback_portfolio())

    print("✅ Successfully generated portfolio code.")

    if not user_id:
        return GeneratePortfolioResult(portfolio=code)
    if db is None:
        return GeneratePortfolioResult(portfolio=code, persistenceError="No database session available")

    try:
        # commits and slug lookups run in a worker thread
        saved = await asyncio.to_thread(
            save_generated_portfolio,
            db,
            user_id=user_id,
            structured_data=structured_data,
            code=code,
            clock=clock,
        )
    except PersistenceError as e:
        logger.error("Generated portfolio was not saved: %s", e.detail)
        return GeneratePortfolioResult(portfolio=code, persistenceError=e.detail)

    print(f"✅ Portfolio saved: {saved.slug}")
    return GeneratePortfolioResult(
        portfolio=code,
        saved=True,
        portfolioId=saved.id,
        slug=saved.slug,
    )
