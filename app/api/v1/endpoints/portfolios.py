"""
Portfolio API Endpoints

Generation of portfolio site code plus owner/public reads of stored portfolios.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy.orm import Session

from app.api.deps import get_app_settings, get_current_user, get_generator_factory
from app.core.config import Settings
from app.core.errors import MissingConfigurationError, NotFoundError
from app.crud import crud_portfolio
from app.db.session import get_db
from app.schemas.auth import AuthUser
from app.schemas.portfolio import (
    GeneratePortfolioRequest,
    GeneratePortfolioResult,
    PortfolioDetail,
    PortfolioSingleResponse,
    PublishRequest,
)
from app.services.generation_client import GeneratorFactory
from app.services.portfolio_renderer import render_portfolio_page
from app.services.portfolio_service import get_owned_portfolio, open_published_portfolio
from app.services.resume_normalization import normalize_portfolio_row
from app.workflows.portfolio.portfolio_code_workflow import run_portfolio_generation

logger = logging.getLogger(__name__)

router = APIRouter()
# Original path used by the web client
legacy_router = APIRouter()
public_router = APIRouter()


async def generate_portfolio_code(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    config: Settings = Depends(get_app_settings),
    generator_factory: GeneratorFactory = Depends(get_generator_factory),
):
    """
    Generate HTML/CSS/JS for a portfolio site from structured resume data.

    Always answers 200 with `success: true` once input and configuration are
    valid: generation failures return placeholder content, and persistence
    failures return the generated content with `saved: false`.
    """
    request = GeneratePortfolioRequest.model_validate(payload) if isinstance(payload, dict) else None
    if request is None or not isinstance(request.structuredData, dict):
        return JSONResponse(status_code=400, content={"error": "No structured data provided"})
    user_id = request.userId if isinstance(request.userId, str) and request.userId else None

    try:
        generator = generator_factory(config)
    except MissingConfigurationError as e:
        logger.error(f"Portfolio generation unavailable: {e.detail}")
        return JSONResponse(status_code=e.status_code, content={"error": e.detail})

    return await run_portfolio_generation(
        request.structuredData,
        generator=generator,
        db=db,
        user_id=user_id,
    )


router.add_api_route("/generate", generate_portfolio_code, methods=["POST"], response_model=GeneratePortfolioResult)
legacy_router.add_api_route(
    "/api/generate-portfolio-code",
    generate_portfolio_code,
    methods=["POST"],
    response_model=GeneratePortfolioResult,
)


@router.get("/{portfolio_id}", response_model=PortfolioSingleResponse)
def read_portfolio(
    portfolio_id: str,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    try:
        portfolio = get_owned_portfolio(db, portfolio_id, current_user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)
    return PortfolioSingleResponse(
        status=200,
        message="Portfolio returned successfully",
        data=PortfolioDetail(**normalize_portfolio_row(portfolio, current_user.id)),
    )


@router.patch("/{portfolio_id}/publish", response_model=PortfolioSingleResponse)
def publish_portfolio(
    portfolio_id: str,
    request: PublishRequest,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    try:
        portfolio = get_owned_portfolio(db, portfolio_id, current_user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)
    portfolio = crud_portfolio.set_published(db, portfolio, request.isPublished)
    return PortfolioSingleResponse(
        status=200,
        message="Portfolio published" if portfolio.is_published else "Portfolio unpublished",
        data=PortfolioDetail(**normalize_portfolio_row(portfolio, current_user.id)),
    )


@public_router.get("/p/{slug}", response_class=HTMLResponse)
def view_published_portfolio(slug: str, db: Session = Depends(get_db)):
    """Serve a published portfolio as a single HTML page and count the view."""
    try:
        portfolio = open_published_portfolio(db, slug)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)
    return HTMLResponse(
        render_portfolio_page(
            portfolio.title or "Portfolio",
            portfolio.html_content or "",
            portfolio.css_content or "",
            portfolio.js_content or "",
        )
    )
