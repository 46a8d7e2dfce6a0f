"""Coerce stored rows into the shapes the API returns.

Rows written by older clients may miss optional columns; every field gets a
documented default here so callers never see nulls where a value is expected.
"""
from typing import Any, Dict, Optional

from app.schemas.portfolio import PortfolioMetadata


def _portfolio_view_url(portfolio_id: str, slug: str, is_published: bool) -> str:
    if is_published and slug:
        return f"/p/{slug}"
    return f"/portfolios/{portfolio_id}"


def credits_percent(credits_remaining: Optional[int], total: int = 100) -> float:
    """Share of the credit allowance left, clamped to 0..100."""
    credits = credits_remaining or 0
    return min(100.0, max(0.0, (credits / total) * 100))


def normalize_resume_row(r: Any, user_id: str) -> Dict[str, Any]:
    created_at = getattr(r, "created_at", None)
    file_url = getattr(r, "file_url", None) or ""
    return {
        "id": getattr(r, "id", ""),
        "userId": getattr(r, "user_id", None) or user_id,
        "filename": getattr(r, "filename", None) or "",
        "fileSize": getattr(r, "file_size", None) or 0,
        "fileUrl": file_url,
        "extractedText": getattr(r, "extracted_text", None) or "",
        "pagesCount": getattr(r, "pages_count", None) or 0,
        "processingStatus": getattr(r, "processing_status", None) or "completed",
        "structuredData": getattr(r, "structured_data", None),
        "downloadUrl": file_url or None,
        "createdAt": created_at,
        "updatedAt": getattr(r, "updated_at", None) or created_at,
    }


def normalize_portfolio_row(p: Any, user_id: str) -> Dict[str, Any]:
    portfolio_id = getattr(p, "id", "")
    slug = getattr(p, "slug", None) or ""
    is_published = bool(getattr(p, "is_published", False))
    created_at = getattr(p, "created_at", None)
    metadata = getattr(p, "metadata_json", None)
    if metadata is None:
        metadata = PortfolioMetadata().model_dump()
    return {
        "id": portfolio_id,
        "userId": getattr(p, "user_id", None) or user_id,
        "portfolioDataId": getattr(p, "portfolio_data_id", None) or "",
        "title": getattr(p, "title", None) or "Untitled Portfolio",
        "slug": slug,
        "templateId": getattr(p, "template_id", None) or "",
        "htmlContent": getattr(p, "html_content", None) or "",
        "cssContent": getattr(p, "css_content", None) or "",
        "jsContent": getattr(p, "js_content", None) or "",
        "metadata": metadata,
        "customizations": getattr(p, "customizations", None) or {},
        "isPublished": is_published,
        "viewCount": getattr(p, "view_count", None) or 0,
        "lastViewedAt": getattr(p, "last_viewed_at", None),
        "createdAt": created_at,
        "updatedAt": getattr(p, "updated_at", None) or created_at,
        "viewUrl": _portfolio_view_url(portfolio_id, slug, is_published),
        "editUrl": f"/portfolios/{portfolio_id}/edit",
    }


def normalize_profile_row(profile: Any) -> Dict[str, Any]:
    credits = getattr(profile, "credits_remaining", None)
    return {
        "id": getattr(profile, "id", ""),
        "email": getattr(profile, "email", "") or "",
        "fullName": getattr(profile, "full_name", None),
        "avatarUrl": getattr(profile, "avatar_url", None),
        "subscriptionTier": getattr(profile, "subscription_tier", None) or "free",
        "creditsRemaining": credits or 0,
        "creditsPercent": credits_percent(credits),
        "createdAt": getattr(profile, "created_at", None),
    }
