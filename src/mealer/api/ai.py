"""AI feature endpoints: usage, substitutions and receipt scans.

Handlers are plain functions: the services make blocking Supabase and OpenAI
calls, so FastAPI runs them in its worker threadpool.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from mealer.api.models import ReceiptScanRequest, SubstitutionsRequest
from mealer.services.usage import DailyLimitExceededError, UsageRecordingError

if TYPE_CHECKING:
    from mealer.containers import AppContainer
    from mealer.domain.analysis import IngredientAnalysis, MatchedItem
    from mealer.domain.catalog import ReceiptScanItem
    from mealer.domain.usage import UsageCounter, UsageSnapshot

router = APIRouter(prefix="/ai", tags=["ai"])

_logger = logging.getLogger(__name__)


def require_user(
    request: Request, authorization: str | None = Header(default=None)
) -> UUID:
    """Resolve the bearer token to a user id."""
    container: AppContainer = request.app.state.container
    user_id = container.auth_service.authenticate(authorization)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return user_id


@router.get("/usage")
def usage(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return today's usage for both metered features."""
    container: AppContainer = request.app.state.container
    snapshot = container.usage_ledger.get_usage_snapshot(user_id)
    return _serialize_snapshot(snapshot)


@router.post("/substitutions")
def substitutions(
    payload: SubstitutionsRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Analyze recipe ingredients against the user's pantry."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.get_profile(user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found"
        )
    if not profile.onboarding_completed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Complete onboarding before using AI features",
        )

    ingredients = [item.to_domain() for item in payload.recipe_ingredients]
    try:
        result = container.substitution_service.analyze(profile, ingredients)
    except DailyLimitExceededError as exc:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Daily substitution limit exceeded. Try again tomorrow",
        ) from exc
    except UsageRecordingError as exc:
        _logger.exception("Substitution usage not recorded", extra={"user_id": user_id})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        ) from exc

    return {
        "analysis": [_serialize_analysis(item) for item in result.ingredients],
        "warnings": [
            {"type": warning.type, "message": warning.message}
            for warning in result.warnings
        ],
        "usage": {
            "substitutions_used_today": result.usage.used,
            "substitutions_remaining": result.usage.remaining,
        },
    }


@router.post("/receipt-scans")
def receipt_scans(
    payload: ReceiptScanRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Match extracted receipt lines to catalog products and units."""
    container: AppContainer = request.app.state.container
    try:
        result = container.receipt_scan_service.process(user_id, payload.items)
    except DailyLimitExceededError as exc:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Daily scan limit exceeded. Try again tomorrow",
        ) from exc
    except UsageRecordingError as exc:
        _logger.exception("Receipt scan usage not recorded", extra={"user_id": user_id})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        ) from exc

    return {
        "items": [_serialize_receipt_item(item) for item in result.items],
        "usage": {
            "scans_used_today": result.usage.used,
            "scans_remaining": result.usage.remaining,
        },
    }


def _serialize_snapshot(snapshot: UsageSnapshot) -> dict[str, object]:
    return {
        "date": snapshot.day.isoformat(),
        "receipt_scans": _serialize_counter(snapshot.receipt_scans),
        "substitutions": _serialize_counter(snapshot.substitutions),
    }


def _serialize_counter(counter: UsageCounter) -> dict[str, int]:
    return {
        "used": counter.used,
        "limit": counter.limit,
        "remaining": counter.remaining,
    }


def _serialize_item(item: MatchedItem | None) -> dict[str, object] | None:
    if item is None:
        return None
    return {
        "id": item.id,
        "name": item.name,
        "quantity": item.quantity,
        "unit": item.unit,
    }


def _serialize_analysis(analysis: IngredientAnalysis) -> dict[str, object]:
    substitution = analysis.substitution
    return {
        "ingredient": analysis.ingredient_name,
        "status": analysis.status,
        "matched_inventory_item": _serialize_item(analysis.matched_item),
        "substitution": (
            {
                "available": substitution.available,
                "suggestion": substitution.suggestion,
                "substitute_item": _serialize_item(substitution.substitute_item),
            }
            if substitution
            else None
        ),
        "allergy_warning": analysis.allergy_warning,
    }


def _serialize_receipt_item(item: ReceiptScanItem) -> dict[str, object]:
    product = item.matched_product
    unit = item.suggested_unit
    return {
        "name": item.name,
        "matched_product": (
            {"id": product.id, "name_pl": product.name_pl} if product else None
        ),
        "quantity": item.quantity,
        "suggested_unit": (
            {"id": unit.id, "name_pl": unit.name_pl, "abbreviation": unit.abbreviation}
            if unit
            else None
        ),
        "confidence": item.confidence,
    }
