"""
Merchant API Routes

Endpoints for merchant name resolution.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from sms_parser import MerchantResolutionEngine
from sms_parser.merchant_resolution import normalize

from ..dependencies import get_merchant_engine

router = APIRouter(prefix="/merchants", tags=["merchants"])


class ResolveRequest(BaseModel):
    """Raw merchant text to resolve."""

    merchant: str | None


class ResolveResponse(BaseModel):
    """Resolved merchant name."""

    raw: str | None
    normalized: str
    resolved: str


class AliasRequest(BaseModel):
    """A user correction of a merchant name."""

    raw: str
    corrected: str


@router.post("/resolve", response_model=ResolveResponse)
async def resolve_merchant(
    request: ResolveRequest,
    engine: MerchantResolutionEngine = Depends(get_merchant_engine),
) -> ResolveResponse:
    """Resolve a raw merchant string to its canonical name."""
    return ResolveResponse(
        raw=request.merchant,
        normalized=normalize(request.merchant or ""),
        resolved=engine.resolve(request.merchant),
    )


@router.post("/aliases")
async def learn_alias(
    request: AliasRequest,
    engine: MerchantResolutionEngine = Depends(get_merchant_engine),
) -> dict:
    """Record a merchant correction for this process."""
    engine.learn_alias(request.raw, request.corrected)
    return {"status": "learned", "alias_count": len(engine.alias_hints)}
