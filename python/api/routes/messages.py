"""
Message API Routes

Endpoints for validating, parsing and capturing SMS messages.
"""

import time
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from sms_parser import (
    Transaction,
    TransactionAssembler,
    TransactionCapture,
    rejection_reason,
)

from ..dependencies import get_assembler, get_capture

router = APIRouter(prefix="/messages", tags=["messages"])


class MessageRequest(BaseModel):
    """An incoming SMS."""

    text: str
    timestamp: int | None = Field(None, description="Receive time, epoch milliseconds")
    sender_id: str | None = None


class TransactionOut(BaseModel):
    """Parsed transaction model."""

    timestamp: int
    amount: float
    merchant: str
    direction: str
    channel: str
    source: str
    entry_type: str
    confidence_score: float
    status: str
    is_approved: bool
    account_type: str | None
    category: str | None
    notes: str | None
    raw_text_hash: str | None
    sender_id: str | None
    sender_trust_score: float | None
    final_confidence: float | None
    schema_version: int
    parser_version: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionOut":
        return cls(**transaction.to_dict())


class ValidateResponse(BaseModel):
    """Validation gate decision."""

    accepted: bool
    reason: str | None


class ParseResponse(BaseModel):
    """Parse result; transaction is null when the message was discarded."""

    is_transaction: bool
    transaction: TransactionOut | None


class CaptureResponse(BaseModel):
    """Capture result."""

    outcome: str
    record_id: int | None
    transaction: TransactionOut | None
    error: str | None


def _timestamp(request: MessageRequest) -> int:
    return request.timestamp if request.timestamp is not None else int(time.time() * 1000)


@router.post("/validate", response_model=ValidateResponse)
async def validate_message(request: MessageRequest) -> ValidateResponse:
    """Run the validation gate only."""
    reason = rejection_reason(request.text)
    return ValidateResponse(accepted=reason is None, reason=reason)


@router.post("/parse", response_model=ParseResponse)
async def parse_message(
    request: MessageRequest,
    assembler: TransactionAssembler = Depends(get_assembler),
) -> ParseResponse:
    """Parse a message without storing it.

    Args:
        request: SMS text, receive time and sender
        assembler: Shared transaction assembler

    Returns:
        The parsed transaction, or is_transaction=false
    """
    transaction = assembler.parse_message(request.text, _timestamp(request), request.sender_id)
    if transaction is None:
        return ParseResponse(is_transaction=False, transaction=None)

    return ParseResponse(
        is_transaction=True,
        transaction=TransactionOut.from_transaction(transaction),
    )


@router.post("/capture", response_model=CaptureResponse)
async def capture_message(
    request: MessageRequest,
    capture: TransactionCapture = Depends(get_capture),
) -> CaptureResponse:
    """Parse a message and store it, skipping duplicates.

    Args:
        request: SMS text, receive time and sender
        capture: Shared capture worker

    Returns:
        Where the message ended up (saved, quarantined, duplicate, ...)
    """
    result = capture.process(request.text, _timestamp(request), request.sender_id)

    return CaptureResponse(
        outcome=result.outcome.value,
        record_id=result.record_id,
        transaction=(
            TransactionOut.from_transaction(result.transaction)
            if result.transaction else None
        ),
        error=result.error,
    )
