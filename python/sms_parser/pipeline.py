"""
SMS Parsing Pipeline

Runs the extraction stages over one ParsingContext, fills defaults for
anything left unresolved and aggregates the per-field confidences.
"""

import logging
from typing import Callable

from .models import (
    DEFAULT_WEIGHTS,
    ConfidenceWeights,
    ParsedTransaction,
    ParsingContext,
    PaymentChannel,
    TransactionDirection,
)
from .stages import STAGES

logger = logging.getLogger(__name__)

UNKNOWN_MERCHANT = "Unknown"

Stage = tuple[str, Callable[[ParsingContext], float]]


class SMSPipeline:
    """Staged SMS parser."""

    def __init__(
        self,
        stages: tuple[Stage, ...] = STAGES,
        weights: ConfidenceWeights = DEFAULT_WEIGHTS
    ):
        self.stages = stages
        self.weights = weights

    def run(self, text: str, sender_id: str | None = None) -> ParsingContext:
        """Run every stage over a fresh context and return it.

        A stage that raises is logged and scored 0.0; later stages still run.
        """
        context = ParsingContext(raw_text=text, sender_id=sender_id)

        for name, stage in self.stages:
            try:
                stage(context)
            except Exception:
                logger.warning(f"Stage '{name}' failed, continuing without it", exc_info=True)
                context.record(name, 0.0)

        return context

    def parse(self, text: str, sender_id: str | None = None) -> ParsedTransaction:
        """Parse a message into a ParsedTransaction.

        Args:
            text: Raw SMS body
            sender_id: Optional sender ID from the SMS header

        Returns:
            ParsedTransaction with defaults applied and aggregate confidence
        """
        context = self.run(text, sender_id)

        if context.merchant is None:
            context.merchant = UNKNOWN_MERCHANT
        if context.direction is None:
            context.direction = TransactionDirection.DEBIT
        if context.channel is None:
            context.channel = PaymentChannel.UPI

        return ParsedTransaction(
            amount=context.amount,
            merchant=context.merchant,
            account_type=context.account_type,
            direction=context.direction,
            channel=context.channel,
            confidence=context.overall_confidence(self.weights),
            stage_confidences=dict(context.stage_confidences),
        )
