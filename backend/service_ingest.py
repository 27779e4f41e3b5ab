"""
Service / facade layer for event ingestion.

This module wires the validation pipeline to the counter repository. It is
free of SQL and of HTTP concerns: `main.py` turns an `IngestResult` into a
status code.

Key responsibilities:
- validate the event against the eligibility store
- record every event exactly once, valid or invalid, in its hour bucket
- run the per-event hook for accepted events
- keep bookkeeping failures visible without blocking the caller
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from errors import InvariantViolation, StoreError
from models import ActivityEvent
from repo_counters import CounterRepo
from repo_eligibility import EligibilityStore
from service_validation import ValidationOutcome, validate

logger = logging.getLogger(__name__)


def handle_accepted_event(event: ActivityEvent) -> None:
    """Default per-event hook. Accepted events need no further processing yet."""


@dataclass
class IngestResult:
    outcome: ValidationOutcome
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.outcome.accepted and self.error is None


class IngestService:
    """Validation + always-record + per-event hook.

    Example usage:
        svc = IngestService(EligibilityRepo(), CounterRepo())
        result = svc.ingest(event)
    """

    def __init__(
        self,
        eligibility: EligibilityStore,
        counters: CounterRepo,
        on_accepted: Callable[[ActivityEvent], None] = handle_accepted_event,
    ):
        self.eligibility = eligibility
        self.counters = counters
        self.on_accepted = on_accepted

    def ingest(self, event: ActivityEvent) -> IngestResult:
        """Validate and count one event.

        Steps:
        1. Run the validation pipeline.
        2. Record the outcome in the event's hour bucket, whatever it was.
        3. For accepted events, run the `on_accepted` hook.

        `result.error` is set for lookup failures, invariant violations and
        hook failures. A `StoreError` while recording is logged only.
        """

        outcome = validate(event, self.eligibility)
        if outcome.internal:
            logger.error(
                "eligibility lookup failed for customer %s: %s",
                event.customer_id, outcome.error,
            )
        elif not outcome.accepted:
            logger.info("rejected event for customer %s: %s", event.customer_id, outcome.reason)

        try:
            self.counters.record_outcome(event.customer_id, event.timestamp, outcome.accepted)
        except InvariantViolation as e:
            logger.critical("hourly stats invariant violated: %s", e)
            return IngestResult(outcome, error=e)
        except StoreError:
            logger.exception(
                "could not record %s event for customer %s",
                "valid" if outcome.accepted else "invalid", event.customer_id,
            )

        if not outcome.accepted:
            return IngestResult(outcome, error=outcome.error)

        try:
            self.on_accepted(event)
        except Exception as e:
            logger.exception("accepted-event hook failed for customer %s", event.customer_id)
            return IngestResult(outcome, error=e)

        return IngestResult(outcome)
