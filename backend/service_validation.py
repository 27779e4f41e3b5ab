"""
Validation pipeline for inbound activity events.

The checks run in the order listed in `CHECKS` and stop at the first one
that returns a reason; that order decides which reason wins when several
conditions hold at once. Each check is a plain function of the event and
the eligibility store, so it can be tested on its own.

A `StoreError` raised by a lookup is not a verdict on the event. It turns
into the internal-error rejection, which is still counted as invalid but
carries the error so the caller can answer with a 5xx.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from errors import CustomerNotFound, StoreError
from models import ActivityEvent
from repo_eligibility import EligibilityStore

MISSING_FIELDS = "missing required fields"
CUSTOMER_NOT_FOUND = "customer not found"
CUSTOMER_INACTIVE = "customer is not active"
USER_AGENT_MISSING = "user agent missing"
BLACKLISTED_USER_AGENT = "blacklisted user agent"
BLACKLISTED_IP = "blacklisted ip"
INTERNAL_ERROR = "internal error"


@dataclass(frozen=True)
class ValidationOutcome:
    accepted: bool
    reason: Optional[str] = None
    status_hint: int = 200
    error: Optional[Exception] = None

    @property
    def internal(self) -> bool:
        return self.error is not None


ACCEPTED = ValidationOutcome(accepted=True)


def rejected(reason: str) -> ValidationOutcome:
    return ValidationOutcome(accepted=False, reason=reason, status_hint=400)


def check_required_fields(event: ActivityEvent, store: EligibilityStore) -> Optional[str]:
    if (
        event.customer_id <= 0
        or event.tag_id <= 0
        or not event.user_id
        or not event.remote_ip
        or event.timestamp == 0
    ):
        return MISSING_FIELDS
    return None


def check_customer_active(event: ActivityEvent, store: EligibilityStore) -> Optional[str]:
    try:
        active = store.is_customer_active(event.customer_id)
    except CustomerNotFound:
        return CUSTOMER_NOT_FOUND
    return None if active else CUSTOMER_INACTIVE


def check_user_agent_present(event: ActivityEvent, store: EligibilityStore) -> Optional[str]:
    return None if event.user_agent else USER_AGENT_MISSING


def check_user_agent_blacklist(event: ActivityEvent, store: EligibilityStore) -> Optional[str]:
    return BLACKLISTED_USER_AGENT if store.is_user_agent_blacklisted(event.user_agent) else None


def check_ip_blacklist(event: ActivityEvent, store: EligibilityStore) -> Optional[str]:
    return BLACKLISTED_IP if store.is_ip_blacklisted(event.remote_ip) else None


Check = Callable[[ActivityEvent, EligibilityStore], Optional[str]]

CHECKS: tuple[Check, ...] = (
    check_required_fields,
    check_customer_active,
    check_user_agent_present,
    check_user_agent_blacklist,
    check_ip_blacklist,
)


def validate(event: ActivityEvent, store: EligibilityStore) -> ValidationOutcome:
    """Run `CHECKS` in order and return the first rejection, or `ACCEPTED`."""

    for check in CHECKS:
        try:
            reason = check(event, store)
        except StoreError as e:
            return ValidationOutcome(
                accepted=False, reason=INTERNAL_ERROR, status_hint=500, error=e
            )
        if reason is not None:
            return rejected(reason)
    return ACCEPTED
