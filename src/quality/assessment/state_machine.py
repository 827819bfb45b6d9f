"""Assessment state machine: the pure transition function.

Given a current status, an action and its payload, `next_status` returns the
status the assessment moves to, or raises. It never touches storage; the
`Assessment` aggregate applies the result and the command handlers persist it.

    PENDING_DIGITAL_REVIEW --approve_for_sample--> WAITING_FOR_SAMPLE
    WAITING_FOR_SAMPLE     --submit_sample-------> IN_QUALITY_REVIEW
    IN_QUALITY_REVIEW      --pass_quality_check--> ACTIVE_VERIFIED
    (non-terminal)         --reject--------------> REJECTED
    (non-terminal, not FOR_REVISION) --request_revision--> FOR_REVISION
    FOR_REVISION           --resubmit------------> PENDING_DIGITAL_REVIEW
"""

from enum import Enum

from protean.exceptions import ValidationError

from quality.errors import GuardViolation
from quality.shared.status import TERMINAL_STATUSES, AssessmentStatus, ReviewStage


class AssessmentAction(Enum):
    APPROVE_FOR_SAMPLE = "approve_for_sample"
    SUBMIT_SAMPLE = "submit_sample"
    PASS_QUALITY_CHECK = "pass_quality_check"
    REJECT = "reject"
    REQUEST_REVISION = "request_revision"
    RESUBMIT = "resubmit"


_NON_TERMINAL = frozenset(AssessmentStatus) - TERMINAL_STATUSES

# action -> (statuses it may start from, status it leads to)
_TRANSITIONS = {
    AssessmentAction.APPROVE_FOR_SAMPLE: (
        frozenset({AssessmentStatus.PENDING_DIGITAL_REVIEW}),
        AssessmentStatus.WAITING_FOR_SAMPLE,
    ),
    AssessmentAction.SUBMIT_SAMPLE: (
        frozenset({AssessmentStatus.WAITING_FOR_SAMPLE}),
        AssessmentStatus.IN_QUALITY_REVIEW,
    ),
    AssessmentAction.PASS_QUALITY_CHECK: (
        frozenset({AssessmentStatus.IN_QUALITY_REVIEW}),
        AssessmentStatus.ACTIVE_VERIFIED,
    ),
    AssessmentAction.REJECT: (
        _NON_TERMINAL,
        AssessmentStatus.REJECTED,
    ),
    AssessmentAction.REQUEST_REVISION: (
        _NON_TERMINAL - {AssessmentStatus.FOR_REVISION},
        AssessmentStatus.FOR_REVISION,
    ),
    AssessmentAction.RESUBMIT: (
        frozenset({AssessmentStatus.FOR_REVISION}),
        AssessmentStatus.PENDING_DIGITAL_REVIEW,
    ),
}


def allowed_sources(action: AssessmentAction) -> frozenset[AssessmentStatus]:
    """Statuses from which `action` may be taken."""
    return _TRANSITIONS[action][0]


def validate_payload(action: AssessmentAction, logistics=None, reason=None, stage=None) -> None:
    """Reject missing or malformed payloads before any status is consulted."""
    if action == AssessmentAction.SUBMIT_SAMPLE:
        if not logistics or not logistics.strip():
            raise ValidationError({"logistics": ["Logistics method is required"]})

    if action in (AssessmentAction.REJECT, AssessmentAction.REQUEST_REVISION):
        if not reason or not reason.strip():
            raise ValidationError({"reason": ["A reason is required"]})
        try:
            ReviewStage(stage)
        except ValueError:
            raise ValidationError({"stage": [f"Stage must be 'digital' or 'physical', got {stage!r}"]}) from None


def ensure_allowed(current: AssessmentStatus, action: AssessmentAction) -> None:
    """Raise `GuardViolation` unless `action` may be taken from `current`."""
    sources = allowed_sources(action)
    if current not in sources:
        raise GuardViolation(current, action, expected=sources)


def next_status(current: AssessmentStatus, action: AssessmentAction, **payload) -> AssessmentStatus:
    """Return the status `action` leads to from `current`.

    Payload checks run first, so an empty reason is reported as a validation
    error even when the status would also forbid the action.
    """
    validate_payload(action, **payload)
    ensure_allowed(current, action)
    return _TRANSITIONS[action][1]
