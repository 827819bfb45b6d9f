"""Assessment queue: the client-facing orchestrator behind the review UIs.

An `AssessmentQueue` holds a read-optimised cache of `AssessmentView`s keyed
by product id. Callers construct and own their queue; there is no shared
instance. The cache only changes after the store has confirmed a write, so a
failed call leaves it exactly as it was. Once a transition is committed the
cached entry is patched with the new status and timestamp, then replaced by
a fresh read when that read succeeds.

Every transition validates its payload and checks the status guard against
the cached entry before dispatching the command. The server repeats both
checks, so a stale cache fails rather than succeeding silently.
"""

from datetime import UTC, datetime

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from quality.assessment.creation import OpenAssessment
from quality.assessment.queries import AssessmentView, get_assessment, list_assessments
from quality.assessment.reconciliation import reconcile_orphans
from quality.assessment.state_machine import AssessmentAction, ensure_allowed, next_status, validate_payload
from quality.assessment.transitions import (
    ApproveForSample,
    PassQualityCheck,
    RejectProduct,
    RequestRevision,
    ResubmitProduct,
    SubmitSample,
)
from quality.errors import AssessmentNotFound, PersistenceError
from quality.shared.status import AssessmentStatus

logger = structlog.get_logger(__name__)


def call_store(fn, *args, **kwargs):
    """Invoke the store, surfacing infrastructure failures as `PersistenceError`.

    Domain errors (validation, guard, not found) pass through unchanged.
    """
    try:
        return fn(*args, **kwargs)
    except (ValidationError, ObjectNotFoundError):
        raise
    except Exception as exc:
        raise PersistenceError(str(exc) or type(exc).__name__) from exc


class AssessmentQueue:
    def __init__(self):
        self._entries: dict[str, AssessmentView] = {}
        self._seller_id = None
        self._is_loading = False
        self._last_error: str | None = None

    # -------------------------------------------------------------------
    # Reads (cache only)
    # -------------------------------------------------------------------
    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def seller_id(self):
        return self._seller_id

    def entries(self) -> list[AssessmentView]:
        return list(self._entries.values())

    def get_by_id(self, product_id) -> AssessmentView | None:
        return self._entries.get(str(product_id))

    def get_by_status(self, status) -> list[AssessmentView]:
        status = AssessmentStatus(status)
        return [entry for entry in self._entries.values() if entry.status == status]

    def counts(self) -> dict[AssessmentStatus, int]:
        counts = dict.fromkeys(AssessmentStatus, 0)
        for entry in self._entries.values():
            counts[entry.status] += 1
        return counts

    # -------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------
    def load(self, seller_id=None) -> list[AssessmentView]:
        """Load a seller's assessments, or the whole queue when no seller is given.

        The admin load opens assessments for orphan products first.
        """
        self._is_loading = True
        try:
            if seller_id is None:
                call_store(reconcile_orphans)
            views = call_store(list_assessments, seller_id)
        except Exception as exc:
            self._fail("load", exc)
            raise
        finally:
            self._is_loading = False

        self._entries = {view.product_id: view for view in views}
        self._seller_id = seller_id
        self._last_error = None
        logger.info("Assessment queue loaded", seller_id=seller_id, count=len(self._entries))
        return self.entries()

    def approve_for_sample(self, product_id) -> AssessmentView:
        return self._transition(
            AssessmentAction.APPROVE_FOR_SAMPLE,
            product_id,
            ApproveForSample(product_id=product_id),
        )

    def submit_sample(self, product_id, logistics) -> AssessmentView:
        return self._transition(
            AssessmentAction.SUBMIT_SAMPLE,
            product_id,
            SubmitSample(product_id=product_id, logistics=logistics),
            logistics=logistics,
        )

    def pass_quality_check(self, product_id) -> AssessmentView:
        return self._transition(
            AssessmentAction.PASS_QUALITY_CHECK,
            product_id,
            PassQualityCheck(product_id=product_id),
        )

    def reject(self, product_id, reason, stage, reclassified_category=None) -> AssessmentView:
        return self._transition(
            AssessmentAction.REJECT,
            product_id,
            RejectProduct(
                product_id=product_id,
                reason=reason,
                stage=stage,
                reclassified_category=reclassified_category,
            ),
            reason=reason,
            stage=stage,
        )

    def request_revision(self, product_id, reason, stage) -> AssessmentView:
        return self._transition(
            AssessmentAction.REQUEST_REVISION,
            product_id,
            RequestRevision(product_id=product_id, reason=reason, stage=stage),
            reason=reason,
            stage=stage,
        )

    def resubmit(self, product_id) -> AssessmentView:
        return self._transition(
            AssessmentAction.RESUBMIT,
            product_id,
            ResubmitProduct(product_id=product_id),
        )

    def add_product(self, product_id, vendor_name=None) -> list[AssessmentView]:
        """Open the assessment for an already stored product, then reload."""
        try:
            call_store(
                current_domain.process,
                OpenAssessment(product_id=product_id, vendor=vendor_name),
                asynchronous=False,
            )
        except Exception as exc:
            self._fail("add_product", exc, product_id=product_id)
            raise
        return self.load(self._seller_id)

    def reset(self) -> None:
        self._entries = {}
        self._seller_id = None
        self._is_loading = False
        self._last_error = None

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _transition(self, action, product_id, command, **payload) -> AssessmentView:
        product_id = str(product_id)
        try:
            validate_payload(action, **payload)

            entry = self._entries.get(product_id)
            if entry is None:
                raise AssessmentNotFound(product_id)
            ensure_allowed(entry.status, action)

            call_store(current_domain.process, command, asynchronous=False)
        except Exception as exc:
            self._fail(action.value, exc, product_id=product_id)
            raise

        # The write is committed from here on; the cache must reflect it
        self._entries[product_id] = self._patch(entry, action, **payload)
        self._last_error = None

        try:
            refreshed = call_store(get_assessment, product_id)
        except PersistenceError as exc:
            logger.warning(
                "Assessment refresh failed after a committed transition",
                operation=action.value,
                product_id=product_id,
                error=str(exc),
            )
        else:
            if refreshed is not None:
                self._entries[product_id] = refreshed

        return self._entries[product_id]

    @staticmethod
    def _patch(entry, action, **payload) -> AssessmentView:
        """Apply a confirmed transition to a cached entry without re-reading the store."""
        now = datetime.now(UTC)
        update = {
            "status": next_status(entry.status, action, **payload),
            "updated_at": now,
        }
        if action == AssessmentAction.APPROVE_FOR_SAMPLE:
            update["approved_at"] = now
        elif action == AssessmentAction.SUBMIT_SAMPLE:
            update["logistics"] = payload["logistics"]
        elif action == AssessmentAction.PASS_QUALITY_CHECK:
            update["verified_at"] = now
        elif action == AssessmentAction.REJECT:
            update.update(rejected_at=now, rejection_reason=payload["reason"], rejection_stage=payload["stage"])
        elif action == AssessmentAction.REQUEST_REVISION:
            update.update(
                revision_requested_at=now,
                rejection_reason=payload["reason"],
                rejection_stage=payload["stage"],
            )
        elif action == AssessmentAction.RESUBMIT:
            update["resubmitted_at"] = now
        return entry.model_copy(update=update)

    def _fail(self, operation, exc, **context):
        self._last_error = str(exc)
        logger.warning(
            "Assessment queue operation failed",
            operation=operation,
            error_type=type(exc).__name__,
            error=str(exc),
            **context,
        )
