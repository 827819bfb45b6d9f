"""Assessment transitions: commands and the handler that applies them.

Each command moves one assessment along the review workflow. The handler
runs inside a single unit of work, so the assessment update, the product's
approval status and the audit record commit together or not at all.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from quality.assessment.assessment import Assessment
from quality.assessment.state_machine import AssessmentAction
from quality.assessment.synchronizer import sync_product_status
from quality.audit.recorder import AuditTrailRecorder
from quality.domain import quality
from quality.errors import AssessmentNotFound

logger = structlog.get_logger(__name__)


@quality.command(part_of="Assessment")
class ApproveForSample:
    """Digital review passed; ask the seller for a physical sample."""

    product_id: Identifier(required=True)


@quality.command(part_of="Assessment")
class SubmitSample:
    product_id: Identifier(required=True)
    logistics: Text()


@quality.command(part_of="Assessment")
class PassQualityCheck:
    product_id: Identifier(required=True)


@quality.command(part_of="Assessment")
class RejectProduct:
    product_id: Identifier(required=True)
    reason: Text()
    stage: String(max_length=20)
    reclassified_category: String(max_length=100)


@quality.command(part_of="Assessment")
class RequestRevision:
    product_id: Identifier(required=True)
    reason: Text()
    stage: String(max_length=20)


@quality.command(part_of="Assessment")
class ResubmitProduct:
    """The seller revised the product and wants it reviewed again."""

    product_id: Identifier(required=True)


@quality.command_handler(part_of=Assessment)
class AssessmentTransitionHandler:
    def _load(self, product_id):
        assessment = current_domain.repository_for(Assessment).find_by_product_id(product_id)
        if assessment is None:
            raise AssessmentNotFound(product_id)
        return assessment

    def _commit(self, action, assessment, previous, reclassified_category=None):
        current_domain.repository_for(Assessment).add(assessment)
        product = sync_product_status(assessment)
        AuditTrailRecorder().record(
            action,
            assessment,
            product=product,
            reclassified_category=reclassified_category,
        )

        logger.info(
            "Assessment transitioned",
            product_id=str(assessment.product_id),
            action=action.value,
            from_status=previous.value,
            to_status=assessment.current_status.value,
        )
        return str(assessment.id)

    @handle(ApproveForSample)
    def approve_for_sample(self, command):
        assessment = self._load(command.product_id)
        previous = assessment.current_status
        assessment.approve_for_sample()
        return self._commit(AssessmentAction.APPROVE_FOR_SAMPLE, assessment, previous)

    @handle(SubmitSample)
    def submit_sample(self, command):
        assessment = self._load(command.product_id)
        previous = assessment.current_status
        assessment.submit_sample(command.logistics)
        return self._commit(AssessmentAction.SUBMIT_SAMPLE, assessment, previous)

    @handle(PassQualityCheck)
    def pass_quality_check(self, command):
        assessment = self._load(command.product_id)
        previous = assessment.current_status
        assessment.pass_quality_check()
        return self._commit(AssessmentAction.PASS_QUALITY_CHECK, assessment, previous)

    @handle(RejectProduct)
    def reject(self, command):
        assessment = self._load(command.product_id)
        previous = assessment.current_status
        assessment.reject(command.reason, command.stage)
        return self._commit(
            AssessmentAction.REJECT,
            assessment,
            previous,
            reclassified_category=command.reclassified_category,
        )

    @handle(RequestRevision)
    def request_revision(self, command):
        assessment = self._load(command.product_id)
        previous = assessment.current_status
        assessment.request_revision(command.reason, command.stage)
        return self._commit(AssessmentAction.REQUEST_REVISION, assessment, previous)

    @handle(ResubmitProduct)
    def resubmit(self, command):
        assessment = self._load(command.product_id)
        previous = assessment.current_status
        assessment.resubmit()
        return self._commit(AssessmentAction.RESUBMIT, assessment, previous)
