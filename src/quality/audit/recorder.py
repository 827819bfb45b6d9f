"""Audit trail recorder: appends the ledger record a transition implies.

Called by the transition handlers inside the same unit of work as the
assessment write, so a record exists exactly when the transition committed.

    approve_for_sample, pass_quality_check -> ApprovalRecord
    reject                                 -> RejectionRecord
    request_revision                       -> RevisionRecord
    submit_sample                          -> LogisticsRecord
    resubmit                               -> (nothing)
"""

import structlog
from protean.utils.globals import current_domain

from quality.assessment.repository import fetch_all
from quality.assessment.state_machine import AssessmentAction
from quality.audit.records import ApprovalRecord, LogisticsRecord, RejectionRecord, RevisionRecord

logger = structlog.get_logger(__name__)

DIGITAL_REVIEW_PASSED = "Digital review passed"
PRODUCT_VERIFIED = "Product verified and approved"
TRUSTED_BRAND_BYPASS = "Trusted brand, quality review bypassed"

LEDGERS = {
    "approvals": ApprovalRecord,
    "rejections": RejectionRecord,
    "revisions": RevisionRecord,
    "logistics": LogisticsRecord,
}


class AuditTrailRecorder:
    def record(self, action, assessment, product=None, reclassified_category=None):
        """Append the record for `action`, returning it (or None for actions without one)."""
        assessment_id = str(assessment.id)

        if action == AssessmentAction.APPROVE_FOR_SAMPLE:
            record = ApprovalRecord(assessment_id=assessment_id, description=DIGITAL_REVIEW_PASSED)
        elif action == AssessmentAction.PASS_QUALITY_CHECK:
            record = ApprovalRecord(assessment_id=assessment_id, description=PRODUCT_VERIFIED)
        elif action == AssessmentAction.REJECT:
            record = RejectionRecord(
                assessment_id=assessment_id,
                product_id=str(assessment.product_id),
                description=assessment.rejection_reason,
                stage=assessment.rejection_stage,
                vendor_submitted_category=product.category if product is not None else None,
                admin_reclassified_category=reclassified_category,
            )
        elif action == AssessmentAction.REQUEST_REVISION:
            record = RevisionRecord(
                assessment_id=assessment_id,
                description=assessment.rejection_reason,
                stage=assessment.rejection_stage,
            )
        elif action == AssessmentAction.SUBMIT_SAMPLE:
            record = LogisticsRecord(assessment_id=assessment_id, description=assessment.logistics)
        else:
            return None

        current_domain.repository_for(type(record)).add(record)
        logger.info(
            "Audit record appended",
            ledger=type(record).__name__,
            assessment_id=assessment_id,
            action=action.value,
        )
        return record

    def record_bypass(self, assessment):
        record = ApprovalRecord(assessment_id=str(assessment.id), description=TRUSTED_BRAND_BYPASS)
        current_domain.repository_for(ApprovalRecord).add(record)
        logger.info("Audit record appended", ledger="ApprovalRecord", assessment_id=str(assessment.id), action="bypass")
        return record


def ledger_entries(assessment_ids) -> dict[str, dict[str, list]]:
    """Group every ledger record by assessment id, oldest first.

    Returns ``{assessment_id: {"approvals": [...], "rejections": [...], ...}}``
    with an entry for every requested id.
    """
    assessment_ids = [str(aid) for aid in assessment_ids]
    grouped = {aid: {name: [] for name in LEDGERS} for aid in assessment_ids}
    if not assessment_ids:
        return grouped

    for name, record_cls in LEDGERS.items():
        dao = current_domain.repository_for(record_cls)._dao
        queryset = dao.query.filter(assessment_id__in=assessment_ids).order_by("created_at")
        for record in fetch_all(queryset):
            grouped[str(record.assessment_id)][name].append(record)

    return grouped
