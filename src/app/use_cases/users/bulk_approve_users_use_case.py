"""
Bulk Approve Users Use Case

Approves many pending users in one request. Each id runs in its own
transaction, so one bad id never blocks the others; every id ends up
either in ``approved_ids`` or in ``failures``.
"""
import logging
from typing import List
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Error, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.workflow_side_effects import WorkflowSideEffects
from .approve_user_use_case import ApproveUserUseCase
from .dtos import BulkApproveRequest, BulkApproveResponse, BulkFailureDTO

logger = logging.getLogger(__name__)


def dedupe(ids: List[str]) -> List[str]:
    """Drop blanks and repeats, keeping first-seen order"""
    seen = []
    for item in ids:
        item = (item or "").strip()
        if item and item not in seen:
            seen.append(item)
    return seen


class BulkApproveUsersUseCase:
    """Use case: Bulk Approve Users"""

    def __init__(
        self,
        uow: UnitOfWork,
        side_effects: WorkflowSideEffects,
        actor_id: str,
        max_ids: int = 100,
    ):
        self.uow = uow
        self.side_effects = side_effects
        self.actor_id = actor_id
        self.max_ids = max_ids

    async def execute(self, request: BulkApproveRequest) -> Result[BulkApproveResponse]:
        user_ids = dedupe(request.user_ids)

        if not user_ids:
            return Return.err(
                Error(code="VALIDATION_ERROR", message="user_ids must contain at least one id")
            )
        if len(user_ids) > self.max_ids:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message=f"Cannot approve more than {self.max_ids} users at once",
                )
            )

        approve = ApproveUserUseCase(self.uow, self.side_effects, self.actor_id)
        approved_ids: List[str] = []
        failures: List[BulkFailureDTO] = []
        emails_sent = 0

        for user_id in user_ids:
            try:
                result = await approve.execute(user_id, admin_notes=request.admin_notes, bulk=True)
            except SQLAlchemyError as e:
                # The unit of work rolled this id back; earlier ids stay committed
                logger.error(f"[BulkApproveUsers] Database error approving user {user_id}: {e}")
                failures.append(
                    BulkFailureDTO(
                        id=user_id,
                        code="DEPENDENCY_FAILURE",
                        reason="Database error while approving user",
                    )
                )
                continue
            if result.is_err():
                failures.append(
                    BulkFailureDTO(id=user_id, code=result.error.code, reason=result.error.message)
                )
                continue
            approved_ids.append(user_id)
            if result.value.side_effects.notification_queued:
                emails_sent += 1

        logger.info(
            f"[BulkApproveUsers] Approved {len(approved_ids)}/{len(user_ids)} users, "
            f"{len(failures)} failures"
        )
        return Return.ok(
            BulkApproveResponse(
                approved_count=len(approved_ids),
                emails_sent=emails_sent,
                approved_ids=approved_ids,
                failures=failures,
            )
        )
