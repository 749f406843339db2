import logging
from typing import Optional
from libs.result import Result, Return
from src.domain import DomainError, NotificationKind
from .dtos import UserActionResponse, UserDTO
from .user_workflow import UserWorkflowUseCase

logger = logging.getLogger(__name__)


class RejectUserUseCase(UserWorkflowUseCase):
    """
    Use case: Reject User

    Only pending accounts can be rejected and a reason is mandatory. The
    reason is included in the rejection email.
    """

    async def execute(
        self,
        user_id: str,
        rejection_reason: Optional[str],
        admin_notes: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> Result[UserActionResponse]:
        try:
            async with self.uow:
                user = await self._lock(user_id, expected_version)

                user.reject(rejection_reason)
                await self.uow.users.update(user)
                await self.uow.commit()

                user_dto = UserDTO.from_entity(user)
                notification = self._notification(
                    NotificationKind.user_rejection, user, reason=user.rejection_reason
                )
        except DomainError as e:
            logger.info(f"[RejectUser] User {user_id} not rejected: {e.code} - {e.message}")
            return Return.from_exception(e)

        logger.info(f"[RejectUser] User {user_id} rejected")
        report = await self.side_effects.run(
            actor_id=self.actor_id,
            event_type="user_rejected",
            resource_type="user",
            resource_id=user_id,
            metadata={
                "rejection_reason": user_dto.rejection_reason,
                "admin_notes": admin_notes,
            },
            notification=notification,
        )
        return Return.ok(UserActionResponse(user=user_dto, side_effects=report))
