import logging
from typing import Optional
from libs.result import Result, Return
from src.domain import DomainError, NotificationKind
from .dtos import UserActionResponse, UserDTO
from .user_workflow import UserWorkflowUseCase

logger = logging.getLogger(__name__)


class ApproveUserUseCase(UserWorkflowUseCase):
    """
    Use case: Approve User

    Only pending accounts can be approved. Queues the welcome email.
    """

    async def execute(
        self,
        user_id: str,
        admin_notes: Optional[str] = None,
        expected_version: Optional[int] = None,
        bulk: bool = False,
    ) -> Result[UserActionResponse]:
        try:
            async with self.uow:
                user = await self._lock(user_id, expected_version)

                user.approve()
                await self.uow.users.update(user)
                await self.uow.commit()

                user_dto = UserDTO.from_entity(user)
                notification = self._notification(NotificationKind.user_welcome, user)
        except DomainError as e:
            logger.info(f"[ApproveUser] User {user_id} not approved: {e.code} - {e.message}")
            return Return.from_exception(e)

        logger.info(f"[ApproveUser] User {user_id} approved")
        report = await self.side_effects.run(
            actor_id=self.actor_id,
            event_type="user_approved",
            resource_type="user",
            resource_id=user_id,
            metadata={"admin_notes": admin_notes, "bulk": bulk},
            notification=notification,
        )
        return Return.ok(UserActionResponse(user=user_dto, side_effects=report))
