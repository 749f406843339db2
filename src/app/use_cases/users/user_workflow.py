from typing import Optional
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.workflow_side_effects import NotificationRequest, WorkflowSideEffects
from src.domain import NotFound, NotificationKind, User


class UserWorkflowUseCase:
    """Base for use cases that lock a user and move it through the approval flow"""

    def __init__(self, uow: UnitOfWork, side_effects: WorkflowSideEffects, actor_id: str):
        self.uow = uow
        self.side_effects = side_effects
        self.actor_id = actor_id

    async def _lock(self, user_id: str, expected_version: Optional[int] = None) -> User:
        user = await self.uow.users.get_by_id(user_id, for_update=True)
        if user is None:
            raise NotFound("user", user_id)
        user.check_version(expected_version)
        return user

    @staticmethod
    def _notification(kind: NotificationKind, user: User, **context) -> NotificationRequest:
        return NotificationRequest(
            kind=kind,
            recipient_email=user.email,
            recipient_name=user.full_name,
            resource_type="user",
            resource_id=user.id,
            context={"first_name": user.first_name, "role": user.role_value(), **context},
        )
