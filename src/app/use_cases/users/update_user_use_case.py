import logging
from libs.result import Result, Return
from src.app.services.workflow_side_effects import SideEffectsReport
from src.domain import DomainError
from .dtos import UpdateUserRequest, UpdateUserResponse, UserDTO
from .user_workflow import UserWorkflowUseCase

logger = logging.getLogger(__name__)


class UpdateUserUseCase(UserWorkflowUseCase):
    """
    Use case: Update User

    Partial profile edit. Approval status only moves through approve or
    reject; accounts are never deleted, only deactivated.
    """

    async def execute(self, user_id: str, request: UpdateUserRequest) -> Result[UpdateUserResponse]:
        changes = request.changes()

        try:
            async with self.uow:
                user = await self._lock(user_id, request.expected_version)

                changed_fields = user.apply_changes(changes)
                if changed_fields:
                    await self.uow.users.update(user)
                    await self.uow.commit()

                user_dto = UserDTO.from_entity(user)
        except DomainError as e:
            logger.info(f"[UpdateUser] User {user_id} not updated: {e.code} - {e.message}")
            return Return.from_exception(e)

        report = SideEffectsReport()
        if changed_fields:
            deactivated = "is_active" in changed_fields and not user_dto.is_active
            event_type = "user_deactivated" if deactivated else "user_updated"
            logger.info(f"[UpdateUser] User {user_id} updated: {', '.join(changed_fields)}")
            report = await self.side_effects.run(
                actor_id=self.actor_id,
                event_type=event_type,
                resource_type="user",
                resource_id=user_id,
                metadata={"changed_fields": changed_fields},
            )

        return Return.ok(
            UpdateUserResponse(user=user_dto, changed_fields=changed_fields, side_effects=report)
        )
