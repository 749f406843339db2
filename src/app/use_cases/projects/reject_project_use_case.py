import logging
from typing import Optional
from libs.result import Result, Return
from src.domain import DomainError, NotificationKind
from .dtos import ProjectActionResponse, ProjectDTO
from .project_workflow import ProjectWorkflowUseCase

logger = logging.getLogger(__name__)


class RejectProjectUseCase(ProjectWorkflowUseCase):
    """
    Use case: Reject Project

    Requires a non-empty reason. Rejecting an approved project also takes
    it off the featured list. The owner is told the reason by email.
    """

    async def execute(
        self,
        project_id: str,
        rejection_reason: Optional[str],
        admin_notes: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> Result[ProjectActionResponse]:
        try:
            async with self.uow:
                project = await self._lock(project_id, expected_version)
                previous_status = project.status_value()

                project.reject(rejection_reason, admin_notes)
                await self.uow.projects.update(project)
                await self.uow.commit()

                owner = await self._owner(project)
                project_dto = ProjectDTO.from_entity(project, owner)
                notification = self._owner_notification(
                    NotificationKind.project_rejected,
                    project,
                    owner,
                    reason=project.rejected_reason,
                )
        except DomainError as e:
            logger.info(f"[RejectProject] Project {project_id} not rejected: {e.code} - {e.message}")
            return Return.from_exception(e)

        logger.info(f"[RejectProject] Project {project_id} rejected ({previous_status} -> rejected)")
        report = await self.side_effects.run(
            actor_id=self.actor_id,
            event_type="project_rejected",
            resource_type="project",
            resource_id=project_id,
            metadata={
                "previous_status": previous_status,
                "rejection_reason": project_dto.rejected_reason,
                "admin_notes": project_dto.admin_notes,
            },
            notification=notification,
        )
        return Return.ok(ProjectActionResponse(project=project_dto, side_effects=report))
