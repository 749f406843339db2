import logging
from typing import Optional
from libs.result import Result, Return
from src.domain import DomainError, NotificationKind
from .dtos import ProjectActionResponse, ProjectDTO
from .project_workflow import ProjectWorkflowUseCase

logger = logging.getLogger(__name__)


class ApproveProjectUseCase(ProjectWorkflowUseCase):
    """
    Use case: Approve Project

    Moves the project to approved and notifies its owner. Approving an
    already approved project returns the current state with no side effects.
    """

    async def execute(
        self,
        project_id: str,
        admin_notes: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> Result[ProjectActionResponse]:
        try:
            async with self.uow:
                project = await self._lock(project_id, expected_version)
                previous_status = project.status_value()

                changed = project.approve(admin_notes)
                if changed:
                    await self.uow.projects.update(project)
                    await self.uow.commit()

                owner = await self._owner(project)
                project_dto = ProjectDTO.from_entity(project, owner)
                notification = self._owner_notification(
                    NotificationKind.project_approved, project, owner
                )
        except DomainError as e:
            logger.info(f"[ApproveProject] Project {project_id} not approved: {e.code} - {e.message}")
            return Return.from_exception(e)

        if not changed:
            logger.info(f"[ApproveProject] Project {project_id} already approved, nothing to do")
            return Return.ok(ProjectActionResponse(project=project_dto, changed=False))

        logger.info(f"[ApproveProject] Project {project_id} approved ({previous_status} -> approved)")
        report = await self.side_effects.run(
            actor_id=self.actor_id,
            event_type="project_approved",
            resource_type="project",
            resource_id=project_id,
            metadata={"previous_status": previous_status, "admin_notes": admin_notes},
            notification=notification,
        )
        return Return.ok(ProjectActionResponse(project=project_dto, side_effects=report))
