import logging
from typing import Optional
from libs.result import Result, Return
from src.domain import DomainError, NotificationKind
from .dtos import ProjectActionResponse, ProjectDTO
from .project_workflow import ProjectWorkflowUseCase

logger = logging.getLogger(__name__)


class DelistProjectUseCase(ProjectWorkflowUseCase):
    """Use case: take an approved project off the listing with a system reason"""

    async def execute(
        self,
        project_id: str,
        admin_notes: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> Result[ProjectActionResponse]:
        try:
            async with self.uow:
                project = await self._lock(project_id, expected_version)

                project.delist(admin_notes)
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
            logger.info(f"[DelistProject] Project {project_id} not delisted: {e.code} - {e.message}")
            return Return.from_exception(e)

        logger.info(f"[DelistProject] Project {project_id} delisted")
        report = await self.side_effects.run(
            actor_id=self.actor_id,
            event_type="project_delisted",
            resource_type="project",
            resource_id=project_id,
            metadata={"previous_status": "approved", "admin_notes": project_dto.admin_notes},
            notification=notification,
        )
        return Return.ok(ProjectActionResponse(project=project_dto, side_effects=report))
