import logging
from typing import Optional
from libs.result import Result, Return
from src.domain import DomainError
from .dtos import ProjectActionResponse, ProjectDTO
from .project_workflow import ProjectWorkflowUseCase

logger = logging.getLogger(__name__)


class StartReviewUseCase(ProjectWorkflowUseCase):
    """Use case: mark a project as under review"""

    async def execute(
        self, project_id: str, expected_version: Optional[int] = None
    ) -> Result[ProjectActionResponse]:
        try:
            async with self.uow:
                project = await self._lock(project_id, expected_version)
                previous_status = project.status_value()

                project.start_review()
                await self.uow.projects.update(project)
                await self.uow.commit()

                project_dto = ProjectDTO.from_entity(project, await self._owner(project))
        except DomainError as e:
            logger.info(f"[StartReview] Project {project_id}: {e.code} - {e.message}")
            return Return.from_exception(e)

        report = await self.side_effects.run(
            actor_id=self.actor_id,
            event_type="project_review_started",
            resource_type="project",
            resource_id=project_id,
            metadata={"previous_status": previous_status},
        )
        return Return.ok(ProjectActionResponse(project=project_dto, side_effects=report))
