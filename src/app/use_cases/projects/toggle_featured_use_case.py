import logging
from typing import Optional
from libs.result import Result, Return
from src.domain import DomainError
from .dtos import ProjectActionResponse, ProjectDTO
from .project_workflow import ProjectWorkflowUseCase

logger = logging.getLogger(__name__)


class ToggleFeaturedUseCase(ProjectWorkflowUseCase):
    """
    Use case: Feature / unfeature an approved project

    Flips the flag when ``is_featured`` is None, otherwise sets it.
    No notification is sent.
    """

    async def execute(
        self,
        project_id: str,
        is_featured: Optional[bool] = None,
        expected_version: Optional[int] = None,
    ) -> Result[ProjectActionResponse]:
        try:
            async with self.uow:
                project = await self._lock(project_id, expected_version)

                changed = project.set_featured(is_featured)
                if changed:
                    await self.uow.projects.update(project)
                    await self.uow.commit()

                project_dto = ProjectDTO.from_entity(project, await self._owner(project))
        except DomainError as e:
            logger.info(f"[ToggleFeatured] Project {project_id}: {e.code} - {e.message}")
            return Return.from_exception(e)

        if not changed:
            return Return.ok(ProjectActionResponse(project=project_dto, changed=False))

        event_type = "project_featured" if project_dto.is_featured else "project_unfeatured"
        logger.info(f"[ToggleFeatured] Project {project_id} is_featured={project_dto.is_featured}")
        report = await self.side_effects.run(
            actor_id=self.actor_id,
            event_type=event_type,
            resource_type="project",
            resource_id=project_id,
            metadata={"is_featured": project_dto.is_featured},
        )
        return Return.ok(ProjectActionResponse(project=project_dto, side_effects=report))
