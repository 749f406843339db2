from libs.result import Result, Error, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ProjectDTO


class GetProjectUseCase:
    """Use case for getting a single project with its owner"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, project_id: str) -> Result[ProjectDTO]:
        async with self.uow:
            found = await self.uow.projects.get_with_owner(project_id)

            if found is None:
                return Return.err(
                    Error(code="PROJECT_NOT_FOUND", message=f"Project {project_id} not found")
                )

            project, owner = found
            return Return.ok(ProjectDTO.from_entity(project, owner))
