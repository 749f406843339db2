"""
Edit Project Use Case

Admin edit of a project's listing fields, optionally followed by approval.
The edit and the approval are separate steps: a failed approval leaves
the committed edit in place and is reported in ``approval``.
"""
import logging
from libs.result import Result, Return
from src.app.services.workflow_side_effects import SideEffectsReport
from src.app.use_cases.shared_dtos import ErrorDTO
from src.domain import DomainError
from .approve_project_use_case import ApproveProjectUseCase
from .dtos import ApprovalOutcome, EditProjectRequest, EditProjectResponse, ProjectDTO
from .project_workflow import ProjectWorkflowUseCase

logger = logging.getLogger(__name__)


class EditProjectUseCase(ProjectWorkflowUseCase):
    """Use case: Edit Project (and optionally approve it afterwards)"""

    async def execute(self, project_id: str, request: EditProjectRequest) -> Result[EditProjectResponse]:
        changes = request.changes()

        try:
            async with self.uow:
                project = await self._lock(project_id, request.expected_version)

                changed_fields = project.apply_changes(changes)
                if changed_fields:
                    await self.uow.projects.update(project)
                    await self.uow.commit()

                project_dto = ProjectDTO.from_entity(project, await self._owner(project))
        except DomainError as e:
            logger.info(f"[EditProject] Project {project_id} not edited: {e.code} - {e.message}")
            return Return.from_exception(e)

        report = SideEffectsReport()
        if changed_fields:
            logger.info(f"[EditProject] Project {project_id} edited: {', '.join(changed_fields)}")
            report = await self.side_effects.run(
                actor_id=self.actor_id,
                event_type="project_edited",
                resource_type="project",
                resource_id=project_id,
                metadata={"changed_fields": changed_fields},
            )

        approval = None
        if request.approve_after_edit:
            approve = ApproveProjectUseCase(self.uow, self.side_effects, self.actor_id)
            result = await approve.execute(
                project_id,
                admin_notes=request.admin_notes,
                expected_version=project_dto.version,
            )
            if result.is_ok():
                project_dto = result.value.project
                approval = ApprovalOutcome(succeeded=True, side_effects=result.value.side_effects)
            else:
                logger.warning(
                    f"[EditProject] Edit of {project_id} kept but approval failed: {result.error.code}"
                )
                approval = ApprovalOutcome(
                    succeeded=False,
                    error=ErrorDTO(code=result.error.code, message=result.error.message),
                )

        return Return.ok(
            EditProjectResponse(
                project=project_dto,
                changed_fields=changed_fields,
                side_effects=report,
                approval=approval,
            )
        )
