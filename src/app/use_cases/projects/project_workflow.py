"""Shared steps of the project moderation use cases"""
from typing import Optional
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.workflow_side_effects import NotificationRequest, WorkflowSideEffects
from src.domain import NotFound, NotificationKind, Project, User


class ProjectWorkflowUseCase:
    """Base for use cases that lock a project and move it through the state machine"""

    def __init__(self, uow: UnitOfWork, side_effects: WorkflowSideEffects, actor_id: str):
        self.uow = uow
        self.side_effects = side_effects
        self.actor_id = actor_id

    async def _lock(self, project_id: str, expected_version: Optional[int] = None) -> Project:
        """Load the project with a row lock and check the caller's version"""
        project = await self.uow.projects.get_by_id(project_id, for_update=True)
        if project is None:
            raise NotFound("project", project_id)
        project.check_version(expected_version)
        return project

    async def _owner(self, project: Project) -> Optional[User]:
        return await self.uow.users.get_by_id(project.owner_id)

    @staticmethod
    def _owner_notification(
        kind: NotificationKind, project: Project, owner: Optional[User], **context
    ) -> Optional[NotificationRequest]:
        if owner is None or not owner.email:
            return None
        return NotificationRequest(
            kind=kind,
            recipient_email=owner.email,
            recipient_name=owner.full_name,
            resource_type="project",
            resource_id=project.id,
            context={
                "project_id": project.id,
                "project_title": project.title,
                "first_name": owner.first_name,
                **context,
            },
        )
