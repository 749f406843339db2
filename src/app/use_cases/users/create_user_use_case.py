import logging
import re
from datetime import datetime
from libs.result import Result, Error, Return
from sqlalchemy.exc import IntegrityError
from src.domain import ApprovalStatus, NotificationKind, User, UserRole
from src.domain.user import MAX_LENGTHS
from .dtos import CreateUserRequest, UserActionResponse, UserDTO
from .user_workflow import UserWorkflowUseCase

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
EMAIL_MAX_LENGTH = 255


class CreateUserUseCase(UserWorkflowUseCase):
    """
    Use case: Admin-created account

    Accounts created by an administrator skip the approval queue: they
    start approved, verified and active.
    """

    async def execute(self, request: CreateUserRequest) -> Result[UserActionResponse]:
        email = request.email.strip().lower()
        if len(email) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.match(email):
            return Return.err(Error(code="VALIDATION_ERROR", message="A valid email is required"))

        first_name = request.first_name.strip()
        last_name = request.last_name.strip()
        if not first_name or not last_name:
            return Return.err(
                Error(code="VALIDATION_ERROR", message="First and last name are required")
            )

        company = (request.company or "").strip() or None
        location = (request.location or "").strip() or None
        for name, value in (
            ("first_name", first_name),
            ("last_name", last_name),
            ("company", company),
            ("location", location),
        ):
            if value and len(value) > MAX_LENGTHS[name]:
                return Return.err(
                    Error(
                        code="VALIDATION_ERROR",
                        message=f"{name} must be at most {MAX_LENGTHS[name]} characters",
                    )
                )

        try:
            role = UserRole(request.role)
        except ValueError:
            return Return.err(
                Error(code="VALIDATION_ERROR", message=f"Invalid role '{request.role}'")
            )

        duplicate = Error(
            code="EMAIL_ALREADY_EXISTS", message=f"A user with email {email} already exists"
        )

        async with self.uow:
            if await self.uow.users.get_by_email(email):
                return Return.err(duplicate)

            user = User(
                email=email,
                first_name=first_name,
                last_name=last_name,
                role=role,
                approval_status=ApprovalStatus.approved,
                company=company,
                location=location,
                is_verified=True,
                is_active=True,
                approved_at=datetime.utcnow(),
            )
            try:
                user = await self.uow.users.create(user)
                await self.uow.commit()
            except IntegrityError:
                logger.info(f"[CreateUser] Duplicate email rejected by the database: {email}")
                return Return.err(duplicate)

            user_dto = UserDTO.from_entity(user)
            notification = self._notification(NotificationKind.user_welcome, user)

        logger.info(f"[CreateUser] Created {role.value} account {user_dto.id}")
        report = await self.side_effects.run(
            actor_id=self.actor_id,
            event_type="user_created",
            resource_type="user",
            resource_id=user_dto.id,
            metadata={"role": role.value, "email": email},
            notification=notification,
        )
        return Return.ok(UserActionResponse(user=user_dto, side_effects=report))
