from libs.result import Result, Error, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import UserDTO


class GetUserUseCase:
    """Use case for getting a single user by ID"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[UserDTO]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)

            if user is None:
                return Return.err(Error(code="USER_NOT_FOUND", message=f"User {user_id} not found"))

            return Return.ok(UserDTO.from_entity(user))
