from typing import Optional
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.shared_dtos import PaginationDTO
from src.domain import DomainError
from src.domain.query import Page, PageRequest, UserFilter, UserSort, parse_sort
from .dtos import ListUsersQuery, ListUsersResponse, UserDTO


class ListUsersUseCase:
    """Use case for the admin user listing"""

    def __init__(self, uow: UnitOfWork, default_page_size: int = 10, max_page_size: int = 200):
        self.uow = uow
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def execute(self, query: ListUsersQuery) -> Result[ListUsersResponse]:
        try:
            filters = UserFilter.create(
                search=query.search,
                role=query.role,
                status=query.status,
                created_from=query.created_from,
                created_to=query.created_to,
            )
            sort = parse_sort(UserSort, query.sort)
            page_request = PageRequest.create(
                query.page, query.limit, self.default_page_size, self.max_page_size
            )
        except DomainError as e:
            return Return.from_exception(e)

        async with self.uow:
            users, total = await self.uow.users.search(filters, sort, page_request)
            page = Page(
                items=[UserDTO.from_entity(user) for user in users],
                total=total,
                page=page_request.page,
                page_size=page_request.page_size,
            )

        return Return.ok(ListUsersResponse(users=page.items, pagination=PaginationDTO.from_page(page)))


class ListPendingUsersUseCase:
    """Use case for the approval queue: pending users, oldest first"""

    def __init__(self, uow: UnitOfWork, default_page_size: int = 20, max_page_size: int = 200):
        self.uow = uow
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def execute(
        self, page: Optional[int] = None, limit: Optional[int] = None
    ) -> Result[ListUsersResponse]:
        try:
            page_request = PageRequest.create(
                page, limit, self.default_page_size, self.max_page_size
            )
        except DomainError as e:
            return Return.from_exception(e)

        async with self.uow:
            users, total = await self.uow.users.list_pending(page_request)
            result_page = Page(
                items=[UserDTO.from_entity(user) for user in users],
                total=total,
                page=page_request.page,
                page_size=page_request.page_size,
            )

        return Return.ok(
            ListUsersResponse(
                users=result_page.items, pagination=PaginationDTO.from_page(result_page)
            )
        )
