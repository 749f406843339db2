from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.shared_dtos import PaginationDTO
from src.domain import DomainError
from src.domain.query import Page, PageRequest, ProjectFilter, ProjectSort, parse_sort
from .dtos import ListProjectsQuery, ListProjectsResponse, ProjectDTO


class ListProjectsUseCase:
    """
    Use case for the admin project listing

    Filters combine with AND; totals always describe the filtered set,
    even when the requested page is past the end.
    """

    def __init__(self, uow: UnitOfWork, default_page_size: int = 50, max_page_size: int = 200):
        self.uow = uow
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def execute(self, query: ListProjectsQuery) -> Result[ListProjectsResponse]:
        """
        Execute the list projects use case

        Returns:
            Result[ListProjectsResponse]: One page of projects plus pagination,
            or VALIDATION_ERROR / INVALID_PAGINATION for bad criteria
        """
        try:
            filters = ProjectFilter.create(
                search=query.search,
                status=query.status,
                category=query.category,
                owner_id=query.owner_id,
                created_from=query.created_from,
                created_to=query.created_to,
            )
            sort = parse_sort(ProjectSort, query.sort)
            page_request = PageRequest.create(
                query.page, query.limit, self.default_page_size, self.max_page_size
            )
        except DomainError as e:
            return Return.from_exception(e)

        async with self.uow:
            rows, total = await self.uow.projects.search(filters, sort, page_request)
            page = Page(
                items=[ProjectDTO.from_entity(project, owner) for project, owner in rows],
                total=total,
                page=page_request.page,
                page_size=page_request.page_size,
            )

        return Return.ok(
            ListProjectsResponse(projects=page.items, pagination=PaginationDTO.from_page(page))
        )
