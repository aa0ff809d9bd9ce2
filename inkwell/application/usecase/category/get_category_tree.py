"""Get category tree use case."""

from pydantic import BaseModel

from inkwell.domain.service import CategoryService, CategoryTreeNode
from inkwell.domain.value import CategoryStatus

from .common import CategoryTreeNodeResponse


class GetCategoryTreeRequest(BaseModel):
    """Get category tree request."""

    status: CategoryStatus = CategoryStatus.ACTIVE
    include_empty: bool = True


class GetCategoryTreeResponse(BaseModel):
    """Get category tree response."""

    categories: list[CategoryTreeNodeResponse]
    total_nodes: int


class GetCategoryTreeUseCase:
    """Use case for the nested category tree used by navigation menus.

    Every category with the requested status is a top-level entry, with
    its subcategories nested below it.
    """

    def __init__(self, category_service: CategoryService) -> None:
        """Initialize get category tree use case.

        Args:
            category_service: Category domain service
        """
        self.category_service = category_service

    async def execute(self, request: GetCategoryTreeRequest) -> GetCategoryTreeResponse:
        """Execute get category tree flow.

        Args:
            request: Status filter and whether to keep empty categories

        Returns:
            Tree nodes and the number of nodes across all levels
        """
        nodes = await self.category_service.build_tree(
            status=request.status, include_empty=request.include_empty
        )

        def count_nodes(node: CategoryTreeNode) -> int:
            return 1 + sum(count_nodes(child) for child in node.subcategories)

        return GetCategoryTreeResponse(
            categories=[CategoryTreeNodeResponse.from_domain(n) for n in nodes],
            total_nodes=sum(count_nodes(n) for n in nodes),
        )
