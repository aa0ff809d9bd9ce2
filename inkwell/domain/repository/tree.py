"""Generic store contract for parent-linked records.

Categories and comments are both trees stored as flat records with a
nullable parent reference. This interface captures what tree walks need
from a store: point lookups and indexed "children of X" queries.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

NodeIdT = TypeVar("NodeIdT")
NodeT = TypeVar("NodeT")


class TreeNodeRepository(ABC, Generic[NodeIdT, NodeT]):
    """Repository for entities with a nullable ``parent_id``.

    Implementations never hold pointers between records; every hop in a
    walk is a separate lookup so walks can be bounded by their callers.
    """

    @abstractmethod
    async def find_by_id(self, node_id: NodeIdT) -> Optional[NodeT]:
        """Find a node by ID.

        Args:
            node_id: The node's unique identifier

        Returns:
            The node if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_children(self, parent_id: Optional[NodeIdT]) -> List[NodeT]:
        """Find direct children of a node.

        Args:
            parent_id: Parent ID, or None for root nodes

        Returns:
            Direct children in the store's natural sibling order
        """
        pass

    @abstractmethod
    async def count_children(self, parent_id: NodeIdT) -> int:
        """Count direct children of a node."""
        pass

    @abstractmethod
    async def save(self, node: NodeT) -> NodeT:
        """Save a node (create or update).

        Args:
            node: The node to save

        Returns:
            The saved node
        """
        pass

    @abstractmethod
    async def delete(self, node_id: NodeIdT) -> None:
        """Hard delete a node.

        Children are not touched; callers guard or accept orphans.
        """
        pass
