"""Abstract base class for group stores."""

from abc import ABC, abstractmethod

from eurorank.models import Group


class StoreError(Exception):
    """Raised when a group store cannot complete an operation."""
    pass


class GroupNotFound(StoreError):
    """Raised when a group id does not exist in the store."""
    pass


class GroupStore(ABC):
    """Abstract base class for group storage.

    A store holds group records and supports read-all, read-one and upsert.
    The ranking engine never talks to a store; the orchestration layer in
    eurorank/flow.py does. Stores are registered via the @register_store
    decorator in eurorank/stores/__init__.py.
    """

    @abstractmethod
    def list_groups(self) -> list[Group]:
        """Return every group in the store."""
        pass

    def get_group(self, group_id: str) -> Group:
        """Return one group.

        Raises:
            GroupNotFound: If no group has this id
        """
        for group in self.list_groups():
            if group.id == group_id:
                return group
        raise GroupNotFound(f"Group not found: {group_id}")

    @abstractmethod
    def upsert_group(self, group: Group) -> Group:
        """Insert or replace a group, returning the stored record."""
        pass

    @abstractmethod
    def create_group(self, name: str, host_id: str) -> Group:
        """Create an empty group hosted by host_id.

        Raises:
            StoreError: If name or host_id is empty
        """
        pass

    @abstractmethod
    def delete_group(self, group_id: str) -> Group:
        """Delete a group, returning the deleted record.

        Raises:
            GroupNotFound: If no group has this id
        """
        pass
