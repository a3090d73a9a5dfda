"""Process-local group store."""

import copy
import logging
import uuid

from eurorank.models import Group, now_ms
from eurorank.stores import register_store
from eurorank.stores.base import GroupNotFound, GroupStore, StoreError

logger = logging.getLogger(__name__)


@register_store("memory")
class InMemoryGroupStore(GroupStore):
    """Keeps groups in a list for the lifetime of the process.

    Records are copied on the way in and out, so callers never share a
    Group object with the store.
    """

    def __init__(self, groups: list[Group] | None = None):
        self._groups: list[Group] = [copy.deepcopy(g) for g in groups or []]

    def list_groups(self) -> list[Group]:
        return [copy.deepcopy(g) for g in self._groups]

    def get_group(self, group_id: str) -> Group:
        return copy.deepcopy(self._find(group_id))

    def upsert_group(self, group: Group) -> Group:
        stored = copy.deepcopy(group)
        stored.touch()
        for i, existing in enumerate(self._groups):
            if existing.id == group.id:
                self._groups[i] = stored
                logger.info("Updated group %s", group.id)
                break
        else:
            self._groups.append(stored)
            logger.info("Inserted group %s", group.id)
        return copy.deepcopy(stored)

    def create_group(self, name: str, host_id: str) -> Group:
        if not name:
            raise StoreError("Group name is required")
        if not host_id:
            raise StoreError("Host ID is required")

        created = now_ms()
        group = Group(
            id=str(uuid.uuid4()),
            name=name,
            host_id=host_id,
            created_at=created,
            last_updated=created,
        )
        self._groups.append(group)
        logger.info("Created group %s (%s) for host %s", group.id, name, host_id)
        return copy.deepcopy(group)

    def delete_group(self, group_id: str) -> Group:
        group = self._find(group_id)
        self._groups.remove(group)
        logger.info("Deleted group %s", group_id)
        return group

    def _find(self, group_id: str) -> Group:
        for group in self._groups:
            if group.id == group_id:
                return group
        raise GroupNotFound(f"Group not found: {group_id}")
