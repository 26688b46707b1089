from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from session_service.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        pass

    @abstractmethod
    async def get_by_entity_id(self, entity_id: UUID) -> List[AuditEvent]:
        """Get audit events for an entity, oldest first"""
        pass
