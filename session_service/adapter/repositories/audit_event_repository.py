from typing import List
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from session_service.app.repositories.audit_event_repository import IAuditEventRepository
from session_service.domain.entities import AuditEvent


class AuditEventRepository(IAuditEventRepository):
    """AuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        self.session.add(audit_event)
        await self.session.flush()
        await self.session.refresh(audit_event)
        return audit_event

    async def get_by_entity_id(self, entity_id: UUID) -> List[AuditEvent]:
        """Get audit events for an entity, oldest first"""
        stmt = (
            select(AuditEvent)
            .where(AuditEvent.entity_id == entity_id)
            .order_by(AuditEvent.created_at.asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())
