from datetime import timedelta

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from session_service.adapter.repositories.conversation_repository import (
    ConversationRepository,
)
from session_service.adapter.repositories.user_repository import UserRepository
from session_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from session_service.api.utils.jwt import generate_jwt
from session_service.depends import get_unit_of_work
from session_service.domain.base import utcnow
from session_service.domain.entities import (
    Conversation,
    PricingPlan,
    SessionStatus,
    TutoringSession,
    User,
    UserRole,
)
from tests.fixtures.json_loader import TestDataLoader


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    from session_service.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def users(db_session, test_data):
    """Seed every user in test_data.json; returns name -> (id, role)"""
    seeded = {}
    for name, attrs in test_data.users().items():
        plan = attrs.pop("current_plan", None)
        user = User(
            role=UserRole(attrs.pop("role")),
            current_plan=PricingPlan(plan) if plan else None,
            **attrs,
        )
        user = await UserRepository(db_session).create(user)
        seeded[name] = (user.id, user.role.value)
    await db_session.commit()
    return seeded


@pytest_asyncio.fixture
async def conversation_id(db_session, users):
    """Conversation between the verified tutor and the REGULAR-plan student"""
    conversation = Conversation(
        participant_ids=[str(users["tutor"][0]), str(users["student"][0])]
    )
    conversation = await ConversationRepository(db_session).create(conversation)
    await db_session.commit()
    return conversation.id


@pytest_asyncio.fixture
def auth_headers(users):
    def _headers(name: str) -> dict:
        user_id, role = users[name]
        return {"Authorization": f"Bearer {generate_jwt(user_id, role)}"}

    return _headers


@pytest_asyncio.fixture
def admin_headers():
    return {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}


@pytest_asyncio.fixture
def insert_session(db_session, users, conversation_id):
    """Book a session directly, bypassing the proposal flow"""

    async def _insert(start_in: timedelta, minutes: int = 60, **overrides):
        start = utcnow() + start_in
        session = TutoringSession(
            student_id=users["student"][0],
            tutor_id=users["tutor"][0],
            subject=overrides.pop("subject", "Algebra II"),
            start_time=start,
            end_time=start + timedelta(minutes=minutes),
            duration=minutes,
            price_per_hour=28.0,
            total_price=round(28.0 * minutes / 60, 2),
            status=overrides.pop("status", SessionStatus.SCHEDULED),
            conversation_id=conversation_id,
            **overrides,
        )
        db_session.add(session)
        await db_session.commit()
        return session.id

    return _insert
