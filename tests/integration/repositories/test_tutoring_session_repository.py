import asyncio
from datetime import timedelta

import pytest
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from session_service.adapter.repositories.tutoring_session_repository import (
    TutoringSessionRepository,
)
from session_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from session_service.app.repositories.errors import ConcurrentUpdateError
from session_service.app.use_cases.lifecycle import SweepSessionsUseCase
from session_service.domain.base import utcnow
from session_service.domain.entities import SessionStatus


async def _statuses(db_session, *session_ids):
    db_session.expire_all()
    repo = TutoringSessionRepository(db_session)
    return [SessionStatus((await repo.get_by_id(sid)).status) for sid in session_ids]


@pytest.mark.asyncio
async def test_sweep_applies_each_rule_once(db_session, insert_session):
    # Arrange
    now = utcnow()
    soon = await insert_session(timedelta(minutes=5))
    later = await insert_session(timedelta(hours=1))
    running = await insert_session(
        timedelta(minutes=-10), status=SessionStatus.STARTING_SOON
    )
    overdue = await insert_session(
        timedelta(minutes=-61), status=SessionStatus.IN_PROGRESS
    )
    awaiting_answer = await insert_session(
        timedelta(minutes=5), status=SessionStatus.RESCHEDULE_REQUESTED
    )

    # Act
    first = await SweepSessionsUseCase(SqlAlchemyUnitOfWork(db_session)).execute(now=now)
    second = await SweepSessionsUseCase(SqlAlchemyUnitOfWork(db_session)).execute(now=now)

    # Assert
    assert (first.starting_soon, first.in_progress, first.expired) == (1, 1, 1)
    assert second.total == 0
    assert await _statuses(db_session, soon, later, running, overdue, awaiting_answer) == [
        SessionStatus.STARTING_SOON,
        SessionStatus.SCHEDULED,
        SessionStatus.IN_PROGRESS,
        SessionStatus.EXPIRED,
        SessionStatus.RESCHEDULE_REQUESTED,
    ]


@pytest.mark.asyncio
async def test_unattended_session_runs_its_course(db_session, insert_session):
    now = utcnow()
    session_id = await insert_session(timedelta(minutes=5), minutes=30)

    for tick in (now, now + timedelta(minutes=6), now + timedelta(minutes=36)):
        await SweepSessionsUseCase(SqlAlchemyUnitOfWork(db_session)).execute(now=tick)

    db_session.expire_all()
    session = await TutoringSessionRepository(db_session).get_by_id(session_id)
    assert session.status == SessionStatus.EXPIRED
    assert session.started_at == now + timedelta(minutes=6)
    assert session.expired_at == now + timedelta(minutes=36)
    assert session.version == 4


@pytest.mark.asyncio
async def test_sweep_skips_cancelled_sessions(db_session, insert_session):
    now = utcnow()
    cancelled = await insert_session(timedelta(minutes=5), status=SessionStatus.CANCELLED)

    result = await SweepSessionsUseCase(SqlAlchemyUnitOfWork(db_session)).execute(now=now)

    assert result.total == 0
    assert await _statuses(db_session, cancelled) == [SessionStatus.CANCELLED]


@pytest.mark.asyncio
async def test_stale_write_raises_concurrent_update(engine, insert_session):
    # Arrange
    session_id = await insert_session(timedelta(days=1))
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with Session() as first, Session() as second:
        first_repo = TutoringSessionRepository(first)
        second_repo = TutoringSessionRepository(second)
        mine = await first_repo.get_by_id(session_id)
        theirs = await second_repo.get_by_id(session_id)

        # Act
        mine.status = SessionStatus.CANCELLED
        await first_repo.update(mine)
        await first.commit()

        theirs.status = SessionStatus.RESCHEDULE_REQUESTED

        # Assert
        with pytest.raises(ConcurrentUpdateError):
            await second_repo.update(theirs)


@pytest.mark.asyncio
async def test_overlapping_sweeps_move_each_session_once(engine, db_session, insert_session):
    # Arrange
    now = utcnow()
    soon = await insert_session(timedelta(minutes=5))
    running = await insert_session(
        timedelta(minutes=-10), status=SessionStatus.STARTING_SOON
    )
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def sweep():
        async with Session() as session:
            return await SweepSessionsUseCase(SqlAlchemyUnitOfWork(session)).execute(
                now=now
            )

    # Act
    results = await asyncio.gather(sweep(), sweep())

    # Assert
    assert sorted(result.total for result in results) == [0, 2]
    assert sum(result.starting_soon for result in results) == 1
    assert sum(result.in_progress for result in results) == 1
    assert await _statuses(db_session, soon, running) == [
        SessionStatus.STARTING_SOON,
        SessionStatus.IN_PROGRESS,
    ]
