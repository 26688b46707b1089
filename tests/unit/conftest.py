import pytest
from unittest.mock import AsyncMock, MagicMock

REPOSITORIES = (
    "users",
    "conversations",
    "messages",
    "proposals",
    "sessions",
    "feedback",
    "audit_events",
)


def _passthrough(entity):
    return entity


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # create/update hand back the entity they were given
    for name in REPOSITORIES:
        repo = AsyncMock()
        repo.create.side_effect = _passthrough
        repo.update.side_effect = _passthrough
        setattr(uow, name, repo)

    # Absence lookups default to "nothing found"
    uow.proposals.get_open_by_conversation.return_value = None
    uow.sessions.get_active_by_conversation.return_value = None
    uow.feedback.get_by_session_id.return_value = None

    return uow
