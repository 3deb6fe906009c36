"""Unit tests for UserService.

Covers result pass-through, the start/completion log pair on success, and
the single error record plus unchanged re-raise on repository failure.
"""

import asyncio
import sqlite3
from unittest.mock import ANY, AsyncMock, Mock, call
from uuid import uuid4

import pytest

from src.application.services import LoggerAdapterProtocol, UserService
from src.domain.entities import User
from tests.fixtures.loggers import RecordingLoggerAdapter


@pytest.fixture
def user_repository():
    """Repository double with async operations."""
    return AsyncMock()


@pytest.fixture
def logger():
    """Logger adapter double restricted to the adapter protocol."""
    return Mock(spec=LoggerAdapterProtocol)


@pytest.fixture
def service(user_repository, logger):
    """Service under test."""
    return UserService(user_repository, logger)


@pytest.fixture
def sqlite_error():
    """Storage-layer error raised by the repository."""
    return sqlite3.OperationalError("Something went wrong")


def _elapsed_argument(logger, template):
    """Return the trailing elapsed-time argument of the completion record."""
    (completion,) = [
        c for c in logger.log_information.call_args_list if c.args[0] == template
    ]
    return completion.args[-1]


class TestGetAll:
    """Test UserService.get_all."""

    @pytest.mark.asyncio
    async def test_returns_empty_list_when_no_users_exist(self, service, user_repository):
        user_repository.get_all.return_value = []

        result = await service.get_all()

        assert result == []

    @pytest.mark.asyncio
    async def test_returns_users_when_users_exist(
        self, service, user_repository, robert_bowes, elise_blin
    ):
        expected_users = [robert_bowes, elise_blin]
        user_repository.get_all.return_value = expected_users

        result = await service.get_all()

        assert {(u.id, u.full_name) for u in result} == {
            (robert_bowes.id, "Robert Bowes"),
            (elise_blin.id, "Elise Blin"),
        }
        assert result is expected_users

    @pytest.mark.asyncio
    async def test_logs_messages_when_invoked(self, service, user_repository, logger):
        user_repository.get_all.return_value = []

        await service.get_all()

        assert logger.log_information.call_args_list == [
            call("Retrieving all users"),
            call("All users retrieved in {0}ms", ANY),
        ]
        elapsed = _elapsed_argument(logger, "All users retrieved in {0}ms")
        assert isinstance(elapsed, int)
        assert elapsed >= 0
        logger.log_error.assert_not_called()

    @pytest.mark.asyncio
    async def test_logs_message_and_exception_when_exception_is_thrown(
        self, service, user_repository, logger, sqlite_error
    ):
        user_repository.get_all.side_effect = sqlite_error

        with pytest.raises(sqlite3.OperationalError, match="Something went wrong") as exc_info:
            await service.get_all()

        assert exc_info.value is sqlite_error
        logger.log_error.assert_called_once_with(
            sqlite_error, "Something went wrong while retrieving all users"
        )
        logger.log_information.assert_called_once_with("Retrieving all users")


class TestGetById:
    """Test UserService.get_by_id."""

    @pytest.mark.asyncio
    async def test_returns_a_user_when_a_user_exists(self, service, user_repository):
        user = User(id=uuid4(), full_name="Elise Blin")
        user_repository.get_by_id.return_value = user

        response = await service.get_by_id(user.id)

        assert response == user
        user_repository.get_by_id.assert_awaited_once_with(user.id)

    @pytest.mark.asyncio
    async def test_returns_none_when_user_does_not_exist(self, service, user_repository):
        user_repository.get_by_id.return_value = None

        response = await service.get_by_id(uuid4())

        assert response is None

    @pytest.mark.asyncio
    async def test_logs_messages_when_invoked(self, service, user_repository, logger):
        user_id = uuid4()
        user_repository.get_by_id.return_value = None

        await service.get_by_id(user_id)

        assert logger.log_information.call_args_list == [
            call("Retrieving user with id: {0}", user_id),
            call("User with id {0} retrieved in {1}ms", user_id, ANY),
        ]
        assert _elapsed_argument(logger, "User with id {0} retrieved in {1}ms") >= 0
        logger.log_error.assert_not_called()

    @pytest.mark.asyncio
    async def test_logs_message_and_exception_when_exception_is_thrown(
        self, service, user_repository, logger, sqlite_error
    ):
        user_id = uuid4()
        user_repository.get_by_id.side_effect = sqlite_error

        with pytest.raises(sqlite3.OperationalError, match="Something went wrong") as exc_info:
            await service.get_by_id(user_id)

        assert exc_info.value is sqlite_error
        logger.log_error.assert_called_once_with(
            sqlite_error,
            "Something went wrong while retrieving user with id {0}",
            user_id,
        )
        logger.log_information.assert_called_once_with(
            "Retrieving user with id: {0}", user_id
        )


class TestCreate:
    """Test UserService.create."""

    @pytest.mark.asyncio
    async def test_creates_a_user_when_details_are_valid(
        self, service, user_repository, user
    ):
        user_repository.create.return_value = True

        result = await service.create(user)

        assert result is True
        user_repository.create.assert_awaited_once_with(user)

    @pytest.mark.asyncio
    async def test_returns_repository_false_verbatim(self, service, user_repository, user):
        user_repository.create.return_value = False

        result = await service.create(user)

        assert result is False

    @pytest.mark.asyncio
    async def test_logs_messages_when_invoked(self, service, user_repository, logger, user):
        user_repository.create.return_value = True

        await service.create(user)

        assert logger.log_information.call_args_list == [
            call("Creating user with id {0} and name: {1}", user.id, user.full_name),
            call("User with id {0} created in {1}ms", user.id, ANY),
        ]
        assert _elapsed_argument(logger, "User with id {0} created in {1}ms") >= 0

    @pytest.mark.asyncio
    async def test_logs_message_and_exception_when_exception_is_thrown(
        self, service, user_repository, logger, user, sqlite_error
    ):
        user_repository.create.side_effect = sqlite_error

        with pytest.raises(sqlite3.OperationalError, match="Something went wrong") as exc_info:
            await service.create(user)

        assert exc_info.value is sqlite_error
        logger.log_information.assert_called_once_with(
            "Creating user with id {0} and name: {1}", user.id, user.full_name
        )
        logger.log_error.assert_called_once_with(
            sqlite_error, "Something went wrong while creating a user"
        )

    @pytest.mark.asyncio
    async def test_does_not_modify_the_user(self, service, user_repository, user):
        user_repository.create.return_value = True
        original = User(id=user.id, full_name=user.full_name)

        await service.create(user)

        assert user == original
        assert user_repository.create.await_args.args[0] is user


class TestDeleteById:
    """Test UserService.delete_by_id."""

    @pytest.mark.asyncio
    async def test_deletes_a_user_when_user_exists(self, service, user_repository):
        user_repository.delete_by_id.return_value = True

        result = await service.delete_by_id(uuid4())

        assert result is True

    @pytest.mark.asyncio
    async def test_does_not_delete_a_user_when_user_does_not_exist(
        self, service, user_repository, logger
    ):
        non_existent_user_id = uuid4()
        user_repository.delete_by_id.return_value = False

        result = await service.delete_by_id(non_existent_user_id)

        assert result is False
        # False is a valid outcome, so the success path is still logged
        assert logger.log_information.call_count == 2
        logger.log_error.assert_not_called()

    @pytest.mark.asyncio
    async def test_logs_messages_when_invoked(self, service, user_repository, logger, user):
        user_repository.delete_by_id.return_value = True

        await service.delete_by_id(user.id)

        assert logger.log_information.call_args_list == [
            call("Deleting user with id: {0}", user.id),
            call("User with id {0} deleted in {1}ms", user.id, ANY),
        ]
        assert _elapsed_argument(logger, "User with id {0} deleted in {1}ms") >= 0

    @pytest.mark.asyncio
    async def test_logs_message_and_exception_when_exception_is_thrown(
        self, service, user_repository, logger, user, sqlite_error
    ):
        user_repository.delete_by_id.side_effect = sqlite_error

        with pytest.raises(sqlite3.OperationalError, match="Something went wrong") as exc_info:
            await service.delete_by_id(user.id)

        assert exc_info.value is sqlite_error
        logger.log_information.assert_called_once_with("Deleting user with id: {0}", user.id)
        logger.log_error.assert_called_once_with(
            sqlite_error,
            "Something went wrong while deleting user with id {0}",
            user.id,
        )


class TestLogOrdering:
    """Record ordering around the repository call."""

    @pytest.fixture
    def recorder(self):
        return RecordingLoggerAdapter()

    @pytest.mark.asyncio
    async def test_start_record_precedes_repository_call(self, user_repository, recorder):
        templates_seen_by_repository = []

        async def get_all():
            templates_seen_by_repository.extend(recorder.templates)
            return []

        user_repository.get_all.side_effect = get_all
        service = UserService(user_repository, recorder)

        await service.get_all()

        assert templates_seen_by_repository == ["Retrieving all users"]
        assert recorder.templates == [
            "Retrieving all users",
            "All users retrieved in {0}ms",
        ]

    @pytest.mark.asyncio
    async def test_error_record_replaces_completion_record(
        self, user_repository, recorder, sqlite_error
    ):
        user_id = uuid4()
        user_repository.delete_by_id.side_effect = sqlite_error
        service = UserService(user_repository, recorder)

        with pytest.raises(sqlite3.OperationalError):
            await service.delete_by_id(user_id)

        assert [r.level for r in recorder.records] == ["information", "error"]
        error_record = recorder.records[-1]
        assert error_record.error is sqlite_error
        assert error_record.args == (user_id,)

    @pytest.mark.asyncio
    async def test_elapsed_time_covers_repository_call(self, user_repository, recorder):
        async def slow_get_by_id(_user_id):
            await asyncio.sleep(0.02)
            return None

        user_repository.get_by_id.side_effect = slow_get_by_id
        service = UserService(user_repository, recorder)
        user_id = uuid4()

        await service.get_by_id(user_id)

        completion = recorder.records[-1]
        assert completion.args[0] == user_id
        assert completion.args[1] >= 15

    @pytest.mark.asyncio
    async def test_concurrent_calls_each_emit_their_own_pair(self, user_repository, recorder):
        async def get_by_id(user_id):
            await asyncio.sleep(0)
            return User(id=user_id, full_name="Concurrent User")

        user_repository.get_by_id.side_effect = get_by_id
        service = UserService(user_repository, recorder)
        user_ids = [uuid4() for _ in range(5)]

        results = await asyncio.gather(*(service.get_by_id(uid) for uid in user_ids))

        assert [r.id for r in results] == user_ids
        for user_id in user_ids:
            own = [r for r in recorder.records if r.args and r.args[0] == user_id]
            assert [r.template for r in own] == [
                "Retrieving user with id: {0}",
                "User with id {0} retrieved in {1}ms",
            ]

    @pytest.mark.asyncio
    async def test_cancellation_is_not_logged_as_error(self, user_repository, recorder):
        user_repository.get_all.side_effect = asyncio.CancelledError()
        service = UserService(user_repository, recorder)

        with pytest.raises(asyncio.CancelledError):
            await service.get_all()

        assert recorder.of_level("error") == []
