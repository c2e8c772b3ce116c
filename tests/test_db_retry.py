# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from unittest import mock

from sqlalchemy.exc import OperationalError

from fittrack.database import health


def _connection_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("server closed the connection"))


class FlakyOperation:
    def __init__(self, failures: int, error=None) -> None:
        self.failures = failures
        self.error = error or _connection_error()
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return "ok"


class TestRetryDatabaseOperation(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.sleep = mock.AsyncMock()
        self.ping = mock.AsyncMock(return_value=False)
        patches = [
            mock.patch("fittrack.database.health.asyncio.sleep", self.sleep),
            mock.patch("fittrack.database.health.ping", self.ping),
        ]
        for patcher in patches:
            patcher.start()
            self.addCleanup(patcher.stop)

    async def test_succeeds_after_backoff(self) -> None:
        operation = FlakyOperation(failures=2)
        result = await health.retry_database_operation(operation, max_retries=3, initial_delay=1.0)

        self.assertEqual(result, "ok")
        self.assertEqual(operation.calls, 3)
        self.assertEqual([c.args[0] for c in self.sleep.await_args_list], [1.0, 2.0])
        self.ping.assert_awaited_once()

    async def test_raises_last_error_when_exhausted(self) -> None:
        operation = FlakyOperation(failures=5)
        with self.assertRaises(OperationalError):
            await health.retry_database_operation(operation, max_retries=3, initial_delay=0.5)

        self.assertEqual(operation.calls, 3)
        self.assertEqual([c.args[0] for c in self.sleep.await_args_list], [0.5, 1.0])

    async def test_other_errors_are_not_retried(self) -> None:
        operation = FlakyOperation(failures=1, error=ValueError("bad query"))
        with self.assertRaises(ValueError):
            await health.retry_database_operation(operation, max_retries=3, initial_delay=1.0)

        self.assertEqual(operation.calls, 1)
        self.sleep.assert_not_awaited()

    async def test_first_attempt_success(self) -> None:
        self.ping.return_value = True
        operation = FlakyOperation(failures=0)
        self.assertEqual(await health.retry_database_operation(operation, max_retries=3), "ok")
        self.sleep.assert_not_awaited()


class TestPing(unittest.IsolatedAsyncioTestCase):
    async def test_ping_reports_connection_failure(self) -> None:
        with mock.patch(
            "fittrack.database.health.check_connection",
            mock.AsyncMock(side_effect=_connection_error()),
        ):
            self.assertFalse(await health.ping())

    async def test_ping_ok(self) -> None:
        with mock.patch("fittrack.database.health.check_connection", mock.AsyncMock(return_value=None)):
            self.assertTrue(await health.ping())
