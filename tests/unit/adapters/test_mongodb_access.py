"""Unit tests for ResilientDataAccess over motor-style collections."""
from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import MagicMock, patch

from stackforge.adapters.mongodb import STORE_BREAKER_POLICY, ResilientDataAccess
from stackforge.kernel.errors import CallTimeoutError, CircuitOpenError
from stackforge.kernel.types import Degraded, DegradedReason, Err, Ok
from stackforge.resilience.circuit_breaker import CircuitBreakerRegistry
from stackforge.testing import FakeCollection, ManualClock, RecordingErrorReporter


def make_access(**kwargs: Any) -> tuple[ResilientDataAccess, CircuitBreakerRegistry, RecordingErrorReporter]:
    registry = CircuitBreakerRegistry(clock=ManualClock())
    reporter = RecordingErrorReporter()
    return ResilientDataAccess(registry, reporter, **kwargs), registry, reporter


def users() -> FakeCollection:
    return FakeCollection(
        "users",
        [
            {"_id": "u1", "email": "ada@example.com", "active": True},
            {"_id": "u2", "email": "bob@example.com", "active": False},
        ],
    )


class TestHealthyStore:
    def test_find_one_and_find(self) -> None:
        async def run() -> None:
            data, _, _ = make_access()
            collection = users()
            assert await data.find_one(collection, {"_id": "u1"}) == Ok(collection.documents[0])
            assert await data.find_one(collection, {"_id": "zz"}) == Ok(None)
            result = await data.find(collection, {"active": True})
            assert result.is_ok()
            assert [doc["_id"] for doc in result.unwrap()] == ["u1"]

        asyncio.run(run())

    def test_create_returns_document_with_id(self) -> None:
        async def run() -> None:
            data, _, _ = make_access()
            collection = users()
            created = await data.safe_create(collection, {"email": "eve@example.com"})
            assert created is not None
            assert created["_id"]
            assert created["email"] == "eve@example.com"
            assert len(collection.documents) == 3

        asyncio.run(run())

    def test_update_and_delete(self) -> None:
        async def run() -> None:
            data, _, _ = make_access()
            collection = users()
            updated = await data.safe_update_one(collection, {"_id": "u2"}, {"$set": {"active": True}})
            assert updated.modified_count == 1
            assert collection.documents[1]["active"] is True
            deleted = await data.safe_delete_one(collection, {"_id": "u1"})
            assert deleted.deleted_count == 1

        asyncio.run(run())

    def test_breaker_names_follow_store_operation_entity(self) -> None:
        async def run() -> None:
            data, registry, _ = make_access()
            collection = users()
            await data.find_one(collection, {})
            await data.find(collection, {}, entity="members")
            assert registry.names() == ["mongodb-find_one-users", "mongodb-find-members"]
            assert registry.get("mongodb-find_one-users").policy == STORE_BREAKER_POLICY

        asyncio.run(run())


class TestDegradedStore:
    def test_safe_wrappers_return_empty_answers_once_per_call(self) -> None:
        async def run() -> None:
            data, _, reporter = make_access()
            collection = users()
            collection.error = ConnectionError("mongo down")

            assert await data.safe_find(collection, {}) == []
            assert await data.safe_find_one(collection, {"_id": "u1"}) is None
            assert await data.safe_create(collection, {"email": "x"}) is None
            assert await data.safe_update_one(collection, {"_id": "u1"}, {"$set": {"a": 1}}) is None
            assert await data.safe_delete_one(collection, {"_id": "u1"}) is None

            assert collection.calls == {
                "find": 1,
                "find_one": 1,
                "insert_one": 1,
                "update_one": 1,
                "delete_one": 1,
            }
            assert len(reporter.reports) == 5
            assert {ctx["context"] for _, ctx in reporter.reports} == {
                "mongodb-find-users",
                "mongodb-find_one-users",
                "mongodb-create-users",
                "mongodb-update_one-users",
                "mongodb-delete_one-users",
            }

        asyncio.run(run())

    def test_result_distinguishes_store_error_from_empty(self) -> None:
        async def run() -> None:
            data, _, _ = make_access()
            collection = users()
            collection.error = ConnectionError("mongo down")
            result = await data.find(collection, {"active": True})
            assert isinstance(result, Err)
            assert result.error.reason is DegradedReason.STORE_ERROR
            assert isinstance(result.error.error, ConnectionError)

        asyncio.run(run())

    def test_timeout_is_reported_as_timeout(self) -> None:
        async def run() -> None:
            data, _, reporter = make_access(policy=STORE_BREAKER_POLICY.with_overrides(timeout_seconds=0.05))
            collection = users()
            collection.delay = 1.0
            result = await data.find_one(collection, {"_id": "u1"})
            assert isinstance(result, Err)
            assert result.error.reason is DegradedReason.TIMEOUT
            assert isinstance(reporter.errors[0], CallTimeoutError)

        asyncio.run(run())

    def test_open_circuit_skips_store_and_reporter(self) -> None:
        async def run() -> None:
            data, _, reporter = make_access()
            collection = users()
            collection.error = ConnectionError("mongo down")
            for _ in range(STORE_BREAKER_POLICY.volume_threshold):
                await data.safe_find_one(collection, {})
            reporter.clear()

            result = await data.find_one(collection, {})
            assert isinstance(result, Err)
            assert result.error == Degraded(DegradedReason.CIRCUIT_OPEN, result.error.error)
            assert isinstance(result.error.error, CircuitOpenError)
            assert collection.calls["find_one"] == STORE_BREAKER_POLICY.volume_threshold
            assert reporter.reports == []

        asyncio.run(run())


class TestConnectDatabase:
    def test_uses_default_database_and_selection_timeout(self) -> None:
        import stackforge.adapters.mongodb.client as client_mod

        motor = MagicMock()
        with patch.object(client_mod, "_require_motor", return_value=motor):
            db = client_mod.connect_database("mongodb://localhost/app")

        motor.AsyncIOMotorClient.assert_called_once_with(
            "mongodb://localhost/app", serverSelectionTimeoutMS=5_000
        )
        motor.AsyncIOMotorClient.return_value.get_default_database.assert_called_once_with("stackforge")
        assert db is motor.AsyncIOMotorClient.return_value.get_default_database.return_value

    def test_explicit_database_name(self) -> None:
        import stackforge.adapters.mongodb.client as client_mod

        motor = MagicMock()
        with patch.object(client_mod, "_require_motor", return_value=motor):
            client_mod.connect_database("mongodb://localhost", "archives")

        motor.AsyncIOMotorClient.return_value.__getitem__.assert_called_once_with("archives")
