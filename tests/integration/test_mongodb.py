"""Integration tests for ResilientDataAccess against a real MongoDB.

Run with::

    pytest -m integration tests/integration/test_mongodb.py -v

Requires Docker (used automatically via ``testcontainers``).
"""

from __future__ import annotations

import asyncio

import pytest

from stackforge.adapters.mongodb import ResilientDataAccess, connect_database
from stackforge.resilience.circuit_breaker import CircuitBreakerRegistry
from stackforge.testing import RecordingErrorReporter

MongoDbContainer = pytest.importorskip("testcontainers.mongodb").MongoDbContainer


@pytest.mark.integration
class TestResilientDataAccessIntegration:
    def test_crud_round_trip(self) -> None:
        with MongoDbContainer("mongo:7") as container:
            url = container.get_connection_url()

            async def run() -> None:
                db = connect_database(url, "stackforge_it")
                reporter = RecordingErrorReporter()
                data = ResilientDataAccess(CircuitBreakerRegistry(), reporter)

                created = await data.safe_create(db.api_keys, {"key": "abc", "active": True})
                assert created is not None and "_id" in created
                found = await data.safe_find_one(db.api_keys, {"key": "abc"})
                assert found is not None and found["active"] is True
                await data.safe_update_one(db.api_keys, {"key": "abc"}, {"$set": {"active": False}})
                assert await data.safe_find(db.api_keys, {"active": True}) == []
                await data.safe_delete_one(db.api_keys, {"key": "abc"})
                assert await data.safe_find_one(db.api_keys, {"key": "abc"}) is None
                assert reporter.reports == []
                db.client.close()

            asyncio.run(run())
