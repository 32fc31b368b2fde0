"""MongoDB adapter — ResilientDataAccess.

Wraps motor collection calls in circuit breakers so an unreachable database
degrades to empty answers instead of failing requests.

Two layers are offered:

* ``find_one`` / ``find`` / ``create`` / ``update_one`` / ``delete_one``
  return a :data:`~stackforge.kernel.types.Result`: ``Ok(value)`` when the
  store answered, ``Err(Degraded(...))`` when it could not. Callers that
  must tell "not found" from "store down" use these.
* ``safe_*`` return the value or a fixed empty answer (``None`` or ``[]``),
  which is ambiguous by construction.

Usage::

    data = ResilientDataAccess(registry, reporter)
    key = await data.safe_find_one(db.api_keys, {"key": raw_key})
    match await data.find(db.users, {"active": True}):
        case Ok(value=users): ...
        case Err(error=degraded): ...
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from stackforge.kernel.errors import CallTimeoutError, CircuitOpenError
from stackforge.kernel.types import Degraded, DegradedReason, Err, Ok, Result
from stackforge.observability.errors import ErrorReporter, LoggingErrorReporter
from stackforge.resilience.circuit_breaker import CircuitBreakerPolicy, CircuitBreakerRegistry

logger = logging.getLogger(__name__)

STORE_BREAKER_POLICY = CircuitBreakerPolicy(
    timeout_seconds=5.0,
    error_threshold_percentage=30.0,
    reset_timeout_seconds=10.0,
)


class ResilientDataAccess:
    """Circuit-breaker guarded CRUD over motor-style collections.

    Breakers are named ``<store>-<operation>-<entity>``; the entity is the
    collection name unless *entity* is passed explicitly. Nothing is
    retried beyond what the breaker does and nothing is re-raised.
    """

    def __init__(
        self,
        registry: CircuitBreakerRegistry,
        reporter: ErrorReporter | None = None,
        *,
        store: str = "mongodb",
        policy: CircuitBreakerPolicy = STORE_BREAKER_POLICY,
    ) -> None:
        self._registry = registry
        self._reporter = reporter if reporter is not None else LoggingErrorReporter()
        self._store = store
        self._policy = policy

    # ------------------------------------------------------------------
    # Result-returning operations
    # ------------------------------------------------------------------

    async def find_one(
        self,
        collection: Any,
        query: dict[str, Any],
        projection: dict[str, Any] | None = None,
        *,
        entity: str | None = None,
    ) -> Result[dict[str, Any] | None, Degraded]:
        async def op() -> dict[str, Any] | None:
            return await collection.find_one(query, projection)

        return await self._run("find_one", collection, entity, op)

    async def find(
        self,
        collection: Any,
        query: dict[str, Any],
        projection: dict[str, Any] | None = None,
        *,
        entity: str | None = None,
        **options: Any,
    ) -> Result[list[dict[str, Any]], Degraded]:
        async def op() -> list[dict[str, Any]]:
            cursor = collection.find(query, projection, **options)
            return await cursor.to_list(length=None)

        return await self._run("find", collection, entity, op)

    async def create(
        self,
        collection: Any,
        document: dict[str, Any],
        *,
        entity: str | None = None,
    ) -> Result[dict[str, Any] | None, Degraded]:
        async def op() -> dict[str, Any]:
            doc = dict(document)
            result = await collection.insert_one(doc)
            doc.setdefault("_id", result.inserted_id)
            return doc

        return await self._run("create", collection, entity, op)

    async def update_one(
        self,
        collection: Any,
        query: dict[str, Any],
        update: dict[str, Any],
        *,
        entity: str | None = None,
        **options: Any,
    ) -> Result[Any, Degraded]:
        async def op() -> Any:
            return await collection.update_one(query, update, **options)

        return await self._run("update_one", collection, entity, op)

    async def delete_one(
        self,
        collection: Any,
        query: dict[str, Any],
        *,
        entity: str | None = None,
    ) -> Result[Any, Degraded]:
        async def op() -> Any:
            return await collection.delete_one(query)

        return await self._run("delete_one", collection, entity, op)

    # ------------------------------------------------------------------
    # Empty-on-failure wrappers
    # ------------------------------------------------------------------

    async def safe_find_one(
        self,
        collection: Any,
        query: dict[str, Any],
        projection: dict[str, Any] | None = None,
        *,
        entity: str | None = None,
    ) -> dict[str, Any] | None:
        return (await self.find_one(collection, query, projection, entity=entity)).unwrap_or(None)

    async def safe_find(
        self,
        collection: Any,
        query: dict[str, Any],
        projection: dict[str, Any] | None = None,
        *,
        entity: str | None = None,
        **options: Any,
    ) -> list[dict[str, Any]]:
        return (await self.find(collection, query, projection, entity=entity, **options)).unwrap_or([])

    async def safe_create(
        self,
        collection: Any,
        document: dict[str, Any],
        *,
        entity: str | None = None,
    ) -> dict[str, Any] | None:
        return (await self.create(collection, document, entity=entity)).unwrap_or(None)

    async def safe_update_one(
        self,
        collection: Any,
        query: dict[str, Any],
        update: dict[str, Any],
        *,
        entity: str | None = None,
        **options: Any,
    ) -> Any:
        return (await self.update_one(collection, query, update, entity=entity, **options)).unwrap_or(None)

    async def safe_delete_one(
        self,
        collection: Any,
        query: dict[str, Any],
        *,
        entity: str | None = None,
    ) -> Any:
        return (await self.delete_one(collection, query, entity=entity)).unwrap_or(None)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def breaker_name(self, operation: str, collection: Any, entity: str | None = None) -> str:
        kind = entity or getattr(collection, "name", None) or type(collection).__name__
        return f"{self._store}-{operation}-{kind}"

    async def _run(
        self,
        operation: str,
        collection: Any,
        entity: str | None,
        op: Callable[[], Awaitable[Any]],
    ) -> Result[Any, Degraded]:
        name = self.breaker_name(operation, collection, entity)
        try:
            value = await self._registry.execute(name, op, policy=self._policy)
        except CircuitOpenError as exc:
            logger.warning("store.circuit_open breaker=%s", name)
            return Err(Degraded(DegradedReason.CIRCUIT_OPEN, exc))
        except CallTimeoutError as exc:
            logger.error("store.timeout breaker=%s", name)
            self._reporter.report_error(exc, {"context": name})
            return Err(Degraded(DegradedReason.TIMEOUT, exc))
        except Exception as exc:  # noqa: BLE001
            logger.error("store.operation_failed breaker=%s error=%r", name, exc)
            self._reporter.report_error(exc, {"context": name})
            return Err(Degraded(DegradedReason.STORE_ERROR, exc))
        return Ok(value)


__all__ = ["STORE_BREAKER_POLICY", "ResilientDataAccess"]
