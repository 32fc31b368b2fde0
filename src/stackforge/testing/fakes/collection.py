"""Testing fakes – FakeCollection, a motor-shaped in-memory collection."""
from __future__ import annotations

import asyncio
import itertools
from collections import Counter
from types import SimpleNamespace
from typing import Any


def _matches(document: dict[str, Any], query: dict[str, Any]) -> bool:
    return all(document.get(key) == value for key, value in query.items())


def _project(document: dict[str, Any], projection: dict[str, Any] | None) -> dict[str, Any]:
    if not projection:
        return dict(document)
    included = {key for key, flag in projection.items() if flag}
    if included:
        return {key: value for key, value in document.items() if key in included or key == "_id"}
    return {key: value for key, value in document.items() if key not in projection}


class _FakeCursor:
    def __init__(self, documents: list[dict[str, Any]], collection: FakeCollection) -> None:
        self._documents = documents
        self._collection = collection

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        await self._collection._step("to_list")
        return self._documents if length is None else self._documents[:length]


class FakeCollection:
    """Equality-match collection supporting the calls ``ResilientDataAccess`` makes.

    Set ``error`` to make every operation raise it, or ``delay`` to make
    every operation sleep first (for timeout tests). ``update_one``
    understands ``$set`` only.
    """

    def __init__(self, name: str, documents: list[dict[str, Any]] | None = None) -> None:
        self.name = name
        self.documents: list[dict[str, Any]] = [dict(doc) for doc in documents or []]
        self.calls: Counter[str] = Counter()
        self.error: Exception | None = None
        self.delay: float = 0.0
        self._ids = itertools.count(1)

    async def find_one(self, query: dict[str, Any], projection: dict[str, Any] | None = None) -> dict[str, Any] | None:
        await self._step("find_one")
        for document in self.documents:
            if _matches(document, query):
                return _project(document, projection)
        return None

    def find(self, query: dict[str, Any], projection: dict[str, Any] | None = None, **options: Any) -> _FakeCursor:
        self.calls["find"] += 1
        found = [_project(doc, projection) for doc in self.documents if _matches(doc, query)]
        limit = options.get("limit")
        return _FakeCursor(found[:limit] if limit else found, self)

    async def insert_one(self, document: dict[str, Any]) -> SimpleNamespace:
        await self._step("insert_one")
        document.setdefault("_id", f"id-{next(self._ids)}")
        self.documents.append(dict(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def update_one(self, query: dict[str, Any], update: dict[str, Any], **options: Any) -> SimpleNamespace:
        await self._step("update_one")
        for document in self.documents:
            if _matches(document, query):
                document.update(update.get("$set", {}))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, query: dict[str, Any]) -> SimpleNamespace:
        await self._step("delete_one")
        for index, document in enumerate(self.documents):
            if _matches(document, query):
                del self.documents[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def _step(self, method: str) -> None:
        if method != "to_list":
            self.calls[method] += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error


__all__ = ["FakeCollection"]
