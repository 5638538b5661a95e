# storefront/app/services/document_store.py
from __future__ import annotations

import asyncio
import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from redis.exceptions import RedisError

from storefront.app.core.config import settings
from storefront.app.core.errors import StoreError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


def new_id() -> str:
    return uuid.uuid4().hex


@runtime_checkable
class CollectionProto(Protocol):
    """Minimal interface used by the product and order services."""
    async def find(self) -> List[Document]: ...
    async def find_one(self, doc_id: str) -> Optional[Document]: ...
    async def save(self, doc: Document) -> Document: ...


@runtime_checkable
class DocumentStoreProto(Protocol):
    backend: str
    def collection(self, name: str) -> CollectionProto: ...
    async def ping(self) -> bool: ...


def _with_id(doc: Document) -> Document:
    out = dict(doc)
    if not out.get("id"):
        out["id"] = new_id()
    return out


# =========================================================
# JSON file backend
# =========================================================

class JsonFileCollection:
    """
    One JSON array per collection: <root>/<name>.json.
    Array order is insertion order.
    """

    def __init__(self, root: Path, name: str) -> None:
        self.root = root
        self.name = name
        self.path = root / f"{name}.json"
        self._lock = asyncio.Lock()

    def _load(self) -> List[Document]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreError(f"cannot read collection '{self.name}': {exc}") from exc
        if not isinstance(data, list):
            raise StoreError(f"collection '{self.name}' is not a JSON array")
        return data

    def _atomic_write(self, docs: List[Document]) -> None:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps(docs, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as exc:
            raise StoreError(f"cannot write collection '{self.name}': {exc}") from exc

    async def find(self) -> List[Document]:
        return self._load()

    async def find_one(self, doc_id: str) -> Optional[Document]:
        for doc in self._load():
            if doc.get("id") == doc_id:
                return doc
        return None

    async def save(self, doc: Document) -> Document:
        saved = _with_id(doc)
        async with self._lock:
            docs = self._load()
            docs.append(saved)
            self._atomic_write(docs)
        return saved


class JsonFileStore:
    backend = "file"

    def __init__(self, root: Path) -> None:
        self.root = Path(root).expanduser()
        self._collections: Dict[str, JsonFileCollection] = {}

    def collection(self, name: str) -> JsonFileCollection:
        if name not in self._collections:
            self._collections[name] = JsonFileCollection(self.root, name)
        return self._collections[name]

    async def ping(self) -> bool:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return self.root.is_dir()


# =========================================================
# Redis backend
# =========================================================

class RedisCollection:
    """
    Hash <prefix>:<name> of id -> compact JSON blob,
    plus list <prefix>:<name>:ids holding insertion order.
    """

    def __init__(self, redis, prefix: str, name: str) -> None:
        self.redis = redis
        self.name = name
        self.docs_key = f"{prefix}:{name}"
        self.ids_key = f"{prefix}:{name}:ids"

    @staticmethod
    def _decode(raw: Optional[str]) -> Optional[Document]:
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise StoreError(f"corrupt document: {exc}") from exc

    async def find(self) -> List[Document]:
        try:
            ids = await self.redis.lrange(self.ids_key, 0, -1)
            if not ids:
                return []
            raws = await self.redis.hmget(self.docs_key, ids)
        except RedisError as exc:
            raise StoreError(f"cannot read collection '{self.name}': {exc}") from exc
        return [d for d in (self._decode(r) for r in raws) if d is not None]

    async def find_one(self, doc_id: str) -> Optional[Document]:
        try:
            raw = await self.redis.hget(self.docs_key, doc_id)
        except RedisError as exc:
            raise StoreError(f"cannot read collection '{self.name}': {exc}") from exc
        return self._decode(raw)

    async def save(self, doc: Document) -> Document:
        saved = _with_id(doc)
        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.hset(self.docs_key, saved["id"], json.dumps(saved, ensure_ascii=False))
                pipe.rpush(self.ids_key, saved["id"])
                await pipe.execute()
        except RedisError as exc:
            raise StoreError(f"cannot write collection '{self.name}': {exc}") from exc
        return saved


class RedisStore:
    backend = "redis"

    def __init__(self, redis, prefix: str = "storefront") -> None:
        self.redis = redis
        self.prefix = prefix

    def collection(self, name: str) -> RedisCollection:
        return RedisCollection(self.redis, self.prefix, name)

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except RedisError:
            return False


# =========================================================
# Singleton
# =========================================================

_STORE: Optional[DocumentStoreProto] = None


def _new_store() -> DocumentStoreProto:
    backend = settings.store_backend.lower()
    if backend == "redis":
        # Imported lazily so the file backend never opens a connection
        from storefront.app.core.redis_conn import get_async_redis
        logger.info("document store: redis (%s)", settings.redis_url)
        return RedisStore(get_async_redis(), prefix=settings.store_key_prefix)
    if backend != "file":
        raise StoreError(f"unknown store backend '{settings.store_backend}'")
    logger.info("document store: files under %s", settings.store_dir)
    return JsonFileStore(settings.store_dir)


def get_store() -> DocumentStoreProto:
    global _STORE
    if _STORE is None:
        _STORE = _new_store()
    return _STORE


def reset_store(store: Optional[DocumentStoreProto] = None) -> None:
    """
    Replace the process-wide store; with no argument it is rebuilt from settings
    on next use. Useful for tests.
    """
    global _STORE
    _STORE = store
