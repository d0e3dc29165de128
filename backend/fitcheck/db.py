from __future__ import annotations

import json
import os
import threading
from functools import lru_cache
from typing import Any, Dict, Optional, Protocol
from urllib.parse import quote_plus, urlsplit

import certifi
from pymongo import MongoClient


class KeyValueStore(Protocol):
    """String keys to JSON-serializable values; the only persistence the app uses."""

    backend: str

    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...

    def ping(self) -> bool: ...


class InMemoryKeyValueStore:
    backend = "memory"

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        # Held as JSON text, same as the Mongo documents.
        raw = json.dumps(value, default=str)
        with self._lock:
            self._data[key] = raw

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def ping(self) -> bool:
        return True

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


class MongoKeyValueStore:
    """One document per key: ``{"_id": key, "value": <json string>}``."""

    backend = "mongo"

    def __init__(self, collection) -> None:
        self._collection = collection

    def get(self, key: str) -> Optional[Any]:
        doc = self._collection.find_one({"_id": key})
        if not doc:
            return None
        return json.loads(doc["value"])

    def set(self, key: str, value: Any) -> None:
        self._collection.replace_one(
            {"_id": key},
            {"_id": key, "value": json.dumps(value, default=str)},
            upsert=True,
        )

    def delete(self, key: str) -> None:
        self._collection.delete_one({"_id": key})

    def ping(self) -> bool:
        return mongo_ping()


def _build_mongodb_uri() -> str:
    # Prefer a full URI when provided (Atlas/local, replica sets, etc.).
    uri = os.environ.get("MONGODB_URI")
    if uri:
        return uri

    host = os.environ.get("MONGO_HOST", "localhost")
    port = os.environ.get("MONGO_PORT", "27017")
    db = os.environ.get("MONGO_DB", "fitcheck")

    user = os.environ.get("MONGO_USER")
    password = os.environ.get("MONGO_PASSWORD")
    auth_source = os.environ.get("MONGO_AUTH_SOURCE", db)

    if user and password:
        u = quote_plus(user)
        p = quote_plus(password)
        a = quote_plus(auth_source)
        return f"mongodb://{u}:{p}@{host}:{port}/{db}?authSource={a}"

    return f"mongodb://{host}:{port}/{db}"


def mongo_uri_summary(uri: Optional[str] = None) -> dict:
    """
    Non-sensitive summary of the configured Mongo URI for /health.
    """
    u = uri or _build_mongodb_uri()
    parts = urlsplit(u)

    netloc = parts.netloc
    # Redact userinfo if present: user:pass@host -> host
    if "@" in netloc:
        netloc = netloc.split("@", 1)[1]

    db_name = (parts.path or "").lstrip("/") or None

    return {
        "scheme": parts.scheme or None,
        "host": netloc or None,
        "db": db_name,
    }


@lru_cache(maxsize=1)
def get_mongo_client() -> MongoClient:
    # Short timeouts so /health doesn't hang when the DB is down.
    uri = _build_mongodb_uri()

    server_sel_ms = int(os.environ.get("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000"))
    connect_ms = int(os.environ.get("MONGO_CONNECT_TIMEOUT_MS", "5000"))

    kwargs = {
        "serverSelectionTimeoutMS": server_sel_ms,
        "connectTimeoutMS": connect_ms,
    }

    # Force a known CA bundle when using TLS (Atlas defaults to TLS).
    if uri.startswith("mongodb+srv://") or "tls=true" in uri or "ssl=true" in uri:
        kwargs["tlsCAFile"] = certifi.where()

    return MongoClient(uri, **kwargs)


def mongo_ping() -> bool:
    client = get_mongo_client()
    client.admin.command("ping")
    return True


def get_database():
    client = get_mongo_client()
    try:
        db = client.get_default_database()
    except Exception:
        db = None
    if db is None:
        db_name = os.environ.get("MONGO_DB", "fitcheck")
        db = client[db_name]
    return db


def store_backend() -> str:
    return os.environ.get("STORE_BACKEND", "mongo").strip().lower() or "mongo"


@lru_cache(maxsize=1)
def get_store() -> KeyValueStore:
    backend = store_backend()
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend != "mongo":
        raise RuntimeError(f"Unsupported STORE_BACKEND: {backend}")
    collection_name = os.environ.get("MONGO_COLLECTION", "kv_store")
    return MongoKeyValueStore(get_database()[collection_name])


def store_check() -> tuple[bool, dict, Optional[str]]:
    """
    Returns (ok, summary, error_string).
    """
    backend = store_backend()
    summary = mongo_uri_summary() if backend == "mongo" else {}
    summary["backend"] = backend
    try:
        get_store().ping()
        return True, summary, None
    except Exception as e:
        # Avoid returning secrets; exception messages typically do not include creds.
        return False, summary, f"{e.__class__.__name__}: {e}"
