from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

import httpx
import pytest

# Load dotenv files early so test fixtures can read secrets via os.getenv
try:  # pragma: no cover
    from dotenv import load_dotenv

    TEST_ROOT = Path(__file__).resolve().parent
    # Load test/.env first, then fallback to test/.env.example for defaults
    load_dotenv(TEST_ROOT / ".env", override=False)
    load_dotenv(TEST_ROOT / ".env.example", override=False)
except ImportError:
    pass

# Settings are read once at import; these must be in place before ecodata is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOGFIRE_ENABLED", "false")


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    allowed_prefixes: Iterable[str] = (
        "http://mock",
        "https://mock",
        "http://localhost",
        "http://127.0.0.1",
        "http://0.0.0.0",
        "http://test",
        "/",  # Allow relative paths (used by ASGI transport)
    )

    orig_sync = httpx._client.Client.request
    orig_async = httpx._client.AsyncClient.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    def offline_sync(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return orig_sync(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard: {url_str}")

    async def offline_async(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return await orig_async(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url_str}")

    monkeypatch.setattr(httpx._client.Client, "request", offline_sync, raising=True)
    monkeypatch.setattr(httpx._client.AsyncClient, "request", offline_async, raising=True)
