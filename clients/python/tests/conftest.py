from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
SDK_SRC = BASE_DIR / "tablekit_client_sdk" / "src"
APPS_DIR = BASE_DIR / "apps"

for path in (SDK_SRC, APPS_DIR):
    sys.path.insert(0, str(path))

from tablekit_client_sdk.config import ClientConfig  # noqa: E402
from tablekit_client_sdk.http_client import HttpClient  # noqa: E402
from tablekit_client_sdk.tracing import TraceContext  # noqa: E402

BASE_URL = "https://api.example.com"


@pytest.fixture()
def client_config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL)


@pytest.fixture()
def make_http(client_config: ClientConfig) -> Callable[[Callable], HttpClient]:
    def factory(handler: Callable) -> HttpClient:
        return HttpClient(client_config, trace=TraceContext(), transport=httpx.MockTransport(handler))

    return factory
