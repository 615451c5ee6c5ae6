import io

import pytest
import requests
from rich.console import Console

from selena.config import Config


def build_response(body="", status=200, content_type="application/json", reason="OK"):
    """Create a real requests.Response without touching the network"""
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response._content = body.encode("utf-8") if isinstance(body, str) else body
    if content_type:
        response.headers["Content-Type"] = content_type
    response.url = "https://elaxi.xyz/api/chat?skd=true"
    return response


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def log_console():
    """Console writing into a buffer; read it back with ``.file.getvalue()``"""
    return Console(file=io.StringIO(), width=300, highlight=False)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from SELENA_* variables and any real .env file"""
    for name in (Config.API_KEY_ENV, Config.BASE_URL_ENV, Config.LOG_LEVEL_ENV, Config.MODEL_ENV):
        # setenv first so teardown restores the variable even if a test sets it directly
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Config, "_env_loaded", True)
    return tmp_path
