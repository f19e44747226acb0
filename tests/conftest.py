from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from fileshare.app.config import Settings
from fileshare.app.main import create_app


@pytest.fixture
def base_dir(tmp_path):
    """A served tree: photos/{img1.jpg,img2.jpg}, notes.txt and a hidden .git/."""
    (tmp_path / "photos").mkdir()
    (tmp_path / "photos" / "img1.jpg").write_bytes(b"\xff\xd8one")
    (tmp_path / "photos" / "img2.jpg").write_bytes(b"\xff\xd8two")
    (tmp_path / "notes.txt").write_text("remember the milk\n")
    (tmp_path / ".git").mkdir()
    return tmp_path


@pytest.fixture
def make_settings(base_dir):
    def _make(**kwargs) -> Settings:
        kwargs.setdefault("base_path", str(base_dir))
        return Settings(**kwargs)

    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def make_client(make_settings):
    clients = []

    def _make(**kwargs) -> TestClient:
        client = TestClient(create_app(make_settings(**kwargs)))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for c in clients:
        c.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()
