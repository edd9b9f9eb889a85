"""Shared fixtures: a temporary uploads root per test and a wired TestClient."""

import os
import tempfile
from io import BytesIO

# Point settings at throwaway directories before the app is imported
os.environ["FAMILYPHOTOS_UPLOADS_DIR"] = tempfile.mkdtemp()
os.environ["FAMILYPHOTOS_PUBLIC_DIR"] = tempfile.mkdtemp()

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from familyphotos.database import DocumentStore, get_store
from familyphotos.main import app


def image_bytes(fmt: str = "JPEG", size=(16, 16), color=(200, 80, 20)) -> bytes:
    buf = BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture()
def store(tmp_path):
    """Fresh document store per test."""
    return DocumentStore(tmp_path / "uploads")


@pytest.fixture()
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def jpeg():
    return image_bytes("JPEG")


@pytest.fixture()
def png():
    return image_bytes("PNG")


@pytest.fixture()
def make_image():
    return image_bytes
