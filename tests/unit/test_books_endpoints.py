"""
Tests del sidecar de uploads (/books y /uploads).

Cada test levanta el sidecar con una carpeta temporal propia.
"""
from __future__ import annotations

import json
import pathlib
from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.infrastructure.storage import upload_storage as upload_storage_module
from sidecar import create_sidecar_application


PUBLIC_URL = "http://localhost:4003"


@pytest.fixture
def sidecar_paths(tmp_path):
    return {
        "data_file": tmp_path / "data" / "books.json",
        "uploads_dir": tmp_path / "uploads",
    }


@pytest_asyncio.fixture
async def sidecar_client(sidecar_paths):
    config = Settings(
        BOOKS_DATA_FILE=str(sidecar_paths["data_file"]),
        UPLOADS_DIR=str(sidecar_paths["uploads_dir"]),
        UPLOADS_PUBLIC_BASE_URL=PUBLIC_URL,
    )
    app = create_sidecar_application(config)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def _stored(sidecar_paths):
    return json.loads(sidecar_paths["data_file"].read_text(encoding="utf-8"))


@pytest.mark.asyncio
async def test_startup_creates_storage(sidecar_client, sidecar_paths) -> None:
    assert sidecar_paths["uploads_dir"].is_dir()
    assert _stored(sidecar_paths) == []

    response = await sidecar_client.get("/books")

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_create_book_without_title_writes_nothing(sidecar_client, sidecar_paths) -> None:
    response = await sidecar_client.post("/books", data={"author": "Frank Herbert"})

    assert response.status_code == 400
    assert response.json()["details"] == {"field": "title"}
    assert _stored(sidecar_paths) == []
    assert list(sidecar_paths["uploads_dir"].iterdir()) == []


@pytest.mark.asyncio
async def test_create_book_with_title_only(sidecar_client, sidecar_paths) -> None:
    response = await sidecar_client.post("/books", data={"title": "Dune"})

    assert response.status_code == 200
    assert response.json() == {
        "title": "Dune",
        "author": None,
        "link": None,
        "imageURL": None,
        "fileURL": None,
    }
    assert _stored(sidecar_paths) == [response.json()]


@pytest.mark.asyncio
async def test_create_book_with_files_serves_them(sidecar_client, sidecar_paths) -> None:
    response = await sidecar_client.post(
        "/books",
        data={"title": "Dune", "author": "Frank Herbert", "link": "https://example.org/dune"},
        files={
            "image": ("cover.png", b"\x89PNG-bytes", "image/png"),
            "file": ("dune.pdf", b"%PDF-1.4", "application/pdf"),
        },
    )

    assert response.status_code == 200
    book = response.json()
    assert book["imageURL"].startswith(f"{PUBLIC_URL}/uploads/")
    assert book["imageURL"].endswith("-cover.png")
    assert book["fileURL"].endswith("-dune.pdf")

    image_path = book["imageURL"][len(PUBLIC_URL):]
    served = await sidecar_client.get(image_path)
    assert served.status_code == 200
    assert served.content == b"\x89PNG-bytes"
    assert len(list(sidecar_paths["uploads_dir"].iterdir())) == 2


@pytest.mark.asyncio
async def test_books_are_listed_newest_first(sidecar_client) -> None:
    await sidecar_client.post("/books", data={"title": "First"})
    await sidecar_client.post("/books", data={"title": "Second"})

    response = await sidecar_client.get("/books")

    assert [b["title"] for b in response.json()] == ["Second", "First"]


@pytest.mark.asyncio
async def test_corrupt_data_file_is_500(sidecar_client, sidecar_paths) -> None:
    sidecar_paths["data_file"].write_text("{broken", encoding="utf-8")

    listed = await sidecar_client.get("/books")
    created = await sidecar_client.post("/books", data={"title": "Dune"})

    assert listed.status_code == 500
    assert listed.json()["error"] == "STORAGE_ERROR"
    assert created.status_code == 500
    assert sidecar_paths["data_file"].read_text(encoding="utf-8") == "{broken"


@pytest.mark.asyncio
async def test_list_returns_stored_records_verbatim(sidecar_client, sidecar_paths) -> None:
    """GET /books devuelve el array del archivo sin completar ni descartar keys."""
    stored = [{"title": "Dune", "year": 1965}, {"author": "anon"}]
    sidecar_paths["data_file"].write_text(json.dumps(stored), encoding="utf-8")

    response = await sidecar_client.get("/books")

    assert response.status_code == 200
    assert response.json() == stored


@pytest.mark.asyncio
async def test_failed_data_file_write_is_500(sidecar_client, sidecar_paths, monkeypatch) -> None:
    def _disk_full(self, *args, **kwargs):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(pathlib.Path, "write_text", _disk_full)

    response = await sidecar_client.post("/books", data={"title": "Dune"})

    assert response.status_code == 500
    assert response.json()["error"] == "STORAGE_ERROR"
    assert _stored(sidecar_paths) == []


@pytest.mark.asyncio
async def test_failed_upload_save_is_500(sidecar_client, sidecar_paths, monkeypatch) -> None:
    def _broken_copy(src, dst):
        raise OSError(5, "Input/output error")

    monkeypatch.setattr(upload_storage_module, "shutil", SimpleNamespace(copyfileobj=_broken_copy))

    response = await sidecar_client.post(
        "/books",
        data={"title": "Dune"},
        files={"image": ("cover.png", b"\x89PNG", "image/png")},
    )

    assert response.status_code == 500
    assert response.json()["error"] == "STORAGE_ERROR"
    assert _stored(sidecar_paths) == []


@pytest.mark.asyncio
async def test_image_and_file_with_same_name_are_both_kept(sidecar_client, sidecar_paths) -> None:
    response = await sidecar_client.post(
        "/books",
        data={"title": "Dune"},
        files={
            "image": ("dune.bin", b"image-bytes", "application/octet-stream"),
            "file": ("dune.bin", b"file-bytes", "application/octet-stream"),
        },
    )

    assert response.status_code == 200
    book = response.json()
    assert book["imageURL"] != book["fileURL"]
    image = await sidecar_client.get(book["imageURL"][len(PUBLIC_URL):])
    file = await sidecar_client.get(book["fileURL"][len(PUBLIC_URL):])
    assert image.content == b"image-bytes"
    assert file.content == b"file-bytes"
