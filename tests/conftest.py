import json

import httpx
import pytest


CLOUDBRIDGE_ENV_VARS = (
    "CLOUDBRIDGE_ACCESS_KEY",
    "CLOUDBRIDGE_SECRET_KEY",
    "CLOUDBRIDGE_BASE_URL",
    "CLOUDBRIDGE_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_cloudbridge_env(monkeypatch):
    """Aislar cada test de las variables CLOUDBRIDGE_* del entorno real."""
    for name in CLOUDBRIDGE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_file(tmp_path):
    """Archivo temporal con contenido de texto."""
    path = tmp_path / "a.txt"
    path.write_text("x")
    return path


@pytest.fixture
def sample_files(tmp_path):
    """Dos archivos temporales en subdirectorios distintos."""
    first = tmp_path / "docs" / "reporte.pdf"
    second = tmp_path / "img" / "foto.png"
    first.parent.mkdir()
    second.parent.mkdir()
    first.write_bytes(b"%PDF-1.4 contenido")
    second.write_bytes(b"\x89PNG\r\n\x1a\n contenido")
    return [first, second]


@pytest.fixture
def success_body():
    """Respuesta típica del API para un upload exitoso."""
    return {
        "success": True,
        "files": [
            {
                "filename": "a.txt",
                "size": 1,
                "public_url": "https://u",
                "short_url": "https://s",
                "nextcloud_path": "apps/x",
            }
        ],
    }


class RecordingHandler:
    """Handler para httpx.MockTransport que guarda cada request recibido."""

    def __init__(self, status_code=200, body=None, text=None, error=None):
        self.status_code = status_code
        self.body = body
        self.text = text
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, content=json.dumps(self.body or {}).encode("utf-8"))

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def recording_handler():
    return RecordingHandler
