"""
Tests del script de línea de comandos scripts/upload.py.

Valida el mapeo de resultados y excepciones a códigos de salida.

python -m pytest tests/test_upload_script.py
"""

import json
import logging
from unittest.mock import patch

import httpx
import pytest

from cloudbridge.errors import InvalidCredentialsError, InvalidInputError
from cloudbridge.http import UploadClient
from cloudbridge.models import UploadResult
from scripts import upload


@pytest.fixture
def mock_client():
    with patch("scripts.upload.load_dotenv"), \
            patch("scripts.upload.setup_logging"), \
            patch("scripts.upload.UploadClient") as mock_client_class:
        yield mock_client_class.return_value


class TestUploadScript:
    """Tests de main()."""

    def test_usage_without_arguments(self, capsys):
        """Con menos de dos argumentos imprime uso y retorna 1."""
        assert upload.main(["folder"]) == 1
        assert "Usage" in capsys.readouterr().err

    def test_single_file_uses_upload_file(self, mock_client, capsys):
        """Un archivo usa upload_file e imprime el JSON."""
        mock_client.upload_file.return_value = UploadResult({"success": True, "files": []})

        assert upload.main(["ghost/up", "a.txt"]) == 0

        mock_client.upload_file.assert_called_once_with("a.txt", "ghost/up")
        assert json.loads(capsys.readouterr().out) == {"success": True, "files": []}

    def test_multiple_files_use_upload_files(self, mock_client):
        """Varios archivos usan upload_files en orden."""
        mock_client.upload_files.return_value = UploadResult({"success": True})

        assert upload.main(["ghost/up", "a.txt", "b.txt"]) == 0

        mock_client.upload_files.assert_called_once_with(["a.txt", "b.txt"], "ghost/up")

    def test_invalid_credentials_exit_code(self, mock_client, capsys):
        """Credenciales inválidas retornan 2."""
        mock_client.upload_file.side_effect = InvalidCredentialsError("Invalid API credentials")

        assert upload.main(["ghost/up", "a.txt"]) == 2
        assert "Invalid credentials: Invalid API credentials" in capsys.readouterr().err

    def test_other_errors_exit_code(self, mock_client, capsys):
        """Cualquier otro error retorna 3."""
        mock_client.upload_file.side_effect = InvalidInputError("File not found: a.txt")

        assert upload.main(["ghost/up", "a.txt"]) == 3
        assert "Error: File not found: a.txt" in capsys.readouterr().err

    def test_transport_failure_is_printed(self, mock_client, capsys):
        """Un fallo de red llega como resultado y sale con 0."""
        mock_client.upload_file.return_value = UploadResult.error("Connection refused")

        assert upload.main(["ghost/up", "a.txt"]) == 0
        assert json.loads(capsys.readouterr().out)["message"] == "Connection refused"


@pytest.fixture
def real_logging(tmp_path):
    """setup_logging real escribiendo en tmp_path; restaura los handlers del root."""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level

    with patch("config.logging_config.get_settings") as mock_get_settings:
        mock_settings = mock_get_settings.return_value
        mock_settings.general.LOG_LEVEL = "INFO"
        mock_settings.logging.LOG_DIR = str(tmp_path / "logs")
        mock_settings.logging.LOG_RETENTION_DAYS = 1
        yield tmp_path / "logs"

    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)


class TestUploadScriptOutput:
    """stdout del script con logging real."""

    def test_stdout_is_only_json(self, real_logging, sample_file, recording_handler,
                                 monkeypatch, capsys):
        """Los logs van a stderr y al archivo; stdout se parsea como JSON."""
        monkeypatch.setenv("CLOUDBRIDGE_ACCESS_KEY", "ak")
        monkeypatch.setenv("CLOUDBRIDGE_SECRET_KEY", "sk")
        handler = recording_handler(body={"success": True, "files": [{"name": "a.txt"}]})

        def client_factory():
            return UploadClient(
                base_url="https://api.example.com",
                transport=httpx.MockTransport(handler)
            )

        with patch("scripts.upload.load_dotenv"), \
                patch("scripts.upload.UploadClient", side_effect=client_factory):
            assert upload.main(["ghost/up", str(sample_file)]) == 0

        captured = capsys.readouterr()
        assert json.loads(captured.out) == {"success": True, "files": [{"name": "a.txt"}]}
        assert "Logging iniciado" in captured.err
        assert (real_logging / "upload.log").exists()
        assert handler.calls == 1
