"""
Upload Client - Cliente HTTP para subir archivos al API de CloudBridge.

Maneja el único endpoint público del API:
- POST /api/v1/public/upload: multipart/form-data con `folder` y `files[i]`

Autenticación por headers:
- x-access-key: access key en claro
- x-signature:  hex(HMAC-SHA256(key=secret_key, msg=access_key))

Los errores de validación y de credenciales se lanzan como excepciones;
cualquier otro fallo (red, timeout, JSON inválido) se retorna como un
UploadResult con success=False.
"""

import json
import logging
import os
from contextlib import ExitStack
from dataclasses import replace
from os import PathLike
from typing import Any, List, Optional, Sequence, Tuple, Union

import httpx

from cloudbridge.errors import InvalidCredentialsError, InvalidInputError
from cloudbridge.models import (
    ClientConfig,
    Credentials,
    FileEntry,
    UploadRequest,
    UploadResult,
)
from config.constants import DEFAULT_MIME_TYPE, ERROR_MESSAGES, ErrorCode
from config.settings import CloudBridgeSettings

logger = logging.getLogger(__name__)

FilePath = Union[str, "PathLike[str]"]

# Fallos de transporte que se reportan como datos y no como excepción
TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL)

CREDENTIALS_MARKER = ERROR_MESSAGES[ErrorCode.INVALID_CREDENTIALS].lower()


def compute_signature(access_key: str, secret_key: str) -> str:
    """Firma hex HMAC-SHA256 del access key usando el secret key como llave."""
    return Credentials(access_key=access_key, secret_key=secret_key).signature()


def normalize_path(path: str) -> str:
    """Normalizar separadores (acepta rutas estilo Windows en cualquier plataforma)."""
    return path.replace("\\", os.sep)


def probe_mime_type(path: str) -> str:
    """
    Detectar el MIME type leyendo el contenido del archivo.

    Usa python-magic (libmagic) cuando está disponible en la plataforma;
    si no, o si la detección falla, retorna application/octet-stream.
    """
    try:
        import magic
    except ImportError:
        return DEFAULT_MIME_TYPE

    try:
        mime_type = magic.from_file(path, mime=True)
    except (OSError, magic.MagicException) as e:
        logger.debug(f"No se pudo detectar MIME de {path}: {e}")
        return DEFAULT_MIME_TYPE

    return mime_type or DEFAULT_MIME_TYPE


def validate_file_paths(file_paths: Sequence[FilePath]) -> List[str]:
    """
    Validar y normalizar las rutas antes de cualquier I/O de red.

    Args:
        file_paths: Lista (o tupla) de rutas locales

    Returns:
        Rutas normalizadas, en el mismo orden

    Raises:
        InvalidInputError: en el primer argumento inválido o archivo inexistente
    """
    if isinstance(file_paths, (str, bytes, PathLike)) or not isinstance(file_paths, (list, tuple)):
        raise InvalidInputError("File paths must be given as a list.")

    normalized = []
    for index, path in enumerate(file_paths):
        if isinstance(path, PathLike):
            path = os.fspath(path)
        if not isinstance(path, str):
            raise InvalidInputError(f"File path at index {index} must be a string.")

        real = normalize_path(path)
        if not os.path.isfile(real):
            raise InvalidInputError(f"File not found: {path}")
        if not os.access(real, os.R_OK):
            raise InvalidInputError(f"File not readable: {path}")

        normalized.append(real)

    return normalized


def build_upload_request(file_paths: Sequence[FilePath], folder: str) -> UploadRequest:
    """Construir el UploadRequest (validación + MIME + nombre base por archivo)."""
    entries = tuple(
        FileEntry(
            local_path=path,
            mime_type=probe_mime_type(path),
            file_name=os.path.basename(path),
        )
        for path in validate_file_paths(file_paths)
    )
    return UploadRequest(folder="" if folder is None else str(folder), files=entries)


def interpret_response(status_code: int, decoded: UploadResult) -> UploadResult:
    """
    Aplicar el chequeo de credenciales sobre un resultado ya decodificado.

    Raises:
        InvalidCredentialsError: si status es 401 o el message contiene
            "Invalid API credentials" (sin importar mayúsculas)
    """
    message = decoded.message
    if status_code == 401 or CREDENTIALS_MARKER in message.lower():
        logger.error(f"Credenciales rechazadas por el API (HTTP {status_code}): {message}")
        raise InvalidCredentialsError(message or None)
    return decoded


def decode_body(body: str) -> UploadResult:
    """Decodificar el body JSON; si no es un objeto retorna el resultado de error con `raw`."""
    try:
        decoded = json.loads(body)
    except ValueError:
        decoded = None

    if not isinstance(decoded, dict):
        logger.warning(f"Respuesta no es un objeto JSON: {body[:100]!r}")
        return UploadResult.error(ERROR_MESSAGES[ErrorCode.INVALID_JSON], raw=body)

    return UploadResult(decoded)


def transport_error_result(error: Exception) -> UploadResult:
    return UploadResult.error(str(error) or ERROR_MESSAGES[ErrorCode.NETWORK_ERROR])


def _open_files(stack: ExitStack, request: UploadRequest) -> List[Tuple[str, Tuple[str, Any, str]]]:
    """Abrir los archivos en el ExitStack; se cierran al salir del stack en cualquier caso."""
    files = []
    for field_name, entry in request.file_fields():
        try:
            handle = stack.enter_context(open(entry.local_path, "rb"))
        except OSError as e:
            raise InvalidInputError(f"File not found: {entry.local_path}") from e
        files.append((field_name, (entry.file_name, handle, entry.mime_type)))
    return files


def _multipart_parts(stack: ExitStack, request: UploadRequest) -> Tuple[Optional[dict], list]:
    """
    Partes (data, files) para httpx.

    Sin archivos httpx codificaria `data` como urlencoded; en ese caso los
    campos van como partes sin filename para que el body siga siendo multipart.
    """
    files = _open_files(stack, request)
    if not files:
        return None, [(name, (None, value)) for name, value in request.form_fields().items()]
    return request.form_fields(), files


class _BaseUploadClient:
    """Estado y lógica común a los clientes sync y async."""

    def __init__(
        self,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        """
        Inicializar cliente.

        Cada valor omitido se toma del entorno (CLOUDBRIDGE_*) y si tampoco
        está, del default. El entorno se lee una sola vez, aquí.
        """
        env = CloudBridgeSettings()
        self._credentials = Credentials.resolve(access_key, secret_key, env)
        self._config = ClientConfig.resolve(base_url, timeout, env)

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def access_key(self) -> str:
        return self._credentials.access_key

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def timeout(self) -> int:
        return self._config.timeout

    @property
    def upload_url(self) -> str:
        return self._config.upload_url

    def set_credentials(self, access_key: str, secret_key: str) -> None:
        """Reemplazar credenciales; aplica desde el próximo upload."""
        self._credentials = Credentials(access_key=str(access_key), secret_key=str(secret_key))

    def set_base_url(self, base_url: str) -> None:
        """Reemplazar la URL base (sin trailing slash)."""
        self._config = replace(self._config, base_url=str(base_url))

    def _prepare(
        self,
        file_paths: Sequence[FilePath],
        folder: str
    ) -> Tuple[UploadRequest, Credentials, ClientConfig]:
        # Snapshot de credenciales/config para toda la llamada
        request = build_upload_request(file_paths, folder)
        credentials, config = self._credentials, self._config
        logger.info(
            f"Subiendo {len(request.files)} archivo(s) a carpeta '{request.folder}' "
            f"→ {config.upload_url}"
        )
        return request, credentials, config

    def _finish(self, status_code: int, body: str) -> UploadResult:
        result = interpret_response(status_code, decode_body(body))
        if result.success:
            logger.info(f"Upload completado (HTTP {status_code}): {len(result.files)} archivo(s)")
        else:
            logger.warning(f"Upload sin éxito (HTTP {status_code}): {result.message or 'sin mensaje'}")
        return result

    def _transport_failed(self, url: str, error: Exception) -> UploadResult:
        logger.error(f"Error de transporte en POST {url}: {error}")
        return interpret_response(0, transport_error_result(error))


class UploadClient(_BaseUploadClient):
    """
    Cliente HTTP sync para el API de CloudBridge.

    Un request bloqueante por llamada, sin reintentos. La instancia no es
    thread-safe: set_credentials/set_base_url concurrentes con un upload
    en curso no tienen orden garantizado.
    """

    def __init__(
        self,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        super().__init__(access_key, secret_key, base_url, timeout)
        self._transport = transport

    def upload_file(self, file_path: FilePath, folder: str) -> UploadResult:
        """Subir un solo archivo. Equivalente a upload_files([file_path], folder)."""
        return self.upload_files([file_path], folder)

    def upload_files(self, file_paths: Sequence[FilePath], folder: str) -> UploadResult:
        """
        Subir varios archivos a una carpeta.

        Endpoint: POST {base_url}/api/v1/public/upload
        Content-Type: multipart/form-data

        Args:
            file_paths: Rutas locales; se envían como files[0], files[1], ...
            folder: Carpeta destino en CloudBridge (se envía tal cual); None se envía como ""

        Returns:
            UploadResult con el JSON del API, o el resultado de error
            {success: False, status: "error", message[, raw]}

        Raises:
            InvalidInputError: ruta inválida o archivo inexistente (no se envía nada)
            InvalidCredentialsError: HTTP 401 o mensaje "Invalid API credentials"
        """
        request, credentials, config = self._prepare(file_paths, folder)
        url = config.upload_url

        try:
            status_code, body = self._send_multipart(url, credentials.headers(), request, config.timeout)
        except TRANSPORT_ERRORS as e:
            return self._transport_failed(url, e)

        return self._finish(status_code, body)

    def _send_multipart(
        self,
        url: str,
        headers: dict,
        request: UploadRequest,
        timeout: int
    ) -> Tuple[int, str]:
        """
        POST multipart/form-data.

        El timeout de httpx aplica a cada fase (connect, read, write, pool) por
        separado, no al intercambio completo: un upload lento que sigue
        transmitiendo puede durar mas que `timeout` segundos en total.

        Returns:
            (status_code, body como texto)

        Raises:
            httpx.HTTPError / httpx.InvalidURL en fallos de transporte
        """
        with ExitStack() as stack:
            data, files = _multipart_parts(stack, request)
            with httpx.Client(timeout=timeout, transport=self._transport) as client:
                response = client.post(
                    url,
                    headers=headers,
                    data=data,
                    files=files
                )
            return response.status_code, response.text


class AsyncUploadClient(_BaseUploadClient):
    """
    Cliente HTTP async para el API de CloudBridge.

    Misma semántica que UploadClient: las credenciales inválidas lanzan
    excepción y los fallos de transporte se retornan como datos.
    """

    def __init__(
        self,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(access_key, secret_key, base_url, timeout)
        self._transport = transport

    async def upload_file(self, file_path: FilePath, folder: str) -> UploadResult:
        """Subir un solo archivo. Equivalente a upload_files([file_path], folder)."""
        return await self.upload_files([file_path], folder)

    async def upload_files(self, file_paths: Sequence[FilePath], folder: str) -> UploadResult:
        """Subir varios archivos a una carpeta (ver UploadClient.upload_files)."""
        request, credentials, config = self._prepare(file_paths, folder)
        url = config.upload_url

        try:
            status_code, body = await self._send_multipart(url, credentials.headers(), request, config.timeout)
        except TRANSPORT_ERRORS as e:
            return self._transport_failed(url, e)

        return self._finish(status_code, body)

    async def _send_multipart(
        self,
        url: str,
        headers: dict,
        request: UploadRequest,
        timeout: int
    ) -> Tuple[int, str]:
        with ExitStack() as stack:
            data, files = _multipart_parts(stack, request)
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.post(
                    url,
                    headers=headers,
                    data=data,
                    files=files
                )
            return response.status_code, response.text
