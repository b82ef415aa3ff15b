"""
Data models for the CloudBridge upload client.

Credentials and ClientConfig are resolved once per client (explicit
argument, then environment, then default). FileEntry / UploadRequest are
built per call. UploadResult is the decoded JSON body, kept as an open dict.
"""

import hashlib
import hmac
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from config.constants import (
    ACCEPT_JSON,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    FILE_FIELD_TEMPLATE,
    FOLDER_FIELD,
    HEADER_ACCESS_KEY,
    HEADER_SIGNATURE,
    UPLOAD_PATH,
    ResultStatus,
)
from config.settings import CloudBridgeSettings


def _first_set(explicit: Optional[Any], from_env: Optional[Any], default: Any) -> Any:
    if explicit is not None:
        return explicit
    # Una variable vacia cuenta como no definida
    if from_env is not None and from_env != "":
        return from_env
    return default


@dataclass(frozen=True)
class Credentials:
    """Access key / secret key pair. The secret never leaves this object."""

    access_key: str = ""
    secret_key: str = field(default="", repr=False)

    @classmethod
    def resolve(
        cls,
        access_key: Optional[str],
        secret_key: Optional[str],
        env: CloudBridgeSettings
    ) -> "Credentials":
        return cls(
            access_key=str(_first_set(access_key, env.CLOUDBRIDGE_ACCESS_KEY, "")),
            secret_key=str(_first_set(secret_key, env.CLOUDBRIDGE_SECRET_KEY, "")),
        )

    def signature(self) -> str:
        """Hex HMAC-SHA256 of the access key, keyed by the secret key."""
        return hmac.new(
            self.secret_key.encode("utf-8"),
            self.access_key.encode("utf-8"),
            hashlib.sha256
        ).hexdigest()

    def headers(self) -> Dict[str, Union[str, bytes]]:
        """Headers de autenticacion; el access key va en UTF-8 (admite no-ASCII)."""
        return {
            HEADER_ACCESS_KEY: self.access_key.encode("utf-8"),
            HEADER_SIGNATURE: self.signature(),
            "Accept": ACCEPT_JSON,
        }


@dataclass(frozen=True)
class ClientConfig:
    """Endpoint and timeout for a client instance."""

    base_url: str = DEFAULT_BASE_URL
    timeout: int = DEFAULT_TIMEOUT

    def __post_init__(self):
        object.__setattr__(self, "base_url", str(self.base_url).rstrip("/"))
        object.__setattr__(self, "timeout", int(self.timeout))

    @classmethod
    def resolve(
        cls,
        base_url: Optional[str],
        timeout: Optional[int],
        env: CloudBridgeSettings
    ) -> "ClientConfig":
        return cls(
            base_url=_first_set(base_url, env.CLOUDBRIDGE_BASE_URL, DEFAULT_BASE_URL),
            timeout=_first_set(timeout, env.CLOUDBRIDGE_TIMEOUT, DEFAULT_TIMEOUT),
        )

    @property
    def upload_url(self) -> str:
        return f"{self.base_url}{UPLOAD_PATH}"


@dataclass(frozen=True)
class FileEntry:
    """A validated local file, ready to be attached to the form."""

    local_path: str
    mime_type: str
    file_name: str


@dataclass(frozen=True)
class UploadRequest:
    """Destination folder plus the ordered files of a single upload call."""

    folder: str
    files: Tuple[FileEntry, ...] = ()

    def form_fields(self) -> Dict[str, str]:
        return {FOLDER_FIELD: self.folder}

    def file_fields(self) -> List[Tuple[str, FileEntry]]:
        """Pairs (field name, entry) using files[0], files[1], ... in input order."""
        return [
            (FILE_FIELD_TEMPLATE.format(index=i), entry)
            for i, entry in enumerate(self.files)
        ]


class UploadResult(dict):
    """
    Decoded JSON body of the upload response.

    It is a plain dict (compares equal to one) so no key is renamed or
    dropped; the properties are read-only conveniences over common fields.
    """

    @classmethod
    def error(cls, message: str, **extra: Any) -> "UploadResult":
        """Failure shape synthesized by the client (transport or decoding errors)."""
        return cls(success=False, status=ResultStatus.ERROR.value, message=message, **extra)

    @property
    def success(self) -> bool:
        return self.get("success") is True

    @property
    def status(self) -> Optional[str]:
        return self.get("status")

    @property
    def message(self) -> str:
        message = self.get("message")
        return message if isinstance(message, str) else ""

    @property
    def files(self) -> List[Any]:
        files = self.get("files")
        return files if isinstance(files, list) else []

    @property
    def is_error(self) -> bool:
        return self.get("success") is False or self.get("status") == ResultStatus.ERROR.value
