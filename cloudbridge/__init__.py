"""
CloudBridge - Cliente para subir archivos al API de almacenamiento CloudBridge.

Componentes:
- http/: Clientes HTTP (sync y async) para el endpoint de upload
- models: Credenciales, configuración y resultado de upload
- errors: Excepciones expuestas al usuario (InvalidInputError, InvalidCredentialsError)
"""

from cloudbridge.errors import (
    CloudBridgeError,
    InvalidCredentialsError,
    InvalidInputError,
)
from cloudbridge.http import AsyncUploadClient, UploadClient
from cloudbridge.models import ClientConfig, Credentials, UploadResult

__version__ = "1.0.0"

__all__ = [
    # Clients
    "UploadClient",
    "AsyncUploadClient",
    # Models
    "ClientConfig",
    "Credentials",
    "UploadResult",
    # Errors
    "CloudBridgeError",
    "InvalidCredentialsError",
    "InvalidInputError",
]
