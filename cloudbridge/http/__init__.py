"""
Subpaquete HTTP - Cliente para comunicación con el API de CloudBridge.

Proporciona clientes sync y async para subir archivos al endpoint
público de upload, firmando cada request con HMAC-SHA256.

Uso:
    from cloudbridge.http import UploadClient

    client = UploadClient(access_key="AK", secret_key="SK")
    result = client.upload_files(["a.txt", "b.png"], "ghost/up")
"""

from cloudbridge.http.upload_client import (
    AsyncUploadClient,
    UploadClient,
    compute_signature,
)

__all__ = [
    "UploadClient",
    "AsyncUploadClient",
    "compute_signature",
]
