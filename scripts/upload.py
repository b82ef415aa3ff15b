#!/usr/bin/env python
"""
Script para subir archivos a CloudBridge desde la línea de comandos.

Uso:
    python -m scripts.upload <folder> <file1> [file2 ...]

    # O con el entry point instalado:
    cloudbridge-upload ghost/up reporte.pdf foto.png

Credenciales: CLOUDBRIDGE_ACCESS_KEY / CLOUDBRIDGE_SECRET_KEY (entorno o .env).

Códigos de salida:
    0 → upload ejecutado (el JSON del resultado se imprime en stdout)
    1 → argumentos insuficientes
    2 → credenciales inválidas
    3 → cualquier otro error
"""

import json
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from cloudbridge.errors import InvalidCredentialsError
from cloudbridge.http import UploadClient
from config.logging_config import setup_logging

logger = logging.getLogger(__name__)

USAGE = "Usage: python -m scripts.upload <folder> <file1> [file2 ...]"


def main(argv: Optional[List[str]] = None) -> int:
    """Ejecutar el upload y retornar el código de salida."""
    args = sys.argv[1:] if argv is None else argv

    if len(args) < 2:
        print(USAGE, file=sys.stderr)
        return 1

    # Cargar variables de entorno
    load_dotenv()
    setup_logging("upload")

    folder = args[0]
    files = args[1:]

    try:
        client = UploadClient()
        if len(files) == 1:
            result = client.upload_file(files[0], folder)
        else:
            result = client.upload_files(files, folder)
    except InvalidCredentialsError as e:
        print(f"Invalid credentials: {e.message}", file=sys.stderr)
        return 2
    except Exception as e:
        logger.exception("Upload fallido")
        print(f"Error: {e}", file=sys.stderr)
        return 3

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
