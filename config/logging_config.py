"""
Configuración centralizada de logging con rotación diaria.

La librería solo crea loggers por módulo (logging.getLogger(__name__));
los handlers los instala quien la usa, por ejemplo el script de upload:
- logs/upload.log → scripts/upload.py

Los archivos rotan a medianoche y se eliminan después de N días.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import TimedRotatingFileHandler

from config.settings import get_settings

# Configuración
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logs_directory() -> Path:
    """Retorna el directorio de logs."""
    return Path(get_settings().logging.LOG_DIR)


def get_log_file_path(service_name: str = "upload") -> Path:
    """Retorna la ruta al archivo de log de un servicio."""
    return get_logs_directory() / f"{service_name}.log"


def setup_logging(service_name: str = "upload") -> logging.Logger:
    """
    Configura logging con rotación diaria para un servicio específico.

    Args:
        service_name: Nombre del servicio. Define el archivo de log:
                     - "upload" → logs/upload.log
                     - etc.

    Returns:
        Logger raíz configurado
    """
    settings = get_settings()
    log_level = getattr(logging, settings.general.LOG_LEVEL, logging.INFO)

    logs_dir = get_logs_directory()
    logs_dir.mkdir(parents=True, exist_ok=True)

    # Obtener logger raíz
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Limpiar handlers existentes (evita duplicados si se llama dos veces)
    root_logger.handlers.clear()

    # Formatter común
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # Handler 1: Consola (stderr; stdout queda libre para la salida del comando)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Handler 2: Archivo con rotación diaria
    log_file = get_log_file_path(service_name)
    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        interval=1,
        backupCount=settings.logging.LOG_RETENTION_DAYS,
        encoding="utf-8",
        utc=False
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)

    # Sufijo para archivos rotados: upload.log.2026-01-23
    file_handler.suffix = "%Y-%m-%d"

    root_logger.addHandler(file_handler)

    # httpx loguea cada request a INFO; se deja solo para DEBUG
    if log_level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging iniciado [{service_name}] → {log_file}")

    return root_logger


def list_log_files() -> list[dict]:
    """Lista todos los archivos de log disponibles."""
    logs_dir = get_logs_directory()
    if not logs_dir.exists():
        return []
    files = []
    for f in sorted(logs_dir.glob("*.log*"), reverse=True):
        files.append({
            "name": f.name,
            "size_kb": round(f.stat().st_size / 1024, 2),
            "modified": f.stat().st_mtime
        })
    return files
