from enum import Enum


# Endpoints

DEFAULT_BASE_URL = "https://api.cloudbridge.nugitech.com"
UPLOAD_PATH = "/api/v1/public/upload"
DEFAULT_TIMEOUT = 60


# Headers de autenticacion

HEADER_ACCESS_KEY = "x-access-key"
HEADER_SIGNATURE = "x-signature"
ACCEPT_JSON = "application/json"

DEFAULT_MIME_TYPE = "application/octet-stream"

# Campos del formulario multipart
FOLDER_FIELD = "folder"
FILE_FIELD_TEMPLATE = "files[{index}]"


class ResultStatus(str, Enum):
    """Valores del campo status en resultados sintetizados"""

    ERROR = "error"


class LogLevel(str, Enum):
    """Niveles de logging"""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Codigos de error

class ErrorCode(str, Enum):
    """Codigos de error estandarizados"""

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_JSON = "INVALID_JSON"
    NETWORK_ERROR = "NETWORK_ERROR"


# Mensajes de error (el API y los clientes dependen de estos textos exactos)

ERROR_MESSAGES = {
    ErrorCode.INVALID_INPUT: "Invalid input",
    ErrorCode.INVALID_CREDENTIALS: "Invalid API credentials",
    ErrorCode.INVALID_JSON: "Invalid JSON response",
    ErrorCode.NETWORK_ERROR: "Network error",
}
