from pydantic import Field, validator
from pydantic_settings import BaseSettings
from typing import Optional
from functools import lru_cache

from config.constants import LogLevel


LOG_LEVEL_ALIASES = {
    "WARN": LogLevel.WARNING.value,
    "FATAL": LogLevel.CRITICAL.value,
}


class GeneralSettings(BaseSettings):
    """Configuracion general"""

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Nivel de logging: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )

    @validator("LOG_LEVEL")
    def validate_log_level(cls, v):
        """Normalizar nivel a mayusculas; valores desconocidos caen a INFO"""
        level = v.upper()
        level = LOG_LEVEL_ALIASES.get(level, level)
        if level not in {lvl.value for lvl in LogLevel}:
            return LogLevel.INFO.value
        return level

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


class CloudBridgeSettings(BaseSettings):
    """
    Configuracion del API de CloudBridge leida del entorno.

    Todos los campos son opcionales: un valor ausente (o vacio) deja que
    el cliente use su argumento explicito o el default hardcodeado.
    Se instancia en cada construccion de cliente, nunca al importar.
    """

    CLOUDBRIDGE_ACCESS_KEY: Optional[str] = Field(
        default=None,
        description="Access key publico enviado en el header x-access-key"
    )
    CLOUDBRIDGE_SECRET_KEY: Optional[str] = Field(
        default=None,
        description="Secret key usado solo para firmar (HMAC-SHA256), nunca se envia"
    )
    CLOUDBRIDGE_BASE_URL: Optional[str] = Field(
        default=None,
        description="URL base del API (override del endpoint productivo)"
    )
    CLOUDBRIDGE_TIMEOUT: Optional[int] = Field(
        default=None,
        description="Timeout en segundos para el request de upload"
    )

    @validator("CLOUDBRIDGE_BASE_URL")
    def validate_base_url(cls, v):
        """Remover trailing slash de la URL"""
        if v is not None and v.endswith("/"):
            return v.rstrip("/")
        return v

    @validator("CLOUDBRIDGE_TIMEOUT")
    def validate_timeout(cls, v):
        """El timeout debe ser positivo"""
        if v is not None and v <= 0:
            raise ValueError("CLOUDBRIDGE_TIMEOUT debe ser mayor a 0")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"
        env_ignore_empty = True


class LoggingSettings(BaseSettings):
    """Configuracion de logging"""

    LOG_DIR: str = Field(
        default="logs",
        description="Directorio donde se escriben los archivos de log"
    )
    LOG_RETENTION_DAYS: int = Field(
        default=1,
        description="Numero de archivos rotados (dias) a mantener"
    )

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


class Settings(BaseSettings):
    """
    Clase principal que agrupa la configuracion de logging
    Uso: from config.settings import get_settings
         get_settings().LOG_LEVEL, get_settings().logging.LOG_DIR, etc

    Los clientes de upload no pasan por aqui: leen CloudBridgeSettings()
    al construirse.
    """

    # Subconfigurations
    general: GeneralSettings = Field(default_factory=GeneralSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Shortcuts para acceso directo
    @property
    def LOG_LEVEL(self) -> str:
        return self.general.LOG_LEVEL

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Singleton (se crea en el primer uso, no al importar)
@lru_cache()
def get_settings() -> Settings:
    """
    Obtener instancia singleton de Settings
    Uso: from config.settings import get_settings
         settings = get_settings()
    """
    return Settings()
