from typing import Any
from urllib.parse import quote_plus

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuración de la aplicación utilizando Pydantic BaseSettings.
    Carga automáticamente las variables de entorno.
    """

    # API Configuration
    PROJECT_NAME: str = "Turnos API"
    PROJECT_DESCRIPTION: str = "API de turnos médicos con Google Calendar y recordatorios por WhatsApp"
    VERSION: str = "0.1.0"

    # Environment
    DEBUG: bool = Field(False, description="Modo debug")
    ENVIRONMENT: str = Field("development", description="Entorno de ejecución")

    # PostgreSQL Database Settings
    DATABASE_URL: str | None = Field(
        None, description="URL completa de conexión (sobrescribe DB_HOST, DB_PORT, etc.)"
    )
    DB_HOST: str = Field("localhost", description="Host de PostgreSQL")
    DB_PORT: int = Field(5432, description="Puerto de PostgreSQL")
    DB_NAME: str = Field("turnos", description="Nombre de la base de datos")
    DB_USER: str = Field("postgres", description="Usuario de PostgreSQL")
    DB_PASSWORD: str | None = Field(None, description="Contraseña de PostgreSQL")
    DB_ECHO: bool = Field(False, description="Log SQL queries (solo para debug)")

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(10, description="Tamaño del pool de conexiones")
    DB_MAX_OVERFLOW: int = Field(20, description="Máximo overflow del pool")
    DB_POOL_RECYCLE: int = Field(3600, description="Reciclar conexiones cada X segundos")
    DB_POOL_TIMEOUT: int = Field(30, description="Timeout para obtener conexión del pool")

    # Google Calendar Settings
    GOOGLE_CALENDAR_ID: str = Field("primary", description="ID del calendario donde se crean los turnos")
    GOOGLE_SECRET_NAME: str = Field(
        "turnos/google-service-account", description="Nombre del secreto con la cuenta de servicio de Google"
    )
    GOOGLE_IMPERSONATE_USER: str | None = Field(
        None, description="Usuario a impersonar (delegación de dominio) al usar la cuenta de servicio"
    )
    CALENDAR_TIMEZONE: str = Field(
        "America/Argentina/Buenos_Aires", description="Zona horaria de los eventos de calendario"
    )

    # AWS Settings
    AWS_REGION: str = Field("us-east-1", description="Región de AWS para Secrets Manager")

    # WhatsApp API settings
    WHATSAPP_API_BASE: str = Field("https://graph.facebook.com", description="URL base para la API de WhatsApp")
    WHATSAPP_API_VERSION: str = Field("v21.0", description="Versión de la API de WhatsApp")
    WHATSAPP_PHONE_NUMBER_ID: str = Field("", description="ID del número de teléfono de WhatsApp")
    WHATSAPP_ACCESS_TOKEN: str = Field("", description="Token de acceso permanente para la API de WhatsApp")
    WHATSAPP_VERIFY_TOKEN: str = Field(
        "turnos-mvp-verify", description="Token de verificación para el webhook de WhatsApp"
    )
    WHATSAPP_TEMPLATE_NAME: str = Field(
        "appointment_reminder", description="Nombre de la plantilla de recordatorio aprobada en Meta"
    )
    WHATSAPP_TEMPLATE_LANG: str = Field("es_AR", description="Código de idioma de la plantilla de recordatorio")
    WHATSAPP_TIMEOUT: float = Field(30.0, description="Timeout en segundos para llamadas a la API de WhatsApp")

    # Reminder Scheduler Settings
    REMINDER_SCHEDULER_ENABLED: bool = Field(True, description="Habilitar el envío automático de recordatorios")
    REMINDER_CHECK_INTERVAL_MINUTES: int = Field(30, description="Frecuencia de búsqueda de turnos a recordar")
    REMINDER_WINDOW_START_HOURS: int = Field(47, description="Inicio de la ventana de recordatorio (horas)")
    REMINDER_WINDOW_END_HOURS: int = Field(49, description="Fin de la ventana de recordatorio (horas)")
    EXPIRY_SWEEP_INTERVAL_MINUTES: int = Field(60, description="Frecuencia de borrado de turnos vencidos")

    # Sentry Settings
    SENTRY_DSN: str | None = Field(None, description="DSN de Sentry para reporte de errores")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignorar campos extras en lugar de generar un error
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("REMINDER_CHECK_INTERVAL_MINUTES", "EXPIRY_SWEEP_INTERVAL_MINUTES")
    @classmethod
    def validate_interval(cls, v):
        if v < 1:
            raise ValueError("Scheduler intervals must be at least 1 minute")
        return v

    @field_validator("REMINDER_WINDOW_END_HOURS")
    @classmethod
    def validate_window_end(cls, v, info):
        start = info.data.get("REMINDER_WINDOW_START_HOURS")
        if start is not None and v <= start:
            raise ValueError("REMINDER_WINDOW_END_HOURS must be greater than REMINDER_WINDOW_START_HOURS")
        return v

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v):
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        if v > 100:
            raise ValueError("DB_POOL_SIZE should not exceed 100")
        return v

    @computed_field
    @property
    def database_url(self) -> str:
        """Construye la URL de conexión asíncrona a la base de datos"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        user = quote_plus(self.DB_USER)
        if self.DB_PASSWORD:
            password = quote_plus(self.DB_PASSWORD)
            return f"postgresql+asyncpg://{user}:{password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        return f"postgresql+asyncpg://{user}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"


# Singleton para configuración
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """
    Retorna una instancia cacheada de la configuración.
    Esto evita cargar las variables de entorno múltiples veces.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
