from urllib.parse import quote

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Worker configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "documentmanagement"
    db_username: str = "postgres"
    db_password: str = "secret"
    db_pool_min_size: int = Field(default=1, ge=1)
    db_pool_max_size: int = Field(default=5, ge=1)
    db_connect_timeout_seconds: int = Field(default=10, ge=1)

    rabbitmq_host: str = "localhost"
    rabbitmq_port: int = 5672
    rabbitmq_username: str = "guest"
    rabbitmq_password: str = "guest"
    rabbitmq_virtual_host: str = "/"
    rabbitmq_queue_name: str = "ocr_queue"
    rabbitmq_prefetch_count: int = Field(default=1, ge=1)
    rabbitmq_poll_timeout_seconds: float = Field(default=1.0, gt=0)
    rabbitmq_reconnect_delay_seconds: float = Field(default=5.0, ge=0)

    minio_endpoint: str = "localhost:9000"
    minio_access_key: str = "minioadmin"
    minio_secret_key: str = "minioadmin"
    minio_use_ssl: bool = False
    minio_region: str = "us-east-1"

    pdf_engine: str = "pdfplumber"

    ocr_dpi: int = Field(default=300, ge=72, le=1200)
    ocr_min_embedded_text_length: int = Field(default=50, ge=0)
    ocr_language: str = "eng"
    ocr_tessdata_path: str | None = None
    ocr_engine_mode: int = Field(default=3, ge=0, le=3)
    ocr_page_segmentation_mode: int = Field(default=3, ge=0, le=13)
    ocr_page_timeout_seconds: int = Field(default=120, ge=0)

    summarizer_provider: str = "gemini"
    summary_max_length: int = Field(default=200, ge=1)

    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_api_endpoint: str = "https://generativelanguage.googleapis.com/v1beta/models"
    gemini_max_retries: int = Field(default=3, ge=1, le=10)
    gemini_timeout_seconds: int = Field(default=30, ge=5, le=120)
    gemini_max_prompt_length: int = Field(default=10000, ge=1)
    gemini_retry_base_delay_seconds: float = Field(default=1.0, ge=0)
    gemini_retry_max_delay_seconds: float = Field(default=30.0, ge=0)

    elasticsearch_uri: str = "http://localhost:9200"
    elasticsearch_index: str = "documents"
    elasticsearch_timeout_seconds: float = Field(default=10.0, gt=0)

    @property
    def rabbitmq_url(self) -> str:
        """AMQP URL for kombu built from the individual broker settings."""
        vhost = quote(self.rabbitmq_virtual_host.lstrip("/"), safe="")
        username = quote(self.rabbitmq_username, safe="")
        password = quote(self.rabbitmq_password, safe="")
        return (
            f"amqp://{username}:{password}"
            f"@{self.rabbitmq_host}:{self.rabbitmq_port}/{vhost}"
        )

    @property
    def minio_endpoint_url(self) -> str:
        scheme = "https" if self.minio_use_ssl else "http"
        return f"{scheme}://{self.minio_endpoint}"
