"""
Configurações globais do crawler usando Pydantic Settings.
Carrega variáveis de ambiente e define valores padrão.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configurações principais do sistema."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Ambiente
    env: Literal["development", "production", "testing"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Site alvo
    site_id: str = "continente"

    # Rate Limiting (requisições por minuto)
    requests_per_minute: int = Field(default=30, ge=1, le=600)

    # Concorrência de subcategorias (1 = sequencial)
    max_concurrency: int = Field(default=1, ge=1, le=16)

    # Paginação ("carregar mais")
    follow_pagination: bool = True
    max_pagination_pages: int = Field(default=0, ge=0)

    # Timeouts (segundos por fetch)
    request_timeout: int = Field(default=30, ge=5, le=120)

    # Retries
    max_retries: int = Field(default=3, ge=1, le=10)
    retry_delay: int = Field(default=2, ge=1, le=30)

    # Paths
    base_path: Path = Field(default_factory=lambda: Path(__file__).parent.parent)
    data_path: Path = Field(default=Path("./data"))
    log_path: Path = Field(default=Path("./logs"))
    output_filename: str = "data.csv"

    # User Agent
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        )
    )

    # Playwright
    headless: bool = True

    @field_validator("data_path", "log_path", mode="after")
    @classmethod
    def ensure_path_exists(cls, v: Path) -> Path:
        """Garante que os diretórios existam."""
        v.mkdir(parents=True, exist_ok=True)
        return v

    @property
    def output_path(self) -> Path:
        """Caminho padrão do arquivo exportado."""
        return self.data_path / self.output_filename

    @property
    def request_timeout_ms(self) -> int:
        """Timeout de navegação no formato do Playwright."""
        return self.request_timeout * 1000


@lru_cache
def get_settings() -> Settings:
    """
    Retorna instância singleton das configurações.
    Usa cache para evitar recarregar .env múltiplas vezes.
    """
    return Settings()
