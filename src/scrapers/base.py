"""
Classe base dos fetchers de páginas.
Aplica filtros de URL, rate limiting e retry antes de delegar o
carregamento da página à implementação concreta.
"""

from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import urlparse

from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from config.logging_config import LoggerMixin
from config.settings import Settings, get_settings
from config.sites import SiteConfig
from src.core.constants import RETRY_STATUS_CODES
from src.core.exceptions import FetchTimeoutError, NetworkError, UrlFilteredError
from src.scrapers.document import Document
from src.scrapers.rate_limiter import RateLimiter
from src.scrapers.url_filter import UrlFilter


def is_retryable(error: BaseException) -> bool:
    """Timeouts e erros de rede transitórios merecem nova tentativa."""
    if isinstance(error, FetchTimeoutError):
        return True
    if isinstance(error, NetworkError):
        return error.status_code is None or error.status_code in RETRY_STATUS_CODES
    return False


class BaseFetcher(ABC, LoggerMixin):
    """
    Classe base abstrata para fetchers.
    Implementa filtros, rate limiting e retry; subclasses só carregam a página.
    """

    def __init__(
        self,
        site: SiteConfig,
        settings: Optional[Settings] = None,
        url_filter: Optional[UrlFilter] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        """
        Inicializa o fetcher.

        Args:
            site: Configuração do site
            settings: Configurações (None = globais)
            url_filter: Filtro de URLs (None = derivado do site)
            rate_limiter: Rate limiter (None = um novo por fetcher)
        """
        self.site = site
        self.settings = settings or get_settings()
        self.url_filter = url_filter or UrlFilter.from_site(site)
        self.rate_limiter = rate_limiter or RateLimiter(self.settings.requests_per_minute)
        self.rate_limiter.configure(
            urlparse(site.base_url).hostname or "",
            site.requests_per_minute or self.settings.requests_per_minute,
        )
        self.pages_fetched = 0

    @abstractmethod
    async def _load(self, url: str) -> Document:
        """
        Carrega uma única página.

        Raises:
            NetworkError: Falha de rede ou status HTTP de erro
            FetchTimeoutError: Timeout de navegação
        """
        pass

    async def start(self) -> None:
        """Aloca recursos (browser, sessão)."""
        return None

    async def close(self) -> None:
        """Libera recursos."""
        return None

    async def __aenter__(self) -> "BaseFetcher":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def fetch(self, url: str) -> Document:
        """
        Busca uma URL absoluta.

        Args:
            url: URL a buscar

        Returns:
            Documento carregado

        Raises:
            UrlFilteredError: URL rejeitada pelos filtros (nunca buscada)
            FetchError: Falha após esgotar as tentativas
        """
        reason = self.url_filter.rejection_reason(url)
        if reason:
            raise UrlFilteredError(url=url, reason=reason)

        host = urlparse(url).hostname or ""
        await self.rate_limiter.acquire(host)

        self.logger.info(
            "Visitando",
            url=url,
            requests_last_minute=self.rate_limiter.usage(host),
        )

        document: Optional[Document] = None
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.settings.max_retries),
            wait=wait_exponential(
                multiplier=1,
                min=self.settings.retry_delay,
                max=10,
            ),
            retry=retry_if_exception(is_retryable),
            reraise=True,
        ):
            with attempt:
                document = await self._load(url)

        self.pages_fetched += 1
        return document
