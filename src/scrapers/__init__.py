"""
Módulo de fetch: carregamento de páginas do site.
Filtros de URL, rate limiting e retry ficam na classe base; cada
implementação só sabe carregar uma página.
"""

from src.scrapers.base import BaseFetcher
from src.scrapers.document import Document
from src.scrapers.playwright_fetcher import PlaywrightFetcher
from src.scrapers.rate_limiter import RateLimiter
from src.scrapers.url_filter import UrlFilter

__all__ = [
    "BaseFetcher",
    "Document",
    "PlaywrightFetcher",
    "RateLimiter",
    "UrlFilter",
]
