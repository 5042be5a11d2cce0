"""
Filtro de URLs aplicado antes de cada fetch.
Domínios permitidos + deny-list de expressões regulares.
"""

import re
from typing import Iterable, Optional
from urllib.parse import urlparse

from config.logging_config import LoggerMixin
from config.sites import SiteConfig


class UrlFilter(LoggerMixin):
    """
    Decide se uma URL pode ser buscada.

    Uma URL é rejeitada se o host não estiver entre os domínios
    permitidos (quando houver algum configurado) ou se casar com
    qualquer padrão da deny-list.
    """

    def __init__(
        self,
        allowed_domains: Optional[Iterable[str]] = None,
        denied_url_patterns: Optional[Iterable[str]] = None,
    ):
        self.allowed_domains = {d.lower() for d in (allowed_domains or [])}
        self.denied_patterns: list[re.Pattern] = [
            re.compile(pattern) for pattern in (denied_url_patterns or [])
        ]

    @classmethod
    def from_site(cls, site: SiteConfig) -> "UrlFilter":
        return cls(site.allowed_domains, site.denied_url_patterns)

    def rejection_reason(self, url: str) -> Optional[str]:
        """
        Motivo pelo qual a URL seria rejeitada, ou None se permitida.
        """
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https"):
            return "scheme"

        host = (parsed.hostname or "").lower()
        if self.allowed_domains and host not in self.allowed_domains:
            return "domain"

        for pattern in self.denied_patterns:
            if pattern.search(url):
                return f"denied:{pattern.pattern}"

        return None

    def is_allowed(self, url: str) -> bool:
        return self.rejection_reason(url) is None
