"""
Tipos customizados e enumerações do sistema.
"""

from enum import Enum


# ENUMERAÇÕES

class ResponseKind(str, Enum):
    """Origem de um documento recebido."""

    LISTING = "listing"           # URL canônica da subcategoria
    PAGINATION = "pagination"     # Endpoint "carregar mais"


class CrawlStatus(str, Enum):
    """Status final de uma execução."""

    SUCCESS = "success"
    PARTIAL = "partial"           # Algumas subcategorias falharam
    FAILED = "failed"
    NO_RESULTS = "no_results"


class DispatchOutcome(str, Enum):
    """Resultado do despacho de uma subcategoria."""

    COLLECTED = "collected"
    FILTERED = "filtered"         # URL rejeitada pela deny-list
    FAILED = "failed"
    UNMATCHED = "unmatched"
    ABORTED = "aborted"           # Não despachada após um erro fatal

