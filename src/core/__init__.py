"""
Módulo core: modelos de dados, exceções, tipos e constantes.
"""

from src.core.models import (
    Product,
    SubCategory,
    Category,
    ResultsCounter,
    PaginationPlan,
    CorrelationOutcome,
    ExportResult,
    CrawlSummary,
)
from src.core.exceptions import (
    CrawlerError,
    FatalCrawlerError,
    FetchError,
    NetworkError,
    FetchTimeoutError,
    BlockedError,
    UrlFilteredError,
    DiscoveryError,
    ParsingError,
    PaginationUrlError,
    CorrelationError,
    StorageError,
    FileStorageError,
)
from src.core.types import (
    ResponseKind,
    CrawlStatus,
    DispatchOutcome,
)
from src.core.constants import CSV_COLUMNS

__all__ = [
    # Models
    "Product",
    "SubCategory",
    "Category",
    "ResultsCounter",
    "PaginationPlan",
    "CorrelationOutcome",
    "ExportResult",
    "CrawlSummary",
    # Exceptions
    "CrawlerError",
    "FatalCrawlerError",
    "FetchError",
    "NetworkError",
    "FetchTimeoutError",
    "BlockedError",
    "UrlFilteredError",
    "DiscoveryError",
    "ParsingError",
    "PaginationUrlError",
    "CorrelationError",
    "StorageError",
    "FileStorageError",
    # Types
    "ResponseKind",
    "CrawlStatus",
    "DispatchOutcome",
    # Constants
    "CSV_COLUMNS",
]
