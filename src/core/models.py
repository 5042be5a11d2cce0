"""
Modelos de dados do crawler.
Define a árvore Categoria -> Subcategoria -> Produto e os resultados
intermediários da correlação e da exportação.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import CorrelationError
from src.core.types import CrawlStatus, DispatchOutcome, ResponseKind


class Product(BaseModel):
    """
    Produto extraído de um tile de listagem.
    Todos os campos são strings opacas; campo ausente vira string vazia.
    """

    url: str = ""
    name: str = ""
    image_url: str = ""
    brand: str = ""
    quantity: str = ""
    price: str = ""
    price_unit: str = ""
    price_secondary: str = ""
    price_secondary_unit: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def clean_text(cls, v: Any) -> str:
        """Remove espaços das pontas; None vira string vazia."""
        if v is None:
            return ""
        return str(v).strip()


@dataclass(eq=False)
class SubCategory:
    """
    Subcategoria do menu de navegação.

    `listing_url` é a chave de correlação e nunca muda depois da criação.
    `pagination_url_prefix` começa vazio e só pode ser definido uma vez.
    """

    name: str
    listing_url: str
    products: list[Product] = field(default_factory=list)
    pagination_url_prefix: str = field(default="", init=False)

    def __setattr__(self, key: str, value: Any) -> None:
        if key == "listing_url" and key in self.__dict__:
            raise CorrelationError(
                "listing_url é imutável",
                details={"subcategory": self.name},
            )
        if key == "pagination_url_prefix" and self.__dict__.get(key):
            raise CorrelationError(
                "pagination_url_prefix já definido",
                details={"subcategory": self.name, "prefix": self.__dict__[key]},
            )
        super().__setattr__(key, value)

    def add_products(self, products: list[Product]) -> None:
        """Acrescenta produtos mantendo a ordem do documento."""
        self.products.extend(products)

    @property
    def products_count(self) -> int:
        return len(self.products)

    @property
    def has_pagination(self) -> bool:
        return bool(self.pagination_url_prefix)


@dataclass(eq=False)
class Category:
    """Categoria de topo com suas subcategorias."""

    name: str
    subcategories: list[SubCategory] = field(default_factory=list)

    @property
    def products_count(self) -> int:
        return sum(sub.products_count for sub in self.subcategories)


@dataclass(frozen=True)
class ResultsCounter:
    """Contador "<página> de <total> resultados" já convertido."""

    page_size: int
    total: int


@dataclass(frozen=True)
class PaginationPlan:
    """Continuação de uma subcategoria a partir do prefixo "carregar mais"."""

    prefix: str
    page_size: int
    total: int
    start: int

    def offsets(self) -> list[int]:
        """Offsets das páginas seguintes, até atingir o total declarado."""
        if self.page_size <= 0:
            return []
        return list(range(self.start, self.total, self.page_size))


@dataclass
class CorrelationOutcome:
    """Resultado do roteamento de um documento para a árvore."""

    url: str
    kind: ResponseKind
    subcategory: Optional[SubCategory] = None
    products_added: int = 0
    pagination: Optional[PaginationPlan] = None

    @property
    def matched(self) -> bool:
        return self.subcategory is not None


@dataclass
class ExportResult:
    """Resultado da exportação para arquivo."""

    path: str
    rows_written: int = 0
    rows_failed: int = 0


@dataclass
class CrawlSummary:
    """Resumo de uma execução completa."""

    site_id: str
    status: CrawlStatus = CrawlStatus.FAILED
    categories: int = 0
    subcategories: int = 0
    products: int = 0
    pages_fetched: int = 0
    outcomes: dict[str, int] = field(default_factory=dict)
    export: Optional[ExportResult] = None
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    def record(self, outcome: DispatchOutcome) -> None:
        """Contabiliza o resultado de uma subcategoria."""
        self.outcomes[outcome.value] = self.outcomes.get(outcome.value, 0) + 1

    def mark_finished(self) -> None:
        """Marca como finalizado."""
        self.finished_at = datetime.now()

    @property
    def duration_seconds(self) -> Optional[float]:
        """Duração em segundos."""
        if self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "site_id": self.site_id,
            "status": self.status.value,
            "categories": self.categories,
            "subcategories": self.subcategories,
            "products": self.products,
            "pages_fetched": self.pages_fetched,
            "outcomes": dict(self.outcomes),
            "output": self.export.path if self.export else None,
            "rows_written": self.export.rows_written if self.export else 0,
            "rows_failed": self.export.rows_failed if self.export else 0,
            "duration_seconds": self.duration_seconds,
        }
