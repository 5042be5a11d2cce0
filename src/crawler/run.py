"""
Contexto de uma execução do crawler.

Guarda a árvore Categoria -> Subcategoria -> Produto e as tabelas de
correlação (URL de listagem e prefixo de paginação -> subcategoria).
Cada execução tem o seu próprio CrawlRun, passado explicitamente aos
componentes.
"""

import asyncio
from collections import defaultdict
from typing import Iterator, Optional

from config.logging_config import LoggerMixin
from src.core.exceptions import CorrelationError
from src.core.models import Category, SubCategory


class CrawlRun(LoggerMixin):
    """
    Árvore de categorias de uma execução.

    A árvore é preenchida na descoberta e congelada antes do primeiro
    fetch de listagem. Depois disso só recebe produtos e prefixos de
    paginação; nada é removido ou substituído.
    """

    def __init__(self, site_id: str = ""):
        self.site_id = site_id
        self.categories: list[Category] = []
        self._by_listing_url: dict[str, SubCategory] = {}
        self._by_pagination_prefix: dict[str, SubCategory] = {}
        # Um escritor exclusivo por subcategoria
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._frozen = False

    # CONSTRUÇÃO DA ÁRVORE

    def add_category(self, category: Category) -> bool:
        """
        Adiciona uma categoria vinda da descoberta.

        Nomes de categoria repetidos são ignorados. Subcategorias com URL
        de listagem já conhecida são descartadas, mantendo a URL como
        chave única.

        Returns:
            True se a categoria entrou na árvore

        Raises:
            CorrelationError: Se a árvore já foi congelada
        """
        if self._frozen:
            raise CorrelationError(
                "Árvore congelada: categorias só entram na descoberta",
                details={"category": category.name},
            )

        if any(existing.name == category.name for existing in self.categories):
            self.logger.warning("Categoria repetida ignorada", category=category.name)
            return False

        unique: list[SubCategory] = []
        for subcategory in category.subcategories:
            if subcategory.listing_url in self._by_listing_url:
                self.logger.warning(
                    "Subcategoria com URL repetida ignorada",
                    category=category.name,
                    subcategory=subcategory.name,
                    url=subcategory.listing_url,
                )
                continue
            self._by_listing_url[subcategory.listing_url] = subcategory
            unique.append(subcategory)

        category.subcategories = unique
        self.categories.append(category)
        return True

    def freeze(self) -> None:
        """Encerra a fase de descoberta."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # CORRELAÇÃO

    def find_by_listing_url(self, url: str) -> Optional[SubCategory]:
        return self._by_listing_url.get(url)

    def find_by_pagination_prefix(self, prefix: str) -> Optional[SubCategory]:
        return self._by_pagination_prefix.get(prefix)

    def register_pagination_prefix(self, subcategory: SubCategory, prefix: str) -> None:
        """
        Define o prefixo de paginação da subcategoria e o indexa.

        Raises:
            CorrelationError: Prefixo já definido, ou já usado por outra
                subcategoria
        """
        owner = self._by_pagination_prefix.get(prefix)
        if owner is not None and owner is not subcategory:
            raise CorrelationError(
                "Prefixo de paginação já pertence a outra subcategoria",
                details={
                    "prefix": prefix,
                    "owner": owner.name,
                    "subcategory": subcategory.name,
                },
            )

        subcategory.pagination_url_prefix = prefix
        self._by_pagination_prefix[prefix] = subcategory

    def lock_for(self, subcategory: SubCategory) -> asyncio.Lock:
        return self._locks[subcategory.listing_url]

    # CONSULTAS

    def subcategories(self) -> Iterator[tuple[Category, SubCategory]]:
        """Percorre (categoria, subcategoria) na ordem da árvore."""
        for category in self.categories:
            for subcategory in category.subcategories:
                yield category, subcategory

    @property
    def subcategories_count(self) -> int:
        return len(self._by_listing_url)

    @property
    def products_count(self) -> int:
        return sum(category.products_count for category in self.categories)
