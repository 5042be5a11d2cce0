"""
Correlador de respostas.

Todo documento recebido passa por aqui. O tipo (listagem ou "carregar
mais") é decidido pela URL requisitada, que também dá a chave de
correlação:

- listagem: a própria URL, comparada com SubCategory.listing_url;
- paginação: a URL reduzida ao prefixo antes do marcador de offset,
  comparada com SubCategory.pagination_url_prefix.
"""

from typing import Optional

from config.logging_config import LoggerMixin
from config.sites import SiteConfig
from src.core.exceptions import CorrelationError, ParsingError
from src.core.models import CorrelationOutcome, PaginationPlan, SubCategory
from src.core.types import ResponseKind
from src.crawler.run import CrawlRun
from src.pipeline.extractor import (
    extract_load_more_url,
    extract_products,
    extract_results_counter,
)
from src.pipeline.parser import parse_results_counter, reduce_prefix
from src.scrapers.document import Document


class ResponseCorrelator(LoggerMixin):
    """Roteia documentos para o nó da árvore que os originou."""

    def __init__(self, run: CrawlRun, site: SiteConfig):
        self.run = run
        self.site = site

    def classify(self, url: str) -> ResponseKind:
        """Tipo de resposta a partir da URL requisitada."""
        if self.site.pagination_marker and self.site.pagination_marker in url:
            return ResponseKind.PAGINATION
        return ResponseKind.LISTING

    def find_subcategory(self, url: str, kind: ResponseKind) -> Optional[SubCategory]:
        """
        Procura a subcategoria dona da URL.

        Raises:
            PaginationUrlError: URL de paginação sem marcador de offset
                único (fatal)
        """
        if kind is ResponseKind.PAGINATION:
            prefix = reduce_prefix(url, self.site.offset_marker)
            return self.run.find_by_pagination_prefix(prefix)
        return self.run.find_by_listing_url(url)

    async def handle(self, document: Document) -> CorrelationOutcome:
        """
        Correlaciona um documento e acumula seus produtos.

        Respostas sem subcategoria correspondente são registradas no log
        e descartadas. Para respostas de listagem, o contador de
        resultados e o botão "carregar mais" definem o plano de
        continuação.

        Args:
            document: Documento recebido

        Returns:
            Resultado da correlação

        Raises:
            PaginationUrlError: URL de paginação malformada (fatal)
        """
        kind = self.classify(document.url)
        outcome = CorrelationOutcome(url=document.url, kind=kind)

        subcategory = self.find_subcategory(document.url, kind)
        if subcategory is None:
            self.logger.warning(
                "Subcategoria não encontrada para a resposta",
                url=document.url,
                kind=kind.value,
            )
            return outcome

        outcome.subcategory = subcategory
        async with self.run.lock_for(subcategory):
            self._apply(document, outcome)

        return outcome

    def _apply(self, document: Document, outcome: CorrelationOutcome) -> None:
        subcategory = outcome.subcategory
        log = self.logger.bind(subcategory=subcategory.name, url=document.url)

        products = extract_products(document, self.site)
        subcategory.add_products(products)
        outcome.products_added = len(products)
        log.debug("Produtos acumulados", added=len(products), total=subcategory.products_count)

        # "Carregar mais" não traz contador nem dispara novos fetches
        if outcome.kind is ResponseKind.PAGINATION:
            return

        counter_raw = extract_results_counter(document, self.site)
        try:
            counter = parse_results_counter(counter_raw)
        except ParsingError as e:
            log.warning(
                "Não foi possível interpretar o contador de resultados",
                counter=counter_raw,
                error=e.message,
            )
            return

        load_more_raw = extract_load_more_url(document, self.site)
        prefix = reduce_prefix(load_more_raw, self.site.offset_marker)

        try:
            self.run.register_pagination_prefix(subcategory, prefix)
        except CorrelationError as e:
            log.warning("Prefixo de paginação rejeitado", prefix=prefix, error=str(e))
            return

        outcome.pagination = PaginationPlan(
            prefix=prefix,
            page_size=counter.page_size,
            total=counter.total,
            start=counter.page_size,
        )
        log.info(
            "Contador de resultados",
            page_size=counter.page_size,
            total=counter.total,
        )
