"""
Despacho dos fetches de descoberta, listagem e paginação.
"""

import asyncio
from typing import Optional

import structlog

from config.logging_config import LoggerMixin
from config.settings import Settings, get_settings
from config.sites import SiteConfig
from src.core.exceptions import (
    DiscoveryError,
    FatalCrawlerError,
    FetchError,
    UrlFilteredError,
)
from src.core.models import Category, PaginationPlan, SubCategory
from src.core.types import DispatchOutcome
from src.crawler.correlator import ResponseCorrelator
from src.crawler.run import CrawlRun
from src.pipeline.extractor import extract_categories
from src.pipeline.parser import build_pagination_url
from src.scrapers.base import BaseFetcher


class CrawlDispatcher(LoggerMixin):
    """
    Coordena os fetches de uma execução.

    Subcategorias diferentes podem ser buscadas em paralelo (limitado por
    `max_concurrency`); as páginas "carregar mais" de uma mesma
    subcategoria são sempre sequenciais.
    """

    def __init__(
        self,
        fetcher: BaseFetcher,
        site: SiteConfig,
        run: Optional[CrawlRun] = None,
        settings: Optional[Settings] = None,
    ):
        self.fetcher = fetcher
        self.site = site
        self.run = run or CrawlRun(site.id)
        self.settings = settings or get_settings()
        self.correlator = ResponseCorrelator(self.run, site)
        # Sinalizado pelo primeiro erro fatal; nenhum fetch novo depois dele
        self._aborted = asyncio.Event()

    # DESCOBERTA

    async def discover(self, url: Optional[str] = None) -> list[Category]:
        """
        Busca a página de descoberta e popula a árvore.

        A árvore é congelada ao final: nenhuma categoria ou subcategoria
        é criada depois desta fase.

        Raises:
            DiscoveryError: Falha ao buscar a página (fatal)
        """
        url = url or self.site.base_url
        try:
            document = await self.fetcher.fetch(url)
        except FetchError as e:
            raise DiscoveryError(url=url, cause=e) from e

        added = [
            category
            for category in extract_categories(document, self.site)
            if self.run.add_category(category)
        ]
        self.run.freeze()

        if not added:
            self.logger.warning("Nenhuma categoria encontrada na descoberta", url=url)

        self.logger.info(
            "Descoberta concluída",
            categories=len(added),
            subcategories=self.run.subcategories_count,
        )
        return added

    # LISTAGEM

    @property
    def aborted(self) -> bool:
        return self._aborted.is_set()

    async def dispatch_all(self) -> list[DispatchOutcome]:
        """
        Despacha um fetch de listagem por subcategoria, na ordem da árvore.

        Falhas de uma subcategoria não afetam as demais. Um erro fatal
        interrompe a execução: nenhuma subcategoria ou página é buscada
        depois dele, as tarefas em andamento são canceladas e o erro é
        propagado.

        Returns:
            Resultado de cada subcategoria, na ordem da árvore
        """
        semaphore = asyncio.Semaphore(self.settings.max_concurrency)
        tasks = [
            asyncio.create_task(self._guarded_dispatch(subcategory, semaphore))
            for _, subcategory in self.run.subcategories()
        ]

        try:
            return list(await asyncio.gather(*tasks))
        except Exception:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _guarded_dispatch(
        self,
        subcategory: SubCategory,
        semaphore: asyncio.Semaphore,
    ) -> DispatchOutcome:
        async with semaphore:
            if self.aborted:
                return DispatchOutcome.ABORTED
            try:
                return await self.dispatch_subcategory(subcategory)
            except FatalCrawlerError:
                self._aborted.set()
                raise

    async def dispatch_subcategory(self, subcategory: SubCategory) -> DispatchOutcome:
        """Busca a listagem de uma subcategoria e segue a paginação."""
        with structlog.contextvars.bound_contextvars(subcategory=subcategory.name):
            return await self._dispatch_subcategory(subcategory)

    async def _dispatch_subcategory(self, subcategory: SubCategory) -> DispatchOutcome:
        log = self.logger.bind(url=subcategory.listing_url)

        try:
            document = await self.fetcher.fetch(subcategory.listing_url)
        except UrlFilteredError as e:
            log.debug("URL ignorada pelos filtros", reason=e.reason)
            return DispatchOutcome.FILTERED
        except FetchError as e:
            log.error("Erro ao buscar listagem", error=str(e))
            return DispatchOutcome.FAILED

        outcome = await self.correlator.handle(document)
        if not outcome.matched:
            return DispatchOutcome.UNMATCHED

        if outcome.pagination is not None:
            if self.settings.follow_pagination:
                await self.follow_pagination(subcategory, outcome.pagination)
            else:
                log.debug(
                    "Paginação desativada, apenas a primeira página foi coletada",
                    total=outcome.pagination.total,
                )

        return DispatchOutcome.COLLECTED

    # PAGINAÇÃO

    async def _reached_total(self, subcategory: SubCategory, plan: PaginationPlan) -> bool:
        async with self.run.lock_for(subcategory):
            return subcategory.products_count >= plan.total

    async def follow_pagination(self, subcategory: SubCategory, plan: PaginationPlan) -> int:
        """
        Busca as páginas "carregar mais" até atingir o total declarado.

        A sequência continua enquanto o offset e a quantidade de produtos
        acumulados forem menores que o total. Cada resposta passa pelo
        correlador como qualquer outra. Uma página sem produtos também
        interrompe a sequência.

        Returns:
            Quantidade de páginas buscadas
        """
        log = self.log_operation("pagination")

        offsets = plan.offsets()
        if self.settings.max_pagination_pages:
            offsets = offsets[: self.settings.max_pagination_pages]

        fetched = 0
        for offset in offsets:
            if self.aborted:
                break
            if await self._reached_total(subcategory, plan):
                log.debug("Total declarado atingido", offset=offset, total=plan.total)
                break

            url = build_pagination_url(
                plan.prefix,
                offset,
                plan.page_size,
                self.site.offset_marker,
                self.site.page_size_param,
            )

            try:
                document = await self.fetcher.fetch(url)
            except UrlFilteredError as e:
                log.debug("URL de paginação ignorada pelos filtros", url=url, reason=e.reason)
                break
            except FetchError as e:
                log.error("Erro ao buscar página", url=url, offset=offset, error=str(e))
                continue

            fetched += 1
            outcome = await self.correlator.handle(document)
            if outcome.products_added == 0:
                log.info("Página sem produtos, paginação interrompida", offset=offset)
                break

        log.info(
            "Paginação concluída",
            pages=fetched,
            products=subcategory.products_count,
            total=plan.total,
        )
        return fetched
