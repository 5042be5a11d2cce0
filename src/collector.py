"""
CatalogCollector: orquestrador principal do sistema.
Coordena descoberta, despacho das subcategorias e exportação.
"""

from pathlib import Path
from typing import Optional, Union

from config.logging_config import LoggerMixin, setup_logging
from config.settings import Settings, get_settings
from config.sites import SiteConfig, get_active_sites, get_site_config
from src.core.exceptions import FatalCrawlerError
from src.core.models import CrawlSummary
from src.core.types import CrawlStatus, DispatchOutcome
from src.crawler import CrawlDispatcher, CrawlRun
from src.scrapers import BaseFetcher, PlaywrightFetcher
from src.storage import CSVExporter


class CatalogCollector(LoggerMixin):
    """
    Orquestrador de uma execução completa.

    Responsabilidades:
    - Buscar a página de descoberta e montar a árvore
    - Despachar as listagens e a paginação de cada subcategoria
    - Exportar o resultado para CSV
    """

    def __init__(
        self,
        site: Optional[SiteConfig] = None,
        settings: Optional[Settings] = None,
        fetcher: Optional[BaseFetcher] = None,
        exporter: Optional[CSVExporter] = None,
        configure_logging: bool = True,
    ):
        """
        Inicializa o coletor.

        Args:
            site: Site alvo (None = settings.site_id)
            settings: Configurações (None = globais)
            fetcher: Fetcher de páginas (None = Playwright)
            exporter: Exportador (None = CSV)
            configure_logging: Se deve configurar o structlog
        """
        self.settings = settings or get_settings()
        self.site = site or get_site_config(self.settings.site_id)
        self.fetcher = fetcher or PlaywrightFetcher(self.site, self.settings)
        self.exporter = exporter or CSVExporter()

        if configure_logging:
            setup_logging(
                level=self.settings.log_level,
                log_path=self.settings.log_path,
                json_format=self.settings.env == "production",
                site_id=self.site.id,
            )

        self.logger.info(
            "CatalogCollector inicializado",
            site=self.site.id,
            concurrency=self.settings.max_concurrency,
            follow_pagination=self.settings.follow_pagination,
        )

    async def run(self, output_path: Optional[Union[str, Path]] = None) -> CrawlSummary:
        """
        Executa o crawl completo e exporta o resultado.

        Args:
            output_path: Arquivo de saída (None = settings.output_path)

        Returns:
            Resumo da execução

        Raises:
            FatalCrawlerError: Descoberta, URL de paginação ou arquivo de
                saída com falha
        """
        output_path = Path(output_path) if output_path else self.settings.output_path
        summary = CrawlSummary(site_id=self.site.id)
        run = CrawlRun(self.site.id)

        try:
            async with self.fetcher:
                dispatcher = CrawlDispatcher(
                    self.fetcher,
                    self.site,
                    run=run,
                    settings=self.settings,
                )
                await dispatcher.discover()
                for outcome in await dispatcher.dispatch_all():
                    summary.record(outcome)

            summary.export = self.exporter.export(run, output_path)

        except FatalCrawlerError as e:
            summary.status = CrawlStatus.FAILED
            self.logger.error("Execução abortada", **e.to_dict())
            raise

        finally:
            summary.categories = len(run.categories)
            summary.subcategories = run.subcategories_count
            summary.products = run.products_count
            summary.pages_fetched = self.fetcher.pages_fetched
            summary.mark_finished()

        summary.status = self._resolve_status(summary)

        self.logger.info(
            "Execução finalizada",
            status=summary.status.value,
            categories=summary.categories,
            subcategories=summary.subcategories,
            products=summary.products,
            pages=summary.pages_fetched,
            duration=f"{summary.duration_seconds:.2f}s" if summary.duration_seconds else "N/A",
        )
        return summary

    def _resolve_status(self, summary: CrawlSummary) -> CrawlStatus:
        if summary.products == 0:
            return CrawlStatus.NO_RESULTS

        failures = (
            summary.outcomes.get(DispatchOutcome.FAILED.value, 0)
            + summary.outcomes.get(DispatchOutcome.UNMATCHED.value, 0)
        )
        if failures:
            return CrawlStatus.PARTIAL
        return CrawlStatus.SUCCESS

    @staticmethod
    def get_available_sites() -> list[dict]:
        """Lista de sites disponíveis."""
        return [
            {
                "id": site.id,
                "name": site.display_name,
                "url": site.base_url,
                "status": site.status.value,
            }
            for site in get_active_sites()
        ]
