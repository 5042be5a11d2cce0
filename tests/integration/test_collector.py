"""
Testes de integração para o CatalogCollector.
"""

import pytest

from src.collector import CatalogCollector
from src.core.exceptions import DiscoveryError, PaginationUrlError
from src.core.types import CrawlStatus
from src.storage import CSVExporter
from tests.fixtures.fake_fetcher import FakeFetcher
from tests.fixtures.html_samples import (
    BASE_URL,
    BREAD_DISCOVERY_PAGE,
    ROLLS_LISTING,
    ROLLS_PREFIX,
    ROLLS_URL,
    TALHO_URL,
    listing_page,
)


def make_collector(site, settings, pages) -> CatalogCollector:
    return CatalogCollector(
        site=site,
        settings=settings,
        fetcher=FakeFetcher(site, settings, pages),
        configure_logging=False,
    )


class TestCatalogCollector:
    """Testes de integração para CatalogCollector."""

    def test_get_available_sites(self):
        sites = CatalogCollector.get_available_sites()

        assert [s["id"] for s in sites] == ["continente"]
        assert sites[0]["url"] == "https://www.continente.pt/"

    @pytest.mark.asyncio
    async def test_cenario_bread_rolls(self, site, settings, output_path):
        """Descoberta -> listagem -> exportação de ponta a ponta."""
        pages = {BASE_URL: BREAD_DISCOVERY_PAGE, ROLLS_URL: ROLLS_LISTING}
        collector = make_collector(site, settings, pages)

        summary = await collector.run(output_path=output_path)

        assert summary.status is CrawlStatus.SUCCESS
        assert summary.categories == 1
        assert summary.subcategories == 1
        assert summary.products == 2
        assert summary.export.rows_written == 2
        assert collector.fetcher.requested == [BASE_URL, ROLLS_URL]

        lines = output_path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 3
        for line in lines[1:]:
            assert line.startswith(f"Bread,Rolls,{ROLLS_URL},")

    @pytest.mark.asyncio
    async def test_cenario_bread_rolls_prefixo(self, site, settings, output_path):
        pages = {BASE_URL: BREAD_DISCOVERY_PAGE, ROLLS_URL: ROLLS_LISTING}
        collector = make_collector(site, settings, pages)
        captured = {}

        original_export = collector.exporter.export

        def export(run, path):
            captured["run"] = run
            return original_export(run, path)

        collector.exporter.export = export
        await collector.run(output_path=output_path)

        rolls = captured["run"].find_by_listing_url(ROLLS_URL)
        assert rolls.pagination_url_prefix == ROLLS_PREFIX
        assert [p.name for p in rolls.products] == ["Papo-seco", "Pão de Mafra"]

    @pytest.mark.asyncio
    async def test_site_completo_parcial(self, site, settings, site_pages, output_path):
        """Testa status parcial quando uma subcategoria falha."""
        collector = make_collector(site, settings, site_pages)

        summary = await collector.run(output_path=output_path)

        assert summary.status is CrawlStatus.PARTIAL
        assert summary.products == 6
        assert summary.outcomes == {"collected": 2, "failed": 1, "filtered": 1}
        assert summary.pages_fetched == 5
        assert CSVExporter().summarize(output_path) == [
            {"category_name": "Frescos", "sub_category_name": "Talho", "products": 5},
            {"category_name": "Frescos", "sub_category_name": "Peixaria", "products": 1},
        ]

    @pytest.mark.asyncio
    async def test_fetcher_aberto_e_fechado(self, site, settings, site_pages, output_path):
        collector = make_collector(site, settings, site_pages)

        await collector.run(output_path=output_path)

        assert collector.fetcher.started
        assert collector.fetcher.closed

    @pytest.mark.asyncio
    async def test_sem_produtos(self, site, settings, output_path):
        pages = {
            BASE_URL: BREAD_DISCOVERY_PAGE,
            ROLLS_URL: listing_page([], counter="sem resultados"),
        }
        collector = make_collector(site, settings, pages)

        summary = await collector.run(output_path=output_path)

        assert summary.status is CrawlStatus.NO_RESULTS
        assert summary.export.rows_written == 0

    @pytest.mark.asyncio
    async def test_descoberta_falha(self, site, settings, output_path):
        collector = make_collector(site, settings, {})

        with pytest.raises(DiscoveryError):
            await collector.run(output_path=output_path)

        assert collector.fetcher.closed
        assert not output_path.exists()

    @pytest.mark.asyncio
    async def test_erro_fatal_nao_exporta(self, site, settings, site_pages, output_path):
        """Testa que a URL de paginação malformada aborta sem escrever o CSV."""
        site_pages[TALHO_URL] = listing_page([], counter="0 de 10 resultados")
        collector = make_collector(site, settings, site_pages)

        with pytest.raises(PaginationUrlError):
            await collector.run(output_path=output_path)

        assert not output_path.exists()
