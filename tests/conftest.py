"""
Configurações e fixtures compartilhadas para pytest.
"""

from pathlib import Path

import pytest

from config.settings import Settings
from config.sites import CONTINENTE_CONFIG, SiteConfig
from src.crawler import CrawlDispatcher, CrawlRun, ResponseCorrelator
from tests.fixtures.fake_fetcher import FakeFetcher
from tests.fixtures.html_samples import (
    BASE_URL,
    DISCOVERY_PAGE,
    PEIXARIA_LISTING,
    PEIXARIA_URL,
    TALHO_LISTING,
    TALHO_PAGE_2,
    TALHO_PAGE_3,
    TALHO_URL,
    talho_page_url,
)


# FIXTURES DE CONFIGURAÇÃO

@pytest.fixture
def settings(tmp_path) -> Settings:
    """Configurações isoladas para testes (sem .env, sem espera)."""
    return Settings(
        _env_file=None,
        env="testing",
        data_path=tmp_path / "data",
        log_path=tmp_path / "logs",
        max_retries=1,
        retry_delay=1,
        requests_per_minute=600,
    )


@pytest.fixture
def site() -> SiteConfig:
    """Configuração do Continente."""
    return CONTINENTE_CONFIG


@pytest.fixture
def output_path(tmp_path) -> Path:
    """Arquivo CSV temporário."""
    return tmp_path / "out" / "data.csv"


# FIXTURES DE PÁGINAS

@pytest.fixture
def site_pages() -> dict[str, str]:
    """Site completo: descoberta, listagens e páginas "carregar mais"."""
    return {
        BASE_URL: DISCOVERY_PAGE,
        TALHO_URL: TALHO_LISTING,
        talho_page_url(2): TALHO_PAGE_2,
        talho_page_url(4): TALHO_PAGE_3,
        PEIXARIA_URL: PEIXARIA_LISTING,
        # ARROZ_URL ausente: responde 404
    }


@pytest.fixture
def fake_fetcher(site, settings, site_pages) -> FakeFetcher:
    """Fetcher falso com o site completo."""
    return FakeFetcher(site, settings, site_pages)


# FIXTURES DA EXECUÇÃO

@pytest.fixture
def run(site) -> CrawlRun:
    """Execução vazia."""
    return CrawlRun(site.id)


@pytest.fixture
def correlator(run, site) -> ResponseCorrelator:
    """Correlador ligado à execução vazia."""
    return ResponseCorrelator(run, site)


@pytest.fixture
def dispatcher(fake_fetcher, site, run, settings) -> CrawlDispatcher:
    """Dispatcher com o fetcher falso."""
    return CrawlDispatcher(fake_fetcher, site, run=run, settings=settings)

