"""
Configuração dos sites suportados.
Define URLs, seletores CSS, marcadores de paginação e filtros de URL.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class SiteStatus(str, Enum):
    """Status de um site."""
    ACTIVE = "active"
    DEVELOPMENT = "development"
    DISABLED = "disabled"


@dataclass
class SiteSelectors:
    """Seletores CSS para extração de dados."""

    # Página de descoberta (menu de categorias)
    category_block: str = ""
    category_name: str = ""
    subcategory_link: str = ""

    # Tile de produto
    product_container: str = ""
    product_link: str = ""
    product_image: str = ""
    product_image_attribute: str = "src"
    product_brand: str = ""
    product_quantity: str = ""
    product_price: str = ""
    product_price_unit: str = ""
    product_price_secondary: str = ""
    product_price_secondary_unit: str = ""

    # Paginação
    results_counter: str = ""
    load_more: str = ""
    load_more_attribute: str = "data-url"


@dataclass
class SiteConfig:
    """Configuração completa de um site."""

    id: str
    display_name: str
    base_url: str

    status: SiteStatus = SiteStatus.ACTIVE

    selectors: SiteSelectors = field(default_factory=SiteSelectors)

    # Limite próprio do site (None = settings.requests_per_minute)
    requests_per_minute: Optional[int] = None

    # Filtros aplicados antes de cada fetch
    allowed_domains: set[str] = field(default_factory=set)
    denied_url_patterns: list[str] = field(default_factory=list)

    # Categoria promocional que nunca entra na árvore
    featured_category_name: str = ""

    # Trecho que só aparece nas URLs do endpoint "carregar mais"
    pagination_marker: str = ""

    # Separador entre o prefixo de paginação e o offset
    offset_marker: str = "&start="
    page_size_param: str = "sz"


# =============================================================================
# CONFIGURAÇÃO DO CONTINENTE
# =============================================================================

CONTINENTE_SELECTORS = SiteSelectors(
    category_block=".container-dropdown-first-column > .dropdown-item",
    category_name=".category-info",
    subcategory_link=":scope > ul > li:not(.see-all) > a",
    product_container=".productTile",
    product_link=".ct-pdp-link > a",
    product_image="picture > img",
    product_image_attribute="data-src",
    product_brand=".pwc-tile--brand",
    product_quantity=".pwc-tile--quantity",
    product_price=".pwc-tile--price-primary > .value > .ct-price-formatted",
    product_price_unit=".pwc-tile--price-primary > .value > .pwc-m-unit",
    product_price_secondary=".pwc-tile--price-secondary > .ct-price-value",
    product_price_secondary_unit=".pwc-tile--price-secondary > .pwc-m-unit",
    results_counter=".search-results-products-counter",
    load_more=".search-view-more-products-btn-wrapper",
    load_more_attribute="data-url",
)

CONTINENTE_CONFIG = SiteConfig(
    id="continente",
    display_name="Continente",
    base_url="https://www.continente.pt/",
    status=SiteStatus.ACTIVE,
    selectors=CONTINENTE_SELECTORS,
    allowed_domains={"www.continente.pt"},
    denied_url_patterns=[
        r".*/destaques/",
        r".*/campanhas/",
        r".*/lojas-das-marcas/",
        r".*/food-lab/",
    ],
    featured_category_name="Destaques",
    pagination_marker="demandware.store",
    offset_marker="&start=",
    page_size_param="sz",
)


# =============================================================================
# REGISTRO DE SITES
# =============================================================================

SITES_CONFIG: dict[str, SiteConfig] = {
    "continente": CONTINENTE_CONFIG,
}


def get_site_config(site_id: str) -> SiteConfig:
    """
    Retorna configuração de um site.

    Args:
        site_id: ID do site

    Returns:
        Configuração do site

    Raises:
        ValueError: Se site não encontrado
    """
    if site_id not in SITES_CONFIG:
        raise ValueError(f"Site não encontrado: {site_id}")
    return SITES_CONFIG[site_id]


def get_active_sites() -> list[SiteConfig]:
    """Retorna lista de sites ativos."""
    return [
        config for config in SITES_CONFIG.values()
        if config.status in (SiteStatus.ACTIVE, SiteStatus.DEVELOPMENT)
    ]
