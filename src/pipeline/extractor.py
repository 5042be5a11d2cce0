"""
Extração estruturada de documentos.
Transforma a página de descoberta em categorias e as páginas de listagem
(ou "carregar mais") em produtos.
"""

from urllib.parse import urljoin

from config.logging_config import get_logger
from config.sites import SiteConfig
from src.core.models import Category, Product, SubCategory
from src.scrapers.document import Document

logger = get_logger("extractor")


def extract_categories(document: Document, site: SiteConfig) -> list[Category]:
    """
    Extrai as categorias do menu de navegação.

    Blocos com o nome da categoria promocional são ignorados. Links de
    subcategoria são resolvidos contra a URL requisitada do documento.
    O link "ver todos" fica de fora.

    Args:
        document: Página de descoberta
        site: Configuração do site

    Returns:
        Categorias na ordem do documento
    """
    selectors = site.selectors
    categories: list[Category] = []

    for block in document.select(selectors.category_block):
        name_element = document.select_one(selectors.category_name, block)
        name = name_element.get_text().strip() if name_element else ""

        if site.featured_category_name and name == site.featured_category_name:
            logger.debug("Categoria promocional ignorada", category=name)
            continue

        category = Category(name=name)
        for link in document.select(selectors.subcategory_link, block):
            href = link.get("href") or ""
            category.subcategories.append(
                SubCategory(
                    name=link.get_text().strip(),
                    listing_url=urljoin(document.url, href),
                )
            )

        categories.append(category)

    return categories


def extract_products(document: Document, site: SiteConfig) -> list[Product]:
    """
    Extrai os tiles de produto na ordem do documento.
    Localizadores sem correspondência resultam em campos vazios.
    """
    s = site.selectors
    products: list[Product] = []

    for tile in document.select(s.product_container):
        products.append(
            Product(
                url=document.attr_of(s.product_link, "href", tile),
                name=document.text_of(s.product_link, tile),
                image_url=document.attr_of(
                    s.product_image, s.product_image_attribute, tile
                ),
                brand=document.text_of(s.product_brand, tile),
                quantity=document.text_of(s.product_quantity, tile),
                price=document.text_of(s.product_price, tile),
                price_unit=document.text_of(s.product_price_unit, tile),
                price_secondary=document.text_of(s.product_price_secondary, tile),
                price_secondary_unit=document.text_of(
                    s.product_price_secondary_unit, tile
                ),
            )
        )

    return products


def extract_results_counter(document: Document, site: SiteConfig) -> str:
    """Texto do contador de resultados (vazio se ausente)."""
    return document.text_of(site.selectors.results_counter)


def extract_load_more_url(document: Document, site: SiteConfig) -> str:
    """URL absoluta do botão "carregar mais" (vazio se ausente)."""
    raw = document.attr_of(
        site.selectors.load_more,
        site.selectors.load_more_attribute,
    )
    return urljoin(document.url, raw) if raw else ""
