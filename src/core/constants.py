"""
Constantes do crawler: colunas de exportação, headers HTTP e retry.
"""

from typing import Final

# =============================================================================
# COLUNAS DO ARQUIVO EXPORTADO
# =============================================================================

CSV_COLUMNS: Final[list[str]] = [
    # Categoria
    "category_name",
    # Subcategoria
    "sub_category_name",
    "sub_category_url",
    # Produto
    "product_name",
    "product_url",
    "product_img_url",
    "product_brand",
    "product_quantity",
    "product_price",
    "product_price_unit",
    "product_price_secondary",
    "product_price_secondary_unit",
]


# =============================================================================
# HEADERS HTTP PADRÃO
# =============================================================================

DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "pt-PT,pt;q=0.9,en-US;q=0.8,en;q=0.7",
    "Accept-Encoding": "gzip, deflate, br",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Cache-Control": "max-age=0",
}


# =============================================================================
# CONFIGURAÇÕES DE RETRY
# =============================================================================

RETRY_STATUS_CODES: Final[set[int]] = {408, 429, 500, 502, 503, 504}
