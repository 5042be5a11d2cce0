"""
Módulo de pipeline: extração estruturada e parsing de contadores/URLs.
"""

from src.pipeline.extractor import (
    extract_categories,
    extract_products,
    extract_results_counter,
    extract_load_more_url,
)
from src.pipeline.parser import (
    parse_results_counter,
    reduce_prefix,
    build_pagination_url,
)

__all__ = [
    "extract_categories",
    "extract_products",
    "extract_results_counter",
    "extract_load_more_url",
    "parse_results_counter",
    "reduce_prefix",
    "build_pagination_url",
]
