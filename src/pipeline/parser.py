"""
Parsing do contador de resultados e das URLs de paginação.
Funções puras: não fazem I/O nem logging.
"""

import re
from typing import Final

from src.core.exceptions import PaginationUrlError, ParsingError
from src.core.models import ResultsCounter

# "24", "1234", "1.234", "1,234"
_COUNT_PATTERN: Final[re.Pattern] = re.compile(r"^(?:\d{1,3}(?:[.,]\d{3})+|\d+)$")

DEFAULT_OFFSET_MARKER: Final[str] = "&start="


def parse_count(token: str, field: str) -> int:
    """
    Converte um token numérico do contador, aceitando separador de milhar.

    Raises:
        ParsingError: Se o token não for um inteiro não negativo
    """
    cleaned = token.strip()
    if not _COUNT_PATTERN.match(cleaned):
        raise ParsingError(
            f"Valor não numérico no contador: {token!r}",
            field=field,
            raw_data=token,
        )
    return int(cleaned.replace(".", "").replace(",", ""))


def parse_results_counter(text: str) -> ResultsCounter:
    """
    Converte o texto "<página> de <total> resultados".

    O texto é dividido por espaços: o primeiro token é o tamanho da
    página e o terceiro é o total declarado.

    Args:
        text: Texto do contador (ex: "24 de 120 resultados")

    Returns:
        ResultsCounter com page_size e total

    Raises:
        ParsingError: Menos de 3 tokens ou tokens não numéricos
    """
    parts = (text or "").split()
    if len(parts) < 3:
        raise ParsingError(
            "Contador de resultados incompleto",
            field="results_counter",
            raw_data=text,
        )

    page_size = parse_count(parts[0], "page_size")
    total = parse_count(parts[2], "total")
    return ResultsCounter(page_size=page_size, total=total)


def reduce_prefix(url: str, marker: str = DEFAULT_OFFSET_MARKER) -> str:
    """
    Reduz uma URL de paginação ao prefixo anterior ao marcador de offset.

    Examples:
        >>> reduce_prefix("https://x/y?a=1&start=20&sz=10")
        'https://x/y?a=1'

    Raises:
        PaginationUrlError: Marcador ausente ou repetido
    """
    parts = url.split(marker)
    if len(parts) != 2:
        raise PaginationUrlError(
            f"URL de paginação inválida: marcador {marker!r} "
            f"encontrado {len(parts) - 1} vez(es)",
            field="pagination_url",
            raw_data=url,
        )
    return parts[0]


def build_pagination_url(
    prefix: str,
    offset: int,
    page_size: int,
    marker: str = DEFAULT_OFFSET_MARKER,
    page_size_param: str = "sz",
) -> str:
    """Monta a URL "carregar mais" de um offset."""
    return f"{prefix}{marker}{offset}&{page_size_param}={page_size}"
