"""
Exportação da árvore de categorias para CSV.
Usa pandas para escrita e leitura dos arquivos.
"""

from pathlib import Path
from typing import Iterator, Union

import pandas as pd

from config.logging_config import LoggerMixin
from src.core.constants import CSV_COLUMNS
from src.core.exceptions import FileStorageError, StorageError
from src.core.models import Category, ExportResult, Product, SubCategory
from src.crawler.run import CrawlRun


class CSVExporter(LoggerMixin):
    """
    Achata a árvore Categoria -> Subcategoria -> Produto em linhas CSV.
    Uma linha por produto, com as colunas fixas de CSV_COLUMNS.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def iter_rows(self, run: CrawlRun) -> Iterator[tuple[Category, SubCategory, Product]]:
        """Percorre a árvore em profundidade."""
        for category, subcategory in run.subcategories():
            for product in subcategory.products:
                yield category, subcategory, product

    def to_record(
        self,
        category: Category,
        subcategory: SubCategory,
        product: Product,
    ) -> dict[str, str]:
        """
        Monta uma linha do CSV.

        Raises:
            TypeError: Algum valor não é string
        """
        record = {
            "category_name": category.name,
            "sub_category_name": subcategory.name,
            "sub_category_url": subcategory.listing_url,
            "product_name": product.name,
            "product_url": product.url,
            "product_img_url": product.image_url,
            "product_brand": product.brand,
            "product_quantity": product.quantity,
            "product_price": product.price,
            "product_price_unit": product.price_unit,
            "product_price_secondary": product.price_secondary,
            "product_price_secondary_unit": product.price_secondary_unit,
        }
        for column, value in record.items():
            if not isinstance(value, str):
                raise TypeError(f"Coluna {column} não é texto: {value!r}")
        return record

    def export(self, run: CrawlRun, path: Union[str, Path]) -> ExportResult:
        """
        Escreve o CSV com cabeçalho e uma linha por produto.

        Linhas que falham ao serem montadas são registradas no log e
        puladas; as demais são escritas normalmente.

        Args:
            run: Execução com a árvore completa
            path: Arquivo de saída

        Returns:
            ExportResult com contagens

        Raises:
            FileStorageError: Não foi possível criar ou escrever o arquivo
        """
        filepath = Path(path)
        result = ExportResult(path=str(filepath))
        records: list[dict[str, str]] = []

        for category, subcategory, product in self.iter_rows(run):
            try:
                records.append(self.to_record(category, subcategory, product))
            except (TypeError, ValueError) as e:
                result.rows_failed += 1
                self.logger.error(
                    "Erro ao montar linha do CSV",
                    category=category.name,
                    subcategory=subcategory.name,
                    product=getattr(product, "name", None),
                    error=str(e),
                )

        df = pd.DataFrame(records, columns=CSV_COLUMNS)

        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(filepath, index=False, encoding=self.encoding)
        except OSError as e:
            raise FileStorageError(
                "Não foi possível escrever o arquivo de saída",
                path=str(filepath),
                cause=e,
            ) from e

        result.rows_written = len(df)
        self.logger.info(
            "Produtos exportados em CSV",
            rows=result.rows_written,
            failed=result.rows_failed,
            filepath=str(filepath),
        )
        return result

    def load(self, path: Union[str, Path]) -> pd.DataFrame:
        """
        Lê um CSV exportado, com todas as colunas como texto.

        Raises:
            StorageError: Arquivo inexistente ou ilegível
        """
        filepath = Path(path)
        try:
            return pd.read_csv(
                filepath,
                dtype=str,
                keep_default_na=False,
                encoding=self.encoding,
            )
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise StorageError(
                "Não foi possível ler o arquivo exportado",
                path=str(filepath),
                cause=e,
            ) from e

    def summarize(self, path: Union[str, Path]) -> list[dict]:
        """
        Contagem de produtos por categoria e subcategoria de um CSV exportado.

        Returns:
            Lista de {"category_name", "sub_category_name", "products"}
            na ordem em que aparecem no arquivo
        """
        df = self.load(path)
        if df.empty:
            return []

        counts = (
            df.groupby(["category_name", "sub_category_name"], sort=False)
            .size()
            .reset_index(name="products")
        )
        return counts.to_dict(orient="records")
