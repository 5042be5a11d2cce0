"""
Testes unitários para os modelos e exceções.
"""

import pytest

from src.core.exceptions import (
    CorrelationError,
    CrawlerError,
    FatalCrawlerError,
    FetchError,
    FileStorageError,
    NetworkError,
    PaginationUrlError,
    ParsingError,
    UrlFilteredError,
)
from src.core.models import (
    Category,
    CrawlSummary,
    PaginationPlan,
    Product,
    SubCategory,
)
from src.core.types import DispatchOutcome


class TestProduct:
    """Testes para Product."""

    def test_campos_padrao_vazios(self):
        product = Product()
        assert product.name == ""
        assert product.price_secondary_unit == ""

    def test_none_vira_vazio(self):
        product = Product(name=None, brand=None)
        assert product.name == ""
        assert product.brand == ""

    def test_so_as_pontas_aparadas(self):
        """Testa que o miolo do texto fica como veio do documento."""
        product = Product(name="  Pão   de\n Forma ")
        assert product.name == "Pão   de\n Forma"

    def test_sem_validacao_de_conteudo(self):
        """Testa que valores opacos são aceitos como estão."""
        product = Product(price="preço sob consulta", url="não-é-url")
        assert product.price == "preço sob consulta"
        assert product.url == "não-é-url"


class TestSubCategory:
    """Testes para SubCategory."""

    @pytest.fixture
    def subcategory(self) -> SubCategory:
        return SubCategory(name="Talho", listing_url="https://www.continente.pt/frescos/talho/")

    def test_estado_inicial(self, subcategory):
        assert subcategory.products == []
        assert subcategory.pagination_url_prefix == ""
        assert not subcategory.has_pagination

    def test_listing_url_imutavel(self, subcategory):
        with pytest.raises(CorrelationError):
            subcategory.listing_url = "https://outra/"

        assert subcategory.listing_url == "https://www.continente.pt/frescos/talho/"

    def test_prefixo_definido_uma_vez(self, subcategory):
        subcategory.pagination_url_prefix = "https://grid?cgid=talho"
        assert subcategory.has_pagination

        with pytest.raises(CorrelationError):
            subcategory.pagination_url_prefix = "https://grid?cgid=outro"

        assert subcategory.pagination_url_prefix == "https://grid?cgid=talho"

    def test_produtos_acumulados_em_ordem(self, subcategory):
        subcategory.add_products([Product(name="A"), Product(name="B")])
        subcategory.add_products([Product(name="C")])

        assert [p.name for p in subcategory.products] == ["A", "B", "C"]
        assert subcategory.products_count == 3

    def test_identidade_nao_valor(self):
        """Testa que duas subcategorias iguais continuam nós distintos."""
        a = SubCategory(name="X", listing_url="https://x/")
        b = SubCategory(name="X", listing_url="https://x/")
        assert a != b


class TestCategory:
    """Testes para Category."""

    def test_contagem_de_produtos(self):
        sub_a = SubCategory(name="A", listing_url="https://a/")
        sub_b = SubCategory(name="B", listing_url="https://b/")
        sub_a.add_products([Product(), Product()])
        sub_b.add_products([Product()])

        category = Category(name="Frescos", subcategories=[sub_a, sub_b])
        assert category.products_count == 3


class TestPaginationPlan:
    """Testes para PaginationPlan."""

    def test_offsets_ate_o_total(self):
        plan = PaginationPlan(prefix="p", page_size=24, total=100, start=24)
        assert plan.offsets() == [24, 48, 72, 96]

    def test_total_multiplo_do_tamanho(self):
        plan = PaginationPlan(prefix="p", page_size=24, total=72, start=24)
        assert plan.offsets() == [24, 48]

    def test_pagina_unica(self):
        plan = PaginationPlan(prefix="p", page_size=2, total=2, start=2)
        assert plan.offsets() == []

    def test_tamanho_zero(self):
        """Testa contador "0 de 10" sem laço infinito."""
        plan = PaginationPlan(prefix="p", page_size=0, total=10, start=0)
        assert plan.offsets() == []


class TestCrawlSummary:
    """Testes para CrawlSummary."""

    def test_record_e_to_dict(self):
        summary = CrawlSummary(site_id="continente")
        summary.record(DispatchOutcome.COLLECTED)
        summary.record(DispatchOutcome.COLLECTED)
        summary.record(DispatchOutcome.FAILED)
        summary.mark_finished()

        data = summary.to_dict()
        assert data["outcomes"] == {"collected": 2, "failed": 1}
        assert data["output"] is None
        assert data["duration_seconds"] is not None


class TestExceptions:
    """Testes para a hierarquia de exceções."""

    def test_fatais(self):
        assert issubclass(PaginationUrlError, FatalCrawlerError)
        assert issubclass(PaginationUrlError, ParsingError)
        assert issubclass(FileStorageError, FatalCrawlerError)

    def test_recuperaveis(self):
        assert not issubclass(FetchError, FatalCrawlerError)
        assert not issubclass(ParsingError, FatalCrawlerError)
        assert issubclass(UrlFilteredError, FetchError)

    def test_detalhes_no_str(self):
        error = NetworkError("Status 500", url="https://x/", status_code=500)

        assert "Status 500" in str(error)
        assert error.details == {"url": "https://x/", "status_code": 500}

    def test_to_dict(self):
        cause = ValueError("boom")
        error = CrawlerError("falhou", details={"a": 1}, cause=cause)

        assert error.to_dict() == {
            "error_type": "CrawlerError",
            "message": "falhou",
            "details": {"a": 1},
            "cause": "boom",
        }

    def test_raw_data_truncado(self):
        error = ParsingError("x", raw_data="a" * 500)
        assert len(error.details["raw_data"]) == 200
