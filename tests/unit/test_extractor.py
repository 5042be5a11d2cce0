"""
Testes unitários para a extração estruturada.
"""

from src.pipeline.extractor import (
    extract_categories,
    extract_load_more_url,
    extract_products,
    extract_results_counter,
)
from src.scrapers.document import Document
from tests.fixtures.html_samples import (
    BASE_URL,
    DISCOVERY_PAGE,
    TALHO_LISTING,
    TALHO_PAGE_2,
    TALHO_PREFIX,
    listing_page,
)


class TestExtractCategories:
    """Testes para extract_categories."""

    def test_destaques_excluida(self, site):
        """Testa que a categoria promocional não entra na árvore."""
        categories = extract_categories(Document(BASE_URL, DISCOVERY_PAGE), site)

        names = [c.name for c in categories]
        assert "Destaques" not in names
        assert names == ["Frescos", "Mercearia"]

    def test_nomes_sem_espacos(self, site):
        """Testa trim dos nomes de categoria e subcategoria."""
        categories = extract_categories(Document(BASE_URL, DISCOVERY_PAGE), site)

        frescos = categories[0]
        assert frescos.name == "Frescos"
        assert [s.name for s in frescos.subcategories] == ["Talho", "Peixaria"]

    def test_ver_todos_excluido(self, site):
        """Testa que o link "ver todos" não vira subcategoria."""
        categories = extract_categories(Document(BASE_URL, DISCOVERY_PAGE), site)

        all_names = [s.name for c in categories for s in c.subcategories]
        assert "Ver todos" not in all_names

    def test_urls_absolutas(self, site):
        """Testa resolução de hrefs relativos contra a URL requisitada."""
        categories = extract_categories(Document(BASE_URL, DISCOVERY_PAGE), site)

        urls = [s.listing_url for c in categories for s in c.subcategories]
        assert urls == [
            "https://www.continente.pt/frescos/talho/",
            "https://www.continente.pt/frescos/peixaria/",
            "https://www.continente.pt/mercearia/arroz/",
            "https://www.continente.pt/campanhas/natal/",
        ]

    def test_urls_distintas(self, site):
        """Testa que as URLs de listagem são distintas par a par."""
        categories = extract_categories(Document(BASE_URL, DISCOVERY_PAGE), site)

        urls = [s.listing_url for c in categories for s in c.subcategories]
        assert len(urls) == len(set(urls))

    def test_subcategorias_comecam_vazias(self, site):
        categories = extract_categories(Document(BASE_URL, DISCOVERY_PAGE), site)

        for category in categories:
            for sub in category.subcategories:
                assert sub.products == []
                assert sub.pagination_url_prefix == ""

    def test_pagina_sem_menu(self, site):
        """Testa página sem menu de categorias."""
        assert extract_categories(Document(BASE_URL, "<html></html>"), site) == []


class TestExtractProducts:
    """Testes para extract_products."""

    def test_campos_do_tile(self, site):
        """Testa extração de todos os campos."""
        products = extract_products(Document("https://www.continente.pt/frescos/talho/", TALHO_LISTING), site)

        assert len(products) == 2
        bife = products[0]
        assert bife.name == "Bife de Vaca"
        assert bife.url == "https://www.continente.pt/produto/bife"
        assert bife.image_url == "https://www.continente.pt/produto/bife.jpg"
        assert bife.brand == "Continente"
        assert bife.quantity == "emb. 400 gr"
        assert bife.price == "1,99€"
        assert bife.price_unit == "/un"
        assert bife.price_secondary == "4,98€"
        assert bife.price_secondary_unit == "/kg"

    def test_ordem_do_documento(self, site):
        products = extract_products(Document(TALHO_PREFIX, TALHO_PAGE_2), site)
        assert [p.name for p in products] == ["Costeletas de Porco", "Peito de Peru"]

    def test_campos_ausentes_viram_vazio(self, site):
        """Testa tile sem marca, preço secundário ou imagem."""
        html = """
        <div class="productTile">
            <div class="ct-pdp-link"><a href="/p/1">Sal Grosso</a></div>
        </div>
        """
        products = extract_products(Document(BASE_URL, html), site)

        assert len(products) == 1
        sal = products[0]
        assert sal.name == "Sal Grosso"
        assert sal.url == "/p/1"
        assert sal.brand == ""
        assert sal.image_url == ""
        assert sal.price == ""
        assert sal.price_secondary_unit == ""

    def test_texto_aparado_nas_pontas(self, site):
        """Testa que só as pontas do texto são aparadas."""
        html = """
        <div class="productTile">
            <div class="ct-pdp-link"><a href="/p/2">
                Queijo  Flamengo
            </a></div>
        </div>
        """
        products = extract_products(Document(BASE_URL, html), site)

        assert products[0].name == "Queijo  Flamengo"

    def test_sem_tiles(self, site):
        assert extract_products(Document(BASE_URL, "<div></div>"), site) == []


class TestPaginationLocators:
    """Testes para contador e botão "carregar mais"."""

    def test_contador(self, site):
        document = Document("https://www.continente.pt/frescos/talho/", TALHO_LISTING)
        assert extract_results_counter(document, site) == "2 de 5 resultados"

    def test_load_more_decodifica_entidades(self, site):
        """Testa que &amp; no atributo vira &."""
        document = Document("https://www.continente.pt/frescos/talho/", TALHO_LISTING)
        assert extract_load_more_url(document, site) == f"{TALHO_PREFIX}&start=2&sz=2"

    def test_load_more_relativo(self, site):
        """Testa data-url relativo resolvido contra a URL do documento."""
        html = listing_page([], "0 de 0", "/on/demandware.store/grid?cgid=x&start=0&sz=24")
        document = Document("https://www.continente.pt/frescos/talho/", html)

        assert extract_load_more_url(document, site) == (
            "https://www.continente.pt/on/demandware.store/grid?cgid=x&start=0&sz=24"
        )

    def test_sem_botao(self, site):
        document = Document(BASE_URL, listing_page([], "1 de 1 resultados"))
        assert extract_load_more_url(document, site) == ""
        assert extract_results_counter(Document(BASE_URL, "<p></p>"), site) == ""
