"""
Testes da interface de linha de comando.
"""

from typer.testing import CliRunner

from src.cli import app
from src.core.models import Category, Product, SubCategory
from src.crawler import CrawlRun
from src.storage import CSVExporter

runner = CliRunner()


class TestCli:
    """Testes para os comandos sem acesso à rede."""

    def test_sites(self):
        result = runner.invoke(app, ["sites"])

        assert result.exit_code == 0
        assert "continente" in result.output

    def test_summary(self, output_path):
        sub = SubCategory(name="Talho", listing_url="https://www.continente.pt/frescos/talho/")
        sub.add_products([Product(name="Bife"), Product(name="Frango")])
        run = CrawlRun()
        run.add_category(Category(name="Frescos", subcategories=[sub]))
        CSVExporter().export(run, output_path)

        result = runner.invoke(app, ["summary", str(output_path)])

        assert result.exit_code == 0
        assert "Talho" in result.output
        assert "Total: 2 produtos" in result.output

    def test_summary_arquivo_inexistente(self, tmp_path):
        result = runner.invoke(app, ["summary", str(tmp_path / "nao-existe.csv")])

        assert result.exit_code == 1
