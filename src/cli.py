"""
Interface de linha de comando (CLI) do crawler de catálogo.
Usa Typer e Rich para a saída formatada.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config.settings import get_settings
from src.collector import CatalogCollector
from src.core.exceptions import FatalCrawlerError, StorageError
from src.core.models import CrawlSummary
from src.storage import CSVExporter

app = typer.Typer(
    name="catalog-crawler",
    help="Crawler do catálogo de categorias e produtos de supermercados online.",
    add_completion=False,
)

console = Console()


@app.command("crawl")
def crawl(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Arquivo CSV de saída"),
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", "-c", min=1, help="Subcategorias buscadas em paralelo"
    ),
    no_pagination: bool = typer.Option(
        False, "--no-pagination", help="Coleta apenas a primeira página de cada subcategoria"
    ),
    max_pages: Optional[int] = typer.Option(
        None, "--max-pages", "-p", min=0, help="Máximo de páginas 'carregar mais' (0 = sem limite)"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Resumo em formato JSON"),
):
    """
    Percorre categorias, subcategorias e produtos e exporta para CSV.

    Exemplos:
        catalog-crawler crawl
        catalog-crawler crawl --output produtos.csv --concurrency 4
        catalog-crawler crawl --no-pagination
    """
    overrides = {}
    if concurrency is not None:
        overrides["max_concurrency"] = concurrency
    if no_pagination:
        overrides["follow_pagination"] = False
    if max_pages is not None:
        overrides["max_pagination_pages"] = max_pages

    settings = get_settings().model_copy(update=overrides)
    collector = CatalogCollector(settings=settings)

    try:
        summary = asyncio.run(collector.run(output_path=output))
    except FatalCrawlerError as e:
        console.print(f"[red]Erro fatal:[/red] {e}")
        raise typer.Exit(code=1)

    if json_output:
        console.print_json(json.dumps(summary.to_dict(), default=str))
        return

    _display_summary(summary)


@app.command("sites")
def list_sites():
    """
    Lista sites disponíveis.
    """
    table = Table(title="Sites Disponíveis")
    table.add_column("ID", style="cyan")
    table.add_column("Nome", style="green")
    table.add_column("URL", style="blue")
    table.add_column("Status", style="yellow")

    for site in CatalogCollector.get_available_sites():
        table.add_row(site["id"], site["name"], site["url"], site["status"])

    console.print(table)


@app.command("summary")
def summary(
    path: Path = typer.Argument(..., help="Arquivo CSV exportado"),
):
    """
    Mostra produtos por categoria e subcategoria de um CSV exportado.
    """
    try:
        rows = CSVExporter().summarize(path)
    except StorageError as e:
        console.print(f"[red]{e.message}:[/red] {path}")
        raise typer.Exit(code=1)

    if not rows:
        console.print(f"[yellow]Nenhum produto em '{path}'[/yellow]")
        return

    table = Table(title=f"Produtos em {path.name}")
    table.add_column("Categoria", style="cyan")
    table.add_column("Subcategoria", style="green")
    table.add_column("Produtos", justify="right", style="magenta")

    for row in rows:
        table.add_row(row["category_name"], row["sub_category_name"], str(row["products"]))

    console.print(table)
    console.print(f"Total: [bold]{sum(r['products'] for r in rows)}[/bold] produtos")


def _display_summary(summary: CrawlSummary) -> None:
    """Exibe o resumo da execução."""
    outcomes = "\n".join(
        f"  {name}: {count}" for name, count in sorted(summary.outcomes.items())
    ) or "  -"
    duration = f"{summary.duration_seconds:.1f}s" if summary.duration_seconds else "N/A"
    output = summary.export.path if summary.export else "-"

    panel = Panel(
        f"""[bold]Status:[/bold] {summary.status.value}

Categorias: [cyan]{summary.categories}[/cyan]
Subcategorias: [cyan]{summary.subcategories}[/cyan]
Produtos: [green]{summary.products}[/green]
Páginas buscadas: [yellow]{summary.pages_fetched}[/yellow]
Duração: {duration}

Subcategorias por resultado:
{outcomes}

Arquivo: [blue]{output}[/blue]""",
        title=f"Crawl {summary.site_id}",
        border_style="blue",
    )
    console.print(panel)


def main():
    """Entry point da CLI."""
    app()


if __name__ == "__main__":
    main()
