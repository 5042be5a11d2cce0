"""
Módulo de storage: exportação da árvore coletada para arquivo.
"""

from src.storage.file_storage import CSVExporter

__all__ = [
    "CSVExporter",
]
