"""
Módulo do crawler: contexto da execução, correlação de respostas e despacho.
"""

from src.crawler.run import CrawlRun
from src.crawler.correlator import ResponseCorrelator
from src.crawler.dispatcher import CrawlDispatcher

__all__ = [
    "CrawlRun",
    "ResponseCorrelator",
    "CrawlDispatcher",
]
