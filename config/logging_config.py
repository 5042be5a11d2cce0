"""
Configuração de logging estruturado usando structlog.
Os eventos passam pelo logging da stdlib: stderr em formato colorido (ou
JSON em produção) e arquivo de log sempre em JSON, uma linha por evento.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import structlog
from structlog.typing import Processor


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


# Handlers instalados por setup_logging (substituídos a cada chamada)
_handlers: list[logging.Handler] = []


def _formatter(*renderers: Processor) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *renderers,
        ],
    )


def setup_logging(
    level: str = "INFO",
    log_path: Optional[Path] = None,
    json_format: bool = False,
    site_id: Optional[str] = None,
) -> structlog.stdlib.BoundLogger:
    """
    Configura o sistema de logging.

    O `site_id` é ligado ao contexto (contextvars) e aparece em todos os
    eventos da execução, inclusive nas tarefas de despacho, que herdam o
    contexto. Componentes ligam `subcategory` e `url` da mesma forma.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR)
        log_path: Diretório do arquivo de log ({site_id}.log ou crawler.log)
        json_format: Se True, stderr em JSON (produção)
        site_id: ID do site da execução

    Returns:
        Logger configurado
    """
    log_level = getattr(logging, level.upper())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Diagnósticos vão para stderr; stdout fica livre para a saída da CLI
    console_handler = logging.StreamHandler(sys.stderr)
    if json_format:
        console_handler.setFormatter(
            _formatter(structlog.processors.format_exc_info, structlog.processors.JSONRenderer())
        )
    else:
        console_handler.setFormatter(
            _formatter(
                structlog.dev.ConsoleRenderer(
                    colors=sys.stderr.isatty(),
                    exception_formatter=structlog.dev.plain_traceback,
                )
            )
        )

    root = logging.getLogger()
    while _handlers:
        handler = _handlers.pop()
        root.removeHandler(handler)
        handler.close()

    root.addHandler(console_handler)
    _handlers.append(console_handler)
    root.setLevel(log_level)

    if log_path:
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(
            log_path / f"{site_id or 'crawler'}.log",
            encoding="utf-8",
        )
        file_handler.setFormatter(
            _formatter(structlog.processors.format_exc_info, structlog.processors.JSONRenderer())
        )
        root.addHandler(file_handler)
        _handlers.append(file_handler)

    structlog.contextvars.clear_contextvars()
    if site_id:
        structlog.contextvars.bind_contextvars(site=site_id)

    return structlog.get_logger("catalog_crawler")


def get_logger(name: str = "catalog_crawler", **context) -> structlog.stdlib.BoundLogger:
    """
    Retorna um logger com contexto.

    Args:
        name: Nome do logger
        **context: Contexto adicional para bind

    Returns:
        Logger com contexto
    """
    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger


class LoggerMixin:
    """Mixin para adicionar logging a classes."""

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        """Retorna logger com nome da classe."""
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger

    def log_operation(
        self,
        operation: str,
        **kwargs,
    ) -> structlog.stdlib.BoundLogger:
        """Retorna logger com operação bindada."""
        return self.logger.bind(operation=operation, **kwargs)
