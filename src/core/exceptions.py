"""
Hierarquia de exceções do sistema.
Todas as exceções herdam de CrawlerError para facilitar tratamento.

Exceções fatais (abortam a execução inteira) herdam de FatalCrawlerError:
falha na página de descoberta, URL de paginação malformada e falha ao
criar o arquivo de saída.
"""

from typing import Any, Optional


class CrawlerError(Exception):
    """
    Exceção base do sistema.
    Todas as exceções customizadas herdam desta classe.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.cause:
            base += f" | Caused by: {self.cause}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Serializa exceção para dicionário."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }


class FatalCrawlerError(CrawlerError):
    """Erro que encerra a execução inteira."""
    pass


# EXCEÇÕES DE FETCH

class FetchError(CrawlerError):
    """Erro genérico ao buscar uma página."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if url:
            details["url"] = url
        super().__init__(message, details=details, **kwargs)
        self.url = url


class NetworkError(FetchError):
    """Erro de rede (conexão recusada, status HTTP de erro, etc)."""

    def __init__(
        self,
        message: str = "Erro de conexão com o servidor",
        *,
        status_code: Optional[int] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if status_code:
            details["status_code"] = status_code
        super().__init__(message, details=details, **kwargs)
        self.status_code = status_code


class FetchTimeoutError(FetchError):
    """Timeout ao carregar uma página."""

    def __init__(
        self,
        message: str = "Timeout ao carregar página",
        *,
        timeout_seconds: Optional[int] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if timeout_seconds:
            details["timeout_seconds"] = timeout_seconds
        super().__init__(message, details=details, **kwargs)
        self.timeout_seconds = timeout_seconds


class BlockedError(FetchError):
    """Erro quando o crawler é bloqueado (captcha, ban, etc)."""

    def __init__(
        self,
        message: str = "Acesso bloqueado pelo site",
        *,
        block_type: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if block_type:
            details["block_type"] = block_type
        super().__init__(message, details=details, **kwargs)
        self.block_type = block_type


class UrlFilteredError(FetchError):
    """URL rejeitada pelos filtros de domínio ou deny-list (nunca buscada)."""

    def __init__(
        self,
        message: str = "URL rejeitada pelos filtros",
        *,
        reason: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if reason:
            details["reason"] = reason
        super().__init__(message, details=details, **kwargs)
        self.reason = reason


class DiscoveryError(FatalCrawlerError):
    """Falha ao buscar ou processar a página de descoberta."""

    def __init__(
        self,
        message: str = "Falha na página de descoberta",
        *,
        url: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if url:
            details["url"] = url
        super().__init__(message, details=details, **kwargs)
        self.url = url


# EXCEÇÕES DE PARSING

class ParsingError(CrawlerError):
    """Erro ao fazer parsing de dados extraídos."""

    def __init__(
        self,
        message: str,
        *,
        raw_data: Optional[str] = None,
        field: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if raw_data:
            # Limita tamanho para não poluir logs
            details["raw_data"] = raw_data[:200] if len(raw_data) > 200 else raw_data
        super().__init__(message, details=details, **kwargs)
        self.raw_data = raw_data
        self.field = field


class PaginationUrlError(ParsingError, FatalCrawlerError):
    """
    URL de paginação sem o marcador de offset, ou com mais de um.
    Toda a correlação posterior depende deste prefixo, então é fatal.
    """
    pass


# EXCEÇÕES DE CORRELAÇÃO

class CorrelationError(CrawlerError):
    """Violação de invariante da árvore de categorias."""
    pass


# EXCEÇÕES DE STORAGE

class StorageError(CrawlerError):
    """Erro de persistência de dados."""

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if path:
            details["path"] = path
        super().__init__(message, details=details, **kwargs)
        self.path = path


class FileStorageError(StorageError, FatalCrawlerError):
    """Não foi possível criar ou escrever o arquivo de saída."""
    pass
