"""
Rate limiter para controle de requisições por host.
Evita sobrecarga no site e bloqueios durante o crawl.
"""

import asyncio
from collections import defaultdict
from datetime import datetime, timedelta

from config.logging_config import LoggerMixin


class RateLimiter(LoggerMixin):
    """
    Rate limiter de janela deslizante (1 minuto) por host.
    """

    def __init__(self, default_limit: int = 30):
        # Timestamps das últimas requisições por host
        self._requests: dict[str, list[datetime]] = defaultdict(list)
        self._limits: dict[str, int] = {}
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self.default_limit = default_limit

    def configure(self, host: str, requests_per_minute: int) -> None:
        """
        Configura limite para um host.

        Args:
            host: Host do site
            requests_per_minute: Máximo de requisições por minuto
        """
        self._limits[host] = requests_per_minute
        self.logger.debug(
            "Rate limit configurado",
            host=host,
            limit=requests_per_minute,
        )

    def limit_for(self, host: str) -> int:
        return self._limits.get(host, self.default_limit)

    async def acquire(self, host: str) -> None:
        """
        Aguarda até ter permissão para fazer requisição.

        Args:
            host: Host do site
        """
        async with self._locks[host]:
            limit = self.limit_for(host)
            now = datetime.now()
            window_start = now - timedelta(minutes=1)

            self._requests[host] = [
                ts for ts in self._requests[host]
                if ts > window_start
            ]

            if len(self._requests[host]) >= limit:
                oldest = self._requests[host][0]
                wait_time = (oldest + timedelta(minutes=1) - now).total_seconds()

                if wait_time > 0:
                    self.logger.debug(
                        "Rate limit atingido, aguardando",
                        host=host,
                        wait_seconds=round(wait_time, 2),
                    )
                    await asyncio.sleep(wait_time)

            self._requests[host].append(datetime.now())

    def usage(self, host: str) -> int:
        """Requisições feitas no último minuto."""
        window_start = datetime.now() - timedelta(minutes=1)
        return sum(1 for ts in self._requests.get(host, []) if ts > window_start)
