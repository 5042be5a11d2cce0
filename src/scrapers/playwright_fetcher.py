"""
Fetcher baseado em Playwright.
Reaproveita um único browser por execução e abre uma aba por fetch.
"""

import random
from typing import Optional

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Playwright,
    TimeoutError as PlaywrightTimeout,
)

from src.core.constants import DEFAULT_HEADERS
from src.core.exceptions import BlockedError, FetchTimeoutError, NetworkError
from src.scrapers.base import BaseFetcher
from src.scrapers.document import Document


class PlaywrightFetcher(BaseFetcher):
    """Carrega páginas num Chromium headless."""

    USER_AGENTS = [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
    ]

    _playwright: Optional[Playwright] = None
    _browser: Optional[Browser] = None
    _context: Optional[BrowserContext] = None

    async def start(self) -> None:
        """Inicializa o Playwright e o contexto do browser."""
        if self._browser is not None:
            return

        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.settings.headless,
            args=[
                "--disable-blink-features=AutomationControlled",
                "--disable-dev-shm-usage",
                "--no-sandbox",
            ],
        )
        self._context = await self._browser.new_context(
            user_agent=random.choice([self.settings.user_agent, *self.USER_AGENTS]),
            viewport={"width": 1920, "height": 1080},
            locale="pt-PT",
            timezone_id="Europe/Lisbon",
            java_script_enabled=True,
            accept_downloads=False,
            extra_http_headers=DEFAULT_HEADERS,
        )
        self.logger.debug("Browser iniciado", headless=self.settings.headless)

    async def close(self) -> None:
        """Fecha browser e libera recursos."""
        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    async def _load(self, url: str) -> Document:
        if self._context is None:
            await self.start()

        page = await self._context.new_page()
        try:
            try:
                response = await page.goto(
                    url,
                    wait_until="domcontentloaded",
                    timeout=self.settings.request_timeout_ms,
                )
            except PlaywrightTimeout as e:
                raise FetchTimeoutError(
                    url=url,
                    timeout_seconds=self.settings.request_timeout,
                    cause=e,
                ) from e
            except PlaywrightError as e:
                raise NetworkError(str(e), url=url, cause=e) from e

            status = response.status if response else None
            if status == 403:
                raise BlockedError(url=url, block_type="http_403")
            if status is not None and status >= 400:
                raise NetworkError(
                    f"Status {status}",
                    url=url,
                    status_code=status,
                )

            html = await page.content()
        finally:
            await page.close()

        return Document(url=url, html=html, status=status)
