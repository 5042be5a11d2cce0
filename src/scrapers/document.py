"""
Documento HTML recebido de um fetch.
Guarda a URL requisitada (chave de correlação) e o HTML, com parsing
preguiçoso via BeautifulSoup.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from bs4 import BeautifulSoup, Tag


Node = Union[BeautifulSoup, Tag]


@dataclass
class Document:
    """Página buscada e seu HTML."""

    url: str
    html: str
    status: Optional[int] = None
    _soup: Optional[BeautifulSoup] = field(default=None, init=False, repr=False)

    @property
    def soup(self) -> BeautifulSoup:
        if self._soup is None:
            self._soup = BeautifulSoup(self.html, "html.parser")
        return self._soup

    def _scope(self, root: Optional[Node]) -> Node:
        # Tag vazia é falsy; compara com None explicitamente
        return self.soup if root is None else root

    def select(self, selector: str, root: Optional[Node] = None) -> list[Tag]:
        """Todos os elementos que casam com o seletor."""
        return self._scope(root).select(selector)

    def select_one(self, selector: str, root: Optional[Node] = None) -> Optional[Tag]:
        """Primeiro elemento que casa com o seletor, ou None."""
        if not selector:
            return None
        return self._scope(root).select_one(selector)

    def text_of(self, selector: str, root: Optional[Node] = None) -> str:
        """
        Texto concatenado dos elementos que casam com o seletor.
        Retorna string vazia quando nada casa.
        """
        if not selector:
            return ""
        return "".join(
            el.get_text() for el in self._scope(root).select(selector)
        ).strip()

    def attr_of(
        self,
        selector: str,
        attribute: str,
        root: Optional[Node] = None,
    ) -> str:
        """Atributo do primeiro elemento que casa com o seletor."""
        element = self.select_one(selector, root)
        if element is None:
            return ""
        value = element.get(attribute)
        if isinstance(value, list):
            value = " ".join(value)
        return (value or "").strip()
