"""
Rastreia quais índices de coluna estão incluídos (na base) ou excluídos.
"""
from typing import Dict, List


class IndexSelector:
    """
    Particiona o universo de índices [0, size) em dois conjuntos complementares.

    Os dois conjuntos são dicionários (ordem de inserção preservada), então
    a enumeração segue o histórico de inclusões/exclusões e não é ordenada.
    Inicialmente todos os índices estão excluídos, em ordem crescente.
    """

    def __init__(self, size: int):
        self.size = size
        self._included: Dict[int, None] = {}
        self._excluded: Dict[int, None] = dict.fromkeys(range(size))

    def include(self, index: int):
        # Chamado apenas em transições reais (ver SimplexTableau.update)
        if index in self._excluded:
            del self._excluded[index]
            self._included[index] = None

    def exclude(self, index: int):
        if index in self._included:
            del self._included[index]
            self._excluded[index] = None

    def is_included(self, index: int) -> bool:
        return index in self._included

    def is_excluded(self, index: int) -> bool:
        return index in self._excluded

    def count_included(self) -> int:
        return len(self._included)

    def count_excluded(self) -> int:
        return len(self._excluded)

    def get_included(self) -> List[int]:
        return list(self._included)

    def get_excluded(self) -> List[int]:
        return list(self._excluded)

    def copy(self) -> "IndexSelector":
        clone = IndexSelector.__new__(IndexSelector)
        clone.size = self.size
        clone._included = dict(self._included)
        clone._excluded = dict(self._excluded)
        return clone

    def __repr__(self) -> str:
        return f"IndexSelector(included={self.get_included()}, excluded={self.get_excluded()})"
