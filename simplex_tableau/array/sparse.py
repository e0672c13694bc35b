"""
Vetor esparso com pares explícitos (índice, valor) mantidos em arrays numpy.
"""
from typing import Iterator, Tuple, Union

import numpy as np
from scipy.sparse import csr_matrix


class SparseArray:
    """
    Vetor esparso de tamanho fixo.

    Os índices ficam ordenados e sem repetição; zeros exatos nunca são
    armazenados (atribuir 0.0 remove a entrada).
    """

    def __init__(self, size: int, indices=None, values=None):
        self.size = size
        if indices is None:
            self._indices = np.empty(0, dtype=np.intp)
            self._values = np.empty(0, dtype=float)
        else:
            # Ordena e soma índices repetidos; _position depende da ordem
            indices = np.asarray(indices, dtype=np.intp).ravel()
            values = np.asarray(values, dtype=float).ravel()
            if len(indices) != len(values):
                raise ValueError("Índices e valores devem ter o mesmo tamanho.")
            if np.any((indices < 0) | (indices >= size)):
                raise ValueError(f"Índice fora do intervalo [0, {size}).")
            unique, inverse = np.unique(indices, return_inverse=True)
            merged = np.zeros(len(unique))
            np.add.at(merged, inverse.ravel(), values)
            keep = merged != 0.0
            self._indices = unique[keep]
            self._values = merged[keep]

    @classmethod
    def from_dense(cls, data) -> "SparseArray":
        data = np.asarray(data, dtype=float)
        indices = np.flatnonzero(data)
        return cls(len(data), indices, data[indices])

    @classmethod
    def from_csr_row(cls, matrix: csr_matrix, row: int) -> "SparseArray":
        start, end = matrix.indptr[row], matrix.indptr[row + 1]
        return cls(matrix.shape[1], matrix.indices[start:end], matrix.data[start:end])

    def __len__(self) -> int:
        return self.size

    def _position(self, index: int) -> Tuple[int, bool]:
        pos = int(np.searchsorted(self._indices, index))
        found = pos < len(self._indices) and self._indices[pos] == index
        return pos, found

    def get(self, index: int) -> float:
        pos, found = self._position(index)
        return float(self._values[pos]) if found else 0.0

    def set(self, index: int, value: float):
        pos, found = self._position(index)
        if value == 0.0:
            if found:
                self._indices = np.delete(self._indices, pos)
                self._values = np.delete(self._values, pos)
        elif found:
            self._values[pos] = value
        else:
            self._indices = np.insert(self._indices, pos, index)
            self._values = np.insert(self._values, pos, value)

    def add(self, index: int, value: float):
        self.set(index, self.get(index) + value)

    __getitem__ = get
    __setitem__ = set

    def nonzeros(self) -> Tuple[np.ndarray, np.ndarray]:
        """(índices, valores) em ordem crescente de índice. Não copie para escrever."""
        return self._indices, self._values

    def count_nonzeros(self) -> int:
        return len(self._indices)

    def __iter__(self) -> Iterator[float]:
        return iter(self.to_dense())

    def axpy(self, alpha: float, y: Union["SparseArray", np.ndarray]):
        """y += alpha * self, onde y é outro SparseArray ou um np.ndarray denso."""
        if len(self._indices) == 0:
            return
        if isinstance(y, SparseArray):
            y._add_scaled(self._indices, alpha * self._values)
        else:
            y[self._indices] += alpha * self._values

    def _add_scaled(self, indices: np.ndarray, scaled: np.ndarray):
        union = np.union1d(self._indices, indices)
        merged = np.zeros(len(union))
        merged[np.searchsorted(union, self._indices)] = self._values
        merged[np.searchsorted(union, indices)] += scaled
        # Cancelamentos exatos somem da estrutura
        keep = merged != 0.0
        self._indices = union[keep]
        self._values = merged[keep]

    def divide(self, divisor: float):
        self._values /= divisor

    def scale(self, factor: float) -> "SparseArray":
        """Cópia multiplicada por 'factor'."""
        return SparseArray(self.size, self._indices.copy(), self._values * factor)

    def copy(self) -> "SparseArray":
        return SparseArray(self.size, self._indices.copy(), self._values.copy())

    def to_dense(self) -> np.ndarray:
        dense = np.zeros(self.size)
        dense[self._indices] = self._values
        return dense

    def __array__(self, dtype=None, copy=None):
        dense = self.to_dense()
        return dense if dtype is None else dense.astype(dtype)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{i}: {v}" for i, v in zip(self._indices, self._values))
        return f"SparseArray(size={self.size}, {{{pairs}}})"
