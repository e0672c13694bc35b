"""
Kernels vetorizados usados pelo pivoteamento (sempre in-place).
"""
import numpy as np


def axpy(y: np.ndarray, alpha: float, x: np.ndarray):
    """y[i] += alpha * x[i] sobre todo o intervalo (y e x do mesmo tamanho)."""
    y += alpha * x


def divide(data: np.ndarray, divisor: float):
    """data[i] /= divisor."""
    data /= divisor


def nonzeros(data) -> tuple:
    """
    Retorna (índices, valores) das entradas não-nulas, em ordem crescente de índice.

    Aceita um SparseArray (que já conhece os seus não-nulos) ou qualquer coisa
    conversível em um np.ndarray.
    """
    if hasattr(data, 'nonzeros'):
        return data.nonzeros()
    values = np.asarray(data, dtype=float)
    indices = np.flatnonzero(values)
    return indices, values[indices]
