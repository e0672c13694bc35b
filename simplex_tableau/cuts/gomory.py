"""
Gera cortes de Gomory Misto-Inteiros (MIG) a partir de uma linha do tableau.
"""
import logging
import math
from typing import Optional, Sequence

import numpy as np

from simplex_tableau.core.problem import ConstraintSense, Equation

ZERO_COEFF = 1e-12


def generate_gomory_mixed_integer(row, basic_index: int, rhs: float, integer: Sequence[bool],
                                  fractionality: float, excluded: Sequence[int]) -> Optional[Equation]:
    """
    Deriva um corte MIG de uma linha básica fracionária.

    Args:
        row: A linha do tableau (corpo, todas as colunas reais).
        basic_index: A variável básica da linha.
        rhs: O valor (fracionário) atual da variável básica.
        integer: Flags de integralidade indexadas pela variável do modelo.
        fractionality: Parte fracionária mínima (dos dois lados) para gerar o corte.
        excluded: As colunas não-básicas.

    Returns:
        O corte sum(coeffs * x) >= f_0, ou None se nenhum corte útil for gerado.
    """
    f_0 = rhs - math.floor(rhs)
    if f_0 < fractionality or 1.0 - f_0 < fractionality:
        return None

    row = np.asarray(row, dtype=float)
    coeffs = np.zeros(len(row))

    for j in excluded:
        if j == basic_index or j >= len(row):
            continue
        a_j = row[j]
        if a_j == 0.0:
            continue

        if j < len(integer) and integer[j]:
            f_j = a_j - math.floor(a_j)
            if f_j <= f_0:
                coeffs[j] = f_j
            else:
                coeffs[j] = f_0 * (1.0 - f_j) / (1.0 - f_0)
        else:  # Variáveis contínuas (inclui as folgas)
            if a_j >= 0:
                coeffs[j] = a_j
            else:
                coeffs[j] = (f_0 / (f_0 - 1.0)) * a_j

    coeffs[np.abs(coeffs) < ZERO_COEFF] = 0.0
    if not np.any(coeffs):
        return None

    logging.debug(f"Corte de Gomory Misto-Inteiro gerado a partir da variável x{basic_index} (f_0={f_0:.4f}).")
    return Equation(coeffs, ConstraintSense.GTE, f_0, index=basic_index)
