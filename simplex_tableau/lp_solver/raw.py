"""
Layout denso por linhas: um np.ndarray C-contíguo (m+2) x (n+1).
"""
from typing import Optional, Union

import numpy as np

from simplex_tableau.array.operation import axpy, divide
from simplex_tableau.core.options import Options
from simplex_tableau.core.structure import LinearStructure
from simplex_tableau.lp_solver.tableau import IterationPoint, SimplexTableau


class RawTableau(SimplexTableau):
    """
    Cada linha lógica é uma linha contígua da matriz; simples e eficiente para
    varreduras por linha (teste da razão, geração de cortes).
    """

    def __init__(self, source: Union[LinearStructure, SimplexTableau], options: Optional[Options] = None):
        if isinstance(source, SimplexTableau):
            super().__init__(source.structure, options if options else source.options)
            self._copy_state_from(source)
            self._raw = np.array(source.to_array(), dtype=float, order='C')
        else:
            super().__init__(source, options)
            self._raw = np.zeros((self.m + 2, self.n + 1))

    def get(self, row: int, col: int) -> float:
        return float(self._raw[row, col])

    def set(self, row: int, col: int, value: float):
        self._raw[row, col] = value

    def add(self, row: int, col: int, value: float):
        self._raw[row, col] += value

    def _row_values(self, row: int) -> np.ndarray:
        return self._raw[row].copy()

    def _column_values(self, col: int) -> np.ndarray:
        return self._raw[:, col].copy()

    def to_array(self) -> np.ndarray:
        return self._raw.copy()

    def to_dense(self) -> "RawTableau":
        return self

    def get_value(self) -> float:
        return float(self._raw[self.m, self.n])

    def get_infeasibility(self) -> float:
        return float(self._raw[self.m + 1, self.n])

    def _do_pivot(self, row: int, col: int, pivot_row: np.ndarray):
        # A linha do pivô nunca é escrita aqui (i != row), então pode ser uma view
        for i in range(self._raw.shape[0]):
            if i != row:
                data_row = self._raw[i]
                col_val = data_row[col]
                if col_val != 0.0:
                    axpy(data_row, -col_val, pivot_row)

    @staticmethod
    def _scale(pivot_row: np.ndarray, col: int):
        pivot_element = pivot_row[col]
        if pivot_element != 1.0:
            divide(pivot_row, pivot_element)

    def pivot(self, point: IterationPoint):
        row, col = point

        pivot_row = self._raw[row]

        self._scale(pivot_row, col)

        self._do_pivot(row, col, pivot_row)

        self.update(row, col)

    def _auxiliary_row(self, row: int, factor: float) -> np.ndarray:
        return factor * self._raw[row]

    def _apply_auxiliary_row(self, row: int, col: int, auxiliary_row: np.ndarray, auxiliary_rhs: float) -> bool:
        auxiliary_row[self.n] = auxiliary_rhs

        self._scale(auxiliary_row, col)

        if self._leaves_negative_rhs(row, col, auxiliary_row[self.n]):
            return False

        self._do_pivot(-1, col, auxiliary_row)

        self._raw[row] = auxiliary_row

        return True
