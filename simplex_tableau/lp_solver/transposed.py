"""
Layout denso por colunas: guarda a transposta (n+1) x (m+2) em ordem Fortran.
"""
from typing import Optional, Union

import numpy as np

from simplex_tableau.array.operation import axpy, divide
from simplex_tableau.core.options import Options
from simplex_tableau.core.structure import LinearStructure
from simplex_tableau.lp_solver.tableau import IterationPoint, SimplexTableau


class TransposedTableau(SimplexTableau):
    """
    A transposta é guardada em ordem Fortran, então a linha lógica 'r' do
    tableau é a coluna física transposed[:, r], contígua na memória. A
    eliminação do pivô opera sempre sobre memória contígua.
    """

    def __init__(self, source: Union[LinearStructure, SimplexTableau], options: Optional[Options] = None):
        if isinstance(source, SimplexTableau):
            super().__init__(source.structure, options if options else source.options)
            self._copy_state_from(source)
            self._transposed = np.asfortranarray(source.to_array().T, dtype=float)
        else:
            super().__init__(source, options)
            self._transposed = np.zeros((self.n + 1, self.m + 2), order='F')

    def get(self, row: int, col: int) -> float:
        return float(self._transposed[col, row])

    def set(self, row: int, col: int, value: float):
        self._transposed[col, row] = value

    def add(self, row: int, col: int, value: float):
        self._transposed[col, row] += value

    def get_transposed(self) -> np.ndarray:
        return self._transposed

    def _row_values(self, row: int) -> np.ndarray:
        return self._transposed[:, row].copy()

    def _column_values(self, col: int) -> np.ndarray:
        return self._transposed[col, :].copy()

    def to_array(self) -> np.ndarray:
        return self._transposed.T.copy()

    def to_dense(self) -> "TransposedTableau":
        return self

    def get_value(self) -> float:
        return float(self._transposed[self.n, self.m])

    def get_infeasibility(self) -> float:
        return float(self._transposed[self.n, self.m + 1])

    def _do_pivot(self, row: int, col: int, pivot_row: np.ndarray):
        transposed = self._transposed
        for i in range(transposed.shape[1]):
            if i != row:
                data_row = transposed[:, i]
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

        # View da linha do pivô; o laço de eliminação nunca a escreve
        pivot_row = self._transposed[:, row]

        self._scale(pivot_row, col)

        self._do_pivot(row, col, pivot_row)

        self.update(row, col)

    def _auxiliary_row(self, row: int, factor: float) -> np.ndarray:
        return factor * self._transposed[:, row]

    def _apply_auxiliary_row(self, row: int, col: int, auxiliary_row: np.ndarray, auxiliary_rhs: float) -> bool:
        auxiliary_row[self.n] = auxiliary_rhs

        self._scale(auxiliary_row, col)

        if self._leaves_negative_rhs(row, col, auxiliary_row[self.n]):
            return False

        self._do_pivot(-1, col, auxiliary_row)

        self._transposed[:, row] = auxiliary_row

        return True
