"""
Layout esparso: uma linha esparsa por restrição e vetores densos para o resto.
"""
import logging
from typing import Optional, Union

import numpy as np

from simplex_tableau.array.sparse import SparseArray
from simplex_tableau.core.options import Options
from simplex_tableau.core.structure import LinearStructure
from simplex_tableau.lp_solver.tableau import IterationPoint, SimplexTableau
from simplex_tableau.lp_solver.transposed import TransposedTableau


class SparseTableau(SimplexTableau):
    """
    Para matrizes de restrição com poucos não-nulos.

    Não existe um buffer único: get/set despacham pela região (corpo, RHS,
    objetivo, fase 1). O custo da eliminação é proporcional aos não-nulos da
    linha do pivô.
    """

    def __init__(self, source: Union[LinearStructure, SimplexTableau], options: Optional[Options] = None):
        if isinstance(source, SimplexTableau):
            structure = source.structure
            options = options if options else source.options
        else:
            structure = source
        super().__init__(structure, options)

        # Incluindo as variáveis artificiais
        total_vars = self.n

        if isinstance(source, SparseTableau):
            self._copy_state_from(source)
            self._rows = [row.copy() for row in source._rows]
            self._rhs = source._rhs.copy()
            self._objective_weights = source._objective_weights.copy()
            self._phase1_weights = source._phase1_weights.copy()
            self._value = source._value
            self._infeasibility = source._infeasibility
        elif isinstance(source, SimplexTableau):
            self._copy_state_from(source)
            data = source.to_array()
            self._rows = [SparseArray.from_dense(data[r, :total_vars]) for r in range(self.m)]
            self._rhs = data[:self.m, total_vars].copy()
            self._objective_weights = data[self.m, :total_vars].copy()
            self._phase1_weights = data[self.m + 1, :total_vars].copy()
            self._value = float(data[self.m, total_vars])
            self._infeasibility = float(data[self.m + 1, total_vars])
        else:
            self._rows = [SparseArray(total_vars) for _ in range(self.m)]
            self._rhs = np.zeros(self.m)
            self._objective_weights = np.zeros(total_vars)
            self._phase1_weights = np.zeros(total_vars)
            self._value = 0.0
            self._infeasibility = 0.0

    def get(self, row: int, col: int) -> float:
        if row < self.m:
            if col < self.n:
                return self._rows[row].get(col)
            return float(self._rhs[row])
        elif row == self.m:
            if col < self.n:
                return float(self._objective_weights[col])
            return float(self._value)
        elif col < self.n:
            return float(self._phase1_weights[col])
        else:
            return float(self._infeasibility)

    def set(self, row: int, col: int, value: float):
        if row < self.m:
            if col < self.n:
                self._rows[row].set(col, value)
            else:
                self._rhs[row] = value
        elif row == self.m:
            if col < self.n:
                self._objective_weights[col] = value
            else:
                self._value = value
        elif col < self.n:
            self._phase1_weights[col] = value
        else:
            self._infeasibility = value

    def get_row(self, row: int) -> SparseArray:
        return self._rows[row]

    def get_rhs(self) -> np.ndarray:
        return self._rhs

    def get_objective_weights(self) -> np.ndarray:
        return self._objective_weights

    def get_phase1_weights(self) -> np.ndarray:
        return self._phase1_weights

    def count_nonzeros(self) -> int:
        return sum(row.count_nonzeros() for row in self._rows)

    def _row_values(self, row: int) -> np.ndarray:
        values = np.empty(self.n + 1)
        if row < self.m:
            values[:self.n] = self._rows[row].to_dense()
            values[self.n] = self._rhs[row]
        elif row == self.m:
            values[:self.n] = self._objective_weights
            values[self.n] = self._value
        else:
            values[:self.n] = self._phase1_weights
            values[self.n] = self._infeasibility
        return values

    def _column_values(self, col: int) -> np.ndarray:
        values = np.empty(self.m + 2)
        if col < self.n:
            values[:self.m] = [row.get(col) for row in self._rows]
            values[self.m] = self._objective_weights[col]
            values[self.m + 1] = self._phase1_weights[col]
        else:
            values[:self.m] = self._rhs
            values[self.m] = self._value
            values[self.m + 1] = self._infeasibility
        return values

    def to_array(self) -> np.ndarray:
        data = np.zeros((self.m + 2, self.n + 1))
        for r, row in enumerate(self._rows):
            indices, values = row.nonzeros()
            data[r, indices] = values
        data[:self.m, self.n] = self._rhs
        data[self.m, :self.n] = self._objective_weights
        data[self.m, self.n] = self._value
        data[self.m + 1, :self.n] = self._phase1_weights
        data[self.m + 1, self.n] = self._infeasibility
        return data

    def to_dense(self) -> TransposedTableau:
        """Materializa uma cópia densa, para quando a aritmética densa já compensa."""
        logging.debug(f"Convertendo tableau esparso (densidade {self.density():.3f}) para denso.")
        return TransposedTableau(self)

    def get_value(self) -> float:
        return float(self._value)

    def get_infeasibility(self) -> float:
        return float(self._infeasibility)

    def _do_pivot(self, row: int, col: int, pivot_row_body: SparseArray, pivot_row_rhs: float):

        for i, row_y in enumerate(self._rows):
            if i != row:
                col_val = -row_y.get(col)
                if col_val != 0.0:
                    pivot_row_body.axpy(col_val, row_y)
                    self._rhs[i] += col_val * pivot_row_rhs

        col_val = -self._objective_weights[col]
        if col_val != 0.0:
            pivot_row_body.axpy(col_val, self._objective_weights)
            self._value += col_val * pivot_row_rhs

        col_val = -self._phase1_weights[col]
        if col_val != 0.0:
            pivot_row_body.axpy(col_val, self._phase1_weights)
            self._infeasibility += col_val * pivot_row_rhs

    @staticmethod
    def _scale(pivot_row_body: SparseArray, pivot_row_rhs: float, col: int) -> float:
        pivot_element = pivot_row_body.get(col)

        if pivot_element != 1.0:
            pivot_row_body.divide(pivot_element)
            return pivot_row_rhs / pivot_element

        return pivot_row_rhs

    def pivot(self, point: IterationPoint):
        row, col = point

        pivot_row_body = self._rows[row]
        pivot_row_rhs = self._scale(pivot_row_body, float(self._rhs[row]), col)
        self._rhs[row] = pivot_row_rhs

        self._do_pivot(row, col, pivot_row_body, pivot_row_rhs)

        self.update(row, col)

    def _auxiliary_row(self, row: int, factor: float) -> SparseArray:
        return self._rows[row].scale(factor)

    def _apply_auxiliary_row(self, row: int, col: int, auxiliary_row: SparseArray, auxiliary_rhs: float) -> bool:
        auxiliary_rhs = self._scale(auxiliary_row, auxiliary_rhs, col)

        if self._leaves_negative_rhs(row, col, auxiliary_rhs):
            return False

        self._do_pivot(-1, col, auxiliary_row, auxiliary_rhs)

        self._rows[row] = auxiliary_row
        self._rhs[row] = auxiliary_rhs

        return True

    def density(self) -> float:
        """Fração de não-nulos no corpo das restrições."""
        cells = self.m * self.n
        return self.count_nonzeros() / cells if cells else 0.0
