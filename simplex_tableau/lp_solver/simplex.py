import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from simplex_tableau.core.options import Options
from simplex_tableau.lp_solver.tableau import IterationPoint, SimplexTableau


class SolverStatus(Enum):
    OPTIMAL = "Optimal"
    INFEASIBLE = "Infeasible"
    UNBOUNDED = "Unbounded"
    ITERATION_LIMIT = "IterationLimit"


@dataclass
class LPResult:
    """
    Resultado do driver simplex.

    Atributos:
        status (SolverStatus): Situação final.
        objective (Optional[float]): Valor do objetivo (sentido de minimização).
        solution (Optional[np.ndarray]): Valores das variáveis do modelo.
        basis (Optional[np.ndarray]): A base final (linha -> coluna).
        duals (Optional[np.ndarray]): Variáveis duais, se extraíveis.
        iterations (int): Número de pivôs executados.
    """
    status: SolverStatus
    objective: Optional[float] = None
    solution: Optional[np.ndarray] = None
    basis: Optional[np.ndarray] = None
    duals: Optional[np.ndarray] = None
    iterations: int = 0


class TableauSimplexSolver:
    """
    Driver de duas fases sobre qualquer layout de SimplexTableau.

    Regra de Dantzig para a coluna que entra e teste da razão mínima para a
    linha que sai. Só usa o contrato do tableau, nunca o layout.
    """

    def __init__(self, tableau: SimplexTableau, options: Optional[Options] = None, max_iterations: Optional[int] = None):
        self.tableau = tableau
        self.options = options if options else tableau.options
        self.max_iterations = max_iterations if max_iterations is not None else 50 * (tableau.m + tableau.n)
        self.iterations = 0

    def solve(self) -> LPResult:
        tableau = self.tableau

        # 1. Fase 1: zera a soma das artificiais
        if tableau.get_infeasibility() < -self.options.tolerance:
            logging.info(f"Fase 1: inviabilidade inicial {-tableau.get_infeasibility():.6g}.")
            status = self._iterate(phase1=True)
            if status is not None:
                return LPResult(status, iterations=self.iterations)
            if tableau.get_infeasibility() < -self.options.tolerance:
                logging.info("Fase 1 terminou com inviabilidade positiva. Problema inviável.")
                return LPResult(SolverStatus.INFEASIBLE, basis=tableau.get_basis(), iterations=self.iterations)

        # 2. Tira da base as artificiais que ficaram no nível zero
        if tableau.is_basic_artificials():
            self._eliminate_artificials()

        # 3. Fase 2: otimiza o objetivo original
        logging.debug("Fase 2.")
        status = self._iterate(phase1=False)
        if status is not None:
            return LPResult(status, basis=tableau.get_basis(), iterations=self.iterations)

        return self._extract_solution()

    def _iterate(self, phase1: bool) -> Optional[SolverStatus]:
        while True:
            pivot_col = self._find_pivot_column(phase1)
            if pivot_col == -1:
                return None

            pivot_row = self._find_pivot_row(pivot_col)
            if pivot_row == -1:
                if phase1:
                    # O objetivo da fase 1 é limitado; não há mais o que melhorar
                    return None
                logging.info(f"Coluna {pivot_col} sem limite no teste da razão. Problema ilimitado.")
                return SolverStatus.UNBOUNDED

            if self.iterations >= self.max_iterations:
                logging.warning(f"Número máximo de iterações ({self.max_iterations}) atingido.")
                return SolverStatus.ITERATION_LIMIT

            logging.debug(f"Pivô ({pivot_row}, {pivot_col}) na fase {1 if phase1 else 2}.")
            self.tableau.pivot(IterationPoint(pivot_row, pivot_col))
            self.iterations += 1

    def _find_pivot_column(self, phase1: bool) -> int:
        tableau = self.tableau
        nb_vars = tableau.structure.count_variables()

        cost_row = np.asarray(tableau.slice_tableau_row(tableau.m + 1 if phase1 else tableau.m))[:nb_vars]

        # Só colunas reais fora da base podem entrar
        candidates = np.full(nb_vars, np.inf)
        excluded = tableau.get_excluded()
        candidates[excluded] = cost_row[excluded]

        pivot_col = int(np.argmin(candidates)) if nb_vars else -1
        if pivot_col < 0 or candidates[pivot_col] >= -self.options.tolerance:
            return -1
        return pivot_col

    def _find_pivot_row(self, pivot_col: int) -> int:
        rhs = np.asarray(self.tableau.slice_constraints_rhs())
        pivot_col_vals = np.asarray(self.tableau.slice_body_column(pivot_col))
        ratios = np.divide(rhs, pivot_col_vals, out=np.full_like(rhs, np.inf), where=pivot_col_vals > self.options.tolerance)
        if np.all(np.isinf(ratios)):
            return -1
        return int(np.argmin(ratios))

    def _eliminate_artificials(self):
        tableau = self.tableau
        for row in range(tableau.m):
            if tableau.get_basis_column_index(row) >= 0:
                continue
            body_row = np.asarray(tableau.slice_body_row(row))
            entering = [j for j in tableau.get_excluded() if abs(body_row[j]) > self.options.tolerance]
            if entering:
                col = min(entering)
                logging.debug(f"Artificial da linha {row} sai da base pela coluna {col}.")
                tableau.pivot(IterationPoint(row, col))
                self.iterations += 1
            else:
                logging.debug(f"Linha {row} é redundante; a artificial permanece no nível zero.")

    def _extract_solution(self) -> LPResult:
        tableau = self.tableau
        nb_model_vars = tableau.structure.count_model_variables()

        solution = np.zeros(nb_model_vars)
        rhs = np.asarray(tableau.slice_constraints_rhs())
        for i, basis_var_idx in enumerate(tableau.get_basis()):
            if 0 <= basis_var_idx < nb_model_vars:
                solution[basis_var_idx] = rhs[i]

        duals = None
        if tableau.is_able_to_extract_dual():
            duals = -np.asarray(tableau.slice_dual_variables())

        objective = -tableau.get_value()
        logging.info(f"Ótimo encontrado após {self.iterations} pivôs. Valor: {objective:.6g}")

        return LPResult(SolverStatus.OPTIMAL, objective, solution, tableau.get_basis(), duals, self.iterations)
