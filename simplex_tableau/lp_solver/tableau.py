"""
O contrato do tableau simplex, comum aos três layouts de armazenamento.

O tableau é uma matriz aumentada (m+2) x (n+1):
    linhas 0..m-1 : restrições (corpo nas colunas 0..n-1, RHS na coluna n)
    linha m       : objetivo da fase 2 (valor atual na coluna n)
    linha m+1     : pesos da fase 1 (inviabilidade atual na coluna n)
"""
import logging
from abc import ABC, abstractmethod
from typing import List, NamedTuple, Optional, Sequence

import numpy as np

from simplex_tableau.array.operation import nonzeros
from simplex_tableau.core.options import Options
from simplex_tableau.core.problem import Equation
from simplex_tableau.core.selector import IndexSelector
from simplex_tableau.core.structure import LinearStructure
from simplex_tableau.cuts.gomory import generate_gomory_mixed_integer


class TableauStateError(RuntimeError):
    """A base e a matriz deixaram de ser consistentes (erro de programação)."""
    pass


class IterationPoint(NamedTuple):
    """Par (linha que sai, coluna que entra) escolhido pelo driver."""
    row: int
    col: int


# --- VISÕES SOBRE REGIÕES DO TABLEAU ---
# Não guardam dados: apenas um deslocamento dentro do tableau dono.

class Primitive1D(ABC):
    """Visão unidimensional de leitura/escrita."""

    def __len__(self) -> int:
        return self.size()

    @abstractmethod
    def size(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def get(self, index: int) -> float:
        raise NotImplementedError

    @abstractmethod
    def set(self, index: int, value: float):
        raise NotImplementedError

    def __getitem__(self, index: int) -> float:
        return self.get(index)

    def __setitem__(self, index: int, value: float):
        self.set(index, value)

    def __iter__(self):
        return iter(self.to_array())

    def to_array(self) -> np.ndarray:
        return np.array([self.get(i) for i in range(self.size())], dtype=float)

    def __array__(self, dtype=None, copy=None):
        values = self.to_array()
        return values if dtype is None else values.astype(dtype)


class TableauRow(Primitive1D):

    def __init__(self, tableau: "SimplexTableau", row: int, length: int, offset: int = 0):
        self._tableau = tableau
        self._row = row
        self._length = length
        self._offset = offset

    def size(self) -> int:
        return self._length

    def get(self, index: int) -> float:
        return self._tableau.get(self._row, self._offset + index)

    def set(self, index: int, value: float):
        self._tableau.set(self._row, self._offset + index, value)

    def to_array(self) -> np.ndarray:
        return self._tableau._row_values(self._row)[self._offset:self._offset + self._length]


class TableauColumn(Primitive1D):

    def __init__(self, tableau: "SimplexTableau", col: int, length: int):
        self._tableau = tableau
        self._col = col
        self._length = length

    def size(self) -> int:
        return self._length

    def get(self, index: int) -> float:
        return self._tableau.get(index, self._col)

    def set(self, index: int, value: float):
        self._tableau.set(index, self._col, value)

    def to_array(self) -> np.ndarray:
        return self._tableau._column_values(self._col)[:self._length]


class ConstraintsRHS(TableauColumn):
    """
    A coluna do RHS das restrições.

    Escrever o RHS da linha i também semeia a coluna da variável artificial
    dessa linha (se houver artificiais) e, para linhas além do bloco de folgas
    identidade, acumula o valor na inviabilidade (fase 1).
    """

    def __init__(self, tableau: "SimplexTableau"):
        super().__init__(tableau, tableau.n, tableau.m)
        structure = tableau.structure
        self._nb_identity = structure.identity
        self._dual_identity_base = tableau.n - tableau.m
        self._artificials = structure.artificial > 0

    def set(self, index: int, value: float):
        tableau = self._tableau
        if self._artificials:
            tableau.set(index, self._dual_identity_base + index, 1.0)

        tableau.set(index, tableau.n, value)

        if index >= self._nb_identity:
            tableau.add(tableau.m + 1, tableau.n, -value)


class Objective(TableauRow):
    """Os custos das variáveis do modelo na linha do objetivo (fase 2)."""

    def __init__(self, tableau: "SimplexTableau"):
        super().__init__(tableau, tableau.m, tableau.structure.count_model_variables())


class ConstraintsBody:
    """
    O corpo das restrições (m x count_variables, sem as artificiais).

    Em linhas do bloco de folgas identidade, escrever 1.0 numa coluna desse bloco
    coloca a coluna na base. Nas demais linhas o valor é subtraído da linha da
    fase 1.
    """

    def __init__(self, tableau: "SimplexTableau"):
        self._tableau = tableau
        self._nb_identity = tableau.structure.identity
        self._dual_identity_base = tableau.n - tableau.m
        self.shape = (tableau.m, tableau.structure.count_variables())

    def get(self, row: int, col: int) -> float:
        return self._tableau.get(row, col)

    def set(self, row: int, col: int, value: float):
        tableau = self._tableau
        tableau.set(row, col, value)

        if row < self._nb_identity:
            if col >= self._dual_identity_base and value == 1.0:
                tableau.update(row, col)
        else:
            tableau.add(tableau.m + 1, col, -value)

    def __getitem__(self, key) -> float:
        return self.get(*key)

    def __setitem__(self, key, value: float):
        self.set(key[0], key[1], value)

    def to_array(self) -> np.ndarray:
        return self._tableau.to_array()[:self.shape[0], :self.shape[1]]


# --- O CONTRATO ---

class SimplexTableau(ABC):
    """
    Classe base abstrata para os layouts do tableau.

    Mantém a base (linha -> coluna básica; negativo = artificial) e o seletor
    de colunas incluídas/excluídas sempre em sincronia via update().
    """

    def __init__(self, structure: LinearStructure, options: Optional[Options] = None):
        self.structure = structure
        self.options = options if options else Options()

        # m: número de restrições; n: número total de variáveis (todos os tipos)
        self.m = structure.count_constraints()
        self.n = structure.count_variables_totally()

        self._selector = IndexSelector(structure.count_variables())
        self._basis = np.arange(-self.m, 0, dtype=np.intp)

    def _copy_state_from(self, other: "SimplexTableau"):
        self._selector = other._selector.copy()
        self._basis = other._basis.copy()

    # --- ACESSO A CÉLULAS (específico do layout) ---

    @abstractmethod
    def get(self, row: int, col: int) -> float:
        raise NotImplementedError

    @abstractmethod
    def set(self, row: int, col: int, value: float):
        raise NotImplementedError

    def add(self, row: int, col: int, value: float):
        self.set(row, col, self.get(row, col) + value)

    def get_row_dim(self) -> int:
        return self.m + 2

    def get_col_dim(self) -> int:
        return self.n + 1

    @abstractmethod
    def _row_values(self, row: int) -> np.ndarray:
        """Cópia densa de uma linha lógica inteira (n+1)."""
        raise NotImplementedError

    @abstractmethod
    def _column_values(self, col: int) -> np.ndarray:
        """Cópia densa de uma coluna lógica inteira (m+2)."""
        raise NotImplementedError

    @abstractmethod
    def to_array(self) -> np.ndarray:
        """Cópia densa (m+2) x (n+1) da matriz lógica."""
        raise NotImplementedError

    @abstractmethod
    def to_dense(self) -> "SimplexTableau":
        raise NotImplementedError

    @abstractmethod
    def get_value(self) -> float:
        """O valor do objetivo (fase 2), como guardado no tableau."""
        raise NotImplementedError

    @abstractmethod
    def get_infeasibility(self) -> float:
        """O valor do objetivo da fase 1."""
        raise NotImplementedError

    def value(self, phase1: bool) -> float:
        """O valor atual do objetivo, fase 1 ou 2."""
        if phase1:
            return self.get_infeasibility()
        return self.get_value()

    # --- PIVOTEAMENTO ---

    @abstractmethod
    def pivot(self, point: IterationPoint):
        raise NotImplementedError

    @abstractmethod
    def _auxiliary_row(self, row: int, factor: float):
        """Cópia da linha 'row' multiplicada por 'factor', no formato do layout."""
        raise NotImplementedError

    @abstractmethod
    def _apply_auxiliary_row(self, row: int, col: int, auxiliary_row, auxiliary_rhs: float) -> bool:
        """
        Escala a linha auxiliar, elimina 'col' de todas as linhas com ela e a
        coloca no lugar de 'row'. Retorna False, sem alterar nada, se algum RHS
        ficaria negativo.
        """
        raise NotImplementedError

    def _leaves_negative_rhs(self, row: int, col: int, pivot_rhs: float) -> bool:
        # Mesma aritmética da eliminação: rhs_i + (-a_i) * pivot_rhs
        rhs = self._column_values(self.n)[:self.m]
        col_vals = self._column_values(col)[:self.m]
        updated = rhs + (-col_vals) * pivot_rhs
        updated[row] = pivot_rhs
        return bool(np.any(updated < 0.0))

    def find_next_pivot_column(self, auxiliary_row, objective_row) -> int:
        """
        Teste da razão sobre as entradas não-nulas de 'auxiliary_row'.

        Só colunas reais (< count_variables) com valor < -pivot_threshold são
        elegíveis; escolhe a que minimiza |objective[col] / auxiliary[col]|.
        Em caso de empate vence a primeira. Retorna -1 se não houver coluna.
        """
        indices, values = nonzeros(auxiliary_row)
        eligible = (indices < self.structure.count_variables()) & (values < -self.options.pivot_threshold)
        if not np.any(eligible):
            return -1

        candidates = indices[eligible]
        objective = np.asarray(objective_row, dtype=float)
        quotients = np.abs(objective[candidates] / values[eligible])
        return int(candidates[np.argmin(quotients)])

    def fix_variable(self, index: int, value: float) -> bool:
        """
        Fixa a variável básica 'index' no valor 'value' sem re-resolver.

        Retorna False se a variável não é básica, se o teste da razão não acha
        coluna ou se algum RHS ficaria negativo; nesses casos o tableau fica
        inalterado e o chamador deve re-resolver do zero.
        """
        row = self.get_basis_row_index(index)

        if row < 0:
            return False

        current_rhs = self.get(row, self.n)

        if current_rhs > value:
            auxiliary_row = self._auxiliary_row(row, -1.0)
            auxiliary_rhs = value - current_rhs
        elif current_rhs < value:
            auxiliary_row = self._auxiliary_row(row, 1.0)
            auxiliary_rhs = current_rhs - value
        else:
            return True

        auxiliary_row[index] = 0.0

        pivot_col = self.find_next_pivot_column(auxiliary_row, self.slice_tableau_row(self.m))

        if pivot_col < 0:
            logging.debug(f"fix_variable: nenhuma coluna para fixar x{index} = {value}.")
            return False

        if not self._apply_auxiliary_row(row, pivot_col, auxiliary_row, auxiliary_rhs):
            logging.debug(f"fix_variable: fixar x{index} = {value} deixaria um RHS negativo.")
            return False

        self.update(row, pivot_col)

        return True

    # --- BASE E SELETOR ---

    def update(self, pivot_row: int, pivot_col: int):
        old = self._basis[pivot_row]
        if old >= 0:
            self._selector.exclude(int(old))

        if pivot_col >= 0:
            self._selector.include(pivot_col)

        self._basis[pivot_row] = pivot_col

    def get_basis(self) -> np.ndarray:
        return self._basis.copy()

    def get_basis_column_index(self, basis_row_index: int) -> int:
        return int(self._basis[basis_row_index])

    def get_basis_row_index(self, basis_column_index: int) -> int:
        rows = np.flatnonzero(self._basis == basis_column_index)
        return int(rows[0]) if len(rows) else -1

    def get_included(self) -> List[int]:
        return self._selector.get_included()

    def get_excluded(self) -> List[int]:
        return self._selector.get_excluded()

    def is_included(self, index: int) -> bool:
        return self._selector.is_included(index)

    def is_excluded(self, index: int) -> bool:
        return self._selector.is_excluded(index)

    def count_basic_artificials(self) -> int:
        """Número de variáveis artificiais na base (varre a base)."""
        return int(np.count_nonzero(self._basis < 0))

    def count_basis_deficit(self) -> int:
        """Mesmo número que count_basic_artificials(), via o seletor."""
        return self.m - self._selector.count_included()

    def is_basic_artificials(self) -> bool:
        return self.m > self._selector.count_included()

    def is_able_to_extract_dual(self) -> bool:
        return self.structure.is_able_to_extract_dual()

    def verify_basis(self):
        """
        Confere que toda coluna básica é o vetor unitário da sua linha.

        Raises:
            TableauStateError: se a base e a matriz estão inconsistentes.
        """
        epsilon = self.options.check_epsilon
        for i, j in enumerate(self._basis):
            if j < 0:
                continue
            expected = np.zeros(self.m + 2)
            expected[i] = 1.0
            column = self._column_values(int(j))
            if not np.allclose(column, expected, rtol=0.0, atol=epsilon):
                raise TableauStateError(f"Coluna básica {j} da linha {i} não é unitária: {column}")
            if not self._selector.is_included(int(j)):
                raise TableauStateError(f"Coluna básica {j} não está incluída no seletor.")

    # --- REGIÕES E FATIAS ---

    def constraints_body(self) -> ConstraintsBody:
        return ConstraintsBody(self)

    def constraints_rhs(self) -> ConstraintsRHS:
        return ConstraintsRHS(self)

    def objective(self) -> Objective:
        return Objective(self)

    def slice_constraints_rhs(self) -> ConstraintsRHS:
        return self.constraints_rhs()

    def slice_tableau_row(self, row: int) -> TableauRow:
        return TableauRow(self, row, self.get_col_dim())

    def slice_tableau_column(self, col: int) -> TableauColumn:
        return TableauColumn(self, col, self.get_row_dim())

    def slice_body_row(self, row: int) -> TableauRow:
        return TableauRow(self, row, self.structure.count_variables())

    def slice_body_column(self, col: int) -> TableauColumn:
        return TableauColumn(self, col, self.m)

    def slice_dual_variables(self) -> TableauRow:
        """As variáveis duais (do problema original, nunca da fase 1), com sinal do tableau."""
        return TableauRow(self, self.m, self.m, offset=self.n - self.m)

    # --- CORTES ---

    def generate_cut_candidates(self, integer: Sequence[bool], accuracy: Optional[float] = None,
                                fractionality: float = 0.001) -> List[Equation]:
        """
        Gera cortes de Gomory Misto-Inteiros a partir das linhas básicas fracionárias.

        Args:
            integer: Flags de integralidade indexadas pela variável do modelo.
            accuracy: Tolerância absoluta para considerar um RHS inteiro.
            fractionality: Parte fracionária mínima para gerar o corte.
        """
        if accuracy is None:
            accuracy = self.options.integer_tolerance

        nb_model_vars = self.structure.count_model_variables()
        rhs_values = self._column_values(self.n)[:self.m]

        if logging.getLogger().isEnabledFor(logging.DEBUG):
            solution = np.zeros(len(integer))
            for i, j in enumerate(self._basis):
                if 0 <= j < len(integer):
                    solution[j] = rhs_values[i]
            logging.debug(f"RHS: {solution}")
            logging.debug(f"Base: {self._basis}")

        excluded = self.get_excluded()
        cuts = []

        for i in range(self.m):
            j = self.get_basis_column_index(i)
            rhs = float(rhs_values[i])

            if 0 <= j < nb_model_vars and integer[j] and abs(rhs - round(rhs)) > accuracy:
                maybe = generate_gomory_mixed_integer(self.slice_body_row(i), j, rhs, integer, fractionality, excluded)
                if maybe is not None:
                    cuts.append(maybe)

        return cuts

    def __repr__(self) -> str:
        return f"{type(self).__name__}(m={self.m}, n={self.n}, basis={self._basis.tolist()})"
