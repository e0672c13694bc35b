"""
Define as estruturas de dados de entrada (forma de igualdade) e de saída (cortes).
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set

import numpy as np
from scipy.sparse import csr_matrix


class ObjectiveSense(Enum):
    """Define o sentido da otimização (maximizar ou minimizar)."""
    MAXIMIZE = "maximize"
    MINIMIZE = "minimize"


class ConstraintSense(Enum):
    """Define o sentido de uma restrição (<=, >=, ==)."""
    LTE = "<="
    GTE = ">="
    EQ = "=="


@dataclass
class LinearProblem:
    """
    Representa um problema linear já na forma de igualdade:

    minimize/maximize c^T * x
    sujeito a:
        A * x == b
        x >= 0

    Atributos:
        objective_coeffs (np.ndarray): Vetor de custos 'c'.
        constraint_matrix (csr_matrix): Matriz de restrições 'A' em formato esparso.
        rhs_vector (np.ndarray): Vetor 'b' do lado direito das restrições.
        objective_sense (ObjectiveSense): Sentido da função objetivo.
        name (str): Nome do problema.
        variable_names (List[str]): Nomes das variáveis.
        integer_variables (Set[int]): Os *índices* das variáveis que são inteiras.
    """
    objective_coeffs: np.ndarray
    constraint_matrix: csr_matrix
    rhs_vector: np.ndarray
    objective_sense: ObjectiveSense = ObjectiveSense.MINIMIZE
    name: str = "LP"

    # Usamos 'field' para permitir valores padrão mais complexos
    variable_names: List[str] = field(default_factory=list)
    integer_variables: Set[int] = field(default_factory=set)

    def __post_init__(self):
        """Validações pós-inicialização para garantir a consistência dos dados."""
        self.objective_coeffs = np.asarray(self.objective_coeffs, dtype=float)
        self.rhs_vector = np.asarray(self.rhs_vector, dtype=float)
        self.constraint_matrix = csr_matrix(self.constraint_matrix, dtype=float)

        num_vars = len(self.objective_coeffs)
        num_constraints = len(self.rhs_vector)

        if self.constraint_matrix.shape != (num_constraints, num_vars):
            raise ValueError("Dimensões da matriz de restrição A são inconsistentes.")

        if any(i < 0 or i >= num_vars for i in self.integer_variables):
            raise ValueError("Índice de variável inteira fora do intervalo.")

        if not self.variable_names:
            self.variable_names = [f"x{i}" for i in range(num_vars)]
        elif len(self.variable_names) != num_vars:
            raise ValueError("Número de nomes de variáveis é inconsistente.")

    def count_constraints(self) -> int:
        return len(self.rhs_vector)

    def count_variables(self) -> int:
        return len(self.objective_coeffs)

    def integer_flags(self) -> np.ndarray:
        """Vetor booleano indexado pela posição da variável do modelo."""
        flags = np.zeros(self.count_variables(), dtype=bool)
        flags[list(self.integer_variables)] = True
        return flags

    def linear_factors(self) -> np.ndarray:
        """Custos na forma de minimização, como o tableau espera."""
        if self.objective_sense == ObjectiveSense.MAXIMIZE:
            return -self.objective_coeffs
        return self.objective_coeffs

    def __str__(self):
        """Gera uma representação matemática legível do problema."""
        parts = []

        obj_sense_str = "Maximize" if self.objective_sense == ObjectiveSense.MAXIMIZE else "Minimize"
        parts.append(f"{obj_sense_str}: {self._format_terms(self.objective_coeffs)}")
        parts.append("\nSubject To:")

        A_dense = self.constraint_matrix.toarray()
        for i in range(A_dense.shape[0]):
            parts.append(f"  {self._format_terms(A_dense[i, :])} == {self.rhs_vector[i]}")

        if self.integer_variables:
            parts.append("\nIntegers:")
            parts.append(f"  {' '.join(self.variable_names[i] for i in sorted(self.integer_variables))}")

        return "\n".join(parts)

    def _format_terms(self, coeffs) -> str:
        terms = []
        for i, coeff in enumerate(coeffs):
            if coeff != 0:
                is_first_term = not terms
                sign = ""
                if coeff > 0 and not is_first_term:
                    sign = "+ "
                elif coeff < 0:
                    sign = "- "

                abs_coeff = abs(coeff)
                term_str = f"{abs_coeff} {self.variable_names[i]}"
                if abs_coeff == 1:
                    term_str = self.variable_names[i]

                terms.append(f"{sign}{term_str}")
        return " ".join(terms) if terms else "0"


@dataclass
class Equation:
    """
    Um plano de corte: coefficients^T * x (sense) rhs.

    Os coeficientes cobrem todas as colunas reais do tableau (modelo + folgas).
    'index' é a variável básica da linha de onde o corte foi derivado.
    """
    coefficients: np.ndarray
    sense: ConstraintSense
    rhs: float
    index: Optional[int] = None

    def violation(self, x: np.ndarray) -> float:
        """Quanto o ponto 'x' viola o corte (0.0 se satisfeito)."""
        lhs = float(np.dot(self.coefficients[:len(x)], x))
        if self.sense == ConstraintSense.GTE:
            return max(0.0, self.rhs - lhs)
        if self.sense == ConstraintSense.LTE:
            return max(0.0, lhs - self.rhs)
        return abs(lhs - self.rhs)

    def __str__(self):
        lhs_str = " + ".join(f"{coeff:.3f}*x{j}" for j, coeff in enumerate(self.coefficients) if coeff != 0)
        return f"{lhs_str} {self.sense.value} {self.rhs:.3f}"
