"""
Funções que constroem e populam tableaus a partir de um LinearProblem.
"""
import logging
from typing import Optional

from simplex_tableau.core.options import Options
from simplex_tableau.core.problem import LinearProblem
from simplex_tableau.core.structure import LinearStructure
from simplex_tableau.lp_solver.raw import RawTableau
from simplex_tableau.lp_solver.sparse import SparseTableau
from simplex_tableau.lp_solver.tableau import SimplexTableau
from simplex_tableau.lp_solver.transposed import TransposedTableau


def is_sparse(options: Optional[Options]) -> bool:
    return options is not None and options.is_sparse()


def structure_of(problem: LinearProblem) -> LinearStructure:
    """
    Estrutura para um problema em forma de igualdade: sem folgas e com uma
    variável artificial por restrição (o que também permite extrair o dual).
    """
    nb_constraints = problem.count_constraints()
    return LinearStructure(nb_constraints, problem.count_variables(), 0, 0, nb_constraints)


def copy(problem: LinearProblem, tableau: SimplexTableau):
    """
    Escreve corpo, RHS e objetivo do problema no tableau através das visões.

    Linhas com RHS negativo são negadas para que a base artificial inicial
    seja viável.
    """
    matrix = problem.constraint_matrix.tocsr()
    matrix.sum_duplicates()
    matrix.eliminate_zeros()

    signs = [-1.0 if b < 0 else 1.0 for b in problem.rhs_vector]

    body = tableau.constraints_body()
    coo = matrix.tocoo()
    for row, col, value in zip(coo.row, coo.col, coo.data):
        body.set(int(row), int(col), signs[row] * float(value))

    rhs = tableau.constraints_rhs()
    for i, value in enumerate(problem.rhs_vector):
        rhs.set(i, signs[i] * float(value))

    obj = tableau.objective()
    for i, value in enumerate(problem.linear_factors()):
        obj.set(i, float(value))


def make_for_structure(structure: LinearStructure, options: Optional[Options] = None) -> SimplexTableau:
    if is_sparse(options):
        return SparseTableau(structure, options)
    else:
        return RawTableau(structure, options)


def make(problem: LinearProblem, options: Optional[Options] = None) -> SimplexTableau:
    tableau = make_for_structure(structure_of(problem), options)
    copy(problem, tableau)
    logging.debug(f"Tableau {type(tableau).__name__} criado para '{problem.name}': m={tableau.m}, n={tableau.n}.")
    return tableau


def new_dense(problem: LinearProblem, options: Optional[Options] = None) -> TransposedTableau:
    tableau = TransposedTableau(structure_of(problem), options)
    copy(problem, tableau)
    return tableau


def new_raw(problem: LinearProblem, options: Optional[Options] = None) -> RawTableau:
    tableau = RawTableau(structure_of(problem), options)
    copy(problem, tableau)
    return tableau


def new_sparse(problem: LinearProblem, options: Optional[Options] = None) -> SparseTableau:
    tableau = SparseTableau(structure_of(problem), options)
    copy(problem, tableau)
    return tableau
