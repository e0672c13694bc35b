"""Testes do driver simplex de duas fases sobre os três layouts."""
import numpy as np
import pytest
from scipy.sparse import csr_matrix

from simplex_tableau.core.options import Options
from simplex_tableau.core.problem import LinearProblem, ObjectiveSense
from simplex_tableau.lp_solver.factory import make, new_dense, new_raw, new_sparse
from simplex_tableau.lp_solver.raw import RawTableau
from simplex_tableau.lp_solver.simplex import SolverStatus, TableauSimplexSolver
from simplex_tableau.lp_solver.sparse import SparseTableau

from helpers import LAYOUTS, build_slack_tableau

FACTORIES = [new_raw, new_dense, new_sparse]


@pytest.mark.parametrize("factory", FACTORIES)
def test_solves_problem_in_equality_form(factory, region_problem):
    result = TableauSimplexSolver(factory(region_problem)).solve()

    assert result.status == SolverStatus.OPTIMAL
    assert result.objective == pytest.approx(-9.0)
    np.testing.assert_allclose(result.solution, [3.0, 1.0, 0.0, 0.0], atol=1e-9)
    np.testing.assert_allclose(result.duals, [-1.5, -0.5], atol=1e-9)
    assert result.iterations == 3


@pytest.mark.parametrize("layout", LAYOUTS)
def test_solves_problem_with_identity_slacks(layout):
    tableau = build_slack_tableau(layout, [[1.0, 1.0], [1.0, 3.0]], [4.0, 6.0], [-2.0, -3.0])

    result = TableauSimplexSolver(tableau).solve()

    assert result.status == SolverStatus.OPTIMAL
    assert result.objective == pytest.approx(-9.0)
    np.testing.assert_allclose(result.solution, [3.0, 1.0], atol=1e-9)
    np.testing.assert_allclose(result.duals, [-1.5, -0.5], atol=1e-9)


def test_make_picks_layout_from_options(region_problem):
    assert isinstance(make(region_problem), RawTableau)
    assert isinstance(make(region_problem, Options(sparse=False)), RawTableau)
    assert isinstance(make(region_problem, Options.from_config({'sparse': True})), SparseTableau)


def test_maximize_is_solved_as_minimization():
    problem = LinearProblem(
        objective_coeffs=np.array([2.0, 3.0, 0.0, 0.0]),
        constraint_matrix=csr_matrix(np.array([[1.0, 1.0, 1.0, 0.0], [1.0, 3.0, 0.0, 1.0]])),
        rhs_vector=np.array([4.0, 6.0]),
        objective_sense=ObjectiveSense.MAXIMIZE,
    )

    result = TableauSimplexSolver(make(problem)).solve()

    assert result.status == SolverStatus.OPTIMAL
    assert -result.objective == pytest.approx(9.0)


@pytest.mark.parametrize("factory", FACTORIES)
def test_negative_rhs_is_flipped(factory):
    """-x - y == -2 vira x + y == 2; minimizar x leva a x=0, y=2."""
    problem = LinearProblem(
        objective_coeffs=np.array([1.0, 0.0]),
        constraint_matrix=csr_matrix(np.array([[-1.0, -1.0]])),
        rhs_vector=np.array([-2.0]),
    )
    tableau = factory(problem)
    np.testing.assert_array_equal(tableau.to_array()[0], [1.0, 1.0, 1.0, 2.0])

    result = TableauSimplexSolver(tableau).solve()

    assert result.status == SolverStatus.OPTIMAL
    assert result.objective == pytest.approx(0.0)
    np.testing.assert_allclose(result.solution, [0.0, 2.0], atol=1e-9)


@pytest.mark.parametrize("factory", FACTORIES)
def test_infeasible_problem(factory):
    """x + y == -1 com x, y >= 0."""
    problem = LinearProblem(
        objective_coeffs=np.array([1.0, 1.0]),
        constraint_matrix=csr_matrix(np.array([[1.0, 1.0]])),
        rhs_vector=np.array([-1.0]),
    )

    result = TableauSimplexSolver(factory(problem)).solve()

    assert result.status == SolverStatus.INFEASIBLE
    assert result.objective is None


@pytest.mark.parametrize("factory", FACTORIES)
def test_unbounded_problem(factory):
    """minimize -x sujeito a x - y == 1."""
    problem = LinearProblem(
        objective_coeffs=np.array([-1.0, 0.0]),
        constraint_matrix=csr_matrix(np.array([[1.0, -1.0]])),
        rhs_vector=np.array([1.0]),
    )

    result = TableauSimplexSolver(factory(problem)).solve()

    assert result.status == SolverStatus.UNBOUNDED


@pytest.mark.parametrize("factory", FACTORIES)
def test_redundant_row_keeps_artificial_at_zero(factory):
    """A segunda linha é o dobro da primeira."""
    problem = LinearProblem(
        objective_coeffs=np.array([1.0, 0.0]),
        constraint_matrix=csr_matrix(np.array([[1.0, 1.0], [2.0, 2.0]])),
        rhs_vector=np.array([2.0, 4.0]),
    )
    tableau = factory(problem)

    result = TableauSimplexSolver(tableau).solve()

    assert result.status == SolverStatus.OPTIMAL
    assert result.objective == pytest.approx(0.0)
    np.testing.assert_allclose(result.solution, [0.0, 2.0], atol=1e-9)
    assert tableau.count_basic_artificials() == 1
    tableau.verify_basis()


def test_iteration_limit(region_problem):
    result = TableauSimplexSolver(new_raw(region_problem), max_iterations=1).solve()

    assert result.status == SolverStatus.ITERATION_LIMIT
    assert result.iterations == 1


def test_zero_iterations_allowed(region_problem):
    result = TableauSimplexSolver(new_raw(region_problem), max_iterations=0).solve()

    assert result.status == SolverStatus.ITERATION_LIMIT
    assert result.iterations == 0
