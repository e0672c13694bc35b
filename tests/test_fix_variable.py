"""Testes de fix_variable: fixar uma variável básica sem re-resolver."""
import numpy as np
import pytest

from simplex_tableau.lp_solver.factory import new_dense, new_raw, new_sparse
from simplex_tableau.lp_solver.tableau import IterationPoint

from helpers import LAYOUTS, REGION_PIVOTS, build_slack_tableau

FACTORIES = [new_raw, new_dense, new_sparse]


def solved(factory, problem):
    tableau = factory(problem)
    for row, col in REGION_PIVOTS:
        tableau.pivot(IterationPoint(row, col))
    return tableau


def snapshot(tableau):
    return tableau.to_array(), tableau.get_basis(), tableau.get_included(), tableau.get_excluded()


def assert_unchanged(tableau, before):
    data, basis, included, excluded = before
    np.testing.assert_array_equal(tableau.to_array(), data)
    np.testing.assert_array_equal(tableau.get_basis(), basis)
    assert tableau.get_included() == included
    assert tableau.get_excluded() == excluded


@pytest.mark.parametrize("factory", FACTORIES)
def test_fix_to_current_value_is_noop(factory, region_problem):
    tableau = solved(factory, region_problem)
    before = snapshot(tableau)
    # O valor exato guardado no tableau (pode diferir de 3.0 no último bit)
    current = tableau.get(tableau.get_basis_row_index(0), tableau.n)

    assert tableau.fix_variable(0, current)
    assert_unchanged(tableau, before)


@pytest.mark.parametrize("factory", FACTORIES)
def test_fix_to_nearly_current_value_stays_consistent(factory, region_problem):
    """A comparação é exata: um valor a um ulp do RHS faz um pivô degenerado."""
    tableau = solved(factory, region_problem)

    assert tableau.fix_variable(0, 3.0)

    tableau.verify_basis()
    assert np.all(np.asarray(tableau.slice_constraints_rhs()) >= 0.0)
    assert tableau.get_value() == pytest.approx(9.0)


@pytest.mark.parametrize("factory", FACTORIES)
def test_fix_non_basic_variable_fails(factory, region_problem):
    tableau = solved(factory, region_problem)
    before = snapshot(tableau)

    assert not tableau.fix_variable(2, 1.0)
    assert_unchanged(tableau, before)


@pytest.mark.parametrize("factory", FACTORIES)
def test_fix_variable_down(factory, region_problem):
    tableau = solved(factory, region_problem)

    assert tableau.fix_variable(0, 2.0)

    tableau.verify_basis()
    np.testing.assert_array_equal(tableau.get_basis(), [2, 1])
    assert tableau.is_excluded(0)
    assert tableau.is_included(2)

    expected = np.array([
        [0.0, 0.0, 1.0, -1.0 / 3.0, 1.0, -1.0 / 3.0, 2.0 / 3.0],
        [0.0, 1.0, 0.0, 1.0 / 3.0, 0.0, 1.0 / 3.0, 4.0 / 3.0],
        [0.0, 0.0, 0.0, 1.0, 0.0, 1.0, 8.0],
    ])
    np.testing.assert_allclose(tableau.to_array()[:3], expected, atol=1e-9)
    # Objetivo -2*2 - 3*(4/3) = -8
    assert tableau.get_value() == pytest.approx(8.0)


@pytest.mark.parametrize("factory", FACTORIES)
def test_fix_variable_leaving_negative_rhs_changes_nothing(factory, region_problem):
    tableau = solved(factory, region_problem)
    before = snapshot(tableau)

    # x = 5 obrigaria y = -1
    assert not tableau.fix_variable(0, 5.0)
    assert_unchanged(tableau, before)


@pytest.mark.parametrize("layout", LAYOUTS)
def test_fix_variable_without_pivot_column(layout):
    """x + s == 4: x não pode subir para 5, o teste da razão não acha coluna."""
    tableau = build_slack_tableau(layout, [[1.0]], [4.0], [-1.0])
    tableau.pivot(IterationPoint(0, 0))
    before = snapshot(tableau)

    assert not tableau.fix_variable(0, 5.0)
    assert_unchanged(tableau, before)

    assert tableau.fix_variable(0, 1.0)
    np.testing.assert_array_equal(tableau.get_basis(), [1])
    assert tableau.get(0, tableau.n) == pytest.approx(3.0)
