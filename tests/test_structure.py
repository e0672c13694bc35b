"""Testes da estrutura do problema, do seletor de índices e da configuração."""
import logging
import sys

import numpy as np
import pytest
from scipy.sparse import csr_matrix

from simplex_tableau.core.options import PIVOT_THRESHOLD, Options
from simplex_tableau.core.problem import LinearProblem, ObjectiveSense
from simplex_tableau.core.selector import IndexSelector
from simplex_tableau.core.structure import LinearStructure
from simplex_tableau.utils.logger_config import setup_logger


def test_structure_derived_counts():
    structure = LinearStructure(constraints=3, model_variables=4, slack=1, identity=2, artificial=1)

    assert structure.count_constraints() == 3
    assert structure.count_model_variables() == 4
    assert structure.count_variables() == 7
    assert structure.count_variables_totally() == 8
    assert structure.is_able_to_extract_dual()


def test_structure_without_full_identity_cannot_extract_dual():
    structure = LinearStructure(constraints=3, model_variables=2, slack=1, identity=1, artificial=1)
    assert not structure.is_able_to_extract_dual()


@pytest.mark.parametrize("counts", [(-1, 2, 0, 0, 0), (2, 2, 0, 2, 1), (1, 1, -1, 0, 0)])
def test_structure_rejects_invalid_counts(counts):
    with pytest.raises(ValueError):
        LinearStructure(*counts)


def test_selector_starts_with_everything_excluded():
    selector = IndexSelector(4)

    assert selector.count_included() == 0
    assert selector.get_excluded() == [0, 1, 2, 3]
    assert selector.is_excluded(2)
    assert not selector.is_included(2)


def test_selector_enumeration_follows_history():
    selector = IndexSelector(5)
    selector.include(3)
    selector.include(0)
    selector.exclude(3)

    assert selector.get_included() == [0]
    assert selector.get_excluded() == [1, 2, 4, 3]
    assert selector.count_included() == 1
    assert selector.count_excluded() == 4


def test_selector_copy_is_independent():
    selector = IndexSelector(3)
    selector.include(1)
    clone = selector.copy()
    clone.include(2)

    assert selector.get_included() == [1]
    assert clone.get_included() == [1, 2]


def test_options_from_config_uses_defaults():
    options = Options.from_config({'sparse': True, 'tolerance': 1e-7})

    assert options.is_sparse()
    assert options.tolerance == 1e-7
    assert options.pivot_threshold == PIVOT_THRESHOLD
    assert not Options.from_config(None).is_sparse()


def test_problem_validates_dimensions():
    with pytest.raises(ValueError):
        LinearProblem(np.array([1.0, 2.0]), csr_matrix(np.ones((2, 3))), np.array([1.0, 2.0]))


def test_problem_flags_and_linear_factors():
    problem = LinearProblem(
        objective_coeffs=np.array([1.0, 2.0, 0.0]),
        constraint_matrix=csr_matrix(np.array([[1.0, 1.0, 1.0]])),
        rhs_vector=np.array([3.0]),
        objective_sense=ObjectiveSense.MAXIMIZE,
        integer_variables={0, 2},
    )

    np.testing.assert_array_equal(problem.integer_flags(), [True, False, True])
    np.testing.assert_array_equal(problem.linear_factors(), [-1.0, -2.0, 0.0])
    assert problem.variable_names == ["x0", "x1", "x2"]
    assert "Maximize: x0 + 2.0 x1" in str(problem)


def test_setup_logger_configures_root_logger():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    try:
        setup_logger(level=logging.DEBUG)

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stdout
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
