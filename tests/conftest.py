import numpy as np
import pytest
from scipy.sparse import csr_matrix

from simplex_tableau.core.problem import LinearProblem


@pytest.fixture
def region_problem():
    """
    minimize    -2x - 3y
    subject to  x + y + s1      == 4
                x + 3y     + s2 == 6
                x, y, s1, s2 >= 0

    Ótimo único: x=3, y=1, objetivo -9, duais [-1.5, -0.5].
    """
    return LinearProblem(
        objective_coeffs=np.array([-2.0, -3.0, 0.0, 0.0]),
        constraint_matrix=csr_matrix(np.array([[1.0, 1.0, 1.0, 0.0], [1.0, 3.0, 0.0, 1.0]])),
        rhs_vector=np.array([4.0, 6.0]),
        name="region",
    )
