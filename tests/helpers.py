import numpy as np

from simplex_tableau.core.structure import LinearStructure
from simplex_tableau.lp_solver.raw import RawTableau
from simplex_tableau.lp_solver.sparse import SparseTableau
from simplex_tableau.lp_solver.transposed import TransposedTableau

LAYOUTS = [RawTableau, TransposedTableau, SparseTableau]

# Pivôs da fase 1 e da fase 2 para o problema 'region_problem' (conftest)
REGION_PIVOTS = [(1, 1), (0, 2), (0, 0)]


def build_slack_tableau(layout, A, b, c):
    """
    Constrói A x <= b (b >= 0) com uma folga identidade por linha, de modo que
    a base inicial já é formada pelas folgas e não há artificiais.
    """
    A = np.asarray(A, dtype=float)
    m, k = A.shape
    tableau = layout(LinearStructure(m, k, 0, m, 0))

    body = tableau.constraints_body()
    for i in range(m):
        for j in range(k):
            if A[i, j] != 0.0:
                body.set(i, j, A[i, j])
        body.set(i, k + i, 1.0)

    rhs = tableau.constraints_rhs()
    for i, value in enumerate(b):
        rhs.set(i, value)

    obj = tableau.objective()
    for j, value in enumerate(c):
        obj.set(j, value)

    return tableau
