"""
Parâmetros numéricos e de construção do tableau.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

# Limite para uma entrada da linha auxiliar ser elegível no teste da razão
PIVOT_THRESHOLD = 1e-8
# Tolerância para verificar o invariante do tableau e comparar layouts
CHECK_EPSILON = 1e-9
# Tolerância de custos reduzidos e razões do driver simplex
TOLERANCE = 1e-9
# Tolerância de integralidade padrão para os candidatos a corte
INTEGER_TOLERANCE = 1e-6


@dataclass
class Options:
    """
    Configuração do tableau.

    Atributos:
        sparse (Optional[bool]): True escolhe o layout esparso; None/False o denso.
        pivot_threshold (float): Entradas devem ser < -pivot_threshold para pivotar.
        check_epsilon (float): Tolerância das verificações de invariante.
        tolerance (float): Tolerância usada pelo driver simplex.
        integer_tolerance (float): Tolerância de integralidade para cortes.
    """
    sparse: Optional[bool] = None
    pivot_threshold: float = PIVOT_THRESHOLD
    check_epsilon: float = CHECK_EPSILON
    tolerance: float = TOLERANCE
    integer_tolerance: float = INTEGER_TOLERANCE

    @classmethod
    def from_config(cls, config: Dict[str, Any] = None) -> "Options":
        """Constrói as opções a partir de um dicionário de configuração."""
        config = config if config else {}
        return cls(
            sparse=config.get('sparse'),
            pivot_threshold=config.get('pivot_threshold', PIVOT_THRESHOLD),
            check_epsilon=config.get('check_epsilon', CHECK_EPSILON),
            tolerance=config.get('tolerance', TOLERANCE),
            integer_tolerance=config.get('integer_tolerance', INTEGER_TOLERANCE),
        )

    def is_sparse(self) -> bool:
        return self.sparse is not None and bool(self.sparse)
