"""
Descreve a forma de um problema linear já na forma de tableau.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class LinearStructure:
    """
    Contagens que definem as dimensões do tableau simplex.

    Atributos:
        constraints (int): Número de restrições (m).
        model_variables (int): Número de variáveis do modelo.
        slack (int): Variáveis de folga comuns.
        identity (int): Variáveis de folga que já formam um bloco identidade
            (dispensam variáveis artificiais). As restrições correspondentes
            devem ser as primeiras linhas do tableau.
        artificial (int): Número de variáveis artificiais.
    """
    constraints: int
    model_variables: int
    slack: int = 0
    identity: int = 0
    artificial: int = 0

    def __post_init__(self):
        """Validações pós-inicialização para garantir a consistência das contagens."""
        counts = (self.constraints, self.model_variables, self.slack, self.identity, self.artificial)
        if any(count < 0 for count in counts):
            raise ValueError(f"Contagens da estrutura não podem ser negativas: {counts}")
        if self.identity + self.artificial > self.constraints:
            raise ValueError("Folgas identidade + artificiais excedem o número de restrições.")

    def count_constraints(self) -> int:
        return self.constraints

    def count_model_variables(self) -> int:
        return self.model_variables

    def count_variables(self) -> int:
        """Variáveis 'reais' (modelo + folgas), sem as artificiais."""
        return self.model_variables + self.slack + self.identity

    def count_variables_totally(self) -> int:
        """Todas as variáveis, incluindo as artificiais (n)."""
        return self.count_variables() + self.artificial

    def is_able_to_extract_dual(self) -> bool:
        return self.identity + self.artificial == self.constraints
