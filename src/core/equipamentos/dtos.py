"""
Data Transfer Objects (DTOs) do Domínio de Equipamentos.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional

from .entities import EquipamentoEntity


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CriarEquipamentoInputDTO:
    """
    DTO de entrada para cadastrar equipamento.

    Attributes:
        nome: Nome de exibição
        tipo: Categoria (Desktop, Notebook, Tablet, ...)
        patrimonio: Etiqueta de patrimônio (pode ser a sugestão aceita)
        demais: Dados opcionais do cadastro
    """

    nome: str
    tipo: str
    patrimonio: str
    marca: Optional[str] = None
    modelo: Optional[str] = None
    status: Optional[str] = None
    usuario: Optional[str] = None
    setor: Optional[str] = None
    ram: Optional[str] = None
    armazenamento: Optional[str] = None
    processador: Optional[str] = None
    polegadas: Optional[str] = None
    ghz: Optional[str] = None

    def to_campos(self) -> Dict[str, Any]:
        """Campos preenchidos, prontos para o factory da entidade."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class AtualizarEquipamentoInputDTO:
    equipamento_id: str
    campos: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FiltroEquipamentosDTO:
    """
    Filtros da listagem de equipamentos.

    Attributes:
        status: Status exato
        tipo: Tipo exato
        setor: Setor (comparação em maiúsculas)
        prefixo: Grupo do código (JV, PC, TAB, CEL, IMP, MON ou "-")
        busca: Texto livre em nome, patrimônio e usuário
    """

    status: Optional[str] = None
    tipo: Optional[str] = None
    setor: Optional[str] = None
    prefixo: Optional[str] = None
    busca: Optional[str] = None


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class EquipamentoOutputDTO:
    """DTO de saída; `codigo` é o código derivado de exibição."""

    id: str
    nome: str
    tipo: str
    patrimonio: str
    codigo: Optional[str]
    marca: Optional[str]
    modelo: Optional[str]
    status: str
    usuario: Optional[str]
    setor: Optional[str]
    ram: Optional[str]
    armazenamento: Optional[str]
    processador: Optional[str]
    polegadas: Optional[str]
    ghz: Optional[str]
    created_at: Optional[str]

    @classmethod
    def from_entity(
        cls, equipamento: EquipamentoEntity, codigo: Optional[str] = None
    ) -> "EquipamentoOutputDTO":
        registro = equipamento.to_record()
        return cls(codigo=codigo, **registro)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EstatisticasEquipamentosDTO:
    """
    Contagens da análise de equipamentos.

    `ativos` é o total menos os inativos.
    """

    total: int = 0
    ativos: int = 0
    disponiveis: int = 0
    em_uso: int = 0
    manutencao: int = 0
    inativos: int = 0
    por_tipo: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
