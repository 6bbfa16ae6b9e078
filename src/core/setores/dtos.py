"""
Data Transfer Objects (DTOs) do Domínio de Setores.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from .entities import SetorEntity


@dataclass(frozen=True)
class CriarSetorInputDTO:
    nome: str
    responsavel: Optional[str] = None
    ramal: Optional[str] = None
    localizacao: Optional[str] = None


@dataclass(frozen=True)
class AtualizarSetorInputDTO:
    setor_id: str
    campos: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SetorOutputDTO:
    id: str
    nome: str
    responsavel: Optional[str]
    ramal: Optional[str]
    localizacao: Optional[str]
    created_at: Optional[str]

    @classmethod
    def from_entity(cls, setor: SetorEntity) -> "SetorOutputDTO":
        return cls(**setor.to_record())

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
