"""
Data Transfer Objects (DTOs) do Domínio de Usuários.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from .entities import UsuarioEntity


@dataclass(frozen=True)
class CriarUsuarioInputDTO:
    """
    DTO de entrada para cadastrar usuário.

    Attributes:
        name: Nome completo
        username: Login
        password: Senha em texto (convertida em hash no use case)
        setor: Setor
        cargo: Cargo
        tier: padrao | vip | admin
    """

    name: str
    username: str
    password: str
    setor: Optional[str] = None
    cargo: Optional[str] = None
    tier: str = "padrao"


@dataclass(frozen=True)
class AtualizarUsuarioInputDTO:
    usuario_id: str
    campos: Dict[str, Any] = field(default_factory=dict)


@dataclass
class UsuarioOutputDTO:
    """DTO de saída; nunca expõe o hash da senha."""

    id: str
    name: str
    username: str
    setor: Optional[str]
    cargo: Optional[str]
    tier: str
    is_admin: bool
    created_at: Optional[str]

    @classmethod
    def from_entity(cls, usuario: UsuarioEntity) -> "UsuarioOutputDTO":
        return cls(
            id=usuario.id,
            name=usuario.name,
            username=usuario.username,
            setor=usuario.setor,
            cargo=usuario.cargo,
            tier=usuario.tier.value,
            is_admin=usuario.is_admin,
            created_at=usuario.created_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
