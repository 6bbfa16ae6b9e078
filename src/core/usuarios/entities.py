"""
Entidades do Domínio de Usuários.

Entidades:
- UsuarioEntity: Conta do diretório de usuários (tabela `app_users`)
- UsuarioTier: Perfil (padrão, VIP, administrador)
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional
import uuid

from src.core.shared.datas import para_iso
from src.core.shared.exceptions import ValidationError


class UsuarioTier(Enum):
    """
    Perfil do usuário.

    VIP afeta apenas a ordem de exibição dos chamados e bloqueia
    edição de equipamentos; ADMIN pode tudo.
    """

    PADRAO = "padrao"
    VIP = "vip"
    ADMIN = "admin"

    @classmethod
    def from_string(cls, value: str) -> "UsuarioTier":
        """
        Raises:
            ValueError: Se valor inválido
        """
        texto = str(value or "").strip().lower()
        aliases = {"standard": "padrao", "padrão": "padrao"}
        texto = aliases.get(texto, texto)
        for tier in cls:
            if tier.value == texto:
                return tier
        raise ValueError(f"Perfil inválido: {value}")


@dataclass
class UsuarioEntity:
    """
    Entidade de Domínio: Usuário.

    Invariantes:
    - Nome e username obrigatórios
    - Nome e setor gravados em maiúsculas
    - Senha nunca é gravada em texto puro por este sistema

    Attributes:
        id: Identificador único (UUID)
        name: Nome completo (maiúsculas)
        username: Login (único)
        setor: Setor (maiúsculas)
        cargo: Cargo/função
        tier: Perfil de acesso
        password_hash: Hash da senha (ou texto legado)
        created_at: Criação do registro
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    username: str = ""
    setor: Optional[str] = None
    cargo: Optional[str] = None
    tier: UsuarioTier = UsuarioTier.PADRAO
    password_hash: str = ""
    created_at: Optional[str] = None

    CAMPOS_OBRIGATORIOS = ("name", "username")
    CAMPOS_EDITAVEIS = ("name", "username", "setor", "cargo", "tier", "password")

    @classmethod
    def normalizar_campos(cls, campos: Dict[str, Any]) -> Dict[str, Any]:
        """
        Valida e normaliza campos de criação ou patch.

        `password` é mantido em texto para ser convertido em hash pelo
        use case; nunca chega ao repositório.

        Raises:
            ValidationError: Campo desconhecido, obrigatório vazio ou tier inválido
        """
        normalizados: Dict[str, Any] = {}
        for campo, valor in campos.items():
            if campo not in cls.CAMPOS_EDITAVEIS:
                raise ValidationError(f"Campo desconhecido: {campo}", field=campo)

            if isinstance(valor, str) and campo != "password":
                valor = valor.strip()
            if campo in cls.CAMPOS_OBRIGATORIOS and not valor:
                raise ValidationError(f"Campo obrigatório: {campo}", field=campo)

            if campo in ("name", "setor") and valor:
                valor = valor.upper()
            elif campo == "tier":
                try:
                    valor = UsuarioTier.from_string(valor).value
                except ValueError as e:
                    raise ValidationError(str(e), field="tier")
            elif campo == "password" and not valor:
                raise ValidationError("Senha é obrigatória", field="password")

            normalizados[campo] = valor if valor != "" else None
        return normalizados

    @classmethod
    def from_record(cls, registro: Dict[str, Any]) -> "UsuarioEntity":
        nomes = {f.name for f in fields(cls)}
        valores = {k: para_iso(v) for k, v in registro.items() if k in nomes}
        try:
            valores["tier"] = UsuarioTier.from_string(registro.get("tier"))
        except ValueError:
            valores["tier"] = UsuarioTier.PADRAO
        valores["password_hash"] = valores.get("password_hash") or ""
        return cls(**valores)

    def to_record(self, omitir_vazios: bool = False) -> Dict[str, Any]:
        registro = {f.name: getattr(self, f.name) for f in fields(self)}
        registro["tier"] = self.tier.value
        if omitir_vazios:
            registro = {k: v for k, v in registro.items() if v is not None}
        return registro

    @property
    def is_admin(self) -> bool:
        return self.tier == UsuarioTier.ADMIN

    @property
    def is_vip(self) -> bool:
        return self.tier == UsuarioTier.VIP

    def __eq__(self, other) -> bool:
        if not isinstance(other, UsuarioEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
