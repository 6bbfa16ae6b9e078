"""
Entidades do Domínio de Setores.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional
import uuid

from src.core.shared.datas import para_iso
from src.core.shared.exceptions import ValidationError


@dataclass
class SetorEntity:
    """
    Entidade de Domínio: Setor (departamento).

    Invariantes:
    - Nome obrigatório, gravado em maiúsculas em toda escrita

    Attributes:
        id: Identificador único (UUID)
        nome: Nome canônico ("FINANCEIRO")
        responsavel: Gestor do setor
        ramal: Ramal telefônico
        localizacao: Andar/sala
        created_at: Criação do registro
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    nome: str = ""
    responsavel: Optional[str] = None
    ramal: Optional[str] = None
    localizacao: Optional[str] = None
    created_at: Optional[str] = None

    CAMPOS_EDITAVEIS = ("nome", "responsavel", "ramal", "localizacao")

    @classmethod
    def normalizar_campos(cls, campos: Dict[str, Any]) -> Dict[str, Any]:
        """
        Raises:
            ValidationError: Campo desconhecido ou nome vazio
        """
        normalizados: Dict[str, Any] = {}
        for campo, valor in campos.items():
            if campo not in cls.CAMPOS_EDITAVEIS:
                raise ValidationError(f"Campo desconhecido: {campo}", field=campo)
            if valor is not None and not isinstance(valor, str):
                valor = str(valor)
            if isinstance(valor, str):
                valor = valor.strip()
            if campo == "nome":
                if not valor:
                    raise ValidationError("Campo obrigatório: nome", field="nome")
                valor = valor.upper()
            normalizados[campo] = valor if valor != "" else None
        return normalizados

    @classmethod
    def from_record(cls, registro: Dict[str, Any]) -> "SetorEntity":
        nomes = {f.name for f in fields(cls)}
        valores = {k: para_iso(v) for k, v in registro.items() if k in nomes}
        valores["nome"] = valores.get("nome") or ""
        return cls(**valores)

    def to_record(self, omitir_vazios: bool = False) -> Dict[str, Any]:
        registro = {f.name: getattr(self, f.name) for f in fields(self)}
        if omitir_vazios:
            registro = {k: v for k, v in registro.items() if v is not None}
        return registro

    def __eq__(self, other) -> bool:
        if not isinstance(other, SetorEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
