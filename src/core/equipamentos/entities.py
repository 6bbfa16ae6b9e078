"""
Entidades do Domínio de Equipamentos.

Entidades:
- EquipamentoEntity: Ativo de TI inventariado (tabela `equipamentos`)
- EquipamentoStatus: Situação do ativo
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional
import uuid

from src.core.shared.datas import agora, para_iso
from src.core.shared.exceptions import ValidationError


TIPOS_EQUIPAMENTO = (
    "Desktop",
    "Notebook",
    "Tablet",
    "Smartphone",
    "Impressora",
    "Monitor",
    "Periférico",
    "Outro",
)


class EquipamentoStatus(Enum):
    """Situação do equipamento no inventário."""

    DISPONIVEL = "Disponível"
    EM_USO = "Em Uso"
    MANUTENCAO = "Manutenção"
    INATIVO = "Inativo"

    @classmethod
    def from_string(cls, value: str) -> "EquipamentoStatus":
        """
        Converte string para enum.

        Aceita nome (EM_USO), valor ("Em Uso") ou aliases
        available/in_use/maintenance/inactive.

        Raises:
            ValueError: Se valor inválido
        """
        texto = str(value or "").strip()
        try:
            return cls[texto.upper().replace(" ", "_")]
        except KeyError:
            pass

        for status in cls:
            if status.value.lower() == texto.lower():
                return status

        aliases = {
            "available": cls.DISPONIVEL,
            "in_use": cls.EM_USO,
            "maintenance": cls.MANUTENCAO,
            "inactive": cls.INATIVO,
        }
        if texto.lower() in aliases:
            return aliases[texto.lower()]

        raise ValueError(f"Status inválido: {value}")


@dataclass
class EquipamentoEntity:
    """
    Entidade de Domínio: Equipamento.

    Invariantes:
    - Nome, tipo e patrimônio são obrigatórios
    - Patrimônio é único em todo o inventário
    - Setor é gravado em maiúsculas

    Attributes:
        id: Identificador único (UUID)
        nome: Nome de exibição ("Notebook Financeiro", "Jovem Aprendiz 03")
        tipo: Categoria do dispositivo (TIPOS_EQUIPAMENTO)
        patrimonio: Etiqueta de patrimônio (texto livre, ex: "PC003")
        marca, modelo: Fabricante e modelo
        status: Situação do ativo
        usuario: Usuário responsável
        setor: Setor onde está alocado
        ram, armazenamento, processador: Specs de computadores
        polegadas: Tamanho de tela (monitores/tablets)
        ghz: Clock do processador
        created_at: Criação do registro
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    nome: str = ""
    tipo: str = ""
    patrimonio: str = ""
    marca: Optional[str] = None
    modelo: Optional[str] = None
    status: EquipamentoStatus = EquipamentoStatus.DISPONIVEL
    usuario: Optional[str] = None
    setor: Optional[str] = None
    ram: Optional[str] = None
    armazenamento: Optional[str] = None
    processador: Optional[str] = None
    polegadas: Optional[str] = None
    ghz: Optional[str] = None
    created_at: Optional[str] = None

    CAMPOS_OBRIGATORIOS = ("nome", "tipo", "patrimonio")
    CAMPOS_EDITAVEIS = (
        "nome",
        "tipo",
        "patrimonio",
        "marca",
        "modelo",
        "status",
        "usuario",
        "setor",
        "ram",
        "armazenamento",
        "processador",
        "polegadas",
        "ghz",
    )

    @classmethod
    def normalizar_campos(cls, campos: Dict[str, Any]) -> Dict[str, Any]:
        """
        Valida e normaliza campos de criação ou patch parcial.

        Raises:
            ValidationError: Campo desconhecido, obrigatório vazio,
                tipo ou status inválidos
        """
        normalizados: Dict[str, Any] = {}
        for campo, valor in campos.items():
            if campo not in cls.CAMPOS_EDITAVEIS:
                raise ValidationError(f"Campo desconhecido: {campo}", field=campo)

            if isinstance(valor, str):
                valor = valor.strip()
            if campo in cls.CAMPOS_OBRIGATORIOS and not valor:
                raise ValidationError(f"Campo obrigatório: {campo}", field=campo)

            if campo == "tipo" and valor not in TIPOS_EQUIPAMENTO:
                raise ValidationError(f"Tipo inválido: {valor}", field="tipo")
            if campo == "status":
                try:
                    valor = EquipamentoStatus.from_string(valor).value
                except ValueError as e:
                    raise ValidationError(str(e), field="status")
            if campo == "setor" and valor:
                valor = valor.upper()

            normalizados[campo] = valor if valor != "" else None
        return normalizados

    @classmethod
    def criar(cls, campos: Dict[str, Any]) -> "EquipamentoEntity":
        """
        Factory method com validações de cadastro.

        Raises:
            ValidationError: Se campo obrigatório ausente ou inválido
        """
        for campo in cls.CAMPOS_OBRIGATORIOS:
            if not str(campos.get(campo) or "").strip():
                raise ValidationError(f"Campo obrigatório: {campo}", field=campo)

        valores = cls.normalizar_campos(campos)
        valores["status"] = EquipamentoStatus.from_string(
            valores.get("status") or EquipamentoStatus.DISPONIVEL.value
        )
        return cls(created_at=agora().isoformat(), **valores)

    @classmethod
    def from_record(cls, registro: Dict[str, Any]) -> "EquipamentoEntity":
        """Constrói entidade a partir de registro do backend."""
        nomes = {f.name for f in fields(cls)}
        valores = {k: para_iso(v) for k, v in registro.items() if k in nomes}
        for campo in ("polegadas", "ghz", "ram", "armazenamento"):
            if valores.get(campo) is not None:
                valores[campo] = str(valores[campo])
        try:
            valores["status"] = EquipamentoStatus.from_string(registro.get("status"))
        except ValueError:
            valores["status"] = EquipamentoStatus.DISPONIVEL
        valores["patrimonio"] = valores.get("patrimonio") or ""
        return cls(**valores)

    def to_record(self, omitir_vazios: bool = False) -> Dict[str, Any]:
        registro = {f.name: getattr(self, f.name) for f in fields(self)}
        registro["status"] = self.status.value
        if omitir_vazios:
            registro = {k: v for k, v in registro.items() if v is not None}
        return registro

    @property
    def esta_inativo(self) -> bool:
        return self.status == EquipamentoStatus.INATIVO

    def __eq__(self, other) -> bool:
        if not isinstance(other, EquipamentoEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
