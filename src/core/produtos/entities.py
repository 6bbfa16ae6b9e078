"""
Entidades do Domínio de Produtos.

Entidades:
- ProdutoEntity: Item de estoque (tabela `produtos`)
- ProdutoSaidaEntity: Saída de estoque para um destinatário (tabela `produto_saidas`)
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional
import math
import uuid

from src.core.shared.datas import para_iso, parse_data
from src.core.shared.exceptions import ValidationError

MENSAGEM_QUANTIDADE_INVALIDA = "Informe uma quantidade válida."


def _inteiro(valor: Any, campo: str) -> int:
    try:
        return int(valor)
    except (TypeError, ValueError):
        raise ValidationError(f"Valor inteiro inválido: {valor}", field=campo)


def normalizar_quantidade(valor: Any) -> int:
    """
    Quantidade de saída: max(0, floor(q)), obrigatoriamente > 0.

    Raises:
        ValidationError: Se a quantidade não for um número positivo
    """
    try:
        numero = float(valor)
    except (TypeError, ValueError):
        raise ValidationError(MENSAGEM_QUANTIDADE_INVALIDA, field="quantidade")
    if math.isnan(numero) or math.isinf(numero):
        raise ValidationError(MENSAGEM_QUANTIDADE_INVALIDA, field="quantidade")

    quantidade = max(0, math.floor(numero))
    if quantidade <= 0:
        raise ValidationError(MENSAGEM_QUANTIDADE_INVALIDA, field="quantidade")
    return quantidade


@dataclass
class ProdutoEntity:
    """
    Entidade de Domínio: Produto.

    Invariantes:
    - Nome e categoria obrigatórios
    - Estoque inteiro >= 0

    Attributes:
        id: Identificador único (UUID)
        nome: Nome do produto
        categoria: Categoria (Periféricos, Cabos, ...)
        descricao: Descrição livre
        estoque: Quantidade disponível
        created_at: Criação do registro
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    nome: str = ""
    categoria: str = ""
    descricao: Optional[str] = None
    estoque: int = 0
    created_at: Optional[str] = None

    CAMPOS_OBRIGATORIOS = ("nome", "categoria")
    CAMPOS_EDITAVEIS = ("nome", "categoria", "descricao", "estoque")

    @classmethod
    def normalizar_campos(cls, campos: Dict[str, Any]) -> Dict[str, Any]:
        """
        Raises:
            ValidationError: Campo desconhecido, obrigatório vazio ou estoque inválido
        """
        normalizados: Dict[str, Any] = {}
        for campo, valor in campos.items():
            if campo not in cls.CAMPOS_EDITAVEIS:
                raise ValidationError(f"Campo desconhecido: {campo}", field=campo)
            if isinstance(valor, str):
                valor = valor.strip()
            if campo in cls.CAMPOS_OBRIGATORIOS and not valor:
                raise ValidationError(f"Campo obrigatório: {campo}", field=campo)
            if campo == "estoque":
                valor = _inteiro(valor if valor not in (None, "") else 0, "estoque")
                if valor < 0:
                    raise ValidationError("Estoque não pode ser negativo", field="estoque")
            normalizados[campo] = valor if valor != "" else None
        return normalizados

    @classmethod
    def from_record(cls, registro: Dict[str, Any]) -> "ProdutoEntity":
        nomes = {f.name for f in fields(cls)}
        valores = {k: para_iso(v) for k, v in registro.items() if k in nomes}
        try:
            valores["estoque"] = int(registro.get("estoque") or 0)
        except (TypeError, ValueError):
            valores["estoque"] = 0
        return cls(**valores)

    def to_record(self, omitir_vazios: bool = False) -> Dict[str, Any]:
        registro = {f.name: getattr(self, f.name) for f in fields(self)}
        if omitir_vazios:
            registro = {k: v for k, v in registro.items() if v is not None}
        return registro

    def __eq__(self, other) -> bool:
        if not isinstance(other, ProdutoEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass
class ProdutoSaidaEntity:
    """
    Entidade de Domínio: Saída de produto.

    A criação decrementa o estoque do produto; o piso em zero é
    garantido pelo backend.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    produto_id: str = ""
    quantidade: int = 0
    destinatario: Optional[str] = None
    data: Optional[str] = None
    created_at: Optional[str] = None

    CAMPOS_EDITAVEIS = ("quantidade", "destinatario", "data")

    @classmethod
    def normalizar_campos(cls, campos: Dict[str, Any]) -> Dict[str, Any]:
        """
        O produto de uma saída não muda depois do registro.

        Raises:
            ValidationError: Campo desconhecido, quantidade ou data inválidas
        """
        normalizados: Dict[str, Any] = {}
        for campo, valor in campos.items():
            if campo not in cls.CAMPOS_EDITAVEIS:
                raise ValidationError(f"Campo desconhecido: {campo}", field=campo)
            if isinstance(valor, str):
                valor = valor.strip()
            if campo == "quantidade":
                valor = normalizar_quantidade(valor)
            elif campo == "data" and valor:
                data = parse_data(valor)
                if data is None:
                    raise ValidationError(f"Data inválida: {valor}", field="data")
                valor = data.isoformat()
            normalizados[campo] = valor if valor != "" else None
        return normalizados

    @classmethod
    def from_record(cls, registro: Dict[str, Any]) -> "ProdutoSaidaEntity":
        nomes = {f.name for f in fields(cls)}
        valores = {k: para_iso(v) for k, v in registro.items() if k in nomes}
        try:
            valores["quantidade"] = int(registro.get("quantidade") or 0)
        except (TypeError, ValueError):
            valores["quantidade"] = 0
        return cls(**valores)

    def to_record(self, omitir_vazios: bool = False) -> Dict[str, Any]:
        registro = {f.name: getattr(self, f.name) for f in fields(self)}
        if omitir_vazios:
            registro = {k: v for k, v in registro.items() if v is not None}
        return registro

    @property
    def data_ordenacao(self) -> str:
        """Chave de ordenação: `data`, senão `created_at`."""
        return str(self.data or self.created_at or "")

    def __eq__(self, other) -> bool:
        if not isinstance(other, ProdutoSaidaEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
