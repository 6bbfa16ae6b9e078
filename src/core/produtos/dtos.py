"""
Data Transfer Objects (DTOs) do Domínio de Produtos.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Union

from .entities import ProdutoEntity, ProdutoSaidaEntity


@dataclass(frozen=True)
class CriarProdutoInputDTO:
    nome: str
    categoria: str
    descricao: Optional[str] = None
    estoque: Union[int, str] = 0


@dataclass(frozen=True)
class AtualizarProdutoInputDTO:
    produto_id: str
    campos: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FiltroProdutosDTO:
    """
    Attributes:
        categoria: Categoria exata
        busca: Texto livre em nome e descrição
    """

    categoria: Optional[str] = None
    busca: Optional[str] = None


@dataclass(frozen=True)
class RegistrarSaidaInputDTO:
    """
    DTO de entrada para saída de estoque.

    Attributes:
        produto_id: Produto que sai do estoque
        quantidade: Quantidade (arredondada para baixo, > 0)
        destinatario: Quem recebeu
        data: Data da saída (YYYY-MM-DD, padrão hoje)
    """

    produto_id: str
    quantidade: Union[int, float, str]
    destinatario: Optional[str] = None
    data: Optional[str] = None


@dataclass(frozen=True)
class AtualizarSaidaInputDTO:
    saida_id: str
    campos: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ProdutoOutputDTO:
    id: str
    nome: str
    categoria: str
    descricao: Optional[str]
    estoque: int
    created_at: Optional[str]

    @classmethod
    def from_entity(cls, produto: ProdutoEntity) -> "ProdutoOutputDTO":
        return cls(**produto.to_record())

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProdutoSaidaOutputDTO:
    """DTO de saída; `produto_nome` vem do cadastro de produtos quando disponível."""

    id: str
    produto_id: str
    quantidade: int
    destinatario: Optional[str]
    data: Optional[str]
    created_at: Optional[str]
    produto_nome: Optional[str] = None

    @classmethod
    def from_entity(
        cls, saida: ProdutoSaidaEntity, produto_nome: Optional[str] = None
    ) -> "ProdutoSaidaOutputDTO":
        return cls(produto_nome=produto_nome, **saida.to_record())

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
