"""
Ports (Interfaces) do Domínio de Produtos.

- ProdutoRepository: cadastro de produtos (tabela `produtos`)
- ProdutoSaidaRepository: saídas de estoque (tabela `produto_saidas`)
"""

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from src.core.shared.in_memory import InMemoryRepository

from .entities import ProdutoEntity, ProdutoSaidaEntity


@runtime_checkable
class ProdutoRepository(Protocol):
    def list_all(self) -> List[ProdutoEntity]:
        ...

    def get_by_id(self, produto_id: str) -> Optional[ProdutoEntity]:
        ...

    def create(self, campos: Dict[str, Any]) -> ProdutoEntity:
        ...

    def update(self, produto_id: str, campos: Dict[str, Any]) -> ProdutoEntity:
        ...

    def delete(self, produto_id: str) -> None:
        ...


@runtime_checkable
class ProdutoSaidaRepository(Protocol):
    """
    Interface para persistência de saídas.

    `create` também decrementa o estoque do produto, com piso em zero,
    na mesma operação do backend. `list_all` ordena por `data`
    (mais recentes primeiro).
    """

    def list_all(self) -> List[ProdutoSaidaEntity]:
        ...

    def get_by_id(self, saida_id: str) -> Optional[ProdutoSaidaEntity]:
        ...

    def create(self, campos: Dict[str, Any]) -> ProdutoSaidaEntity:
        ...

    def update(self, saida_id: str, campos: Dict[str, Any]) -> ProdutoSaidaEntity:
        ...

    def delete(self, saida_id: str) -> None:
        ...


class InMemoryProdutoRepository(InMemoryRepository[ProdutoEntity]):
    entity_class = ProdutoEntity
    entity_type = "Produto"


class InMemoryProdutoSaidaRepository(InMemoryRepository[ProdutoSaidaEntity]):
    """
    Saídas em memória.

    Recebe o repositório de produtos para reproduzir o decremento de
    estoque feito pelo backend real.
    """

    entity_class = ProdutoSaidaEntity
    entity_type = "Saída"
    order_field = "data"

    def __init__(self, produto_repo: Optional[InMemoryProdutoRepository] = None, **kwargs):
        super().__init__(**kwargs)
        self.produto_repo = produto_repo

    def create(self, campos: Dict[str, Any]) -> ProdutoSaidaEntity:
        saida = super().create(campos)
        if self.produto_repo is not None:
            produto = self.produto_repo.get_by_id(saida.produto_id)
            if produto is not None:
                self.produto_repo.update(
                    produto.id, {"estoque": max(0, produto.estoque - saida.quantidade)}
                )
        return saida
