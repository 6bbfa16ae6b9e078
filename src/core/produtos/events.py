"""
Domain Events do Domínio de Produtos.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.shared.events import DomainEvent


@dataclass
class SaidaProdutoRegistradaEvent(DomainEvent):
    """
    Evento: Saída de estoque registrada.

    Handlers típicos:
    - Alertar estoque baixo (estoque_restante <= ESTOQUE_MINIMO_ALERTA)

    Attributes:
        produto_id: Produto movimentado
        produto_nome: Nome do produto
        quantidade: Quantidade que saiu
        estoque_restante: Estoque após o decremento (None se desconhecido)
        destinatario: Quem recebeu
    """

    produto_id: str = ""
    produto_nome: str = ""
    quantidade: int = 0
    estoque_restante: Optional[int] = None
    destinatario: Optional[str] = None

    @property
    def aggregate_type(self) -> str:
        return "ProdutoSaida"
