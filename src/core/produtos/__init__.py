"""
Domínio de Produtos - Estoque e saídas.
"""

from .entities import (
    MENSAGEM_QUANTIDADE_INVALIDA,
    ProdutoEntity,
    ProdutoSaidaEntity,
    normalizar_quantidade,
)
from .events import SaidaProdutoRegistradaEvent
from .dtos import (
    AtualizarProdutoInputDTO,
    AtualizarSaidaInputDTO,
    CriarProdutoInputDTO,
    FiltroProdutosDTO,
    ProdutoOutputDTO,
    ProdutoSaidaOutputDTO,
    RegistrarSaidaInputDTO,
)
from .ports import (
    InMemoryProdutoRepository,
    InMemoryProdutoSaidaRepository,
    ProdutoRepository,
    ProdutoSaidaRepository,
)
from .use_cases import (
    AtualizarProdutoService,
    AtualizarSaidaService,
    CriarProdutoService,
    ExcluirProdutoService,
    ExcluirSaidaService,
    ListarProdutosService,
    ListarSaidasService,
    ObterProdutoService,
    RegistrarSaidaService,
)

__all__ = [
    "MENSAGEM_QUANTIDADE_INVALIDA",
    "ProdutoEntity",
    "ProdutoSaidaEntity",
    "normalizar_quantidade",
    "SaidaProdutoRegistradaEvent",
    "CriarProdutoInputDTO",
    "AtualizarProdutoInputDTO",
    "FiltroProdutosDTO",
    "RegistrarSaidaInputDTO",
    "AtualizarSaidaInputDTO",
    "ProdutoOutputDTO",
    "ProdutoSaidaOutputDTO",
    "ProdutoRepository",
    "ProdutoSaidaRepository",
    "InMemoryProdutoRepository",
    "InMemoryProdutoSaidaRepository",
    "CriarProdutoService",
    "AtualizarProdutoService",
    "ListarProdutosService",
    "ObterProdutoService",
    "ExcluirProdutoService",
    "RegistrarSaidaService",
    "ListarSaidasService",
    "AtualizarSaidaService",
    "ExcluirSaidaService",
]
