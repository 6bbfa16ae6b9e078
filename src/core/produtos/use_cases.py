"""
Use Cases do Domínio de Produtos.

Use Cases implementados:
- CriarProdutoService / AtualizarProdutoService / ExcluirProdutoService
- ListarProdutosService: Lista com filtros
- ObterProdutoService
- RegistrarSaidaService: Saída de estoque (decremento no backend)
- ListarSaidasService: Saídas por data, mais recentes primeiro
- AtualizarSaidaService / ExcluirSaidaService: Sem ajuste de estoque
"""

from datetime import datetime
from typing import Callable, List, Optional
import logging
import uuid

from src.core.shared.datas import agora
from src.core.shared.exceptions import EntityNotFoundError, RepositoryError, ValidationError
from src.core.shared.interfaces import UnitOfWork

from .dtos import (
    AtualizarProdutoInputDTO,
    AtualizarSaidaInputDTO,
    CriarProdutoInputDTO,
    FiltroProdutosDTO,
    ProdutoOutputDTO,
    ProdutoSaidaOutputDTO,
    RegistrarSaidaInputDTO,
)
from .entities import ProdutoEntity, ProdutoSaidaEntity
from .events import SaidaProdutoRegistradaEvent
from .ports import ProdutoRepository, ProdutoSaidaRepository

logger = logging.getLogger(__name__)

Relogio = Callable[[], datetime]


def _obter_produto(repo: ProdutoRepository, produto_id: str) -> ProdutoEntity:
    produto = repo.get_by_id(produto_id)
    if not produto:
        raise EntityNotFoundError(
            f"Produto {produto_id} não encontrado",
            entity_type="Produto",
            entity_id=produto_id,
        )
    return produto


class CriarProdutoService:
    def __init__(self, produto_repo: ProdutoRepository, uow: UnitOfWork):
        self.produto_repo = produto_repo
        self.uow = uow

    def execute(self, input_dto: CriarProdutoInputDTO) -> ProdutoOutputDTO:
        """
        Raises:
            ValidationError: Se nome/categoria vazios ou estoque inválido
        """
        for campo in ProdutoEntity.CAMPOS_OBRIGATORIOS:
            if not str(getattr(input_dto, campo) or "").strip():
                raise ValidationError(f"Campo obrigatório: {campo}", field=campo)

        campos = ProdutoEntity.normalizar_campos({
            "nome": input_dto.nome,
            "categoria": input_dto.categoria,
            "descricao": input_dto.descricao,
            "estoque": input_dto.estoque,
        })
        registro = {
            "id": str(uuid.uuid4()),
            "created_at": agora().isoformat(),
            **campos,
        }

        with self.uow:
            criado = self.produto_repo.create(
                {k: v for k, v in registro.items() if v is not None}
            )

        logger.info(f"Produto criado: {criado.nome} ({criado.id})")
        return ProdutoOutputDTO.from_entity(criado)


class AtualizarProdutoService:
    def __init__(self, produto_repo: ProdutoRepository, uow: UnitOfWork):
        self.produto_repo = produto_repo
        self.uow = uow

    def execute(self, input_dto: AtualizarProdutoInputDTO) -> ProdutoOutputDTO:
        campos = ProdutoEntity.normalizar_campos(input_dto.campos)
        if not campos:
            raise ValidationError("Nenhum campo informado para atualização")

        with self.uow:
            atualizado = self.produto_repo.update(input_dto.produto_id, campos)

        logger.info(f"Produto atualizado: {atualizado.id}")
        return ProdutoOutputDTO.from_entity(atualizado)


class ListarProdutosService:
    def __init__(self, produto_repo: ProdutoRepository):
        self.produto_repo = produto_repo

    def execute(self, filtro: Optional[FiltroProdutosDTO] = None) -> List[ProdutoOutputDTO]:
        produtos = self.produto_repo.list_all()
        if filtro:
            busca = (filtro.busca or "").strip().lower()
            produtos = [
                p for p in produtos
                if (not filtro.categoria or p.categoria == filtro.categoria)
                and (not busca or busca in f"{p.nome} {p.descricao or ''}".lower())
            ]
        return [ProdutoOutputDTO.from_entity(p) for p in produtos]


class ObterProdutoService:
    def __init__(self, produto_repo: ProdutoRepository):
        self.produto_repo = produto_repo

    def execute(self, produto_id: str) -> ProdutoOutputDTO:
        return ProdutoOutputDTO.from_entity(_obter_produto(self.produto_repo, produto_id))


class ExcluirProdutoService:
    def __init__(self, produto_repo: ProdutoRepository, uow: UnitOfWork):
        self.produto_repo = produto_repo
        self.uow = uow

    def execute(self, produto_id: str) -> None:
        with self.uow:
            self.produto_repo.delete(produto_id)
        logger.info(f"Produto excluído: {produto_id}")


class RegistrarSaidaService:
    """
    Use Case: Registrar saída de produto.

    Fluxo:
    1. Normalizar quantidade (inteiro > 0)
    2. Garantir que o produto existe
    3. Gravar a saída (o backend decrementa o estoque, piso zero)
    4. Disparar SaidaProdutoRegistrada com o estoque restante

    Example:
        service = RegistrarSaidaService(saida_repo, produto_repo, uow)
        service.execute(RegistrarSaidaInputDTO(produto_id=pid, quantidade=2))
    """

    def __init__(
        self,
        saida_repo: ProdutoSaidaRepository,
        produto_repo: ProdutoRepository,
        uow: UnitOfWork,
        relogio: Relogio = agora,
    ):
        self.saida_repo = saida_repo
        self.produto_repo = produto_repo
        self.uow = uow
        self.relogio = relogio

    def execute(self, input_dto: RegistrarSaidaInputDTO) -> ProdutoSaidaOutputDTO:
        """
        Raises:
            ValidationError: Se quantidade/data inválidas ou produto ausente
            EntityNotFoundError: Se o produto não existe
        """
        if not (input_dto.produto_id or "").strip():
            raise ValidationError("Selecione um produto.", field="produto_id")

        campos = ProdutoSaidaEntity.normalizar_campos({
            "quantidade": input_dto.quantidade,
            "destinatario": input_dto.destinatario,
            "data": input_dto.data,
        })

        with self.uow:
            produto = _obter_produto(self.produto_repo, input_dto.produto_id)

            registro = {
                "id": str(uuid.uuid4()),
                "produto_id": produto.id,
                "created_at": self.relogio().isoformat(),
                **campos,
            }
            registro["data"] = registro.get("data") or self.relogio().date().isoformat()
            saida = self.saida_repo.create(
                {k: v for k, v in registro.items() if v is not None}
            )

            restante = self.produto_repo.get_by_id(produto.id)
            self.uow.publish_event(
                SaidaProdutoRegistradaEvent(
                    aggregate_id=saida.id,
                    produto_id=produto.id,
                    produto_nome=produto.nome,
                    quantidade=saida.quantidade,
                    estoque_restante=restante.estoque if restante else None,
                    destinatario=saida.destinatario,
                )
            )

        logger.info(
            f"Saída registrada: {saida.quantidade}x {produto.nome} "
            f"para {saida.destinatario or '-'}"
        )
        return ProdutoSaidaOutputDTO.from_entity(saida, produto.nome)


class ListarSaidasService:
    """
    Use Case: Listar saídas, mais recentes (por data) primeiro.

    Inclui o nome do produto quando o cadastro está disponível. Falha
    do backend de saídas resulta em lista vazia.
    """

    def __init__(
        self,
        saida_repo: ProdutoSaidaRepository,
        produto_repo: Optional[ProdutoRepository] = None,
    ):
        self.saida_repo = saida_repo
        self.produto_repo = produto_repo

    def execute(self, produto_id: Optional[str] = None) -> List[ProdutoSaidaOutputDTO]:
        try:
            saidas = self.saida_repo.list_all()
        except RepositoryError as e:
            logger.warning(f"Saídas indisponíveis, listando vazio: {e}")
            return []

        if produto_id:
            saidas = [s for s in saidas if s.produto_id == produto_id]
        saidas = sorted(saidas, key=lambda s: s.data_ordenacao, reverse=True)

        nomes = {}
        if self.produto_repo is not None and saidas:
            nomes = {p.id: p.nome for p in self.produto_repo.list_all()}
        return [ProdutoSaidaOutputDTO.from_entity(s, nomes.get(s.produto_id)) for s in saidas]


class AtualizarSaidaService:
    """Use Case: Corrigir saída. Não reajusta o estoque do produto."""

    def __init__(self, saida_repo: ProdutoSaidaRepository, uow: UnitOfWork):
        self.saida_repo = saida_repo
        self.uow = uow

    def execute(self, input_dto: AtualizarSaidaInputDTO) -> ProdutoSaidaOutputDTO:
        campos = ProdutoSaidaEntity.normalizar_campos(input_dto.campos)
        if not campos:
            raise ValidationError("Nenhum campo informado para atualização")

        with self.uow:
            atualizada = self.saida_repo.update(input_dto.saida_id, campos)

        logger.info(f"Saída atualizada: {atualizada.id}")
        return ProdutoSaidaOutputDTO.from_entity(atualizada)


class ExcluirSaidaService:
    """Use Case: Excluir saída. Não devolve a quantidade ao estoque."""

    def __init__(self, saida_repo: ProdutoSaidaRepository, uow: UnitOfWork):
        self.saida_repo = saida_repo
        self.uow = uow

    def execute(self, saida_id: str) -> None:
        with self.uow:
            self.saida_repo.delete(saida_id)
        logger.info(f"Saída excluída: {saida_id}")
