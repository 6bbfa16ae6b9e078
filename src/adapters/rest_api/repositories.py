"""
Repositórios sobre a API REST legada (backend rest).

Mesmo contrato dos repositórios Django: registros trafegam como JSON
no formato das tabelas; `list_all` ordena no cliente, mais recentes
primeiro.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar
import logging

from src.core.chamados.entities import ChamadoEntity
from src.core.equipamentos.entities import EquipamentoEntity
from src.core.produtos.entities import ProdutoEntity, ProdutoSaidaEntity
from src.core.setores.entities import SetorEntity
from src.core.shared.exceptions import EntityNotFoundError, RepositoryError
from src.core.usuarios.entities import UsuarioEntity

from .client import RestClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _um_registro(resposta: Any) -> Optional[Dict[str, Any]]:
    """APIs no estilo PostgREST devolvem listas mesmo para um registro."""
    if isinstance(resposta, list):
        return resposta[0] if resposta else None
    return resposta


class RestRepository(Generic[T]):
    """
    Repositório genérico sobre um recurso REST.

    Subclasses definem `path`, `entity_class` e `entity_type`.

    Example:
        repo = RestSetorRepository(RestClient("http://localhost:3001"))
        repo.create({"nome": "TI"})
    """

    path: str = ""
    entity_class: Any = None
    entity_type: str = "Registro"
    order_field: str = "created_at"

    def __init__(self, client: RestClient):
        self.client = client

    def to_entity(self, registro: Dict[str, Any]) -> T:
        return self.entity_class.from_record(registro)

    def _item(self, entity_id: str) -> str:
        return f"{self.path}/{entity_id}"

    def _nao_encontrado(self, entity_id: str) -> EntityNotFoundError:
        return EntityNotFoundError(
            f"{self.entity_type} {entity_id} não encontrado",
            entity_type=self.entity_type,
            entity_id=entity_id,
        )

    def list_all(self) -> List[T]:
        registros = self.client.get(self.path) or []
        if not isinstance(registros, list):
            raise RepositoryError(
                f"Resposta inesperada de {self.path}", detail=str(registros)[:200]
            )
        registros = sorted(
            registros, key=lambda r: str(r.get(self.order_field) or ""), reverse=True
        )
        return [self.to_entity(r) for r in registros]

    def get_by_id(self, entity_id: str) -> Optional[T]:
        try:
            registro = _um_registro(self.client.get(self._item(entity_id)))
        except EntityNotFoundError:
            return None
        return self.to_entity(registro) if registro else None

    def create(self, campos: Dict[str, Any]) -> T:
        registro = _um_registro(self.client.post(self.path, campos))
        logger.debug(f"POST {self.path}: {campos.get('id', '-')}")
        return self.to_entity(registro or campos)

    def update(self, entity_id: str, campos: Dict[str, Any]) -> T:
        try:
            registro = _um_registro(self.client.patch(self._item(entity_id), campos))
        except EntityNotFoundError as e:
            raise self._nao_encontrado(entity_id) from e

        if registro:
            return self.to_entity(registro)
        atualizado = self.get_by_id(entity_id)
        if atualizado is None:
            raise self._nao_encontrado(entity_id)
        return atualizado

    def delete(self, entity_id: str) -> None:
        try:
            self.client.delete(self._item(entity_id))
        except EntityNotFoundError as e:
            raise self._nao_encontrado(entity_id) from e


class RestChamadoRepository(RestRepository[ChamadoEntity]):
    path = "/chamados"
    entity_class = ChamadoEntity
    entity_type = "Chamado"


class RestEquipamentoRepository(RestRepository[EquipamentoEntity]):
    path = "/equipamentos"
    entity_class = EquipamentoEntity
    entity_type = "Equipamento"


class RestProdutoRepository(RestRepository[ProdutoEntity]):
    path = "/produtos"
    entity_class = ProdutoEntity
    entity_type = "Produto"


class RestProdutoSaidaRepository(RestRepository[ProdutoSaidaEntity]):
    """A API legada decrementa o estoque do produto ao receber a saída."""

    path = "/produto_saidas"
    entity_class = ProdutoSaidaEntity
    entity_type = "Saída"
    order_field = "data"


class RestSetorRepository(RestRepository[SetorEntity]):
    path = "/setores"
    entity_class = SetorEntity
    entity_type = "Setor"


class RestUsuarioRepository(RestRepository[UsuarioEntity]):
    path = "/usuarios"
    entity_class = UsuarioEntity
    entity_type = "Usuário"

    def get_by_username(self, username: str) -> Optional[UsuarioEntity]:
        # Comparação exata feita aqui; o filtro da query pode ser ignorado pela API.
        registros = self.client.get(self.path, query={"username": username}) or []
        for registro in registros:
            if registro.get("username") == username:
                return self.to_entity(registro)
        return None
