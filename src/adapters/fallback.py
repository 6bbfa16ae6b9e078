"""
Repositório com fallback explícito entre dois backends.

Usado no modo store para setores e saídas de produtos: qualquer
RepositoryError do backend primário (banco) repete a operação no
secundário (API REST). O erro do secundário, se houver, é o que
se propaga, exceto na consulta extra de lista vazia, que mantém o
resultado vazio do primário.
"""

from typing import Any, Dict, List, Optional
import logging

from src.core.shared.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class FallbackRepository:
    """
    Compõe dois repositórios com o mesmo contrato.

    Attributes:
        primario: Backend preferencial
        secundario: Backend usado quando o primário falha
        fallback_lista_vazia: `list_all` também consulta o secundário
            quando o primário devolve lista vazia

    Example:
        repo = FallbackRepository(
            DjangoSetorRepository(),
            RestSetorRepository(client),
            fallback_lista_vazia=True,
        )
    """

    def __init__(self, primario, secundario, nome: str = "", fallback_lista_vazia: bool = False):
        self.primario = primario
        self.secundario = secundario
        self.nome = nome or type(primario).__name__
        self.fallback_lista_vazia = fallback_lista_vazia

    def _executar(self, operacao: str, *args):
        try:
            return getattr(self.primario, operacao)(*args)
        except RepositoryError as e:
            logger.warning(f"{self.nome}.{operacao} falhou no primário ({e}); usando fallback")
            return getattr(self.secundario, operacao)(*args)

    def list_all(self) -> List[Any]:
        try:
            registros = self.primario.list_all()
        except RepositoryError as e:
            logger.warning(f"{self.nome}.list_all falhou no primário ({e}); usando fallback")
            return self.secundario.list_all()

        if not registros and self.fallback_lista_vazia:
            logger.info(f"{self.nome}.list_all vazio no primário; consultando fallback")
            try:
                return self.secundario.list_all()
            except RepositoryError as e:
                logger.warning(f"{self.nome}.list_all falhou no fallback ({e}); mantendo lista vazia")
        return registros

    def get_by_id(self, entity_id: str) -> Optional[Any]:
        return self._executar("get_by_id", entity_id)

    def create(self, campos: Dict[str, Any]) -> Any:
        return self._executar("create", campos)

    def update(self, entity_id: str, campos: Dict[str, Any]) -> Any:
        return self._executar("update", entity_id, campos)

    def delete(self, entity_id: str) -> None:
        self._executar("delete", entity_id)
