"""
Ports (Interfaces) do Domínio de Chamados.

Implementações:
- DjangoChamadoRepository (banco via ORM)
- RestChamadoRepository (API REST de fallback)
- InMemoryChamadoRepository (testes)
"""

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from src.core.shared.in_memory import InMemoryRepository

from .entities import ChamadoEntity


@runtime_checkable
class ChamadoRepository(Protocol):
    """
    Interface para persistência de chamados (tabela `chamados`).

    Segue o contrato genérico de Repository: listagem mais recentes
    primeiro e escritas por dicionário de campos.
    """

    def list_all(self) -> List[ChamadoEntity]:
        ...

    def get_by_id(self, chamado_id: str) -> Optional[ChamadoEntity]:
        ...

    def create(self, campos: Dict[str, Any]) -> ChamadoEntity:
        ...

    def update(self, chamado_id: str, campos: Dict[str, Any]) -> ChamadoEntity:
        """
        Atualiza parcialmente o chamado.

        Raises:
            SchemaMismatchError: Se colunas de timestamp/duração não
                existirem no backend
        """
        ...

    def delete(self, chamado_id: str) -> None:
        ...


class InMemoryChamadoRepository(InMemoryRepository[ChamadoEntity]):
    """
    Implementação em memória do ChamadoRepository.

    Example:
        # Simula backend legado sem colunas de duração
        repo = InMemoryChamadoRepository(colunas={"status", "titulo"})
    """

    entity_class = ChamadoEntity
    entity_type = "Chamado"
