"""
Ports (Interfaces) do Domínio de Setores.
"""

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from src.core.shared.in_memory import InMemoryRepository

from .entities import SetorEntity


@runtime_checkable
class SetorRepository(Protocol):
    """Interface para persistência de setores (tabela `setores`)."""

    def list_all(self) -> List[SetorEntity]:
        ...

    def get_by_id(self, setor_id: str) -> Optional[SetorEntity]:
        ...

    def create(self, campos: Dict[str, Any]) -> SetorEntity:
        ...

    def update(self, setor_id: str, campos: Dict[str, Any]) -> SetorEntity:
        ...

    def delete(self, setor_id: str) -> None:
        ...


class InMemorySetorRepository(InMemoryRepository[SetorEntity]):
    entity_class = SetorEntity
    entity_type = "Setor"
