"""
Ports (Interfaces) do Domínio de Equipamentos.
"""

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from src.core.shared.in_memory import InMemoryRepository

from .entities import EquipamentoEntity


@runtime_checkable
class EquipamentoRepository(Protocol):
    """
    Interface para persistência de equipamentos (tabela `equipamentos`).

    `create`/`update` lançam DuplicateRecordError se o backend
    detectar patrimônio repetido (última barreira; a verificação de
    negócio acontece antes, nos use cases).
    """

    def list_all(self) -> List[EquipamentoEntity]:
        ...

    def get_by_id(self, equipamento_id: str) -> Optional[EquipamentoEntity]:
        ...

    def create(self, campos: Dict[str, Any]) -> EquipamentoEntity:
        ...

    def update(self, equipamento_id: str, campos: Dict[str, Any]) -> EquipamentoEntity:
        ...

    def delete(self, equipamento_id: str) -> None:
        ...


class InMemoryEquipamentoRepository(InMemoryRepository[EquipamentoEntity]):
    """Implementação em memória do EquipamentoRepository."""

    entity_class = EquipamentoEntity
    entity_type = "Equipamento"
    unique_fields = ("patrimonio",)
