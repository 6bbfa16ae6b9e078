"""
Domain Events do Domínio de Equipamentos.
"""

from dataclasses import dataclass

from src.core.shared.events import DomainEvent


@dataclass
class EquipamentoCadastradoEvent(DomainEvent):
    """
    Evento: Equipamento entrou no inventário.

    Handlers típicos:
    - Registrar métrica de inventário por tipo
    """

    nome: str = ""
    tipo: str = ""
    patrimonio: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Equipamento"
