"""
Domain Events do Domínio de Chamados.

Eventos:
- ChamadoCriadoEvent: Novo chamado aberto
- ChamadoStatusAlteradoEvent: Status mudou
- ChamadoConcluidoEvent: Chamado concluído (com tempo de serviço)
"""

from dataclasses import dataclass
from typing import Optional

from src.core.shared.events import DomainEvent


@dataclass
class ChamadoCriadoEvent(DomainEvent):
    """
    Evento: Chamado foi aberto.

    Handlers típicos:
    - Notificar equipe de suporte (prioridade alta ou VIP)
    - Registrar métrica
    """

    titulo: str = ""
    prioridade: str = ""
    tipo_servico: str = ""
    is_vip: bool = False

    @property
    def aggregate_type(self) -> str:
        return "Chamado"


@dataclass
class ChamadoStatusAlteradoEvent(DomainEvent):
    """Evento: Status do chamado mudou."""

    status_anterior: str = ""
    novo_status: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Chamado"


@dataclass
class ChamadoConcluidoEvent(DomainEvent):
    """
    Evento: Chamado foi concluído.

    Attributes:
        duration_minutes: Tempo de serviço (None se não calculável)
        duration_text: Tempo de serviço formatado
        tipo_servico: Categoria para métricas por serviço
    """

    duration_minutes: Optional[int] = None
    duration_text: Optional[str] = None
    tipo_servico: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Chamado"
