"""
Domínio de Chamados - Atendimento de Suporte.

Este módulo contém a lógica de negócio dos chamados de help desk:
- Entidades (ChamadoEntity, ChamadoStatus, ChamadoPrioridade)
- Ciclo de vida (timestamps de início/conclusão e tempo de serviço)
- Use Cases (Criar, Atualizar, Listar, Obter, Excluir, Analisar)
- Domain Events (ChamadoCriado, ChamadoStatusAlterado, ChamadoConcluido)
- Ports (ChamadoRepository)
"""

from .entities import ChamadoEntity, ChamadoPrioridade, ChamadoStatus
from .events import ChamadoConcluidoEvent, ChamadoCriadoEvent, ChamadoStatusAlteradoEvent
from .dtos import (
    AtualizarChamadoInputDTO,
    ChamadoOutputDTO,
    CriarChamadoInputDTO,
    EstatisticasChamadosDTO,
    FiltroChamadosDTO,
)
from .lifecycle import aplicar_transicao, formatar_duracao
from .ports import ChamadoRepository, InMemoryChamadoRepository
from .use_cases import (
    AnalisarChamadosService,
    AtualizarChamadoService,
    CriarChamadoService,
    ExcluirChamadoService,
    ListarChamadosService,
    ObterChamadoService,
)

__all__ = [
    # Entities
    "ChamadoEntity",
    "ChamadoPrioridade",
    "ChamadoStatus",
    # Events
    "ChamadoCriadoEvent",
    "ChamadoStatusAlteradoEvent",
    "ChamadoConcluidoEvent",
    # DTOs
    "CriarChamadoInputDTO",
    "AtualizarChamadoInputDTO",
    "FiltroChamadosDTO",
    "ChamadoOutputDTO",
    "EstatisticasChamadosDTO",
    # Lifecycle
    "aplicar_transicao",
    "formatar_duracao",
    # Ports
    "ChamadoRepository",
    "InMemoryChamadoRepository",
    # Use Cases
    "CriarChamadoService",
    "AtualizarChamadoService",
    "ListarChamadosService",
    "ObterChamadoService",
    "ExcluirChamadoService",
    "AnalisarChamadosService",
]
