"""
Data Transfer Objects (DTOs) do Domínio de Chamados.

Tipos de DTOs:
- Input DTOs: Recebem dados de entrada (de APIs)
- Query DTOs: Filtros de listagem
- Output DTOs: Formatam dados para resposta
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from .entities import ChamadoEntity


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CriarChamadoInputDTO:
    """
    DTO de entrada para abrir chamado.

    Attributes:
        titulo: Título do chamado
        descricao: Descrição do problema
        usuario: Usuário atendido
        tipo_servico: Categoria do serviço
        prioridade: baixa | media | alta
        solicitante: Quem abriu o chamado
        setor: Setor do usuário
        is_vip: Força marcação VIP (senão vem da sessão)
        data: Data de referência (YYYY-MM-DD)
    """

    titulo: str
    descricao: str
    usuario: str
    tipo_servico: str
    prioridade: str = "media"
    solicitante: Optional[str] = None
    setor: Optional[str] = None
    is_vip: bool = False
    data: Optional[str] = None


@dataclass(frozen=True)
class AtualizarChamadoInputDTO:
    """
    DTO de entrada para atualização parcial.

    `campos` pode conter um novo `status` e overrides explícitos de
    started_at/completed_at/duration_minutes/duration_text.
    """

    chamado_id: str
    campos: Dict[str, Any] = field(default_factory=dict)


# =============================================================================
# QUERY DTOs
# =============================================================================

@dataclass(frozen=True)
class FiltroChamadosDTO:
    """
    Filtros da listagem/análise de chamados.

    Attributes:
        status: Status exato (nome, valor ou alias)
        prioridade: Prioridade exata
        tipo_servico: Tipo de serviço exato
        periodo: todos | hoje | semana | mes
        busca: Texto livre em título, usuário e solicitante
    """

    status: Optional[str] = None
    prioridade: Optional[str] = None
    tipo_servico: Optional[str] = None
    periodo: str = "todos"
    busca: Optional[str] = None


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class ChamadoOutputDTO:
    """DTO de saída com dados completos do chamado."""

    id: str
    titulo: str
    descricao: str
    prioridade: str
    status: str
    usuario: str
    solicitante: Optional[str]
    setor: Optional[str]
    tipo_servico: str
    is_vip: bool
    data: Optional[str]
    created_at: Optional[str]
    started_at: Optional[str]
    completed_at: Optional[str]
    duration_minutes: Optional[int]
    duration_text: Optional[str]

    @classmethod
    def from_entity(cls, chamado: ChamadoEntity) -> "ChamadoOutputDTO":
        return cls(
            id=chamado.id,
            titulo=chamado.titulo,
            descricao=chamado.descricao,
            prioridade=chamado.prioridade.value,
            status=chamado.status.value,
            usuario=chamado.usuario,
            solicitante=chamado.solicitante,
            setor=chamado.setor,
            tipo_servico=chamado.tipo_servico,
            is_vip=chamado.is_vip,
            data=chamado.data,
            created_at=chamado.created_at,
            started_at=chamado.started_at,
            completed_at=chamado.completed_at,
            duration_minutes=chamado.duration_minutes,
            duration_text=chamado.duration_text or chamado.tempo_servico,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EstatisticasChamadosDTO:
    """
    Métricas da análise de serviços.

    Attributes:
        total: Chamados no recorte filtrado
        em_aberto: Status Aberto
        em_andamento: Status Em Andamento
        concluidos: Status Concluído
        feitos_hoje: Concluídos com data de hoje
        por_prioridade: Contagem por prioridade
        por_tipo_servico: Contagem por tipo de serviço
        tempo_minimo: Menor tempo de atendimento ("1h 5m", "12m" ou "-")
        tempo_minimo_por_servico: Menor tempo por tipo de serviço
    """

    total: int = 0
    em_aberto: int = 0
    em_andamento: int = 0
    concluidos: int = 0
    feitos_hoje: int = 0
    por_prioridade: Dict[str, int] = field(default_factory=dict)
    por_tipo_servico: Dict[str, int] = field(default_factory=dict)
    tempo_minimo: str = "-"
    tempo_minimo_por_servico: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
