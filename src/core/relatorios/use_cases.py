"""
Use Cases de Relatórios.

- DashboardService: Totais e distribuições para a visão geral
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List
import logging

from src.core.chamados.dtos import ChamadoOutputDTO
from src.core.chamados.entities import ChamadoPrioridade, ChamadoStatus
from src.core.chamados.ports import ChamadoRepository
from src.core.equipamentos.entities import EquipamentoStatus
from src.core.equipamentos.ports import EquipamentoRepository
from src.core.produtos.ports import ProdutoRepository
from src.core.setores.ports import SetorRepository
from src.core.usuarios.ports import UsuarioRepository

logger = logging.getLogger(__name__)

QUANTIDADE_RECENTES = 5


@dataclass
class DashboardDTO:
    """
    Visão geral do sistema.

    Attributes:
        total_*: Contagens por recurso
        estoque_total: Soma do estoque de todos os produtos
        chamados_por_*: Distribuições de chamados
        equipamentos_por_status: Distribuição do inventário
        chamados_recentes: Cinco chamados mais recentes
    """

    total_chamados: int = 0
    chamados_abertos: int = 0
    total_equipamentos: int = 0
    total_produtos: int = 0
    total_usuarios: int = 0
    total_setores: int = 0
    estoque_total: int = 0
    chamados_por_prioridade: Dict[str, int] = field(default_factory=dict)
    chamados_por_status: Dict[str, int] = field(default_factory=dict)
    equipamentos_por_status: Dict[str, int] = field(default_factory=dict)
    chamados_recentes: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DashboardService:
    """
    Use Case: Montar o dashboard.

    Lê cada recurso uma vez; os repositórios já devolvem os registros
    mais recentes primeiro.
    """

    def __init__(
        self,
        chamado_repo: ChamadoRepository,
        equipamento_repo: EquipamentoRepository,
        produto_repo: ProdutoRepository,
        usuario_repo: UsuarioRepository,
        setor_repo: SetorRepository,
    ):
        self.chamado_repo = chamado_repo
        self.equipamento_repo = equipamento_repo
        self.produto_repo = produto_repo
        self.usuario_repo = usuario_repo
        self.setor_repo = setor_repo

    def execute(self) -> DashboardDTO:
        chamados = self.chamado_repo.list_all()
        equipamentos = self.equipamento_repo.list_all()
        produtos = self.produto_repo.list_all()

        dashboard = DashboardDTO(
            total_chamados=len(chamados),
            total_equipamentos=len(equipamentos),
            total_produtos=len(produtos),
            total_usuarios=len(self.usuario_repo.list_all()),
            total_setores=len(self.setor_repo.list_all()),
            estoque_total=sum(p.estoque for p in produtos),
            chamados_por_prioridade={p.value: 0 for p in ChamadoPrioridade},
            chamados_por_status={s.value: 0 for s in ChamadoStatus},
            equipamentos_por_status={s.value: 0 for s in EquipamentoStatus},
        )

        for chamado in chamados:
            dashboard.chamados_por_prioridade[chamado.prioridade.value] += 1
            dashboard.chamados_por_status[chamado.status.value] += 1
        dashboard.chamados_abertos = dashboard.chamados_por_status[ChamadoStatus.ABERTO.value]

        for equipamento in equipamentos:
            dashboard.equipamentos_por_status[equipamento.status.value] += 1

        dashboard.chamados_recentes = [
            ChamadoOutputDTO.from_entity(c).to_dict() for c in chamados[:QUANTIDADE_RECENTES]
        ]

        logger.debug(f"Dashboard montado: {dashboard.total_chamados} chamados")
        return dashboard
