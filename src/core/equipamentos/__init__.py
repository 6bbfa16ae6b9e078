"""
Domínio de Equipamentos - Inventário de TI.

- Entidades (EquipamentoEntity, EquipamentoStatus)
- Códigos de patrimônio derivados (classificação, numeração, sugestão)
- Use Cases (Criar, Atualizar, Listar, Obter, Excluir, Sugerir, Analisar)
"""

from .entities import TIPOS_EQUIPAMENTO, EquipamentoEntity, EquipamentoStatus
from .events import EquipamentoCadastradoEvent
from .dtos import (
    AtualizarEquipamentoInputDTO,
    CriarEquipamentoInputDTO,
    EquipamentoOutputDTO,
    EstatisticasEquipamentosDTO,
    FiltroEquipamentosDTO,
)
from .codigos import (
    atribuir_codigos,
    classificar,
    ordenar_por_codigo,
    sugerir_codigo,
    verificar_patrimonio_disponivel,
)
from .ports import EquipamentoRepository, InMemoryEquipamentoRepository
from .use_cases import (
    AnalisarEquipamentosService,
    AtualizarEquipamentoService,
    CriarEquipamentoService,
    ExcluirEquipamentoService,
    ListarEquipamentosService,
    ObterEquipamentoService,
    SugerirCodigoService,
)

__all__ = [
    "TIPOS_EQUIPAMENTO",
    "EquipamentoEntity",
    "EquipamentoStatus",
    "EquipamentoCadastradoEvent",
    "CriarEquipamentoInputDTO",
    "AtualizarEquipamentoInputDTO",
    "FiltroEquipamentosDTO",
    "EquipamentoOutputDTO",
    "EstatisticasEquipamentosDTO",
    "atribuir_codigos",
    "classificar",
    "ordenar_por_codigo",
    "sugerir_codigo",
    "verificar_patrimonio_disponivel",
    "EquipamentoRepository",
    "InMemoryEquipamentoRepository",
    "CriarEquipamentoService",
    "AtualizarEquipamentoService",
    "ListarEquipamentosService",
    "ObterEquipamentoService",
    "ExcluirEquipamentoService",
    "SugerirCodigoService",
    "AnalisarEquipamentosService",
]
