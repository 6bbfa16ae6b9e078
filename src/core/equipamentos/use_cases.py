"""
Use Cases do Domínio de Equipamentos.

Use Cases implementados:
- CriarEquipamentoService: Cadastro com verificação de patrimônio
- AtualizarEquipamentoService: Edição (bloqueada para VIP sem admin)
- ListarEquipamentosService: Lista filtrada, com código e ordem de exibição
- ObterEquipamentoService: Obtém equipamento com código
- ExcluirEquipamentoService: Remove equipamento
- SugerirCodigoService: Próximo código livre do grupo
- AnalisarEquipamentosService: Contagens por status e tipo
"""

from typing import List, Optional
import logging

from src.core.shared.exceptions import (
    AuthenticationError,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from src.core.shared.interfaces import UnitOfWork
from src.core.usuarios.sessao import SessaoUsuario

from .codigos import (
    atribuir_codigos,
    classificar,
    ordenar_por_codigo,
    sugerir_codigo,
    verificar_patrimonio_disponivel,
)
from .dtos import (
    AtualizarEquipamentoInputDTO,
    CriarEquipamentoInputDTO,
    EquipamentoOutputDTO,
    EstatisticasEquipamentosDTO,
    FiltroEquipamentosDTO,
)
from .entities import EquipamentoEntity, EquipamentoStatus
from .events import EquipamentoCadastradoEvent
from .ports import EquipamentoRepository

logger = logging.getLogger(__name__)


def _obter_ou_falhar(repo: EquipamentoRepository, equipamento_id: str) -> EquipamentoEntity:
    equipamento = repo.get_by_id(equipamento_id)
    if not equipamento:
        raise EntityNotFoundError(
            f"Equipamento {equipamento_id} não encontrado",
            entity_type="Equipamento",
            entity_id=equipamento_id,
        )
    return equipamento


def _verificar_permissao(sessao: Optional[SessaoUsuario]) -> None:
    if sessao is None:
        raise AuthenticationError("Sessão não iniciada.")
    if not sessao.pode_editar:
        raise PermissionDeniedError(
            "Usuários VIP não podem alterar equipamentos."
        )


class CriarEquipamentoService:
    """
    Use Case: Cadastrar equipamento.

    Fluxo:
    1. Validar campos obrigatórios e tipo
    2. Verificar patrimônio contra o inventário atual (antes de gravar)
    3. Persistir
    4. Disparar evento EquipamentoCadastrado
    """

    def __init__(self, equipamento_repo: EquipamentoRepository, uow: UnitOfWork):
        self.equipamento_repo = equipamento_repo
        self.uow = uow

    def execute(self, input_dto: CriarEquipamentoInputDTO) -> EquipamentoOutputDTO:
        """
        Raises:
            ValidationError: Se dados inválidos ou patrimônio em uso
            DuplicateRecordError: Se o backend rejeitar o patrimônio
        """
        equipamento = EquipamentoEntity.criar(input_dto.to_campos())

        with self.uow:
            verificar_patrimonio_disponivel(
                equipamento.patrimonio, self.equipamento_repo.list_all()
            )
            criado = self.equipamento_repo.create(equipamento.to_record(omitir_vazios=True))

            self.uow.publish_event(
                EquipamentoCadastradoEvent(
                    aggregate_id=criado.id,
                    nome=criado.nome,
                    tipo=criado.tipo,
                    patrimonio=criado.patrimonio,
                )
            )

        logger.info(f"Equipamento cadastrado: {criado.patrimonio} ({criado.id})")
        return EquipamentoOutputDTO.from_entity(criado)


class AtualizarEquipamentoService:
    """
    Use Case: Editar equipamento.

    A verificação de patrimônio só roda quando o patrimônio muda.
    """

    def __init__(self, equipamento_repo: EquipamentoRepository, uow: UnitOfWork):
        self.equipamento_repo = equipamento_repo
        self.uow = uow

    def execute(
        self,
        input_dto: AtualizarEquipamentoInputDTO,
        sessao: Optional[SessaoUsuario] = None,
    ) -> EquipamentoOutputDTO:
        """
        Raises:
            AuthenticationError: Sem sessão
            PermissionDeniedError: Se a sessão for VIP sem admin
            EntityNotFoundError: Se equipamento não existe
            ValidationError: Se patch inválido ou patrimônio em uso
        """
        _verificar_permissao(sessao)

        campos = EquipamentoEntity.normalizar_campos(input_dto.campos)
        if not campos:
            raise ValidationError("Nenhum campo informado para atualização")

        with self.uow:
            equipamento = _obter_ou_falhar(self.equipamento_repo, input_dto.equipamento_id)

            novo = campos.get("patrimonio")
            if novo and novo.casefold() != (equipamento.patrimonio or "").strip().casefold():
                verificar_patrimonio_disponivel(
                    novo, self.equipamento_repo.list_all(), ignorar_id=equipamento.id
                )

            atualizado = self.equipamento_repo.update(equipamento.id, campos)

        logger.info(f"Equipamento atualizado: {atualizado.id}")
        return EquipamentoOutputDTO.from_entity(atualizado)


def filtrar_equipamentos(
    equipamentos: List[EquipamentoEntity],
    filtro: FiltroEquipamentosDTO,
) -> List[EquipamentoEntity]:
    """
    Raises:
        ValidationError: Se status inválido
    """
    status = None
    if filtro.status:
        try:
            status = EquipamentoStatus.from_string(filtro.status)
        except ValueError as e:
            raise ValidationError(str(e), field="status")

    setor = (filtro.setor or "").strip().upper()
    prefixo = (filtro.prefixo or "").strip().upper()
    busca = (filtro.busca or "").strip().lower()

    resultado = []
    for equipamento in equipamentos:
        if status and equipamento.status != status:
            continue
        if filtro.tipo and equipamento.tipo != filtro.tipo:
            continue
        if setor and (equipamento.setor or "").upper() != setor:
            continue
        if prefixo and classificar(equipamento.nome, equipamento.tipo) != prefixo:
            continue
        if busca:
            alvo = " ".join(
                v or "" for v in (equipamento.nome, equipamento.patrimonio, equipamento.usuario)
            ).lower()
            if busca not in alvo:
                continue
        resultado.append(equipamento)
    return resultado


class ListarEquipamentosService:
    """
    Use Case: Listar equipamentos com código de exibição.

    Os códigos são calculados sobre o conjunto já filtrado, como na
    tela de inventário. Sem UoW - apenas leitura.
    """

    def __init__(self, equipamento_repo: EquipamentoRepository):
        self.equipamento_repo = equipamento_repo

    def execute(
        self, filtro: Optional[FiltroEquipamentosDTO] = None
    ) -> List[EquipamentoOutputDTO]:
        equipamentos = self.equipamento_repo.list_all()
        if filtro:
            equipamentos = filtrar_equipamentos(equipamentos, filtro)

        codigos = atribuir_codigos(equipamentos)
        return [
            EquipamentoOutputDTO.from_entity(e, codigos.get(e.id))
            for e in ordenar_por_codigo(equipamentos, codigos)
        ]


class ObterEquipamentoService:
    """Use Case: Obter equipamento por ID (código calculado sobre o inventário)."""

    def __init__(self, equipamento_repo: EquipamentoRepository):
        self.equipamento_repo = equipamento_repo

    def execute(self, equipamento_id: str) -> EquipamentoOutputDTO:
        equipamento = _obter_ou_falhar(self.equipamento_repo, equipamento_id)
        codigos = atribuir_codigos(self.equipamento_repo.list_all())
        return EquipamentoOutputDTO.from_entity(equipamento, codigos.get(equipamento.id))


class ExcluirEquipamentoService:
    def __init__(self, equipamento_repo: EquipamentoRepository, uow: UnitOfWork):
        self.equipamento_repo = equipamento_repo
        self.uow = uow

    def execute(self, equipamento_id: str, sessao: Optional[SessaoUsuario] = None) -> None:
        """
        Raises:
            AuthenticationError: Sem sessão
            PermissionDeniedError: Se a sessão for VIP sem admin
            EntityNotFoundError: Se equipamento não existe
        """
        _verificar_permissao(sessao)
        with self.uow:
            self.equipamento_repo.delete(equipamento_id)
        logger.info(f"Equipamento excluído: {equipamento_id}")


class SugerirCodigoService:
    """
    Use Case: Sugerir patrimônio para novo equipamento.

    Example:
        SugerirCodigoService(repo).execute("Desktop", "Laptop C")  # "PC003"
    """

    def __init__(self, equipamento_repo: EquipamentoRepository):
        self.equipamento_repo = equipamento_repo

    def execute(self, tipo: str, nome: str = "") -> Optional[str]:
        return sugerir_codigo(self.equipamento_repo.list_all(), tipo, nome)


class AnalisarEquipamentosService:
    def __init__(self, equipamento_repo: EquipamentoRepository):
        self.equipamento_repo = equipamento_repo

    def execute(self) -> EstatisticasEquipamentosDTO:
        equipamentos = self.equipamento_repo.list_all()
        estatisticas = EstatisticasEquipamentosDTO(total=len(equipamentos))

        contadores = {
            EquipamentoStatus.DISPONIVEL: "disponiveis",
            EquipamentoStatus.EM_USO: "em_uso",
            EquipamentoStatus.MANUTENCAO: "manutencao",
            EquipamentoStatus.INATIVO: "inativos",
        }
        for equipamento in equipamentos:
            atributo = contadores[equipamento.status]
            setattr(estatisticas, atributo, getattr(estatisticas, atributo) + 1)
            tipo = equipamento.tipo or "-"
            estatisticas.por_tipo[tipo] = estatisticas.por_tipo.get(tipo, 0) + 1

        estatisticas.ativos = estatisticas.total - estatisticas.inativos
        return estatisticas
