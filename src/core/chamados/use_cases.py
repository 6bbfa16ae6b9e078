"""
Use Cases (Application Services) do Domínio de Chamados.

Use Cases implementados:
- CriarChamadoService: Abre novo chamado
- AtualizarChamadoService: Atualização parcial com ciclo de vida
- ListarChamadosService: Lista com filtros, VIP primeiro
- ObterChamadoService: Obtém chamado específico
- ExcluirChamadoService: Remove chamado
- AnalisarChamadosService: Métricas da análise de serviços

Princípios:
- Um Use Case = Uma operação de negócio
- Dependências injetadas (DI)
- Sem lógica de infraestrutura
"""

from datetime import date, datetime
from typing import Callable, Dict, Iterable, List, Optional
import logging

from src.core.shared.datas import agora
from src.core.shared.exceptions import (
    EntityNotFoundError,
    SchemaMismatchError,
    ValidationError,
)
from src.core.shared.interfaces import UnitOfWork

from .dtos import (
    AtualizarChamadoInputDTO,
    ChamadoOutputDTO,
    CriarChamadoInputDTO,
    EstatisticasChamadosDTO,
    FiltroChamadosDTO,
)
from .entities import ChamadoEntity, ChamadoPrioridade, ChamadoStatus
from .events import (
    ChamadoConcluidoEvent,
    ChamadoCriadoEvent,
    ChamadoStatusAlteradoEvent,
)
from .lifecycle import aplicar_transicao, calcular_duracao_minutos
from .ports import ChamadoRepository

logger = logging.getLogger(__name__)

Relogio = Callable[[], datetime]


def _obter_ou_falhar(repo: ChamadoRepository, chamado_id: str) -> ChamadoEntity:
    chamado = repo.get_by_id(chamado_id)
    if not chamado:
        raise EntityNotFoundError(
            f"Chamado {chamado_id} não encontrado",
            entity_type="Chamado",
            entity_id=chamado_id,
        )
    return chamado


class CriarChamadoService:
    """
    Use Case: Abrir um novo chamado.

    Fluxo:
    1. Validar dados de entrada
    2. Criar entidade Chamado
    3. Persistir via repositório
    4. Disparar evento ChamadoCriado
    5. Retornar DTO de saída

    Example:
        service = CriarChamadoService(chamado_repo, uow)
        output = service.execute(CriarChamadoInputDTO(
            titulo="Impressora sem toner",
            descricao="Impressora do financeiro não imprime",
            usuario="MARIA",
            tipo_servico="Impressora",
        ))
    """

    def __init__(self, chamado_repo: ChamadoRepository, uow: UnitOfWork):
        self.chamado_repo = chamado_repo
        self.uow = uow

    def execute(self, input_dto: CriarChamadoInputDTO) -> ChamadoOutputDTO:
        """
        Raises:
            ValidationError: Se dados inválidos
        """
        try:
            prioridade = ChamadoPrioridade.from_string(input_dto.prioridade)
        except ValueError as e:
            raise ValidationError(str(e), field="prioridade")

        data = None
        if input_dto.data:
            try:
                data = date.fromisoformat(input_dto.data)
            except ValueError:
                raise ValidationError(f"Data inválida: {input_dto.data}", field="data")

        chamado = ChamadoEntity.criar(
            titulo=input_dto.titulo,
            descricao=input_dto.descricao,
            usuario=input_dto.usuario,
            tipo_servico=input_dto.tipo_servico,
            prioridade=prioridade,
            solicitante=input_dto.solicitante,
            setor=input_dto.setor,
            is_vip=input_dto.is_vip,
            data=data,
        )

        with self.uow:
            criado = self.chamado_repo.create(chamado.to_record(omitir_vazios=True))

            self.uow.publish_event(
                ChamadoCriadoEvent(
                    aggregate_id=criado.id,
                    titulo=criado.titulo,
                    prioridade=criado.prioridade.value,
                    tipo_servico=criado.tipo_servico,
                    is_vip=criado.is_vip,
                )
            )

        logger.info(f"Chamado criado: {criado.id}")
        return ChamadoOutputDTO.from_entity(criado)


class AtualizarChamadoService:
    """
    Use Case: Atualizar chamado (inclui transições de status).

    Fluxo:
    1. Buscar snapshot atual
    2. Validar/normalizar patch
    3. Se houver `status`, derivar timestamps e duração
    4. Gravar em uma única chamada de update
    5. Se o backend não tiver as colunas derivadas (schema antigo),
       reenviar uma única vez apenas com `status`
    6. Disparar eventos de status/conclusão

    Attributes:
        chamado_repo: Repositório de chamados
        uow: Unit of Work para transações
        relogio: Fonte do instante "agora" (injetável para testes)
    """

    def __init__(
        self,
        chamado_repo: ChamadoRepository,
        uow: UnitOfWork,
        relogio: Relogio = agora,
    ):
        self.chamado_repo = chamado_repo
        self.uow = uow
        self.relogio = relogio

    def execute(self, input_dto: AtualizarChamadoInputDTO) -> ChamadoOutputDTO:
        """
        Raises:
            EntityNotFoundError: Se chamado não existe
            ValidationError: Se patch inválido
            RepositoryError: Se o update (ou o retry reduzido) falhar
        """
        campos = ChamadoEntity.normalizar_campos(input_dto.campos)
        if not campos:
            raise ValidationError("Nenhum campo informado para atualização")

        with self.uow:
            chamado = _obter_ou_falhar(self.chamado_repo, input_dto.chamado_id)

            if "status" in campos:
                campos = aplicar_transicao(chamado.to_record(), campos, self.relogio())

            try:
                atualizado = self.chamado_repo.update(chamado.id, campos)
            except SchemaMismatchError as e:
                if "status" not in campos:
                    raise
                logger.warning(
                    f"Backend sem colunas {e.columns or '(desconhecidas)'} para "
                    f"chamado {chamado.id}; reenviando apenas status"
                )
                atualizado = self.chamado_repo.update(
                    chamado.id, {"status": campos["status"]}
                )

            self._publicar_eventos(chamado, atualizado)

        logger.info(f"Chamado atualizado: {atualizado.id}")
        return ChamadoOutputDTO.from_entity(atualizado)

    def _publicar_eventos(self, anterior: ChamadoEntity, atual: ChamadoEntity) -> None:
        if anterior.status == atual.status:
            return

        self.uow.publish_event(
            ChamadoStatusAlteradoEvent(
                aggregate_id=atual.id,
                status_anterior=anterior.status.value,
                novo_status=atual.status.value,
            )
        )
        if atual.esta_concluido:
            self.uow.publish_event(
                ChamadoConcluidoEvent(
                    aggregate_id=atual.id,
                    duration_minutes=atual.duration_minutes,
                    duration_text=atual.duration_text,
                    tipo_servico=atual.tipo_servico,
                )
            )


def filtrar_chamados(
    chamados: Iterable[ChamadoEntity],
    filtro: FiltroChamadosDTO,
    hoje: date,
) -> List[ChamadoEntity]:
    """
    Aplica os filtros de listagem/análise.

    Raises:
        ValidationError: Se status, prioridade ou período inválidos
    """
    try:
        status = ChamadoStatus.from_string(filtro.status) if filtro.status else None
        prioridade = (
            ChamadoPrioridade.from_string(filtro.prioridade) if filtro.prioridade else None
        )
    except ValueError as e:
        raise ValidationError(str(e))

    periodo = (filtro.periodo or "todos").lower()
    if periodo not in ("todos", "hoje", "semana", "mes"):
        raise ValidationError(f"Período inválido: {filtro.periodo}", field="periodo")

    busca = (filtro.busca or "").strip().lower()
    resultado = []
    for chamado in chamados:
        if status and chamado.status != status:
            continue
        if prioridade and chamado.prioridade != prioridade:
            continue
        if filtro.tipo_servico and chamado.tipo_servico != filtro.tipo_servico:
            continue
        if periodo != "todos" and not _no_periodo(chamado.data_referencia, periodo, hoje):
            continue
        if busca:
            alvo = " ".join(
                v or "" for v in (chamado.titulo, chamado.usuario, chamado.solicitante)
            ).lower()
            if busca not in alvo:
                continue
        resultado.append(chamado)
    return resultado


def _no_periodo(data: Optional[date], periodo: str, hoje: date) -> bool:
    if data is None:
        return False
    if periodo == "hoje":
        return data == hoje
    if periodo == "semana":
        return (hoje - data).days <= 7
    return data.year == hoje.year and data.month == hoje.month


class ListarChamadosService:
    """
    Use Case: Listar chamados.

    Ordem: VIP primeiro, depois a ordem do backend (mais recentes).
    Sem UoW - apenas leitura.
    """

    def __init__(self, chamado_repo: ChamadoRepository, relogio: Relogio = agora):
        self.chamado_repo = chamado_repo
        self.relogio = relogio

    def execute(self, filtro: Optional[FiltroChamadosDTO] = None) -> List[ChamadoOutputDTO]:
        chamados = self.chamado_repo.list_all()
        if filtro:
            chamados = filtrar_chamados(chamados, filtro, self.relogio().date())
        return [
            ChamadoOutputDTO.from_entity(c)
            for c in ChamadoEntity.ordenar_para_exibicao(chamados)
        ]


class ObterChamadoService:
    """Use Case: Obter chamado por ID."""

    def __init__(self, chamado_repo: ChamadoRepository):
        self.chamado_repo = chamado_repo

    def execute(self, chamado_id: str) -> ChamadoOutputDTO:
        return ChamadoOutputDTO.from_entity(_obter_ou_falhar(self.chamado_repo, chamado_id))


class ExcluirChamadoService:
    """Use Case: Excluir chamado."""

    def __init__(self, chamado_repo: ChamadoRepository, uow: UnitOfWork):
        self.chamado_repo = chamado_repo
        self.uow = uow

    def execute(self, chamado_id: str) -> None:
        with self.uow:
            self.chamado_repo.delete(chamado_id)
        logger.info(f"Chamado excluído: {chamado_id}")


def formatar_tempo_minimo(minutos: Optional[int]) -> str:
    """
    Formato curto da análise de serviços.

    Example:
        formatar_tempo_minimo(65)  # "1h 5m"
        formatar_tempo_minimo(12)  # "12m"
        formatar_tempo_minimo(0)   # "-"
    """
    if not minutos:
        return "-"
    horas, resto = divmod(minutos, 60)
    return f"{horas}h {resto}m" if horas > 0 else f"{resto}m"


def _duracao_do_chamado(chamado: ChamadoEntity) -> Optional[int]:
    if chamado.duration_minutes is not None:
        return chamado.duration_minutes
    return calcular_duracao_minutos(chamado.started_at, chamado.completed_at)


class AnalisarChamadosService:
    """
    Use Case: Métricas da análise de serviços.

    Calcula contagens por status/prioridade/tipo, concluídos hoje e
    o menor tempo de atendimento (geral e por tipo de serviço).
    """

    def __init__(self, chamado_repo: ChamadoRepository, relogio: Relogio = agora):
        self.chamado_repo = chamado_repo
        self.relogio = relogio

    def execute(self, filtro: Optional[FiltroChamadosDTO] = None) -> EstatisticasChamadosDTO:
        hoje = self.relogio().date()
        chamados = self.chamado_repo.list_all()
        if filtro:
            chamados = filtrar_chamados(chamados, filtro, hoje)

        estatisticas = EstatisticasChamadosDTO(total=len(chamados))
        menores: Dict[str, int] = {}

        for chamado in chamados:
            if chamado.status == ChamadoStatus.ABERTO:
                estatisticas.em_aberto += 1
            elif chamado.status == ChamadoStatus.EM_ANDAMENTO:
                estatisticas.em_andamento += 1
            else:
                estatisticas.concluidos += 1
                if chamado.data_referencia == hoje:
                    estatisticas.feitos_hoje += 1
                duracao = _duracao_do_chamado(chamado)
                if duracao is not None:
                    tipo = chamado.tipo_servico or "-"
                    menores[tipo] = min(duracao, menores.get(tipo, duracao))

            prioridade = chamado.prioridade.value
            estatisticas.por_prioridade[prioridade] = (
                estatisticas.por_prioridade.get(prioridade, 0) + 1
            )
            tipo = chamado.tipo_servico or "-"
            estatisticas.por_tipo_servico[tipo] = estatisticas.por_tipo_servico.get(tipo, 0) + 1

        if menores:
            estatisticas.tempo_minimo = formatar_tempo_minimo(min(menores.values()))
        estatisticas.tempo_minimo_por_servico = {
            tipo: formatar_tempo_minimo(minutos) for tipo, minutos in sorted(menores.items())
        }
        return estatisticas
