"""
Event Handlers - Processadores de Eventos de Domínio.

Cada evento tem uma função de tratamento pura (`tratar_*`), usada
diretamente no modo síncrono, e uma task Celery (`handle_*`) que a
envolve no modo assíncrono.

Tipos de Handlers:
- Notificação: equipe de suporte, alerta de estoque baixo
- Agregação: métricas de atendimento e inventário

Padrão:
    @shared_task(bind=True, ...)
    def handle_<evento>(self, event_data: dict) -> None:
        tratar_<evento>(event_data)
"""

from typing import Any, Dict, Optional
import logging

from celery import shared_task
from django.conf import settings

from src.core.shared.datas import agora

logger = logging.getLogger(__name__)


# =============================================================================
# Notificações e métricas
# =============================================================================

def notificar_equipe_suporte(mensagem: str, prioridade: str = "normal", **contexto) -> None:
    logger.info(f"[NOTIFICATION] Equipe de suporte [{prioridade}]: {mensagem} | {contexto}")


def registrar_metrica(nome: str, valor: float, tags: Optional[Dict[str, Any]] = None) -> None:
    logger.info(f"[METRIC] {nome}={valor} | tags={tags or {}}")


def estoque_minimo() -> int:
    return int(getattr(settings, "ESTOQUE_MINIMO_ALERTA", 5))


# =============================================================================
# Tratamento de eventos
# =============================================================================

def tratar_chamado_criado(event_data: Dict[str, Any]) -> None:
    """Notifica a equipe para chamados de prioridade alta ou de usuário VIP."""
    chamado_id = event_data.get("aggregate_id")
    prioridade = event_data.get("prioridade", "media")
    is_vip = bool(event_data.get("is_vip"))

    logger.info(
        f"[HANDLER] ChamadoCriado: {chamado_id} | "
        f"Título: {event_data.get('titulo')} | Prioridade: {prioridade}"
    )

    if prioridade == "alta" or is_vip:
        notificar_equipe_suporte(
            f"Novo chamado {'VIP ' if is_vip else ''}{prioridade}: {event_data.get('titulo')}",
            prioridade="high",
            chamado_id=chamado_id,
        )

    registrar_metrica(
        "chamados_criados",
        1,
        {"prioridade": prioridade, "tipo_servico": event_data.get("tipo_servico")},
    )


def tratar_status_alterado(event_data: Dict[str, Any]) -> None:
    logger.info(
        f"[HANDLER] ChamadoStatusAlterado: {event_data.get('aggregate_id')} | "
        f"{event_data.get('status_anterior')} -> {event_data.get('novo_status')}"
    )
    registrar_metrica(
        "chamados_transicoes", 1, {"para": event_data.get("novo_status")}
    )


def tratar_chamado_concluido(event_data: Dict[str, Any]) -> None:
    """Registra o tempo de serviço do chamado concluído."""
    duracao = event_data.get("duration_minutes")
    logger.info(
        f"[HANDLER] ChamadoConcluido: {event_data.get('aggregate_id')} | "
        f"Tempo: {event_data.get('duration_text') or '-'}"
    )

    registrar_metrica("chamados_concluidos", 1, {"tipo_servico": event_data.get("tipo_servico")})
    if duracao is not None:
        registrar_metrica(
            "tempo_servico_minutos",
            duracao,
            {"tipo_servico": event_data.get("tipo_servico")},
        )


def tratar_equipamento_cadastrado(event_data: Dict[str, Any]) -> None:
    logger.info(
        f"[HANDLER] EquipamentoCadastrado: {event_data.get('patrimonio')} | "
        f"{event_data.get('nome')} ({event_data.get('tipo')})"
    )
    registrar_metrica("equipamentos_cadastrados", 1, {"tipo": event_data.get("tipo")})


def tratar_saida_registrada(event_data: Dict[str, Any]) -> bool:
    """
    Alerta estoque baixo após uma saída.

    Returns:
        True se o alerta foi disparado
    """
    restante = event_data.get("estoque_restante")
    produto = event_data.get("produto_nome") or event_data.get("produto_id")

    logger.info(
        f"[HANDLER] SaidaProdutoRegistrada: {event_data.get('quantidade')}x {produto} | "
        f"Restante: {restante}"
    )
    registrar_metrica("saidas_registradas", event_data.get("quantidade") or 0, {"produto": produto})

    if restante is not None and restante <= estoque_minimo():
        notificar_equipe_suporte(
            f"Estoque baixo: {produto} ({restante} restantes)",
            prioridade="normal",
            produto_id=event_data.get("produto_id"),
        )
        return True
    return False


TRATADORES = {
    "ChamadoCriadoEvent": tratar_chamado_criado,
    "ChamadoStatusAlteradoEvent": tratar_status_alterado,
    "ChamadoConcluidoEvent": tratar_chamado_concluido,
    "EquipamentoCadastradoEvent": tratar_equipamento_cadastrado,
    "SaidaProdutoRegistradaEvent": tratar_saida_registrada,
}


def processar_evento(event_type: str, event_data: Dict[str, Any]) -> None:
    """Executa o tratamento do evento no processo atual (modo sync)."""
    tratador = TRATADORES.get(event_type)
    if tratador is None:
        logger.warning(f"[DISPATCHER] Handler não encontrado para {event_type}")
        return
    tratador(event_data)


# =============================================================================
# Celery Tasks
# =============================================================================

@shared_task(bind=True, max_retries=3, default_retry_delay=60, acks_late=True)
def handle_chamado_criado(self, event_data: Dict[str, Any]) -> None:
    try:
        tratar_chamado_criado(event_data)
    except Exception as e:
        logger.error(f"Erro no handler ChamadoCriado: {e}", exc_info=True)
        raise


@shared_task(bind=True, max_retries=3, default_retry_delay=60, acks_late=True)
def handle_status_alterado(self, event_data: Dict[str, Any]) -> None:
    try:
        tratar_status_alterado(event_data)
    except Exception as e:
        logger.error(f"Erro no handler ChamadoStatusAlterado: {e}", exc_info=True)
        raise


@shared_task(bind=True, max_retries=3, default_retry_delay=60, acks_late=True)
def handle_chamado_concluido(self, event_data: Dict[str, Any]) -> None:
    try:
        tratar_chamado_concluido(event_data)
    except Exception as e:
        logger.error(f"Erro no handler ChamadoConcluido: {e}", exc_info=True)
        raise


@shared_task(bind=True, max_retries=3, default_retry_delay=60, acks_late=True)
def handle_equipamento_cadastrado(self, event_data: Dict[str, Any]) -> None:
    try:
        tratar_equipamento_cadastrado(event_data)
    except Exception as e:
        logger.error(f"Erro no handler EquipamentoCadastrado: {e}", exc_info=True)
        raise


@shared_task(bind=True, max_retries=3, default_retry_delay=60, acks_late=True)
def handle_saida_registrada(self, event_data: Dict[str, Any]) -> None:
    try:
        tratar_saida_registrada(event_data)
    except Exception as e:
        logger.error(f"Erro no handler SaidaProdutoRegistrada: {e}", exc_info=True)
        raise


TASKS = {
    "ChamadoCriadoEvent": handle_chamado_criado,
    "ChamadoStatusAlteradoEvent": handle_status_alterado,
    "ChamadoConcluidoEvent": handle_chamado_concluido,
    "EquipamentoCadastradoEvent": handle_equipamento_cadastrado,
    "SaidaProdutoRegistradaEvent": handle_saida_registrada,
}


@shared_task(bind=True, max_retries=5, default_retry_delay=30)
def dispatch_domain_event(self, event_type: str, event_data: Dict[str, Any]) -> None:
    """
    Dispatcher central para Domain Events.

    Roteia eventos para as tasks apropriadas.

    Args:
        event_type: Tipo do evento (ex: 'ChamadoCriadoEvent')
        event_data: Dados do evento serializado
    """
    task = TASKS.get(event_type)
    if task:
        logger.info(f"[DISPATCHER] Roteando {event_type} para handler")
        task.delay(event_data)
    else:
        logger.warning(f"[DISPATCHER] Handler não encontrado para {event_type}")


# =============================================================================
# Scheduled Tasks (Beat)
# =============================================================================

@shared_task(bind=True)
def generate_daily_report(self) -> Dict[str, Any]:
    """
    Gera o relatório diário a partir do dashboard.

    Returns:
        Dados do relatório (sem a lista de chamados recentes)
    """
    logger.info("[SCHEDULED] Gerando relatório diário...")

    from src.config.container import get_container

    try:
        dashboard = get_container().dashboard_service().execute().to_dict()
    except Exception as e:
        logger.error(f"Erro ao gerar relatório: {e}", exc_info=True)
        raise

    dashboard.pop("chamados_recentes", None)
    report = {"data": agora().isoformat(), **dashboard}
    logger.info(f"[SCHEDULED] Relatório gerado: {report}")
    return report


@shared_task(bind=True)
def check_low_stock(self) -> int:
    """
    Varre produtos com estoque no limite mínimo e alerta a equipe.

    Returns:
        Número de produtos em alerta
    """
    logger.info("[SCHEDULED] Verificando estoque baixo...")

    from src.config.container import get_container

    limite = estoque_minimo()
    produtos = get_container().listar_produtos_service().execute()
    em_alerta = [p for p in produtos if p.estoque <= limite]

    for produto in em_alerta:
        notificar_equipe_suporte(
            f"Estoque baixo: {produto.nome} ({produto.estoque} restantes)",
            produto_id=produto.id,
        )

    registrar_metrica("produtos_estoque_baixo", len(em_alerta))
    logger.info(f"[SCHEDULED] {len(em_alerta)} produtos com estoque baixo")
    return len(em_alerta)
