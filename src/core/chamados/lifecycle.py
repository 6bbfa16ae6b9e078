"""
Ciclo de vida do chamado: captura de timestamps e tempo de serviço.

Ao mudar o status de um chamado, o patch enviado ao backend é
complementado com `started_at`, `completed_at` e a duração
(`duration_minutes` + `duration_text`).

Regras:
- EM_ANDAMENTO: started_at = override, senão existente, senão agora
- CONCLUIDO:
    completed_at = override, senão existente, senão agora
    started_at = override, senão existente, senão criação/data, senão agora
    duração calculada só se nenhum campo de duração estiver preenchido
    (no snapshot ou no override); primeira conclusão vence
- Demais status: apenas o status muda

Timestamps malformados resultam em "sem duração", nunca em erro.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Mapping, Optional

from src.core.shared.datas import para_iso, parse_instante, tem_valor

from .entities import CAMPOS_DURACAO, ChamadoStatus

MINUTOS_POR_HORA = 60
MINUTOS_POR_DIA = 24 * MINUTOS_POR_HORA


def formatar_duracao(minutos: int) -> str:
    """
    Formata minutos como texto de tempo de serviço.

    Example:
        formatar_duracao(42)    # "42 min"
        formatar_duracao(102)   # "1h 42min"
        formatar_duracao(1500)  # "1 dias 1h 0min"
    """
    if minutos < MINUTOS_POR_HORA:
        return f"{minutos} min"

    horas, resto = divmod(minutos, MINUTOS_POR_HORA)
    if minutos < MINUTOS_POR_DIA:
        return f"{horas}h {resto}min"

    dias, horas = divmod(horas, 24)
    return f"{dias} dias {horas}h {resto}min"


def calcular_duracao_minutos(inicio: Any, fim: Any) -> Optional[int]:
    """
    Minutos inteiros entre início e fim (piso), nunca negativo.

    Returns:
        Minutos ou None se algum timestamp não puder ser interpretado
    """
    inicio_dt = parse_instante(inicio)
    fim_dt = parse_instante(fim)
    if inicio_dt is None or fim_dt is None:
        return None
    return max(0, (fim_dt - inicio_dt) // timedelta(minutes=1))


def _primeiro_preenchido(*valores: Any) -> Any:
    for valor in valores:
        if tem_valor(valor):
            return para_iso(valor)
    return None


def aplicar_transicao(
    snapshot: Mapping[str, Any],
    patch: Mapping[str, Any],
    agora: datetime,
) -> Dict[str, Any]:
    """
    Mescla o patch com os campos derivados da transição de status.

    Args:
        snapshot: Registro atual do chamado
        patch: Campos a gravar; deve conter `status`
        agora: Instante considerado "agora"

    Returns:
        Patch final (patch original + campos derivados)
    """
    resultado = dict(patch)
    status = ChamadoStatus.from_string(patch["status"])
    resultado["status"] = status.value
    agora_iso = agora.isoformat()

    if status == ChamadoStatus.EM_ANDAMENTO:
        resultado["started_at"] = _primeiro_preenchido(
            patch.get("started_at"),
            snapshot.get("started_at"),
            agora_iso,
        )

    elif status == ChamadoStatus.CONCLUIDO:
        completed_at = _primeiro_preenchido(
            patch.get("completed_at"),
            snapshot.get("completed_at"),
            agora_iso,
        )
        started_at = _primeiro_preenchido(
            patch.get("started_at"),
            snapshot.get("started_at"),
            snapshot.get("created_at"),
            snapshot.get("data"),
            agora_iso,
        )
        resultado["completed_at"] = completed_at
        resultado["started_at"] = started_at

        ja_possui_duracao = any(
            tem_valor(snapshot.get(campo)) or tem_valor(patch.get(campo))
            for campo in CAMPOS_DURACAO
        )
        if not ja_possui_duracao:
            minutos = calcular_duracao_minutos(started_at, completed_at)
            if minutos is not None:
                resultado["duration_minutes"] = minutos
                resultado["duration_text"] = formatar_duracao(minutos)

    return resultado
