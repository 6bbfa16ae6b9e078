"""
Utilitários de data/hora do domínio.

Registros legados trafegam timestamps como texto ISO 8601 (com ou
sem "Z") ou como datas simples (YYYY-MM-DD). Estas funções
normalizam esses valores sem nunca lançar exceção: valores
malformados viram None.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional


def agora() -> datetime:
    """Instante atual em UTC."""
    return datetime.now(timezone.utc)


def parse_instante(valor: Any) -> Optional[datetime]:
    """
    Converte valor em datetime com timezone.

    Aceita datetime, date ou string ISO 8601. Valores sem timezone
    são considerados UTC.

    Returns:
        datetime aware ou None se vazio/inválido
    """
    if valor is None or valor == "":
        return None

    if isinstance(valor, datetime):
        instante = valor
    elif isinstance(valor, date):
        instante = datetime(valor.year, valor.month, valor.day)
    elif isinstance(valor, str):
        texto = valor.strip()
        if texto[-1:] in ("Z", "z"):
            texto = texto[:-1] + "+00:00"
        try:
            instante = datetime.fromisoformat(texto)
        except ValueError:
            return None
    else:
        return None

    if instante.tzinfo is None:
        instante = instante.replace(tzinfo=timezone.utc)
    return instante


def parse_data(valor: Any) -> Optional[date]:
    """Extrai a data (dia) de um valor; None se inválido."""
    if isinstance(valor, date) and not isinstance(valor, datetime):
        return valor
    instante = parse_instante(valor)
    return instante.date() if instante else None


def para_iso(valor: Any) -> Any:
    """datetime/date viram texto ISO; demais valores passam intactos."""
    if isinstance(valor, (datetime, date)):
        return valor.isoformat()
    return valor


def tem_valor(valor: Any) -> bool:
    """True se o campo está preenchido (nem None nem texto vazio)."""
    if valor is None:
        return False
    if isinstance(valor, str):
        return valor.strip() != ""
    return True
