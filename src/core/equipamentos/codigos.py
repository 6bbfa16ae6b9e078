"""
Códigos de patrimônio derivados para exibição.

Cada equipamento recebe um código legível (PC003, TAB-012, JV-004)
calculado a partir do conjunto atual de registros. O código é um
valor derivado: nunca reescreve o campo `patrimonio` gravado, exceto
quando o usuário aceita a sugestão no cadastro.

Classificação (primeira regra que casar):
    JV   nome "jovem aprendiz NN", independente do tipo
    PC   Desktop ou Notebook
    TAB  Tablet
    CEL  Smartphone
    IMP  Impressora
    MON  Monitor
    -    demais (sem numeração)

Numeração por grupo:
    - patrimônio que casa com o próprio prefixo mantém o número
    - demais recebem max(números do grupo) + 1, + 2, ... em ordem de nome
"""

from typing import Dict, Iterable, List, NamedTuple, Optional, Protocol, Sequence
import re

from src.core.shared.exceptions import ValidationError

PADRAO_JOVEM_APRENDIZ = re.compile(r"^\s*jovem\s+aprendiz\s+\d{1,2}\s*$", re.IGNORECASE)
PADRAO_CODIGO = re.compile(r"^(JV|PC|TAB|CEL|IMP|MON)-?(\d{3})$", re.IGNORECASE)

PREFIXOS = ("JV", "PC", "TAB", "CEL", "IMP", "MON")
SEM_PREFIXO = "-"

ORDEM_PREFIXO = {prefixo: ordem for ordem, prefixo in enumerate(PREFIXOS)}
ORDEM_PREFIXO[SEM_PREFIXO] = len(PREFIXOS)

PREFIXO_POR_TIPO = {
    "Desktop": "PC",
    "Notebook": "PC",
    "Tablet": "TAB",
    "Smartphone": "CEL",
    "Impressora": "IMP",
    "Monitor": "MON",
}

NUMERO_SEM_CODIGO = 9999

MENSAGEM_PATRIMONIO_DUPLICADO = (
    "Já existe um equipamento cadastrado com este número de patrimônio."
)


class Inventariavel(Protocol):
    id: str
    nome: str
    tipo: str
    patrimonio: str


class CodigoPatrimonio(NamedTuple):
    prefixo: str
    numero: int

    def __str__(self) -> str:
        return formatar_codigo(self.prefixo, self.numero)


def eh_jovem_aprendiz(nome: Optional[str]) -> bool:
    return bool(PADRAO_JOVEM_APRENDIZ.match(nome or ""))


def classificar(nome: Optional[str], tipo: Optional[str]) -> str:
    """Prefixo do grupo do equipamento (ou "-")."""
    if eh_jovem_aprendiz(nome):
        return "JV"
    return PREFIXO_POR_TIPO.get((tipo or "").strip(), SEM_PREFIXO)


def parse_codigo(patrimonio: Optional[str]) -> Optional[CodigoPatrimonio]:
    """
    Interpreta um patrimônio no padrão PREFIXO[-]NNN.

    Example:
        parse_codigo("pc-007")   # CodigoPatrimonio("PC", 7)
        parse_codigo("12345")    # None
    """
    match = PADRAO_CODIGO.match((patrimonio or "").strip())
    if not match:
        return None
    return CodigoPatrimonio(match.group(1).upper(), int(match.group(2)))


def formatar_codigo(prefixo: str, numero: int) -> str:
    """PC sem separador (PC003); demais com hífen (TAB-012)."""
    if prefixo == "PC":
        return f"PC{numero:03d}"
    return f"{prefixo}-{numero:03d}"


def _chave_nome(equipamento: Inventariavel) -> str:
    return (equipamento.nome or "").casefold()


def agrupar(equipamentos: Iterable[Inventariavel]) -> Dict[str, List[Inventariavel]]:
    grupos: Dict[str, List[Inventariavel]] = {prefixo: [] for prefixo in PREFIXOS}
    for equipamento in equipamentos:
        prefixo = classificar(equipamento.nome, equipamento.tipo)
        if prefixo != SEM_PREFIXO:
            grupos[prefixo].append(equipamento)
    return grupos


def atribuir_codigos(equipamentos: Iterable[Inventariavel]) -> Dict[str, str]:
    """
    Calcula o mapeamento id -> código de exibição.

    Determinístico e idempotente para o mesmo conjunto de entrada.
    Dois registros com o mesmo patrimônio no grupo não geram código
    repetido: o primeiro em ordem de nome mantém o número, os demais
    são renumerados.
    """
    codigos: Dict[str, str] = {}

    for prefixo, itens in agrupar(equipamentos).items():
        existentes = [parse_codigo(e.patrimonio) for e in itens]
        proximo = max((c.numero for c in existentes if c), default=0) + 1
        usados = set()

        for equipamento in sorted(itens, key=_chave_nome):
            codigo = parse_codigo(equipamento.patrimonio)
            if codigo and codigo.prefixo == prefixo and codigo.numero not in usados:
                numero = codigo.numero
            else:
                numero = proximo
                proximo += 1
            usados.add(numero)
            codigos[equipamento.id] = formatar_codigo(prefixo, numero)

    return codigos


def chave_ordenacao(equipamento: Inventariavel, codigos: Dict[str, str]):
    """
    Chave de exibição: grupo, número, nome.

    O número é o do patrimônio gravado quando interpretável,
    senão o do código atribuído, senão 9999.
    """
    prefixo = classificar(equipamento.nome, equipamento.tipo)
    codigo = parse_codigo(equipamento.patrimonio) or parse_codigo(codigos.get(equipamento.id))
    numero = codigo.numero if codigo else NUMERO_SEM_CODIGO
    return ORDEM_PREFIXO[prefixo], numero, _chave_nome(equipamento)


def ordenar_por_codigo(
    equipamentos: Sequence[Inventariavel],
    codigos: Optional[Dict[str, str]] = None,
) -> List[Inventariavel]:
    if codigos is None:
        codigos = atribuir_codigos(equipamentos)
    return sorted(equipamentos, key=lambda e: chave_ordenacao(e, codigos))


def sugerir_codigo(
    equipamentos: Sequence[Inventariavel],
    tipo: str,
    nome: str = "",
) -> Optional[str]:
    """
    Próximo código livre para um novo equipamento.

    Considera os códigos exibidos do grupo e qualquer patrimônio
    gravado com o mesmo prefixo, para que a sugestão aceita passe
    na verificação de unicidade.

    Returns:
        Código sugerido ou None se o tipo não é numerado
    """
    prefixo = classificar(nome, tipo)
    if prefixo == SEM_PREFIXO:
        return None

    codigos = atribuir_codigos(equipamentos)
    numeros = [
        parse_codigo(codigos[e.id]).numero for e in agrupar(equipamentos)[prefixo]
    ]
    for equipamento in equipamentos:
        codigo = parse_codigo(equipamento.patrimonio)
        if codigo and codigo.prefixo == prefixo:
            numeros.append(codigo.numero)

    return formatar_codigo(prefixo, max(numeros, default=0) + 1)


def verificar_patrimonio_disponivel(
    patrimonio: str,
    equipamentos: Iterable[Inventariavel],
    ignorar_id: Optional[str] = None,
) -> None:
    """
    Garante unicidade do patrimônio antes de qualquer escrita.

    Rejeita igualdade sem diferenciar maiúsculas e colisão do par
    (prefixo, número) interpretado (PC003 x pc-003).

    Raises:
        ValidationError: Se o patrimônio já estiver em uso
    """
    alvo = (patrimonio or "").strip()
    codigo = parse_codigo(alvo)

    for equipamento in equipamentos:
        if equipamento.id == ignorar_id:
            continue
        existente = (equipamento.patrimonio or "").strip()
        if not existente:
            continue
        if existente.casefold() == alvo.casefold() or (
            codigo is not None and parse_codigo(existente) == codigo
        ):
            raise ValidationError(MENSAGEM_PATRIMONIO_DUPLICADO, field="patrimonio")
