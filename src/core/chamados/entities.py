"""
Entidades do Domínio de Chamados.

Entidades:
- ChamadoEntity: Chamado de suporte (tabela `chamados`)
- ChamadoStatus: Estados possíveis de um chamado
- ChamadoPrioridade: Níveis de prioridade

Regras de Negócio Encapsuladas:
- Validação de dados na criação e em patches parciais
- Normalização de status/prioridade (aceita nome, valor ou alias)
- Ordenação de exibição com chamados VIP primeiro
"""

from dataclasses import dataclass, field, fields
from datetime import date
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional
import uuid

from src.core.shared.datas import agora, para_iso, parse_data, parse_instante, tem_valor
from src.core.shared.exceptions import ValidationError


class ChamadoStatus(Enum):
    """
    Estados possíveis de um chamado.

    Fluxo:
        ABERTO → EM_ANDAMENTO → CONCLUIDO
    """

    ABERTO = "Aberto"
    EM_ANDAMENTO = "Em Andamento"
    CONCLUIDO = "Concluído"

    @classmethod
    def from_string(cls, value: str) -> "ChamadoStatus":
        """
        Converte string para enum.

        Aceita o nome (EM_ANDAMENTO), o valor ("Em Andamento") ou
        os aliases open/in_progress/done.

        Raises:
            ValueError: Se valor inválido
        """
        texto = str(value or "").strip()
        try:
            return cls[texto.upper().replace(" ", "_")]
        except KeyError:
            pass

        for status in cls:
            if status.value.lower() == texto.lower():
                return status

        aliases = {
            "open": cls.ABERTO,
            "in_progress": cls.EM_ANDAMENTO,
            "done": cls.CONCLUIDO,
            "concluido": cls.CONCLUIDO,
        }
        if texto.lower() in aliases:
            return aliases[texto.lower()]

        raise ValueError(f"Status inválido: {value}")


class ChamadoPrioridade(Enum):
    """Níveis de prioridade (valores gravados em minúsculas)."""

    BAIXA = "baixa"
    MEDIA = "media"
    ALTA = "alta"

    @classmethod
    def from_string(cls, value: str) -> "ChamadoPrioridade":
        """
        Converte string para enum.

        Aceita "alta", "ALTA", "Média" e os aliases low/medium/high.

        Raises:
            ValueError: Se valor inválido
        """
        texto = str(value or "").strip().lower().replace("é", "e")
        aliases = {"low": "baixa", "medium": "media", "high": "alta"}
        texto = aliases.get(texto, texto)
        for prioridade in cls:
            if prioridade.value == texto:
                return prioridade
        raise ValueError(f"Prioridade inválida: {value}")


CAMPOS_DURACAO = ("duration_minutes", "duration_text", "tempo_servico")


@dataclass
class ChamadoEntity:
    """
    Entidade de Domínio: Chamado.

    Timestamps são mantidos como texto ISO 8601, exatamente como
    chegam do backend, para que valores legados malformados sejam
    preservados (o cálculo de duração os ignora sem erro).

    Invariantes:
    - Título, descrição, usuário e tipo de serviço são obrigatórios
    - Duração é gravada uma única vez (primeira conclusão vence)
    - started_at nunca fica nulo após EM_ANDAMENTO/CONCLUIDO

    Attributes:
        id: Identificador único (UUID)
        titulo: Título do chamado
        descricao: Descrição do problema
        prioridade: Nível de prioridade
        status: Estado atual
        usuario: Usuário atendido
        solicitante: Quem abriu o chamado
        setor: Setor do usuário
        tipo_servico: Categoria do serviço prestado
        is_vip: Chamado de usuário VIP (exibido primeiro)
        data: Data de referência (YYYY-MM-DD)
        created_at: Criação do registro
        started_at: Início do atendimento
        completed_at: Conclusão do atendimento
        duration_minutes: Duração em minutos
        duration_text: Duração formatada ("1h 42min")
        tempo_servico: Campo legado de duração
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    titulo: str = ""
    descricao: str = ""
    prioridade: ChamadoPrioridade = ChamadoPrioridade.MEDIA
    status: ChamadoStatus = ChamadoStatus.ABERTO
    usuario: str = ""
    solicitante: Optional[str] = None
    setor: Optional[str] = None
    tipo_servico: str = ""
    is_vip: bool = False
    data: Optional[str] = None
    created_at: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    duration_minutes: Optional[int] = None
    duration_text: Optional[str] = None
    tempo_servico: Optional[str] = None

    CAMPOS_OBRIGATORIOS = ("titulo", "descricao", "usuario", "tipo_servico")
    CAMPOS_EDITAVEIS = (
        "titulo",
        "descricao",
        "prioridade",
        "status",
        "usuario",
        "solicitante",
        "setor",
        "tipo_servico",
        "is_vip",
        "data",
        "started_at",
        "completed_at",
        "duration_minutes",
        "duration_text",
        "tempo_servico",
    )
    CAMPOS_INSTANTE = ("started_at", "completed_at")

    @classmethod
    def criar(
        cls,
        titulo: str,
        descricao: str,
        usuario: str,
        tipo_servico: str,
        prioridade: ChamadoPrioridade = ChamadoPrioridade.MEDIA,
        solicitante: Optional[str] = None,
        setor: Optional[str] = None,
        is_vip: bool = False,
        data: Optional[date] = None,
    ) -> "ChamadoEntity":
        """
        Factory method para abrir chamado com validações.

        Raises:
            ValidationError: Se campo obrigatório ausente
        """
        valores = {
            "titulo": titulo,
            "descricao": descricao,
            "usuario": usuario,
            "tipo_servico": tipo_servico,
        }
        for campo in cls.CAMPOS_OBRIGATORIOS:
            if not str(valores[campo] or "").strip():
                raise ValidationError(f"Campo obrigatório: {campo}", field=campo)

        instante = agora()
        return cls(
            titulo=titulo.strip(),
            descricao=descricao.strip(),
            usuario=usuario.strip(),
            tipo_servico=tipo_servico.strip(),
            prioridade=prioridade,
            solicitante=(solicitante or "").strip() or None,
            setor=(setor or "").strip().upper() or None,
            is_vip=bool(is_vip),
            data=(data or instante.date()).isoformat(),
            created_at=instante.isoformat(),
        )

    @classmethod
    def normalizar_campos(cls, campos: Dict[str, Any]) -> Dict[str, Any]:
        """
        Valida e normaliza um patch parcial.

        Raises:
            ValidationError: Campo desconhecido, obrigatório vazio,
                status, prioridade ou timestamp inválidos
        """
        normalizados: Dict[str, Any] = {}
        for campo, valor in campos.items():
            if campo not in cls.CAMPOS_EDITAVEIS:
                raise ValidationError(f"Campo desconhecido: {campo}", field=campo)
            if campo in cls.CAMPOS_OBRIGATORIOS and not str(valor or "").strip():
                raise ValidationError(f"Campo obrigatório: {campo}", field=campo)

            if campo == "status":
                try:
                    valor = ChamadoStatus.from_string(valor).value
                except ValueError as e:
                    raise ValidationError(str(e), field="status")
            elif campo == "prioridade":
                try:
                    valor = ChamadoPrioridade.from_string(valor).value
                except ValueError as e:
                    raise ValidationError(str(e), field="prioridade")
            elif campo in cls.CAMPOS_INSTANTE and tem_valor(valor):
                if parse_instante(valor) is None:
                    raise ValidationError(f"Data/hora inválida: {valor}", field=campo)
            elif campo == "setor" and valor:
                valor = str(valor).strip().upper()
            elif campo == "is_vip":
                valor = bool(valor)

            normalizados[campo] = para_iso(valor)
        return normalizados

    @classmethod
    def from_record(cls, registro: Dict[str, Any]) -> "ChamadoEntity":
        """Constrói entidade a partir de registro do backend."""
        nomes = {f.name for f in fields(cls)}
        valores = {k: para_iso(v) for k, v in registro.items() if k in nomes}

        try:
            valores["status"] = ChamadoStatus.from_string(registro.get("status"))
        except ValueError:
            valores["status"] = ChamadoStatus.ABERTO
        try:
            valores["prioridade"] = ChamadoPrioridade.from_string(registro.get("prioridade"))
        except ValueError:
            valores["prioridade"] = ChamadoPrioridade.MEDIA

        valores["is_vip"] = bool(registro.get("is_vip"))
        if valores.get("duration_minutes") is not None:
            valores["duration_minutes"] = int(valores["duration_minutes"])
        return cls(**valores)

    def to_record(self, omitir_vazios: bool = False) -> Dict[str, Any]:
        """
        Serializa para o formato de registro do backend.

        Args:
            omitir_vazios: Remove campos None (inserts em schemas legados)
        """
        registro = {f.name: getattr(self, f.name) for f in fields(self)}
        registro["status"] = self.status.value
        registro["prioridade"] = self.prioridade.value
        if omitir_vazios:
            registro = {k: v for k, v in registro.items() if v is not None}
        return registro

    @property
    def esta_concluido(self) -> bool:
        return self.status == ChamadoStatus.CONCLUIDO

    @property
    def data_referencia(self) -> Optional[date]:
        """Data usada em filtros de período: `data`, senão `created_at`."""
        return parse_data(self.data) or parse_data(self.created_at)

    @staticmethod
    def ordenar_para_exibicao(chamados: Iterable["ChamadoEntity"]) -> List["ChamadoEntity"]:
        """
        VIP primeiro, mantendo a ordem recebida (mais recentes primeiro).

        Chave estática de ordenação; não é um escalonador.
        """
        return sorted(chamados, key=lambda c: 0 if c.is_vip else 1)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChamadoEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
