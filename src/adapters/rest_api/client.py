"""
Cliente HTTP da API REST legada (backend de fallback).

Usa urllib da biblioteca padrão: uma requisição por operação, corpo
JSON, timeout configurável (API_TIMEOUT).

Tradução de erros:
    404                                   -> EntityNotFoundError
    409 ou código 23505 no corpo          -> DuplicateRecordError
    400 com PGRST204 / 42703 / "column"   -> SchemaMismatchError
    falha de rede (URLError, timeout)     -> RepositoryError
    demais status de erro                 -> RepositoryError
"""

import json
import logging
import re
import socket
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, List, Optional

from django.core.serializers.json import DjangoJSONEncoder

from src.core.shared.exceptions import (
    DuplicateRecordError,
    EntityNotFoundError,
    RepositoryError,
    SchemaMismatchError,
)

logger = logging.getLogger(__name__)

MENSAGEM_FALHA_CONEXAO = "Falha de conexão com o servidor."

MARCADORES_SCHEMA = ("PGRST204", "42703")
PADRAO_COLUNA_POSTGRES = re.compile(r"column\s+\"?([\w.]+)\"?\s+(?:of|does)", re.IGNORECASE)
PADRAO_COLUNA_POSTGREST = re.compile(r"['\"](\w+)['\"]\s+column", re.IGNORECASE)


def colunas_rejeitadas(corpo: str) -> List[str]:
    """
    Colunas citadas na mensagem de erro do backend.

    Example:
        colunas_rejeitadas("Could not find the 'started_at' column of 'chamados'")
        # ["started_at"]
        colunas_rejeitadas('column chamados.duration_text does not exist')
        # ["duration_text"]
    """
    colunas = PADRAO_COLUNA_POSTGREST.findall(corpo or "")
    colunas += PADRAO_COLUNA_POSTGRES.findall(corpo or "")
    return list(dict.fromkeys(c.split(".")[-1] for c in colunas))


def traduzir_erro_http(status: int, corpo: str, path: str) -> RepositoryError:
    """
    Converte uma resposta de erro em exceção de domínio.

    Returns:
        Exceção pronta para ser lançada (nunca lança)
    """
    if status == 404:
        return EntityNotFoundError(f"Registro não encontrado: {path}")

    if status == 409 or "23505" in corpo:
        return DuplicateRecordError(detail=corpo)

    if status == 400 and (
        any(m in corpo for m in MARCADORES_SCHEMA) or "column" in corpo.lower()
    ):
        return SchemaMismatchError(
            f"Backend rejeitou colunas em {path}",
            columns=colunas_rejeitadas(corpo),
            detail=corpo,
        )

    return RepositoryError(f"Erro HTTP {status} em {path}", detail=corpo)


class RestClient:
    """
    Cliente JSON mínimo sobre urllib.

    Example:
        client = RestClient("http://localhost:3001", timeout=10)
        client.get("/setores")
        client.patch("/setores/abc", {"ramal": "201"})
    """

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def url(self, path: str, query: Optional[Dict[str, Any]] = None) -> str:
        url = f"{self.base_url}/{path.lstrip('/')}"
        if query:
            url += "?" + urllib.parse.urlencode(query)
        return url

    def request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Executa a requisição e devolve o JSON decodificado (None se vazio).

        Raises:
            RepositoryError: (ou subclasses) em qualquer falha
        """
        headers = {"Accept": "application/json"}
        data = None
        if payload is not None:
            data = json.dumps(payload, cls=DjangoJSONEncoder).encode("utf-8")
            headers["Content-Type"] = "application/json"

        req = urllib.request.Request(
            self.url(path, query), data=data, headers=headers, method=method
        )

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                corpo = response.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            corpo = e.read().decode("utf-8", errors="replace") if e.fp else ""
            logger.debug(f"{method} {path} -> HTTP {e.code}: {corpo}")
            raise traduzir_erro_http(e.code, corpo, path) from e
        except (urllib.error.URLError, socket.timeout, ConnectionError) as e:
            logger.error(f"{method} {path}: {e}")
            raise RepositoryError(MENSAGEM_FALHA_CONEXAO, detail=str(e)) from e

        if not corpo.strip():
            return None
        try:
            return json.loads(corpo)
        except json.JSONDecodeError as e:
            raise RepositoryError(
                f"Resposta inválida de {path}", detail=corpo[:200]
            ) from e

    def get(self, path: str, query: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, query=query)

    def post(self, path: str, payload: Dict[str, Any]) -> Any:
        return self.request("POST", path, payload)

    def patch(self, path: str, payload: Dict[str, Any]) -> Any:
        return self.request("PATCH", path, payload)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
