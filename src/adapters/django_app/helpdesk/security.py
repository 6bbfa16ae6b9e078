"""
Adapters de segurança: hash de senha e sessão.

- DjangoPasswordHasher: PasswordHasher sobre django.contrib.auth.hashers
- DjangoSessaoStore: SessaoStore sobre request.session
"""

from typing import Any, Dict, Optional
import logging

from django.contrib.auth.hashers import (
    check_password,
    get_hasher,
    identify_hasher,
    make_password,
)
from django.utils.crypto import constant_time_compare

logger = logging.getLogger(__name__)

CHAVE_SESSAO = "helpdesk_sessao"


class DjangoPasswordHasher:
    """
    Hash de senhas com os hashers configurados em PASSWORD_HASHERS.

    Valores que nenhum hasher reconhece são senhas legadas em texto
    puro: conferidas em tempo constante e marcadas para regravação.
    """

    def hash(self, senha: str) -> str:
        return make_password(senha)

    def _eh_legado(self, armazenado: str) -> bool:
        try:
            identify_hasher(armazenado)
        except ValueError:
            return True
        return False

    def verificar(self, senha: str, armazenado: str) -> bool:
        if not armazenado:
            return False
        if self._eh_legado(armazenado):
            logger.warning("Senha legada em texto puro encontrada no diretório de usuários")
            return constant_time_compare(senha, armazenado)
        return check_password(senha, armazenado)

    def precisa_atualizar(self, armazenado: str) -> bool:
        if not armazenado or self._eh_legado(armazenado):
            return True
        hasher = identify_hasher(armazenado)
        if hasher.algorithm != get_hasher("default").algorithm:
            return True
        return hasher.must_update(armazenado)


class DjangoSessaoStore:
    """
    Guarda a SessaoUsuario serializada na sessão Django.

    Example:
        store = DjangoSessaoStore(request.session)
        ContextoSessao(autenticar_service, store).atual
    """

    def __init__(self, session):
        self._session = session

    def carregar(self) -> Optional[Dict[str, Any]]:
        return self._session.get(CHAVE_SESSAO)

    def salvar(self, data: Dict[str, Any]) -> None:
        self._session.cycle_key()
        self._session[CHAVE_SESSAO] = data

    def limpar(self) -> None:
        self._session.flush()
