"""
Sessão de usuário autenticado.

A sessão é um objeto explícito com ciclo login/logout, guardado em
um SessaoStore (sessão Django nas views, memória nos testes). Nada
de estado global: quem precisa da sessão a recebe por parâmetro.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Protocol

from src.core.shared.exceptions import AuthenticationError

from .entities import UsuarioEntity, UsuarioTier


@dataclass(frozen=True)
class SessaoUsuario:
    """
    Dados do usuário logado.

    Attributes:
        usuario_id: ID do usuário
        nome: Nome de exibição
        username: Login
        setor: Setor do usuário
        tier: Perfil (padrao, vip, admin)
    """

    usuario_id: str
    nome: str
    username: str
    setor: Optional[str] = None
    tier: str = UsuarioTier.PADRAO.value

    @classmethod
    def from_entity(cls, usuario: UsuarioEntity) -> "SessaoUsuario":
        return cls(
            usuario_id=usuario.id,
            nome=usuario.name,
            username=usuario.username,
            setor=usuario.setor,
            tier=usuario.tier.value,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessaoUsuario":
        return cls(
            usuario_id=data["usuario_id"],
            nome=data.get("nome", ""),
            username=data.get("username", ""),
            setor=data.get("setor"),
            tier=data.get("tier", UsuarioTier.PADRAO.value),
        )

    @property
    def is_admin(self) -> bool:
        return self.tier == UsuarioTier.ADMIN.value

    @property
    def is_vip(self) -> bool:
        return self.tier == UsuarioTier.VIP.value

    @property
    def pode_editar(self) -> bool:
        """VIP sem perfil admin não edita equipamentos."""
        return self.is_admin or not self.is_vip

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.update(
            is_admin=self.is_admin,
            is_vip=self.is_vip,
            pode_editar=self.pode_editar,
        )
        return data


class SessaoStore(Protocol):
    """Armazenamento da sessão serializada."""

    def carregar(self) -> Optional[Dict[str, Any]]:
        ...

    def salvar(self, data: Dict[str, Any]) -> None:
        ...

    def limpar(self) -> None:
        ...


class InMemorySessaoStore:
    def __init__(self):
        self._data: Optional[Dict[str, Any]] = None

    def carregar(self) -> Optional[Dict[str, Any]]:
        return self._data

    def salvar(self, data: Dict[str, Any]) -> None:
        self._data = dict(data)

    def limpar(self) -> None:
        self._data = None


class ContextoSessao:
    """
    Ciclo de vida da sessão: login, consulta e logout.

    Example:
        contexto = ContextoSessao(autenticar_service, DjangoSessaoStore(request.session))
        sessao = contexto.login("maria", "segredo")
        contexto.atual.pode_editar
        contexto.logout()
    """

    def __init__(self, autenticador, store: SessaoStore, encerrador=None):
        self.autenticador = autenticador
        self.store = store
        self.encerrador = encerrador

    @property
    def atual(self) -> Optional[SessaoUsuario]:
        data = self.store.carregar()
        return SessaoUsuario.from_dict(data) if data else None

    def login(self, username: str, senha: str) -> SessaoUsuario:
        """
        Raises:
            AuthenticationError: Se credenciais não conferem
        """
        self.store.limpar()
        sessao = self.autenticador.execute(username, senha)
        self.store.salvar(sessao.to_dict())
        return sessao

    def logout(self) -> None:
        if self.encerrador is not None:
            self.encerrador.execute(self.store)
        else:
            self.store.limpar()

    def exigir(self) -> SessaoUsuario:
        """
        Raises:
            AuthenticationError: Se não houver usuário logado
        """
        sessao = self.atual
        if sessao is None:
            raise AuthenticationError("Sessão não iniciada.")
        return sessao
