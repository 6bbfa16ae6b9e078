"""
Ports (Interfaces) do Domínio de Usuários.

- UsuarioRepository: diretório de usuários (tabela `app_users`)
- PasswordHasher: geração/verificação de hash de senha
"""

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from src.core.shared.in_memory import InMemoryRepository

from .entities import UsuarioEntity


@runtime_checkable
class UsuarioRepository(Protocol):
    """Interface para persistência de usuários."""

    def list_all(self) -> List[UsuarioEntity]:
        ...

    def get_by_id(self, usuario_id: str) -> Optional[UsuarioEntity]:
        ...

    def get_by_username(self, username: str) -> Optional[UsuarioEntity]:
        """Busca por login exato; None se não existir."""
        ...

    def create(self, campos: Dict[str, Any]) -> UsuarioEntity:
        """
        Raises:
            DuplicateRecordError: Se username já cadastrado
        """
        ...

    def update(self, usuario_id: str, campos: Dict[str, Any]) -> UsuarioEntity:
        ...

    def delete(self, usuario_id: str) -> None:
        ...


class PasswordHasher(Protocol):
    """
    Hash de senhas.

    Implementação de produção: DjangoPasswordHasher
    (django.contrib.auth.hashers).
    """

    def hash(self, senha: str) -> str:
        ...

    def verificar(self, senha: str, armazenado: str) -> bool:
        """True se a senha confere com o valor armazenado."""
        ...

    def precisa_atualizar(self, armazenado: str) -> bool:
        """True se o valor armazenado deve ser regravado (legado/algoritmo antigo)."""
        ...


class InMemoryUsuarioRepository(InMemoryRepository[UsuarioEntity]):
    """Implementação em memória do UsuarioRepository."""

    entity_class = UsuarioEntity
    entity_type = "Usuário"
    unique_fields = ("username",)

    def get_by_username(self, username: str) -> Optional[UsuarioEntity]:
        for registro in self._registros.values():
            if registro.get("username") == username:
                return self.to_entity(registro)
        return None
