"""
Domínio de Usuários - Diretório, credenciais e sessão.
"""

from .entities import UsuarioEntity, UsuarioTier
from .dtos import AtualizarUsuarioInputDTO, CriarUsuarioInputDTO, UsuarioOutputDTO
from .ports import InMemoryUsuarioRepository, PasswordHasher, UsuarioRepository
from .sessao import ContextoSessao, InMemorySessaoStore, SessaoStore, SessaoUsuario
from .use_cases import (
    AtualizarUsuarioService,
    AutenticarUsuarioService,
    CriarUsuarioService,
    EncerrarSessaoService,
    ExcluirUsuarioService,
    ListarUsuariosService,
)

__all__ = [
    "UsuarioEntity",
    "UsuarioTier",
    "CriarUsuarioInputDTO",
    "AtualizarUsuarioInputDTO",
    "UsuarioOutputDTO",
    "UsuarioRepository",
    "InMemoryUsuarioRepository",
    "PasswordHasher",
    "SessaoUsuario",
    "SessaoStore",
    "InMemorySessaoStore",
    "ContextoSessao",
    "CriarUsuarioService",
    "AtualizarUsuarioService",
    "ListarUsuariosService",
    "ExcluirUsuarioService",
    "AutenticarUsuarioService",
    "EncerrarSessaoService",
]
