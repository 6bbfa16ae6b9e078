"""
Use Cases do Domínio de Usuários.

Use Cases implementados:
- CriarUsuarioService: Cadastra usuário com senha em hash
- AtualizarUsuarioService: Atualização parcial (re-hash de senha)
- ListarUsuariosService: Lista diretório
- ExcluirUsuarioService: Remove usuário
- AutenticarUsuarioService: Confere credenciais e abre sessão
- EncerrarSessaoService: Logout
"""

from typing import List
import logging
import uuid

from src.core.shared.datas import agora
from src.core.shared.exceptions import (
    AuthenticationError,
    RepositoryError,
    ValidationError,
)
from src.core.shared.interfaces import UnitOfWork

from .dtos import AtualizarUsuarioInputDTO, CriarUsuarioInputDTO, UsuarioOutputDTO
from .entities import UsuarioEntity
from .ports import PasswordHasher, UsuarioRepository
from .sessao import SessaoStore, SessaoUsuario

logger = logging.getLogger(__name__)

MENSAGEM_USERNAME_DUPLICADO = "Nome de usuário já cadastrado."


def _aplicar_hash(campos: dict, hasher: PasswordHasher) -> dict:
    campos = dict(campos)
    if "password" in campos:
        campos["password_hash"] = hasher.hash(campos.pop("password"))
    return campos


class CriarUsuarioService:
    """
    Use Case: Cadastrar usuário.

    Fluxo:
    1. Normalizar campos (nome/setor em maiúsculas)
    2. Verificar username livre (antes de qualquer escrita)
    3. Converter senha em hash
    4. Persistir
    """

    def __init__(
        self,
        usuario_repo: UsuarioRepository,
        hasher: PasswordHasher,
        uow: UnitOfWork,
    ):
        self.usuario_repo = usuario_repo
        self.hasher = hasher
        self.uow = uow

    def execute(self, input_dto: CriarUsuarioInputDTO) -> UsuarioOutputDTO:
        """
        Raises:
            ValidationError: Se dados inválidos ou username em uso
        """
        for campo in ("name", "username", "password"):
            if not str(getattr(input_dto, campo) or "").strip():
                raise ValidationError(f"Campo obrigatório: {campo}", field=campo)

        campos = UsuarioEntity.normalizar_campos({
            "name": input_dto.name,
            "username": input_dto.username,
            "password": input_dto.password,
            "setor": input_dto.setor,
            "cargo": input_dto.cargo,
            "tier": input_dto.tier or "padrao",
        })

        with self.uow:
            if self.usuario_repo.get_by_username(campos["username"]):
                raise ValidationError(MENSAGEM_USERNAME_DUPLICADO, field="username")

            registro = {
                "id": str(uuid.uuid4()),
                "created_at": agora().isoformat(),
                **_aplicar_hash(campos, self.hasher),
            }
            criado = self.usuario_repo.create(
                {k: v for k, v in registro.items() if v is not None}
            )

        logger.info(f"Usuário criado: {criado.username}")
        return UsuarioOutputDTO.from_entity(criado)


class AtualizarUsuarioService:
    """Use Case: Atualizar usuário (senha informada é re-hasheada)."""

    def __init__(
        self,
        usuario_repo: UsuarioRepository,
        hasher: PasswordHasher,
        uow: UnitOfWork,
    ):
        self.usuario_repo = usuario_repo
        self.hasher = hasher
        self.uow = uow

    def execute(self, input_dto: AtualizarUsuarioInputDTO) -> UsuarioOutputDTO:
        campos = UsuarioEntity.normalizar_campos(input_dto.campos)
        if not campos:
            raise ValidationError("Nenhum campo informado para atualização")

        with self.uow:
            if "username" in campos:
                existente = self.usuario_repo.get_by_username(campos["username"])
                if existente and existente.id != input_dto.usuario_id:
                    raise ValidationError(MENSAGEM_USERNAME_DUPLICADO, field="username")

            atualizado = self.usuario_repo.update(
                input_dto.usuario_id, _aplicar_hash(campos, self.hasher)
            )

        logger.info(f"Usuário atualizado: {atualizado.username}")
        return UsuarioOutputDTO.from_entity(atualizado)


class ListarUsuariosService:
    def __init__(self, usuario_repo: UsuarioRepository):
        self.usuario_repo = usuario_repo

    def execute(self) -> List[UsuarioOutputDTO]:
        return [UsuarioOutputDTO.from_entity(u) for u in self.usuario_repo.list_all()]


class ExcluirUsuarioService:
    def __init__(self, usuario_repo: UsuarioRepository, uow: UnitOfWork):
        self.usuario_repo = usuario_repo
        self.uow = uow

    def execute(self, usuario_id: str) -> None:
        with self.uow:
            self.usuario_repo.delete(usuario_id)
        logger.info(f"Usuário excluído: {usuario_id}")


class AutenticarUsuarioService:
    """
    Use Case: Conferir credenciais contra o diretório de usuários.

    Senhas legadas (texto puro ou algoritmo antigo) que conferem são
    regravadas em hash no mesmo login.

    Example:
        sessao = AutenticarUsuarioService(repo, hasher).execute("maria", "segredo")
        sessao.pode_editar
    """

    def __init__(self, usuario_repo: UsuarioRepository, hasher: PasswordHasher):
        self.usuario_repo = usuario_repo
        self.hasher = hasher

    def execute(self, username: str, senha: str) -> SessaoUsuario:
        """
        Raises:
            AuthenticationError: Se usuário inexistente ou senha errada
        """
        username = (username or "").strip()
        if not username or not senha:
            raise AuthenticationError()

        usuario = self.usuario_repo.get_by_username(username)
        if usuario is None or not self.hasher.verificar(senha, usuario.password_hash):
            logger.info(f"Falha de login para '{username}'")
            raise AuthenticationError()

        if self.hasher.precisa_atualizar(usuario.password_hash):
            try:
                self.usuario_repo.update(usuario.id, {"password_hash": self.hasher.hash(senha)})
                logger.warning(f"Senha legada de '{username}' regravada em hash")
            except RepositoryError as e:
                logger.warning(f"Não foi possível regravar senha legada de '{username}': {e}")

        logger.info(f"Login: {username}")
        return SessaoUsuario.from_entity(usuario)


class EncerrarSessaoService:
    """Use Case: Logout (descarta a sessão guardada)."""

    def execute(self, store: SessaoStore) -> None:
        data = store.carregar()
        store.limpar()
        if data:
            logger.info(f"Logout: {data.get('username')}")
