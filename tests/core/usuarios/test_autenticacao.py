"""
Testes de usuários, autenticação e sessão.

Coverage:
- CriarUsuarioService: username duplicado antes de gravar, hash da senha
- AtualizarUsuarioService: re-hash e troca de username
- AutenticarUsuarioService: credenciais, senha legada regravada
- ContextoSessao: login, atual, exigir, logout
- SessaoUsuario: perfis e pode_editar
"""

import pytest

from src.core.shared.exceptions import AuthenticationError, RepositoryError, ValidationError
from src.core.usuarios.dtos import AtualizarUsuarioInputDTO, CriarUsuarioInputDTO
from src.core.usuarios.ports import InMemoryUsuarioRepository
from src.core.usuarios.sessao import ContextoSessao, InMemorySessaoStore, SessaoUsuario
from src.core.usuarios.use_cases import (
    MENSAGEM_USERNAME_DUPLICADO,
    AtualizarUsuarioService,
    AutenticarUsuarioService,
    CriarUsuarioService,
    EncerrarSessaoService,
    ExcluirUsuarioService,
    ListarUsuariosService,
)


class FakeHasher:
    """Hash reversível: "fake$<senha>". Qualquer outro valor é texto legado."""

    PREFIXO = "fake$"

    def hash(self, senha):
        return self.PREFIXO + senha

    def verificar(self, senha, armazenado):
        if armazenado.startswith(self.PREFIXO):
            return armazenado == self.PREFIXO + senha
        return armazenado == senha

    def precisa_atualizar(self, armazenado):
        return not armazenado.startswith(self.PREFIXO)


class UsuarioRepositorySomenteLeitura(InMemoryUsuarioRepository):
    def update(self, entity_id, campos):
        raise RepositoryError("permission denied for table app_users")


@pytest.fixture
def hasher():
    return FakeHasher()


@pytest.fixture
def diretorio():
    return InMemoryUsuarioRepository(
        registros=[
            {"id": "u-1", "name": "MARIA", "username": "maria", "tier": "admin",
             "password_hash": "fake$segredo"},
            {"id": "u-2", "name": "PAULO", "username": "paulo", "tier": "vip",
             "setor": "DIRETORIA", "password_hash": "senha-antiga"},
        ]
    )


class TestCriarUsuarioService:
    def test_cadastro_com_hash(self, usuario_repo, hasher, uow):
        output = CriarUsuarioService(usuario_repo, hasher, uow).execute(
            CriarUsuarioInputDTO(name="joana silva", username="joana", password="abc123",
                                 setor="rh")
        )

        assert output.name == "JOANA SILVA"
        assert output.setor == "RH"
        assert output.tier == "padrao"
        _, campos = usuario_repo.escritas[0]
        assert campos["password_hash"] == "fake$abc123"
        assert "password" not in campos

    def test_saida_nao_expoe_hash(self, usuario_repo, hasher, uow):
        output = CriarUsuarioService(usuario_repo, hasher, uow).execute(
            CriarUsuarioInputDTO(name="Joana", username="joana", password="abc123")
        )

        assert "password_hash" not in output.to_dict()

    def test_username_duplicado_antes_de_gravar(self, diretorio, hasher, uow):
        with pytest.raises(ValidationError) as exc_info:
            CriarUsuarioService(diretorio, hasher, uow).execute(
                CriarUsuarioInputDTO(name="Outra Maria", username="maria", password="x")
            )

        assert exc_info.value.message == MENSAGEM_USERNAME_DUPLICADO
        assert exc_info.value.field == "username"
        assert diretorio.escritas == []

    @pytest.mark.parametrize("campo", ["name", "username", "password"])
    def test_campos_obrigatorios(self, usuario_repo, hasher, uow, campo):
        dados = {"name": "Joana", "username": "joana", "password": "abc123"}
        dados[campo] = ""

        with pytest.raises(ValidationError) as exc_info:
            CriarUsuarioService(usuario_repo, hasher, uow).execute(CriarUsuarioInputDTO(**dados))

        assert exc_info.value.field == campo

    def test_tier_invalido(self, usuario_repo, hasher, uow):
        with pytest.raises(ValidationError):
            CriarUsuarioService(usuario_repo, hasher, uow).execute(
                CriarUsuarioInputDTO(name="Joana", username="joana", password="x", tier="root")
            )


class TestAtualizarUsuarioService:
    def test_nova_senha_e_rehasheada(self, diretorio, hasher, uow):
        AtualizarUsuarioService(diretorio, hasher, uow).execute(
            AtualizarUsuarioInputDTO("u-2", {"password": "nova", "cargo": "Diretor"})
        )

        _, campos = diretorio.escritas[-1]
        assert campos == {"password_hash": "fake$nova", "cargo": "Diretor"}

    def test_username_de_outro_usuario(self, diretorio, hasher, uow):
        with pytest.raises(ValidationError):
            AtualizarUsuarioService(diretorio, hasher, uow).execute(
                AtualizarUsuarioInputDTO("u-2", {"username": "maria"})
            )

    def test_listar_e_excluir(self, diretorio, uow):
        ExcluirUsuarioService(diretorio, uow).execute("u-2")

        assert [u.username for u in ListarUsuariosService(diretorio).execute()] == ["maria"]


class TestAutenticarUsuarioService:
    def test_login_valido(self, diretorio, hasher):
        sessao = AutenticarUsuarioService(diretorio, hasher).execute(" maria ", "segredo")

        assert sessao.usuario_id == "u-1"
        assert sessao.is_admin
        assert diretorio.escritas == []

    @pytest.mark.parametrize(
        "username,senha",
        [("maria", "errada"), ("ninguem", "segredo"), ("", "segredo"), ("maria", "")],
    )
    def test_credenciais_invalidas(self, diretorio, hasher, username, senha):
        with pytest.raises(AuthenticationError):
            AutenticarUsuarioService(diretorio, hasher).execute(username, senha)

    def test_senha_legada_e_regravada(self, diretorio, hasher):
        AutenticarUsuarioService(diretorio, hasher).execute("paulo", "senha-antiga")

        assert diretorio.escritas == [("update", {"password_hash": "fake$senha-antiga"})]

    def test_falha_ao_regravar_nao_impede_login(self, hasher):
        repo = UsuarioRepositorySomenteLeitura(
            registros=[{"id": "u-9", "name": "ANA", "username": "ana", "password_hash": "123"}]
        )

        sessao = AutenticarUsuarioService(repo, hasher).execute("ana", "123")

        assert sessao.username == "ana"


class TestSessao:
    @pytest.fixture
    def contexto(self, diretorio, hasher):
        return ContextoSessao(
            AutenticarUsuarioService(diretorio, hasher),
            InMemorySessaoStore(),
            EncerrarSessaoService(),
        )

    def test_ciclo_login_logout(self, contexto):
        assert contexto.atual is None

        contexto.login("paulo", "senha-antiga")

        assert contexto.exigir().username == "paulo"
        assert contexto.atual.setor == "DIRETORIA"

        contexto.logout()

        assert contexto.atual is None
        with pytest.raises(AuthenticationError):
            contexto.exigir()

    def test_login_falho_descarta_sessao_anterior(self, contexto):
        contexto.login("maria", "segredo")

        with pytest.raises(AuthenticationError):
            contexto.login("paulo", "errada")

        assert contexto.atual is None

    @pytest.mark.parametrize(
        "tier,is_admin,is_vip,pode_editar",
        [
            ("padrao", False, False, True),
            ("vip", False, True, False),
            ("admin", True, False, True),
        ],
    )
    def test_perfis(self, tier, is_admin, is_vip, pode_editar):
        sessao = SessaoUsuario(usuario_id="u", nome="X", username="x", tier=tier)

        assert sessao.is_admin is is_admin
        assert sessao.is_vip is is_vip
        assert sessao.pode_editar is pode_editar

    def test_serializacao(self):
        sessao = SessaoUsuario(usuario_id="u-2", nome="PAULO", username="paulo", tier="vip")

        data = sessao.to_dict()

        assert data["pode_editar"] is False
        assert SessaoUsuario.from_dict(data) == sessao
