"""
Configuração pytest para testes com Django.

Este arquivo fornece:
- Container DI com repositórios em memória (testes da API)
- Client Django e helpers de requisição JSON
- Hasher rápido para os testes de senha
- Sessão padrão já logada (fixture logado)
"""

import json

import pytest
from dependency_injector import providers
from django.test import Client

from src.adapters.django_app.shared.unit_of_work import InMemoryUnitOfWork
from src.config.container import get_container
from src.core.chamados.ports import InMemoryChamadoRepository
from src.core.equipamentos.ports import InMemoryEquipamentoRepository
from src.core.produtos.ports import InMemoryProdutoRepository, InMemoryProdutoSaidaRepository
from src.core.setores.ports import InMemorySetorRepository
from src.core.usuarios.ports import InMemoryUsuarioRepository


@pytest.fixture(autouse=True)
def hasher_rapido(settings):
    """MD5 nos testes: PBKDF2 com muitas iterações deixa a suíte lenta."""
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


@pytest.fixture
def repositorios():
    """Repositórios em memória, com saídas ligadas ao estoque dos produtos."""
    produtos = InMemoryProdutoRepository()
    return {
        "chamado_repository": InMemoryChamadoRepository(),
        "equipamento_repository": InMemoryEquipamentoRepository(),
        "produto_repository": produtos,
        "saida_repository": InMemoryProdutoSaidaRepository(produto_repo=produtos),
        "setor_repository": InMemorySetorRepository(),
        "usuario_repository": InMemoryUsuarioRepository(),
    }


@pytest.fixture
def container(repositorios):
    """
    Container global com os repositórios substituídos.

    Os services continuam vindo dos providers reais; só a
    persistência e o Unit of Work mudam.
    """
    container = get_container()
    for nome, repo in repositorios.items():
        getattr(container, nome).override(providers.Object(repo))
    container.unit_of_work.override(providers.Factory(InMemoryUnitOfWork))
    yield container
    container.reset_override()


@pytest.fixture
def api_client(container):
    return Client()


@pytest.fixture
def usuarios_cadastrados(container):
    """Cadastra MARIA (admin), PAULO (vip) e JOANA (padrão) pelo service real."""
    from src.core.usuarios.dtos import CriarUsuarioInputDTO

    service = container.criar_usuario_service
    for name, username, tier in [
        ("Maria Souza", "maria", "admin"),
        ("Paulo Lima", "paulo", "vip"),
        ("Joana Reis", "joana", "padrao"),
    ]:
        service().execute(
            CriarUsuarioInputDTO(name=name, username=username, password="senha123", tier=tier)
        )


def enviar_json(client, metodo, url, data=None):
    """Envia body JSON e devolve (status, payload)."""
    response = getattr(client, metodo)(
        url,
        data=json.dumps(data) if data is not None else "",
        content_type="application/json",
    )
    return response.status_code, response.json()


@pytest.fixture
def post_json(api_client):
    return lambda url, data=None: enviar_json(api_client, "post", url, data)


@pytest.fixture
def patch_json(api_client):
    return lambda url, data=None: enviar_json(api_client, "patch", url, data)


@pytest.fixture
def login(post_json):
    def fazer_login(username, password="senha123"):
        return post_json("/api/auth/login/", {"username": username, "password": password})
    return fazer_login


@pytest.fixture
def logado(login, usuarios_cadastrados):
    """Sessão de JOANA (padrão): toda rota fora de /api/auth/ exige login."""
    status, body = login("joana")
    assert status == 200
    return body["data"]
