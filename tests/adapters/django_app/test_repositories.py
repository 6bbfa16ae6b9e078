"""
Testes de integração dos repositórios Django (backend store).

Testa a integração entre:
- Repository ↔ Database (SQLite de teste do pytest-django)
- Tradução de erros do banco para exceções de domínio
- Unit of Work ↔ Transactions e publicação de eventos
- Hasher de senhas e sessão Django
"""

import uuid

import pytest
from django.contrib.sessions.backends.signed_cookies import SessionStore

from src.adapters.django_app.events.publishers import InMemoryEventPublisher
from src.adapters.django_app.helpdesk.repositories import (
    DjangoChamadoRepository,
    DjangoEquipamentoRepository,
    DjangoProdutoRepository,
    DjangoProdutoSaidaRepository,
    DjangoUsuarioRepository,
)
from src.adapters.django_app.helpdesk.security import (
    CHAVE_SESSAO,
    DjangoPasswordHasher,
    DjangoSessaoStore,
)
from src.adapters.django_app.shared.unit_of_work import DjangoUnitOfWork
from src.core.chamados.entities import ChamadoStatus
from src.core.produtos.events import SaidaProdutoRegistradaEvent
from src.core.shared.exceptions import (
    DuplicateRecordError,
    EntityNotFoundError,
    SchemaMismatchError,
)

pytestmark = pytest.mark.django_db


def _chamado(**kwargs):
    campos = {
        "id": str(uuid.uuid4()),
        "titulo": "Rede lenta",
        "descricao": "Internet caindo no RH",
        "usuario": "MARIA",
        "tipo_servico": "Rede",
        "prioridade": "media",
        "status": "Aberto",
        "data": "2024-03-15",
        "created_at": "2024-03-15T10:00:00+00:00",
    }
    campos.update(kwargs)
    return campos


@pytest.fixture
def produto():
    return DjangoProdutoRepository().create(
        {"id": "p-1", "nome": "Mouse USB", "categoria": "Periféricos", "estoque": 4}
    )


class TestDjangoChamadoRepository:
    def test_create_e_get(self):
        repo = DjangoChamadoRepository()

        criado = repo.create(_chamado(id="c-1"))
        obtido = repo.get_by_id("c-1")

        assert criado.id == "c-1"
        assert obtido.status == ChamadoStatus.ABERTO
        assert obtido.data == "2024-03-15"
        assert obtido.created_at.startswith("2024-03-15T10:00:00")

    def test_list_all_mais_recentes_primeiro(self):
        repo = DjangoChamadoRepository()
        repo.create(_chamado(id="antigo", created_at="2024-03-01T10:00:00+00:00"))
        repo.create(_chamado(id="novo", created_at="2024-03-20T10:00:00+00:00"))

        assert [c.id for c in repo.list_all()] == ["novo", "antigo"]
        assert repo.count() == 2

    def test_update_parcial(self):
        repo = DjangoChamadoRepository()
        repo.create(_chamado(id="c-1"))

        atualizado = repo.update(
            "c-1",
            {
                "status": "Concluído",
                "started_at": "2024-03-15T10:05:00+00:00",
                "completed_at": "2024-03-15T11:47:00+00:00",
                "duration_minutes": 102,
                "duration_text": "1h 42min",
            },
        )

        assert atualizado.status == ChamadoStatus.CONCLUIDO
        assert atualizado.duration_minutes == 102
        assert atualizado.titulo == "Rede lenta"

    def test_coluna_inexistente(self):
        with pytest.raises(SchemaMismatchError) as exc_info:
            DjangoChamadoRepository().create(_chamado(prazo="amanhã"))

        assert exc_info.value.columns == ["prazo"]

    def test_inexistente(self):
        repo = DjangoChamadoRepository()

        assert repo.get_by_id("zzz") is None
        with pytest.raises(EntityNotFoundError):
            repo.update("zzz", {"status": "Aberto"})
        with pytest.raises(EntityNotFoundError):
            repo.delete("zzz")

    def test_delete(self):
        repo = DjangoChamadoRepository()
        repo.create(_chamado(id="c-1"))

        repo.delete("c-1")

        assert repo.get_by_id("c-1") is None


class TestDjangoEquipamentoRepository:
    def test_patrimonio_duplicado(self):
        repo = DjangoEquipamentoRepository()
        repo.create({"id": "e-1", "nome": "Desktop A", "tipo": "Desktop", "patrimonio": "PC001"})

        with pytest.raises(DuplicateRecordError):
            repo.create({"id": "e-2", "nome": "Desktop B", "tipo": "Desktop",
                         "patrimonio": "PC001"})

        assert repo.count() == 1


class TestDjangoProdutoSaidaRepository:
    def test_saida_decrementa_com_piso_zero(self, produto):
        saidas = DjangoProdutoSaidaRepository()

        saidas.create({"id": "s-1", "produto_id": "p-1", "quantidade": 3, "data": "2024-03-10"})
        assert DjangoProdutoRepository().get_by_id("p-1").estoque == 1

        saidas.create({"id": "s-2", "produto_id": "p-1", "quantidade": 5, "data": "2024-03-12"})
        assert DjangoProdutoRepository().get_by_id("p-1").estoque == 0

    def test_list_all_por_data(self, produto):
        saidas = DjangoProdutoSaidaRepository()
        saidas.create({"id": "s-1", "produto_id": "p-1", "quantidade": 1, "data": "2024-03-01"})
        saidas.create({"id": "s-2", "produto_id": "p-1", "quantidade": 1, "data": "2024-03-09"})

        resultado = saidas.list_all()

        assert [s.id for s in resultado] == ["s-2", "s-1"]
        assert resultado[0].produto_id == "p-1"

    def test_excluir_produto_remove_saidas(self, produto):
        saidas = DjangoProdutoSaidaRepository()
        saidas.create({"id": "s-1", "produto_id": "p-1", "quantidade": 1})

        DjangoProdutoRepository().delete("p-1")

        assert saidas.list_all() == []


class TestDjangoUsuarioRepository:
    def test_get_by_username_e_duplicado(self):
        repo = DjangoUsuarioRepository()
        repo.create({"id": "u-1", "name": "MARIA", "username": "maria", "password_hash": "x"})

        assert repo.get_by_username("maria").id == "u-1"
        assert repo.get_by_username("MARIA") is None

        with pytest.raises(DuplicateRecordError):
            repo.create({"id": "u-2", "name": "OUTRA", "username": "maria", "password_hash": "y"})


class TestDjangoUnitOfWork:
    def test_commit_publica_eventos(self, produto):
        publisher = InMemoryEventPublisher()
        evento = SaidaProdutoRegistradaEvent(
            aggregate_id="s-1", produto_id="p-1", quantidade=1, estoque_restante=3
        )

        with DjangoUnitOfWork(publisher) as uow:
            DjangoProdutoSaidaRepository().create(
                {"id": "s-1", "produto_id": "p-1", "quantidade": 1}
            )
            uow.publish_event(evento)

        assert uow.is_committed
        assert publisher.published_events == [evento]

    def test_rollback_desfaz_escritas(self, produto):
        publisher = InMemoryEventPublisher()

        with pytest.raises(RuntimeError):
            with DjangoUnitOfWork(publisher) as uow:
                DjangoProdutoRepository().update("p-1", {"estoque": 99})
                uow.publish_event(
                    SaidaProdutoRegistradaEvent(aggregate_id="s-1", produto_id="p-1")
                )
                raise RuntimeError("falha no meio do caso de uso")

        assert uow.is_rolled_back
        assert publisher.published_events == []
        assert DjangoProdutoRepository().get_by_id("p-1").estoque == 4


class TestSeguranca:
    @pytest.fixture(autouse=True)
    def hasher_rapido(self, settings):
        settings.PASSWORD_HASHERS = [
            "django.contrib.auth.hashers.PBKDF2PasswordHasher",
            "django.contrib.auth.hashers.MD5PasswordHasher",
        ]

    def test_hash_e_verificacao(self):
        hasher = DjangoPasswordHasher()

        armazenado = hasher.hash("segredo")

        assert armazenado != "segredo"
        assert hasher.verificar("segredo", armazenado)
        assert not hasher.verificar("errado", armazenado)
        assert not hasher.precisa_atualizar(armazenado)

    def test_texto_legado(self):
        hasher = DjangoPasswordHasher()

        assert hasher.verificar("1234", "1234")
        assert not hasher.verificar("4321", "1234")
        assert hasher.precisa_atualizar("1234")
        assert not hasher.verificar("1234", "")

    def test_algoritmo_antigo_precisa_atualizar(self):
        from django.contrib.auth.hashers import make_password

        antigo = make_password("segredo", hasher="md5")

        assert DjangoPasswordHasher().verificar("segredo", antigo)
        assert DjangoPasswordHasher().precisa_atualizar(antigo)

    def test_sessao_django(self):
        session = SessionStore()
        store = DjangoSessaoStore(session)

        store.salvar({"usuario_id": "u-1", "username": "maria"})
        assert session[CHAVE_SESSAO]["username"] == "maria"
        assert store.carregar()["usuario_id"] == "u-1"

        store.limpar()
        assert store.carregar() is None
