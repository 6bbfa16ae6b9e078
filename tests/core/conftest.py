"""
Fixtures dos testes de domínio.

Repositórios InMemory e um relógio fixo, sem banco de dados.
"""

from datetime import datetime, timezone

import pytest

from src.adapters.django_app.shared.unit_of_work import InMemoryUnitOfWork
from src.core.chamados.ports import InMemoryChamadoRepository
from src.core.equipamentos.ports import InMemoryEquipamentoRepository
from src.core.produtos.ports import InMemoryProdutoRepository, InMemoryProdutoSaidaRepository
from src.core.setores.ports import InMemorySetorRepository
from src.core.usuarios.ports import InMemoryUsuarioRepository


class FakeClock:
    """Relógio controlável: `ajustar` move o instante atual."""

    def __init__(self, instante: datetime):
        self.instante = instante

    def __call__(self) -> datetime:
        return self.instante

    def ajustar(self, instante: datetime) -> None:
        self.instante = instante


@pytest.fixture
def uow():
    """Fixture para Unit of Work em memória."""
    return InMemoryUnitOfWork()


@pytest.fixture
def relogio():
    return FakeClock(datetime(2024, 3, 15, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def chamado_repo():
    return InMemoryChamadoRepository()


@pytest.fixture
def equipamento_repo():
    return InMemoryEquipamentoRepository()


@pytest.fixture
def produto_repo():
    return InMemoryProdutoRepository()


@pytest.fixture
def saida_repo(produto_repo):
    return InMemoryProdutoSaidaRepository(produto_repo=produto_repo)


@pytest.fixture
def setor_repo():
    return InMemorySetorRepository()


@pytest.fixture
def usuario_repo():
    return InMemoryUsuarioRepository()
