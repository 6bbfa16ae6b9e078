"""
Testes do FallbackRepository (banco -> API REST).
"""

import pytest

from src.adapters.fallback import FallbackRepository
from src.core.setores.ports import InMemorySetorRepository
from src.core.shared.exceptions import EntityNotFoundError, RepositoryError


class RepositorioForaDoAr:
    def __init__(self):
        self.chamadas = []

    def __getattr__(self, operacao):
        def falhar(*args):
            self.chamadas.append(operacao)
            raise RepositoryError("could not connect to server")
        return falhar


@pytest.fixture
def secundario():
    return InMemorySetorRepository(registros=[{"id": "s-1", "nome": "TI"}])


class TestFallbackRepository:
    def test_primario_responde(self, secundario):
        primario = InMemorySetorRepository(registros=[{"id": "s-9", "nome": "RH"}])
        repo = FallbackRepository(primario, secundario)

        assert [s.id for s in repo.list_all()] == ["s-9"]
        assert repo.get_by_id("s-1") is None

    def test_falha_do_primario_usa_secundario(self, secundario):
        primario = RepositorioForaDoAr()
        repo = FallbackRepository(primario, secundario, nome="setores")

        assert [s.id for s in repo.list_all()] == ["s-1"]
        assert repo.get_by_id("s-1").nome == "TI"

        criado = repo.create({"nome": "RH"})
        repo.update(criado.id, {"ramal": "201"})
        repo.delete("s-1")

        assert primario.chamadas == ["list_all", "get_by_id", "create", "update", "delete"]
        assert [s.nome for s in secundario.list_all()] == ["RH"]

    def test_lista_vazia_consulta_secundario_quando_configurado(self, secundario):
        vazio = InMemorySetorRepository()

        assert FallbackRepository(vazio, secundario).list_all() == []
        assert len(FallbackRepository(vazio, secundario, fallback_lista_vazia=True).list_all()) == 1

    def test_lista_vazia_com_secundario_fora_do_ar(self):
        secundario = RepositorioForaDoAr()
        repo = FallbackRepository(InMemorySetorRepository(), secundario, fallback_lista_vazia=True)

        assert repo.list_all() == []
        assert secundario.chamadas == ["list_all"]

    def test_erro_do_secundario_propaga(self):
        repo = FallbackRepository(RepositorioForaDoAr(), RepositorioForaDoAr())

        with pytest.raises(RepositoryError):
            repo.create({"nome": "TI"})

    def test_nao_encontrado_nao_aciona_fallback(self, secundario):
        repo = FallbackRepository(InMemorySetorRepository(), secundario)

        with pytest.raises(EntityNotFoundError):
            repo.delete("s-1")

        assert secundario.get_by_id("s-1") is not None
