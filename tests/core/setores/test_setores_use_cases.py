"""
Testes dos Use Cases de setores.
"""

import pytest

from src.core.setores.dtos import AtualizarSetorInputDTO, CriarSetorInputDTO
from src.core.setores.ports import InMemorySetorRepository
from src.core.setores.use_cases import (
    AtualizarSetorService,
    CriarSetorService,
    ExcluirSetorService,
    ListarSetoresService,
    ObterSetorService,
)
from src.core.shared.exceptions import EntityNotFoundError, SchemaMismatchError, ValidationError


class TestCriarSetorService:
    def test_nome_em_maiusculas(self, setor_repo, uow):
        output = CriarSetorService(setor_repo, uow).execute(
            CriarSetorInputDTO(nome=" financeiro ", ramal=201)
        )

        assert output.nome == "FINANCEIRO"
        assert output.ramal == "201"
        assert uow.committed

    def test_nome_obrigatorio(self, setor_repo, uow):
        with pytest.raises(ValidationError) as exc_info:
            CriarSetorService(setor_repo, uow).execute(CriarSetorInputDTO(nome="   "))

        assert exc_info.value.field == "nome"
        assert setor_repo.escritas == []

    def test_campos_vazios_nao_sao_enviados(self, setor_repo, uow):
        CriarSetorService(setor_repo, uow).execute(CriarSetorInputDTO(nome="TI", localizacao=""))

        _, campos = setor_repo.escritas[0]
        assert "localizacao" not in campos
        assert "responsavel" not in campos

    def test_coluna_inexistente_no_backend(self, uow):
        repo = InMemorySetorRepository(colunas={"id", "nome", "created_at"})

        with pytest.raises(SchemaMismatchError) as exc_info:
            CriarSetorService(repo, uow).execute(CriarSetorInputDTO(nome="TI", ramal="201"))

        assert exc_info.value.columns == ["ramal"]
        assert uow.rolled_back


class TestDemaisOperacoes:
    @pytest.fixture
    def setores(self):
        return InMemorySetorRepository(
            registros=[
                {"id": "s-1", "nome": "TI", "created_at": "2024-01-01T00:00:00+00:00"},
                {"id": "s-2", "nome": "RH", "created_at": "2024-02-01T00:00:00+00:00"},
            ]
        )

    def test_atualizar_normaliza_nome(self, setores, uow):
        output = AtualizarSetorService(setores, uow).execute(
            AtualizarSetorInputDTO("s-2", {"nome": "recursos humanos", "responsavel": "Ana"})
        )

        assert output.nome == "RECURSOS HUMANOS"
        assert output.responsavel == "Ana"

    def test_atualizar_sem_campos(self, setores, uow):
        with pytest.raises(ValidationError):
            AtualizarSetorService(setores, uow).execute(AtualizarSetorInputDTO("s-2", {}))

    def test_listar_mais_recentes_primeiro(self, setores):
        assert [s.nome for s in ListarSetoresService(setores).execute()] == ["RH", "TI"]

    def test_obter_e_excluir(self, setores, uow):
        assert ObterSetorService(setores).execute("s-1").nome == "TI"

        ExcluirSetorService(setores, uow).execute("s-1")

        with pytest.raises(EntityNotFoundError):
            ObterSetorService(setores).execute("s-1")
