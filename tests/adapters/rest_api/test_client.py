"""
Testes do cliente da API REST e dos repositórios REST.

Coverage:
- colunas_rejeitadas(): mensagens PostgREST e Postgres
- traduzir_erro_http(): status -> exceção de domínio
- RestClient: payload JSON, falha de rede, resposta inválida
- RestRepository: ordenação, 404 em get/update/delete
"""

import io
import json
import socket
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from src.adapters.rest_api.client import (
    MENSAGEM_FALHA_CONEXAO,
    RestClient,
    colunas_rejeitadas,
    traduzir_erro_http,
)
from src.adapters.rest_api.repositories import (
    RestProdutoSaidaRepository,
    RestSetorRepository,
    RestUsuarioRepository,
)
from src.core.shared.exceptions import (
    DuplicateRecordError,
    EntityNotFoundError,
    RepositoryError,
    SchemaMismatchError,
)

URLOPEN = "src.adapters.rest_api.client.urllib.request.urlopen"


def resposta(corpo):
    """Resposta fake de urlopen (context manager)."""
    if not isinstance(corpo, str):
        corpo = json.dumps(corpo)
    response = MagicMock()
    response.read.return_value = corpo.encode("utf-8")
    response.__enter__.return_value = response
    return response


def erro_http(status, corpo=""):
    return urllib.error.HTTPError(
        "http://api.local/x", status, "erro", {}, io.BytesIO(corpo.encode("utf-8"))
    )


@pytest.fixture
def client():
    return RestClient("http://api.local/", timeout=3)


class TestColunasRejeitadas:
    def test_postgrest(self):
        corpo = '{"code":"PGRST204","message":"Could not find the \'started_at\' column of \'chamados\' in the schema cache"}'

        assert colunas_rejeitadas(corpo) == ["started_at"]

    def test_postgres(self):
        corpo = 'ERROR: column chamados.duration_text does not exist (42703)'

        assert colunas_rejeitadas(corpo) == ["duration_text"]

    def test_sem_coluna_identificavel(self):
        assert colunas_rejeitadas("bad request") == []


class TestTraduzirErroHttp:
    def test_404(self):
        assert isinstance(traduzir_erro_http(404, "", "/setores/1"), EntityNotFoundError)

    @pytest.mark.parametrize(
        "status,corpo",
        [(409, ""), (400, '{"code":"23505","message":"duplicate key"}')],
    )
    def test_duplicado(self, status, corpo):
        assert isinstance(traduzir_erro_http(status, corpo, "/usuarios"), DuplicateRecordError)

    def test_schema(self):
        erro = traduzir_erro_http(
            400, "Could not find the 'ramal' column of 'setores'", "/setores"
        )

        assert isinstance(erro, SchemaMismatchError)
        assert erro.columns == ["ramal"]

    def test_demais(self):
        erro = traduzir_erro_http(500, "boom", "/setores")

        assert type(erro) is RepositoryError
        assert erro.detail == "boom"


class TestRestClient:
    def test_url_e_query(self, client):
        assert client.url("/setores", {"username": "maria"}) == (
            "http://api.local/setores?username=maria"
        )

    def test_post_envia_json(self, client):
        with patch(URLOPEN, return_value=resposta({"id": "s-1"})) as urlopen:
            resultado = client.post("/setores", {"nome": "TI"})

        req = urlopen.call_args.args[0]
        assert resultado == {"id": "s-1"}
        assert req.get_method() == "POST"
        assert json.loads(req.data) == {"nome": "TI"}
        assert req.get_header("Content-type") == "application/json"
        assert urlopen.call_args.kwargs["timeout"] == 3

    def test_corpo_vazio(self, client):
        with patch(URLOPEN, return_value=resposta("")):
            assert client.delete("/setores/1") is None

    def test_erro_http_traduzido(self, client):
        with patch(URLOPEN, side_effect=erro_http(409, "conflict")):
            with pytest.raises(DuplicateRecordError):
                client.post("/usuarios", {"username": "maria"})

    @pytest.mark.parametrize(
        "falha", [urllib.error.URLError("connection refused"), socket.timeout("timed out")]
    )
    def test_falha_de_rede(self, client, falha):
        with patch(URLOPEN, side_effect=falha):
            with pytest.raises(RepositoryError) as exc_info:
                client.get("/setores")

        assert exc_info.value.message == MENSAGEM_FALHA_CONEXAO

    def test_json_invalido(self, client):
        with patch(URLOPEN, return_value=resposta("<html>")):
            with pytest.raises(RepositoryError):
                client.get("/setores")


class TestRestRepository:
    def test_list_all_mais_recentes_primeiro(self, client):
        registros = [
            {"id": "1", "nome": "TI", "created_at": "2024-01-01T00:00:00Z"},
            {"id": "2", "nome": "RH", "created_at": "2024-02-01T00:00:00Z"},
        ]
        with patch(URLOPEN, return_value=resposta(registros)):
            setores = RestSetorRepository(client).list_all()

        assert [s.nome for s in setores] == ["RH", "TI"]

    def test_saidas_ordenadas_por_data(self, client):
        registros = [
            {"id": "1", "produto_id": "p", "quantidade": 1, "data": "2024-03-01"},
            {"id": "2", "produto_id": "p", "quantidade": 2, "data": "2024-03-09"},
        ]
        with patch(URLOPEN, return_value=resposta(registros)):
            saidas = RestProdutoSaidaRepository(client).list_all()

        assert [s.id for s in saidas] == ["2", "1"]

    def test_list_all_resposta_inesperada(self, client):
        with patch(URLOPEN, return_value=resposta({"erro": "x"})):
            with pytest.raises(RepositoryError):
                RestSetorRepository(client).list_all()

    def test_get_by_id_404_vira_none(self, client):
        with patch(URLOPEN, side_effect=erro_http(404)):
            assert RestSetorRepository(client).get_by_id("x") is None

    def test_get_by_id_lista_postgrest(self, client):
        with patch(URLOPEN, return_value=resposta([{"id": "1", "nome": "TI"}])):
            assert RestSetorRepository(client).get_by_id("1").nome == "TI"

    def test_update_e_delete_inexistentes(self, client):
        repo = RestSetorRepository(client)

        with patch(URLOPEN, side_effect=erro_http(404)):
            with pytest.raises(EntityNotFoundError) as exc_info:
                repo.update("x", {"ramal": "1"})
            with pytest.raises(EntityNotFoundError):
                repo.delete("x")

        assert exc_info.value.entity_type == "Setor"

    def test_update_sem_corpo_consulta_registro(self, client):
        respostas = [resposta(""), resposta({"id": "1", "nome": "TI", "ramal": "9"})]
        with patch(URLOPEN, side_effect=respostas):
            setor = RestSetorRepository(client).update("1", {"ramal": "9"})

        assert setor.ramal == "9"

    def test_update_schema_mismatch_propaga(self, client):
        corpo = "Could not find the 'started_at' column of 'chamados'"
        with patch(URLOPEN, side_effect=erro_http(400, corpo)):
            with pytest.raises(SchemaMismatchError):
                RestSetorRepository(client).update("1", {"started_at": "x"})

    def test_get_by_username_exato(self, client):
        registros = [
            {"id": "1", "name": "MARIA", "username": "maria.s"},
            {"id": "2", "name": "MARIA", "username": "maria"},
        ]
        with patch(URLOPEN, return_value=resposta(registros)):
            usuario = RestUsuarioRepository(client).get_by_username("maria")

        assert usuario.id == "2"
