"""
Testes de Integração End-to-End (backend store).

Testes que validam o fluxo completo da aplicação:
- Container → Use Case → Repository Django → Database
- Unit of Work → Domain Events → Publisher
- Fallback de setores para a API REST

Executar com: pytest --run-integration
"""

import pytest
from dependency_injector import providers
from unittest.mock import patch

from src.adapters.django_app.events.publishers import InMemoryEventPublisher
from src.adapters.django_app.helpdesk.models import ProdutoModel, UsuarioModel
from src.config.container import get_container
from src.core.chamados.dtos import AtualizarChamadoInputDTO, CriarChamadoInputDTO
from src.core.equipamentos.dtos import CriarEquipamentoInputDTO
from src.core.produtos.dtos import CriarProdutoInputDTO, RegistrarSaidaInputDTO
from src.core.setores.ports import InMemorySetorRepository
from src.core.shared.exceptions import RepositoryError, ValidationError
from src.core.usuarios.dtos import CriarUsuarioInputDTO

pytestmark = [pytest.mark.integration, pytest.mark.django_db]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def event_publisher():
    """Publisher em memória para testes."""
    return InMemoryEventPublisher()


@pytest.fixture
def container(settings, event_publisher):
    """Container real no backend store, com publisher em memória."""
    settings.HELPDESK_BACKEND = "store"
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

    container = get_container()
    container.event_publisher.override(providers.Object(event_publisher))
    yield container
    container.reset_override()


# =============================================================================
# Chamados
# =============================================================================

class TestFluxoChamado:
    def test_ciclo_completo(self, container, event_publisher):
        criado = container.criar_chamado_service().execute(
            CriarChamadoInputDTO(
                titulo="Impressora sem toner",
                descricao="Financeiro não imprime",
                usuario="MARIA",
                tipo_servico="Impressora",
                prioridade="alta",
            )
        )

        atualizar = container.atualizar_chamado_service
        atualizar().execute(
            AtualizarChamadoInputDTO(chamado_id=criado.id, campos={"status": "Em Andamento"})
        )
        concluido = atualizar().execute(
            AtualizarChamadoInputDTO(chamado_id=criado.id, campos={"status": "Concluído"})
        )

        assert concluido.status == "Concluído"
        assert concluido.started_at is not None
        assert concluido.completed_at is not None
        assert concluido.duration_minutes is not None

        assert [e.event_type for e in event_publisher.published_events] == [
            "ChamadoCriadoEvent",
            "ChamadoStatusAlteradoEvent",
            "ChamadoStatusAlteradoEvent",
            "ChamadoConcluidoEvent",
        ]

        persistido = container.obter_chamado_service().execute(criado.id)
        assert persistido.duration_text == concluido.duration_text

    def test_falha_no_caso_de_uso_nao_publica(self, container, event_publisher):
        with pytest.raises(ValidationError):
            container.criar_chamado_service().execute(
                CriarChamadoInputDTO(
                    titulo="", descricao="x", usuario="MARIA", tipo_servico="Rede"
                )
            )

        assert event_publisher.published_events == []
        assert container.listar_chamados_service().execute() == []


# =============================================================================
# Inventário e estoque
# =============================================================================

class TestFluxoInventario:
    def test_patrimonio_duplicado_nao_grava(self, container):
        criar = container.criar_equipamento_service
        criar().execute(CriarEquipamentoInputDTO(nome="Desktop A", tipo="Desktop", patrimonio="PC001"))

        with pytest.raises(ValidationError):
            criar().execute(
                CriarEquipamentoInputDTO(nome="Desktop B", tipo="Desktop", patrimonio="PC001")
            )

        assert container.sugerir_codigo_service().execute("Desktop") == "PC002"

    def test_saida_decrementa_estoque(self, container, event_publisher):
        produto = container.criar_produto_service().execute(
            CriarProdutoInputDTO(nome="Toner HP", categoria="Impressão", estoque=3)
        )

        container.registrar_saida_service().execute(
            RegistrarSaidaInputDTO(produto_id=produto.id, quantidade=2, destinatario="RH")
        )
        container.registrar_saida_service().execute(
            RegistrarSaidaInputDTO(produto_id=produto.id, quantidade=5)
        )

        assert ProdutoModel.objects.get(pk=produto.id).estoque == 0
        saidas = container.listar_saidas_service().execute()
        assert [s.quantidade for s in saidas] == [5, 2]
        assert all(s.produto_nome == "Toner HP" for s in saidas)
        assert len(event_publisher.get_events_by_type("SaidaProdutoRegistradaEvent")) == 2


# =============================================================================
# Usuários
# =============================================================================

class TestFluxoUsuarios:
    def test_login_com_senha_legada_regrava_hash(self, container):
        UsuarioModel.objects.create(
            id="u-1", name="PAULO", username="paulo", tier="vip", password_hash="1234"
        )

        sessao = container.autenticar_usuario_service().execute("paulo", "1234")

        assert sessao.tier == "vip"
        assert UsuarioModel.objects.get(pk="u-1").password_hash.startswith("md5$")

    def test_cadastro_e_login(self, container):
        container.criar_usuario_service().execute(
            CriarUsuarioInputDTO(name="Maria Souza", username="maria", password="segredo")
        )

        sessao = container.autenticar_usuario_service().execute("maria", "segredo")

        assert sessao.username == "maria"


# =============================================================================
# Fallback
# =============================================================================

class TestFallbackSetores:
    def test_banco_indisponivel_usa_api(self, container):
        api = InMemorySetorRepository(registros=[{"id": "s-1", "nome": "TI"}])
        container.rest_setor_repository.override(providers.Object(api))

        with patch(
            "src.adapters.django_app.helpdesk.repositories.DjangoSetorRepository.list_all",
            side_effect=RepositoryError("could not connect to server"),
        ):
            setores = container.listar_setores_service().execute()

        assert [s.nome for s in setores] == ["TI"]

    def test_tabela_vazia_consulta_api(self, container):
        api = InMemorySetorRepository(registros=[{"id": "s-1", "nome": "RH"}])
        container.rest_setor_repository.override(providers.Object(api))

        assert [s.nome for s in container.listar_setores_service().execute()] == ["RH"]
