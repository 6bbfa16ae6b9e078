"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.
Usa dependency-injector para lazy-loading e injeção automática.

Padrões:
- Selector: escolhe backend (store/rest) e publisher (sync/celery)
  uma única vez, a partir da configuração
- Singleton: Uma instância para toda app (repositories, client REST)
- Factory: Nova instância por chamada (services, UoW)

Backend store:
- Repositórios Django ORM
- Setores e saídas com fallback explícito para a API REST

Backend rest:
- Todos os repositórios sobre a API REST legada
"""

from typing import Optional
import importlib

from dependency_injector import containers, providers

from src.adapters.django_app.events.publishers import (
    CeleryEventPublisher,
    LoggingEventPublisher,
)
from src.adapters.django_app.shared.unit_of_work import (
    DjangoUnitOfWork,
    NonTransactionalUnitOfWork,
)
from src.adapters.fallback import FallbackRepository
from src.adapters.rest_api.client import RestClient
from src.adapters.rest_api.repositories import (
    RestChamadoRepository,
    RestEquipamentoRepository,
    RestProdutoRepository,
    RestProdutoSaidaRepository,
    RestSetorRepository,
    RestUsuarioRepository,
)
from src.core.chamados import use_cases as chamados
from src.core.equipamentos import use_cases as equipamentos
from src.core.produtos import use_cases as produtos
from src.core.relatorios.use_cases import DashboardService
from src.core.setores import use_cases as setores
from src.core.usuarios import use_cases as usuarios


def _importar(caminho: str):
    """
    Import tardio de 'modulo.Classe'.

    Repositórios Django importam models, que exigem o app registry
    pronto; o import só acontece quando o provider é chamado.
    """
    modulo, nome = caminho.rsplit('.', 1)

    def construir(*args, **kwargs):
        return getattr(importlib.import_module(modulo), nome)(*args, **kwargs)

    return construir


DJANGO_REPOS = 'src.adapters.django_app.helpdesk.repositories'


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: backend, API REST, modo de eventos
    - Infrastructure: publisher, client REST, hasher
    - Repositories: store ou rest (Selector)
    - Unit of Work: transacional no store
    - Services: Use Cases

    Example:
        container = Container()
        container.config.from_dict({
            'backend': 'rest',
            'api_url': 'http://localhost:3001',
            'api_timeout': 10,
            'event_publisher_mode': 'sync',
        })
        container.listar_setores_service().execute()
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    config = providers.Configuration()

    # =========================================================================
    # Infrastructure
    # =========================================================================

    event_publisher = providers.Selector(
        config.event_publisher_mode,
        sync=providers.Singleton(LoggingEventPublisher),
        celery=providers.Singleton(CeleryEventPublisher),
    )

    rest_client = providers.Singleton(
        RestClient,
        base_url=config.api_url,
        timeout=config.api_timeout,
    )

    password_hasher = providers.Singleton(
        _importar('src.adapters.django_app.helpdesk.security.DjangoPasswordHasher')
    )

    # =========================================================================
    # Repositories
    # =========================================================================

    rest_setor_repository = providers.Singleton(RestSetorRepository, client=rest_client)
    rest_saida_repository = providers.Singleton(RestProdutoSaidaRepository, client=rest_client)

    chamado_repository = providers.Selector(
        config.backend,
        store=providers.Singleton(_importar(f'{DJANGO_REPOS}.DjangoChamadoRepository')),
        rest=providers.Singleton(RestChamadoRepository, client=rest_client),
    )

    equipamento_repository = providers.Selector(
        config.backend,
        store=providers.Singleton(_importar(f'{DJANGO_REPOS}.DjangoEquipamentoRepository')),
        rest=providers.Singleton(RestEquipamentoRepository, client=rest_client),
    )

    produto_repository = providers.Selector(
        config.backend,
        store=providers.Singleton(_importar(f'{DJANGO_REPOS}.DjangoProdutoRepository')),
        rest=providers.Singleton(RestProdutoRepository, client=rest_client),
    )

    saida_repository = providers.Selector(
        config.backend,
        store=providers.Singleton(
            FallbackRepository,
            primario=providers.Singleton(
                _importar(f'{DJANGO_REPOS}.DjangoProdutoSaidaRepository')
            ),
            secundario=rest_saida_repository,
            nome='produto_saidas',
        ),
        rest=rest_saida_repository,
    )

    setor_repository = providers.Selector(
        config.backend,
        store=providers.Singleton(
            FallbackRepository,
            primario=providers.Singleton(_importar(f'{DJANGO_REPOS}.DjangoSetorRepository')),
            secundario=rest_setor_repository,
            nome='setores',
            fallback_lista_vazia=True,
        ),
        rest=rest_setor_repository,
    )

    usuario_repository = providers.Selector(
        config.backend,
        store=providers.Singleton(_importar(f'{DJANGO_REPOS}.DjangoUsuarioRepository')),
        rest=providers.Singleton(RestUsuarioRepository, client=rest_client),
    )

    # =========================================================================
    # Unit of Work (Factory - nova instância por operação)
    # =========================================================================

    unit_of_work = providers.Selector(
        config.backend,
        store=providers.Factory(DjangoUnitOfWork, event_publisher=event_publisher),
        rest=providers.Factory(NonTransactionalUnitOfWork, event_publisher=event_publisher),
    )

    # =========================================================================
    # Services - Chamados
    # =========================================================================

    criar_chamado_service = providers.Factory(
        chamados.CriarChamadoService,
        chamado_repo=chamado_repository,
        uow=unit_of_work,
    )

    atualizar_chamado_service = providers.Factory(
        chamados.AtualizarChamadoService,
        chamado_repo=chamado_repository,
        uow=unit_of_work,
    )

    # Leitura (sem UoW)
    listar_chamados_service = providers.Factory(
        chamados.ListarChamadosService,
        chamado_repo=chamado_repository,
    )

    obter_chamado_service = providers.Factory(
        chamados.ObterChamadoService,
        chamado_repo=chamado_repository,
    )

    excluir_chamado_service = providers.Factory(
        chamados.ExcluirChamadoService,
        chamado_repo=chamado_repository,
        uow=unit_of_work,
    )

    analisar_chamados_service = providers.Factory(
        chamados.AnalisarChamadosService,
        chamado_repo=chamado_repository,
    )

    # =========================================================================
    # Services - Equipamentos
    # =========================================================================

    criar_equipamento_service = providers.Factory(
        equipamentos.CriarEquipamentoService,
        equipamento_repo=equipamento_repository,
        uow=unit_of_work,
    )

    atualizar_equipamento_service = providers.Factory(
        equipamentos.AtualizarEquipamentoService,
        equipamento_repo=equipamento_repository,
        uow=unit_of_work,
    )

    listar_equipamentos_service = providers.Factory(
        equipamentos.ListarEquipamentosService,
        equipamento_repo=equipamento_repository,
    )

    obter_equipamento_service = providers.Factory(
        equipamentos.ObterEquipamentoService,
        equipamento_repo=equipamento_repository,
    )

    excluir_equipamento_service = providers.Factory(
        equipamentos.ExcluirEquipamentoService,
        equipamento_repo=equipamento_repository,
        uow=unit_of_work,
    )

    sugerir_codigo_service = providers.Factory(
        equipamentos.SugerirCodigoService,
        equipamento_repo=equipamento_repository,
    )

    analisar_equipamentos_service = providers.Factory(
        equipamentos.AnalisarEquipamentosService,
        equipamento_repo=equipamento_repository,
    )

    # =========================================================================
    # Services - Produtos e saídas
    # =========================================================================

    criar_produto_service = providers.Factory(
        produtos.CriarProdutoService,
        produto_repo=produto_repository,
        uow=unit_of_work,
    )

    atualizar_produto_service = providers.Factory(
        produtos.AtualizarProdutoService,
        produto_repo=produto_repository,
        uow=unit_of_work,
    )

    listar_produtos_service = providers.Factory(
        produtos.ListarProdutosService,
        produto_repo=produto_repository,
    )

    obter_produto_service = providers.Factory(
        produtos.ObterProdutoService,
        produto_repo=produto_repository,
    )

    excluir_produto_service = providers.Factory(
        produtos.ExcluirProdutoService,
        produto_repo=produto_repository,
        uow=unit_of_work,
    )

    registrar_saida_service = providers.Factory(
        produtos.RegistrarSaidaService,
        saida_repo=saida_repository,
        produto_repo=produto_repository,
        uow=unit_of_work,
    )

    listar_saidas_service = providers.Factory(
        produtos.ListarSaidasService,
        saida_repo=saida_repository,
        produto_repo=produto_repository,
    )

    atualizar_saida_service = providers.Factory(
        produtos.AtualizarSaidaService,
        saida_repo=saida_repository,
        uow=unit_of_work,
    )

    excluir_saida_service = providers.Factory(
        produtos.ExcluirSaidaService,
        saida_repo=saida_repository,
        uow=unit_of_work,
    )

    # =========================================================================
    # Services - Setores
    # =========================================================================

    criar_setor_service = providers.Factory(
        setores.CriarSetorService,
        setor_repo=setor_repository,
        uow=unit_of_work,
    )

    atualizar_setor_service = providers.Factory(
        setores.AtualizarSetorService,
        setor_repo=setor_repository,
        uow=unit_of_work,
    )

    listar_setores_service = providers.Factory(
        setores.ListarSetoresService,
        setor_repo=setor_repository,
    )

    obter_setor_service = providers.Factory(
        setores.ObterSetorService,
        setor_repo=setor_repository,
    )

    excluir_setor_service = providers.Factory(
        setores.ExcluirSetorService,
        setor_repo=setor_repository,
        uow=unit_of_work,
    )

    # =========================================================================
    # Services - Usuários e sessão
    # =========================================================================

    criar_usuario_service = providers.Factory(
        usuarios.CriarUsuarioService,
        usuario_repo=usuario_repository,
        hasher=password_hasher,
        uow=unit_of_work,
    )

    atualizar_usuario_service = providers.Factory(
        usuarios.AtualizarUsuarioService,
        usuario_repo=usuario_repository,
        hasher=password_hasher,
        uow=unit_of_work,
    )

    listar_usuarios_service = providers.Factory(
        usuarios.ListarUsuariosService,
        usuario_repo=usuario_repository,
    )

    excluir_usuario_service = providers.Factory(
        usuarios.ExcluirUsuarioService,
        usuario_repo=usuario_repository,
        uow=unit_of_work,
    )

    autenticar_usuario_service = providers.Factory(
        usuarios.AutenticarUsuarioService,
        usuario_repo=usuario_repository,
        hasher=password_hasher,
    )

    encerrar_sessao_service = providers.Factory(usuarios.EncerrarSessaoService)

    # =========================================================================
    # Services - Relatórios
    # =========================================================================

    dashboard_service = providers.Factory(
        DashboardService,
        chamado_repo=chamado_repository,
        equipamento_repo=equipamento_repository,
        produto_repo=produto_repository,
        usuario_repo=usuario_repository,
        setor_repo=setor_repository,
    )


# =============================================================================
# Container Global (Singleton)
# =============================================================================

_container: Optional[Container] = None


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria se não existir, configurada a partir do Django settings.
    """
    global _container

    if _container is None:
        from django.conf import settings

        _container = Container()
        _container.config.from_dict({
            'backend': settings.HELPDESK_BACKEND,
            'api_url': settings.API_URL,
            'api_timeout': settings.API_TIMEOUT,
            'event_publisher_mode': settings.EVENT_PUBLISHER_MODE,
        })

    return _container


def reset_container() -> None:
    """Reset do container (para testes)."""
    global _container
    _container = None
