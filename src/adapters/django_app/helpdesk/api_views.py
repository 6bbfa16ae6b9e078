"""
API Views JSON do Help Desk.

Endpoints:
- /api/chamados/                        GET (filtros) / POST
- /api/chamados/estatisticas/           GET - análise de serviços
- /api/chamados/<id>/                   GET / PATCH / DELETE
- /api/equipamentos/                    GET (filtros) / POST
- /api/equipamentos/estatisticas/       GET
- /api/equipamentos/sugerir-codigo/     GET ?tipo=&nome=
- /api/equipamentos/<id>/               GET / PATCH / DELETE
- /api/produtos/, /api/produtos/<id>/
- /api/saidas/, /api/saidas/<id>/
- /api/setores/, /api/setores/<id>/
- /api/usuarios/, /api/usuarios/<id>/
- /api/auth/login/, /api/auth/logout/, /api/auth/sessao/
- /api/relatorios/dashboard/

Formato:
- Entrada: JSON
- Saída: JSON com estrutura {success, data/error, meta}

Autenticação:
- Sessão Django guardando a SessaoUsuario serializada
- Sem sessão, toda rota fora de /api/auth/ responde 401
"""

import json
import logging
from dataclasses import MISSING, fields
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from src.config.container import get_container
from src.core.chamados.dtos import (
    AtualizarChamadoInputDTO,
    CriarChamadoInputDTO,
    FiltroChamadosDTO,
)
from src.core.equipamentos.dtos import (
    AtualizarEquipamentoInputDTO,
    CriarEquipamentoInputDTO,
    FiltroEquipamentosDTO,
)
from src.core.produtos.dtos import (
    AtualizarProdutoInputDTO,
    AtualizarSaidaInputDTO,
    CriarProdutoInputDTO,
    FiltroProdutosDTO,
    RegistrarSaidaInputDTO,
)
from src.core.setores.dtos import AtualizarSetorInputDTO, CriarSetorInputDTO
from src.core.shared.exceptions import (
    AuthenticationError,
    BusinessRuleViolationError,
    DomainException,
    DuplicateRecordError,
    EntityNotFoundError,
    PermissionDeniedError,
    RepositoryError,
    SchemaMismatchError,
    ValidationError,
)
from src.core.usuarios.dtos import AtualizarUsuarioInputDTO, CriarUsuarioInputDTO
from src.core.usuarios.sessao import ContextoSessao, SessaoUsuario

from .security import DjangoSessaoStore

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def json_response(success: bool, data: Any = None, error: str = None,
                  status: int = 200, meta: Dict = None) -> JsonResponse:
    """
    Cria resposta JSON padronizada.

    Args:
        success: Se operação foi bem sucedida
        data: Dados da resposta
        error: Mensagem de erro (se aplicável)
        status: HTTP status code
        meta: Metadados adicionais
    """
    response = {'success': success}

    if data is not None:
        response['data'] = data

    if error is not None:
        response['error'] = error

    if meta is not None:
        response['meta'] = meta

    return JsonResponse(response, status=status)


def parse_json_body(request: HttpRequest) -> Dict:
    """
    Parseia body JSON do request.

    Raises:
        ValueError: Se JSON inválido ou não for um objeto
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except json.JSONDecodeError as e:
        raise ValueError(f"JSON inválido: {e}")

    if not isinstance(data, dict):
        raise ValueError("JSON inválido: esperado um objeto")
    return data


def build_input_dto(dto_class, data: Dict[str, Any], **extra):
    """
    Monta um Input DTO a partir do body.

    Campos obrigatórios ausentes chegam vazios para que a validação
    do domínio produza a mensagem adequada.

    Raises:
        ValidationError: Se o body tiver campos desconhecidos
    """
    campos = fields(dto_class)
    nomes = {f.name for f in campos}
    desconhecidos = sorted(set(data) - nomes)
    if desconhecidos:
        raise ValidationError(
            f"Campo desconhecido: {', '.join(desconhecidos)}", field=desconhecidos[0]
        )

    obrigatorios = {
        f.name: ""
        for f in campos
        if f.default is MISSING and f.default_factory is MISSING
    }
    return dto_class(**{**obrigatorios, **data, **extra})


def paginate(itens: List[Any], request: HttpRequest):
    """
    Paginação simples por query string (page, per_page).

    Raises:
        ValueError: Se page/per_page não forem inteiros positivos
    """
    page = int(request.GET.get('page', 1))
    per_page = int(request.GET.get('per_page', 50))
    if page < 1 or per_page < 1:
        raise ValueError("page e per_page devem ser positivos")

    total = len(itens)
    start = (page - 1) * per_page
    meta = {
        'total': total,
        'page': page,
        'per_page': per_page,
        'total_pages': (total + per_page - 1) // per_page,
    }
    return itens[start:start + per_page], meta


# =============================================================================
# Base API View
# =============================================================================

@method_decorator(csrf_exempt, name='dispatch')
class BaseAPIView(View):
    """
    View base para APIs JSON.

    Fornece:
    - Parsing de JSON
    - Acesso ao container DI
    - Sessão do usuário logado
    - Tratamento de erros padronizado
    """

    # Views públicas (login, sessão) desligam a exigência
    requer_sessao = True

    def dispatch(self, request: HttpRequest, *args, **kwargs):
        if self.requer_sessao and request.method.lower() in self.http_method_names:
            try:
                self.get_contexto(request).exigir()
            except Exception as e:
                return self.handle_exception(e)
        return super().dispatch(request, *args, **kwargs)

    def get_container(self):
        return get_container()

    def get_service(self, service_name: str):
        """Obtém service do container."""
        return getattr(self.get_container(), service_name)()

    def parse_body(self, request: HttpRequest) -> Dict:
        return parse_json_body(request)

    def get_contexto(self, request: HttpRequest) -> ContextoSessao:
        return ContextoSessao(
            self.get_service('autenticar_usuario_service'),
            DjangoSessaoStore(request.session),
            self.get_service('encerrar_sessao_service'),
        )

    def get_sessao(self, request: HttpRequest) -> Optional[SessaoUsuario]:
        return self.get_contexto(request).atual

    def handle_exception(self, e: Exception) -> JsonResponse:
        """
        Traduz exceções em respostas JSON.

        Ordem importa: subclasses de RepositoryError antes da base.
        """
        if isinstance(e, ValidationError):
            return json_response(
                success=False,
                error=e.message,
                status=400,
                meta={'field': e.field, 'code': e.code}
            )

        if isinstance(e, EntityNotFoundError):
            return json_response(success=False, error=e.message, status=404)

        if isinstance(e, BusinessRuleViolationError):
            return json_response(
                success=False,
                error=e.message,
                status=422,
                meta={'rule': e.rule}
            )

        if isinstance(e, AuthenticationError):
            return json_response(success=False, error=e.message, status=401)

        if isinstance(e, PermissionDeniedError):
            return json_response(success=False, error=e.message, status=403)

        if isinstance(e, DuplicateRecordError):
            return json_response(success=False, error=e.message, status=409)

        if isinstance(e, SchemaMismatchError):
            logger.error(f"Schema incompatível no backend: {e.columns} ({e.detail})")
            return json_response(
                success=False,
                error=e.message,
                status=502,
                meta={'columns': e.columns}
            )

        if isinstance(e, RepositoryError):
            logger.error(f"Falha do backend: {e.message} ({e.detail})")
            return json_response(success=False, error=e.message, status=502)

        if isinstance(e, DomainException):
            return json_response(success=False, error=e.message, status=400)

        if isinstance(e, ValueError):
            return json_response(success=False, error=str(e), status=400)

        # Erro inesperado
        logger.exception(f"Erro inesperado na API: {e}")
        return json_response(
            success=False,
            error="Erro interno do servidor",
            status=500
        )


# =============================================================================
# Recursos genéricos (lista/criação e detalhe)
# =============================================================================

class RecursoListAPIView(BaseAPIView):
    """
    GET lista (filtros da query string + paginação); POST cria.

    Subclasses definem os nomes dos services no container e os DTOs.
    """

    listar_service: str = ''
    criar_service: str = ''
    filtro_dto = None
    criar_dto = None

    def listar(self, request: HttpRequest):
        service = self.get_service(self.listar_service)
        if self.filtro_dto is None:
            return service.execute()
        filtro = self.filtro_dto(**{
            f.name: request.GET[f.name]
            for f in fields(self.filtro_dto)
            if request.GET.get(f.name)
        })
        return service.execute(filtro)

    def criar(self, request: HttpRequest, data: Dict[str, Any]):
        input_dto = build_input_dto(self.criar_dto, data)
        return self.get_service(self.criar_service).execute(input_dto)

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            itens = self.listar(request)
            pagina, meta = paginate(itens, request)
            return json_response(
                success=True,
                data=[i.to_dict() for i in pagina],
                meta=meta,
            )
        except Exception as e:
            return self.handle_exception(e)

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            output = self.criar(request, self.parse_body(request))
            logger.info(f"API: {self.criar_dto.__name__} -> {output.id}")
            return json_response(success=True, data=output.to_dict(), status=201)
        except Exception as e:
            return self.handle_exception(e)


class RecursoDetailAPIView(BaseAPIView):
    """GET obtém; PATCH atualiza parcialmente; DELETE remove."""

    obter_service: str = ''
    atualizar_service: str = ''
    excluir_service: str = ''
    atualizar_dto = None

    def atualizar(self, request: HttpRequest, pk: str, data: Dict[str, Any]):
        return self.get_service(self.atualizar_service).execute(self.atualizar_dto(pk, data))

    def excluir(self, request: HttpRequest, pk: str) -> None:
        self.get_service(self.excluir_service).execute(pk)

    def get(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            output = self.get_service(self.obter_service).execute(pk)
            return json_response(success=True, data=output.to_dict())
        except Exception as e:
            return self.handle_exception(e)

    def patch(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            output = self.atualizar(request, pk, self.parse_body(request))
            return json_response(success=True, data=output.to_dict())
        except Exception as e:
            return self.handle_exception(e)

    def delete(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            self.excluir(request, pk)
            logger.info(f"API: {request.path} excluído")
            return json_response(success=True, data={'id': pk})
        except Exception as e:
            return self.handle_exception(e)


# =============================================================================
# Chamados
# =============================================================================

class ChamadoAPIListView(RecursoListAPIView):
    """
    GET /api/chamados/?status=&prioridade=&tipo_servico=&periodo=&busca=
    POST /api/chamados/

    `is_vip` vem do perfil do usuário logado e `solicitante` assume
    o nome dele quando omitido.
    """

    listar_service = 'listar_chamados_service'
    criar_service = 'criar_chamado_service'
    filtro_dto = FiltroChamadosDTO
    criar_dto = CriarChamadoInputDTO

    def criar(self, request: HttpRequest, data: Dict[str, Any]):
        sessao = self.get_contexto(request).exigir()
        extra = {'is_vip': sessao.is_vip}
        if not data.get('solicitante'):
            extra['solicitante'] = sessao.nome
        input_dto = build_input_dto(self.criar_dto, data, **extra)
        return self.get_service(self.criar_service).execute(input_dto)


class ChamadoAPIEstatisticasView(BaseAPIView):
    """GET /api/chamados/estatisticas/ - aceita os mesmos filtros da lista."""

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            filtro = FiltroChamadosDTO(**{
                f.name: request.GET[f.name]
                for f in fields(FiltroChamadosDTO)
                if request.GET.get(f.name)
            })
            estatisticas = self.get_service('analisar_chamados_service').execute(filtro)
            return json_response(success=True, data=estatisticas.to_dict())
        except Exception as e:
            return self.handle_exception(e)


class ChamadoAPIDetailView(RecursoDetailAPIView):
    obter_service = 'obter_chamado_service'
    atualizar_service = 'atualizar_chamado_service'
    excluir_service = 'excluir_chamado_service'
    atualizar_dto = AtualizarChamadoInputDTO


# =============================================================================
# Equipamentos
# =============================================================================

class EquipamentoAPIListView(RecursoListAPIView):
    listar_service = 'listar_equipamentos_service'
    criar_service = 'criar_equipamento_service'
    filtro_dto = FiltroEquipamentosDTO
    criar_dto = CriarEquipamentoInputDTO


class EquipamentoAPIEstatisticasView(BaseAPIView):
    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            estatisticas = self.get_service('analisar_equipamentos_service').execute()
            return json_response(success=True, data=estatisticas.to_dict())
        except Exception as e:
            return self.handle_exception(e)


class EquipamentoAPISugerirCodigoView(BaseAPIView):
    """
    GET /api/equipamentos/sugerir-codigo/?tipo=Desktop&nome=Laptop C

    `codigo` é null para tipos sem numeração.
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            tipo = request.GET.get('tipo', '')
            if not tipo.strip():
                raise ValidationError("Informe o tipo do equipamento", field="tipo")
            codigo = self.get_service('sugerir_codigo_service').execute(
                tipo, request.GET.get('nome', '')
            )
            return json_response(success=True, data={'codigo': codigo})
        except Exception as e:
            return self.handle_exception(e)


class EquipamentoAPIDetailView(RecursoDetailAPIView):
    """Edição e exclusão conferem o perfil da sessão (VIP sem admin: 403)."""

    obter_service = 'obter_equipamento_service'
    atualizar_service = 'atualizar_equipamento_service'
    excluir_service = 'excluir_equipamento_service'
    atualizar_dto = AtualizarEquipamentoInputDTO

    def atualizar(self, request: HttpRequest, pk: str, data: Dict[str, Any]):
        return self.get_service(self.atualizar_service).execute(
            self.atualizar_dto(pk, data), sessao=self.get_sessao(request)
        )

    def excluir(self, request: HttpRequest, pk: str) -> None:
        self.get_service(self.excluir_service).execute(pk, sessao=self.get_sessao(request))


# =============================================================================
# Produtos e saídas
# =============================================================================

class ProdutoAPIListView(RecursoListAPIView):
    listar_service = 'listar_produtos_service'
    criar_service = 'criar_produto_service'
    filtro_dto = FiltroProdutosDTO
    criar_dto = CriarProdutoInputDTO


class ProdutoAPIDetailView(RecursoDetailAPIView):
    obter_service = 'obter_produto_service'
    atualizar_service = 'atualizar_produto_service'
    excluir_service = 'excluir_produto_service'
    atualizar_dto = AtualizarProdutoInputDTO


class SaidaAPIListView(RecursoListAPIView):
    """
    GET /api/saidas/?produto_id=
    POST /api/saidas/ - registra saída e decrementa o estoque
    """

    listar_service = 'listar_saidas_service'
    criar_service = 'registrar_saida_service'
    criar_dto = RegistrarSaidaInputDTO

    def listar(self, request: HttpRequest):
        return self.get_service(self.listar_service).execute(
            produto_id=request.GET.get('produto_id') or None
        )


class SaidaAPIDetailView(RecursoDetailAPIView):
    http_method_names = ['patch', 'delete', 'options']

    atualizar_service = 'atualizar_saida_service'
    excluir_service = 'excluir_saida_service'
    atualizar_dto = AtualizarSaidaInputDTO


# =============================================================================
# Setores e usuários
# =============================================================================

class SetorAPIListView(RecursoListAPIView):
    listar_service = 'listar_setores_service'
    criar_service = 'criar_setor_service'
    criar_dto = CriarSetorInputDTO


class SetorAPIDetailView(RecursoDetailAPIView):
    obter_service = 'obter_setor_service'
    atualizar_service = 'atualizar_setor_service'
    excluir_service = 'excluir_setor_service'
    atualizar_dto = AtualizarSetorInputDTO


class UsuarioAPIListView(RecursoListAPIView):
    listar_service = 'listar_usuarios_service'
    criar_service = 'criar_usuario_service'
    criar_dto = CriarUsuarioInputDTO


class UsuarioAPIDetailView(RecursoDetailAPIView):
    http_method_names = ['patch', 'delete', 'options']

    atualizar_service = 'atualizar_usuario_service'
    excluir_service = 'excluir_usuario_service'
    atualizar_dto = AtualizarUsuarioInputDTO


# =============================================================================
# Autenticação
# =============================================================================

class LoginAPIView(BaseAPIView):
    """
    POST /api/auth/login/

    Body JSON:
    {
        "username": "string",
        "password": "string"
    }
    """

    requer_sessao = False

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = self.parse_body(request)
            sessao = self.get_contexto(request).login(
                data.get('username', ''), data.get('password', '')
            )
            return json_response(success=True, data=sessao.to_dict())
        except Exception as e:
            return self.handle_exception(e)


class LogoutAPIView(BaseAPIView):
    requer_sessao = False

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            self.get_contexto(request).logout()
            return json_response(success=True)
        except Exception as e:
            return self.handle_exception(e)


class SessaoAPIView(BaseAPIView):
    """GET /api/auth/sessao/ - usuário logado (401 sem sessão)."""

    requer_sessao = False

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            sessao = self.get_contexto(request).exigir()
            return json_response(success=True, data=sessao.to_dict())
        except Exception as e:
            return self.handle_exception(e)


# =============================================================================
# Relatórios e saúde
# =============================================================================

class DashboardAPIView(BaseAPIView):
    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            dashboard = self.get_service('dashboard_service').execute()
            return json_response(success=True, data=dashboard.to_dict())
        except Exception as e:
            return self.handle_exception(e)


class HealthCheckView(View):
    """GET /health/ - status e backend de persistência ativo."""

    def get(self, request: HttpRequest) -> JsonResponse:
        return JsonResponse({
            'status': 'ok',
            'backend': settings.HELPDESK_BACKEND,
        })
