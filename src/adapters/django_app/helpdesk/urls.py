"""
URL patterns da API JSON do Help Desk.

Rotas fixas (estatisticas/, sugerir-codigo/) vêm antes de <pk>
para não conflitar.
"""

from django.urls import path

from . import api_views

app_name = 'helpdesk'

urlpatterns = [
    # =========================================================================
    # Chamados
    # =========================================================================

    path('chamados/', api_views.ChamadoAPIListView.as_view(), name='chamados'),
    path(
        'chamados/estatisticas/',
        api_views.ChamadoAPIEstatisticasView.as_view(),
        name='chamados_estatisticas',
    ),
    path('chamados/<str:pk>/', api_views.ChamadoAPIDetailView.as_view(), name='chamado'),

    # =========================================================================
    # Equipamentos
    # =========================================================================

    path('equipamentos/', api_views.EquipamentoAPIListView.as_view(), name='equipamentos'),
    path(
        'equipamentos/estatisticas/',
        api_views.EquipamentoAPIEstatisticasView.as_view(),
        name='equipamentos_estatisticas',
    ),
    path(
        'equipamentos/sugerir-codigo/',
        api_views.EquipamentoAPISugerirCodigoView.as_view(),
        name='equipamentos_sugerir_codigo',
    ),
    path(
        'equipamentos/<str:pk>/',
        api_views.EquipamentoAPIDetailView.as_view(),
        name='equipamento',
    ),

    # =========================================================================
    # Produtos e saídas
    # =========================================================================

    path('produtos/', api_views.ProdutoAPIListView.as_view(), name='produtos'),
    path('produtos/<str:pk>/', api_views.ProdutoAPIDetailView.as_view(), name='produto'),
    path('saidas/', api_views.SaidaAPIListView.as_view(), name='saidas'),
    path('saidas/<str:pk>/', api_views.SaidaAPIDetailView.as_view(), name='saida'),

    # =========================================================================
    # Setores e usuários
    # =========================================================================

    path('setores/', api_views.SetorAPIListView.as_view(), name='setores'),
    path('setores/<str:pk>/', api_views.SetorAPIDetailView.as_view(), name='setor'),
    path('usuarios/', api_views.UsuarioAPIListView.as_view(), name='usuarios'),
    path('usuarios/<str:pk>/', api_views.UsuarioAPIDetailView.as_view(), name='usuario'),

    # =========================================================================
    # Autenticação e relatórios
    # =========================================================================

    path('auth/login/', api_views.LoginAPIView.as_view(), name='login'),
    path('auth/logout/', api_views.LogoutAPIView.as_view(), name='logout'),
    path('auth/sessao/', api_views.SessaoAPIView.as_view(), name='sessao'),
    path('relatorios/dashboard/', api_views.DashboardAPIView.as_view(), name='dashboard'),
]
