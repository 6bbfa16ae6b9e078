"""
Django Admin do Help Desk.

Consulta e manutenção direta das tabelas do backend store.
"""

from django.contrib import admin
from django.utils.html import format_html

from .models import (
    ChamadoModel,
    EquipamentoModel,
    ProdutoModel,
    ProdutoSaidaModel,
    SetorModel,
    UsuarioModel,
)


def _badge(cor: str, texto: str):
    return format_html(
        '<span style="background-color: {}; color: white; padding: 3px 8px; '
        'border-radius: 3px; font-size: 11px;">{}</span>',
        cor,
        texto
    )


@admin.register(ChamadoModel)
class ChamadoAdmin(admin.ModelAdmin):
    list_display = [
        'id_curto',
        'titulo',
        'status_badge',
        'prioridade_badge',
        'usuario',
        'tipo_servico',
        'is_vip',
        'data',
        'duration_text',
    ]

    list_filter = [
        'status',
        'prioridade',
        'tipo_servico',
        'is_vip',
    ]

    search_fields = [
        'id',
        'titulo',
        'usuario',
        'solicitante',
    ]

    readonly_fields = [
        'id',
        'created_at',
        'started_at',
        'completed_at',
        'duration_minutes',
        'duration_text',
    ]

    ordering = ['-created_at']

    date_hierarchy = 'created_at'

    def id_curto(self, obj):
        """Exibe ID curto (primeiros 8 caracteres)."""
        return obj.id[:8] + '...'
    id_curto.short_description = 'ID'

    def status_badge(self, obj):
        colors = {
            'Aberto': '#17a2b8',
            'Em Andamento': '#ffc107',
            'Concluído': '#28a745',
        }
        return _badge(colors.get(obj.status, '#6c757d'), obj.status)
    status_badge.short_description = 'Status'

    def prioridade_badge(self, obj):
        colors = {
            'baixa': '#28a745',
            'media': '#ffc107',
            'alta': '#dc3545',
        }
        return _badge(colors.get(obj.prioridade, '#6c757d'), obj.get_prioridade_display())
    prioridade_badge.short_description = 'Prioridade'


@admin.register(EquipamentoModel)
class EquipamentoAdmin(admin.ModelAdmin):
    list_display = ['patrimonio', 'nome', 'tipo', 'status', 'usuario', 'setor']
    list_filter = ['tipo', 'status', 'setor']
    search_fields = ['patrimonio', 'nome', 'usuario']
    ordering = ['tipo', 'patrimonio']


class ProdutoSaidaInline(admin.TabularInline):
    model = ProdutoSaidaModel
    extra = 0
    fields = ['quantidade', 'destinatario', 'data']
    readonly_fields = ['quantidade', 'destinatario', 'data']


@admin.register(ProdutoModel)
class ProdutoAdmin(admin.ModelAdmin):
    list_display = ['nome', 'categoria', 'estoque']
    list_filter = ['categoria']
    search_fields = ['nome', 'descricao']
    inlines = [ProdutoSaidaInline]


@admin.register(ProdutoSaidaModel)
class ProdutoSaidaAdmin(admin.ModelAdmin):
    list_display = ['produto', 'quantidade', 'destinatario', 'data']
    list_filter = ['data']
    search_fields = ['produto__nome', 'destinatario']
    date_hierarchy = 'data'


@admin.register(SetorModel)
class SetorAdmin(admin.ModelAdmin):
    list_display = ['nome', 'responsavel', 'ramal', 'localizacao']
    search_fields = ['nome', 'responsavel']


@admin.register(UsuarioModel)
class UsuarioAdmin(admin.ModelAdmin):
    """O hash da senha nunca é editável pelo admin."""

    list_display = ['username', 'name', 'setor', 'cargo', 'tier']
    list_filter = ['tier', 'setor']
    search_fields = ['username', 'name']
    exclude = ['password_hash']
