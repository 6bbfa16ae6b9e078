"""
Configuração do Django App do Help Desk.
"""

from django.apps import AppConfig


class HelpdeskConfig(AppConfig):
    """Chamados, inventário, estoque, setores e diretório de usuários."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'src.adapters.django_app.helpdesk'
    label = 'helpdesk'
    verbose_name = 'Help Desk'
