"""
URL Configuration do Help Desk.

Estrutura:
- /admin/  - Django Admin
- /api/    - API JSON (chamados, equipamentos, produtos, setores, usuários)
- /health/ - Health check
"""

from django.contrib import admin
from django.urls import include, path

from src.adapters.django_app.helpdesk.api_views import HealthCheckView

urlpatterns = [
    path('admin/', admin.site.urls),

    path('api/', include('src.adapters.django_app.helpdesk.urls')),

    path('health/', HealthCheckView.as_view(), name='health'),
]
