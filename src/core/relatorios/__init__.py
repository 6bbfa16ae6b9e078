"""
Relatórios - Indicadores agregados sobre todos os domínios.
"""

from .use_cases import DashboardDTO, DashboardService

__all__ = ["DashboardDTO", "DashboardService"]
