"""
Configuração do Celery para processamento assíncrono.

O Celery é usado para:
- Processar Domain Events fora do request (EVENT_PUBLISHER_MODE=celery)
- Notificações da equipe de suporte
- Tarefas agendadas (relatório diário, varredura de estoque baixo)

Arquitetura:
- Broker: RabbitMQ (mensagens entre Django e Workers)
- Backend: Redis (resultados de tarefas)
- Workers: Processos que executam as tarefas

Uso:
    # Iniciar worker
    celery -A src.config.celery worker -l INFO -Q default,events,notifications,reports

    # Iniciar beat (tarefas agendadas)
    celery -A src.config.celery beat -l INFO
"""

import os

from celery import Celery
from celery.schedules import crontab
from kombu import Exchange, Queue

# Definir módulo de settings do Django
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

app = Celery('helpdesk')

# Carregar configurações do Django (prefixo CELERY_)
app.config_from_object('django.conf:settings', namespace='CELERY')

app.conf.update(
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',

    timezone='America/Sao_Paulo',
    enable_utc=True,

    task_acks_late=True,  # ACK após execução
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,

    task_default_retry_delay=60,
    task_max_retries=3,

    result_expires=3600,

    worker_send_task_events=True,
    task_send_sent_event=True,
)

# Filas
app.conf.task_default_queue = 'default'
app.conf.task_queues = (
    Queue('default', Exchange('default'), routing_key='default'),
    Queue('events', Exchange('events'), routing_key='events.#'),
    Queue('notifications', Exchange('notifications'), routing_key='notifications.#'),
    Queue('reports', Exchange('reports'), routing_key='reports.#'),
)

HANDLERS = 'src.adapters.django_app.events.handlers'

# Roteamento de tarefas para filas
app.conf.task_routes = {
    f'{HANDLERS}.dispatch_domain_event': {'queue': 'events'},
    f'{HANDLERS}.handle_*': {'queue': 'events'},
    f'{HANDLERS}.handle_saida_registrada': {'queue': 'notifications'},
    f'{HANDLERS}.generate_daily_report': {'queue': 'reports'},
    f'{HANDLERS}.check_low_stock': {'queue': 'reports'},
}

app.autodiscover_tasks([
    'src.adapters.django_app.events',
], related_name='handlers')

# Tarefas agendadas (beat)
app.conf.beat_schedule = {
    # Relatório diário às 8h
    'daily-report': {
        'task': f'{HANDLERS}.generate_daily_report',
        'schedule': crontab(hour=8, minute=0),
    },

    # Produtos com estoque baixo a cada hora
    'check-low-stock': {
        'task': f'{HANDLERS}.check_low_stock',
        'schedule': 3600.0,
    },
}
