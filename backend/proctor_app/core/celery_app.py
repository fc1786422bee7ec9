from celery import Celery
import logging

from proctor_app.core.config import settings

logging.getLogger('celery.backends.redis').setLevel(logging.ERROR)

celery_app = Celery(
    "proctoring_worker",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        'proctor_app.tasks.maintenance',
    ]
)

celery_app.conf.update(
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='UTC',
    enable_utc=True,

    task_routes={
        'proctor_app.tasks.maintenance.*': {'queue': 'maintenance'},
    },

    worker_prefetch_multiplier=1,
    task_acks_late=True,
    worker_max_tasks_per_child=1000,

    task_soft_time_limit=300,
    task_time_limit=600,

    result_expires=3600,
    broker_connection_retry_on_startup=True,

    task_default_retry_delay=60,
    task_max_retries=3,

    beat_schedule={
        'terminate-stale-proctoring-sessions': {
            'task': 'terminate_stale_proctoring_sessions',
            'schedule': settings.stale_sweep_interval_seconds,
        },
    },
)
