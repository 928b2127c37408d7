"""
Module tasks.worker - Celery application running the periodic Highrise sync.

Cycles must not overlap, so run a single worker process on the sync queue:

    celery -A src.tasks.worker worker -B -Q highrise -c 1
"""

from celery import Celery, signals

from src.settings import app_settings
from src.util.logging import setup_logging
from src.util.sentry import init as init_sentry


SYNC_QUEUE = "highrise"

celery_app = Celery(
    app_settings.app_name,
    broker=f"{app_settings.redis_url}/0",
    backend=f"{app_settings.redis_url}/1",
    include=["src.crm.tasks"],
)

celery_app.conf.update(
    beat_schedule={
        "highrise-slack-sync": {
            "task": "src.crm.tasks.sync_highrise_recordings",
            "schedule": float(app_settings.sync_interval_seconds),
            "args": (),
            # drop runs that could not start before the next one is due
            "options": {"expires": app_settings.sync_interval_seconds},
        },
    },
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    enable_utc=True,
    timezone="UTC",
    worker_concurrency=1,
    worker_prefetch_multiplier=1,
    task_time_limit=600,
    task_soft_time_limit=540,
    task_routes={
        "src.crm.tasks.*": {"queue": SYNC_QUEUE},
    },
)


@signals.setup_logging.connect
def configure_logging(**kwargs):
    """Use Loguru instead of Celery's logging configuration."""
    setup_logging(
        log_level=app_settings.log_level,
        json_logs=app_settings.log_json,
        log_to_file=app_settings.log_to_file,
    )
    init_sentry()
