from celery import Celery

from linkscrap.core.config import settings

celery = Celery(
    "linkscrap",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["linkscrap.workers.tasks"],
)

celery.conf.update(
    task_routes={"linkscrap.workers.tasks.*": {"queue": "snapshots"}},
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    # a task sleeps through the whole snapshot poll loop
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_soft_time_limit=int(settings.snapshot_max_wait) + 120,
    result_expires=24 * 3600,
)
