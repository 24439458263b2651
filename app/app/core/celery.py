from celery import Celery

from app.core.config import settings

celery_app = Celery(
    "app",
    backend=settings.celery_backend_url,
    broker=settings.celery_broker_url,
    include=["app.tasks.donation"],
)

celery_app.conf.timezone = "Europe/Moscow"
