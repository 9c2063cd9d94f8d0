# storefront/services/notification_service.py
from decimal import Decimal

from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysyłania powiadomień.
    Używa Celery do asynchronicznego przetwarzania.
    """

    def send_order_placed(self, user_id: int, order_id: int, total: Decimal):
        send_order_placed_task.delay(user_id, order_id, str(total))


@celery_app.task(name="storefront.services.notification_service.send_order_placed_task")
def send_order_placed_task(user_id: int, order_id: int, total: str):
    """
    Celery task - w prawdziwym systemie wysłałby email/SMS.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} placed, total {total}")
    return {"user_id": user_id, "order_id": order_id, "total": total, "status": "sent"}
