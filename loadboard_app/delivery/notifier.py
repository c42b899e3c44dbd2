"""New-load notification for subscribed carriers."""

from typing import Sequence

import structlog

from ..data.models import Load
from .base import BaseNotificationDelivery, DeliveryResult, DeliveryStatus
from .drafts import compose_new_load_notice

logger = structlog.get_logger(__name__)


class NewLoadNotifier:
    """Composes the new-load notice and hands it to a delivery mechanism."""

    def __init__(self, delivery: BaseNotificationDelivery, broker_email: str, company_name: str):
        self.delivery = delivery
        self.broker_email = broker_email
        self.company_name = company_name

    def notify(self, load: Load, recipients: Sequence[str]) -> DeliveryResult:
        draft = compose_new_load_notice(load, recipients, self.broker_email, self.company_name)
        if draft is None:
            logger.debug("No subscribers, skipping new load notice", load_id=load.id)
            return DeliveryResult(status=DeliveryStatus.SKIPPED, message="No subscribers")

        result = self.delivery.send(draft)
        logger.info(
            "New load notice handled",
            load_id=load.id,
            recipients=len(recipients),
            status=result.status.value
        )
        return result
