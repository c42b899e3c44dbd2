"""Mail client handoff via mailto: links."""

import webbrowser
from typing import Callable, Optional

from .base import BaseNotificationDelivery, DeliveryResult, DeliveryStatus
from .drafts import MessageDraft


class MailtoDelivery(BaseNotificationDelivery):
    """Opens the composed draft in the user's default mail client."""

    def __init__(self, name: str = "mailto", opener: Optional[Callable[[str], bool]] = None):
        super().__init__(name)
        self.opener = opener or webbrowser.open

    def deliver(self, draft: MessageDraft) -> DeliveryResult:
        link = draft.to_mailto()
        opened = self.opener(link)

        # webbrowser.open returns False when no handler is registered
        if opened is False:
            self.logger.warning(
                "No mail client accepted the draft",
                delivery_name=self.name,
                subject=draft.subject
            )
            return DeliveryResult(
                status=DeliveryStatus.FAILED,
                message="No mail client available"
            )

        self.logger.info(
            "Draft opened in mail client",
            delivery_name=self.name,
            subject=draft.subject,
            bcc_count=len(draft.bcc)
        )
        return DeliveryResult(status=DeliveryStatus.SUCCESS, message="Opened mail client")

    def health_check(self) -> bool:
        return callable(self.opener)
