"""Standard output notification delivery mechanism."""

import json
import sys
from typing import Optional, TextIO

from .base import BaseNotificationDelivery, DeliveryResult, DeliveryStatus
from .drafts import MessageDraft


class StdoutDelivery(BaseNotificationDelivery):
    """Prints drafts instead of opening a mail client."""

    def __init__(self, name: str = "stdout", format: str = "pretty", stream: Optional[TextIO] = None):
        super().__init__(name)
        if format not in ("pretty", "json"):
            raise ValueError(f"Unknown stdout format: {format}")
        self.format = format
        self.stream = stream

    def deliver(self, draft: MessageDraft) -> DeliveryResult:
        stream = self.stream or sys.stdout
        print(self._format_draft(draft), file=stream, flush=True)

        self.logger.info(
            "Draft printed to stdout",
            delivery_name=self.name,
            subject=draft.subject
        )
        return DeliveryResult(status=DeliveryStatus.SUCCESS, message="Printed to stdout")

    def _format_draft(self, draft: MessageDraft) -> str:
        if self.format == "json":
            return json.dumps({
                "to": draft.to,
                "bcc": list(draft.bcc),
                "subject": draft.subject,
                "body": draft.body,
            })

        lines = [f"To: {draft.to}"]
        if draft.bcc:
            lines.append(f"Bcc: {', '.join(draft.bcc)}")
        lines.append(f"Subject: {draft.subject}")
        lines.append("")
        lines.append(draft.body)
        return "\n".join(lines)

    def health_check(self) -> bool:
        """Check if stdout is available."""
        try:
            return (self.stream or sys.stdout).writable()
        except Exception:
            return False
