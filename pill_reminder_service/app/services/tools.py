import uuid
from typing import Any, Dict, List

from app.schemas.models import NotificationPayload, ToolResult

def mock_show_notification(title: str, body: str) -> ToolResult:
    return ToolResult(ok=True, mock=True, details={"notification_id": "ntf_" + uuid.uuid4().hex[:8], "title": title, "body": body})

class NotificationOutbox:
    """Notifications delivered by the mock platform, kept for clients to poll."""

    def __init__(self, max_items: int = 100):
        self.max_items = max_items
        self._items: List[Dict[str, Any]] = []

    def deliver(self, payload: NotificationPayload) -> ToolResult:
        result = mock_show_notification(payload.title, payload.body)
        if result.ok:
            self._items.append({**payload.model_dump(mode="json"), **result.details})
            del self._items[: -self.max_items]
        return result

    def list(self) -> List[Dict[str, Any]]:
        return list(self._items)
