# kubehook/api/routes_events.py
"""
Event ingest API routes.

Lets an external watcher push resource change events over HTTP; each
request is handled synchronously by the configured handler.
"""

from typing import Dict, Any, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from ..events.models import Event
from ..extraction.kinds import supported_kinds
from ..handlers.base import Handler

router = APIRouter(tags=["events"])


class EventRequest(BaseModel):
    """One observed resource change."""
    kind: str
    name: str = ""
    namespace: str = ""
    reason: str = ""
    status: str = ""
    message: str = ""
    new_object: Optional[Dict[str, Any]] = None
    old_object: Optional[Dict[str, Any]] = None

    def to_event(self) -> Event:
        return Event(
            kind=self.kind,
            name=self.name,
            namespace=self.namespace,
            reason=self.reason,
            status=self.status,
            message=self.message,
            new_object=self.new_object,
            old_object=self.old_object,
        )


def _get_handler(request: Request) -> Handler:
    handler = getattr(request.app.state, "handler", None)
    if handler is None:
        raise HTTPException(status_code=503, detail="Handler not initialized")
    return handler


@router.post("/events")
def post_event(event_request: EventRequest, request: Request) -> Dict[str, Any]:
    """
    Handle one event.

    Returns whether a notification was delivered and the webhook's
    response status. Dropped and failed events both report
    notified=false; failures are in the service log.
    """
    handler = _get_handler(request)
    result = handler.handle(event_request.to_event())
    status_code = getattr(result, "status_code", None)
    return {
        "notified": status_code is not None,
        "status_code": status_code,
    }


@router.get("/health")
def health(request: Request) -> Dict[str, Any]:
    """Service health and the active handler."""
    handler = _get_handler(request)
    return {
        "status": "ok",
        "handler": handler.name,
        "supported_kinds": supported_kinds(),
    }
