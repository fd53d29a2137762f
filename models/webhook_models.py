"""
Webhook Relay Models - inbound request and outbound n8n payload
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone
from models.property_enquiry import (
    Activity,
    Budget,
    DecisionMaker,
    Financing,
    Purpose,
    SiteVisit,
    Timeline,
)

def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with a Z suffix"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

class WebhookRelayRequest(BaseModel):
    """Enquiry answers posted to the relay"""
    name: str
    email: str
    phone: str
    timeline: Timeline
    financing: Financing
    purpose: Purpose
    decision_maker: DecisionMaker
    activity: Activity
    budget: Budget
    site_visit: SiteVisit

    def to_payload(self) -> "WebhookPayload":
        """Attach the server-side submission timestamp"""
        return WebhookPayload(**self.model_dump())

class WebhookPayload(WebhookRelayRequest):
    """Body forwarded to the automation webhook"""
    submitted_at: str = Field(default_factory=utc_now_iso)

class WebhookRelayResponse(BaseModel):
    """Uniform envelope returned to the relay's caller"""
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
