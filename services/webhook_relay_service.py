"""
Webhook Relay Service - forwards enquiries to the n8n automation webhook
"""

import os
import requests
from typing import Optional
from models.webhook_models import WebhookPayload, WebhookRelayRequest
from utils.logger import logger, log_business_event

DEFAULT_WEBHOOK_URL = "https://sumeettz.app.n8n.cloud/webhook-test/real-estate"

class WebhookRelayService:
    """
    Fire-and-forget delivery: the downstream status is logged, never returned.
    Transport failures (DNS, refused connection, timeout) raise to the caller.
    """

    def __init__(self, webhook_url: Optional[str] = None, timeout: Optional[float] = None):
        self.webhook_url = webhook_url or os.getenv("N8N_WEBHOOK_URL", DEFAULT_WEBHOOK_URL)
        self.timeout = timeout if timeout is not None else float(os.getenv("WEBHOOK_TIMEOUT_SECONDS", "10"))
        self.headers = {
            "Content-Type": "application/json"
        }

    def forward(self, request: WebhookRelayRequest) -> WebhookPayload:
        """Stamp the enquiry and POST it downstream"""
        payload = request.to_payload()
        logger.info("Sending to n8n webhook", payload=payload.model_dump(mode="json"))

        # No shared Session; forward runs on thread-pool workers
        response = requests.post(
            self.webhook_url,
            data=payload.model_dump_json(),
            headers=self.headers,
            timeout=self.timeout
        )

        logger.info(
            f"n8n webhook response: {response.status_code}",
            status_code=response.status_code,
            response_text=response.text
        )
        if not response.ok:
            logger.warning(
                f"n8n webhook returned {response.status_code}; not retried",
                webhook_url=self.webhook_url
            )

        log_business_event(
            event="enquiry_relayed",
            entity_type="webhook",
            details={"status_code": response.status_code, "submitted_at": payload.submitted_at}
        )
        return payload
