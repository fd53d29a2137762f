"""
Webhook Relay - standalone endpoint that hands enquiries to n8n
Always answers 200 once the downstream call completes; 500 on local faults
"""

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from dotenv import load_dotenv
import os
import uuid

load_dotenv()

from utils.logger import logger, RequestContext
from models.webhook_models import WebhookRelayRequest, WebhookRelayResponse
from services.webhook_relay_service import WebhookRelayService

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

app = FastAPI(
    title="Property Enquiry Webhook Relay",
    description="Forwards property enquiries to the n8n automation webhook",
    version="1.0.0"
)

relay_service = WebhookRelayService()

@app.options("/")
async def preflight():
    """CORS pre-flight"""
    return Response(status_code=200, headers=CORS_HEADERS)

@app.post("/")
async def trigger_webhook(request: Request):
    """
    Forward the posted enquiry to n8n.
    The downstream status is logged only; the caller always gets the same envelope.
    """
    with RequestContext(str(uuid.uuid4())):
        try:
            logger.info(
                "Relay request received",
                client=request.client.host if request.client else None,
                content_type=request.headers.get("content-type")
            )
            form_data = await request.json()
            relay_request = WebhookRelayRequest.model_validate(form_data)

            await run_in_threadpool(relay_service.forward, relay_request)

            body = WebhookRelayResponse(success=True, message="Webhook triggered successfully")
            return JSONResponse(content=body.model_dump(exclude_none=True), headers=CORS_HEADERS)

        except Exception as e:
            logger.error(f"Error triggering n8n webhook: {e}", error=e)
            body = WebhookRelayResponse(success=False, error=str(e) or "Unknown error")
            return JSONResponse(
                status_code=500,
                content=body.model_dump(exclude_none=True),
                headers=CORS_HEADERS
            )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("RELAY_PORT", "8001")))
