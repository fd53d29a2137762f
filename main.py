"""
Property Enquiry Backend
FastAPI application hosting the buyer-qualification form and its submission endpoint
"""

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from functools import lru_cache
from typing import List
from datetime import datetime, timezone
from dotenv import load_dotenv
import os
import time
import uuid

load_dotenv()

from utils.logger import logger, log_api_request, RequestContext
from models.property_enquiry import EnquiryFormData, FormField, FORM_FIELDS
from services.enquiry_form import PropertyEnquiryForm, EnquiryStore
from services.supabase_enquiry_service import SupabaseEnquiryService

app = FastAPI(
    title="Property Enquiry API",
    description="Buyer-qualification questionnaire backed by Supabase",
    version="1.0.0"
)

cors_origins = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000,http://localhost:5173")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in cors_origins.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
)

@lru_cache()
def get_enquiry_store() -> EnquiryStore:
    """Supabase-backed store, created on first use"""
    return SupabaseEnquiryService()

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its duration"""
    start_time = time.time()

    with RequestContext(str(uuid.uuid4())):
        logger.info(
            f"Request started: {request.method} {request.url.path}",
            method=request.method,
            path=request.url.path,
            user_agent=request.headers.get("user-agent"),
            remote_addr=request.client.host if request.client else None
        )
        response = await call_next(request)
        log_api_request(
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration=time.time() - start_time
        )
        return response

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

@app.get("/api/enquiry-form", response_model=List[FormField])
async def get_enquiry_form():
    """Field definitions for rendering the questionnaire"""
    return FORM_FIELDS

@app.post("/api/enquiries", status_code=status.HTTP_201_CREATED)
async def submit_enquiry(request: EnquiryFormData, store: EnquiryStore = Depends(get_enquiry_store)):
    """
    Run the posted answers through the enquiry form.

    400 when the form blocks the submission (missing field, bad email or phone),
    502 when the store refuses the write or fails unexpectedly.
    """
    form = PropertyEnquiryForm(store)
    for field_name, value in request.model_dump().items():
        form.on_field_change(field_name, value)

    outcome = await form.on_submit()
    message = outcome.notification.message if outcome.notification else None

    if outcome.submitted:
        return {"submitted": True, "message": message}

    status_code = status.HTTP_400_BAD_REQUEST if outcome.blocked else status.HTTP_502_BAD_GATEWAY
    return JSONResponse(status_code=status_code, content={"submitted": False, "message": message})

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle anything the routes did not"""
    logger.error(f"Unhandled exception: {exc}", error=exc, path=request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
