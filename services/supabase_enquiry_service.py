"""
Supabase Enquiry Service - writes property enquiries to Supabase
"""

import os
import time
from typing import Any, Dict, Optional
import httpx
from pydantic import BaseModel
from supabase import create_client, Client, PostgrestAPIError
from models.property_enquiry import EnquiryFormData
from utils.logger import logger, log_database_operation

class PersistenceError(BaseModel):
    """Why the store refused a write"""
    message: str
    code: Optional[str] = None
    details: Optional[str] = None

class InsertResult(BaseModel):
    """Outcome of a single insert; error is None on success"""
    error: Optional[PersistenceError] = None
    data: Optional[Dict[str, Any]] = None

    @property
    def success(self) -> bool:
        return self.error is None

class SupabaseEnquiryService:
    """
    Append-only access to the property_enquiries table.
    Store rejections come back as InsertResult.error; anything else raises.
    """

    def __init__(self, client: Optional[Client] = None, table_name: Optional[str] = None):
        self.table_name = table_name or os.getenv("ENQUIRY_TABLE", "property_enquiries")

        if client is None:
            supabase_url = os.getenv("SUPABASE_URL")
            supabase_key = os.getenv("SUPABASE_ANON_KEY")
            if not all([supabase_url, supabase_key]):
                raise ValueError("Missing required Supabase credentials")
            client = create_client(supabase_url, supabase_key)

        self.supabase: Client = client

    async def insert(self, record: EnquiryFormData) -> InsertResult:
        """Insert one enquiry; id and created_at are assigned by the table"""
        start_time = time.time()
        try:
            result = self.supabase.table(self.table_name).insert([record.to_record()]).execute()
        except PostgrestAPIError as e:
            logger.error(
                f"Supabase rejected enquiry insert: {e.message}",
                table=self.table_name,
                code=e.code,
                details=e.details
            )
            return InsertResult(error=PersistenceError(
                message=e.message or str(e),
                code=str(e.code) if e.code is not None else None,
                details=e.details if isinstance(e.details, str) else None
            ))
        except httpx.HTTPError as e:
            logger.error(f"Supabase unreachable: {e}", table=self.table_name)
            return InsertResult(error=PersistenceError(message=str(e), code="connection_error"))

        rows = result.data or []
        log_database_operation("insert", self.table_name, time.time() - start_time, affected_rows=len(rows))
        return InsertResult(data=rows[0] if rows else None)
