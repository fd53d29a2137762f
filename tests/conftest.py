import os
import tempfile
import pytest
from typing import Any, Dict, List, Optional

# Logs go to a scratch directory; must be set before utils.logger is imported
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="enquiry-logs-"))
os.environ.setdefault("N8N_WEBHOOK_URL", "https://n8n.test/webhook/real-estate")

from models.property_enquiry import EnquiryFormData
from services.supabase_enquiry_service import InsertResult, PersistenceError

VALID_ANSWERS = {
    "name": "Asha Rao",
    "email": "asha@example.com",
    "mobile": "+91 98765-43210",
    "timeline": "Immediate",
    "financing": "Ready",
    "purpose": "Residence",
    "decision_maker": "Sole",
    "activity": "Active",
    "budget": "Premium",
    "site_visit": "Near",
}


class FakeExecuteResult:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data


class FakeTableQuery:
    def __init__(self, client: "FakeSupabaseClient", table_name: str):
        self.client = client
        self.table_name = table_name
        self.rows: List[Dict[str, Any]] = []

    def insert(self, rows):
        self.rows = rows
        return self

    def execute(self):
        if self.client.error is not None:
            raise self.client.error
        stored = []
        for row in self.rows:
            stored_row = dict(row, id=f"enq-{len(self.client.inserted) + 1}")
            self.client.inserted.append((self.table_name, stored_row))
            stored.append(stored_row)
        return FakeExecuteResult(stored)


class FakeSupabaseClient:
    """Records inserts; raises `error` from execute() when set"""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.inserted: List[tuple] = []

    def table(self, table_name: str):
        return FakeTableQuery(self, table_name)


class FakeStore:
    """Stands in for SupabaseEnquiryService in form tests"""

    def __init__(self, result: Optional[InsertResult] = None, error: Optional[Exception] = None):
        self.result = result or InsertResult(data={"id": "enq-1"})
        self.error = error
        self.records: List[EnquiryFormData] = []

    async def insert(self, record: EnquiryFormData) -> InsertResult:
        self.records.append(record)
        if self.error is not None:
            raise self.error
        return self.result


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "ok"):
        self.status_code = status_code
        self.text = text

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class FakeSession:
    """Captures outbound webhook posts"""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def valid_answers() -> Dict[str, str]:
    return dict(VALID_ANSWERS)


@pytest.fixture
def relay_answers() -> Dict[str, str]:
    answers = dict(VALID_ANSWERS)
    answers["phone"] = answers.pop("mobile")
    return answers


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()
