"""Shared test fixtures."""

from dataclasses import dataclass, field
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.reqlog.record import Severity


@dataclass
class EmittedRecord:
    severity: Severity
    message: str
    fields: dict[str, Any]


@dataclass
class RecordingSink:
    """LogSink fake that keeps every emitted record in memory."""

    records: list[EmittedRecord] = field(default_factory=list)

    def emit(self, severity: Severity, message: str, fields: dict[str, Any]) -> None:
        self.records.append(EmittedRecord(severity, message, dict(fields)))


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
