"""
Configuración de fixtures para pytest.

Airtable se reemplaza por un cliente en memoria con las mismas operaciones
que usa AirtableGateway (list/get/create/update), de modo que los tests de
endpoints recorren gateway + casos de uso + routers reales.
"""
import copy
import itertools
import re
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.api.v1.dependencies.use_case_deps import get_airtable_gateway
from app.infrastructure.external.airtable.airtable_client import AirtableApiError
from app.infrastructure.external.airtable.airtable_gateway import AirtableGateway


SECRET_KEY = "123456"

_FORMULA_RE = re.compile(r'^\{(?P<field>.+?)\} = "(?P<value>(?:[^"\\]|\\.)*)"$')


def _sample_tables() -> Dict[str, Dict[str, Dict[str, Any]]]:
    """Base de ejemplo: usuario usr1 con 2 cuentas, 2 proyectos y 2 updates."""
    return {
        "Users": {
            "usr1": {
                "User Name": "Priya",
                "secret_key": SECRET_KEY,
                "Accounts": ["acc1", "acc2"],
                "Projects": ["prj1", "prj2"],
                "Updates": ["upd1", "upd2"],
            },
            "usr2": {"User Name": "Ravi", "secret_key": "654321", "Projects": ["prj3"]},
        },
        "Accounts": {
            "acc1": {"Account Name": "Acme Corp", "Account Type": "Client", "Projects": ["prj1"]},
            "acc2": {"Account Name": "Globex", "Account Type": "Vendor", "Projects": ["prj2"]},
            "acc3": {"Account Name": "Initech", "Account Type": "Client", "Projects": ["prj3"]},
        },
        "Projects": {
            "prj1": {
                "Project Name": "Acme Rollout",
                "Project Status": "Negotiation",
                "Account": ["acc1"],
                "Updates": ["upd1", "upd3"],
            },
            "prj2": {
                "Project Name": "Globex Audit",
                "Project Status": "Need Analysis",
                "Account": ["acc2"],
                "Updates": ["upd2"],
            },
            "prj3": {"Project Name": "Initech Pilot", "Project Status": "Closed Won", "Account": ["acc3"]},
        },
        "Updates": {
            "upd1": {"Project": ["prj1"], "Date": "2025-06-01", "Notes": "Kickoff call", "Update Type": "Call"},
            "upd2": {"Project": ["prj2"], "Date": "2025-06-01", "Notes": "Sent proposal", "Update Type": "Email"},
            "upd3": {"Project": ["prj1"], "Date": "2025-06-02", "Notes": "Follow-up", "Update Type": "Call"},
            "upd4": {"Project": ["prj3"], "Date": "2025-06-01", "Notes": "Other user", "Update Type": "Call"},
            "upd5": {"Date": "2025-06-01", "Notes": "Sin proyecto", "Update Type": "Email"},
        },
    }


class InMemoryAirtableClient:
    """Sustituto de AirtableClient sobre diccionarios."""

    def __init__(self, tables: Dict[str, Dict[str, Dict[str, Any]]]):
        self.tables = tables
        self.calls: List[tuple] = []
        self.fail_on: Dict[tuple, AirtableApiError] = {}
        self._ids = itertools.count(1)

    def _check_failure(self, method: str, table: str) -> None:
        error = self.fail_on.get((method, table))
        if error is not None:
            raise error

    @staticmethod
    def _record(record_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        return {"id": record_id, "createdTime": "2025-06-01T00:00:00.000Z", "fields": copy.deepcopy(fields)}

    @staticmethod
    def _matches(fields: Dict[str, Any], formula: Optional[str]) -> bool:
        if not formula:
            return True
        match = _FORMULA_RE.match(formula)
        assert match, f"formula no soportada por el fake: {formula}"
        value = re.sub(r"\\(.)", r"\1", match.group("value"))
        current = fields.get(match.group("field"))
        if isinstance(current, list):
            return value in current
        return current == value

    def list_records(self, table_name: str, *, formula=None, fields=None, page_size=100):
        self.calls.append(("list", table_name, formula))
        self._check_failure("list", table_name)
        return [
            self._record(record_id, record_fields)
            for record_id, record_fields in self.tables[table_name].items()
            if self._matches(record_fields, formula)
        ]

    def get_record(self, table_name: str, record_id: str):
        self.calls.append(("get", table_name, record_id))
        self._check_failure("get", table_name)
        if record_id not in self.tables[table_name]:
            raise AirtableApiError(
                "Airtable request falló 404", status_code=404, body='{"error":"NOT_FOUND"}'
            )
        return self._record(record_id, self.tables[table_name][record_id])

    def create_record(self, table_name: str, fields: Dict[str, Any]):
        self.calls.append(("create", table_name, fields))
        self._check_failure("create", table_name)
        record_id = f"recNEW{next(self._ids):03d}"
        self.tables[table_name][record_id] = copy.deepcopy(fields)
        return self._record(record_id, fields)

    def update_record(self, table_name: str, record_id: str, fields: Dict[str, Any]):
        self.calls.append(("update", table_name, record_id, fields))
        self._check_failure("update", table_name)
        self.tables[table_name][record_id].update(copy.deepcopy(fields))
        return self._record(record_id, self.tables[table_name][record_id])


@pytest.fixture
def airtable_client() -> InMemoryAirtableClient:
    return InMemoryAirtableClient(_sample_tables())


@pytest.fixture
def gateway(airtable_client: InMemoryAirtableClient) -> AirtableGateway:
    return AirtableGateway(airtable_client)


@pytest.fixture
def dashboard_app(gateway: AirtableGateway):
    """Crea la app FastAPI con Airtable en memoria via dependency_overrides."""
    from main import create_application
    app = create_application()
    app.dependency_overrides[get_airtable_gateway] = lambda: gateway
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def api_client(dashboard_app):
    transport = ASGITransport(app=dashboard_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def auth_headers(api_client: AsyncClient) -> Dict[str, str]:
    """Headers con el bearer token de usr1."""
    response = await api_client.post("/api/v1/auth/login", json={"secret_key": SECRET_KEY})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
