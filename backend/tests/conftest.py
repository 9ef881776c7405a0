import sys
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
from datetime import datetime, timezone
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from database import Base, make_engine, make_session_factory
from dtos.request.customer_request import RegisterCustomerRequest
from main import create_app
from repositories.appointment_repository import AppointmentRepository
from repositories.customer_repository import CustomerRepository
from repositories.work_order_repository import WorkOrderRepository
from services.appointment_service import AppointmentService
from services.customer_service import CustomerService
from services.work_order_service import WorkOrderService
import models  # noqa: F401


def utc(year, month, day, hour=0, minute=0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


@pytest.fixture
def settings():
    """Settings for an isolated in-memory database"""
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        log_level="DEBUG",
        log_dir=None,
        max_page_size=50,
    )


@pytest.fixture
def engine(settings):
    engine = make_engine(settings)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Create in-memory database for testing"""
    session = make_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def customer_repo(db_session):
    return CustomerRepository(db_session)


@pytest.fixture
def customer_service(customer_repo):
    return CustomerService(customer_repo)


@pytest.fixture
def appointment_service(db_session, customer_repo):
    return AppointmentService(AppointmentRepository(db_session), customer_repo)


@pytest.fixture
def work_order_service(db_session, customer_repo):
    return WorkOrderService(
        WorkOrderRepository(db_session), customer_repo, AppointmentRepository(db_session)
    )


def register_request(number="C-1001", first_name="Ada", last_name="Lovelace", email="ada@example.com"):
    return RegisterCustomerRequest(
        customer_number=number,
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone="555-0100",
        fit_preference="Slim",
        style_preference="Classic",
        fabric_preference="Wool",
    )


@pytest.fixture
def customer_id(customer_service) -> UUID:
    """A registered customer"""
    return customer_service.register(request=register_request()).value


@pytest.fixture
def client(settings):
    """TestClient over an app bound to its own in-memory database"""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api_customer(client) -> str:
    response = client.post("/api/customers", json={
        "customer_number": "C-2001",
        "first_name": "Grace",
        "last_name": "Hopper",
        "email": "grace@example.com",
    })
    assert response.status_code == 201
    return response.json()["id"]
