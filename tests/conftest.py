import os
import tempfile
from types import SimpleNamespace

# gearguard import edilmeden önce: geçici SQLite + sabit ayarlar
_TMP_DIR = tempfile.mkdtemp(prefix="gearguard-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "test.db").replace("\\", "/")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["SEED_DEMO"] = "false"
os.environ["AUTO_CREATE_DB"] = "true"

import pytest
from fastapi.testclient import TestClient

from gearguard.core.db import Base, SessionLocal, engine
from gearguard.core.security import hash_password
from gearguard.main import app
from gearguard.models import AppUser, Category, Department, Team

DEFAULT_PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def _fresh_db():
    # her test boş şema ile başlar
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user():
    def _make(username, role="employee", password=DEFAULT_PASSWORD, email=None, is_active=True):
        with SessionLocal() as s:
            user = AppUser(
                Username=username,
                FullName=username.title(),
                Email=email or f"{username}@x.com",
                HashedPassword=hash_password(password),
                Role=role,
                IsActive=is_active,
            )
            s.add(user)
            s.commit()
            s.refresh(user)
            return SimpleNamespace(UserID=user.UserID, Username=user.Username, Email=user.Email, Role=user.Role)
    return _make


def login(client, username, password=DEFAULT_PASSWORD):
    r = client.post("/auth/login", data={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin(make_user):
    return make_user("admin", role="admin")


@pytest.fixture
def admin_client(admin):
    with TestClient(app) as c:
        login(c, admin.Username)
        yield c


@pytest.fixture
def client_for(make_user):
    """Verilen kullanıcı adıyla giriş yapmış ayrı bir TestClient döner."""
    clients = []

    def _client(username, password=DEFAULT_PASSWORD):
        c = TestClient(app)
        c.__enter__()
        clients.append(c)
        login(c, username, password)
        return c

    yield _client
    for c in clients:
        c.__exit__(None, None, None)


@pytest.fixture
def ref(make_user):
    """Ekipman / talep testleri için temel ana veri."""
    tech = make_user("tech", role="technician")
    tech2 = make_user("tech2", role="technician")
    with SessionLocal() as s:
        cat = Category(Name="Machinery")
        dept = Department(Name="Production")
        team = Team(Name="Mechanics", Specialization="Mechanical")
        other_team = Team(Name="IT Support", Specialization="IT")
        s.add_all([cat, dept, team, other_team])
        s.commit()
        return SimpleNamespace(
            category_id=cat.CategoryID,
            department_id=dept.DepartmentID,
            team_id=team.TeamID,
            other_team_id=other_team.TeamID,
            tech_id=tech.UserID,
            tech2_id=tech2.UserID,
        )


@pytest.fixture
def new_equipment(admin_client, ref):
    seq = iter(range(1, 10_000))

    def _new(client=None, **fields):
        n = next(seq)
        body = {"Name": f"Press {n}", "SerialNumber": f"SN-{n:04d}", "CategoryID": ref.category_id, **fields}
        r = (client or admin_client).post("/equipment", json=body)
        assert r.status_code == 201, r.text
        return r.json()["data"]
    return _new


@pytest.fixture
def new_request(admin_client):
    def _new(client=None, **fields):
        body = {"Subject": "Oil leak", "Description_s": "Leaking under the press", **fields}
        r = (client or admin_client).post("/requests", json=body)
        assert r.status_code == 201, r.text
        return r.json()["data"]
    return _new
