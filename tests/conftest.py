# Base de datos en memoria para pruebas (evita crear sql_app.db al importar la app)
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from arqueos.database import get_db
from arqueos.main import app
from arqueos.models import Base, User
from arqueos.security import get_current_user


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    def _make_user(username, role=None, roles=None, full_name=None, email=None):
        user = User(username=username, password_hash="x", role=role, roles=roles,
                    full_name=full_name, email=email)
        db.add(user)
        db.commit()
        db.refresh(user)
        # Desligado de la sesión para usarlo desde el hilo del TestClient
        db.expunge(user)
        db.commit()
        return user
    return _make_user


@pytest.fixture
def contador(make_user):
    return make_user("contador1", role="contador", full_name="Contador Uno")


@pytest.fixture
def client(session_factory, contador):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: contador
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
