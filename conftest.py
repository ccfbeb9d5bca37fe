import os

# Configure before the app modules read the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine
from app.models import Project, Task, User
from app.utils.dates import utcnow
from app.utils.security import hash_password
from main import app


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role: str = "member", name: str = None, password: str = "secret123") -> User:
        counter["n"] += 1
        user = User(
            name=name or f"user{counter['n']}",
            email=f"user{counter['n']}@example.com",
            hashed_password=hash_password(password),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def login(client):
    def _login(user: User, password: str = "secret123") -> dict:
        response = client.post("/login", json={"email": user.email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


@pytest.fixture
def make_project(db):
    def _make_project(owner: User, name: str = "Project") -> Project:
        project = Project(name=name, description="A project", owner_id=owner.id)
        db.add(project)
        db.commit()
        db.refresh(project)
        return project

    return _make_project


@pytest.fixture
def make_task(db):
    def _make_task(owner: User, project: Project = None, status: str = "todo", deadline=None, title: str = "Task") -> Task:
        task = Task(
            title=title,
            description="Something to do",
            status=status,
            deadline=deadline,
            owner_id=owner.id,
            project_id=project.id if project else None,
        )
        db.add(task)
        db.commit()
        db.refresh(task)
        return task

    return _make_task


@pytest.fixture
def past():
    return utcnow() - timedelta(days=2)


@pytest.fixture
def future():
    return utcnow() + timedelta(days=2)
