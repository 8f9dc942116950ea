from __future__ import annotations

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DB_SQLITE_PATH", ":memory:")

import pytest  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from app.infrastructure.config import DatabaseConfig  # noqa: E402
from app.infrastructure.db import (  # noqa: E402
    create_database_engine,
    create_session_factory,
    initialise_database,
)

BEST_CHOICES = {
    1: "C", 2: "A", 3: "C", 4: "A", 5: "B", 6: "B", 7: "A", 8: "D", 9: "A", 10: "A",
    11: "A", 12: "A", 13: "A", 14: "A", 15: "A", 16: "B", 17: "A", 18: "A", 19: "A", 20: "B",
}


def answers_for(choices: dict[int, str]) -> list[dict[str, str]]:
    return [{"scenario_id": f"scenario-{n}", "choice": c} for n, c in choices.items()]


@pytest.fixture
def best_answers() -> list[dict[str, str]]:
    return answers_for(BEST_CHOICES)


@pytest.fixture
def session_factory() -> sessionmaker[Session]:
    engine = create_database_engine(DatabaseConfig(backend="sqlite", sqlite_path=":memory:"))
    initialise_database(engine)
    return create_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
