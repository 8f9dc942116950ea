"""
Tests for configuration, error handling, logging and result persistence.
"""

import json
import logging
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError as SQLIntegrityError
from sqlalchemy.exc import OperationalError

from app.infrastructure.config import (
    ApplicationConfig,
    DatabaseConfig,
    LoggingConfig,
    get_settings,
    override_settings,
    reset_settings,
)
from app.infrastructure.db import initialise_database, session_scope
from app.infrastructure.exceptions import (
    ConnectionError,
    DatabaseError,
    ResultNotFoundError,
    UnknownChoiceError,
    ValidationError,
    create_user_friendly_error_message,
    handle_database_error,
    log_error_details,
)
from app.infrastructure import logging as app_logging
from app.infrastructure.logging import (
    ENVIRONMENT_PROFILES,
    ContextFilter,
    LogContext,
    StructuredFormatter,
    auto_configure_logging,
    current_context,
    get_logger,
    log_database_operation,
    log_operation,
    setup_logging,
)
from app.infrastructure.repositories_result import ResultRepo


@pytest.fixture
def clean_settings(monkeypatch):
    for key in ("APP_ENVIRONMENT", "APP_DEBUG", "DB_BACKEND"):
        monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()


class TestConfiguration:
    def test_database_config_sqlite(self):
        config = DatabaseConfig(backend="sqlite", sqlite_path=":memory:")
        assert config.get_connection_url() == "sqlite:///:memory:"
        assert config.get_engine_options()["connect_args"] == {"check_same_thread": False}

    def test_database_config_postgres(self):
        config = DatabaseConfig(
            backend="postgresql",
            postgres_host="db",
            postgres_user="equip",
            postgres_password="secret",
            postgres_database="equip360",
        )
        assert config.get_connection_url() == "postgresql+psycopg://equip:secret@db:5432/equip360"
        assert "pool_recycle" in config.get_engine_options()

    def test_database_config_validation(self):
        with pytest.raises(ValueError):
            DatabaseConfig(backend="oracle")
        with pytest.raises(ValueError):
            DatabaseConfig(backend="postgresql", postgres_database="")

    def test_debug_not_allowed_in_production(self):
        with pytest.raises(ValueError):
            ApplicationConfig(environment="production", debug=True)

    def test_logging_file_handler_config(self):
        assert LoggingConfig(file_path=None).get_file_handler_config() is None
        handler = LoggingConfig(file_path="./logs/x.log", backup_count=2).get_file_handler_config()
        assert handler["backupCount"] == 2

    def test_settings_override(self, clean_settings, monkeypatch):
        monkeypatch.setenv("APP_ENVIRONMENT", "development")
        assert get_settings().app.environment == "development"
        settings = override_settings(app_environment="testing")
        assert settings.is_testing()
        assert settings.get_environment_info()["environment"] == "testing"


class TestErrorHandling:
    def test_validation_error(self):
        error = ValidationError("email", "is not valid", "x")
        assert error.field == "email"
        assert "is not valid" in str(error)
        assert error.details["field"] == "email"
        assert "email" in create_user_friendly_error_message(error)

    def test_lookup_error_messages(self):
        error = UnknownChoiceError("scenario-1", "E")
        assert create_user_friendly_error_message(error) == (
            "Please select one of the available answers."
        )
        assert "could not be found" in ResultNotFoundError("abc").user_message

    def test_generic_error_message(self):
        assert "try again" in create_user_friendly_error_message(ValueError("boom")).lower()

    def test_database_error_conversion(self):
        unique = SQLIntegrityError("stmt", {}, Exception("UNIQUE constraint failed"))
        assert handle_database_error(unique, "save").details["constraint"] == "unique"

        timeout = OperationalError("stmt", {}, Exception("connection timeout"))
        assert isinstance(handle_database_error(timeout), ConnectionError)

        other = handle_database_error(RuntimeError("disk I/O error"), "save")
        assert type(other) is DatabaseError
        assert other.operation == "save"

    def test_log_error_details(self):
        details = log_error_details(ResultNotFoundError("abc"), {"route": "/x"})
        assert details["error_type"] == "ResultNotFoundError"
        assert details["context"] == {"route": "/x"}


class TestLogging:
    def test_logger_namespace(self):
        assert get_logger("scoring").name == "app.scoring"
        assert get_logger("app.domain.session").name == "app.domain.session"

    def test_structured_formatter_includes_context(self):
        record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "saved", None, None)
        record.assessment_id = "a-1"
        payload = json.loads(StructuredFormatter().format(record))
        assert payload["message"] == "saved"
        assert payload["assessment_id"] == "a-1"

    def test_log_context_nests_and_restores(self):
        assert current_context() == {}
        with LogContext(user_id="u-1"):
            with LogContext(session_id="s-1"):
                assert current_context() == {"user_id": "u-1", "session_id": "s-1"}
            assert current_context() == {"user_id": "u-1"}
        assert current_context() == {}

    def test_context_filter_copies_fields(self):
        record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "x", None, None)
        with LogContext(assessment_id="a-9"):
            assert ContextFilter().filter(record) is True
        assert record.assessment_id == "a-9"

    def test_log_operation_logs_failure_and_reraises(self, caplog):
        @log_operation("explode", logger=logging.getLogger("tests.operations"))
        def explode():
            raise RuntimeError("boom")

        with caplog.at_level(logging.INFO, logger="tests.operations"):
            with pytest.raises(RuntimeError):
                explode()
        messages = [r.getMessage() for r in caplog.records]
        assert messages[0] == "Starting explode"
        assert messages[-1].startswith("Failed explode after")

    def test_database_operation_sets_operation_context(self):
        @log_database_operation("lookup")
        def lookup():
            return current_context()["operation"]

        assert lookup() == "db_lookup"
        assert current_context() == {}

    def test_auto_configure_uses_environment_profile(self, monkeypatch):
        applied = []
        monkeypatch.setattr(app_logging, "setup_logging", lambda **kw: applied.append(kw))
        monkeypatch.setenv("ENVIRONMENT", "production")
        assert auto_configure_logging() == "production"
        monkeypatch.setenv("ENVIRONMENT", "staging")
        auto_configure_logging()
        assert applied == [ENVIRONMENT_PROFILES["production"], ENVIRONMENT_PROFILES["development"]]

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "logs" / "equip360.log"
        try:
            setup_logging(level="INFO", log_file=str(log_file), enable_console=False)
            get_logger("test").info("written")
            assert log_file.exists()
        finally:
            setup_logging(level="WARNING", log_file=None, structured=False, enable_console=False)


def _row(**overrides):
    fields = {
        "id": "a-1",
        "user_id": "u-1",
        "organization_id": "org-1",
        "session_id": "s-1",
        "scores": [1] * 13,
        "overall_percentage": 1,
        "leadership_family": "REGULATORS",
        "leadership_type": "STABILIZER",
        "completed_at": datetime(2026, 5, 1, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return fields


class TestResultRepository:
    def test_create_and_get(self, db):
        repo = ResultRepo(db)
        repo.create(**_row())
        db.commit()
        record = repo.get_by_id_required("a-1")
        assert record.scores == [1] * 13
        assert record.created_at is not None

    def test_get_missing_raises(self, db):
        with pytest.raises(ResultNotFoundError):
            ResultRepo(db).get_by_id_required("missing")

    def test_lists_are_newest_first(self, db):
        repo = ResultRepo(db)
        base = datetime(2026, 5, 1, tzinfo=timezone.utc)
        for i in range(3):
            repo.create(**_row(id=f"a-{i}", completed_at=base + timedelta(days=i)))
        repo.create(**_row(id="other", user_id="u-2", organization_id="org-2"))
        db.commit()

        assert [r.id for r in repo.list_for_user("u-1")] == ["a-2", "a-1", "a-0"]
        assert [r.id for r in repo.list_for_organization("org-1", limit=2)] == ["a-2", "a-1"]
        assert repo.count_for_organization("org-1") == 3
        assert repo.count_for_organization("org-3") == 0

    def test_duplicate_id_rolls_back(self, session_factory):
        with session_scope(session_factory) as s:
            ResultRepo(s).create(**_row())
        with pytest.raises(SQLIntegrityError):
            with session_scope(session_factory) as s:
                ResultRepo(s).create(**_row())
        with session_factory() as s:
            assert ResultRepo(s).count() == 1

    def test_initialise_database_is_idempotent(self, session_factory):
        engine = session_factory.kw["bind"]
        assert initialise_database(engine) is True
