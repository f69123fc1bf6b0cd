"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. Tokens live in the
app's in-memory token store, wiped before every test.
"""

from __future__ import annotations

import os

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from devlog.core.config import TestingConfig
from devlog.core.extensions import db as _db  # Flask-SQLAlchemy instance
from devlog.core.security import get_token_service
from devlog.factory import create_app  # application factory under test
from tests.helpers.keys import TEST_SIGNING_KEY


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Signs tokens with a fixed test key.
    - Avoids hitting external services (no Redis, mail is only logged).
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY_BASE64 = TEST_SIGNING_KEY
    PASSWORD_RESET_URL = "http://frontend.test/password-reset"
    USE_PROXYFIX = False


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


def _emit_begin(conn) -> None:
    conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session.

    pysqlite defers ``BEGIN`` on its own, which breaks SAVEPOINTs; the driver
    is switched to autocommit and ``BEGIN`` is emitted explicitly instead.

    Yields
    ------
    sqlalchemy.engine.Connection
        Connection reused by nested transactions in each test.
    """
    conn = db.engine.connect()
    if db.engine.dialect.name == "sqlite":
        conn.connection.driver_connection.isolation_level = None
        event.listen(db.engine, "begin", _emit_begin)
    try:
        yield conn
    finally:
        if event.contains(db.engine, "begin", _emit_begin):
            event.remove(db.engine, "begin", _emit_begin)
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session joined to an outer transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection; everything it commits
        is rolled back after each test.

    Notes
    -----
    Follows the SQLAlchemy 2.0 recipe for joining a session into an external
    transaction: the session's ``commit()``/``rollback()`` operate on their
    own SAVEPOINT while the outer transaction is always rolled back.
    """
    top_trans = connection.begin()

    SessionFactory = sessionmaker(
        bind=connection,
        join_transaction_mode="create_savepoint",
        autoflush=False,
    )
    scoped = scoped_session(SessionFactory)

    # Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture
def client(app, session):
    """Flask test client sharing the transactional session."""
    return app.test_client()


@pytest.fixture
def token_service(app):
    """The app's :class:`TokenService` (in-memory store in tests)."""
    with app.app_context():
        return get_token_service()


@pytest.fixture
def outbox(app):
    """Messages recorded by the logging mail sender."""
    sender = app.extensions["mail_sender"]
    sender.outbox.clear()
    return sender.outbox


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


@pytest.fixture(autouse=True)
def _clean_token_store(app):
    """Start every test with no refresh, reset or blacklist records."""
    with app.app_context():
        get_token_service().store.clear()
    yield
