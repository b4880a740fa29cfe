import os
from pathlib import Path
import nox

# Reuse existing virtualenvs for faster runs
nox.options.reuse_existing_virtualenvs = True
# Default sessions when running "nox"
nox.options.sessions = ["lint", "unit", "integration"]

TEST_DEPS = [".[test]"]

# Environment variables to propagate
PASSED_ENV_VARS = [
    "SECRET_KEY",
    "STAFF_PASSWORD",
    "DATABASE_URL",
    "TIMEZONE",
]


def _set_env(session):
    """
    Propagate configuration into the session and put the project root on
    PYTHONPATH.
    """
    session.env["PYTHONPATH"] = str(Path.cwd())
    for var in PASSED_ENV_VARS:
        if var in os.environ:
            session.env[var] = os.environ[var]


@nox.session(name="lint")
def lint(session):
    """
    Code formatting, linting, and type-checks:
      - isort
      - black
      - flake8
      - mypy
    """
    _set_env(session)
    session.install("isort", "black", "flake8", "mypy")
    session.run("isort", "sanctuary/", "tests/")
    session.run("black", "sanctuary/", "tests/")
    session.run("flake8", "sanctuary/", "tests/")
    session.run("mypy", "sanctuary/")


@nox.session(name="unit")
def unit(session):
    """
    Run unit tests.
    Usage:
      nox -s unit
      nox -s unit -- tests/unit/test_services/test_ledger.py
    """
    _set_env(session)
    session.install(*TEST_DEPS)
    tests = session.posargs or ["tests/unit"]
    session.run(
        "pytest",
        *tests,
        "-m",
        "unit",
        "-vv",
        "--tb=short",
        "--cov=sanctuary",
        "--cov-report=term-missing",
        "--cov-report=html:.nox/htmlcov",
        "--cov-report=xml",
        "--cov-fail-under=80",
    )


@nox.session(name="integration")
def integration(session):
    """
    Run the HTTP-level tests through FastAPI's TestClient.
    Usage:
      nox -s integration
      nox -s integration -- tests/integration/test_api/test_checkins.py
    """
    _set_env(session)
    session.install(*TEST_DEPS)
    tests = session.posargs or ["tests/integration"]
    session.run(
        "pytest",
        *tests,
        "-m",
        "integration",
        "-vv",
        "--tb=short",
    )
