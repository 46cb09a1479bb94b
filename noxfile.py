import nox
import os
import shutil

# Define os diretórios a serem verificados
LOCATIONS = [
    "src/hmac_fixer",
    "tests",
    "noxfile.py",
]

# Opções padrão do nox
nox.options.sessions = ["tests", "lint", "security"]
nox.options.reuse_existing_virtualenvs = True


@nox.session(python=["3.11", "3.12", "3.13"])
def tests(session):
    """Executa todos os testes."""
    session.install(".[dev,proxy]")
    session.run("pytest", *session.posargs)


@nox.session(python="3.13")
def lint(session):
    """Executa linting e formatação."""
    session.install("ruff")
    session.run("ruff", "check", *LOCATIONS)
    session.run("ruff", "format", "--check", *LOCATIONS)


@nox.session(python="3.13")
def security(session):
    """Executa verificações de segurança."""
    session.install("bandit", "safety")
    session.run("bandit", "-r", "src/hmac_fixer")
    session.run("safety", "check")


@nox.session(python="3.13")
def quality_report(session):
    """Gera relatórios de qualidade (cobertura, etc.)."""
    session.install(".[dev,proxy]")
    session.run(
        "pytest",
        "--cov=hmac_fixer",
        "--cov-report=html",
        "--cov-report=term-missing",
    )


@nox.session(python=False)
def clean(session):
    """Remove arquivos temporários e caches."""
    shutil.rmtree(".pytest_cache", ignore_errors=True)
    shutil.rmtree("htmlcov", ignore_errors=True)
    shutil.rmtree(".nox", ignore_errors=True)
    shutil.rmtree("logs", ignore_errors=True)
    if os.path.exists("coverage.xml"):
        os.remove("coverage.xml")
    print("Cache e arquivos temporários removidos.")
