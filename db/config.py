"""
db/config.py

Database location for the facility statistics store.

Resolution order:

    1. DATABASE_URL
    2. CLOUD_DATABASE_URL, only when ENVIRONMENT is prod/production/staging/cloud
    3. LOCAL_DATABASE_URL
    4. POSTGRES_USER / POSTGRES_PASSWORD / POSTGRES_HOST / POSTGRES_PORT / POSTGRES_DB

Values may also come from `.env` / `.env.local` at the project root; real
environment variables take precedence over both files.
"""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILES = (".env", ".env.local")
CLOUD_ENVIRONMENTS = frozenset({"prod", "production", "staging", "cloud"})
POSTGRES_PART_NAMES = ("USER", "PASSWORD", "HOST", "PORT", "DB")


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if line.startswith("export "):
        line = line[len("export ") :].lstrip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = (part.strip() for part in line.split("=", 1))
    if not key:
        return None
    return key, value.strip('"').strip("'")


def load_env_files(root: Path = PROJECT_ROOT) -> None:
    """
    Copy KEY=VALUE pairs from the project's env files into os.environ.

    Variables already present in the process environment are left untouched.
    """

    for filename in ENV_FILES:
        env_path = root / filename
        if not env_path.is_file():
            continue
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_env_line(raw_line)
            if parsed is not None:
                os.environ.setdefault(*parsed)


def normalize_postgres_url(url: str) -> str:
    """
    Point bare postgres URLs at the psycopg 3 driver.
    """

    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix) :]
    return url


def _url_from_parts() -> str | None:
    parts = {name: os.getenv(f"POSTGRES_{name}", "").strip() for name in POSTGRES_PART_NAMES}
    if not all(parts.values()):
        return None
    return (
        f"postgresql+psycopg://{parts['USER']}:{parts['PASSWORD']}"
        f"@{parts['HOST']}:{parts['PORT']}/{parts['DB']}"
    )


def _candidate_urls() -> list[str | None]:
    environment = os.getenv("ENVIRONMENT", "local").strip().lower()
    cloud_url = os.getenv("CLOUD_DATABASE_URL") if environment in CLOUD_ENVIRONMENTS else None
    return [
        os.getenv("DATABASE_URL"),
        cloud_url,
        os.getenv("LOCAL_DATABASE_URL"),
    ]


def resolve_database_url() -> str:
    """
    Return the SQLAlchemy URL of the statistics database.

    Raises:
        RuntimeError: No source in the resolution order is configured.
    """

    load_env_files()

    for candidate in _candidate_urls():
        if candidate and candidate.strip():
            return normalize_postgres_url(candidate.strip())

    parts_url = _url_from_parts()
    if parts_url:
        return parts_url

    raise RuntimeError(
        "No database URL configured. Set DATABASE_URL, LOCAL_DATABASE_URL "
        "(or CLOUD_DATABASE_URL with ENVIRONMENT=production), or the POSTGRES_* parts."
    )
