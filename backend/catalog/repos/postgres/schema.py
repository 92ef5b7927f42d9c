import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class Executor(Protocol):
    async def execute(self, query: str, *args: Any) -> str: ...


# Versions, tags and stats cascade with their package. Dist tags and
# packages.latest_version are deliberately not tied to versions rows.
SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS packages (
        name TEXT PRIMARY KEY,
        description TEXT,
        latest_version TEXT,
        created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
        updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS versions (
        package_name TEXT NOT NULL REFERENCES packages(name) ON DELETE CASCADE,
        version TEXT NOT NULL,
        metadata TEXT, -- JSON manifest, kept as text and parsed on read
        tarball_path TEXT,
        created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
        PRIMARY KEY (package_name, version)
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS dist_tags (
        package_name TEXT NOT NULL REFERENCES packages(name) ON DELETE CASCADE,
        tag TEXT NOT NULL,
        version TEXT NOT NULL,
        PRIMARY KEY (package_name, tag)
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS stats (
        package_name TEXT PRIMARY KEY REFERENCES packages(name) ON DELETE CASCADE,
        build_count INTEGER NOT NULL DEFAULT 0
    );
    """,
)


async def ensure_schema(executor: Executor) -> None:
    """Create the metadata tables if they do not exist yet."""
    for statement in SCHEMA_STATEMENTS:
        await executor.execute(statement)
    logger.info("Metadata schema is in place")
