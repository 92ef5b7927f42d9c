import argparse
import asyncio
import json
import logging
import sys

import asyncpg

from catalog.core.config import get_settings
from catalog.repos.postgres.schema import ensure_schema

SAMPLE_PACKAGES = [
    ("@datakit/core", "Core data utilities for DataKit services", "1.10.0"),
    ("@datakit/ui", "Shared React components", "0.4.2"),
    ("left-pad", None, "1.3.0"),
]

SAMPLE_VERSIONS = {
    "@datakit/core": {
        "1.2.0": {"main": "dist/index.js", "dependencies": {"zod": "^3.22.0"}},
        "1.9.0": {"main": "dist/index.js", "dependencies": {"zod": "^3.22.0"}},
        "1.10.0": {
            "main": "dist/index.js",
            "types": "dist/index.d.ts",
            "license": "MIT",
            "keywords": ["data", "datakit"],
            "dependencies": {"zod": "^3.23.0"},
        },
    },
    "@datakit/ui": {
        "0.4.2": {"main": "dist/ui.js", "peerDependencies": {"react": ">=18"}},
    },
    "left-pad": {
        "1.3.0": {"main": "index.js", "license": "WTFPL"},
    },
}

SAMPLE_TAGS = [
    ("@datakit/core", "latest", "1.10.0"),
    ("@datakit/core", "beta", "1.10.0"),
    ("@datakit/ui", "latest", "0.4.2"),
]

SAMPLE_BUILDS = [("@datakit/core", 42), ("@datakit/ui", 7)]


async def seed_sample_data(conn: asyncpg.Connection) -> None:
    """Insert a few packages so the catalog has something to show."""
    logger = logging.getLogger(__name__)

    await conn.executemany(
        """
        INSERT INTO packages (name, description, latest_version)
        VALUES ($1, $2, $3)
        ON CONFLICT (name) DO NOTHING
        """,
        SAMPLE_PACKAGES,
    )

    version_rows = [
        (name, version, json.dumps(manifest), f"{name}/{version}.tgz")
        for name, versions in SAMPLE_VERSIONS.items()
        for version, manifest in versions.items()
    ]
    # One unreadable manifest, served as {} by the catalog
    version_rows.append(("left-pad", "1.2.0", "{not json", "left-pad/1.2.0.tgz"))
    await conn.executemany(
        """
        INSERT INTO versions (package_name, version, metadata, tarball_path)
        VALUES ($1, $2, $3, $4)
        ON CONFLICT (package_name, version) DO NOTHING
        """,
        version_rows,
    )

    await conn.executemany(
        """
        INSERT INTO dist_tags (package_name, tag, version)
        VALUES ($1, $2, $3)
        ON CONFLICT (package_name, tag) DO UPDATE SET version = EXCLUDED.version
        """,
        SAMPLE_TAGS,
    )
    await conn.executemany(
        """
        INSERT INTO stats (package_name, build_count)
        VALUES ($1, $2)
        ON CONFLICT (package_name) DO NOTHING
        """,
        SAMPLE_BUILDS,
    )
    logger.info(f"Seeded {len(SAMPLE_PACKAGES)} sample packages")


async def main(seed: bool = False) -> None:
    """Initialize the database."""
    settings = get_settings()
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger(__name__)

    try:
        logger.info(
            f"Connecting to PostgreSQL at {settings.postgres.host}:{settings.postgres.port}"
        )
        conn = await asyncpg.connect(
            host=settings.postgres.host,
            port=settings.postgres.port,
            user=settings.postgres.user,
            password=settings.postgres.password,
            database=settings.postgres.database,
        )

        logger.info("Creating database tables...")
        await ensure_schema(conn)

        if seed:
            logger.info("Seeding sample data...")
            await seed_sample_data(conn)

        logger.info("Database initialization completed successfully.")
        await conn.close()

    except Exception:
        logger.exception("Error initializing database")
        sys.exit(1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the catalog metadata tables")
    parser.add_argument("--seed", action="store_true", help="insert sample packages")
    args = parser.parse_args()
    asyncio.run(main(seed=args.seed))
