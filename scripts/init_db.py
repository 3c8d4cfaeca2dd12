from __future__ import annotations

import argparse
import importlib

from dotenv import load_dotenv

from timeguard.config import get_settings_module
from timeguard.database.bootstrap import apply_schema, ensure_demo_users, list_tables
from timeguard.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the TimeGuard tables (and optionally demo users).")
    parser.add_argument("--seed", action="store_true", help="also create the demo accounts")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_mapping(dict(settings.DB_CONFIG))
    conn = DatabaseConnection.get_instance(config)

    apply_schema(conn, config)
    if args.seed:
        ensure_demo_users(conn)

    print(
        "OK: Applied schema.sql -> "
        f"{config.user}@{config.host}:{config.port}/{config.database} "
        f"(tables={len(list_tables(conn))}, seeded={args.seed})"
    )


if __name__ == "__main__":
    main()
