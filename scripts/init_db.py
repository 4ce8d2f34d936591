from __future__ import annotations

import importlib

from dotenv import load_dotenv

from rfid_attendance.config import get_settings_module
from rfid_attendance.database.bootstrap import apply_schema, list_tables
from rfid_attendance.database.connection import DatabaseConnection, DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))
    conn = DatabaseConnection(config)

    apply_schema(conn)
    tables = list_tables(conn)
    print(
        "OK: Applied schema.sql -> "
        f"{config.user}@{config.host}:{config.port}/{config.database} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
