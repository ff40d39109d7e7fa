from __future__ import annotations

import importlib

from dotenv import load_dotenv

from dayflow.database.bootstrap import apply_schema, list_tables
from dayflow.database.connection import db_config_from_dict
from dayflow.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = db_config_from_dict(settings.DB_CONFIG)

    apply_schema(config)
    tables = list_tables(config)
    print(
        "OK: Applied schema.sql -> "
        f"{config.user}@{config.host}:{config.port}/{config.database} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
