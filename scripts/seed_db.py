from __future__ import annotations

import argparse
import importlib

from nannytime.database.bootstrap import ensure_demo_user
from nannytime.settings import get_settings_module


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the demo NannyTime account.")
    parser.add_argument("--email", default="nanny@example.com")
    parser.add_argument("--password", default="nanny123")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    user_id = ensure_demo_user(db_config, email=args.email, password=args.password)
    print(
        f"OK: Demo account {args.email} (user_id={user_id}) -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
