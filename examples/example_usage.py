"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in services.
"""

import importlib
from datetime import datetime, timezone

from nannytime.container import build_container
from nannytime.core.enums import Period
from nannytime.settings import get_settings_module


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    client = container.clients.new_client()
    client.gate.sign_in("nanny@example.com", "nanny123")
    stub = client.pay_stub(Period.WEEK, now=datetime.now(timezone.utc))
    print(stub.as_dict() if stub else "no profile loaded")
    client.sign_out()


if __name__ == "__main__":
    main()
