"""
Manual sync runner for channel-bridge
Run a PMS -> channel-manager pass for one property without the API.

Usage:
    python run_sync.py <property_id> [inventory|rates|initial] [days]

Example:
    python run_sync.py 5f1c... inventory 14
    python run_sync.py 5f1c... initial
"""

import asyncio
import sys
import os
from datetime import date, timedelta

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from channel_bridge.config import settings
from channel_bridge.database import SessionLocal, create_tables
from channel_bridge.dependencies import build_sync_engine
from channel_bridge.exceptions import BridgeError
from channel_bridge.utils.logging_config import setup_logging

OPERATIONS = ("inventory", "rates", "initial")


async def run(property_id: str, operation: str, days: int) -> int:
    engine = build_sync_engine(settings, SessionLocal)
    start = date.today()
    end = start + timedelta(days=days)

    try:
        if operation == "inventory":
            result = await engine.sync_inventory(property_id, start, end)
        elif operation == "rates":
            result = await engine.sync_rates(property_id, start, end)
        else:
            result = await engine.run_initial_sync(property_id, start, end)
    except BridgeError as e:
        print(f"Failed [{e.code}]: {e.message}")
        return 1

    print(f"{result.message}")
    print(result.model_dump_json(indent=2))
    return 0


def main() -> int:
    if len(sys.argv) < 2:
        print(__doc__)
        return 2

    property_id = sys.argv[1]
    operation = sys.argv[2] if len(sys.argv) > 2 else "inventory"
    if operation not in OPERATIONS:
        print(f"Unknown operation '{operation}', expected one of {', '.join(OPERATIONS)}")
        return 2
    days = int(sys.argv[3]) if len(sys.argv) > 3 else settings.default_sync_days

    setup_logging(level=settings.log_level, json_format=False)
    create_tables()
    return asyncio.run(run(property_id, operation, days))


if __name__ == "__main__":
    sys.exit(main())
