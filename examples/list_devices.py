#!/usr/bin/env python3

"""Example script listing the Homematic devices of an ioBroker installation.

Reads the REST API address (IOBROKER_URL) and optional credentials
(IOBROKER_USER, IOBROKER_PASSWORD) from environment variables.

Usage:
  export IOBROKER_URL="http://iobroker.local:8093"
  python3 list_devices.py [--read] [--details]
"""

import argparse
import asyncio
import logging
import os

from pyhmdm import (
    ApiError,
    AuthError,
    AuthHandler,
    ControlError,
    DeviceManager,
    RestStore,
)

# --- Configuration ---
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)

BASE_URL = os.getenv("IOBROKER_URL", "http://localhost:8093")
USERNAME = os.getenv("IOBROKER_USER")
PASSWORD = os.getenv("IOBROKER_PASSWORD")

parser = argparse.ArgumentParser(description="List Homematic devices and their controls.")
parser.add_argument("--read", action="store_true", help="Read the current value of every control.")
parser.add_argument("--details", action="store_true", help="Print firmware details.")
args = parser.parse_args()


async def main():
    """Run the listing."""
    auth = AuthHandler(USERNAME, PASSWORD, base_url=BASE_URL) if USERNAME else None
    store = RestStore(base_url=BASE_URL, auth_handler=auth)
    try:
        manager = DeviceManager(store)
        await manager.async_setup()
        logging.info("Display language: %s", manager.language)

        for device in await manager.async_list_devices():
            print(f"{device.id}  {device.name}  [{device.status.connection}]")
            if args.details:
                details = await manager.async_get_device_details(device.id)
                for key, item in getattr(details, "schema", {}).get("items", {}).items():
                    print(f"    {key}: {item['text']}")
            for control in device.controls or []:
                line = f"    {control.kind.value:<7} {control.label}"
                if args.read and control.get_state:
                    result = await control.get_state(device.id, control.id)
                    value = result.as_dict() if isinstance(result, ControlError) else result.val
                    line += f" = {value}"
                print(line)

    except AuthError:
        logging.exception("Authentication failed")
    except ApiError:
        logging.exception("API error")
    finally:
        await store.async_close()


if __name__ == "__main__":
    asyncio.run(main())
