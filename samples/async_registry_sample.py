# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import os
import asyncio
from azure.iot.registry.aio import AsyncRegistry

iothub_connection_str = os.getenv("IOTHUB_CONNECTION_STRING")
device_ids = ["bulk_device_1", "bulk_device_2"]


async def main():
    registry = AsyncRegistry.from_connection_string(iothub_connection_str)

    # Create the devices in a single bulk request
    result, _ = await registry.add_devices([{"deviceId": device_id} for device_id in device_ids])
    print("add_devices: succeeded = {}".format(result["isSuccessful"]))

    # Page through the registry
    query = registry.create_query("SELECT deviceId, status FROM devices", 100)
    async for page in query:
        for record in page:
            print("{deviceId}: {status}".format(**record))

    # Remove the devices, whatever their etag
    result, _ = await registry.remove_devices(
        [{"deviceId": device_id} for device_id in device_ids], True
    )
    print("remove_devices: succeeded = {}".format(result["isSuccessful"]))


if __name__ == "__main__":
    asyncio.run(main())
