# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import os
import threading
from azure.iot.registry import Registry

iothub_connection_str = os.getenv("IOTHUB_CONNECTION_STRING")
device_id = "test_device"


class Completion(object):
    """Callback which lets the sample wait for an operation to complete"""

    def __init__(self):
        self._event = threading.Event()
        self.error = None
        self.result = None
        self.response = None

    def __call__(self, error=None, result=None, response=None):
        self.error = error
        self.result = result
        self.response = response
        self._event.set()

    def wait(self):
        self._event.wait()
        if self.error:
            raise self.error
        return self.result


def run(operation, *args):
    completion = Completion()
    operation(*args, completion)
    return completion.wait()


try:
    # Create Registry
    registry = Registry.from_connection_string(iothub_connection_str)

    # Create a device, with generated symmetric keys
    new_device = run(registry.create, {"deviceId": device_id, "status": "enabled"})
    print("create: {}".format(new_device["deviceId"]))

    # Get device information
    device = run(registry.get, device_id)
    print("get: status = {}, etag = {}".format(device["status"], device["etag"]))

    # Update the device twin, then read it back
    twin = run(registry.get_twin, device_id)
    patch = {"tags": {"location": {"region": "US", "plant": "Redmond43"}}}
    twin = run(registry.update_twin, device_id, patch, twin.etag)
    print("update_twin: tags = {}".format(twin.tags))

    # Query the twins of the registry, one page at a time
    query = registry.create_query("SELECT * FROM devices", 10)
    while query.has_more_results:
        completion = Completion()
        query.next_as_twin(completion)
        for device_twin in completion.wait():
            print("query: {}".format(device_twin.device_id))

    # Registry statistics
    statistics = run(registry.get_registry_statistics)
    print("statistics: {}".format(statistics))

    # Delete the device
    run(registry.delete, device_id)
    print("delete: {}".format(device_id))

except Exception as ex:
    print("Unexpected error {0}".format(ex))
except KeyboardInterrupt:
    print("registry_sample stopped")
