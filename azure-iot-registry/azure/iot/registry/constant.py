# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module defines constants for use across the azure-iot-registry package
"""

VERSION = "1.0.0"
IOTHUB_IDENTIFIER = "azure-iot-registry-py"
IOTHUB_API_VERSION = "2020-09-30"

# Bulk registry operations accept between 1 and this many devices per call
MAX_BULK_DEVICES = 100

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

# Request and response header names
CONTENT_TYPE_HEADER = "Content-Type"
IF_MATCH_HEADER = "If-Match"
REQUEST_ID_HEADER = "Request-Id"
AUTHORIZATION_HEADER = "Authorization"
USER_AGENT_HEADER = "User-Agent"
CONTINUATION_HEADER = "x-ms-continuation"
MAX_ITEM_COUNT_HEADER = "x-ms-max-item-count"
