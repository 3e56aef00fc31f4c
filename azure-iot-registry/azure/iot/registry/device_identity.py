# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module shapes device identities into the form expected by the registry service.

Every identity sent to the service must carry an authentication mechanism with an explicit
``type``. Identities provided by callers may omit it entirely, or provide key material
without saying which kind of authentication it is, so it is derived here:

1. No ``authentication``: SAS authentication with empty primary and secondary keys.
2. ``authentication`` without ``type``: ``selfSigned`` if it has an ``x509Thumbprint``,
   ``sas`` otherwise.
3. ``authentication`` with a ``type``: kept as-is.
"""

import copy
import logging
from typing import Dict, Any
from .custom_typing import DeviceIdentity, ImportMode

logger = logging.getLogger(__name__)

AUTH_TYPE_SAS = "sas"
AUTH_TYPE_SELF_SIGNED = "selfSigned"
AUTH_TYPE_CERTIFICATE_AUTHORITY = "certificateAuthority"

IMPORT_MODE_CREATE = "create"
IMPORT_MODE_UPDATE = "Update"
IMPORT_MODE_UPDATE_IF_MATCH_ETAG = "UpdateIfMatchETag"
IMPORT_MODE_DELETE = "Delete"
IMPORT_MODE_DELETE_IF_MATCH_ETAG = "DeleteIfMatchETag"


def _default_authentication() -> Dict[str, Any]:
    return {"type": AUTH_TYPE_SAS, "symmetricKey": {"primaryKey": "", "secondaryKey": ""}}


def normalize_device_identity(device_info: DeviceIdentity) -> DeviceIdentity:
    """Return a copy of a device identity with a fully populated authentication mechanism.

    The given identity is never modified. Callers are expected to have validated that it
    has a deviceId.

    :param dict device_info: The device identity to normalize.
    :returns: A new dict, sharing no mutable state with device_info.
    """
    normalized = copy.deepcopy(device_info)
    authentication = normalized.get("authentication")

    if authentication is None:
        normalized["authentication"] = _default_authentication()
    elif "type" not in authentication:
        if "x509Thumbprint" in authentication:
            authentication["type"] = AUTH_TYPE_SELF_SIGNED
        else:
            authentication["type"] = AUTH_TYPE_SAS

    logger.debug(
        "Normalized device {} with authentication type '{}'".format(
            normalized.get("deviceId"), normalized["authentication"]["type"]
        )
    )
    return normalized


def to_import_export_entry(device_info: DeviceIdentity, import_mode: ImportMode) -> DeviceIdentity:
    """Return the bulk registry representation of a device identity.

    The identity is normalized, its ``deviceId`` key is renamed to ``id`` and it is tagged
    with the given import mode.
    """
    normalized = normalize_device_identity(device_info)
    entry = dict(normalized)
    entry["id"] = entry.pop("deviceId")
    entry["importMode"] = import_mode
    return entry


def get_update_import_mode(force: bool) -> ImportMode:
    if force is True:
        return IMPORT_MODE_UPDATE
    return IMPORT_MODE_UPDATE_IF_MATCH_ETAG


def get_remove_import_mode(force: bool) -> ImportMode:
    if force is True:
        return IMPORT_MODE_DELETE
    return IMPORT_MODE_DELETE_IF_MATCH_ETAG
