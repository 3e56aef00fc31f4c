# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains a class representing a device twin as returned by the registry service
"""

import copy
import json

_KNOWN_FIELDS = ("deviceId", "moduleId", "etag", "tags", "properties")


class Twin(object):
    """Represents a device twin or module twin

    Twins are built from registry service responses and are not modified afterwards. Fetching
    or updating a twin always produces a new Twin object.

    :ivar str device_id: The name (Id) of the device the twin belongs to
    :ivar str module_id: The name (Id) of the module the twin belongs to, if any
    :ivar str etag: The optimistic concurrency tag of the twin. Used as the If-Match value
      when updating it.
    :ivar dict tags: The tags of the twin. These are only visible to the service.
    :ivar dict properties: The properties of the twin, with "desired" and "reported" sections
    :ivar dict additional_properties: Any other fields present in the service response
    """

    def __init__(
        self,
        device_id=None,
        module_id=None,
        etag=None,
        tags=None,
        properties=None,
        additional_properties=None,
    ):
        self._device_id = device_id
        self._module_id = module_id
        self._etag = etag
        self._tags = tags if tags is not None else {}
        self._properties = properties if properties is not None else {}
        self._additional_properties = (
            additional_properties if additional_properties is not None else {}
        )

    @classmethod
    def from_response(cls, body):
        """Create a Twin from the body of a registry service response.

        The body may have been parsed already, or may still be in its serialized JSON form.
        Both produce the same Twin.

        :param body: The response body, as a dict, or as a JSON str or bytes
        :raises: ValueError if a serialized body is not a JSON object
        """
        if isinstance(body, (bytes, bytearray)):
            body = body.decode("utf-8")
        if isinstance(body, str):
            body = json.loads(body)
        if not isinstance(body, dict):
            raise ValueError("Twin response body must be a JSON object")

        body = copy.deepcopy(body)
        return cls(
            device_id=body.get("deviceId"),
            module_id=body.get("moduleId"),
            etag=body.get("etag"),
            tags=body.get("tags"),
            properties=body.get("properties"),
            additional_properties={k: v for k, v in body.items() if k not in _KNOWN_FIELDS},
        )

    @property
    def device_id(self):
        return self._device_id

    @property
    def module_id(self):
        return self._module_id

    @property
    def etag(self):
        return self._etag

    @property
    def tags(self):
        return self._tags

    @property
    def properties(self):
        return self._properties

    @property
    def desired_properties(self):
        return self._properties.get("desired", {})

    @property
    def reported_properties(self):
        return self._properties.get("reported", {})

    @property
    def additional_properties(self):
        return self._additional_properties

    def to_dict(self):
        """Return the wire representation of the twin"""
        d = {"deviceId": self._device_id}
        if self._module_id is not None:
            d["moduleId"] = self._module_id
        d["etag"] = self._etag
        d["tags"] = copy.deepcopy(self._tags)
        d["properties"] = copy.deepcopy(self._properties)
        d.update(copy.deepcopy(self._additional_properties))
        return d

    def __eq__(self, other):
        if not isinstance(other, Twin):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return "Twin(device_id={!r}, etag={!r})".format(self._device_id, self._etag)
