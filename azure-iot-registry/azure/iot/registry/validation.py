# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module validates the arguments of registry operations.

All checks run synchronously, before anything is normalized or sent, and raise one of:

- ArgumentMissingError: a required argument was not provided
- ArgumentError: an argument was provided, but has the wrong shape
- TypeError: an argument has the wrong primitive type
"""

import numbers
from collections.abc import Mapping
from . import constant
from .exceptions import ArgumentError, ArgumentMissingError


def validate_required_string(value, name):
    """Raise ArgumentMissingError if a required string argument is None or empty"""
    if not value:
        raise ArgumentMissingError("The '{}' argument is required".format(name))


def validate_required_object(value, name):
    """Raise ArgumentMissingError if a required argument is None.

    Unlike strings, empty objects (e.g. an empty twin patch) are valid values.
    """
    if value is None:
        raise ArgumentMissingError("The '{}' argument is required".format(name))


def validate_callback(callback):
    if callback is None:
        raise ArgumentMissingError("The 'callback' argument is required")
    if not callable(callback):
        raise TypeError("The 'callback' argument must be callable")


def _has_device_id(device_info):
    return isinstance(device_info, Mapping) and bool(device_info.get("deviceId"))


def validate_device_info(device_info):
    """Validate a single device identity.

    :raises: ArgumentMissingError if device_info is None
    :raises: ArgumentError if device_info is not a mapping with a non-empty deviceId
    """
    validate_required_object(device_info, "device_info")
    if not _has_device_id(device_info):
        raise ArgumentError("The 'device_info' argument must contain a 'deviceId' property")


def validate_device_list(devices):
    """Validate the devices of a bulk registry operation.

    Checks are made in order, and the first failing check determines the error:

    1. devices is provided (ArgumentMissingError)
    2. devices is a list or tuple (ArgumentError)
    3. devices has between 1 and MAX_BULK_DEVICES elements (ArgumentError)
    4. every device has a non-empty deviceId (ArgumentError)
    """
    validate_required_object(devices, "devices")
    if not isinstance(devices, (list, tuple)):
        raise ArgumentError("The 'devices' argument must be a list")
    if len(devices) == 0 or len(devices) > constant.MAX_BULK_DEVICES:
        raise ArgumentError(
            "The 'devices' argument must contain between 1 and {} devices".format(
                constant.MAX_BULK_DEVICES
            )
        )
    for index, device_info in enumerate(devices):
        if not _has_device_id(device_info):
            raise ArgumentError(
                "The device at index {} does not contain a 'deviceId' property".format(index)
            )


def validate_force_flag(force, name):
    """Raise ArgumentMissingError unless force is exactly True or False.

    A missing flag and a non-boolean flag are reported the same way.
    """
    if not isinstance(force, bool):
        raise ArgumentMissingError("The '{}' argument must be a boolean".format(name))


def validate_query(sql_query, page_size):
    """Validate the arguments used to create a query.

    :raises: ArgumentMissingError if sql_query is None or empty
    :raises: TypeError if sql_query is not a string, or if page_size is neither None nor a number
    """
    if sql_query is None or (isinstance(sql_query, str) and not sql_query):
        raise ArgumentMissingError("The 'sql_query' argument is required")
    if not isinstance(sql_query, str):
        raise TypeError("The 'sql_query' argument must be a string")
    if page_size is not None and (
        isinstance(page_size, bool) or not isinstance(page_size, numbers.Number)
    ):
        raise TypeError("The 'page_size' argument must be a number")
