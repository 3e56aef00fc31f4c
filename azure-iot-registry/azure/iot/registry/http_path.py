# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import logging
import urllib.parse
from . import constant

logger = logging.getLogger(__name__)


def get_version_query_string():
    """
    :return: The query string appended to every registry request path. It is of the format
    ?api-version=$api_version
    """
    return "?api-version={}".format(constant.IOTHUB_API_VERSION)


def _quote(value):
    return urllib.parse.quote(value, safe="")


def get_devices_path():
    """
    :return: The path for listing devices and for bulk registry operations. It is of the format
    /devices?api-version=$api_version
    """
    return "/devices" + get_version_query_string()


def get_device_path(device_id):
    """
    :return: The path for a single device identity. It is of the format
    /devices/uri_encode($device_id)?api-version=$api_version
    """
    return "/devices/{}".format(_quote(device_id)) + get_version_query_string()


def get_twin_path(device_id):
    """
    :return: The path for a device twin. It is of the format
    /twins/uri_encode($device_id)?api-version=$api_version
    """
    return "/twins/{}".format(_quote(device_id)) + get_version_query_string()


def get_query_path():
    return "/devices/query" + get_version_query_string()


def get_jobs_path():
    return "/jobs" + get_version_query_string()


def get_create_job_path():
    return "/jobs/create" + get_version_query_string()


def get_job_path(job_id):
    """
    :return: The path for a single import/export job. It is of the format
    /jobs/uri_encode($job_id)?api-version=$api_version
    """
    return "/jobs/{}".format(_quote(job_id)) + get_version_query_string()


def get_device_statistics_path():
    return "/statistics/devices" + get_version_query_string()
