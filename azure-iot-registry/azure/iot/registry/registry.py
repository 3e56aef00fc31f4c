# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the client used to manage the identity registry of an IoTHub"""

import logging
import urllib.parse
import uuid
from . import constant
from . import http_path
from . import device_identity
from . import validation
from .config import RegistryConfig
from .connection_string import ConnectionString
from .models.twin import Twin
from .query import Query
from .rest_api_client import RestApiClient
from .sastoken import parse_sas_token

logger = logging.getLogger(__name__)


class Registry(object):
    """A client for the identity registry of an IoTHub.

    Every operation validates its arguments synchronously, raising an ArgumentMissingError,
    ArgumentError or TypeError before anything is sent if the call is malformed. Once a
    request has been sent, its outcome is only ever delivered through the callback, which is
    called exactly once: as callback(error=e) if the operation failed, or as
    callback(result=r, response=resp) if it succeeded, where resp is the transport response
    of the HTTP helper.

    Errors reported by the HTTP helper are passed to the callback unchanged.
    """

    def __init__(self, config, http_helper=None):
        """Initializer for a Registry client.

        Applications will usually use the from_connection_string() or
        from_shared_access_signature() factory methods instead.

        :param config: The connection details of the IoTHub, either as a RegistryConfig, or as a
            dict with "host" and "sharedAccessSignature" keys.
        :param http_helper: The object used to send requests. It must provide
            execute_api_call(method, path, headers, body, callback). Defaults to a
            RestApiClient for the given config.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if config is None
        :raises: :class:`azure.iot.registry.exceptions.ArgumentError` if config is missing its
            host or shared access signature
        """
        self._config = RegistryConfig.from_value(config)
        if http_helper is None:
            http_helper = RestApiClient(self._config)
        self._http_helper = http_helper

    @classmethod
    def from_connection_string(cls, value, http_helper=None):
        """Create a Registry client from an IoTHub connection string.

        The connection string must contain either a shared access key and its name, from which
        a shared access signature valid for one hour is generated, or a shared access signature.

        :param str value: The IoTHub connection string
        :param http_helper: The object used to send requests (optional)

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if value is empty
        :raises: ValueError if value is not a valid connection string

        :rtype: :class:`azure.iot.registry.Registry`
        """
        validation.validate_required_string(value, "value")
        connection_string = ConnectionString(value)
        config = RegistryConfig(
            connection_string.host_name, connection_string.get_shared_access_signature()
        )
        return cls(config, http_helper)

    @classmethod
    def from_shared_access_signature(cls, value, http_helper=None):
        """Create a Registry client from a shared access signature.

        The host of the IoTHub is the resource URI the signature grants access to.

        :param str value: A shared access signature of the form
            "SharedAccessSignature sr=<host>&sig=<signature>&se=<expiry>&skn=<key name>"
        :param http_helper: The object used to send requests (optional)

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if value is empty
        :raises: ValueError if value is not a valid shared access signature

        :rtype: :class:`azure.iot.registry.Registry`
        """
        validation.validate_required_string(value, "value")
        host = urllib.parse.unquote(parse_sas_token(value)["sr"])
        return cls(RegistryConfig(host, value), http_helper)

    @property
    def config(self):
        return self._config

    def _get_headers(self, extra_headers=None):
        headers = {constant.REQUEST_ID_HEADER: str(uuid.uuid4())}
        if extra_headers:
            headers.update(extra_headers)
        return headers

    def _get_json_headers(self, extra_headers=None):
        headers = {constant.CONTENT_TYPE_HEADER: constant.JSON_CONTENT_TYPE}
        if extra_headers:
            headers.update(extra_headers)
        return self._get_headers(headers)

    def _execute_api_call(self, method, path, headers, body, callback, result_parser=None):
        """Send a request through the HTTP helper, and complete the callback with its outcome.

        :param result_parser: Function applied to the result of a successful request (optional)
        """
        logger.debug("Executing registry request: {} {}".format(method, path))
        completed = []

        def on_response(error=None, result=None, response=None):
            completed.append(True)
            if error:
                logger.debug("Registry request {} {} failed: {}".format(method, path, error))
                callback(error=error)
                return
            if result_parser:
                try:
                    result = result_parser(result)
                except ValueError as e:
                    callback(error=e)
                    return
            callback(result=result, response=response)

        try:
            self._http_helper.execute_api_call(method, path, headers, body, on_response)
        except Exception as e:
            if completed:
                # The failure happened after the callback was completed, e.g. inside the callback
                raise
            logger.debug("HTTP helper failed before completing the request: {}".format(e))
            callback(error=e)

    def create(self, device_info, callback):
        """Create a device identity.

        The identity is sent with an authentication mechanism, which is derived from the one it
        carries, if any. SAS authentication with empty keys is used when it carries none, so
        that the service generates the keys.

        :param dict device_info: The device identity. Must contain a "deviceId".
        :param callback: Called with the created device identity as result.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if device_info or
            callback is None
        :raises: :class:`azure.iot.registry.exceptions.ArgumentError` if device_info does not
            contain a deviceId
        """
        validation.validate_device_info(device_info)
        validation.validate_callback(callback)

        body = device_identity.normalize_device_identity(device_info)
        self._execute_api_call(
            "PUT",
            http_path.get_device_path(device_info["deviceId"]),
            self._get_json_headers(),
            body,
            callback,
        )

    def update(self, device_info, callback):
        """Update a device identity.

        :param dict device_info: The device identity. Must contain a "deviceId".
        :param callback: Called with the updated device identity as result.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if device_info or
            callback is None
        :raises: :class:`azure.iot.registry.exceptions.ArgumentError` if device_info does not
            contain a deviceId
        """
        validation.validate_device_info(device_info)
        validation.validate_callback(callback)

        body = device_identity.normalize_device_identity(device_info)
        self._execute_api_call(
            "PUT",
            http_path.get_device_path(device_info["deviceId"]),
            self._get_json_headers(),
            body,
            callback,
        )

    def get(self, device_id, callback):
        """Get a device identity.

        :param str device_id: The name (Id) of the device.
        :param callback: Called with the device identity as result.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if device_id is
            empty or callback is None
        """
        validation.validate_required_string(device_id, "device_id")
        validation.validate_callback(callback)

        self._execute_api_call(
            "GET", http_path.get_device_path(device_id), self._get_headers(), None, callback
        )

    def list(self, callback):
        """List the device identities of the registry.

        :param callback: Called with the list of device identities as result.
        """
        validation.validate_callback(callback)

        self._execute_api_call(
            "GET", http_path.get_devices_path(), self._get_headers(), None, callback
        )

    def delete(self, device_id, callback):
        """Delete a device identity, whatever its current etag.

        :param str device_id: The name (Id) of the device.
        :param callback: Called with no result, and the transport response.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if device_id is
            empty or callback is None
        """
        validation.validate_required_string(device_id, "device_id")
        validation.validate_callback(callback)

        self._execute_api_call(
            "DELETE",
            http_path.get_device_path(device_id),
            self._get_headers({constant.IF_MATCH_HEADER: "*"}),
            None,
            callback,
            result_parser=lambda result: None,
        )

    def _bulk_registry_operation(self, devices, import_mode, callback):
        body = [device_identity.to_import_export_entry(d, import_mode) for d in devices]
        logger.debug(
            "Sending bulk registry operation for {} devices with import mode '{}'".format(
                len(body), import_mode
            )
        )
        self._execute_api_call(
            "POST", http_path.get_devices_path(), self._get_json_headers(), body, callback
        )

    def add_devices(self, devices, callback):
        """Create up to 100 device identities in a single request.

        :param list devices: The device identities. Each must contain a "deviceId".
        :param callback: Called with the bulk registry operation result.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if devices or
            callback is None
        :raises: :class:`azure.iot.registry.exceptions.ArgumentError` if devices is not a list,
            has less than 1 or more than 100 elements, or has an element without a deviceId
        """
        validation.validate_device_list(devices)
        validation.validate_callback(callback)

        self._bulk_registry_operation(devices, device_identity.IMPORT_MODE_CREATE, callback)

    def update_devices(self, devices, force_update, callback):
        """Update up to 100 device identities in a single request.

        :param list devices: The device identities. Each must contain a "deviceId".
        :param bool force_update: If True, devices are updated whatever their etag. If False,
            only devices whose etag matches the one provided are updated.
        :param callback: Called with the bulk registry operation result.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if devices or
            callback is None, or if force_update is not a boolean
        :raises: :class:`azure.iot.registry.exceptions.ArgumentError` if devices is not a list,
            has less than 1 or more than 100 elements, or has an element without a deviceId
        """
        validation.validate_device_list(devices)
        validation.validate_force_flag(force_update, "force_update")
        validation.validate_callback(callback)

        self._bulk_registry_operation(
            devices, device_identity.get_update_import_mode(force_update), callback
        )

    def remove_devices(self, devices, force_remove, callback):
        """Delete up to 100 device identities in a single request.

        :param list devices: The device identities. Each must contain a "deviceId".
        :param bool force_remove: If True, devices are deleted whatever their etag. If False,
            only devices whose etag matches the one provided are deleted.
        :param callback: Called with the bulk registry operation result.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if devices or
            callback is None, or if force_remove is not a boolean
        :raises: :class:`azure.iot.registry.exceptions.ArgumentError` if devices is not a list,
            has less than 1 or more than 100 elements, or has an element without a deviceId
        """
        validation.validate_device_list(devices)
        validation.validate_force_flag(force_remove, "force_remove")
        validation.validate_callback(callback)

        self._bulk_registry_operation(
            devices, device_identity.get_remove_import_mode(force_remove), callback
        )

    def import_devices_from_blob(self, input_blob_container_uri, output_blob_container_uri, callback):
        """Start a job importing device identities from a blob container.

        :param str input_blob_container_uri: URI of the container holding the identities to import
        :param str output_blob_container_uri: URI of the container receiving the job logs
        :param callback: Called with the created job as result.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if either URI is
            empty or callback is None
        """
        validation.validate_required_string(input_blob_container_uri, "input_blob_container_uri")
        validation.validate_required_string(
            output_blob_container_uri, "output_blob_container_uri"
        )
        validation.validate_callback(callback)

        body = {
            "type": "import",
            "inputBlobContainerUri": input_blob_container_uri,
            "outputBlobContainerUri": output_blob_container_uri,
        }
        self._execute_api_call(
            "POST", http_path.get_create_job_path(), self._get_json_headers(), body, callback
        )

    def export_devices_to_blob(self, output_blob_container_uri, exclude_keys, callback):
        """Start a job exporting the device identities of the registry to a blob container.

        :param str output_blob_container_uri: URI of the container receiving the identities
        :param bool exclude_keys: Whether authentication keys are left out of the export
        :param callback: Called with the created job as result.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if the URI is
            empty or callback is None
        """
        validation.validate_required_string(
            output_blob_container_uri, "output_blob_container_uri"
        )
        validation.validate_callback(callback)

        body = {
            "type": "export",
            "outputBlobContainerUri": output_blob_container_uri,
            "excludeKeysInExport": exclude_keys,
        }
        self._execute_api_call(
            "POST", http_path.get_create_job_path(), self._get_json_headers(), body, callback
        )

    def list_jobs(self, callback):
        """List the import/export jobs of the IoTHub.

        :param callback: Called with the list of jobs as result.
        """
        validation.validate_callback(callback)

        self._execute_api_call("GET", http_path.get_jobs_path(), self._get_headers(), None, callback)

    def get_job(self, job_id, callback):
        """Get the status of an import/export job.

        :param str job_id: The ID of the job.
        :param callback: Called with the job as result.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if job_id is
            empty or callback is None
        """
        validation.validate_required_string(job_id, "job_id")
        validation.validate_callback(callback)

        self._execute_api_call(
            "GET", http_path.get_job_path(job_id), self._get_headers(), None, callback
        )

    def cancel_job(self, job_id, callback):
        """Cancel an import/export job.

        :param str job_id: The ID of the job.
        :param callback: Called with the cancelled job as result.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if job_id is
            empty or callback is None
        """
        validation.validate_required_string(job_id, "job_id")
        validation.validate_callback(callback)

        self._execute_api_call(
            "DELETE", http_path.get_job_path(job_id), self._get_headers(), None, callback
        )

    def get_twin(self, device_id, callback):
        """Get the twin of a device.

        :param str device_id: The name (Id) of the device.
        :param callback: Called with a Twin as result, and the transport response.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if device_id is
            empty or callback is None
        """
        validation.validate_required_string(device_id, "device_id")
        validation.validate_callback(callback)

        self._execute_api_call(
            "GET",
            http_path.get_twin_path(device_id),
            self._get_headers(),
            None,
            callback,
            result_parser=Twin.from_response,
        )

    def update_twin(self, device_id, patch, etag, callback):
        """Update the tags and desired properties of a device twin.

        The update only succeeds if the twin still has the given etag. Use "*" to update the
        twin whatever its etag.

        :param str device_id: The name (Id) of the device.
        :param dict patch: The twin patch, e.g. {"tags": {...}, "properties": {"desired": {...}}}
        :param str etag: The etag the twin must have.
        :param callback: Called with the updated Twin as result, and the transport response.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if device_id or etag
            is empty, or if patch or callback is None
        """
        validation.validate_required_string(device_id, "device_id")
        validation.validate_required_object(patch, "patch")
        validation.validate_required_string(etag, "etag")
        validation.validate_callback(callback)

        self._execute_api_call(
            "PATCH",
            http_path.get_twin_path(device_id),
            self._get_json_headers({constant.IF_MATCH_HEADER: etag}),
            patch,
            callback,
            result_parser=Twin.from_response,
        )

    def create_query(self, sql_query, page_size=None):
        """Create a cursor over the results of a SQL-like query on the device twins.

        No request is sent until the first page is requested with Query.next().

        :param str sql_query: The query, e.g. "SELECT * FROM devices"
        :param int page_size: The maximum number of items per page (optional). The service
            default is used when it is not provided.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if sql_query is empty
        :raises: TypeError if sql_query is not a string, or page_size is not a number

        :rtype: :class:`azure.iot.registry.Query`
        """
        validation.validate_query(sql_query, page_size)
        return Query(self._get_execute_query_fn(sql_query, page_size), sql_query, page_size)

    def _get_execute_query_fn(self, sql_query, page_size):
        def execute_query(continuation_token, callback):
            extra_headers = {}
            if continuation_token:
                extra_headers[constant.CONTINUATION_HEADER] = continuation_token
            if page_size is not None:
                extra_headers[constant.MAX_ITEM_COUNT_HEADER] = str(page_size)
            self._execute_api_call(
                "POST",
                http_path.get_query_path(),
                self._get_json_headers(extra_headers),
                {"query": sql_query},
                callback,
            )

        return execute_query

    def get_registry_statistics(self, callback):
        """Get the device statistics of the registry (total, enabled and disabled device counts).

        :param callback: Called with the registry statistics as result.
        """
        validation.validate_callback(callback)

        self._execute_api_call(
            "GET", http_path.get_device_statistics_path(), self._get_headers(), None, callback
        )
