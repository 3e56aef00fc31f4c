# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the asynchronous client for the identity registry of an IoTHub."""

import logging
from typing import Any, Dict, List, Optional, Tuple
from azure.iot.registry.registry import Registry
from azure.iot.registry.query import Query
from azure.iot.registry.models.twin import Twin
from azure.iot.registry.custom_typing import DeviceIdentity, TwinPatch
from . import async_adapter

logger = logging.getLogger(__name__)

RESULT_AND_RESPONSE = ("result", "response")


async def _call(fn, *args) -> Tuple[Any, Any]:
    """Run a callback based registry operation, and return its (result, response) pair.

    Errors raised by argument validation, and errors the operation completes with, are raised
    from the coroutine.
    """
    callback = async_adapter.AwaitableCallback(return_arg_names=RESULT_AND_RESPONSE)
    await async_adapter.emulate_async(fn)(*args, callback)
    return await callback.completion()


class AsyncQuery(object):
    """An asynchronous cursor over the pages of results of a registry query.

    Supports iteration with "async for", which yields one page at a time until the query has
    no more results.
    """

    def __init__(self, query: Query) -> None:
        self._query = query

    @property
    def sql_query(self) -> str:
        return self._query.sql_query

    @property
    def page_size(self) -> Optional[int]:
        return self._query.page_size

    @property
    def continuation_token(self) -> Optional[str]:
        return self._query.continuation_token

    @property
    def has_more_results(self) -> bool:
        return self._query.has_more_results

    async def next(self) -> Tuple[List[Any], Any]:
        """Fetch the next page of results.

        :returns: The (page, response) pair. The page is empty and the response is None once
            the query has no more results.
        """
        return await _call(self._query.next)

    async def next_as_twin(self) -> Tuple[List[Twin], Any]:
        """Fetch the next page of results, as Twin objects.

        :returns: The (twins, response) pair.
        """
        return await _call(self._query.next_as_twin)

    def reset(self) -> None:
        self._query.reset()

    def __aiter__(self):
        return self._iterate_pages()

    async def _iterate_pages(self):
        while self._query.has_more_results:
            page, _ = await self.next()
            yield page


class AsyncRegistry(object):
    """An asynchronous client for the identity registry of an IoTHub.

    Each operation is a coroutine returning the (result, response) pair of the equivalent
    Registry operation, or raising the error it completes with.
    """

    def __init__(self, config, http_helper=None) -> None:
        """Initializer for an AsyncRegistry client.

        :param config: The connection details of the IoTHub, as accepted by Registry.
        :param http_helper: The object used to send requests (optional)
        """
        self._registry = Registry(config, http_helper)

    @classmethod
    def from_connection_string(cls, value: str, http_helper=None) -> "AsyncRegistry":
        """Create an AsyncRegistry client from an IoTHub connection string.

        :param str value: The IoTHub connection string
        :param http_helper: The object used to send requests (optional)
        """
        return cls._from_registry(Registry.from_connection_string(value, http_helper))

    @classmethod
    def from_shared_access_signature(cls, value: str, http_helper=None) -> "AsyncRegistry":
        """Create an AsyncRegistry client from a shared access signature.

        :param str value: The shared access signature
        :param http_helper: The object used to send requests (optional)
        """
        return cls._from_registry(Registry.from_shared_access_signature(value, http_helper))

    @classmethod
    def _from_registry(cls, registry: Registry) -> "AsyncRegistry":
        async_registry = cls.__new__(cls)
        async_registry._registry = registry
        return async_registry

    @property
    def config(self):
        return self._registry.config

    async def create(self, device_info: DeviceIdentity) -> Tuple[DeviceIdentity, Any]:
        return await _call(self._registry.create, device_info)

    async def update(self, device_info: DeviceIdentity) -> Tuple[DeviceIdentity, Any]:
        return await _call(self._registry.update, device_info)

    async def get(self, device_id: str) -> Tuple[DeviceIdentity, Any]:
        return await _call(self._registry.get, device_id)

    async def list(self) -> Tuple[List[DeviceIdentity], Any]:
        return await _call(self._registry.list)

    async def delete(self, device_id: str) -> Tuple[None, Any]:
        return await _call(self._registry.delete, device_id)

    async def add_devices(self, devices: List[DeviceIdentity]) -> Tuple[Dict[str, Any], Any]:
        return await _call(self._registry.add_devices, devices)

    async def update_devices(
        self, devices: List[DeviceIdentity], force_update: bool
    ) -> Tuple[Dict[str, Any], Any]:
        return await _call(self._registry.update_devices, devices, force_update)

    async def remove_devices(
        self, devices: List[DeviceIdentity], force_remove: bool
    ) -> Tuple[Dict[str, Any], Any]:
        return await _call(self._registry.remove_devices, devices, force_remove)

    async def import_devices_from_blob(
        self, input_blob_container_uri: str, output_blob_container_uri: str
    ) -> Tuple[Dict[str, Any], Any]:
        return await _call(
            self._registry.import_devices_from_blob,
            input_blob_container_uri,
            output_blob_container_uri,
        )

    async def export_devices_to_blob(
        self, output_blob_container_uri: str, exclude_keys: bool
    ) -> Tuple[Dict[str, Any], Any]:
        return await _call(
            self._registry.export_devices_to_blob, output_blob_container_uri, exclude_keys
        )

    async def list_jobs(self) -> Tuple[List[Dict[str, Any]], Any]:
        return await _call(self._registry.list_jobs)

    async def get_job(self, job_id: str) -> Tuple[Dict[str, Any], Any]:
        return await _call(self._registry.get_job, job_id)

    async def cancel_job(self, job_id: str) -> Tuple[Dict[str, Any], Any]:
        return await _call(self._registry.cancel_job, job_id)

    async def get_twin(self, device_id: str) -> Tuple[Twin, Any]:
        return await _call(self._registry.get_twin, device_id)

    async def update_twin(self, device_id: str, patch: TwinPatch, etag: str) -> Tuple[Twin, Any]:
        return await _call(self._registry.update_twin, device_id, patch, etag)

    def create_query(self, sql_query: str, page_size: Optional[int] = None) -> AsyncQuery:
        """Create an asynchronous cursor over the results of a query on the device twins.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if sql_query is empty
        :raises: TypeError if sql_query is not a string, or page_size is not a number
        """
        return AsyncQuery(self._registry.create_query(sql_query, page_size))

    async def get_registry_statistics(self) -> Tuple[Dict[str, Any], Any]:
        return await _call(self._registry.get_registry_statistics)
