# --------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import json
import logging
import re
import ssl
import uuid
import requests  # type: ignore
from . import constant
from . import exceptions
from . import http_thread
from .config import RegistryConfig

logger = logging.getLogger(__name__)


# NOTE: There should probably be a more global timeout configuration, but for now this will do.
HTTP_TIMEOUT = 10

SUPPORTED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

ERROR_CODE_HEADER = "iothub-errorcode"
_error_code_in_message = re.compile(r"ErrorCode:(\w+)")


class HttpResponse(object):
    """The transport response of a completed registry request

    :ivar int status_code: The HTTP status code
    :ivar str reason: The HTTP reason phrase
    :ivar headers: The response headers (case-insensitive mapping)
    :ivar str body: The raw response body
    """

    def __init__(self, status_code, reason, headers, body):
        self.status_code = status_code
        self.reason = reason
        self.headers = headers
        self.body = body

    def __repr__(self):
        return "HttpResponse(status_code={!r}, reason={!r})".format(self.status_code, self.reason)


class RestApiClient(object):
    """
    The default HTTP helper of the registry client.

    Sends registry requests to the IoTHub over HTTPS using the requests library, authorizing
    each of them with the configured shared access signature.
    """

    def __init__(self, config, server_verification_cert=None, cipher=None, proxy_options=None):
        """
        Constructor to instantiate the REST API client.

        :param config: The connection details of the IoTHub.
        :type config: :class:`azure.iot.registry.config.RegistryConfig`
        :param str server_verification_cert: Certificate which can be used to validate a server-side TLS connection (optional).
        :param str cipher: Cipher string in OpenSSL cipher list format (optional)
        :param proxy_options: Options for sending traffic through proxy servers (optional).
        :type proxy_options: :class:`azure.iot.registry.models.ProxyOptions`
        """
        self._config = RegistryConfig.from_value(config)
        self._server_verification_cert = server_verification_cert
        self._cipher = cipher
        self._proxies = format_proxies(proxy_options)
        self._http_adapter = self._create_http_adapter()

    @property
    def config(self):
        return self._config

    def _create_http_adapter(self):
        """
        This method creates a custom HTTPAdapter for use with a requests library session.
        It will allow for use of a custom configured SSL context.
        """
        ssl_context = self._create_ssl_context()

        class CustomSSLContextHTTPAdapter(requests.adapters.HTTPAdapter):
            def init_poolmanager(self, *args, **kwargs):
                kwargs["ssl_context"] = ssl_context
                return super().init_poolmanager(*args, **kwargs)

            def proxy_manager_for(self, *args, **kwargs):
                kwargs["ssl_context"] = ssl_context
                return super().proxy_manager_for(*args, **kwargs)

        return CustomSSLContextHTTPAdapter()

    def _create_ssl_context(self):
        """
        This method creates the SSLContext object used to authenticate the connection.
        """
        logger.debug("creating a SSL context")
        ssl_context = ssl.SSLContext(protocol=ssl.PROTOCOL_TLSv1_2)

        if self._server_verification_cert:
            ssl_context.load_verify_locations(cadata=self._server_verification_cert)
        else:
            ssl_context.load_default_certs()

        if self._cipher:
            ssl_context.set_ciphers(self._cipher)

        ssl_context.verify_mode = ssl.CERT_REQUIRED
        ssl_context.check_hostname = True

        return ssl_context

    def _build_headers(self, headers):
        request_headers = dict(headers) if headers else {}
        request_headers[constant.AUTHORIZATION_HEADER] = self._config.shared_access_signature
        request_headers.setdefault(constant.REQUEST_ID_HEADER, str(uuid.uuid4()))
        request_headers.setdefault(
            constant.USER_AGENT_HEADER,
            "{}/{}".format(constant.IOTHUB_IDENTIFIER, constant.VERSION),
        )
        return {k: str(v) for k, v in request_headers.items()}

    @http_thread.invoke_on_http_thread_nowait
    def execute_api_call(self, method, path, headers, body, callback):
        """
        Send a request to the IoTHub, wait for the response, and complete the callback with
        its outcome.

        :param str method: The request method (e.g. "POST")
        :param str path: The path of the request, including its query string
        :param dict headers: Headers to send with the request, in addition to the Authorization header
        :param body: A JSON-serializable request body, or None for requests without a body
        :param callback: The function that gets called once, when the request has completed or
            failed. It is called as callback(error=e) on failure, and as
            callback(result=r, response=resp) on success, where r is the parsed response body
            and resp is an HttpResponse.

        :returns: A Future for the background work of this request.
        """
        logger.info("sending https {} request to {} .".format(method, path))

        if method not in SUPPORTED_METHODS:
            callback(error=ValueError("Invalid method type: {}".format(method)))
            return

        # Mount the transport adapter to a requests session
        session = requests.Session()
        session.mount("https://", self._http_adapter)

        url = "https://{hostname}{path}".format(hostname=self._config.host, path=path)
        try:
            data = json.dumps(body) if body is not None else None
        except (TypeError, ValueError) as e:
            callback(error=exceptions.ClientError("Unable to encode the request body", e))
            return

        try:
            # Note that various configuration options are not set here due to them being set
            # via the HTTPAdapter that was mounted at session level.
            response = session.request(
                method,
                url,
                data=data,
                headers=self._build_headers(headers),
                proxies=self._proxies,
                timeout=HTTP_TIMEOUT,
            )
        except requests.exceptions.Timeout as e:
            # Timeouts are exposed as-is. There is no timeout handling in the registry client.
            callback(error=e)
            return
        except Exception as e:
            callback(error=exceptions.ClientError("Unexpected HTTPS failure during request", e))
            return

        http_response = HttpResponse(
            status_code=response.status_code,
            reason=response.reason,
            headers=response.headers,
            body=response.text,
        )
        logger.debug(
            "received https response {} {} for {} request to {}".format(
                response.status_code, response.reason, method, path
            )
        )

        if response.status_code >= 300:
            callback(error=translate_error(http_response))
            return

        try:
            result = parse_response_body(http_response.body)
        except ValueError as e:
            callback(error=exceptions.ClientError("Unable to parse the response body", e))
            return

        callback(result=result, response=http_response)


def parse_response_body(body):
    """Return the parsed JSON body of a successful response, or None if it is empty"""
    if not body:
        return None
    return json.loads(body)


def get_error_code(http_response):
    """Return the IoTHub error code of a failed response, if one can be found"""
    error_code = http_response.headers.get(ERROR_CODE_HEADER) if http_response.headers else None
    if error_code:
        return error_code
    try:
        error_body = json.loads(http_response.body)
    except (TypeError, ValueError):
        return None
    if not isinstance(error_body, dict):
        return None
    error_code = error_body.get("ErrorCode") or error_body.get("errorCode")
    if error_code:
        return str(error_code)
    match = _error_code_in_message.search(str(error_body.get("Message", "")))
    if match:
        return match.group(1)
    return None


def translate_error(http_response):
    """Return the ServiceError corresponding to a failed response"""
    return exceptions.error_from_status_code(
        http_response.status_code,
        reason=http_response.reason,
        response_body=http_response.body,
        error_code=get_error_code(http_response),
    )


def format_proxies(proxy_options):
    """Return the proxies argument of the requests library for the given ProxyOptions"""
    if not proxy_options:
        return {}
    return {"http": proxy_options.proxy_url, "https": proxy_options.proxy_url}
