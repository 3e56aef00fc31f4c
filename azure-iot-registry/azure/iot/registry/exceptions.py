# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module defines the exceptions raised and delivered by the registry client.

There are two disjoint families:

- Argument errors (ArgumentMissingError, ArgumentError, and the builtin TypeError) are
  raised synchronously from the API call itself, before any request is built.
- Operational errors (ServiceError and its subclasses, ClientError) are only ever
  delivered through the error slot of an operation's callback.
"""


class ArgumentMissingError(ValueError):
    """A required argument was not provided"""

    pass


class ArgumentError(ValueError):
    """An argument was provided but is structurally invalid"""

    pass


class ChainableException(Exception):
    """This exception stores a reference to a previous exception which has caused
    the current one"""

    def __init__(self, message=None, cause=None):
        self.__cause__ = cause
        super(ChainableException, self).__init__(message)

    def __str__(self):
        if self.__cause__:
            return "{} caused by {}".format(
                super(ChainableException, self).__str__(), self.__cause__.__repr__()
            )
        else:
            return super(ChainableException, self).__str__()


class ClientError(ChainableException):
    """The request could not be completed by the HTTP client"""

    pass


class ServiceError(Exception):
    """The service responded with a failed status code

    :ivar int status_code: The HTTP status code of the response
    :ivar str reason: The HTTP reason phrase of the response
    :ivar response_body: The raw body of the response, if any
    """

    def __init__(self, message=None, status_code=None, reason=None, response_body=None):
        super(ServiceError, self).__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.response_body = response_body


class BadRequestError(ServiceError):
    """
    Service returned 400
    """

    pass


class UnauthorizedError(ServiceError):
    """
    Service returned 401
    """

    pass


class TooManyDevicesError(ServiceError):
    """
    Service returned 403
    """

    pass


class NotFoundError(ServiceError):
    """
    Service returned 404
    """

    pass


class DeviceNotFoundError(NotFoundError):
    """
    Service returned 404 with the DeviceNotFound error code
    """

    pass


class IotHubNotFoundError(NotFoundError):
    """
    Service returned 404 with the IotHubNotFound error code
    """

    pass


class DeviceTimeoutError(ServiceError):
    """
    Service returned 408
    """

    pass


class DeviceAlreadyExistsError(ServiceError):
    """
    Service returned 409
    """

    pass


class InvalidEtagError(ServiceError):
    """
    Service returned 412
    """

    pass


class MessageTooLargeError(ServiceError):
    """
    Service returned 413
    """

    pass


class ThrottlingError(ServiceError):
    """
    Service returned 429
    """

    pass


class InternalServerError(ServiceError):
    """
    Service returned 500
    """

    pass


class BadDeviceResponseError(ServiceError):
    """
    Service returned 502
    """

    pass


class ServiceUnavailableError(ServiceError):
    """
    Service returned 503
    """

    pass


class GatewayTimeoutError(ServiceError):
    """
    Service returned 504
    """

    pass


class FailedStatusCodeError(ServiceError):
    """
    Service returned unknown status code
    """

    pass


status_code_to_error = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: TooManyDevicesError,
    404: NotFoundError,
    408: DeviceTimeoutError,
    409: DeviceAlreadyExistsError,
    412: InvalidEtagError,
    413: MessageTooLargeError,
    429: ThrottlingError,
    500: InternalServerError,
    502: BadDeviceResponseError,
    503: ServiceUnavailableError,
    504: GatewayTimeoutError,
}

# 404 responses are refined using the error code the service puts in the response body
not_found_error_code_to_error = {
    "DeviceNotFound": DeviceNotFoundError,
    "IotHubNotFound": IotHubNotFoundError,
}


def error_from_status_code(status_code, reason=None, response_body=None, error_code=None):
    """
    Return an Error object from a failed status code

    :param int status_code: Status code returned from failed operation
    :param str reason: Reason phrase returned with the status code
    :param response_body: Body of the failed response
    :param str error_code: Error code parsed from the response body, if any
    :returns: Error object
    """
    message = "HTTP operation returned: {} {}".format(status_code, reason)
    if status_code == 404 and error_code in not_found_error_code_to_error:
        error_cls = not_found_error_code_to_error[error_code]
    else:
        error_cls = status_code_to_error.get(status_code, FailedStatusCodeError)
    return error_cls(
        message, status_code=status_code, reason=reason, response_body=response_body
    )
