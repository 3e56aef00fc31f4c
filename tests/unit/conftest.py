# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import pytest

"""
NOTE: Tests that need a non-specific, arbitrary exception should use the following fixture.
Raising Exception directly lets broad "except Exception" handling hide other errors. A
subclass defined nowhere else is guaranteed to be unexpected, and checking that it was raised
or delivered will not spuriously pass because of some other exception.
"""


@pytest.fixture
def arbitrary_exception():
    class ArbitraryException(Exception):
        pass

    e = ArbitraryException("arbitrary description")
    return e


"""----Fake HTTP helper----"""


class FakeResponse(object):
    def __init__(self, status_code=200, headers=None, body=None):
        self.status_code = status_code
        self.headers = headers if headers is not None else {}
        self.body = body


class FakeHttpHelper(object):
    """Records every request, and completes each of them synchronously.

    Successive requests are completed with the (result, response) pairs in results, in order.
    The last pair is reused once they have all been used. If error is set, every request is
    completed with it instead.
    """

    def __init__(self):
        self.requests = []
        self.results = [(None, FakeResponse())]
        self.error = None

    def execute_api_call(self, method, path, headers, body, callback):
        self.requests.append(
            {"method": method, "path": path, "headers": dict(headers), "body": body}
        )
        if self.error:
            callback(error=self.error)
            return
        index = min(len(self.requests), len(self.results)) - 1
        result, response = self.results[index]
        callback(result=result, response=response)

    @property
    def last_request(self):
        return self.requests[-1]


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def http_helper():
    return FakeHttpHelper()
