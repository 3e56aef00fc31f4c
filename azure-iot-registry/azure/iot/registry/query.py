# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the cursor used to page through the results of a registry query"""

import logging
from . import constant
from .models.twin import Twin
from .validation import validate_callback

logger = logging.getLogger(__name__)


def get_continuation_token(response):
    """Return the continuation token of a query response, or None if there are no more pages"""
    headers = getattr(response, "headers", None)
    if not headers:
        return None
    return headers.get(constant.CONTINUATION_HEADER) or None


class Query(object):
    """A cursor over the pages of results of a SQL-like registry query.

    The cursor starts with more results available and no continuation token. Each call to
    next() fetches one page and keeps the continuation token returned by the service for the
    following call. Once a page comes back without a continuation token, the cursor is
    exhausted: further calls to next() complete immediately with an empty page, without
    sending a request, until reset() is called.

    A Query is not safe to advance concurrently. Wait for the callback of a call to next()
    before calling it again, otherwise the continuation token kept by the cursor depends on
    which response is processed last.

    :ivar str sql_query: The text of the query
    :ivar int page_size: The maximum number of items per page, or None for the service default
    :ivar str continuation_token: The token used to request the next page, if any
    :ivar bool has_more_results: Whether more pages can be requested
    """

    def __init__(self, execute_query_fn, sql_query, page_size=None):
        """Initializer for a Query

        :param execute_query_fn: The function fetching one page. It is called as
            execute_query_fn(continuation_token, callback), and must complete the callback
            once, as callback(error=e) or callback(result=page, response=resp).
        :param str sql_query: The text of the query
        :param int page_size: The maximum number of items per page (optional)
        """
        self._execute_query_fn = execute_query_fn
        self._sql_query = sql_query
        self._page_size = page_size
        self._continuation_token = None
        self._has_more_results = True

    @property
    def sql_query(self):
        return self._sql_query

    @property
    def page_size(self):
        return self._page_size

    @property
    def continuation_token(self):
        return self._continuation_token

    @property
    def has_more_results(self):
        return self._has_more_results

    def next(self, callback):
        """Fetch the next page of results.

        On success the callback receives the page exactly as returned by the service, and the
        transport response. On failure it receives the error, and the cursor is left as it was,
        so that calling next() again requests the same page.

        :param callback: Called once, as callback(error=e) or callback(result=page, response=resp)
        :raises: ArgumentMissingError if callback is None
        """
        validate_callback(callback)

        if not self._has_more_results:
            logger.debug("Query has no more results. Completing with an empty page.")
            callback(result=[], response=None)
            return

        def on_page_received(error=None, result=None, response=None):
            if error:
                logger.debug("Query page request failed: {}".format(error))
                callback(error=error)
                return
            self._continuation_token = get_continuation_token(response)
            self._has_more_results = self._continuation_token is not None
            logger.debug(
                "Query page received (more results: {})".format(self._has_more_results)
            )
            callback(result=result, response=response)

        self._execute_query_fn(self._continuation_token, on_page_received)

    def next_as_twin(self, callback):
        """Fetch the next page of results, as Twin objects.

        Behaves like next(), except that each record of the page is parsed into a Twin.

        :param callback: Called once, as callback(error=e) or callback(result=twins, response=resp)
        :raises: ArgumentMissingError if callback is None
        """
        validate_callback(callback)

        def on_page_received(error=None, result=None, response=None):
            if error:
                callback(error=error)
                return
            try:
                twins = [Twin.from_response(record) for record in (result or [])]
            except ValueError as e:
                callback(error=e)
                return
            callback(result=twins, response=response)

        self.next(on_page_received)

    def reset(self):
        """Return the cursor to its initial state, so that the next page fetched is the first one"""
        self._continuation_token = None
        self._has_more_results = True
