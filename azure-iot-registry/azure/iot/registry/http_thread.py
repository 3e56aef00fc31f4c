# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
import functools
import logging
import threading
import traceback
from concurrent.futures import ThreadPoolExecutor

logger = logging.getLogger(__name__)

"""
This module contains the decorator used to marshal HTTP requests onto the "http thread".

Requests made by the default REST API client run on this single thread so that API calls
return to the application immediately.  If a request is submitted while another one is
running, it is queued until the first one has completed.  Callbacks into application code
are made from this thread, and any exception they raise is logged rather than lost.

concurrent.futures is used because the Future returned for each request re-raises both
Exception and BaseException errors when Future.result is called.
"""

HTTP_THREAD_NAME = "azure_iot_registry_http"

_executors = {}


def handle_background_exception(e):
    """
    Log an exception raised on the http thread.  Nothing else can catch it: the request
    was submitted without waiting, and the exception usually comes from a callback
    provided by the application.

    :param Exception e: Exception object raised on the http thread
    """
    logger.error(msg="Exception caught in http thread.  Unable to handle.", exc_info=e)


def _get_named_executor(thread_name):
    """
    Get a ThreadPoolExecutor object with the given name.  If no such executor exists,
    this function will create one with a single worker and assign it to the provided
    name.
    """
    global _executors
    if thread_name not in _executors:
        logger.debug("Creating {} executor".format(thread_name))
        _executors[thread_name] = ThreadPoolExecutor(max_workers=1)
    return _executors[thread_name]


def _invoke_on_executor_thread_nowait(func, thread_name):
    """
    Return wrapper to run the function on a given thread.  The call returns a Future
    immediately, without waiting for the decorated function to complete.
    """

    def wrapper(*args, **kwargs):
        if threading.current_thread().name != thread_name:
            logger.debug("Starting {} in {} thread".format(func.__name__, thread_name))

            def thread_proc():
                threading.current_thread().name = thread_name
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    handle_background_exception(e)
                except BaseException:
                    logger.error("Unhandled exception in background thread")
                    logger.error(
                        "This may cause the background thread to abort and may result in system instability."
                    )
                    traceback.print_exc()
                    raise

            return _get_named_executor(thread_name).submit(thread_proc)
        else:
            logger.debug("Already in {} thread for {}".format(thread_name, func.__name__))
            return func(*args, **kwargs)

    return functools.update_wrapper(wrapped=func, wrapper=wrapper)


def invoke_on_http_thread_nowait(func):
    """
    Run the decorated function on the http thread, but don't wait for it to complete
    """
    return _invoke_on_executor_thread_nowait(func=func, thread_name=HTTP_THREAD_NAME)
