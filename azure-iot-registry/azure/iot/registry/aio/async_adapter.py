# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains tools for adapting the callback based registry client for use in async coroutines."""

import asyncio
import functools
import logging

logger = logging.getLogger(__name__)


def emulate_async(fn):
    """Returns a coroutine function that calls a given function with emulated asynchronous
    behavior via use of mulithreading.

    Can be applied as a decorator.

    :param fn: The sync function to be run in async.
    :returns: A coroutine function that will call the given sync function.
    """

    @functools.wraps(fn)
    async def async_fn_wrapper(*args, **kwargs):
        loop = asyncio.get_running_loop()

        # Run fn in default ThreadPoolExecutor
        return await loop.run_in_executor(None, functools.partial(fn, *args, **kwargs))

    return async_fn_wrapper


class AwaitableCallback(object):
    """A sync callback whose completion can be waited upon.

    Must be created from a coroutine, since it binds itself to the running event loop. It
    can then be called from any thread.
    """

    def __init__(self, return_arg_names=None):
        """Creates an instance of an AwaitableCallback

        :param return_arg_names: Name of the keyword argument whose value is the result of the
            completion, or a tuple of names, in which case the result is a tuple of their values.
            If not provided, the result of the completion is None.
        """

        # LBYL because this mistake doesn't cause an exception until the callback
        # which is much later and very difficult to trace back to here.
        if isinstance(return_arg_names, str):
            return_arg_names = (return_arg_names,)
            single_result = True
        elif return_arg_names is None or isinstance(return_arg_names, tuple):
            single_result = False
        else:
            raise TypeError("internal error: return_arg_names must be a string or a tuple")

        loop = asyncio.get_running_loop()
        self.future = loop.create_future()

        def wrapping_callback(*args, **kwargs):
            # Use event loop from outer scope, since the threads it will be used in will not have
            # an event loop. future.set_result() and future.set_exception have to be called in an
            # event loop or they do not work.
            result = None
            if "error" in kwargs and kwargs["error"]:
                exception = kwargs["error"]
            else:
                exception = None
                if return_arg_names:
                    missing = [name for name in return_arg_names if name not in kwargs]
                    if missing:
                        raise TypeError(
                            "internal error: expected argument with name '{}', did not get".format(
                                missing[0]
                            )
                        )
                    values = tuple(kwargs[name] for name in return_arg_names)
                    result = values[0] if single_result else values

            if exception:
                logger.debug("Callback completed with error {}".format(exception))
                loop.call_soon_threadsafe(self.future.set_exception, exception)
            else:
                logger.debug("Callback completed with result {}".format(result))
                loop.call_soon_threadsafe(self.future.set_result, result)

        self.callback = wrapping_callback

    def __call__(self, *args, **kwargs):
        """Calls the callback. Returns the result.
        """
        return self.callback(*args, **kwargs)

    async def completion(self):
        """Awaitable coroutine method that will return once the AwaitableCallback
        has been completed.

        :returns: Result of the callback when it was called.
        """
        return await self.future
