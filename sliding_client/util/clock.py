#
# This file is licensed under the Affero General Public License (AGPL) version 3.
#
# Copyright (C) 2025 New Vector, Ltd
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# See the GNU Affero General Public License for more details:
# <https://www.gnu.org/licenses/agpl-3.0.html>.
#
#

import logging
from typing import Any, Callable

from zope.interface import implementer

from twisted.internet.interfaces import IDelayedCall, IReactorTime

logger = logging.getLogger(__name__)


class Clock:
    """
    A Clock wraps a Twisted reactor and provides utilities on top of it.

    This clock should be used in place of calls to the base reactor wherever a
    `DelayedCall` is made (such as when calling `reactor.callLater`). This is to
    ensure the calls made by the client are tracked and can be cleaned up during
    `SlidingSyncClient.shutdown()`.

    Args:
        reactor: The Twisted reactor to use.
    """

    _reactor: IReactorTime

    def __init__(self, reactor: IReactorTime) -> None:
        self._reactor = reactor

        self._delayed_call_id: int = 0
        """Unique ID used to track delayed calls"""

        self._call_id_to_delayed_call: dict[int, IDelayedCall] = {}
        """Mapping from unique call ID to delayed calls which have not yet fired"""

        self._is_shutdown = False
        """Whether shutdown has been requested"""

    def shutdown(self) -> None:
        self._is_shutdown = True
        self.cancel_all_delayed_calls()

    def call_later(
        self,
        delay: float,
        callback: Callable,
        *args: Any,
        **kwargs: Any,
    ) -> "DelayedCallWrapper":
        """Call something later

        Args:
            delay: How long to wait in seconds.
            callback: Function to call
            *args: Postional arguments to pass to function.
            **kwargs: Key arguments to pass to function.
        """
        call_id = self._delayed_call_id
        self._delayed_call_id = self._delayed_call_id + 1

        if self._is_shutdown:
            raise Exception("Cannot start delayed call. Clock has been shutdown")

        def wrapped_callback(*args: Any, **kwargs: Any) -> None:
            logger.debug("call_later(%s): Executing callback", call_id)
            try:
                callback(*args, **kwargs)
            finally:
                # We still want to remove the call from the tracking map. Even if
                # the callback raises an exception.
                self._call_id_to_delayed_call.pop(call_id, None)

        call = self._reactor.callLater(delay, wrapped_callback, *args, **kwargs)

        logger.debug("call_later(%s): Scheduled call for %ss later", call_id, delay)

        wrapped_call = DelayedCallWrapper(call, call_id, self)
        self._call_id_to_delayed_call[call_id] = wrapped_call

        return wrapped_call

    def cancel_call_later(
        self, wrapped_call: "DelayedCallWrapper", ignore_errs: bool = False
    ) -> None:
        try:
            logger.debug(
                "cancel_call_later: cancelling scheduled call %s", wrapped_call.call_id
            )
            wrapped_call.cancel()
        except Exception:
            if not ignore_errs:
                raise

    def cancel_all_delayed_calls(self, ignore_errs: bool = True) -> None:
        """
        Stop all scheduled calls which have not fired yet.

        Args:
            ignore_errs: Whether to re-raise errors encountered when cancelling the
            scheduled call.
        """
        # We make a copy here since calling `cancel()` on a delayed_call
        # will result in the call removing itself from the map mid-iteration.
        for call_id, call in list(self._call_id_to_delayed_call.items()):
            try:
                logger.debug(
                    "cancel_all_delayed_calls: cancelling scheduled call %s", call_id
                )
                call.cancel()
            except Exception:
                if not ignore_errs:
                    raise
        self._call_id_to_delayed_call.clear()


@implementer(IDelayedCall)
class DelayedCallWrapper:
    """Wraps an `IDelayedCall` so that we can intercept the call to `cancel()` and
    properly cleanup the delayed call from the tracking map of the `Clock`.

    args:
        delayed_call: The actual `IDelayedCall`
        call_id: Unique identifier for this delayed call
        clock: The clock instance tracking this call
    """

    def __init__(self, delayed_call: IDelayedCall, call_id: int, clock: Clock):
        self.delayed_call = delayed_call
        self.call_id = call_id
        self.clock = clock

    def cancel(self) -> None:
        """Remove the call from the tracking map and propagate the call to the
        underlying delayed_call.
        """
        self.delayed_call.cancel()
        self.clock._call_id_to_delayed_call.pop(self.call_id, None)

    def getTime(self) -> float:
        """Propagate the call to the underlying delayed_call."""
        return self.delayed_call.getTime()

    def delay(self, secondsLater: float) -> None:
        """Propagate the call to the underlying delayed_call."""
        self.delayed_call.delay(secondsLater)

    def reset(self, secondsFromNow: float) -> None:
        """Propagate the call to the underlying delayed_call."""
        self.delayed_call.reset(secondsFromNow)

    def active(self) -> bool:
        """Propagate the call to the underlying delayed_call."""
        return self.delayed_call.active()
