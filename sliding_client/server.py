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

# This file provides some classes for setting up (partially-populated)
# clients; either as a full client or as a partially-populated client for
# unit tests.

import functools
import logging
from typing import Any, Callable, TypeVar, cast

from twisted.internet.interfaces import IReactorTime

from sliding_client.config.client import ClientConfig
from sliding_client.handlers.consistency import ConsistencyChecker
from sliding_client.handlers.interest import InterestDebouncer
from sliding_client.handlers.projector import ViewModelProjector
from sliding_client.handlers.ranges import RangeComputer
from sliding_client.handlers.reconciler import ListViewReconciler
from sliding_client.handlers.room_view import RoomTimelineView
from sliding_client.handlers.sync import SlidingSyncHandler
from sliding_client.handlers.visibility import VisibilityTracker
from sliding_client.interfaces import (
    IDiagnosticsSink,
    IPresenter,
    ISyncConnection,
    IViewport,
    SyncEngineFactory,
)
from sliding_client.presentation import DefaultPresenter, MediaUrlBuilder
from sliding_client.storage.room_store import RoomStore
from sliding_client.types.handlers.room_list import RoomList
from sliding_client.util import SLIDING_CLIENT_VERSION
from sliding_client.util.clock import Clock

logger = logging.getLogger(__name__)


T = TypeVar("T")
F = TypeVar("F", bound=Callable[["SlidingSyncClient"], Any])


def cache_in_self(builder: F) -> F:
    """Wraps a function called e.g. `get_foo`, checking if `self.foo` exists and
    returning if so. If not, calls the given function and sets `self.foo` to it.

    Also ensures that dependency cycles throw an exception correctly, rather
    than overflowing the stack.
    """

    if not builder.__name__.startswith("get_"):
        raise Exception(
            "@cache_in_self can only be used on functions starting with `get_`"
        )

    # get_attr -> _attr
    depname = builder.__name__[len("get") :]

    building = [False]

    @functools.wraps(builder)
    def _get(self: "SlidingSyncClient") -> T:
        try:
            dep = getattr(self, depname)
            return dep
        except AttributeError:
            pass

        # Prevent cyclic dependencies from deadlocking
        if building[0]:
            raise ValueError("Cyclic dependency while building %s" % (depname,))

        building[0] = True
        try:
            dep = builder(self)
            setattr(self, depname, dep)
        finally:
            building[0] = False

        return dep

    return cast(F, _get)


class SlidingSyncClient:
    """Holds the components of one client and wires them together.

    Components are built lazily by `get_<name>()` methods, so tests can build only
    the part they are interested in, or preset a component by passing it in.

    Args:
        config: The full config for the client.
        connection: The transport's connection, interrupted when ranges or filters
            change.
        sync_engine_factory: Builds a sync engine for each sync loop.
        viewport: The platform's source of visibility changes.
        presenter: Display text for events. Defaults to `DefaultPresenter`.
        diagnostics: Receives every list and response after each round, if given.
        reactor: The Twisted reactor to schedule timers on. Defaults to the global
            reactor.
    """

    def __init__(
        self,
        config: ClientConfig,
        connection: ISyncConnection,
        sync_engine_factory: SyncEngineFactory,
        viewport: IViewport,
        presenter: IPresenter | None = None,
        diagnostics: IDiagnosticsSink | None = None,
        reactor: IReactorTime | None = None,
    ):
        if not reactor:
            from twisted.internet import reactor as _reactor

            reactor = cast(IReactorTime, _reactor)

        self._reactor = reactor
        self.config = config
        self._connection = connection
        self._sync_engine_factory = sync_engine_factory
        self._viewport = viewport
        if presenter is not None:
            self._presenter = presenter
        self._diagnostics_sink = diagnostics

        self.version_string = f"sliding-sync-client/{SLIDING_CLIENT_VERSION}"
        self._is_shutdown = False

    def shutdown(self) -> None:
        """Stop the sync loop and cancel every pending timer."""
        if self._is_shutdown:
            return
        logger.info("Shutting down %s", self.version_string)
        self._is_shutdown = True
        self.get_sliding_sync_handler().stop()
        self.get_clock().shutdown()

    def get_reactor(self) -> IReactorTime:
        return self._reactor

    def get_connection(self) -> ISyncConnection:
        return self._connection

    def get_sync_engine_factory(self) -> SyncEngineFactory:
        return self._sync_engine_factory

    def get_viewport(self) -> IViewport:
        return self._viewport

    def get_diagnostics_sink(self) -> IDiagnosticsSink | None:
        return self._diagnostics_sink

    @cache_in_self
    def get_clock(self) -> Clock:
        return Clock(self._reactor)

    @cache_in_self
    def get_presenter(self) -> IPresenter:
        return DefaultPresenter()

    @cache_in_self
    def get_media_url_builder(self) -> MediaUrlBuilder:
        return MediaUrlBuilder(self.config.media)

    @cache_in_self
    def get_room_lists(self) -> list[RoomList]:
        return self.config.sliding_sync.build_room_lists()

    @cache_in_self
    def get_view_model_projector(self) -> ViewModelProjector:
        return ViewModelProjector()

    @cache_in_self
    def get_room_store(self) -> RoomStore:
        return RoomStore(self.get_view_model_projector())

    @cache_in_self
    def get_visibility_tracker(self) -> VisibilityTracker:
        return VisibilityTracker()

    @cache_in_self
    def get_range_computer(self) -> RangeComputer:
        return RangeComputer(
            buffer_range=self.config.sliding_sync.buffer_range,
            static_range_end=self.config.sliding_sync.static_range_end,
        )

    @cache_in_self
    def get_interest_debouncer(self) -> InterestDebouncer:
        return InterestDebouncer(self)

    @cache_in_self
    def get_list_view_reconciler(self) -> ListViewReconciler:
        return ListViewReconciler(self)

    @cache_in_self
    def get_consistency_checker(self) -> ConsistencyChecker:
        return ConsistencyChecker()

    @cache_in_self
    def get_room_timeline_view(self) -> RoomTimelineView:
        return RoomTimelineView(self)

    @cache_in_self
    def get_sliding_sync_handler(self) -> SlidingSyncHandler:
        return SlidingSyncHandler(self)
