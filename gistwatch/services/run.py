"""One run of the notification pipeline.

States: START -> WATERMARK_LOADED -> FETCHED -> FILTERED -> IDLE | COMPOSED
-> DISPATCHED -> WATERMARK_SAVED -> DONE. Any error moves to FAILED and is
re-raised; the watermark is saved only after dispatch (or when idle), so a
failed run's changes are picked up again by the next run.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable

from gistwatch.models import NotificationRequest, RunResult
from gistwatch.services import change_filter, report
from gistwatch.services.gist_source import RemoteGistSource
from gistwatch.services.notifier import NotificationDispatcher
from gistwatch.services.watermark import WatermarkStore, utc_now

LOG = logging.getLogger("gistwatch.services.run")


class RunState(str, Enum):
    START = "start"
    WATERMARK_LOADED = "watermark_loaded"
    FETCHED = "fetched"
    FILTERED = "filtered"
    IDLE = "idle"
    COMPOSED = "composed"
    DISPATCHED = "dispatched"
    WATERMARK_SAVED = "watermark_saved"
    DONE = "done"
    FAILED = "failed"


class RunCoordinator:
    """Orchestrates load -> fetch -> filter -> compose/dispatch -> save."""

    def __init__(
        self,
        store: WatermarkStore,
        source: RemoteGistSource,
        dispatcher: NotificationDispatcher,
        request: NotificationRequest,
        username: str,
        clock: Callable[[], datetime] = utc_now,
        echo: Callable[[str], None] = print,
        dry_run: bool = False,
    ) -> None:
        self._store = store
        self._source = source
        self._dispatcher = dispatcher
        self._request = request
        self._username = username
        self._clock = clock
        self._echo = echo
        self._dry_run = dry_run
        self.state = RunState.START

    def _transition(self, state: RunState) -> None:
        LOG.debug("Run state %s -> %s", self.state.value, state.value)
        self.state = state

    def run(self) -> RunResult:
        """Execute one run; raises the first fatal error without saving."""
        try:
            return self._run()
        except Exception as e:
            LOG.error("Run failed in state %s: %s", self.state.value, e)
            self._transition(RunState.FAILED)
            raise

    def _run(self) -> RunResult:
        next_watermark = self._clock()
        watermark = self._store.load()
        self._transition(RunState.WATERMARK_LOADED)
        LOG.info("Checking gists of %s for comments since %s", self._username, watermark.isoformat())

        gists = self._source.fetch_all(self._username)
        self._transition(RunState.FETCHED)

        updated = change_filter.select(gists, watermark)
        self._transition(RunState.FILTERED)

        body = ""
        dispatched = False
        self._echo(f"{len(updated)} updated since {watermark.isoformat()}")
        if not updated:
            self._transition(RunState.IDLE)
        else:
            body = report.render(updated, watermark)
            self._transition(RunState.COMPOSED)
            self._echo(body)
            if self._dry_run:
                LOG.info("Dry run: not sending digest of %d gists", len(updated))
            else:
                self._dispatcher.send(self._request, body)
                dispatched = True
                self._transition(RunState.DISPATCHED)

        saved = False
        if self._dry_run:
            LOG.info("Dry run: watermark left at %s", watermark.isoformat())
        else:
            self._store.save(next_watermark)
            saved = True
            self._transition(RunState.WATERMARK_SAVED)

        self._transition(RunState.DONE)
        LOG.info("Run done: %d gists updated, digest sent=%s", len(updated), dispatched)
        return RunResult(
            watermark=watermark,
            next_watermark=next_watermark,
            gists=tuple(updated),
            report=body,
            dispatched=dispatched,
            saved=saved,
        )
