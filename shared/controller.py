"""
shared/controller.py

PreviewController drives the fetch -> normalize -> idle lifecycle for one
preview card. It owns the PreviewRecord and the Status flag; hosts read
them and call shared.render.render_card whenever they choose.

Overlapping cycles are not cancelled. By default the record reflects
whichever cycle finished last (completion order, not trigger order).
With discard_stale=True a response whose trigger is no longer the latest
is dropped instead.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from shared.localization import Localizer
from shared.metadata_client import MetadataFetchError, fetch_metadata_async
from shared.models import FetchOutcome, PreviewRecord, Status
from shared.normalizer import error_record, normalize_metadata, placeholder_record
from shared.theming import default_theme

Fetcher = Callable[[str], Awaitable[Dict[str, Any]]]
Listener = Callable[[FetchOutcome], None]


class PreviewController:
    def __init__(
        self,
        fetcher: Optional[Fetcher] = None,
        localizer: Optional[Localizer] = None,
        locale: Optional[str] = None,
        theme: Callable[[str], str] = default_theme,
        discard_stale: bool = False,
    ):
        self.fetcher: Fetcher = fetcher or fetch_metadata_async
        self.localizer = localizer or Localizer()
        self.locale = locale
        self.theme = theme
        self.discard_stale = discard_stale

        self.record: PreviewRecord = placeholder_record(self.messages)
        self.status: Status = Status.IDLE
        self.target_address: str = ""
        self.last_outcome: Optional[FetchOutcome] = None

        self._listeners: List[Listener] = []
        self._tasks: Set["asyncio.Task[FetchOutcome]"] = set()
        self._in_flight = 0
        self._seq = 0

    # --- read-only view -------------------------------------------------

    @property
    def messages(self) -> Dict[str, str]:
        return self.localizer.messages(self.locale)

    @property
    def title(self) -> str:
        return self.record.title

    @property
    def description(self) -> str:
        return self.record.description

    @property
    def image(self) -> str:
        return self.record.image

    @property
    def canonical_link(self) -> str:
        return self.record.canonical_link

    @property
    def accent_color(self) -> str:
        return self.record.accent_color

    @property
    def loading(self) -> bool:
        return self.status is Status.LOADING

    # --- triggers -------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def set_target_address(self, address: Optional[str]) -> "Optional[asyncio.Task[FetchOutcome]]":
        """
        Point the card at a new address. A new non-empty value starts a
        fetch cycle on the running event loop and returns its task; empty
        or unchanged values return None.
        """
        address = (address or "").strip()
        if not address or address == self.target_address:
            return None

        loop = asyncio.get_running_loop()
        self.target_address = address
        seq = self._begin()
        task = loop.create_task(self._run_cycle(address, seq))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def refresh(self, address: Optional[str] = None) -> FetchOutcome:
        """Run one cycle for `address` (default: current target) and wait for it."""
        address = (address or self.target_address or "").strip()
        if not address:
            raise ValueError("no target address to preview")
        self.target_address = address
        seq = self._begin()
        return await self._run_cycle(address, seq)

    async def wait_idle(self) -> None:
        while True:
            pending = [t for t in self._tasks if not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending)

    # --- lifecycle ------------------------------------------------------

    def _begin(self) -> int:
        self._seq += 1
        self._in_flight += 1
        self.status = Status.LOADING
        return self._seq

    def _end(self) -> None:
        self._in_flight -= 1
        if self._in_flight <= 0:
            self._in_flight = 0
            self.status = Status.IDLE

    async def _run_cycle(self, address: str, seq: int) -> FetchOutcome:
        try:
            try:
                data = await self.fetcher(address)
                record = normalize_metadata(data, address, self.messages, self.theme)
                outcome = FetchOutcome(address, record)
            except MetadataFetchError as ex:
                logging.warning("[LinkPreview][Fetch] Failed for %s: %s", address, ex)
                outcome = FetchOutcome(address, error_record(address, self.messages, self.theme), ex)
            except Exception as ex:
                logging.exception("[LinkPreview][Fetch] Unexpected error for %s", address)
                outcome = FetchOutcome(address, error_record(address, self.messages, self.theme), ex)

            if self.discard_stale and seq != self._seq:
                outcome.stale = True
                logging.info("[LinkPreview][Fetch] Dropping stale response for %s", address)
            else:
                # whole-record swap, never field by field
                self.record = outcome.record
                self.last_outcome = outcome

            self._notify(outcome)
            return outcome
        finally:
            self._end()

    def _notify(self, outcome: FetchOutcome) -> None:
        for listener in list(self._listeners):
            try:
                listener(outcome)
            except Exception:
                logging.exception("[LinkPreview][Fetch] Listener failed")
