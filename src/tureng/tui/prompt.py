"""Interactive incremental-search prompt.

``InteractivePrompt.run`` is a single task that owns the text buffer, the
candidate list, the selection and the debounce state. Everything else talks
to it through awaitables:

* the terminal's stdin reader puts key sequences on a queue,
* the debounce deadline and the loading animation are ``asyncio.sleep`` tasks,
* the autocomplete lookup is one task in a single in-flight slot.

Each loop iteration waits for the first of these to become ready, services
exactly one of them and redraws only what changed. The keyboard goes first
when several are ready, but a source that was ready and skipped goes first
on the next iteration, so nothing waits more than one turn.

A content-changing edit abandons the in-flight lookup. The abandoned task
is not cancelled; it finishes in the background and its result is dropped.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Awaitable, Sequence
from typing import Callable

from tureng.errors import TurengError
from tureng.tui.debounce import DebounceController, RequestTicket
from tureng.tui.keybindings import PromptKeybindingsManager, get_prompt_keybindings
from tureng.tui.keys import is_printable_input
from tureng.tui.renderer import LOADING_FRAMES, PromptRenderer, PromptTheme
from tureng.tui.selection import SelectionState
from tureng.tui.stdin_buffer import BRACKETED_PASTE_END, BRACKETED_PASTE_START
from tureng.tui.terminal import Terminal
from tureng.tui.text_buffer import TextBuffer

logger = logging.getLogger(__name__)

AutocompleteFn = Callable[[str], Awaitable[Sequence[str]]]

# Stdin reading is paused above the high-water mark and resumed below the low one
_KEY_HIGH_WATER = 256
_KEY_LOW_WATER = 32

_KEY = "key"
_RESPONSE = "response"
_DEBOUNCE = "debounce"
_TICK = "tick"
_PRIORITY = (_KEY, _RESPONSE, _DEBOUNCE, _TICK)

_EDIT_ACTIONS: dict[str, str] = {
    "cursorLeft": "move_left",
    "cursorRight": "move_right",
    "cursorLineStart": "move_home",
    "cursorLineEnd": "move_end",
    "deleteCharBackward": "backspace",
    "deleteCharForward": "delete_forward",
    "deleteWordBackward": "delete_word_backward",
    "deleteToLineStart": "delete_to_start",
}


class PromptState(enum.Enum):
    EDITING = "editing"
    AWAITING = "awaiting"
    DONE = "done"


class InteractivePrompt:
    """Incremental-search prompt with a live autocomplete dropdown.

    Parameters
    ----------
    terminal:
        Where to read keys from and draw to.
    autocomplete:
        ``async (query) -> candidates``. May raise :class:`TurengError`;
        failures keep the previous candidates.
    popup_capacity:
        Maximum number of candidate rows shown; at least 1.
    debounce_delay / tick_interval:
        Quiescence window before a lookup and loading animation period, in
        seconds.
    """

    def __init__(
        self,
        terminal: Terminal,
        autocomplete: AutocompleteFn,
        *,
        popup_capacity: int = 9,
        debounce_delay: float = 0.25,
        tick_interval: float = 0.02,
        theme: PromptTheme | None = None,
        keybindings: PromptKeybindingsManager | None = None,
    ) -> None:
        if popup_capacity < 1:
            raise ValueError(f"popup_capacity must be at least 1, got {popup_capacity}")
        self._terminal = terminal
        self._autocomplete = autocomplete
        self._capacity = popup_capacity
        self._tick_interval = tick_interval
        self._keybindings = keybindings or get_prompt_keybindings()
        self._renderer = PromptRenderer(terminal, popup_capacity, theme)

        self._buffer = TextBuffer()
        self._selection = SelectionState()
        self._candidates: tuple[str, ...] = ()
        self._debounce = DebounceController(
            debounce_delay, fingerprint=self._buffer.fingerprint()
        )

        self._keys: asyncio.Queue[str] = asyncio.Queue()
        self._input_paused = False
        self._waiters: dict[str, asyncio.Future] = {}
        self._starved: list[str] = []

        self._inflight: asyncio.Future | None = None
        self._inflight_ticket: RequestTicket | None = None
        self._background: set[asyncio.Future] = set()
        self._frame = 0

        self._done = False
        self._result: str | None = None
        self._dirty_prompt = False
        self._dirty_candidates = False

    # -- read-only views ----------------------------------------------------

    @property
    def state(self) -> PromptState:
        if self._done:
            return PromptState.DONE
        if self._inflight is not None:
            return PromptState.AWAITING
        return PromptState.EDITING

    @property
    def text(self) -> str:
        return self._buffer.render()

    @property
    def cursor(self) -> int:
        return self._buffer.cursor

    @property
    def candidates(self) -> tuple[str, ...]:
        return self._candidates

    @property
    def selected_index(self) -> int:
        return self._selection.index

    # -- main loop ----------------------------------------------------------

    async def run(self) -> str | None:
        """Run until the user confirms or aborts.

        Returns the selected candidate, or ``None`` on abort or when there
        was nothing to select. Terminal failures propagate as ``OSError``.
        """
        self._terminal.start(self._on_input)
        try:
            self._renderer.begin(self._buffer)
            while not self._done:
                waiters = self._arm_waiters()
                await asyncio.wait(waiters.values(), return_when=asyncio.FIRST_COMPLETED)
                ready = [name for name, waiter in waiters.items() if waiter.done()]
                self._dispatch(self._pick(ready))
                self._render()
            self._renderer.finish(self._buffer)
        finally:
            self._shutdown()
            self._terminal.stop()
        return self._result

    def _arm_waiters(self) -> dict[str, asyncio.Future]:
        if _KEY not in self._waiters:
            self._waiters[_KEY] = asyncio.ensure_future(self._keys.get())

        remaining = self._debounce.remaining()
        if remaining is not None and _DEBOUNCE not in self._waiters:
            self._waiters[_DEBOUNCE] = asyncio.ensure_future(asyncio.sleep(remaining))

        waiters = dict(self._waiters)
        if self._inflight is not None:
            if _TICK not in self._waiters:
                self._waiters[_TICK] = asyncio.ensure_future(asyncio.sleep(self._tick_interval))
                waiters[_TICK] = self._waiters[_TICK]
            waiters[_RESPONSE] = self._inflight
        return waiters

    def _pick(self, ready: list[str]) -> str:
        order = [name for name in self._starved if name in ready]
        order += [name for name in _PRIORITY if name in ready and name not in order]
        self._starved = order[1:]
        return order[0]

    def _dispatch(self, source: str) -> None:
        if source == _KEY:
            data = self._waiters.pop(_KEY).result()
            self._maybe_resume_input()
            self._handle_key(data)
        elif source == _RESPONSE:
            self._handle_response()
        elif source == _DEBOUNCE:
            self._waiters.pop(_DEBOUNCE)
            if self._debounce.due():
                self._start_request()
        else:
            self._waiters.pop(_TICK)
            self._frame = (self._frame + 1) % len(LOADING_FRAMES)
            self._dirty_prompt = True

    def _render(self) -> None:
        if self._done or not (self._dirty_prompt or self._dirty_candidates):
            return
        frame = self._frame if self._inflight is not None else None
        if self._dirty_candidates:
            self._renderer.draw_candidates(
                self._buffer, self._candidates, self._selection.index, frame
            )
        else:
            self._renderer.draw_prompt(self._buffer, frame)
        self._dirty_prompt = False
        self._dirty_candidates = False
        self._terminal.flush()

    # -- keyboard -----------------------------------------------------------

    def _on_input(self, data: str) -> None:
        self._keys.put_nowait(data)
        if not self._input_paused and self._keys.qsize() >= _KEY_HIGH_WATER:
            self._terminal.pause_input()
            self._input_paused = True

    def _maybe_resume_input(self) -> None:
        if self._input_paused and self._keys.qsize() <= _KEY_LOW_WATER:
            self._terminal.resume_input()
            self._input_paused = False

    def _handle_key(self, data: str) -> None:
        if data.startswith(BRACKETED_PASTE_START):
            pasted = data[len(BRACKETED_PASTE_START):].removesuffix(BRACKETED_PASTE_END)
            # One line of plain text: tabs become spaces, other controls are dropped
            text = "".join(ch for ch in pasted.replace("\t", " ") if is_printable_input(ch))
            self._edit(lambda: self._buffer.insert_text(text))
            return

        action = self._keybindings.action_for(data)
        if action == "abort":
            self._finish(None)
        elif action == "submit":
            self._finish(self._selection.selected(self._candidates))
        elif action == "selectUp":
            self._dirty_candidates = self._selection.move_up()
        elif action == "selectDown":
            self._dirty_candidates = self._selection.move_down(
                len(self._candidates), self._capacity
            )
        elif action in _EDIT_ACTIONS:
            self._edit(getattr(self._buffer, _EDIT_ACTIONS[action]))
        elif action is None and is_printable_input(data):
            self._edit(lambda: self._buffer.insert_text(data))

    def _edit(self, operation: Callable[[], None]) -> None:
        operation()
        self._dirty_prompt = True
        if self._debounce.on_edit(self._buffer.fingerprint()):
            self._drop_waiter(_DEBOUNCE)
            self._abandon_request()

    def _finish(self, result: str | None) -> None:
        self._result = result
        self._done = True
        self._debounce.cancel()
        self._abandon_request()

    # -- autocomplete requests ---------------------------------------------

    def _start_request(self) -> None:
        ticket = self._debounce.fire(self._buffer.render())
        if ticket is None:
            return
        self._abandon_request()
        logger.debug("autocomplete #%d for %r", ticket.generation, ticket.query)
        self._inflight = asyncio.ensure_future(self._autocomplete(ticket.query))
        self._inflight_ticket = ticket
        self._frame = 0
        self._dirty_prompt = True

    def _handle_response(self) -> None:
        task, ticket = self._inflight, self._inflight_ticket
        if task is None or ticket is None:
            return
        self._inflight = None
        self._inflight_ticket = None
        self._drop_waiter(_TICK)
        # Erase the loading indicator
        self._dirty_prompt = True

        current = self._debounce.is_current(ticket.generation)
        self._debounce.complete(ticket.generation)
        try:
            result = task.result()
        except TurengError as exc:
            logger.debug("autocomplete #%d for %r failed: %s", ticket.generation, ticket.query, exc)
            return
        if not current:
            logger.debug("dropping stale candidates #%d for %r", ticket.generation, ticket.query)
            return

        self._candidates = tuple(result)
        self._selection.clamp(len(self._candidates), self._capacity)
        self._dirty_candidates = True

    def _abandon_request(self) -> None:
        task = self._inflight
        if task is None:
            return
        self._inflight = None
        self._inflight_ticket = None
        self._drop_waiter(_TICK)
        self._dirty_prompt = True
        # Keep a reference so the task is not garbage collected mid-flight
        self._background.add(task)
        task.add_done_callback(self._discard_abandoned)

    def _discard_abandoned(self, task: asyncio.Future) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.debug("abandoned autocomplete request failed: %s", exc)

    # -- cleanup ------------------------------------------------------------

    def _drop_waiter(self, name: str) -> None:
        waiter = self._waiters.pop(name, None)
        if waiter is not None:
            waiter.cancel()

    def _shutdown(self) -> None:
        for name in list(self._waiters):
            self._drop_waiter(name)
        self._abandon_request()
        self._input_paused = False
