"""Nested progress indicators drawn from a dedicated render thread.

The extraction worker only registers handles, advances their counters and
marks them finished. Every ``tqdm`` call happens on the render thread: it opens
a bar the first time it sees a handle, copies the counter into it on each tick,
and closes the bar once the handle is finished.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
from typing import Callable, Iterable, Iterator, Literal, TextIO, TypeVar

from tqdm import tqdm

from asset_materializer.errors import ProgressRenderError

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

SPINNER_FRAMES = ("|", "/", "-", "\\")
BAR_FORMAT = "{desc} [{elapsed}<{remaining}] {bar} {n_fmt}/{total_fmt} {postfix}"

RenderStatus = Literal["completed", "failed", "crashed"]


class ProgressHandle:
    """Worker-side view of one registered indicator."""

    def __init__(
        self,
        *,
        lock: threading.Condition,
        total: int | None,
        desc: str | None,
        unit: str,
    ):
        self._lock = lock
        self._position = 0
        self._finished = False
        self._leave = True
        self._bar: tqdm | None = None
        self.total = total
        self.desc = desc
        self.unit = unit

    @property
    def position(self) -> int:
        with self._lock:
            return self._position

    @property
    def finished(self) -> bool:
        with self._lock:
            return self._finished

    @property
    def indeterminate(self) -> bool:
        return self.total is None

    def update(self, n: int = 1) -> None:
        with self._lock:
            if self._finished:
                return
            self._position += n

    def track(self, iterable: Iterable[T]) -> Iterator[T]:
        """Yield items, counting each one once the caller is done with it.

        The handle is finished and cleared after the iterable is exhausted. If
        the caller stops early, the handle is left as it is.
        """

        for item in iterable:
            yield item
            self.update()
        self.finish_and_clear()

    def finish(self) -> None:
        self._mark_finished(leave=True)

    def finish_and_clear(self) -> None:
        self._mark_finished(leave=False)

    def _mark_finished(self, *, leave: bool) -> None:
        with self._lock:
            if self._finished:
                return
            self._finished = True
            self._leave = leave
            self._lock.notify_all()

    # Called by the render thread with the lock held.

    def _redraw(self, bar_factory: Callable[["ProgressHandle"], tqdm], frame: str) -> None:
        if self._bar is None:
            self._bar = bar_factory(self)
        self._bar.n = self._position
        if self.indeterminate:
            self._bar.set_postfix_str(frame, refresh=False)
        self._bar.refresh()

    def _close_bar(self) -> None:
        if self._bar is None:
            return
        self._bar.n = self._position
        self._bar.leave = self._leave
        self._bar.close()


class ProgressCoordinator:
    """Thread-safe collection of progress indicators shared by worker and renderer."""

    def __init__(
        self,
        *,
        refresh_interval: float = 0.1,
        disable: bool = False,
        file: TextIO | None = None,
    ):
        self._changed = threading.Condition()
        self._handles: list[ProgressHandle] = []
        self._active: list[ProgressHandle] = []
        self._refresh_interval = refresh_interval
        self._disable = disable
        self._file = file
        self._tick = 0

    @property
    def handles(self) -> tuple[ProgressHandle, ...]:
        """Every handle ever registered, in registration order."""

        with self._changed:
            return tuple(self._handles)

    @property
    def active_handles(self) -> tuple[ProgressHandle, ...]:
        """Handles the renderer still has to draw or close."""

        with self._changed:
            return tuple(self._active)

    def add(self, *, total: int | None = None, desc: str | None = None, unit: str = "it") -> ProgressHandle:
        with self._changed:
            handle = ProgressHandle(lock=self._changed, total=total, desc=desc, unit=unit)
            self._handles.append(handle)
            self._active.append(handle)
            self._changed.notify_all()
            return handle

    def render_until_all_finished(self) -> None:
        with self._changed:
            while True:
                self._draw()
                if not self._active:
                    return
                self._changed.wait(timeout=self._refresh_interval)

    def spawn_render_thread(self) -> "RenderThread":
        thread = RenderThread(self.render_until_all_finished)
        thread.start()
        return thread

    def _open_bar(self, handle: ProgressHandle) -> tqdm:
        return tqdm(
            total=handle.total,
            desc=handle.desc,
            unit=handle.unit,
            disable=self._disable,
            file=self._file,
            bar_format=BAR_FORMAT if handle.total is not None else None,
        )

    def _draw(self) -> None:
        frame = SPINNER_FRAMES[self._tick % len(SPINNER_FRAMES)]
        self._tick += 1
        still_active: list[ProgressHandle] = []
        try:
            for handle in self._active:
                if handle.finished:
                    handle._close_bar()
                else:
                    handle._redraw(self._open_bar, frame)
                    still_active.append(handle)
        except OSError as exc:
            raise ProgressRenderError(str(exc)) from exc
        self._active = still_active


@dataclass(frozen=True)
class RenderOutcome:
    """How the render thread ended.

    ``failed`` means the render loop reported a ``ProgressRenderError``;
    ``crashed`` means it died from any other exception. Both carry the error.
    """

    status: RenderStatus
    error: BaseException | None = None

    def __post_init__(self) -> None:
        if (self.status == "completed") != (self.error is None):
            raise ValueError(f"Render outcome {self.status!r} is inconsistent with error={self.error!r}.")

    @property
    def ok(self) -> bool:
        return self.status == "completed"

    def raise_for_status(self) -> None:
        if self.error is not None:
            raise self.error


class RenderThread(threading.Thread):
    def __init__(self, target: Callable[[], None]):
        super().__init__(name="Progress thread", daemon=True)
        self._render = target
        self._outcome: RenderOutcome | None = None

    def run(self) -> None:
        try:
            self._render()
        except ProgressRenderError as exc:
            self._outcome = RenderOutcome("failed", exc)
        except BaseException as exc:
            LOGGER.debug("Progress thread crashed", exc_info=True)
            self._outcome = RenderOutcome("crashed", exc)
        else:
            self._outcome = RenderOutcome("completed")

    def join_outcome(self) -> RenderOutcome:
        self.join()
        if self._outcome is None:
            raise RuntimeError("Progress thread ended without recording an outcome.")
        return self._outcome
