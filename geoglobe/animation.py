import logging
from typing import Callable, Protocol

from PySide6.QtCore import QObject, QTimer, Slot

from geoglobe.config import GlobeConfig
from geoglobe.models import GlobeState

logger = logging.getLogger(__name__)


def advance_phase(state: GlobeState, config: GlobeConfig) -> None:
    """Step the frame clocks by one frame

    Auto-rotation only advances while the pointer is neither dragging nor
    hovering; the pulse clock always advances.
    """
    if not state.interaction.suspends_auto_rotation:
        state.phase.auto_rotation_angle += config.auto_rotation_step
    state.phase.pulse_phase += config.pulse_step


class FrameScheduler(Protocol):
    """Schedules one callback for the next frame"""

    def schedule(self, callback: Callable[[], None]) -> object:
        ...

    def cancel(self, handle: object) -> None:
        ...


class QtFrameScheduler(QObject):
    '''Single-shot QTimer that fires once per display frame'''

    def __init__(self, interval_ms: int = 16, parent=None):
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._fire)
        self._callback = None
        self._handle = 0

    def schedule(self, callback: Callable[[], None]) -> int:
        self._handle += 1
        self._callback = callback
        self._timer.start()
        return self._handle

    def cancel(self, handle: int) -> None:
        if handle != self._handle:
            return
        self._timer.stop()
        self._callback = None

    @Slot()
    def _fire(self) -> None:
        callback, self._callback = self._callback, None
        if callback is not None:
            callback()


class AnimationLoop:
    '''Frame loop: advance clocks, draw, reschedule

    The loop is the only place that mutates the animation clocks. Stopping it
    cancels the pending frame so nothing fires afterwards.
    '''

    def __init__(self, state: GlobeState, on_frame: Callable[[GlobeState], None],
                 scheduler: FrameScheduler, config: GlobeConfig | None = None):
        '''
        Parameters
        ----------
        state : GlobeState
            View state of the mounted globe
        on_frame : callable
            Called with the state after the clocks advance, draws the frame
        scheduler : FrameScheduler
            Source of frame callbacks
        config : GlobeConfig
        '''
        self.state = state
        self.on_frame = on_frame
        self.scheduler = scheduler
        self.config = GlobeConfig() if config is None else config
        self._handle = None
        self.frames = 0

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        if self.running:
            return
        logger.debug("Animation loop started")
        self._handle = self.scheduler.schedule(self._run)

    def stop(self) -> None:
        if self._handle is None:
            return
        self.scheduler.cancel(self._handle)
        self._handle = None
        logger.debug(f"Animation loop stopped after {self.frames} frames")

    def tick(self) -> None:
        advance_phase(self.state, self.config)
        self.frames += 1
        self.on_frame(self.state)

    def _run(self) -> None:
        if self._handle is None:
            return
        self.tick()
        # on_frame may have stopped the loop
        if self._handle is not None:
            self._handle = self.scheduler.schedule(self._run)
