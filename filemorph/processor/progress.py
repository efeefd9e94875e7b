from collections.abc import Callable

from filemorph.logging.logger import Log

ProgressCallback = Callable[[float, str], None]

# Share of overall progress owned by each pipeline stage.
LOAD_BAND = (0.0, 10.0)
WORK_BAND = (10.0, 80.0)
SYNTHESIS_BAND = (80.0, 100.0)


class ProgressTracker:
    """Forwards progress to a callback, clamped to 0-100 and never decreasing."""

    def __init__(self, callback: ProgressCallback | None = None) -> None:
        self._callback = callback
        self._progress = 0.0

    @property
    def progress(self) -> float:
        return self._progress

    def report(self, percent: float, status: str) -> None:
        self._progress = max(self._progress, min(100.0, max(0.0, percent)))
        Log.info(f"[{self._progress:5.1f}%] {status}")
        if self._callback is not None:
            self._callback(self._progress, status)

    def band(self, bounds: tuple[float, float]) -> "ProgressBand":
        return ProgressBand(self, *bounds)


class ProgressBand:
    """Maps a stage-local fraction (0-1) into the stage's share of overall progress."""

    def __init__(self, tracker: ProgressTracker, start: float, end: float) -> None:
        self._tracker = tracker
        self._start = start
        self._end = end

    def report(self, fraction: float, status: str) -> None:
        fraction = min(1.0, max(0.0, fraction))
        self._tracker.report(self._start + (self._end - self._start) * fraction, status)

    def sub_band(self, index: int, count: int) -> "ProgressBand":
        """The `index`-th of `count` equal slices of this band."""
        width = (self._end - self._start) / max(1, count)
        start = self._start + width * index
        return ProgressBand(self._tracker, start, start + width)
