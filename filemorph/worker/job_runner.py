import asyncio
from collections.abc import Callable, Sequence

from filemorph.assets.loader import InputPath
from filemorph.exceptions import ConversionError
from filemorph.logging.logger import Log
from filemorph.processor.models import ConversionKind, ConversionOptions, JobState
from filemorph.processor.orchestrator import Orchestrator

GENERIC_FAILURE_MESSAGE = "The conversion process was interrupted."
CANCELLED_MESSAGE = "The conversion was cancelled."

StateListener = Callable[[JobState], None]


class JobRunner:
    """Run one conversion job and normalize its outcome into a JobState.

    There is no retry: a failed job stays failed and the caller starts a new one.
    """

    def __init__(self, orchestrator: Orchestrator) -> None:
        self._orchestrator = orchestrator

    async def run(
        self,
        kind: ConversionKind,
        files: Sequence[InputPath],
        options: ConversionOptions | None = None,
        on_update: StateListener | None = None,
    ) -> JobState:
        """Execute a single job with error handling."""
        state = JobState(kind=kind)

        def notify() -> None:
            if on_update is not None:
                on_update(state)

        def on_progress(progress: float, status: str) -> None:
            state.update(progress, status)
            notify()

        state.start("Warming up AI engine...")
        notify()
        try:
            result = await self._orchestrator.convert(kind, files, on_progress, options)
        except asyncio.CancelledError:
            Log.warning(f"Job '{kind.value}' was cancelled")
            state.fail(CANCELLED_MESSAGE)
            notify()
            raise
        except ConversionError as exc:
            Log.error(f"Job '{kind.value}' failed: {exc}")
            state.fail(str(exc))
        except Exception as exc:
            Log.exception(f"Job '{kind.value}' failed unexpectedly: {exc}")
            state.fail(GENERIC_FAILURE_MESSAGE)
        else:
            state.complete(result, "Workflow complete")
            Log.info(f"Job '{kind.value}' completed: {result.filename}")
        notify()
        return state
