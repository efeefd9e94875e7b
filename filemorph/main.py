import argparse
import asyncio
import sys
from pathlib import Path

from filemorph.config.settings import Settings
from filemorph.logging.logger import Log
from filemorph.processor.models import ConversionKind, ConversionOptions, JobStatus
from filemorph.processor.orchestrator import build_orchestrator
from filemorph.worker.job_runner import JobRunner


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="filemorph", description="Convert documents between formats.")
    parser.add_argument("kind", choices=[kind.value for kind in ConversionKind])
    parser.add_argument("files", nargs="+", type=Path)
    parser.add_argument("--ocr", action="store_true", help="add a searchable text layer (image-to-pdf)")
    parser.add_argument("--output-dir", type=Path, default=Path.cwd())
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build dependencies -> run one job -> write the result."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    runner = JobRunner(build_orchestrator(settings))
    state = asyncio.run(
        runner.run(
            ConversionKind(args.kind),
            args.files,
            ConversionOptions(use_ocr=args.ocr),
        )
    )
    if state.status is not JobStatus.COMPLETE or state.result is None:
        Log.error(f"Conversion failed: {state.error}")
        return 1
    path = state.result.save(args.output_dir)
    Log.info(f"Wrote {path} ({state.result.size} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
