import asyncio
import os
from collections.abc import Sequence
from pathlib import Path

from filemorph.assets.exceptions import AssetReadError, InputCountError, UnsupportedFormatError
from filemorph.assets.formats import guess_mime_type, is_accepted
from filemorph.assets.models import SourceAsset
from filemorph.concurrency import gather_bounded
from filemorph.logging.logger import Log
from filemorph.processor.models import ConversionKind

InputPath = str | os.PathLike[str]


class AssetLoader:
    """Validates input files for a conversion and reads them into memory."""

    def __init__(self, concurrency: int = 8) -> None:
        self._concurrency = concurrency

    def validate(self, files: Sequence[InputPath], kind: ConversionKind) -> None:
        """Check the whole batch against the kind's accepted formats.

        Raises:
            InputCountError: if no files are given, or several for a single-input kind.
            UnsupportedFormatError: if any file fails the format check.
        """
        if not files:
            raise InputCountError("No input files were provided.")
        if kind.single_input and len(files) > 1:
            raise InputCountError(
                f"'{kind.value}' converts one file at a time, got {len(files)}."
            )
        rejected = [
            Path(f).name for f in files
            if not is_accepted(kind, Path(f).name, guess_mime_type(Path(f).name))
        ]
        if rejected:
            raise UnsupportedFormatError(
                f"Unsupported file format for '{kind.value}': {', '.join(rejected)}"
            )

    async def load(self, files: Sequence[InputPath], kind: ConversionKind) -> list[SourceAsset]:
        """Validate, then read every file concurrently. Results keep input order."""
        self.validate(files, kind)
        paths = [Path(f) for f in files]
        assets = await gather_bounded(
            [lambda p=path: self._read(p) for path in paths],
            self._concurrency,
        )
        Log.info(
            f"Loaded {len(assets)} asset(s), {sum(a.size for a in assets)} bytes total"
        )
        return assets

    async def _read(self, path: Path) -> SourceAsset:
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise AssetReadError(f"Could not read '{path.name}': {exc.strerror or exc}") from exc
        return SourceAsset(name=path.name, mime_type=guess_mime_type(path.name), data=data)
