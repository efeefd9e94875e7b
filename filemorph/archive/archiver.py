import io
import zipfile
from collections.abc import Sequence
from pathlib import PurePath

from filemorph.logging.logger import Log
from filemorph.processor.models import ConversionResult

ZIP_MIME_TYPE = "application/zip"


class BatchArchiver:
    """Packages several independent outputs of one job into a single ZIP archive."""

    def pack(self, files: Sequence[ConversionResult], archive_name: str) -> ConversionResult:
        """Write one entry per file. Clashing entry names get a numeric suffix."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for name, item in zip(self._entry_names(files), files):
                archive.writestr(name, item.data)
        data = buffer.getvalue()
        Log.info(f"Archived {len(files)} file(s) into {archive_name} ({len(data)} bytes)")
        return ConversionResult(data=data, filename=archive_name, media_type=ZIP_MIME_TYPE)

    @staticmethod
    def _entry_names(files: Sequence[ConversionResult]) -> list[str]:
        names: list[str] = []
        used: set[str] = set()
        for item in files:
            candidate = item.filename
            counter = 2
            while candidate in used:
                path = PurePath(item.filename)
                candidate = f"{path.stem}_{counter}{path.suffix}"
                counter += 1
            used.add(candidate)
            names.append(candidate)
        return names
