from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ConversionKind(str, Enum):
    """Conversions the pipeline can run."""

    PDF_TO_EXCEL = "pdf-to-excel"
    IMAGE_TO_EXCEL = "image-to-excel"
    EXCEL_TO_PDF = "excel-to-pdf"
    IMAGE_TO_PDF = "image-to-pdf"
    COMPRESS_PDF = "compress-pdf"

    @property
    def single_input(self) -> bool:
        """Kinds that read exactly one source file."""
        return self in (ConversionKind.PDF_TO_EXCEL, ConversionKind.EXCEL_TO_PDF)

    def requires_extraction(self, options: "ConversionOptions") -> bool:
        if self in (ConversionKind.PDF_TO_EXCEL, ConversionKind.IMAGE_TO_EXCEL):
            return True
        return self is ConversionKind.IMAGE_TO_PDF and options.use_ocr


@dataclass(frozen=True)
class ConversionOptions:
    use_ocr: bool = False


@dataclass(frozen=True)
class ConversionResult:
    """The produced artifact. Owned by the caller once returned."""

    data: bytes
    filename: str
    media_type: str

    @property
    def size(self) -> int:
        return len(self.data)

    def save(self, directory: Path) -> Path:
        """Write the artifact into `directory` under its filename."""
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.filename
        path.write_bytes(self.data)
        return path


class JobStatus(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class JobState:
    """Observable state of one conversion job: idle -> processing -> complete | failed."""

    kind: ConversionKind
    status: JobStatus = JobStatus.IDLE
    progress: float = 0.0
    message: str = "idle"
    result: ConversionResult | None = None
    error: str | None = None

    def start(self, message: str) -> None:
        self.status = JobStatus.PROCESSING
        self.progress = 0.0
        self.message = message
        self.result = None
        self.error = None

    def update(self, progress: float, message: str) -> None:
        if self.status is not JobStatus.PROCESSING:
            raise ValueError(f"Cannot report progress for a job in state '{self.status.value}'")
        self.progress = progress
        self.message = message

    def complete(self, result: ConversionResult, message: str = "complete") -> None:
        self.status = JobStatus.COMPLETE
        self.progress = 100.0
        self.message = message
        self.result = result
        self.error = None

    def fail(self, error: str) -> None:
        self.status = JobStatus.FAILED
        self.progress = 0.0
        self.message = "failed"
        self.result = None
        self.error = error
