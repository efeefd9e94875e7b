import io
import json
import re
import zipfile
from collections.abc import Callable, Sequence
from pathlib import Path

import openpyxl
import pymupdf
import pytest

from filemorph.config.settings import Settings
from filemorph.extraction.exceptions import MissingCredentialError
from filemorph.extraction.extractor import Extractor
from filemorph.processor.models import ConversionKind, ConversionOptions, JobStatus
from filemorph.processor.orchestrator import Orchestrator, build_orchestrator
from filemorph.worker.job_runner import JobRunner
from tests.helpers import (
    FakeExtractionClient,
    make_image_bytes,
    make_pdf_bytes,
    make_workbook_bytes,
)

WriteFile = Callable[[str, bytes], Path]

TABLES = [
    {"sheetName": "Revenue", "headers": ["Month", "Amount"], "rows": [["Jan", "100"], ["Feb", "120"]]},
    {"sheetName": "Costs", "headers": ["Item", "Cost"], "rows": [["Rent", "50"]]},
]


def _fenced(payload: object) -> Callable[[Sequence[str]], str]:
    return lambda urls: f"```json\n{json.dumps(payload)}\n```"


def _orchestrator(
    settings: Settings, client: FakeExtractionClient, api_key: str = "test-key"
) -> Orchestrator:
    extractor = Extractor(
        client=client,
        api_key=api_key,
        fast_model=settings.fast_model_name,
        accurate_model=settings.accurate_model_name,
    )
    return build_orchestrator(settings, extractor=extractor)


def _pdf_pages(data: bytes) -> list[tuple[float, float, str]]:
    with pymupdf.open(stream=data, filetype="pdf") as doc:
        return [(page.rect.width, page.rect.height, page.get_text()) for page in doc]


@pytest.mark.integration
class TestImageToPdf:
    @pytest.mark.asyncio
    async def test_pages_follow_input_order_and_image_size(
        self, test_settings: Settings, write_file: WriteFile
    ) -> None:
        files = [
            write_file("first.jpg", make_image_bytes(300, 200)),
            write_file("second.png", make_image_bytes(200, 300, fmt="PNG")),
            write_file("third.jpg", make_image_bytes(250, 250)),
        ]
        client = FakeExtractionClient()

        result = await _orchestrator(test_settings, client).convert(ConversionKind.IMAGE_TO_PDF, files)

        assert re.fullmatch(r"FileMorph_Bundle_\d+\.pdf", result.filename)
        assert [(w, h) for w, h, _ in _pdf_pages(result.data)] == [(300, 200), (200, 300), (250, 250)]
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_ocr_adds_searchable_text_per_image(
        self, test_settings: Settings, write_file: WriteFile
    ) -> None:
        files = [
            write_file("a.jpg", make_image_bytes(400, 300)),
            write_file("b.jpg", make_image_bytes(400, 300)),
        ]
        block = {"text": "Invoice 42", "box_2d": [100, 100, 200, 800]}
        client = FakeExtractionClient(ocr_response=_fenced({"blocks": [block]}))

        result = await _orchestrator(test_settings, client).convert(
            ConversionKind.IMAGE_TO_PDF, files, options=ConversionOptions(use_ocr=True)
        )

        pages = _pdf_pages(result.data)
        assert all("Invoice 42" in text for _, _, text in pages)
        assert [call["image_count"] for call in client.calls] == [1, 1]
        assert {call["model"] for call in client.calls} == {"fast-model"}


@pytest.mark.integration
class TestPdfToExcel:
    @pytest.mark.asyncio
    async def test_single_accurate_request_over_capped_pages(
        self, test_settings: Settings, write_file: WriteFile, five_page_pdf_bytes: bytes
    ) -> None:
        path = write_file("statement.pdf", five_page_pdf_bytes)
        client = FakeExtractionClient(tables_response=_fenced(TABLES))

        result = await _orchestrator(test_settings, client).convert(ConversionKind.PDF_TO_EXCEL, [path])

        assert result.filename == "statement_data.xlsx"
        assert client.calls == [
            {"model": "accurate-model", "schema_name": "extracted_tables", "image_count": 3}
        ]
        workbook = openpyxl.load_workbook(io.BytesIO(result.data))
        assert workbook.sheetnames == ["Revenue", "Costs"]
        assert [c.value for c in workbook["Revenue"][1]] == ["Month", "Amount"]
        assert [c.value for c in workbook["Costs"][2]] == ["Rent", "50"]

    @pytest.mark.asyncio
    async def test_no_tables_found_fails(
        self, test_settings: Settings, write_file: WriteFile, sample_pdf_bytes: bytes
    ) -> None:
        path = write_file("empty.pdf", sample_pdf_bytes)
        runner = JobRunner(_orchestrator(test_settings, FakeExtractionClient()))

        state = await runner.run(ConversionKind.PDF_TO_EXCEL, [path])

        assert state.status is JobStatus.FAILED
        assert state.error == "No tables were found in the document."


@pytest.mark.integration
class TestImageToExcel:
    @pytest.mark.asyncio
    async def test_one_request_per_image_with_prefixed_sheets(
        self, test_settings: Settings, write_file: WriteFile
    ) -> None:
        files = [
            write_file("receipt.png", make_image_bytes(120, 80, fmt="PNG")),
            write_file("statement-march.jpg", make_image_bytes(120, 80)),
        ]
        client = FakeExtractionClient(tables_response=_fenced([TABLES[0]]))

        result = await _orchestrator(test_settings, client).convert(ConversionKind.IMAGE_TO_EXCEL, files)

        assert result.filename == "FileMorph_Analysis.xlsx"
        assert [call["image_count"] for call in client.calls] == [1, 1]
        assert {call["model"] for call in client.calls} == {"fast-model"}
        workbook = openpyxl.load_workbook(io.BytesIO(result.data))
        assert workbook.sheetnames == ["receipt_Revenue", "statement-_Revenue"]


@pytest.mark.integration
class TestExcelToPdf:
    @pytest.mark.asyncio
    async def test_one_titled_page_per_sheet(
        self, test_settings: Settings, write_file: WriteFile
    ) -> None:
        path = write_file(
            "budget.xlsx",
            make_workbook_bytes(
                {
                    "Summary": [["Quarter", "Total"], ["Q1", 1000], ["Q2", 1250]],
                    "Blank": [],
                    "Details": [["Account", "Owner"], ["4000", "Finance"]],
                }
            ),
        )
        client = FakeExtractionClient()

        result = await _orchestrator(test_settings, client).convert(ConversionKind.EXCEL_TO_PDF, [path])

        assert result.filename == "budget.pdf"
        pages = _pdf_pages(result.data)
        assert len(pages) == 2
        assert "Summary" in pages[0][2] and "Quarter" in pages[0][2]
        assert "Details" in pages[1][2] and "Finance" in pages[1][2]
        assert client.calls == []


@pytest.mark.integration
class TestCompressPdf:
    @pytest.mark.asyncio
    async def test_batch_produces_archive_of_lite_pdfs(
        self, test_settings: Settings, write_file: WriteFile, five_page_pdf_bytes: bytes
    ) -> None:
        files = [
            write_file("alpha.pdf", five_page_pdf_bytes),
            write_file("beta.pdf", make_pdf_bytes(2)),
        ]

        result = await _orchestrator(test_settings, FakeExtractionClient()).convert(
            ConversionKind.COMPRESS_PDF, files
        )

        assert re.fullmatch(r"FileMorph_Batch_\d+\.zip", result.filename)
        with zipfile.ZipFile(io.BytesIO(result.data)) as archive:
            assert archive.namelist() == ["alpha_lite.pdf", "beta_lite.pdf"]
            # Compression is not bound by the extraction page cap.
            assert len(_pdf_pages(archive.read("alpha_lite.pdf"))) == 5
            assert len(_pdf_pages(archive.read("beta_lite.pdf"))) == 2

    @pytest.mark.asyncio
    async def test_single_file_returns_optimized_pdf(
        self, test_settings: Settings, write_file: WriteFile, sample_pdf_bytes: bytes
    ) -> None:
        path = write_file("scan.pdf", sample_pdf_bytes)

        result = await _orchestrator(test_settings, FakeExtractionClient()).convert(
            ConversionKind.COMPRESS_PDF, [path]
        )

        assert result.filename == "scan_optimized.pdf"
        assert result.media_type == "application/pdf"
        assert len(_pdf_pages(result.data)) == 1


@pytest.mark.integration
class TestFailures:
    @pytest.mark.parametrize(
        ("kind", "name"),
        [
            (ConversionKind.PDF_TO_EXCEL, "doc.pdf"),
            (ConversionKind.IMAGE_TO_EXCEL, "photo.jpg"),
        ],
    )
    @pytest.mark.asyncio
    async def test_missing_credential_fails_before_any_request(
        self, test_settings: Settings, write_file: WriteFile, kind: ConversionKind, name: str
    ) -> None:
        path = write_file(name, make_pdf_bytes(1) if name.endswith(".pdf") else make_image_bytes(10, 10))
        client = FakeExtractionClient()

        with pytest.raises(MissingCredentialError):
            await _orchestrator(test_settings, client, api_key="").convert(kind, [path])

        assert client.calls == []

    @pytest.mark.asyncio
    async def test_missing_credential_with_configured_provider(
        self, test_settings: Settings, write_file: WriteFile
    ) -> None:
        settings = test_settings.model_copy(update={"api_key": ""})
        path = write_file("photo.jpg", make_image_bytes(10, 10))

        with pytest.raises(MissingCredentialError):
            await build_orchestrator(settings).convert(
                ConversionKind.IMAGE_TO_PDF, [path], options=ConversionOptions(use_ocr=True)
            )

    @pytest.mark.asyncio
    async def test_unsupported_file_is_reported_by_job(
        self, test_settings: Settings, write_file: WriteFile
    ) -> None:
        path = write_file("notes.txt", b"hello")
        runner = JobRunner(_orchestrator(test_settings, FakeExtractionClient()))

        state = await runner.run(ConversionKind.IMAGE_TO_PDF, [path])

        assert state.status is JobStatus.FAILED
        assert "notes.txt" in (state.error or "")

    @pytest.mark.asyncio
    async def test_malformed_ai_response_fails_job(
        self, test_settings: Settings, write_file: WriteFile
    ) -> None:
        path = write_file("photo.jpg", make_image_bytes(10, 10))
        client = FakeExtractionClient(tables_response=lambda urls: "I could not find any tables")
        runner = JobRunner(_orchestrator(test_settings, client))

        state = await runner.run(ConversionKind.IMAGE_TO_EXCEL, [path])

        assert state.status is JobStatus.FAILED
        assert state.error == "The AI response was malformed. Please try again."


@pytest.mark.integration
class TestJobProgress:
    @pytest.mark.asyncio
    async def test_progress_is_monotonic_and_ends_complete(
        self, test_settings: Settings, write_file: WriteFile, five_page_pdf_bytes: bytes
    ) -> None:
        path = write_file("report.pdf", five_page_pdf_bytes)
        runner = JobRunner(_orchestrator(test_settings, FakeExtractionClient(tables_response=_fenced(TABLES))))
        seen: list[float] = []

        state = await runner.run(
            ConversionKind.PDF_TO_EXCEL, [path], on_update=lambda s: seen.append(s.progress)
        )

        assert state.status is JobStatus.COMPLETE
        assert seen == sorted(seen)
        assert seen[-1] == 100.0
        assert state.result is not None and state.result.filename == "report_data.xlsx"
