import io
from collections.abc import Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.doctemplate import LayoutError

from filemorph.synthesis.exceptions import SynthesisError
from filemorph.synthesis.spreadsheet import SheetData

HEADER_FILL = colors.Color(79 / 255, 70 / 255, 229 / 255)
_MARGIN = 14 * mm

_TITLE_STYLE = ParagraphStyle("SheetTitle", fontName="Helvetica", fontSize=16, leading=20)
_CELL_STYLE = ParagraphStyle("Cell", fontName="Helvetica", fontSize=8, leading=10)
_HEADER_STYLE = ParagraphStyle(
    "HeaderCell", parent=_CELL_STYLE, fontName="Helvetica-Bold", textColor=colors.white
)


def sheets_to_pdf(sheets: Sequence[SheetData]) -> bytes:
    """Render each sheet as a titled table on its own landscape A4 page(s)."""
    if not sheets:
        raise SynthesisError("The spreadsheet has no data to convert.")
    buffer = io.BytesIO()
    document = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=_MARGIN,
        rightMargin=_MARGIN,
        topMargin=10 * mm,
        bottomMargin=10 * mm,
    )
    story: list[object] = []
    for position, sheet in enumerate(sheets):
        if position > 0:
            story.append(PageBreak())
        story.append(Paragraph(escape(sheet.name), _TITLE_STYLE))
        story.append(Spacer(1, 4 * mm))
        story.append(_build_table(sheet, document.width))
    try:
        document.build(story)
    except LayoutError as exc:
        raise SynthesisError(f"The spreadsheet could not be laid out as a PDF: {exc}") from exc
    return buffer.getvalue()


def _build_table(sheet: SheetData, available_width: float) -> Table:
    header, *body = sheet.rows
    columns = max(1, len(header))
    data = [[Paragraph(escape(cell), _HEADER_STYLE) for cell in header]]
    data.extend([Paragraph(escape(cell), _CELL_STYLE) for cell in row] for row in body)
    table = Table(data, colWidths=[available_width / columns] * columns, repeatRows=1, splitInRow=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("LEFTPADDING", (0, 0), (-1, -1), 2),
                ("RIGHTPADDING", (0, 0), (-1, -1), 2),
                ("TOPPADDING", (0, 0), (-1, -1), 2),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
            ]
        )
    )
    return table
