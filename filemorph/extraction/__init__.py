from filemorph.extraction.extractor import Extractor
from filemorph.extraction.factory import ExtractorFactory
from filemorph.extraction.models import ExtractedTable, OcrBlock

__all__ = ["ExtractedTable", "Extractor", "ExtractorFactory", "OcrBlock"]
