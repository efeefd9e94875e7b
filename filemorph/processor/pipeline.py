from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field

from filemorph.assets.loader import InputPath
from filemorph.assets.models import SourceAsset
from filemorph.processor.models import ConversionKind, ConversionOptions, ConversionResult
from filemorph.processor.progress import ProgressTracker


@dataclass(slots=True)
class PipelineContext:
    kind: ConversionKind
    files: Sequence[InputPath]
    options: ConversionOptions
    progress: ProgressTracker
    assets: list[SourceAsset] = field(default_factory=list)


class ConversionPipeline(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> ConversionResult:
        raise NotImplementedError
