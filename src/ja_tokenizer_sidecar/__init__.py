"""Public API for the Japanese tokenizer sidecar.

This package exposes the stable public API:
- `MessageFramer` and `END_OF_STREAM`
- `segment`
- `map_features`
- `TokenizationPipeline`
- `SessionDispatcher`
- `VibratoAnalyzer`, `GinzaAnalyzer`, `create_analyzer`
- `SidecarClient`
"""

from __future__ import annotations

from .analyzers import GinzaAnalyzer, VibratoAnalyzer, create_analyzer
from .client import SidecarClient
from .errors import AnalyzerLoadError, FramingError, RequestError, SidecarError
from .features import map_features
from .framing import END_OF_STREAM, MessageFramer
from .models import FEATURE_NAMES, PROTOCOL_VERSION, AnalyzerToken, Category, Run
from .pipeline import TokenizationPipeline
from .segmenter import segment
from .server import SessionDispatcher

__all__ = [
    "END_OF_STREAM",
    "FEATURE_NAMES",
    "PROTOCOL_VERSION",
    "AnalyzerLoadError",
    "AnalyzerToken",
    "Category",
    "FramingError",
    "GinzaAnalyzer",
    "MessageFramer",
    "RequestError",
    "Run",
    "SessionDispatcher",
    "SidecarClient",
    "SidecarError",
    "TokenizationPipeline",
    "VibratoAnalyzer",
    "create_analyzer",
    "map_features",
    "segment",
]
