"""Screenshot extraction module."""

from betledger.extraction.cache import AnalysisCache, image_key
from betledger.extraction.clients import (
    AnalysisContext,
    FallbackClient,
    HttpFallbackClient,
    HttpTextRecognizer,
    TextRecognizer,
)
from betledger.extraction.extractor import FieldExtractor, field_extractor
from betledger.extraction.layouts import (
    GENERIC_LAYOUT,
    LAYOUTS,
    FieldRule,
    Layout,
    RuleKind,
    select_layout,
)
from betledger.extraction.orchestrator import (
    ExtractionOrchestrator,
    blank_fields,
    map_status,
)

__all__ = [
    "AnalysisCache",
    "image_key",
    "AnalysisContext",
    "FallbackClient",
    "HttpFallbackClient",
    "HttpTextRecognizer",
    "TextRecognizer",
    "FieldExtractor",
    "field_extractor",
    "GENERIC_LAYOUT",
    "LAYOUTS",
    "FieldRule",
    "Layout",
    "RuleKind",
    "select_layout",
    "ExtractionOrchestrator",
    "blank_fields",
    "map_status",
]
