"""Extractor subpackage — imports trigger @register_extractor decorators."""

from finishem_sync.extractors.checklist import ChecklistExtractor  # noqa: F401
