"""Tureng dictionary service client."""

from tureng.api.client import TurengClient
from tureng.api.types import (
    Lang,
    TranslationDocument,
    TranslationResult,
    document_from_dict,
    result_from_dict,
)

__all__ = [
    "Lang",
    "TranslationDocument",
    "TranslationResult",
    "TurengClient",
    "document_from_dict",
    "result_from_dict",
]
