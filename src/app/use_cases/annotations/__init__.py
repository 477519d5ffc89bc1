"""
Annotation Use Cases

Versioned read/write of a document's opaque annotation payload.
"""

from .dtos import AnnotationSnapshotResponse, WriteAnnotationsResponse
from .read_annotations_use_case import ReadAnnotationsUseCase
from .write_annotations_use_case import WriteAnnotationsUseCase

__all__ = [
    "ReadAnnotationsUseCase",
    "WriteAnnotationsUseCase",
    "AnnotationSnapshotResponse",
    "WriteAnnotationsResponse",
]
