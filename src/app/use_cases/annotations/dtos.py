from pydantic import BaseModel


class AnnotationSnapshotResponse(BaseModel):
    """Opaque annotation payload and its version"""

    document_id: str
    payload: str
    version: int
    updated_at: str


class WriteAnnotationsResponse(BaseModel):
    """Response for write annotations use case"""

    document_id: str
    version: int
