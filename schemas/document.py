from typing import Optional

from pydantic import BaseModel, Field


class DocumentCreate(BaseModel):
    """Metadata for a document already uploaded elsewhere; URLs are stored as given."""
    document_proof_type: Optional[str] = Field(None, max_length=100)
    document_type: Optional[str] = Field(None, max_length=100)
    document_number: Optional[str] = Field(None, max_length=100)
    front_side_url: Optional[str] = Field(None, max_length=255)
    back_side_url: Optional[str] = Field(None, max_length=255)
