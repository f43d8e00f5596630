from schemas.document import DocumentCreate
from schemas.partner import (
    DecisionUpdate,
    MessageResponse,
    PartnerCreate,
    SectionStatusUpdate,
)

__all__ = [
    "DecisionUpdate",
    "DocumentCreate",
    "MessageResponse",
    "PartnerCreate",
    "SectionStatusUpdate",
]
