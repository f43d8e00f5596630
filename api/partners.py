from __future__ import annotations

import enum
import logging
from datetime import date, datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models import ChannelPartner, PartnerDocument
from schemas.document import DocumentCreate
from schemas.partner import DecisionUpdate, MessageResponse, PartnerCreate, SectionStatusUpdate
from services import documents as document_service
from services import partners as partner_service
from services.errors import MSG_PARTNER_NOT_FOUND, PartnerNotFoundError, PartnerValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/partners", tags=["partners"])

MSG_INTERNAL_ERROR = "Internal server error"


def _jsonable(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    # Timestamps and calendar dates both render as ISO-8601.
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def _row_to_dict(obj: Any) -> dict[str, Any]:
    """Every mapped column under its column name."""
    return {c.key: _jsonable(getattr(obj, c.key)) for c in obj.__table__.columns}


def _document_to_response(d: PartnerDocument) -> dict[str, Any]:
    return _row_to_dict(d)


def _partner_to_response(p: ChannelPartner, documents: list[PartnerDocument]) -> dict[str, Any]:
    return {**_row_to_dict(p), "documents": [_document_to_response(d) for d in documents]}


def _partner_summary(p: ChannelPartner) -> dict[str, Any]:
    return {
        "id": p.id,
        "application_reference_id": p.application_reference_id,
        "first_name": p.first_name,
        "last_name": p.last_name,
        "mobile_number": p.mobile_number,
        "final_decision": _jsonable(p.final_decision),
        "created_at": _jsonable(p.created_at),
        "updated_at": _jsonable(p.updated_at),
    }


@router.get("", response_model=list[dict])
async def list_partners(db: AsyncSession = Depends(get_db)):
    try:
        partners = await partner_service.list_partners(db)
    except SQLAlchemyError:
        logger.exception("Failed to list partners")
        raise HTTPException(status_code=500, detail=MSG_INTERNAL_ERROR)
    return [_partner_summary(p) for p in partners]


@router.post("", response_model=dict, status_code=201)
async def create_partner(body: PartnerCreate, db: AsyncSession = Depends(get_db)):
    try:
        view = await partner_service.create_partner(db, body)
    except SQLAlchemyError:
        # Unique violations (mobile, email, Aadhaar, PAN, reference id) land here too.
        logger.exception("Failed to create partner")
        raise HTTPException(status_code=500, detail=MSG_INTERNAL_ERROR)
    return _partner_to_response(view.partner, view.documents)


@router.get("/{partner_id}", response_model=dict)
async def get_partner(partner_id: int, db: AsyncSession = Depends(get_db)):
    try:
        view = await partner_service.get_partner(db, partner_id)
    except PartnerNotFoundError:
        raise HTTPException(status_code=404, detail=MSG_PARTNER_NOT_FOUND)
    except SQLAlchemyError:
        logger.exception("Failed to fetch partner %s", partner_id)
        raise HTTPException(status_code=500, detail=MSG_INTERNAL_ERROR)
    return _partner_to_response(view.partner, view.documents)


@router.delete("/{partner_id}", status_code=204)
async def delete_partner(partner_id: int, db: AsyncSession = Depends(get_db)):
    try:
        await partner_service.delete_partner(db, partner_id)
    except PartnerNotFoundError:
        raise HTTPException(status_code=404, detail=MSG_PARTNER_NOT_FOUND)
    except SQLAlchemyError:
        logger.exception("Failed to delete partner %s", partner_id)
        raise HTTPException(status_code=500, detail=MSG_INTERNAL_ERROR)
    return Response(status_code=204)


@router.patch("/{partner_id}/decision", response_model=MessageResponse)
async def update_final_decision(partner_id: int, body: DecisionUpdate, db: AsyncSession = Depends(get_db)):
    """Final authority decision (official use only)."""
    try:
        decision = await partner_service.update_final_decision(
            db, partner_id, body.final_decision, body.final_decision_reason
        )
    except PartnerValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PartnerNotFoundError:
        raise HTTPException(status_code=404, detail=MSG_PARTNER_NOT_FOUND)
    except SQLAlchemyError:
        logger.exception("Failed to update final decision for partner %s", partner_id)
        raise HTTPException(status_code=500, detail=MSG_INTERNAL_ERROR)
    return MessageResponse(message=f"Partner final decision updated to {decision.value}")


@router.patch("/{partner_id}/section-status", response_model=MessageResponse)
async def update_section_status(
    partner_id: int, body: SectionStatusUpdate, db: AsyncSession = Depends(get_db)
):
    logger.info("Section status update for partner %s: %s", partner_id, body.model_dump())
    try:
        section, status = await partner_service.update_section_status(
            db, partner_id, body.section, body.status, body.reason
        )
    except PartnerValidationError as e:
        logger.warning("Rejected section status update for partner %s: %s", partner_id, e)
        raise HTTPException(status_code=400, detail=str(e))
    except PartnerNotFoundError:
        raise HTTPException(status_code=404, detail=MSG_PARTNER_NOT_FOUND)
    except SQLAlchemyError as e:
        logger.exception("Failed to update section %s for partner %s", body.section, partner_id)
        # This path echoes the store error back to the caller; the others do not.
        raise HTTPException(status_code=500, detail={"message": MSG_INTERNAL_ERROR, "error": str(e)})
    return MessageResponse(
        message=f"Section '{section.value}' for partner {partner_id} has been updated to '{status.value}'."
    )


@router.get("/{partner_id}/documents", response_model=list[dict])
async def list_partner_documents(partner_id: int, db: AsyncSession = Depends(get_db)):
    try:
        documents = await document_service.list_documents(db, partner_id)
    except SQLAlchemyError:
        logger.exception("Failed to list documents for partner %s", partner_id)
        raise HTTPException(status_code=500, detail=MSG_INTERNAL_ERROR)
    return [_document_to_response(d) for d in documents]


@router.post("/{partner_id}/documents", response_model=dict, status_code=201)
async def add_partner_document(partner_id: int, body: DocumentCreate, db: AsyncSession = Depends(get_db)):
    try:
        document = await document_service.add_document(db, partner_id, body)
    except PartnerNotFoundError:
        raise HTTPException(status_code=404, detail=MSG_PARTNER_NOT_FOUND)
    except SQLAlchemyError:
        logger.exception("Failed to add document for partner %s", partner_id)
        raise HTTPException(status_code=500, detail=MSG_INTERNAL_ERROR)
    return _document_to_response(document)
