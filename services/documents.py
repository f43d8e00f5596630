from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import ChannelPartner, PartnerDocument
from schemas.document import DocumentCreate
from services.errors import MAX_PARTNER_ID, PartnerNotFoundError, check_partner_id

logger = logging.getLogger(__name__)


async def list_documents(session: AsyncSession, partner_id: int) -> list[PartnerDocument]:
    """Documents owned by a partner in insertion order; empty for an unknown owner."""
    if not 1 <= partner_id <= MAX_PARTNER_ID:
        return []
    result = await session.execute(
        select(PartnerDocument)
        .where(PartnerDocument.partner_id == partner_id)
        .order_by(PartnerDocument.id)
    )
    return list(result.scalars().all())


async def add_document(session: AsyncSession, partner_id: int, body: DocumentCreate) -> PartnerDocument:
    check_partner_id(partner_id)
    owner = await session.execute(select(ChannelPartner.id).where(ChannelPartner.id == partner_id))
    if owner.scalar_one_or_none() is None:
        raise PartnerNotFoundError(partner_id)
    document = PartnerDocument(partner_id=partner_id, **body.model_dump())
    session.add(document)
    await session.flush()
    await session.refresh(document)
    logger.info("Added %s document %s for partner %s", document.document_type, document.id, partner_id)
    return document
