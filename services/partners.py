"""
Applicant record store: fetch a partner with its documents, record section reviews
and the final decision.

Section statuses and the final decision are independent: every update writes one
status/reason pair in a single UPDATE statement and touches nothing else.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from models import ChannelPartner, PartnerDocument, ReviewStatus, Section
from schemas.partner import PartnerCreate
from services.documents import list_documents
from services.errors import PartnerNotFoundError, PartnerValidationError, check_partner_id

logger = logging.getLogger(__name__)

MSG_INVALID_DECISION = "Invalid 'final_decision'. Must be 'Approved' or 'Rejected'."
MSG_INVALID_STATUS = "Invalid 'status' provided. Must be 'Approved' or 'Rejected'."

VALID_SECTIONS = tuple(s.value for s in Section)
DECISION_VALUES = tuple(s.value for s in ReviewStatus.decisions())


# Fixed section -> (status column, reason column) selector. Caller input only ever
# picks a key here; it never becomes part of the statement.
SECTION_COLUMNS: dict[Section, tuple[InstrumentedAttribute, InstrumentedAttribute]] = {
    Section.APPLICANT_DETAILS: (ChannelPartner.applicant_details_status, ChannelPartner.applicant_details_reason),
    Section.CURRENT_ADDRESS: (ChannelPartner.current_address_status, ChannelPartner.current_address_reason),
    Section.PERMANENT_ADDRESS: (ChannelPartner.permanent_address_status, ChannelPartner.permanent_address_reason),
    Section.KYC_DOCUMENTS: (ChannelPartner.kyc_documents_status, ChannelPartner.kyc_documents_reason),
    Section.BANKING_DETAILS: (ChannelPartner.banking_details_status, ChannelPartner.banking_details_reason),
}


def _check_section_columns() -> None:
    missing = set(Section) - set(SECTION_COLUMNS)
    if missing:
        raise RuntimeError(f"No columns mapped for sections: {sorted(s.value for s in missing)}")
    for section, (status_col, reason_col) in SECTION_COLUMNS.items():
        if status_col.key != f"{section.value}_status" or reason_col.key != f"{section.value}_reason":
            raise RuntimeError(f"Section {section.value!r} is mapped to the wrong columns")


_check_section_columns()


@dataclass
class PartnerView:
    """A partner row together with its documents, read independently."""
    partner: ChannelPartner
    documents: list[PartnerDocument] = field(default_factory=list)


def parse_decision(value: Optional[str], message: str) -> ReviewStatus:
    """Accept only Approved/Rejected; Pending is never settable."""
    if not value or value not in DECISION_VALUES:
        raise PartnerValidationError(message)
    return ReviewStatus(value)


def parse_section(value: Optional[str]) -> Section:
    if not value or value not in VALID_SECTIONS:
        raise PartnerValidationError(
            f"Invalid 'section' provided. Must be one of: {', '.join(VALID_SECTIONS)}"
        )
    return Section(value)


async def get_partner(session: AsyncSession, partner_id: int) -> PartnerView:
    check_partner_id(partner_id)
    result = await session.execute(
        select(ChannelPartner)
        .where(ChannelPartner.id == partner_id)
        .execution_options(populate_existing=True)
    )
    partner = result.scalar_one_or_none()
    if partner is None:
        raise PartnerNotFoundError(partner_id)
    documents = await list_documents(session, partner_id)
    return PartnerView(partner=partner, documents=documents)


async def list_partners(session: AsyncSession) -> list[ChannelPartner]:
    result = await session.execute(
        select(ChannelPartner).order_by(ChannelPartner.updated_at.desc(), ChannelPartner.id.desc())
    )
    return list(result.scalars().all())


async def create_partner(session: AsyncSession, body: PartnerCreate) -> PartnerView:
    partner = ChannelPartner(**body.model_dump())
    session.add(partner)
    await session.flush()
    await session.refresh(partner)
    logger.info("Created channel partner %s", partner.id)
    return PartnerView(partner=partner, documents=[])


async def delete_partner(session: AsyncSession, partner_id: int) -> None:
    """Delete a partner; its documents go with it through the foreign key cascade."""
    check_partner_id(partner_id)
    result = await session.execute(
        delete(ChannelPartner)
        .where(ChannelPartner.id == partner_id)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise PartnerNotFoundError(partner_id)
    logger.info("Deleted channel partner %s", partner_id)


async def update_final_decision(
    session: AsyncSession,
    partner_id: int,
    decision: Optional[str],
    reason: Optional[str],
) -> ReviewStatus:
    status = parse_decision(decision, MSG_INVALID_DECISION)
    check_partner_id(partner_id)
    result = await session.execute(
        update(ChannelPartner)
        .where(ChannelPartner.id == partner_id)
        .values(
            final_decision=status,
            final_decision_reason=reason,
            approval_date=datetime.now(timezone.utc),
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise PartnerNotFoundError(partner_id)
    logger.info("Partner %s final decision set to %s", partner_id, status.value)
    return status


async def update_section_status(
    session: AsyncSession,
    partner_id: int,
    section: Optional[str],
    status: Optional[str],
    reason: Optional[str],
) -> tuple[Section, ReviewStatus]:
    target = parse_section(section)
    new_status = parse_decision(status, MSG_INVALID_STATUS)
    check_partner_id(partner_id)
    status_col, reason_col = SECTION_COLUMNS[target]
    values: dict[Any, Any] = {status_col: new_status, reason_col: reason}
    result = await session.execute(
        update(ChannelPartner)
        .where(ChannelPartner.id == partner_id)
        .values(values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise PartnerNotFoundError(partner_id)
    logger.info("Partner %s section %s set to %s", partner_id, target.value, new_status.value)
    return target, new_status
