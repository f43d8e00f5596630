"""
Seed sample channel partner applications with their KYC documents.
Run: python -m scripts.seed_partners (from the project root, with DB running).
"""
import asyncio
import logging
from datetime import date

from sqlalchemy import select

from database import AsyncSessionLocal, close_db, init_db
from models import ChannelPartner, PartnerDocument

logger = logging.getLogger(__name__)


PARTNERS_DATA = [
    {
        "application_reference_id": "CP-2024-0001",
        "application_date": date(2024, 6, 3),
        "application_ref_by": "Field Office Pune",
        "applicant_class": "Individual",
        "first_name": "Ravi",
        "last_name": "Kulkarni",
        "date_of_birth": date(1988, 2, 14),
        "age": 36,
        "gender": "Male",
        "aadhar_number": "234567890123",
        "pan_card_number": "ABCPK1234L",
        "mobile_number": "9876500001",
        "email_id": "ravi.kulkarni@example.com",
        "marital_status": "Married",
        "current_address": "14 MG Road, Kothrud",
        "current_pincode": "411038",
        "current_state": "Maharashtra",
        "current_district": "Pune",
        "current_city": "Pune",
        "permanent_address": "14 MG Road, Kothrud",
        "permanent_pincode": "411038",
        "permanent_state": "Maharashtra",
        "permanent_district": "Pune",
        "permanent_city": "Pune",
        "bank_name": "State Bank of India",
        "account_holder_name": "Ravi Kulkarni",
        "bank_account_number": "30211234567",
        "ifsc_code": "SBIN0000123",
        "branch_name": "Kothrud",
        "bank_account_type": "Saving",
        "documents": [
            {
                "document_proof_type": "Identity Proof",
                "document_type": "Aadhaar",
                "document_number": "234567890123",
                "front_side_url": "https://files.example.com/cp-0001/aadhaar-front.jpg",
                "back_side_url": "https://files.example.com/cp-0001/aadhaar-back.jpg",
            },
            {
                "document_proof_type": "Tax Proof",
                "document_type": "PAN",
                "document_number": "ABCPK1234L",
                "front_side_url": "https://files.example.com/cp-0001/pan-front.jpg",
            },
        ],
    },
    {
        "application_reference_id": "CP-2024-0002",
        "application_date": date(2024, 6, 11),
        "applicant_class": "Individual",
        "first_name": "Meena",
        "middle_name": "S",
        "last_name": "Iyer",
        "gender": "Female",
        "mobile_number": "9876500002",
        "email_id": "meena.iyer@example.com",
        "marital_status": "Single",
        "current_address": "7 Lake View Road",
        "current_pincode": "600041",
        "current_state": "Tamil Nadu",
        "current_district": "Chennai",
        "current_city": "Chennai",
        "bank_name": "HDFC Bank",
        "account_holder_name": "Meena Iyer",
        "bank_account_number": "50100234567890",
        "ifsc_code": "HDFC0001234",
        "bank_account_type": "Current",
        "documents": [],
    },
]


async def seed():
    await init_db()
    async with AsyncSessionLocal() as session:
        for data in PARTNERS_DATA:
            fields = {k: v for k, v in data.items() if k != "documents"}
            existing = await session.execute(
                select(ChannelPartner).where(ChannelPartner.mobile_number == fields["mobile_number"])
            )
            if existing.scalar_one_or_none():
                logger.info("Partner %s already exists, skipping", fields["application_reference_id"])
                continue
            partner = ChannelPartner(**fields)
            session.add(partner)
            await session.flush()
            for d in data["documents"]:
                session.add(PartnerDocument(partner_id=partner.id, **d))
            logger.info("Seeded partner: %s %s", partner.first_name, partner.last_name)
        await session.commit()
    await close_db()
    logger.info("Seed complete.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
