"""
Tests for the section review workflow against an in-memory SQLite store.
Run from project root: python -m pytest tests/test_partner_service.py -v
Or: python -m unittest tests.test_partner_service -v
"""
import asyncio
import os
import unittest
from datetime import datetime, timezone

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

from sqlalchemy.exc import IntegrityError

from database import build_engine, build_sessionmaker, init_db
from models import ReviewStatus, Section
from schemas.document import DocumentCreate
from schemas.partner import PartnerCreate
from services import documents as document_service
from services import partners as partner_service
from services.errors import MAX_PARTNER_ID, PartnerNotFoundError, PartnerValidationError

SECTION_FIELDS = [f"{s.value}_status" for s in Section]
OUT_OF_RANGE_IDS = (0, -1, MAX_PARTNER_ID + 1, 99999999999999999999)


def _base_partner(**overrides):
    data = {
        "first_name": "Asha",
        "last_name": "Verma",
        "mobile_number": "9000000001",
        "email_id": "asha@example.com",
        "pan_card_number": "ABCDE1234F",
        "current_address": "12 Residency Road",
        "bank_account_type": "Saving",
    }
    data.update(overrides)
    return PartnerCreate(**data)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes.
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class PartnerServiceTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.engine = build_engine("sqlite+aiosqlite://")
        await init_db(self.engine)
        self.session = build_sessionmaker(self.engine)()

    async def asyncTearDown(self):
        await self.session.close()
        await self.engine.dispose()

    async def _create(self, **overrides):
        view = await partner_service.create_partner(self.session, _base_partner(**overrides))
        await self.session.commit()
        return view.partner.id

    async def _section_statuses(self, partner_id):
        view = await partner_service.get_partner(self.session, partner_id)
        return {f: getattr(view.partner, f) for f in SECTION_FIELDS}


class TestFetch(PartnerServiceTestCase):
    async def test_new_partner_starts_pending(self):
        """Fresh record -> every section and the final decision are Pending, no approval date."""
        partner_id = await self._create()
        view = await partner_service.get_partner(self.session, partner_id)
        for f in SECTION_FIELDS:
            self.assertEqual(getattr(view.partner, f), ReviewStatus.PENDING)
        self.assertEqual(view.partner.final_decision, ReviewStatus.PENDING)
        self.assertIsNone(view.partner.approval_date)
        self.assertEqual(view.documents, [])

    async def test_documents_in_insertion_order(self):
        """Documents added for a partner come back with the record, oldest first."""
        partner_id = await self._create()
        for doc_type in ("Aadhaar", "PAN", "Cancelled Cheque"):
            await document_service.add_document(
                self.session, partner_id, DocumentCreate(document_type=doc_type, document_number=doc_type[:3])
            )
        await self.session.commit()
        view = await partner_service.get_partner(self.session, partner_id)
        self.assertEqual([d.document_type for d in view.documents], ["Aadhaar", "PAN", "Cancelled Cheque"])

    async def test_documents_belong_to_their_owner(self):
        """Another partner's documents are not included."""
        first = await self._create()
        second = await self._create(mobile_number="9000000002", email_id=None, pan_card_number=None)
        await document_service.add_document(self.session, first, DocumentCreate(document_type="Aadhaar"))
        await document_service.add_document(self.session, second, DocumentCreate(document_type="PAN"))
        await self.session.commit()
        view = await partner_service.get_partner(self.session, second)
        self.assertEqual([d.document_type for d in view.documents], ["PAN"])

    async def test_missing_partner_not_found(self):
        with self.assertRaises(PartnerNotFoundError):
            await partner_service.get_partner(self.session, 9999)

    async def test_list_documents_unknown_owner_is_empty(self):
        self.assertEqual(await document_service.list_documents(self.session, 9999), [])

    async def test_add_document_unknown_owner(self):
        with self.assertRaises(PartnerNotFoundError):
            await document_service.add_document(self.session, 9999, DocumentCreate(document_type="PAN"))


class TestSectionStatus(PartnerServiceTestCase):
    async def test_updates_only_named_section(self):
        """Approving kyc_documents leaves the other four sections and the final decision alone."""
        partner_id = await self._create()
        await partner_service.update_section_status(
            self.session, partner_id, "banking_details", "Rejected", "IFSC mismatch"
        )
        before = await self._section_statuses(partner_id)

        section, status = await partner_service.update_section_status(
            self.session, partner_id, "kyc_documents", "Approved", "looks good"
        )
        self.assertEqual(section, Section.KYC_DOCUMENTS)
        self.assertEqual(status, ReviewStatus.APPROVED)

        view = await partner_service.get_partner(self.session, partner_id)
        self.assertEqual(view.partner.kyc_documents_status, ReviewStatus.APPROVED)
        self.assertEqual(view.partner.kyc_documents_reason, "looks good")
        after = await self._section_statuses(partner_id)
        for f in SECTION_FIELDS:
            if f != "kyc_documents_status":
                self.assertEqual(after[f], before[f], f)
        self.assertEqual(view.partner.banking_details_reason, "IFSC mismatch")
        self.assertEqual(view.partner.final_decision, ReviewStatus.PENDING)

    async def test_unknown_section_rejected_without_mutation(self):
        partner_id = await self._create()
        before = await self._section_statuses(partner_id)
        with self.assertRaises(PartnerValidationError) as ctx:
            await partner_service.update_section_status(
                self.session, partner_id, "not_a_real_section", "Approved", "x"
            )
        for name in partner_service.VALID_SECTIONS:
            self.assertIn(name, str(ctx.exception))
        self.assertEqual(await self._section_statuses(partner_id), before)

    async def test_section_name_is_not_a_column_selector(self):
        """Column-looking input is rejected by the allow-list, not passed through."""
        partner_id = await self._create()
        with self.assertRaises(PartnerValidationError):
            await partner_service.update_section_status(
                self.session, partner_id, "kyc_documents_status` = 'Approved', `first_name", "Approved", "x"
            )

    async def test_pending_not_accepted(self):
        partner_id = await self._create()
        with self.assertRaises(PartnerValidationError) as ctx:
            await partner_service.update_section_status(
                self.session, partner_id, "banking_details", "Pending", ""
            )
        self.assertEqual(str(ctx.exception), partner_service.MSG_INVALID_STATUS)

    async def test_missing_status_not_accepted(self):
        partner_id = await self._create()
        with self.assertRaises(PartnerValidationError):
            await partner_service.update_section_status(self.session, partner_id, "current_address", None, "x")

    async def test_unknown_partner(self):
        with self.assertRaises(PartnerNotFoundError):
            await partner_service.update_section_status(self.session, 9999, "kyc_documents", "Approved", "ok")

    async def test_flips_between_approved_and_rejected(self):
        partner_id = await self._create()
        for status in ("Approved", "Rejected", "Approved"):
            await partner_service.update_section_status(
                self.session, partner_id, "permanent_address", status, f"now {status}"
            )
            view = await partner_service.get_partner(self.session, partner_id)
            self.assertEqual(view.partner.permanent_address_status.value, status)
            self.assertEqual(view.partner.permanent_address_reason, f"now {status}")

    def test_every_section_has_a_column_pair(self):
        self.assertEqual(set(partner_service.SECTION_COLUMNS), set(Section))


class TestFinalDecision(PartnerServiceTestCase):
    async def test_stamps_approval_date(self):
        partner_id = await self._create()
        started = datetime.now(timezone.utc)
        decision = await partner_service.update_final_decision(
            self.session, partner_id, "Rejected", "incomplete docs"
        )
        self.assertEqual(decision, ReviewStatus.REJECTED)
        view = await partner_service.get_partner(self.session, partner_id)
        self.assertEqual(view.partner.final_decision, ReviewStatus.REJECTED)
        self.assertEqual(view.partner.final_decision_reason, "incomplete docs")
        self.assertGreaterEqual(_as_utc(view.partner.approval_date), started)

    async def test_redecision_overwrites_status_and_timestamp(self):
        """Rejected then Approved -> latest values win, no history kept."""
        partner_id = await self._create()
        await partner_service.update_final_decision(self.session, partner_id, "Rejected", "incomplete docs")
        first = (await partner_service.get_partner(self.session, partner_id)).partner.approval_date

        await partner_service.update_final_decision(self.session, partner_id, "Approved", "resubmitted")
        view = await partner_service.get_partner(self.session, partner_id)
        self.assertEqual(view.partner.final_decision, ReviewStatus.APPROVED)
        self.assertEqual(view.partner.final_decision_reason, "resubmitted")
        self.assertGreaterEqual(_as_utc(view.partner.approval_date), _as_utc(first))

    async def test_does_not_touch_sections(self):
        partner_id = await self._create()
        before = await self._section_statuses(partner_id)
        await partner_service.update_final_decision(self.session, partner_id, "Approved", "ok")
        self.assertEqual(await self._section_statuses(partner_id), before)

    async def test_invalid_decisions(self):
        partner_id = await self._create()
        for value in (None, "", "Pending", "approved", "Maybe"):
            with self.assertRaises(PartnerValidationError, msg=repr(value)):
                await partner_service.update_final_decision(self.session, partner_id, value, "x")
        view = await partner_service.get_partner(self.session, partner_id)
        self.assertEqual(view.partner.final_decision, ReviewStatus.PENDING)

    async def test_unknown_partner(self):
        with self.assertRaises(PartnerNotFoundError):
            await partner_service.update_final_decision(self.session, 9999, "Approved", "ok")


class TestLifecycle(PartnerServiceTestCase):
    async def test_delete_cascades_to_documents(self):
        partner_id = await self._create()
        await document_service.add_document(self.session, partner_id, DocumentCreate(document_type="Aadhaar"))
        await document_service.add_document(self.session, partner_id, DocumentCreate(document_type="PAN"))
        await self.session.commit()

        await partner_service.delete_partner(self.session, partner_id)
        await self.session.commit()

        self.assertEqual(await document_service.list_documents(self.session, partner_id), [])
        with self.assertRaises(PartnerNotFoundError):
            await partner_service.get_partner(self.session, partner_id)

    async def test_delete_unknown_partner(self):
        with self.assertRaises(PartnerNotFoundError):
            await partner_service.delete_partner(self.session, 9999)

    async def test_duplicate_mobile_is_store_error(self):
        await self._create()
        with self.assertRaises(IntegrityError):
            await partner_service.create_partner(
                self.session, _base_partner(email_id="other@example.com", pan_card_number="ZZZZZ9999Z")
            )
        await self.session.rollback()

    async def test_absent_unique_fields_may_repeat(self):
        """NULL Aadhaar/PAN/email do not collide."""
        await self._create(email_id=None, pan_card_number=None)
        await self._create(mobile_number="9000000002", email_id=None, pan_card_number=None)
        partners = await partner_service.list_partners(self.session)
        self.assertEqual(len(partners), 2)


class TestIdRange(PartnerServiceTestCase):
    async def test_ids_the_column_cannot_hold_are_not_found(self):
        """Ids outside the INTEGER range -> not found, never a driver error."""
        await self._create()
        for partner_id in OUT_OF_RANGE_IDS:
            with self.assertRaises(PartnerNotFoundError, msg=partner_id):
                await partner_service.get_partner(self.session, partner_id)
            with self.assertRaises(PartnerNotFoundError, msg=partner_id):
                await partner_service.update_final_decision(self.session, partner_id, "Approved", "ok")
            with self.assertRaises(PartnerNotFoundError, msg=partner_id):
                await partner_service.update_section_status(
                    self.session, partner_id, "kyc_documents", "Approved", "ok"
                )
            with self.assertRaises(PartnerNotFoundError, msg=partner_id):
                await partner_service.delete_partner(self.session, partner_id)
            with self.assertRaises(PartnerNotFoundError, msg=partner_id):
                await document_service.add_document(self.session, partner_id, DocumentCreate(document_type="PAN"))
            self.assertEqual(await document_service.list_documents(self.session, partner_id), [])

    async def test_bad_decision_reported_before_id_range(self):
        with self.assertRaises(PartnerValidationError):
            await partner_service.update_final_decision(self.session, MAX_PARTNER_ID + 1, "Pending", "x")
        with self.assertRaises(PartnerValidationError):
            await partner_service.update_section_status(
                self.session, MAX_PARTNER_ID + 1, "nope", "Approved", "x"
            )


class TestAuditTimestamps(PartnerServiceTestCase):
    async def _timestamps(self, partner_id):
        partner = (await partner_service.get_partner(self.session, partner_id)).partner
        return partner.created_at, partner.updated_at

    async def test_updated_at_moves_and_created_at_stays(self):
        """Section update and final decision each refresh updated_at; created_at is fixed."""
        partner_id = await self._create()
        created, updated = await self._timestamps(partner_id)
        self.assertIsNotNone(created)

        # CURRENT_TIMESTAMP in SQLite has one-second resolution.
        await asyncio.sleep(1.1)
        await partner_service.update_section_status(self.session, partner_id, "current_address", "Approved", "ok")
        await self.session.commit()
        created_after_section, updated_after_section = await self._timestamps(partner_id)
        self.assertEqual(created_after_section, created)
        self.assertGreater(updated_after_section, updated)

        await asyncio.sleep(1.1)
        await partner_service.update_final_decision(self.session, partner_id, "Approved", "ok")
        await self.session.commit()
        created_after_decision, updated_after_decision = await self._timestamps(partner_id)
        self.assertEqual(created_after_decision, created)
        self.assertGreater(updated_after_decision, updated_after_section)


if __name__ == "__main__":
    unittest.main()
