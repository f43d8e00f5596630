from sqlalchemy import Column, Date, DateTime, Enum, Integer, String, Text, func
from sqlalchemy.orm import relationship

from database import Base
from models.enums import BankAccountType, Gender, MaritalStatus, ReviewStatus


def _enum_type(enum_cls, name: str) -> Enum:
    # Persist the display values ("Approved"), not the member names.
    return Enum(enum_cls, name=name, values_callable=lambda e: [m.value for m in e])


def _review_status_column() -> Column:
    return Column(
        _enum_type(ReviewStatus, "review_status"),
        nullable=False,
        default=ReviewStatus.PENDING,
        server_default=ReviewStatus.PENDING.value,
    )


class ChannelPartner(Base):
    __tablename__ = "channel_partners"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_reference_id = Column(String(50), unique=True, nullable=True)
    application_date = Column(Date, nullable=True)
    application_ref_by = Column(String(100), nullable=True)
    applicant_class = Column(String(50), nullable=True)

    # Applicant details
    first_name = Column(String(100), nullable=False)
    middle_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=False)
    date_of_birth = Column(Date, nullable=True)
    age = Column(Integer, nullable=True)
    gender = Column(_enum_type(Gender, "gender"), nullable=True)
    aadhar_number = Column(String(20), unique=True, nullable=True)
    pan_card_number = Column(String(10), unique=True, nullable=True)
    mobile_number = Column(String(15), unique=True, nullable=False)
    email_id = Column(String(255), unique=True, nullable=True)
    marital_status = Column(_enum_type(MaritalStatus, "marital_status"), nullable=True)
    spouse_name = Column(String(200), nullable=True)
    mother_name = Column(String(200), nullable=True)
    education = Column(String(100), nullable=True)
    occupation = Column(String(100), nullable=True)
    applicant_photo_url = Column(String(255), nullable=True)

    current_address = Column(Text, nullable=True)
    current_pincode = Column(String(10), nullable=True)
    current_state = Column(String(100), nullable=True)
    current_district = Column(String(100), nullable=True)
    current_city = Column(String(100), nullable=True)

    permanent_address = Column(Text, nullable=True)
    permanent_pincode = Column(String(10), nullable=True)
    permanent_state = Column(String(100), nullable=True)
    permanent_district = Column(String(100), nullable=True)
    permanent_city = Column(String(100), nullable=True)

    bank_name = Column(String(100), nullable=True)
    account_holder_name = Column(String(200), nullable=True)
    bank_account_number = Column(String(50), nullable=True)
    ifsc_code = Column(String(20), nullable=True)
    branch_name = Column(String(100), nullable=True)
    bank_account_type = Column(_enum_type(BankAccountType, "bank_account_type"), nullable=True)

    # Section-wise review
    applicant_details_status = _review_status_column()
    current_address_status = _review_status_column()
    permanent_address_status = _review_status_column()
    kyc_documents_status = _review_status_column()
    banking_details_status = _review_status_column()

    applicant_details_reason = Column(Text, nullable=True)
    current_address_reason = Column(Text, nullable=True)
    permanent_address_reason = Column(Text, nullable=True)
    kyc_documents_reason = Column(Text, nullable=True)
    banking_details_reason = Column(Text, nullable=True)

    # Final authority decision (official use only)
    final_decision = _review_status_column()
    final_decision_reason = Column(Text, nullable=True)
    authorized_person_signature_url = Column(String(255), nullable=True)
    digital_otp = Column(String(10), nullable=True)

    # Authorized person details (internal use only)
    lc_code = Column(String(50), nullable=True)
    uc_code = Column(String(50), nullable=True)
    authorized_person_name = Column(String(200), nullable=True)
    authorized_person_designation = Column(String(100), nullable=True)
    authorized_person_employee_id = Column(String(50), nullable=True)
    approval_date = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    documents = relationship(
        "PartnerDocument",
        back_populates="partner",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PartnerDocument.id",
    )
