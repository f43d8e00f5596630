from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from models.enums import BankAccountType, Gender, MaritalStatus


class PartnerCreate(BaseModel):
    """New channel partner application. Review sections always start as Pending."""
    application_reference_id: Optional[str] = Field(None, max_length=50)
    application_date: Optional[date] = None
    application_ref_by: Optional[str] = Field(None, max_length=100)
    applicant_class: Optional[str] = Field(None, max_length=50)

    first_name: str = Field(..., min_length=1, max_length=100)
    middle_name: Optional[str] = Field(None, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: Optional[date] = None
    age: Optional[int] = Field(None, ge=0)
    gender: Optional[Gender] = None
    aadhar_number: Optional[str] = Field(None, max_length=20)
    pan_card_number: Optional[str] = Field(None, max_length=10)
    mobile_number: str = Field(..., min_length=1, max_length=15)
    email_id: Optional[str] = Field(None, max_length=255)
    marital_status: Optional[MaritalStatus] = None
    spouse_name: Optional[str] = Field(None, max_length=200)
    mother_name: Optional[str] = Field(None, max_length=200)
    education: Optional[str] = Field(None, max_length=100)
    occupation: Optional[str] = Field(None, max_length=100)
    applicant_photo_url: Optional[str] = Field(None, max_length=255)

    current_address: Optional[str] = None
    current_pincode: Optional[str] = Field(None, max_length=10)
    current_state: Optional[str] = Field(None, max_length=100)
    current_district: Optional[str] = Field(None, max_length=100)
    current_city: Optional[str] = Field(None, max_length=100)

    permanent_address: Optional[str] = None
    permanent_pincode: Optional[str] = Field(None, max_length=10)
    permanent_state: Optional[str] = Field(None, max_length=100)
    permanent_district: Optional[str] = Field(None, max_length=100)
    permanent_city: Optional[str] = Field(None, max_length=100)

    bank_name: Optional[str] = Field(None, max_length=100)
    account_holder_name: Optional[str] = Field(None, max_length=200)
    bank_account_number: Optional[str] = Field(None, max_length=50)
    ifsc_code: Optional[str] = Field(None, max_length=20)
    branch_name: Optional[str] = Field(None, max_length=100)
    bank_account_type: Optional[BankAccountType] = None


class DecisionUpdate(BaseModel):
    # Left as plain strings so the service can report the allowed values itself.
    final_decision: Optional[str] = None
    final_decision_reason: Optional[str] = None


class SectionStatusUpdate(BaseModel):
    section: Optional[str] = None
    status: Optional[str] = None
    reason: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
