import enum


class ReviewStatus(str, enum.Enum):
    """Tri-state outcome shared by every review section and the final decision."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    @classmethod
    def decisions(cls) -> tuple["ReviewStatus", ...]:
        """Values a reviewer may set. Pending is only ever the initial state."""
        return (cls.APPROVED, cls.REJECTED)


class Section(str, enum.Enum):
    APPLICANT_DETAILS = "applicant_details"
    CURRENT_ADDRESS = "current_address"
    PERMANENT_ADDRESS = "permanent_address"
    KYC_DOCUMENTS = "kyc_documents"
    BANKING_DETAILS = "banking_details"


class Gender(str, enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class MaritalStatus(str, enum.Enum):
    SINGLE = "Single"
    MARRIED = "Married"
    DIVORCED = "Divorced"
    WIDOWED = "Widowed"


class BankAccountType(str, enum.Enum):
    SAVING = "Saving"
    CURRENT = "Current"
