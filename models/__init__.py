from models.document import PartnerDocument
from models.enums import BankAccountType, Gender, MaritalStatus, ReviewStatus, Section
from models.partner import ChannelPartner

__all__ = [
    "BankAccountType",
    "ChannelPartner",
    "Gender",
    "MaritalStatus",
    "PartnerDocument",
    "ReviewStatus",
    "Section",
]
