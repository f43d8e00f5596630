MSG_PARTNER_NOT_FOUND = "Partner not found"


class PartnerNotFoundError(LookupError):
    def __init__(self, partner_id: int):
        super().__init__(MSG_PARTNER_NOT_FOUND)
        self.partner_id = partner_id


class PartnerValidationError(ValueError):
    """A request field is missing or outside its allowed values."""


# channel_partners.id is a 32-bit INTEGER column; no row can hold a larger id.
MAX_PARTNER_ID = 2**31 - 1


def check_partner_id(partner_id: int) -> None:
    """Ids the column cannot store match no row; report them as not found before querying."""
    if not 1 <= partner_id <= MAX_PARTNER_ID:
        raise PartnerNotFoundError(partner_id)
