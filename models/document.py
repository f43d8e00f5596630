from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from database import Base


class PartnerDocument(Base):
    __tablename__ = "partner_documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    partner_id = Column(Integer, ForeignKey("channel_partners.id", ondelete="CASCADE"), nullable=False, index=True)
    document_proof_type = Column(String(100), nullable=True)
    document_type = Column(String(100), nullable=True)
    document_number = Column(String(100), nullable=True)
    # Opaque references to files stored elsewhere
    front_side_url = Column(String(255), nullable=True)
    back_side_url = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    partner = relationship("ChannelPartner", back_populates="documents")
