from sqlalchemy import Column, Text, String, Integer, Boolean, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
import uuid
from .db import Base, UTCDateTime, utcnow

MESSAGE_SENDERS = ("brand", "influencer")

class Message(Base):
    __tablename__ = "messages"
    __table_args__ = (UniqueConstraint("lead_id", "position", name="uq_messages_lead_position"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    lead_id = Column(Uuid, ForeignKey("leads.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)  # arrival order within the lead
    sender = Column(String, nullable=False)  # 'brand' | 'influencer'
    content = Column(Text, nullable=False)
    timestamp = Column(UTCDateTime, nullable=False, default=utcnow)
    is_read = Column(Boolean, nullable=False, default=False)
    template_id = Column(Uuid, nullable=True)

    lead = relationship("Lead", back_populates="messages")

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "sender": self.sender,
            "content": self.content,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "isRead": self.is_read,
            "templateId": str(self.template_id) if self.template_id else None,
        }
