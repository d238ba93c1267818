from sqlalchemy import Column, String, Integer, JSON, Uuid
from sqlalchemy.orm import relationship
import uuid
from .db import Base, UTCDateTime, utcnow
from .message import Message

LEAD_STATUSES = ("new", "qualified", "negotiating", "accepted", "rejected")

class Lead(Base):
    __tablename__ = "leads"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(String, index=True, nullable=False)
    brand_name = Column(String, nullable=False)
    brand_logo = Column(String)
    collaboration_type = Column(String, nullable=False)
    budget_range = Column(String, nullable=False)
    status = Column(String, nullable=False, default="new")  # one of LEAD_STATUSES
    last_activity = Column(UTCDateTime, nullable=False, default=utcnow, index=True)
    ai_confidence = Column(Integer, nullable=False, default=0)
    extracted_info = Column(JSON)  # opaque; industry/deliverables/timeline/specialRequirements

    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow)

    messages = relationship(
        "Message",
        back_populates="lead",
        order_by=Message.position,
        cascade="all, delete-orphan",
    )

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "brandName": self.brand_name,
            "brandLogo": self.brand_logo,
            "collaborationType": self.collaboration_type,
            "budgetRange": self.budget_range,
            "status": self.status,
            "lastActivity": self.last_activity.isoformat() if self.last_activity else None,
            "aiConfidence": self.ai_confidence,
            "extractedInfo": self.extracted_info or {},
            "messages": [m.to_dict() for m in self.messages],
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
