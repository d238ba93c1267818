from sqlalchemy import Column, String, Text, JSON, Uuid
import uuid
from .db import Base, UTCDateTime, utcnow

TEMPLATE_CATEGORIES = ("initial", "qualifying", "negotiation", "acceptance", "decline")

class Template(Base):
    __tablename__ = "templates"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)  # one of TEMPLATE_CATEGORIES
    subject = Column(String)
    content = Column(Text, nullable=False)
    variables = Column(JSON, nullable=False, default=list)  # derived from content

    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "category": self.category,
            "subject": self.subject,
            "content": self.content,
            "variables": list(self.variables or []),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
