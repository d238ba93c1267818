from .db import Base, engine
from .lead import Lead, LEAD_STATUSES
from .message import Message, MESSAGE_SENDERS
from .template import Template, TEMPLATE_CATEGORIES

def create_all(bind=None):
    Base.metadata.create_all(bind=bind or engine)
