# feedback_forms/models/form.py
import enum
import uuid
from sqlalchemy import Column, String, Text, ForeignKey, DateTime, Integer, Index, JSON, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from feedback_forms.core.database import Base
from feedback_forms.models.timestamps import utcnow


class FormStatus(str, enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


# JSONB on PostgreSQL, plain JSON elsewhere
JSONDocument = JSON().with_variant(JSONB, "postgresql")


class Form(Base):
    __tablename__ = "forms"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    owner_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("admins.id", ondelete="CASCADE"),
        nullable=False
    )

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    # Ordered list of {text, type, options, required}; replaced wholesale on edit
    questions = Column(JSONDocument, nullable=False)

    status = Column(String, nullable=False, default=FormStatus.OPEN.value)  # 'open', 'closed'

    # Only ever bumped by an accepted submission
    response_count = Column(Integer, nullable=False, default=0)

    # Generated once at creation, never regenerated
    public_token = Column(String, nullable=False, unique=True, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False
    )

    # Relationships
    owner = relationship("Admin", back_populates="forms")

    # Indexes
    __table_args__ = (
        Index('idx_form_owner_created', 'owner_id', 'created_at'),
    )
