# feedback_forms/models/response.py
import uuid
from sqlalchemy import Column, ForeignKey, DateTime, Index, Uuid
from feedback_forms.core.database import Base
from feedback_forms.models.form import JSONDocument
from feedback_forms.models.timestamps import utcnow


class Response(Base):
    __tablename__ = "responses"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Held by reference; deleted together with the form by the service layer
    form_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("forms.id", ondelete="CASCADE"),
        nullable=False
    )

    # Ordered list of {question_text, answer}; keyed by question text snapshot
    answers = Column(JSONDocument, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Indexes
    __table_args__ = (
        Index('idx_response_form_created', 'form_id', 'created_at'),
    )
