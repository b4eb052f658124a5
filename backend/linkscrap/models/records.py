import uuid
from sqlalchemy import Column, String, Text, DateTime, Uuid, func


class CollectedRecordMixin:
    """Columns every collected table carries.

    ``user_id`` scopes rows to the requesting user; each table pairs it with its
    natural key in a unique constraint so re-materializing a snapshot updates
    rows instead of duplicating them.
    """

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String, nullable=False, index=True)
    input_url = Column(Text, nullable=True)
    timestamp = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def to_dict(self) -> dict:
        out = {}
        for col in self.__table__.columns:
            value = getattr(self, col.key)
            if isinstance(value, uuid.UUID):
                value = str(value)
            elif hasattr(value, "isoformat"):
                value = value.isoformat()
            out[col.key] = value
        return out
