"""Circuit model - an opaque JSON design document attached to a project."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.circuitweb.models.base import new_id, utc_now


class Circuit(SQLModel, table=True):
    """Circuit design. `data` holds the serialized payload and is never interpreted."""

    __tablename__ = "circuits"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    # Plain indexed column, not a foreign key: deleting a project leaves its circuits behind
    project_id: str = Field(index=True, max_length=36)
    name: str = Field(max_length=200)
    data: str = Field(default="{}")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime | None = Field(default=None)
