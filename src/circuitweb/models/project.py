"""Project model - container for circuits, owned by one user."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.circuitweb.models.base import new_id, utc_now


class Project(SQLModel, table=True):
    """Project owned by the user whose identity-provider UID is owner_id."""

    __tablename__ = "projects"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    name: str = Field(max_length=200)
    description: str = Field(default="")
    owner_id: str = Field(max_length=128, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime | None = Field(default=None)
