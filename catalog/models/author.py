from datetime import date

from sqlmodel import Field

from catalog.constants import NAME_MAX_LENGTH
from catalog.models.base import BaseModel
from catalog.projections import entity_url, full_name, lifespan


class Author(BaseModel, table=True):
    """
    SQLModel representing an author entity in the database.

    This is a clean data model without Active Record methods.
    Use AuthorRepository for all database operations. Derived attributes
    (full_name, lifespan, url) are computed on access and never stored.

    Attributes:
        id: Primary key identifier for the author
        first_name: Given name
        family_name: Family name
        date_of_birth: Optional birth date
        date_of_death: Optional death date
    """

    __table_args__ = {"extend_existing": True}

    id: int | None = Field(default=None, primary_key=True)
    first_name: str = Field(max_length=NAME_MAX_LENGTH)
    family_name: str = Field(max_length=NAME_MAX_LENGTH, index=True)
    date_of_birth: date | None = None
    date_of_death: date | None = None

    @property
    def full_name(self) -> str:
        return full_name(self.first_name, self.family_name)

    @property
    def lifespan(self) -> str:
        return lifespan(self.date_of_birth, self.date_of_death)

    @property
    def url(self) -> str:
        return entity_url("author", self.id)
