"""
Student Models

Enrollment and financial state for one student.
"""

from sqlalchemy import Boolean, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from roster.modules.shared import BaseModel

# Upload field names accepted for a student record
ATTACHMENT_FIELDS = ("passport", "diplom", "image")


class Student(BaseModel):
    """
    Student record.

    Monetary columns are never negative. annual_payed may be NULL when a
    record was created without it; every update and rollover sets it.
    """

    __tablename__ = "students"

    # Identity
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    surname: Mapped[str] = mapped_column(String(200), nullable=False)
    parent_name: Mapped[str] = mapped_column(String(200), nullable=False)
    mobile: Mapped[str | None] = mapped_column(String(50), nullable=True)
    parent_mobile: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Program
    study: Mapped[str] = mapped_column(String(200), nullable=False)
    prof: Mapped[str] = mapped_column(String(200), nullable=False)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    # Tuition
    service_cost: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    service_payed: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    # Current academic year
    annual_cost: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    annual_payed: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Flags
    is_session_open: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    is_nastrfication: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    is_nastrfication_payed: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    # Attachment references (relative paths under the uploads root)
    passport: Mapped[str | None] = mapped_column(String(500), nullable=True)
    diplom: Mapped[str | None] = mapped_column(String(500), nullable=True)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name={self.name} {self.surname}, year={self.year})>"
