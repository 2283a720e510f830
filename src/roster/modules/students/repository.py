"""
Students Repository

Database operations for student records. Only data access lives here;
validation and error translation belong to the service layer.
"""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Student


async def create(db: AsyncSession, values: Mapping[str, Any]) -> Student:
    """Insert a new student record."""
    student = Student(**values)

    db.add(student)
    await db.commit()
    await db.refresh(student)

    return student


async def get_by_id(db: AsyncSession, id: str) -> Student | None:
    """Get a student by ID."""
    return await db.get(Student, id)


async def list_all(db: AsyncSession) -> list[Student]:
    """Return every student in storage order."""
    result = await db.execute(select(Student))
    return list(result.scalars().all())


async def list_by_year(db: AsyncSession, year: int) -> list[Student]:
    """Return the students enrolled in the given academic year."""
    result = await db.execute(select(Student).where(Student.year == year))
    return list(result.scalars().all())


async def update(db: AsyncSession, student: Student, changes: Mapping[str, Any]) -> Student:
    """Apply field changes to a loaded student and persist them."""
    for field, value in changes.items():
        setattr(student, field, value)

    await db.commit()
    await db.refresh(student)

    return student


async def reset_for_new_year(db: AsyncSession, student: Student) -> Student:
    """Zero the payment counters and reopen the session of one student."""
    student.service_payed = 0
    student.annual_payed = 0
    student.is_session_open = True

    await db.commit()

    return student
