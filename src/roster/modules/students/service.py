"""
Student Record Manager

Business logic for student records: creation with required-field checks,
in-place updates with attachment merging, and the read operations.

Storage failures surface as PersistenceError; missing records as
NotFoundError. Concurrent updates are last-write-wins.
"""

import logging
from collections.abc import Mapping
from typing import Any

from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.exceptions import NotFoundError, PersistenceError, ValidationError
from roster.modules.students import repository
from roster.modules.students.attachments import AttachmentStore
from roster.modules.students.models import Student
from roster.modules.students.schemas import StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)


class StudentNotFoundError(NotFoundError):
    """Raised when no student matches the requested id."""

    def __init__(self, student_id: str | None = None):
        super().__init__("Student not found")
        self.student_id = student_id


class NoStudentsForYearError(NotFoundError):
    """Raised when a year filter matches no students."""

    def __init__(self, year: int):
        super().__init__("No students found for the selected year")
        self.year = year


async def create_student(
    db: AsyncSession,
    store: AttachmentStore,
    fields: Mapping[str, Any],
    uploads: Mapping[str, UploadFile] | None = None,
) -> Student:
    """
    Create a student record.

    Args:
        db: Database session
        store: Attachment store for uploaded documents
        fields: Raw request fields (wire names)
        uploads: Uploaded files keyed by field name

    Returns:
        The persisted student, including its generated id

    Raises:
        ValidationError: If required fields are absent or values cannot be parsed
        PersistenceError: If the record cannot be stored
    """
    command = StudentCreate.from_fields(fields)
    values = command.model_dump()
    stored = await store.bind_uploads(None, uploads or {})
    values.update(stored)

    try:
        student = await repository.create(db, values)
    except SQLAlchemyError as e:
        logger.error(f"Error creating student: {e}", exc_info=True)
        await store.discard(stored.values())
        raise PersistenceError() from e

    logger.info(f"Created student {student.id} (year={student.year})")
    return student


async def update_student(
    db: AsyncSession,
    store: AttachmentStore,
    student_id: str,
    fields: Mapping[str, Any],
    uploads: Mapping[str, UploadFile] | None = None,
) -> Student:
    """
    Update a student record in place.

    Every scalar field present in the request replaces the stored value.
    Attachment references are only replaced when a new file of that kind
    is uploaded.

    Raises:
        ValidationError: If a provided value cannot be parsed
        StudentNotFoundError: If the id is unknown
        PersistenceError: If the record cannot be read or stored
    """
    command = StudentUpdate.from_fields(fields)

    student = await get_student(db, student_id)

    changes = command.to_changes()
    stored = await store.bind_uploads(student, uploads or {})
    changes.update(stored)

    try:
        student = await repository.update(db, student, changes)
    except SQLAlchemyError as e:
        logger.error(f"Error updating student {student_id}: {e}", exc_info=True)
        await store.discard(stored.values())
        raise PersistenceError() from e

    logger.info(f"Updated student {student_id}: {sorted(changes)}")
    return student


async def get_student(db: AsyncSession, student_id: str) -> Student:
    """
    Get one student.

    Raises:
        StudentNotFoundError: If the id is unknown
        PersistenceError: If storage cannot be read
    """
    try:
        student = await repository.get_by_id(db, student_id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching student {student_id}: {e}", exc_info=True)
        raise PersistenceError() from e

    if student is None:
        raise StudentNotFoundError(student_id)
    return student


async def list_students(db: AsyncSession) -> list[Student]:
    """
    Return all students, unfiltered, in storage order.

    Raises:
        PersistenceError: If storage cannot be read
    """
    try:
        return await repository.list_all(db)
    except SQLAlchemyError as e:
        logger.error(f"Error listing students: {e}", exc_info=True)
        raise PersistenceError("Server error") from e


async def list_students_by_year(db: AsyncSession, year: int) -> list[Student]:
    """
    Return the students of one academic year.

    An empty result is reported as NoStudentsForYearError rather than an
    empty list.

    Raises:
        NoStudentsForYearError: If no student has this year
        PersistenceError: If storage cannot be read
    """
    try:
        students = await repository.list_by_year(db, year)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching students by year {year}: {e}", exc_info=True)
        raise PersistenceError("Server error") from e

    if not students:
        raise NoStudentsForYearError(year)
    return students


def parse_year_param(raw: str) -> int:
    """
    Parse the year path parameter.

    Raises:
        ValidationError: If the value is not an integer
    """
    try:
        return int(raw)
    except ValueError as e:
        raise ValidationError("Year must be an integer") from e
