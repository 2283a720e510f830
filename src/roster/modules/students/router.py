"""
Students Router

Endpoints for student records. Every endpoint requires a valid bearer token.

Endpoints:
- POST /students - Create a student (multipart form or JSON)
- PUT /students/{id} - Update a student (multipart form or JSON)
- GET /students - List all students
- GET /students/year/{year} - List students of one academic year
- GET /students/{id} - Get one student

Create and update accept optional passport, diplom and image files when
sent as multipart/form-data.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.auth import get_current_account_id
from roster.core.database import get_db
from roster.core.exceptions import RosterError, ValidationError, to_http_exception
from roster.modules.students import service
from roster.modules.students.attachments import AttachmentStore, get_attachment_store
from roster.modules.students.models import ATTACHMENT_FIELDS
from roster.modules.students.schemas import StudentMutationResponse, StudentResponse

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_account_id)])


@dataclass
class StudentPayload:
    """Raw request fields and uploaded files."""

    fields: dict[str, Any] = field(default_factory=dict)
    uploads: dict[str, UploadFile] = field(default_factory=dict)


async def read_student_payload(request: Request) -> StudentPayload:
    """
    Read a create/update body sent as multipart form, urlencoded form or JSON.

    Raises:
        HTTPException 400: If the body cannot be parsed or a file field is repeated
    """
    content_type = request.headers.get("content-type", "")
    payload = StudentPayload()

    try:
        if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
            form = await request.form()
            for key in form.keys():
                values = form.getlist(key)
                if key in ATTACHMENT_FIELDS:
                    # Browsers send an empty part for an untouched file input
                    files = [v for v in values if not isinstance(v, str) and v.filename]
                    if len(files) > 1:
                        raise ValidationError(f"Only one file is allowed for '{key}'")
                    if files:
                        payload.uploads[key] = files[0]
                elif isinstance(values[-1], str):
                    payload.fields[key] = values[-1]
        else:
            body = await request.body()
            if body:
                data = await request.json()
                if not isinstance(data, dict):
                    raise ValidationError("Request body must be a JSON object")
                payload.fields = data
    except RosterError as e:
        raise to_http_exception(e) from e
    except ValueError as e:
        raise to_http_exception(ValidationError("Request body could not be parsed")) from e

    return payload


def _internal_error(e: Exception) -> HTTPException:
    logger.exception(f"Unexpected error in students router: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL_ERROR",
            "message": "Internal Server Error",
        },
    )


@router.post(
    "",
    response_model=StudentMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_student(
    payload: StudentPayload = Depends(read_student_payload),
    db: AsyncSession = Depends(get_db),
    store: AttachmentStore = Depends(get_attachment_store),
) -> StudentMutationResponse:
    """
    Create a student record.

    Raises:
        HTTPException 400: Missing required fields or unparseable values
        HTTPException 500: Storage failure
    """
    try:
        student = await service.create_student(db, store, payload.fields, payload.uploads)
    except RosterError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error(e) from e

    return StudentMutationResponse(
        message="Student added successfully",
        student=StudentResponse.model_validate(student),
    )


@router.put("/{student_id}", response_model=StudentMutationResponse)
async def update_student(
    student_id: str,
    payload: StudentPayload = Depends(read_student_payload),
    db: AsyncSession = Depends(get_db),
    store: AttachmentStore = Depends(get_attachment_store),
) -> StudentMutationResponse:
    """
    Update a student record.

    Raises:
        HTTPException 400: Unparseable values
        HTTPException 404: Student not found
        HTTPException 500: Storage failure
    """
    try:
        student = await service.update_student(
            db, store, student_id, payload.fields, payload.uploads
        )
    except RosterError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error(e) from e

    return StudentMutationResponse(
        message="Student updated successfully",
        student=StudentResponse.model_validate(student),
    )


@router.get("", response_model=list[StudentResponse])
async def list_students(db: AsyncSession = Depends(get_db)) -> list[StudentResponse]:
    """List all students."""
    try:
        students = await service.list_students(db)
    except RosterError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error(e) from e

    return [StudentResponse.model_validate(student) for student in students]


@router.get("/year/{year}", response_model=list[StudentResponse])
async def list_students_by_year(
    year: str,
    db: AsyncSession = Depends(get_db),
) -> list[StudentResponse]:
    """
    List the students of one academic year.

    Raises:
        HTTPException 404: No students for this year
    """
    try:
        students = await service.list_students_by_year(db, service.parse_year_param(year))
    except RosterError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error(e) from e

    return [StudentResponse.model_validate(student) for student in students]


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(
    student_id: str,
    db: AsyncSession = Depends(get_db),
) -> StudentResponse:
    """
    Get one student.

    Raises:
        HTTPException 404: Student not found
    """
    try:
        student = await service.get_student(db, student_id)
    except RosterError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error(e) from e

    return StudentResponse.model_validate(student)
