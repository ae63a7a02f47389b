from __future__ import annotations

from typing import Optional, Tuple

from fastapi import APIRouter, Depends, Path, Query, status

from employee_api.core.deps import get_current_user, get_employee_service, get_settings, require_roles
from employee_api.core.exceptions import ValidationError
from employee_api.core.settings import AppSettings
from employee_api.db.models import Role
from employee_api.repositories.employees import EmployeeStatus
from employee_api.schemas.common import ApiResponse, ListResponse, MessageResponse, PaginationMeta
from employee_api.schemas.employee import (
    Availability,
    EmployeeCreate,
    EmployeeRead,
    EmployeeStats,
    EmployeeUpdate,
)
from employee_api.schemas.validators import SEARCH_MAX, normalize_email
from employee_api.services.employees import EmployeeService

router = APIRouter(prefix="/employees", tags=["Employees"])

admin_only = [Depends(require_roles(Role.ADMIN.value))]


def normalize_pagination(
    page: Optional[int], per_page: Optional[int], settings: AppSettings
) -> Tuple[int, int]:
    """Values below 1 (or missing) fall back to the defaults; per_page is capped."""
    page = page if page is not None and page >= 1 else settings.DEFAULT_PAGE
    per_page = per_page if per_page is not None and per_page >= 1 else settings.DEFAULT_PER_PAGE
    return page, min(per_page, settings.MAX_PER_PAGE)


def _required(value: Optional[str], label: str) -> str:
    if not value:
        message = f"{label} is required"
        raise ValidationError(message, errors=[{"field": "value", "message": message}])
    return value


# PUBLIC_INTERFACE
@router.get(
    "/check/username",
    response_model=ApiResponse[Availability],
    summary="Check username availability",
    description="Whether an employee username is free. `excludeId` ignores that employee (for edits).",
    dependencies=admin_only,
)
def check_username(
    value: Optional[str] = Query(None, description="Username to check"),
    username: Optional[str] = Query(None, description="Alias of value"),
    exclude_id: Optional[str] = Query(None, alias="excludeId"),
    service: EmployeeService = Depends(get_employee_service),
) -> ApiResponse[Availability]:
    candidate = _required(value or username, "Username")
    available = service.is_username_available(candidate, exclude_id)
    return ApiResponse[Availability](data=Availability(available=available))


# PUBLIC_INTERFACE
@router.get(
    "/check/email",
    response_model=ApiResponse[Availability],
    summary="Check email availability",
    description="Whether an employee email is free. `excludeId` ignores that employee (for edits).",
    dependencies=admin_only,
)
def check_email(
    value: Optional[str] = Query(None, description="Email to check"),
    email: Optional[str] = Query(None, description="Alias of value"),
    exclude_id: Optional[str] = Query(None, alias="excludeId"),
    service: EmployeeService = Depends(get_employee_service),
) -> ApiResponse[Availability]:
    candidate = _required(value or email, "Email")
    try:
        candidate = normalize_email(candidate)
    except ValueError as exc:
        raise ValidationError(str(exc), errors=[{"field": "value", "message": str(exc)}]) from exc
    available = service.is_email_available(candidate, exclude_id)
    return ApiResponse[Availability](data=Availability(available=available))


# PUBLIC_INTERFACE
@router.get(
    "/stats",
    response_model=ApiResponse[EmployeeStats],
    summary="Employee statistics",
    dependencies=admin_only,
)
def employee_stats(
    service: EmployeeService = Depends(get_employee_service),
) -> ApiResponse[EmployeeStats]:
    return ApiResponse[EmployeeStats](data=EmployeeStats(**service.statistics()))


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=ListResponse[EmployeeRead],
    summary="List employees",
    description=(
        "Paginated employee list. `search` matches fullName, username, email, department "
        "and position case-insensitively; `status` narrows to active or inactive employees."
    ),
    dependencies=[Depends(get_current_user)],
)
def list_employees(
    page: Optional[int] = Query(None, description="1-based page number"),
    per_page: Optional[int] = Query(None, alias="perPage", description="Page size"),
    search: Optional[str] = Query(None, max_length=SEARCH_MAX),
    status_filter: EmployeeStatus = Query(EmployeeStatus.ALL, alias="status"),
    service: EmployeeService = Depends(get_employee_service),
    settings: AppSettings = Depends(get_settings),
) -> ListResponse[EmployeeRead]:
    page, per_page = normalize_pagination(page, per_page, settings)
    result = service.list_employees(
        page=page, per_page=per_page, search=search or "", status=status_filter
    )
    return ListResponse[EmployeeRead](
        data=[EmployeeRead.model_validate(e) for e in result.items],
        pagination=PaginationMeta(
            page=result.page,
            per_page=result.per_page,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


# PUBLIC_INTERFACE
@router.get(
    "/{employee_id}",
    response_model=ApiResponse[EmployeeRead],
    summary="Get employee",
    dependencies=[Depends(get_current_user)],
)
def get_employee(
    employee_id: str = Path(...),
    service: EmployeeService = Depends(get_employee_service),
) -> ApiResponse[EmployeeRead]:
    return ApiResponse[EmployeeRead](data=EmployeeRead.model_validate(service.get_employee(employee_id)))


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=ApiResponse[EmployeeRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create employee",
    description="Create an employee. Requires the admin role.",
    dependencies=admin_only,
)
def create_employee(
    payload: EmployeeCreate,
    service: EmployeeService = Depends(get_employee_service),
) -> ApiResponse[EmployeeRead]:
    employee = service.create_employee(payload.model_dump())
    return ApiResponse[EmployeeRead](
        message="Employee created successfully",
        data=EmployeeRead.model_validate(employee),
    )


# PUBLIC_INTERFACE
@router.put(
    "/{employee_id}",
    response_model=ApiResponse[EmployeeRead],
    summary="Update employee",
    description="Partially update an employee; omitted fields keep their values. Requires admin.",
    dependencies=admin_only,
)
def update_employee(
    payload: EmployeeUpdate,
    employee_id: str = Path(...),
    service: EmployeeService = Depends(get_employee_service),
) -> ApiResponse[EmployeeRead]:
    employee = service.update_employee(employee_id, payload.changes())
    return ApiResponse[EmployeeRead](
        message="Employee updated successfully",
        data=EmployeeRead.model_validate(employee),
    )


# PUBLIC_INTERFACE
@router.delete(
    "/{employee_id}",
    response_model=MessageResponse,
    summary="Delete employee",
    dependencies=admin_only,
)
def delete_employee(
    employee_id: str = Path(...),
    service: EmployeeService = Depends(get_employee_service),
) -> MessageResponse:
    return MessageResponse(message=service.delete_employee(employee_id))
