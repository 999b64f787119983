"""Company catalog routes.

Reads are public; writes need the admin role. A signed-in caller without
it gets 403 rather than 401, and bodies that fail model validation get
FastAPI's 422. Service-level input errors such as an empty update are 400.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from jobly.core.security import get_admin_principal
from jobly.schemas.companies import (
    CompanyDeletedResponse,
    CompanyDetailOut,
    CompanyDetailResponse,
    CompanyListResponse,
    CompanyNewRequest,
    CompanyOut,
    CompanyResponse,
    CompanySearchFilters,
    CompanyUpdateRequest,
)
from jobly.services.companies import get_company_repository
from jobly.services.errors import (
    RepositoryConflictError,
    RepositoryNotFoundError,
    RepositoryUnavailableError,
    RepositoryValidationError,
)

router = APIRouter()


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
async def create_company(
    payload: CompanyNewRequest,
    _principal=Depends(get_admin_principal),
    repository=Depends(get_company_repository),
) -> CompanyResponse:
    try:
        row = await repository.create(payload.model_dump(by_alias=True))
    except RepositoryUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except RepositoryConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return CompanyResponse(company=CompanyOut(**row))


@router.get("", response_model=CompanyListResponse)
async def list_companies(request: Request, repository=Depends(get_company_repository)) -> CompanyListResponse:
    try:
        filters = CompanySearchFilters.from_query(request.query_params)
        rows = await repository.find_all(filters)
    except RepositoryValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RepositoryUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return CompanyListResponse(companies=[CompanyOut(**row) for row in rows])


@router.get("/{handle}", response_model=CompanyDetailResponse)
async def get_company(handle: str, repository=Depends(get_company_repository)) -> CompanyDetailResponse:
    try:
        row = await repository.get(handle)
    except RepositoryUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except RepositoryNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return CompanyDetailResponse(company=CompanyDetailOut(**row))


@router.patch("/{handle}", response_model=CompanyResponse)
async def patch_company(
    handle: str,
    payload: CompanyUpdateRequest,
    _principal=Depends(get_admin_principal),
    repository=Depends(get_company_repository),
) -> CompanyResponse:
    try:
        row = await repository.update(handle, payload.model_dump(by_alias=True, exclude_unset=True))
    except RepositoryValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RepositoryConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except RepositoryUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except RepositoryNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return CompanyResponse(company=CompanyOut(**row))


@router.delete("/{handle}", response_model=CompanyDeletedResponse)
async def delete_company(
    handle: str,
    _principal=Depends(get_admin_principal),
    repository=Depends(get_company_repository),
) -> CompanyDeletedResponse:
    try:
        await repository.remove(handle)
    except RepositoryUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except RepositoryNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return CompanyDeletedResponse(deleted=handle)
