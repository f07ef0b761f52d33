"""Entry routes: create, list, update and delete contact entries."""

from typing import Any, NoReturn

from fastapi import APIRouter, Depends, HTTPException, status

from contact_desk.api.deps import get_current_user, get_entry_service
from contact_desk.api.schemas import EntryCreateRequest, EntryMutationResponse, EntryUpdateRequest
from contact_desk.components.entries import (
    CONFLICT,
    FORBIDDEN,
    NOT_FOUND,
    VALIDATION,
    CreateEntryInput,
    DeleteEntryInput,
    EntryError,
    EntryService,
    ListEntriesInput,
    UpdateEntryInput,
    run_create,
    run_delete,
    run_list,
    run_update,
)
from contact_desk.domain.entities import User

router = APIRouter()

_STATUS_BY_CODE = {
    VALIDATION: status.HTTP_400_BAD_REQUEST,
    FORBIDDEN: status.HTTP_403_FORBIDDEN,
    NOT_FOUND: status.HTTP_404_NOT_FOUND,
    CONFLICT: status.HTTP_409_CONFLICT,
}


def _raise_for_errors(errors: list[EntryError]) -> NoReturn:
    """Map component error codes to HTTP errors. Unknown codes are upstream failures."""
    first = errors[0]
    status_code = _STATUS_BY_CODE.get(first.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if first.code == VALIDATION:
        raise HTTPException(
            status_code=status_code,
            detail={
                "message": first.message,
                "details": [
                    {"field": err.field, "message": err.message}
                    for err in errors
                    if err.code == VALIDATION
                ],
            },
        )

    raise HTTPException(status_code=status_code, detail=first.message)


# --- Routes ---


@router.post("", response_model=EntryMutationResponse)
def create_entry(
    data: EntryCreateRequest,
    current_user: User = Depends(get_current_user),
    service: EntryService = Depends(get_entry_service),
) -> EntryMutationResponse:
    """Create an entry owned by the caller."""
    result = run_create(
        CreateEntryInput(
            actor=current_user,
            name=data.name or "",
            mobile=data.mobile or "",
            address=data.address or "",
            entry_id=data.id,
            date_added=data.date_added,
        ),
        service,
    )

    if not result.success:
        _raise_for_errors(result.errors)

    entry = result.entry
    assert entry is not None  # Success guarantees entry is not None
    return EntryMutationResponse(success=True, entry=entry.to_record())


@router.get("")
def list_entries(
    current_user: User = Depends(get_current_user),
    service: EntryService = Depends(get_entry_service),
) -> list[dict[str, Any]]:
    """All entries for super_admin, the caller's own entries otherwise. Newest first."""
    result = run_list(ListEntriesInput(actor=current_user), service)

    if not result.success:
        _raise_for_errors(result.errors)

    return [entry.to_record() for entry in result.entries]


@router.put("/{entry_id}", response_model=EntryMutationResponse)
def update_entry(
    entry_id: str,
    data: EntryUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: EntryService = Depends(get_entry_service),
) -> EntryMutationResponse:
    """Update an entry (super_admin only)."""
    result = run_update(
        UpdateEntryInput(
            actor=current_user,
            entry_id=entry_id,
            name=data.name,
            mobile=data.mobile,
            address=data.address,
            expected_version=data.version,
        ),
        service,
    )

    if not result.success:
        _raise_for_errors(result.errors)

    entry = result.entry
    assert entry is not None
    return EntryMutationResponse(success=True, entry=entry.to_record())


@router.delete("/{entry_id}")
def delete_entry(
    entry_id: str,
    current_user: User = Depends(get_current_user),
    service: EntryService = Depends(get_entry_service),
) -> dict[str, bool]:
    """Delete an entry (super_admin only)."""
    result = run_delete(DeleteEntryInput(actor=current_user, entry_id=entry_id), service)

    if not result.success:
        _raise_for_errors(result.errors)

    return {"success": True}
