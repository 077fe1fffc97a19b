# routes_gadgets.py
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, status

from dependencies import get_current_user, get_gadget_service, require_role
from gadget_service import GadgetService, probability_text
from models import GadgetDB, UserRole
from schemas import (
    CurrentUser,
    GadgetCreate,
    GadgetListResponse,
    GadgetOut,
    GadgetResponse,
    GadgetUpdate,
    SelfDestructCompleted,
    SelfDestructInitiated,
    SelfDestructRequest,
)

router = APIRouter(prefix="/api/gadgets", tags=["Gadgets"])

admin_only = require_role(UserRole.ADMIN.value)


def serialize_gadget(gadget: GadgetDB, text: Optional[str] = None) -> GadgetOut:
    return GadgetOut(
        id=gadget.id,
        name=gadget.name,
        codename=gadget.codename,
        description=gadget.description,
        status=gadget.status,
        mission_success_probability=gadget.mission_success_probability,
        probability_text=text or probability_text(gadget),
        decommissioned_at=gadget.decommissioned_at,
        self_destruct_at=gadget.self_destruct_at,
        created_at=gadget.created_at,
        updated_at=gadget.updated_at,
    )


@router.get("", response_model=GadgetListResponse)
async def list_gadgets(
    status_filter: Optional[str] = Query(None, alias="status"),
    _: CurrentUser = Depends(get_current_user),
    gadget_service: GadgetService = Depends(get_gadget_service),
):
    gadgets = await gadget_service.list_gadgets(status_filter)
    return GadgetListResponse(
        message="Gadgets retrieved successfully",
        count=len(gadgets),
        gadgets=[serialize_gadget(gadget) for gadget in gadgets],
    )


@router.get("/{gadget_id}", response_model=GadgetResponse)
async def get_gadget(
    gadget_id: str,
    _: CurrentUser = Depends(get_current_user),
    gadget_service: GadgetService = Depends(get_gadget_service),
):
    gadget = await gadget_service.get_gadget(gadget_id)
    return GadgetResponse(message="Gadget retrieved successfully", gadget=serialize_gadget(gadget))


@router.post("", response_model=GadgetResponse, status_code=status.HTTP_201_CREATED)
async def create_gadget(
    payload: GadgetCreate,
    _: CurrentUser = Depends(admin_only),
    gadget_service: GadgetService = Depends(get_gadget_service),
):
    gadget = await gadget_service.create_gadget(payload.name, payload.description)
    return GadgetResponse(message="Gadget created successfully", gadget=serialize_gadget(gadget))


@router.patch("/{gadget_id}", response_model=GadgetResponse)
async def update_gadget(
    gadget_id: str,
    payload: GadgetUpdate,
    _: CurrentUser = Depends(admin_only),
    gadget_service: GadgetService = Depends(get_gadget_service),
):
    gadget = await gadget_service.update_gadget(
        gadget_id, name=payload.name, description=payload.description, status=payload.status
    )
    return GadgetResponse(message="Gadget updated successfully", gadget=serialize_gadget(gadget))


@router.delete("/{gadget_id}", response_model=GadgetResponse)
async def decommission_gadget(
    gadget_id: str,
    _: CurrentUser = Depends(admin_only),
    gadget_service: GadgetService = Depends(get_gadget_service),
):
    """
    Soft delete: the gadget stays in the store as Decommissioned.
    """
    gadget = await gadget_service.decommission_gadget(gadget_id)
    return GadgetResponse(
        message="Gadget decommissioned successfully",
        gadget=serialize_gadget(gadget, f"{gadget.codename} - Decommissioned"),
    )


@router.post(
    "/{gadget_id}/self-destruct",
    response_model=Union[SelfDestructCompleted, SelfDestructInitiated],
)
async def self_destruct(
    gadget_id: str,
    payload: Optional[SelfDestructRequest] = None,
    _: CurrentUser = Depends(get_current_user),
    gadget_service: GadgetService = Depends(get_gadget_service),
):
    confirmation_code = payload.confirmation_code if payload else None
    result = await gadget_service.self_destruct(gadget_id, confirmation_code)

    if result.gadget is None:
        return SelfDestructInitiated(
            message="Self-destruct sequence initiated. Confirmation code generated.",
            confirmation_code=result.confirmation_code,
            warning="This is a simulated confirmation code. In a real system, this would be sent via secure channels.",
            instructions="Use this confirmation code to complete the self-destruct sequence.",
        )

    gadget = result.gadget
    return SelfDestructCompleted(
        message="Self-destruct sequence completed successfully",
        gadget=serialize_gadget(gadget, f"{gadget.codename} - DESTROYED"),
        timestamp=gadget.self_destruct_at,
    )
