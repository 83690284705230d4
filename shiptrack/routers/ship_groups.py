from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from shiptrack.schemas.ship_groups import (
    CountResponse,
    RecentActivityResponse,
    ShipGroupCreate,
    ShipGroupResponse,
    ShipGroupUpdate,
    TopLeadersResponse,
    TopMembersResponse,
)
from shiptrack.services.ship_group_service import (
    ShipGroupNotFoundError,
    ShipGroupService,
    TrackingNumberTakenError,
)

router = APIRouter(prefix="/shipGroups", tags=["shipGroups"])


def _get_service(request: Request) -> ShipGroupService:
    svc = getattr(getattr(request.app, "state", None), "ship_group_service", None)
    if not svc:
        raise RuntimeError("ShipGroupService not configured")
    return svc


@router.get("", response_model=list[ShipGroupResponse])
def list_ship_groups(request: Request):
    return [ShipGroupResponse(**record) for record in _get_service(request).list_all()]


@router.post("", response_model=ShipGroupResponse)
def create_ship_group(payload: ShipGroupCreate, request: Request):
    try:
        record = _get_service(request).create(payload.model_dump())
    except TrackingNumberTakenError as exc:
        raise HTTPException(409, str(exc))
    return ShipGroupResponse(**record)


@router.get("/count", response_model=CountResponse)
def count_ship_groups(request: Request):
    return CountResponse(total_ship_groups_number=_get_service(request).count())


@router.get("/recentActivity", response_model=RecentActivityResponse)
def recent_activity(request: Request):
    return RecentActivityResponse(recent_activity=_get_service(request).recent_activity())


@router.get("/topLeaders", response_model=TopLeadersResponse)
def top_leaders(request: Request):
    return TopLeadersResponse(top_five_leaders=_get_service(request).top_leaders())


@router.get("/topMembers", response_model=TopMembersResponse)
def top_members(request: Request):
    return TopMembersResponse(top_five_users=_get_service(request).top_members())


@router.get("/tracking/{tracking_number}", response_model=ShipGroupResponse)
def get_by_tracking_number(tracking_number: str, request: Request):
    try:
        record = _get_service(request).get_by_tracking_number(tracking_number)
    except ShipGroupNotFoundError:
        raise HTTPException(404, "Ship group not found")
    return ShipGroupResponse(**record)


@router.get("/{ship_group_id}", response_model=ShipGroupResponse)
def get_ship_group(ship_group_id: str, request: Request):
    try:
        record = _get_service(request).get(ship_group_id)
    except ShipGroupNotFoundError:
        raise HTTPException(404, "Ship group not found")
    return ShipGroupResponse(**record)


@router.put("/{ship_group_id}", response_model=ShipGroupResponse)
def update_ship_group(ship_group_id: str, payload: ShipGroupUpdate, request: Request):
    svc = _get_service(request)
    try:
        record = svc.update(ship_group_id, payload.changes())
    except ShipGroupNotFoundError:
        raise HTTPException(404, "Ship group not found")
    except TrackingNumberTakenError as exc:
        raise HTTPException(409, str(exc))
    return ShipGroupResponse(**record)


@router.delete("/{ship_group_id}", response_model=ShipGroupResponse)
def delete_ship_group(ship_group_id: str, request: Request):
    try:
        record = _get_service(request).delete(ship_group_id)
    except ShipGroupNotFoundError:
        raise HTTPException(404, "Ship group not found")
    return ShipGroupResponse(**record)
