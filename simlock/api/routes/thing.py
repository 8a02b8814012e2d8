"""Thing REST API routes: description, properties, and actions."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from simlock.devices.dispatcher import ActionDispatcher
from simlock.devices.errors import InvalidActionInput, PropertyError, UnknownAction
from simlock.devices.lock import LockDevice

router = APIRouter(prefix="/thing", tags=["thing"])

HREF_PREFIX = "/api/v1/thing"


def get_device(request: Request) -> LockDevice:
    return request.app.state.device


def get_dispatcher(request: Request) -> ActionDispatcher:
    return request.app.state.dispatcher


@router.get("")
async def get_thing(device: LockDevice = Depends(get_device)) -> dict[str, Any]:
    """Get the thing description."""
    return device.get_thing_description(HREF_PREFIX)


@router.get("/properties")
async def get_properties(device: LockDevice = Depends(get_device)) -> dict[str, Any]:
    return device.get_properties()


@router.get("/properties/{name}")
async def get_property(name: str, device: LockDevice = Depends(get_device)) -> dict[str, Any]:
    if not device.has_property(name):
        raise HTTPException(status_code=404, detail=f"Property not found: {name}")
    return {name: device.get_property(name)}


@router.put("/properties/{name}")
async def put_property(
    name: str,
    body: dict[str, Any] = Body(...),
    device: LockDevice = Depends(get_device),
) -> dict[str, Any]:
    """Write a property.  The body must be ``{name: value}``."""
    if not device.has_property(name):
        raise HTTPException(status_code=404, detail=f"Property not found: {name}")
    if name not in body:
        raise HTTPException(status_code=400, detail=f"Body must contain {name!r}")
    try:
        await device.set_property(name, body[name])
    except PropertyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {name: device.get_property(name)}


@router.post("/actions", status_code=201)
async def request_action(
    body: dict[str, Any] = Body(...),
    dispatcher: ActionDispatcher = Depends(get_dispatcher),
) -> dict[str, Any]:
    """Request an action: ``{"addUser": {"input": {...}}}``."""
    if len(body) != 1:
        raise HTTPException(status_code=400, detail="Exactly one action per request")
    name, request = next(iter(body.items()))
    action_input = request.get("input") if isinstance(request, dict) else None
    try:
        record = await dispatcher.perform(name, action_input)
    except UnknownAction as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidActionInput as e:
        raise HTTPException(status_code=400, detail={"message": str(e), "errors": e.errors})
    return record.to_description()


@router.get("/actions")
async def list_actions(
    dispatcher: ActionDispatcher = Depends(get_dispatcher),
) -> list[dict[str, Any]]:
    return [a.to_description() for a in dispatcher.list_actions()]


@router.get("/actions/{name}")
async def list_actions_by_name(
    name: str,
    dispatcher: ActionDispatcher = Depends(get_dispatcher),
) -> list[dict[str, Any]]:
    if name not in dispatcher.action_names:
        raise HTTPException(status_code=404, detail=f"Action not found: {name}")
    return [a.to_description() for a in dispatcher.list_actions(name)]


@router.get("/actions/{name}/{action_id}")
async def get_action(
    name: str,
    action_id: str,
    dispatcher: ActionDispatcher = Depends(get_dispatcher),
) -> dict[str, Any]:
    record = dispatcher.get_action(name, action_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Action request not found: {action_id}")
    return record.to_description()
