"""Endpoint directory, selection and switch routes.

Endpoints:
    GET    /endpoints          — directory, selection, affinities, switch flag
    GET    /selection          — current selection + switch flag
    POST   /selection          — pick a provider for a network (remembered)
    POST   /selection/group    — expand another group
    POST   /switch             — apply the selection (409 when disabled)
    GET    /custom-endpoints   — saved custom endpoint urls
    POST   /custom-endpoints   — save one (422 when the url is invalid)
    DELETE /custom-endpoints   — forget one (?url=…)
"""

from __future__ import annotations

import threading

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from core.state import EndpointsState
from endpoints.catalog import add_custom_endpoint, create_ws_endpoints, load_custom_endpoints, remove_custom_endpoint
from endpoints.directory import has_pair

router = APIRouter(tags=["endpoints"])

_state_lock = threading.Lock()


class SelectRequest(BaseModel):
    network: str
    url: str | None = None


class GroupRequest(BaseModel):
    index: int


class SwitchRequest(BaseModel):
    url: str | None = None
    base_url: str = ""


class CustomEndpointRequest(BaseModel):
    url: str


def get_state(request: Request) -> EndpointsState:
    """The picker state for this app; built from the catalog on first use."""
    state = getattr(request.app.state, "endpoints", None)
    if state is not None:
        return state
    # sync handlers run in the threadpool; only one of them builds the directory
    with _state_lock:
        state = getattr(request.app.state, "endpoints", None)
        if state is None:
            state = EndpointsState(create_ws_endpoints())
            request.app.state.endpoints = state
    return state


def _selection_payload(state: EndpointsState) -> dict:
    return {
        "selection": state.selection.to_dict(),
        "affinities": dict(state.affinities),
        "isSwitchDisabled": state.is_switch_disabled,
    }


@router.get("/endpoints")
def get_endpoints(state: EndpointsState = Depends(get_state)) -> dict:
    return state.to_dict()


@router.get("/selection")
def get_selection(state: EndpointsState = Depends(get_state)) -> dict:
    return _selection_payload(state)


@router.post("/selection")
def post_selection(req: SelectRequest, state: EndpointsState = Depends(get_state)) -> dict:
    """Pick *url* (default: remembered or first provider) for *network*."""
    url = req.url or state.preferred_url(req.network)
    if url is None or not has_pair(state.groups, req.network, url):
        raise HTTPException(404, f"No provider {req.url or ''!r} for network {req.network!r}")
    state.select(req.network, url)
    return _selection_payload(state)


@router.post("/selection/group")
def post_group(req: GroupRequest, state: EndpointsState = Depends(get_state)) -> dict:
    if not 0 <= req.index < len(state.groups):
        raise HTTPException(422, f"Group index must be within 0..{len(state.groups) - 1}")
    state.change_group(req.index)
    return _selection_payload(state)


@router.post("/switch")
def post_switch(req: SwitchRequest, state: EndpointsState = Depends(get_state)) -> dict:
    """Apply the selection, or *url* when given.  SwitchBlockedError → 409."""
    if req.url:
        state.select_url(req.url)
    target = state.apply(req.base_url)
    return {"ok": True, "apiUrl": state.selection.api_url, "target": target}


@router.get("/custom-endpoints")
def get_custom_endpoints() -> dict:
    return {"urls": load_custom_endpoints()}


@router.post("/custom-endpoints", status_code=201)
def post_custom_endpoint(req: CustomEndpointRequest) -> dict:
    return {"urls": add_custom_endpoint(req.url)}


@router.delete("/custom-endpoints")
def delete_custom_endpoint(url: str) -> dict:
    return {"urls": remove_custom_endpoint(url)}
