from __future__ import annotations

from fastapi import APIRouter, Depends

from ..deps import get_dispatcher
from ..schemas import ToolCallRequest, ToolDescriptor, ToolResponse
from ..services.dispatcher import Dispatcher, catalogue
from ..services.formatter import render

router = APIRouter(prefix='/api/tools', tags=['tools'])


@router.get('', response_model=list[ToolDescriptor])
def list_tools():
    return catalogue()


@router.post('/call', response_model=ToolResponse)
def call_tool(payload: ToolCallRequest, dispatcher: Dispatcher = Depends(get_dispatcher)):
    # failures are reported inside the envelope, never as an HTTP error status
    return render(dispatcher.dispatch(payload.name, payload.arguments))
