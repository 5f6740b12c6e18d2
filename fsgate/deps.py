from __future__ import annotations

from fastapi import HTTPException, Request, status

from .services.dispatcher import Dispatcher


def get_dispatcher(request: Request) -> Dispatcher:
    dispatcher = getattr(request.app.state, 'dispatcher', None)
    if dispatcher is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail='Gateway not initialized')
    return dispatcher
