"""
Command controller endpoint for API v1.

Every page action of the booking front end is posted to a single
``/controller`` route with a ``command`` field naming the action.
Parameters are taken from the query string and, for POST requests,
from a flat JSON object in the body.  The route hands the request to
``RequestHandler`` and translates its outcome:

* forward: ``200`` with ``{"page": ..., "attributes": ...}`` for the
  front end to render;
* redirect: ``303 See Other`` to the index page.

Session storage belongs to the hosting web layer.  When a session
middleware has put a mapping into the ASGI scope it is used; otherwise
each request starts with an empty session.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from airline_api.app.commands import CommandRequest, RequestHandler

router = APIRouter()


def get_request_handler(request: Request) -> RequestHandler:
    """Return the handler created at application startup."""
    return request.app.state.request_handler


def get_session(request: Request) -> Dict[str, Any]:
    session = request.scope.get("session")
    return session if session is not None else {}


async def _read_parameters(request: Request) -> Dict[str, str]:
    parameters: Dict[str, str] = dict(request.query_params)
    if request.method != "POST" or not await request.body():
        return parameters
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Body must be a JSON object")
    if not isinstance(body, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Body must be a JSON object")
    parameters.update({str(key): str(value) for key, value in body.items() if value is not None})
    return parameters


@router.api_route("/controller", methods=["GET", "POST"])
async def controller(
    request: Request,
    handler: RequestHandler = Depends(get_request_handler),
    session: Dict[str, Any] = Depends(get_session),
):
    """Run the command named in the ``command`` field.

    Commands perform blocking database work, so dispatch runs in the
    thread pool: one worker per request.
    """
    command_request = CommandRequest(parameters=await _read_parameters(request), session=session)
    outcome = await run_in_threadpool(handler.process_request, command_request)
    if outcome.redirect:
        return RedirectResponse(url=outcome.destination, status_code=status.HTTP_303_SEE_OTHER)
    return {"page": outcome.destination, "attributes": jsonable_encoder(outcome.attributes)}
