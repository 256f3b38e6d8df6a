"""Feedback form endpoints — open a form, edit fields, send or cancel."""

import logging

from fastapi import APIRouter, HTTPException, Response

from feedback_form.models.feedback import (
    FeedbackResult,
    FieldUpdate,
    FormActionResponse,
    FormView,
    OpenFormRequest,
)
from feedback_form.services.form_sessions import (
    FormSession,
    apply_update,
    close_form,
    form_view,
    get_form,
    open_form,
)

router = APIRouter(prefix="/feedback", tags=["feedback"])
logger = logging.getLogger(__name__)


def _require_form(form_id: str) -> FormSession:
    session = get_form(form_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Feedback form not found")
    return session


@router.post("/forms", response_model=FormView, status_code=201)
async def create_form(body: OpenFormRequest | None = None):
    """Open a feedback form and put it on screen."""
    session = open_form((body or OpenFormRequest()).soft_input_mode)
    return form_view(session)


@router.get("/forms/{form_id}", response_model=FormView)
async def read_form(form_id: str):
    return form_view(_require_form(form_id))


@router.put("/forms/{form_id}/fields", response_model=FormView)
async def update_fields(form_id: str, update: FieldUpdate):
    """Text change. Errors refresh live once a send has failed."""
    session = _require_form(form_id)
    apply_update(session, update)
    return form_view(session)


@router.post("/forms/{form_id}/send", response_model=FormActionResponse)
async def send_form(form_id: str):
    """Click send. Invalid input keeps the form open and returns 422."""
    session = _require_form(form_id)
    if not session.controller.on_send():
        view = form_view(session)
        logger.info("Feedback form %s failed validation", form_id)
        raise HTTPException(status_code=422, detail=view.model_dump(mode="json"))

    return FormActionResponse(
        finished=True,
        result=FeedbackResult.SUBMITTED,
        form=form_view(session),
    )


@router.post("/forms/{form_id}/cancel", response_model=FormActionResponse)
async def cancel_form(form_id: str):
    session = _require_form(form_id)
    session.controller.on_cancel()
    return FormActionResponse(
        finished=True,
        result=FeedbackResult.CANCELLED,
        form=form_view(session),
    )


@router.delete("/forms/{form_id}", status_code=204)
async def delete_form(form_id: str):
    """Dismiss the form, restoring the host window's input mode."""
    if not close_form(form_id):
        raise HTTPException(status_code=404, detail="Feedback form not found")
    return Response(status_code=204)
