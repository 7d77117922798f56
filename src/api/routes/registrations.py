"""Invite-based startup registration route."""

import re

import pydantic
from fastapi import APIRouter, Request, status
from starlette.datastructures import UploadFile

from src.api.middleware.error_handler import ValidationError
from src.schemas.startup import RegistrationResponse, StartupRegistrationForm
from src.services.asset_service import Attachment, RegistrationAttachments
from src.services.registration_service import RegistrationService

router = APIRouter(prefix="/register", tags=["registration"])

HEADSHOT_FIELD = re.compile(r"^headshot_(\d+)$")


async def _to_attachment(upload: UploadFile) -> Attachment | None:
    data = await upload.read()
    if not data and not upload.filename:
        return None
    return Attachment(
        filename=upload.filename or "upload",
        content_type=upload.content_type or "application/octet-stream",
        data=data,
    )


def _parse_form(raw: str | None) -> StartupRegistrationForm:
    """Parse the JSON ``data`` field of the multipart body.

    Raises:
        ValidationError: If the field is missing or not a valid form.
    """
    if not raw:
        raise ValidationError(
            "Registration data is required",
            details=[{"loc": ["data"], "msg": "Field required", "type": "missing"}],
        )

    try:
        return StartupRegistrationForm.model_validate_json(raw)
    except pydantic.ValidationError as e:
        raise ValidationError(
            "Invalid registration data",
            details=[
                {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
                for error in e.errors()
            ],
        ) from e


@router.post(
    "/{token}",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a startup",
    description=(
        "Multipart submission: field 'data' holds the registration form as JSON; "
        "optional files 'logo', 'pitch_deck' and 'headshot_<team index>'."
    ),
    responses={
        404: {"description": "Invite not found"},
        409: {"description": "Invite already used"},
        422: {"description": "Missing or invalid fields or files"},
        503: {"description": "Profile could not be saved, retry"},
    },
)
async def register_startup(token: str, request: Request) -> RegistrationResponse:
    """Register a startup through its invite link.

    Args:
        token: Invite token from the registration link.
        request: Multipart request carrying the form and files.

    Returns:
        RegistrationResponse: Slug, profile URL and any warnings.
    """
    service = RegistrationService()
    # Token errors take precedence over errors in the body
    await service.invite_service.resolve_invite(token)

    form_data = await request.form()

    raw = form_data.get("data")
    form = _parse_form(raw if isinstance(raw, str) else None)

    attachments = RegistrationAttachments()
    for key, value in form_data.multi_items():
        if not isinstance(value, UploadFile):
            continue

        attachment = await _to_attachment(value)
        if attachment is None:
            continue

        if key == "logo":
            attachments.logo = attachment
        elif key == "pitch_deck":
            attachments.pitch_deck = attachment
        else:
            match = HEADSHOT_FIELD.match(key)
            if match:
                attachments.headshots[int(match.group(1))] = attachment

    result = await service.register(token, form, attachments)
    return RegistrationResponse(**result)
