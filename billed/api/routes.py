"""FastAPI endpoints for the Billed service.

This module binds the HTML pages to the controllers: listing bills, previewing receipts, submitting a new
bill with its receipt, serving stored receipts, and opening or closing the user session.
"""

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, Form, HTTPException, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from billed.api.dependencies import get_file_service, get_session_registry, get_store, get_user_session
from billed.controllers.bills import BILL_URL_ATTRIBUTE, BillsListController
from billed.controllers.new_bill import NewBillController
from billed.controllers.ui import FileInput, IconElement, PreviewModal, SubmitEvent, UploadedFile
from billed.core.errors import StoreError
from billed.core.models import User, UserType
from billed.core.navigation import RedirectNavigator, Route
from billed.core.session import SessionRegistry, UserSession
from billed.core.settings import Settings, get_settings
from billed.core.utils import get_logger
from billed.services.file_service import FileService
from billed.services.store import SqlBillStore
from billed.views import bills_ui, login_page, new_bill_ui

router = APIRouter()
logger = get_logger("billed.api")

HTTP_303_SEE_OTHER = 303


def redirect(route: Route | str) -> RedirectResponse:
    """Redirect the browser to a route after a form post."""
    return RedirectResponse(str(route), status_code=HTTP_303_SEE_OTHER)


@router.get("/", response_class=HTMLResponse, summary="Login page")
async def login_form() -> HTMLResponse:
    """Render the login page."""
    return HTMLResponse(login_page())


@router.post("/login", summary="Open a user session")
async def login(
    email: str = Form(...),
    type: UserType = Form(UserType.EMPLOYEE),  # noqa: A002
    registry: SessionRegistry = Depends(get_session_registry),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """Open a session for the given identity and go to the bills list."""
    user_session = registry.login(User(type=type, email=email))
    response = redirect(Route.BILLS)
    response.set_cookie(settings.session_cookie_name, user_session.session_id, httponly=True)
    return response


@router.post("/logout", summary="Close the user session")
async def logout(
    request: Request,
    registry: SessionRegistry = Depends(get_session_registry),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """Close the current session and go back to the login page."""
    registry.logout(request.cookies.get(settings.session_cookie_name))
    response = redirect(Route.LOGIN)
    response.delete_cookie(settings.session_cookie_name)
    return response


@router.get(
    "/employee/bills",
    response_class=HTMLResponse,
    summary="List the connected employee's bills",
    description=(
        "Fetch the bills from the store and render them newest first. "
        "When the store fails, the page shows the error message it failed with (e.g. `Erreur 404`)."
    ),
)
async def list_bills(
    store: SqlBillStore = Depends(get_store),
    user_session: UserSession | None = Depends(get_user_session),
) -> Response:
    """Render the bills page."""
    if user_session is None:
        return redirect(Route.LOGIN)
    controller = BillsListController(store, RedirectNavigator())
    result = await controller.load_bills()
    if not result.ok:
        return HTMLResponse(bills_ui(error=result.error))
    return HTMLResponse(bills_ui(data=result.bills))


@router.post("/employee/bills/new-bill", summary="Go to the new-bill form")
async def click_new_bill(store: SqlBillStore = Depends(get_store)) -> RedirectResponse:
    """Handle the "new bill" button."""
    navigator = RedirectNavigator()
    BillsListController(store, navigator).handle_click_new_bill()
    return redirect(navigator.location)


@router.get("/employee/bills/preview", response_class=HTMLResponse, summary="Receipt preview modal content")
async def preview_receipt(
    bill_url: str,
    width: int = 800,
    store: SqlBillStore = Depends(get_store),
) -> HTMLResponse:
    """Render the preview modal body for one bill's receipt."""
    modal = PreviewModal(width=width)
    icon = IconElement({BILL_URL_ATTRIBUTE: bill_url})
    BillsListController(store, RedirectNavigator()).handle_click_icon_eye(icon, modal)
    return HTMLResponse(modal.body)


@router.get("/employee/bill/new", response_class=HTMLResponse, summary="New-bill form")
async def new_bill_form(user_session: UserSession | None = Depends(get_user_session)) -> Response:
    """Render the new-bill form."""
    if user_session is None:
        return redirect(Route.LOGIN)
    return HTMLResponse(new_bill_ui())


@router.post(
    "/employee/bill/new",
    summary="Submit a new bill with its receipt",
    description=(
        "Multipart form with the bill fields and a `file` receipt (jpg, jpeg or png).\n\n"
        "**Response:**\n"
        "- 303 See Other: bill created, redirects to the bills list.\n"
        "- 400 Bad Request: rejected receipt type or invalid fields; the form is shown again.\n"
        "- 404/500: the store failed; the bills page shows the error message."
    ),
)
async def submit_new_bill(
    request: Request,
    store: SqlBillStore = Depends(get_store),
    user_session: UserSession | None = Depends(get_user_session),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Validate the receipt, submit the bill and redirect to the list."""
    if user_session is None:
        return redirect(Route.LOGIN)
    navigator = RedirectNavigator()
    controller = NewBillController(store, navigator, user_session, settings.locale)
    form = await request.form()
    fields = {key: value for key, value in form.items() if isinstance(value, str)}
    upload = form.get(controller.form_data_key)
    # request.form() yields starlette UploadFile instances, which are not fastapi.UploadFile instances.
    if isinstance(upload, UploadFile) and upload.filename:
        data = await upload.read()
        selected = UploadedFile(upload.filename, upload.content_type or "application/octet-stream", data)
        controller.on_file_selected(FileInput.holding(selected))
        if controller.error_message:
            return HTMLResponse(new_bill_ui(controller.error_message, values=fields), status_code=400)
    try:
        await controller.on_submit(SubmitEvent(fields))
    except ValidationError as exc:
        logger.warning(f"Rejected bill form: {exc.error_count()} invalid field(s)")
        return HTMLResponse(
            new_bill_ui(values=fields, form_error=controller.invalid_fields_message(exc)), status_code=400
        )
    except StoreError as exc:
        return HTMLResponse(bills_ui(error=str(exc)), status_code=exc.status_code)
    return redirect(navigator.location)


@router.get("/receipts/{key:path}", summary="Download a stored receipt")
async def download_receipt(key: str, file_service: FileService = Depends(get_file_service)) -> Response:
    """Serve a receipt image from S3 by key."""
    try:
        data, content_type = await run_in_threadpool(file_service.get_file, key)
    except (BotoCoreError, ClientError) as exc:
        raise HTTPException(status_code=404, detail="File not found") from exc
    return Response(content=data, media_type=content_type)


@router.get(
    "/health",
    summary="Health check",
    description="Simple health check endpoint. Returns status ok.",
    response_description="Status ok.",
    responses={200: {"description": "API is healthy.", "content": {"application/json": {"example": {"status": "ok"}}}}},
)
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}
