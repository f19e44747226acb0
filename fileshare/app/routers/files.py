from __future__ import annotations

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse, JSONResponse, Response
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from ..adapters.io.path_validator import validate_path
from ..config import Settings, get_settings
from ..exceptions import MalformedMultipartError, NotADirectoryPathError, UnknownPayloadError
from ..services.listing_service import list_directory
from ..services.upload_service import save_upload

logger = logging.getLogger(__name__)

# Form field carrying the uploaded file, as sent by the web UI.
UPLOAD_FIELD = "myFile"

router = APIRouter()


@router.get("/list", response_model=List[str])
async def list_or_download(
    path: Optional[str] = Query(None),
    settings: Settings = Depends(get_settings),
) -> Union[JSONResponse, FileResponse]:
    """List a directory as a JSON array, or download a file as an attachment.

    Directories in the listing end with "/". Nothing is read from disk when
    directory listing is disabled; the answer is always ``[]`` then.
    """
    if settings.disable_directory_listing:
        return JSONResponse([])

    target = await run_in_threadpool(validate_path, settings.base_path, path)

    if not target.is_dir:
        logger.info("Downloading %s", target)
        return FileResponse(
            target.path,
            media_type="application/octet-stream",
            filename=target.name,
            content_disposition_type="attachment",
        )

    names = await run_in_threadpool(list_directory, target, settings)
    return JSONResponse(names)


def _first_file_part(form: FormData) -> Optional[UploadFile]:
    for key, value in form.multi_items():
        if key == UPLOAD_FIELD and isinstance(value, UploadFile):
            return value
    return None


@router.post("/upload")
async def upload_file(
    request: Request,
    path: Optional[str] = Query(None),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Store the ``myFile`` part of a multipart body in the directory ``path``.

    Name collisions never overwrite: the new file becomes ``name (1).ext``,
    ``name (2).ext``, ... Other form parts are ignored.
    """
    target = await run_in_threadpool(validate_path, settings.base_path, path)
    if not target.is_dir:
        raise NotADirectoryPathError()

    content_type = request.headers.get("content-type", "")
    if not content_type.lower().startswith("multipart/form-data"):
        raise MalformedMultipartError("request Content-Type isn't multipart/form-data")

    try:
        form = await request.form()
    except MultiPartException as e:
        raise MalformedMultipartError(e.message) from e
    except StarletteHTTPException as e:
        # Starlette wraps parser errors into a 400 when running inside an app
        raise MalformedMultipartError(str(e.detail)) from e

    try:
        part = _first_file_part(form)
        if part is None:
            raise UnknownPayloadError()
        await run_in_threadpool(save_upload, target, part.filename, part.file, settings)
    finally:
        await form.close()

    return Response(status_code=200)
