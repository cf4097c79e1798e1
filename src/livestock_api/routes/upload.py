"""Media upload route."""

import logging

from fastapi import APIRouter, Depends, UploadFile
from fastapi import File as FastAPIFile
from starlette.concurrency import run_in_threadpool

from livestock_api.models.responses import UploadResponse
from livestock_api.services import get_media_intake
from livestock_api.services.auth import get_listing_actor
from livestock_common.models.user import AuthenticatedIdentity
from livestock_common.services.media_intake import IncomingFile, MediaIntake

logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"], redirect_slashes=False)


@router.post("/upload", response_model=UploadResponse)
async def upload_photos(
    photos: list[UploadFile] | None = FastAPIFile(None),
    actor: AuthenticatedIdentity | None = Depends(get_listing_actor),
    intake: MediaIntake = Depends(get_media_intake),
) -> UploadResponse:
    """Store uploaded images and videos and return their URLs.

    Args:
        photos: Multipart files under the "photos" field
        actor: Uploader identity, if any
        intake: Media intake service

    Returns:
        Upload response with one entry per stored file
    """
    photos = photos or []
    intake.check_count(len(photos))

    incoming = []
    for photo in photos:
        # One byte past the limit is enough to reject an oversized file
        content = await photo.read(intake.max_file_size + 1)
        incoming.append(
            IncomingFile(
                original_name=photo.filename or "",
                content_type=photo.content_type or "",
                content=content,
            )
        )

    # Disk writes run off the event loop
    files = await run_in_threadpool(intake.upload, incoming)
    logger.info("Upload of %d files by %s", len(files), actor.user_id if actor else "anonymous")
    return UploadResponse(message=f"{len(files)} files uploaded", files=files)
