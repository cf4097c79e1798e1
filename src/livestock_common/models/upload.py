"""Upload result model."""

from pydantic import BaseModel, Field


class UploadedFile(BaseModel):
    """Metadata returned for one stored upload. Not persisted server-side."""

    filename: str = Field(..., description="Server-assigned filename")
    url: str = Field(..., description="Relative URL served by the static file route")
    mimetype: str = Field(..., description="MIME type declared by the client")
