"""
DTO de libro del sidecar de uploads.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class BookDTO(BaseModel):
    """
    Libro tal como se guarda en books.json.
    Los nombres JSON (imageURL / fileURL) se mantienen por compatibilidad.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: str
    author: Optional[str] = None
    link: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageURL")
    file_url: Optional[str] = Field(None, alias="fileURL")
