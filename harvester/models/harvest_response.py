from typing import List, Optional

from pydantic import BaseModel


class DocumentResult(BaseModel):
    url: str
    path: str
    outcome: str
    """One of ``"downloaded"``, ``"skipped"`` or ``"failed"``."""
    failure: Optional[str] = None
    detail: str = ""
    bytes_written: int = 0


class HarvestResponse(BaseModel):
    source_url: str
    links_found: int
    downloaded: int
    skipped: int
    failed: int
    documents: List[DocumentResult]
