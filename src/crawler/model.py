# src/crawler/model.py (Document Layer)
from pathlib import Path
from typing import Optional

from pydantic import BaseModel


class PageSource(BaseModel):
    """
    One logical page, known on both sides: a file in the build directory and
    the URL it is served from. HTML is None while unread, or when a side has none.
    """
    relative_path: str
    url: str
    local_path: Path
    local_html: Optional[str] = None
    remote_html: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.local_html is not None and self.remote_html is not None


class FetchSettings(BaseModel):
    concurrency: int = 10
    timeout: int = 30
    user_agent: Optional[str] = None
