from pydantic import BaseModel, Field
from typing import List

from urwarden.schemas.result_schemas import Result


class CheckRequest(BaseModel):
    url: str


class BatchCheckRequest(BaseModel):
    urls: List[str] = Field(..., min_length=1)


class BatchError(BaseModel):
    """A URL from a batch that could not be classified."""
    input_url: str
    error: str


class BatchCheckResponse(BaseModel):
    results: List[Result]
    errors: List[BatchError]


class BlocklistStats(BaseModel):
    path: str
    size: int
