"""Outcome of one run."""

from datetime import datetime
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from gistwatch.models.gist import Gist


class RunResult(BaseModel):
    """What a completed run found and did."""

    model_config = ConfigDict(frozen=True)

    watermark: datetime
    next_watermark: datetime
    gists: Tuple[Gist, ...] = Field(default_factory=tuple)
    report: str = ""
    dispatched: bool = False
    saved: bool = False
