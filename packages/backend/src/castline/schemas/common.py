"""Shared schema pieces: camelCase config and the result envelope."""

from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

# Wire format is camelCase (podcastId, episodeId, ownerId); Python stays snake_case.
CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class CamelModel(BaseModel):
    model_config = CAMEL


class CoreOutput(CamelModel):
    """Every operation's result: ``ok`` plus an error message when it isn't."""

    ok: bool
    error: Optional[str] = None


class CreatedOutput(CoreOutput):
    id: Optional[int] = None
