from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ConfigFile(BaseModel):
    """The structure of a tikibase.json file."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_url: Optional[str] = Field(default=None, alias="$schema")
    bidi_links: Optional[bool] = Field(
        default=None,
        alias="bidiLinks",
        description="whether links between documents must go both ways",
    )
    ignore: Optional[List[str]] = Field(
        default=None,
        description="glob patterns of files to skip",
    )
    require_links: Optional[bool] = Field(
        default=None,
        alias="requireLinks",
        description="whether every document must contain at least one link",
    )
    sections: Optional[List[str]] = Field(
        default=None,
        description="allowed section titles, in the order they must appear",
    )
    title_regex: Optional[str] = Field(
        default=None,
        alias="titleRegex",
        description="regular expression with one capture group that shortens titles in occurrences sections",
    )


def config_json_schema() -> dict[str, object]:
    return ConfigFile.model_json_schema(by_alias=True)
