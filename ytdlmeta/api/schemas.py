"""Pydantic schemas for API responses"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ytdlmeta.external_ids import build_links
from ytdlmeta.media.images.local_images import LocalImageInfo
from ytdlmeta.media.items import Episode, MediaItem
from ytdlmeta.media.providers.base import MetadataResult, PersonInfo


class PersonResponse(BaseModel):
    name: Optional[str] = None
    job: str = ""
    provider_ids: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_person(cls, person: PersonInfo) -> "PersonResponse":
        return cls(name=person.name, job=person.job, provider_ids=dict(person.provider_ids))


class ItemResponse(BaseModel):
    media_type: str
    path: Optional[str] = None
    name: Optional[str] = None
    overview: Optional[str] = None
    provider_ids: dict[str, Optional[str]] = Field(default_factory=dict)
    links: dict[str, str] = Field(default_factory=dict)
    production_year: Optional[int] = None
    premiere_date: Optional[datetime] = None
    tags: list[str] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)

    # Episode fields
    series_name: Optional[str] = None
    season_number: Optional[int] = None
    episode_number: Optional[int] = None

    @classmethod
    def from_item(cls, item: MediaItem) -> "ItemResponse":
        response = cls(
            media_type=item.media_type.value,
            path=item.path,
            name=item.name,
            overview=item.overview,
            provider_ids=dict(item.provider_ids),
            links=build_links(item.provider_ids),
            production_year=item.production_year,
            premiere_date=item.premiere_date,
            tags=list(item.tags),
            genres=list(item.genres),
        )
        if isinstance(item, Episode):
            response.series_name = item.series_name
            response.season_number = item.parent_index_number
            response.episode_number = item.index_number
        return response


class MetadataResponse(BaseModel):
    has_metadata: bool
    item: Optional[ItemResponse] = None
    people: list[PersonResponse] = Field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def from_result(cls, result: MetadataResult) -> "MetadataResponse":
        return cls(
            has_metadata=result.has_metadata,
            item=ItemResponse.from_item(result.item) if result.item is not None else None,
            people=[PersonResponse.from_person(p) for p in result.people],
            error=result.error,
        )


class ImageResponse(BaseModel):
    path: str
    image_type: str
    width: int
    height: int

    @classmethod
    def from_image(cls, image: LocalImageInfo) -> "ImageResponse":
        return cls(
            path=image.path,
            image_type=image.image_type.value,
            width=image.width,
            height=image.height,
        )


class ImagesResponse(BaseModel):
    images: list[ImageResponse] = Field(default_factory=list)


class ChangedResponse(BaseModel):
    changed: bool
    sidecar_path: str
