"""External id link templates for the canonical provider keys."""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from ytdlmeta.media.items import MediaItem, supports


@dataclass(frozen=True)
class ExternalId:
    """How the host links a provider id to a web page."""

    provider_name: str
    key: str
    url_format: str

    def url_for(self, external_id: str) -> str:
        return self.url_format.format(external_id)

    def supports(self, item: Optional[MediaItem]) -> bool:
        return supports(item)


YOUTUBE = ExternalId(
    provider_name="YouTube",
    key="Youtube",
    url_format="https://www.youtube.com/watch?v={0}",
)

NRK = ExternalId(
    provider_name="NRK",
    key="NRK",
    url_format="https://tv.nrk.no/program/{0}",
)

EXTERNAL_IDS: Mapping[str, ExternalId] = {ext.key: ext for ext in (YOUTUBE, NRK)}


def build_links(provider_ids: Mapping[str, Optional[str]]) -> Dict[str, str]:
    """
    Build web links for the provider ids that have a known template.

    Args:
        provider_ids: Provider ids of an item.

    Returns:
        Mapping of provider name to URL.
    """
    links: Dict[str, str] = {}
    for key, value in provider_ids.items():
        external = EXTERNAL_IDS.get(key)
        if external is not None and value:
            links[external.provider_name] = external.url_for(value)
    return links
