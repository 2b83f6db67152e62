"""Quick-launch shortcuts for well known streaming providers."""

from __future__ import annotations

from typing import Iterable

from ..models import QuickProvider, WatchProvider

MAX_QUICK_PROVIDERS = 6

# Ordered: the first substring found in a provider's lowercased name wins.
QUICK_PROVIDER_URLS: tuple[tuple[str, str], ...] = (
    ("netflix", "https://www.netflix.com"),
    ("hulu", "https://www.hulu.com"),
    ("disney", "https://www.disneyplus.com"),
    ("apple tv", "https://tv.apple.com"),
    ("paramount", "https://www.paramountplus.com"),
    ("peacock", "https://www.peacocktv.com"),
    ("hbo", "https://www.max.com"),
    ("max", "https://www.max.com"),
    ("starz", "https://www.starz.com"),
    ("showtime", "https://www.sho.com"),
    ("crunchyroll", "https://www.crunchyroll.com"),
    ("tubi", "https://tubitv.com"),
    ("pluto", "https://pluto.tv"),
    ("youtube", "https://www.youtube.com"),
    ("prime video", "https://www.primevideo.com"),
    ("amazon", "https://www.amazon.com/gp/video/storefront"),
)


def quick_provider_url(provider_name: str) -> str | None:
    """Return the canonical website for a provider display name, if known."""

    lowered = provider_name.lower()
    for needle, url in QUICK_PROVIDER_URLS:
        if needle in lowered:
            return url
    return None


def match_quick_providers(
    providers: Iterable[WatchProvider], limit: int = MAX_QUICK_PROVIDERS
) -> list[QuickProvider]:
    """Map recognised providers to shortcuts, in input order.

    Each provider id is matched at most once and collection stops at ``limit``.
    """

    matched: list[QuickProvider] = []
    seen: set[int] = set()
    for provider in providers:
        if len(matched) >= limit:
            break
        if provider.provider_id in seen:
            continue
        url = quick_provider_url(provider.provider_name)
        if url is None:
            continue
        seen.add(provider.provider_id)
        matched.append(
            QuickProvider(
                provider_id=provider.provider_id,
                name=provider.provider_name,
                url=url,
                logo_path=provider.logo_path,
            )
        )
    return matched
