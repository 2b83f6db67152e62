from entinfo.models import (
    MediaItem,
    Movie,
    TrendingItem,
    TVShow,
    WatchProvider,
    WatchProviderRegion,
)


def _provider(provider_id: int, name: str, priority: int | None) -> WatchProvider:
    return WatchProvider(
        provider_id=provider_id, provider_name=name, display_priority=priority
    )


def test_title_text_falls_back_to_untitled():
    item = MediaItem.from_movie(Movie(id=1, title="", overview="", vote_average=5))

    assert item.title_text == "Untitled"
    assert MediaItem.from_movie(Movie(id=2, title="Heat")).title_text == "Heat"


def test_trending_title_prefers_title_then_name():
    with_title = TrendingItem(id=1, media_type="movie", title="Alien", name="ignored")
    with_name = TrendingItem(id=2, media_type="tv", name="Severance")
    with_neither = TrendingItem(id=3, media_type="tv")

    assert MediaItem.from_trending(with_title).title_text == "Alien"
    assert MediaItem.from_trending(with_name).title_text == "Severance"
    assert MediaItem.from_trending(with_neither).title_text == "Untitled"
    assert MediaItem.from_trending(with_neither).overview == ""
    assert MediaItem.from_trending(with_neither).vote_average == 0.0


def test_key_distinguishes_media_types_sharing_an_id():
    film = MediaItem.from_movie(Movie(id=42, title="A"))
    series = MediaItem.from_tv(TVShow(id=42, name="B"))

    assert film.key == "movie-42"
    assert series.key == "tv-42"
    assert series.media_type_label == "TV Series"


def test_payload_includes_derived_fields():
    payload = MediaItem(id=5, title="", media_type="person").model_dump()

    assert payload["title_text"] == "Untitled"
    assert payload["media_type_label"] == "Person"
    assert payload["key"] == "person-5"


def test_providers_sort_stably_with_missing_priority_last():
    region = WatchProviderRegion(
        flatrate=[
            _provider(1, "Late", None),
            _provider(2, "First", 3),
            _provider(3, "Second", 5),
            _provider(4, "Tied", 3),
        ]
    )

    ordered = [provider.provider_name for provider in region.sorted_providers("flatrate")]

    assert ordered == ["First", "Tied", "Second", "Late"]
    assert region.sorted_providers("rent") == []


def test_all_providers_follow_offer_order():
    region = WatchProviderRegion(
        buy=[_provider(1, "Store", 1)],
        flatrate=[_provider(2, "Stream", 9)],
        ads=[_provider(3, "Free With Ads", 1)],
    )

    assert [provider.provider_id for provider in region.all_providers()] == [2, 3, 1]
    assert not region.is_empty()
    assert WatchProviderRegion().is_empty()
