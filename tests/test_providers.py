from entinfo.models import WatchProvider
from entinfo.services.providers import match_quick_providers, quick_provider_url


def _provider(provider_id: int, name: str) -> WatchProvider:
    return WatchProvider(provider_id=provider_id, provider_name=name)


def test_known_providers_map_in_input_order():
    matched = match_quick_providers(
        [_provider(8, "Netflix"), _provider(350, "Apple TV+"), _provider(99, "UnknownCo")]
    )

    assert [(entry.name, entry.url) for entry in matched] == [
        ("Netflix", "https://www.netflix.com"),
        ("Apple TV+", "https://tv.apple.com"),
    ]


def test_duplicate_provider_ids_match_once():
    matched = match_quick_providers(
        [_provider(8, "Netflix"), _provider(8, "Netflix"), _provider(15, "Hulu")]
    )

    assert [entry.provider_id for entry in matched] == [8, 15]


def test_matches_are_capped_at_six():
    names = ["Netflix", "Hulu", "Disney Plus", "Peacock", "Starz", "Tubi TV", "Pluto TV"]
    matched = match_quick_providers(
        [_provider(index, name) for index, name in enumerate(names)]
    )

    assert len(matched) == 6
    assert matched[-1].name == "Tubi TV"


def test_first_table_entry_wins():
    assert quick_provider_url("Netflix basic with Ads") == "https://www.netflix.com"
    assert quick_provider_url("Amazon Prime Video") == "https://www.primevideo.com"
    assert quick_provider_url("HBO Max") == "https://www.max.com"
    assert quick_provider_url("Kanopy") is None
