"""
Tests de generation des liens de visionnage.
"""

from src.core.entities.tracking import UserShow, WatchLinkSettings
from src.services.watch_links import generate_watch_url, generate_watch_url_with_overrides

PATTERN = "%dizi_adi%/%sezon%-sezon/%bolum%-bolum"


class TestGenerateWatchUrl:
    def test_substitutes_placeholders(self) -> None:
        url = generate_watch_url("https://site.tv/dizi", PATTERN, "Kuruluş Osman", 2, 5)
        assert url == "https://site.tv/dizi/kurulus-osman/2-sezon/5-bolum"

    def test_normalizes_slashes(self) -> None:
        url = generate_watch_url("https://site.tv/dizi///", "/" + PATTERN, "Dark", 1, 1)
        assert url == "https://site.tv/dizi/dark/1-sezon/1-bolum"

    def test_repeated_placeholders(self) -> None:
        url = generate_watch_url("https://x", "%dizi_adi%-%sezon%x%bolum%/%dizi_adi%", "Dark", 3, 8)
        assert url == "https://x/dark-3x8/dark"

    def test_incomplete_configuration_returns_none(self) -> None:
        assert generate_watch_url("", PATTERN, "Dark", 1, 1) is None
        assert generate_watch_url("https://x", "", "Dark", 1, 1) is None
        assert generate_watch_url("https://x", PATTERN, "", 1, 1) is None
        assert generate_watch_url("https://x", PATTERN, "Dark", None, 1) is None
        assert generate_watch_url("https://x", PATTERN, "Dark", 1, None) is None

    def test_zero_is_a_valid_number(self) -> None:
        assert generate_watch_url("https://x", PATTERN, "Dark", 0, 0) == "https://x/dark/0-sezon/0-bolum"


class TestOverrides:
    settings = WatchLinkSettings(user_id=1, base_url="https://site.tv", pattern=PATTERN)

    def test_without_user_show_uses_global_settings(self) -> None:
        url = generate_watch_url_with_overrides(self.settings, "Dark", 1, 2)
        assert url == "https://site.tv/dark/1-sezon/2-bolum"

    def test_custom_slug_is_used_verbatim(self) -> None:
        show = UserShow(user_id=1, tmdb_show_id=1, custom_slug="Dark_TR")
        url = generate_watch_url_with_overrides(self.settings, "Dark", 1, 2, show)
        assert url == "https://site.tv/Dark_TR/1-sezon/2-bolum"

    def test_custom_base_and_pattern(self) -> None:
        show = UserShow(
            user_id=1,
            tmdb_show_id=1,
            custom_base_url="https://other.tv/",
            custom_url_pattern="izle/%dizi_adi%-%sezon%-%bolum%",
        )
        url = generate_watch_url_with_overrides(self.settings, "Dark", 1, 2, show)
        assert url == "https://other.tv/izle/dark-1-2"

    def test_overrides_complete_missing_global_settings(self) -> None:
        empty = WatchLinkSettings(user_id=1, pattern=PATTERN)
        show = UserShow(user_id=1, tmdb_show_id=1, custom_base_url="https://o.tv")
        assert generate_watch_url_with_overrides(empty, "Dark", 1, 1, show) == (
            "https://o.tv/dark/1-sezon/1-bolum"
        )
        assert generate_watch_url_with_overrides(empty, "Dark", 1, 1) is None

    def test_no_settings(self) -> None:
        assert generate_watch_url_with_overrides(None, "Dark", 1, 1) is None
