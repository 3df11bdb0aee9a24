"""
Tests for ad-pack selection and variants.
"""

from datetime import datetime, timezone

import pytest

from ..games.adpack import build_ad_pack, choose_base, select_ad_pack, weekday_pack_number
from ..games.variants import VARIANTS, get_variant


class TestWeekdayRotation:

    def test_monday_is_ad1(self):
        # 2024-01-01 was a Monday; 02:00 UTC is midday in Brisbane
        now = datetime(2024, 1, 1, 2, 0, tzinfo=timezone.utc)
        assert weekday_pack_number(now) == 1
        assert choose_base(now=now) == "/ad1"

    def test_brisbane_day_not_utc_day(self):
        """Sunday 20:00 UTC is already Monday in Brisbane (UTC+10)."""
        now = datetime(2024, 1, 7, 20, 0, tzinfo=timezone.utc)
        assert choose_base(now=now) == "/ad1"

    def test_sunday_is_ad7(self):
        now = datetime(2024, 1, 7, 2, 0, tzinfo=timezone.utc)
        assert choose_base(now=now) == "/ad7"


class TestOverrides:

    def test_ad_number(self):
        assert choose_base(ad="5") == "/ad5"

    def test_bad_ad_number_falls_through(self):
        now = datetime(2024, 1, 3, 2, 0, tzinfo=timezone.utc)  # Wednesday
        assert choose_base(ad="9", now=now) == "/ad3"

    def test_named_pack_lowercased(self):
        assert choose_base(pack="AD3") == "/ad3"

    def test_custom_pack_path(self):
        assert choose_base(pack="/ads/remy") == "/ads/remy"

    def test_ad_beats_pack(self):
        assert choose_base(ad="2", pack="ad6") == "/ad2"

    def test_ad_number_with_trailing_newline_ignored(self):
        now = datetime(2024, 1, 3, 2, 0, tzinfo=timezone.utc)  # Wednesday
        assert choose_base(ad="5\n", now=now) == "/ad3"

    def test_named_pack_with_trailing_newline_is_custom_path(self):
        assert choose_base(pack="AD3\n") == "/AD3\n"


class TestPackContents:

    def test_ad1_image8_is_jpg(self):
        pack = build_ad_pack("/ad1")

        assert pack.front == "/ad1/logo.png"
        assert len(pack.images) == 10
        assert pack.images[7] == "/ad1/8.jpg"
        assert pack.images[6] == "/ad1/7.png"

    def test_other_packs_all_png(self):
        pack = select_ad_pack(ad="4")
        assert all(url.endswith(".png") for url in pack.images)

    def test_face_map_stable(self):
        pack = build_ad_pack("/ad2")
        faces = pack.face_map(8)

        assert faces == pack.face_map(8)
        assert faces[1] == "/ad2/1.png"
        assert len(faces) == 8

    def test_face_map_too_big(self):
        with pytest.raises(ValueError):
            build_ad_pack("/ad2").face_map(11)


class TestVariantPresets:

    @pytest.mark.parametrize("name,pairs", [("classic", 8), ("mini", 4), ("kiosk", 10)])
    def test_presets(self, name, pairs):
        variant = get_variant(name)
        assert variant.pair_count == pairs
        assert 0.6 <= variant.mismatch_delay <= 1.0

    def test_classic_matches_kiosk_script(self):
        classic = VARIANTS["classic"]
        assert classic.max_attempts == 17
        assert not classic.lock_after_play

    def test_unknown_variant(self):
        with pytest.raises(ValueError):
            get_variant("mega")
