"""
Ad Packs - Which sponsor artwork the board shows today.

Packs live in folders /ad1 .. /ad7 under the public directory, one per
weekday (Monday = ad1) in Brisbane time. Query overrides:
    ad=5            -> /ad5
    pack=ad3        -> /ad3
    pack=ads/remy   -> /ads/remy   (custom folder)

Each pack holds logo.png plus 1.png .. 10.png. The legacy ad1 pack
ships image 8 as a .jpg.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from zoneinfo import ZoneInfo
import re

DEFAULT_TIMEZONE = "Australia/Brisbane"
PACK_IMAGE_COUNT = 10

_AD_NUMBER = re.compile(r"[1-7]")
_AD_PACK = re.compile(r"ad[1-7]", re.IGNORECASE)


@dataclass
class AdPack:
    """Resolved artwork URLs for one pack."""
    base: str
    front: str
    images: list[str] = field(default_factory=list)

    def face_map(self, pair_count: int) -> dict[int, str]:
        """Stable identifier -> image URL mapping for a board."""
        if pair_count > len(self.images):
            raise ValueError(
                f"Pack {self.base} has {len(self.images)} images, board needs {pair_count}"
            )
        return {i: self.images[i - 1] for i in range(1, pair_count + 1)}


def weekday_pack_number(now: datetime | None = None, tz: str = DEFAULT_TIMEZONE) -> int:
    """Monday -> 1 ... Sunday -> 7, in the given timezone."""
    zone = ZoneInfo(tz)
    local = now.astimezone(zone) if now else datetime.now(zone)
    return local.isoweekday()


def choose_base(
    ad: str | None = None,
    pack: str | None = None,
    now: datetime | None = None,
    tz: str = DEFAULT_TIMEZONE,
) -> str:
    """Pick the pack folder, honouring overrides before the weekday rotation."""
    if ad and _AD_NUMBER.fullmatch(ad):
        return f"/ad{ad}"

    if pack:
        if _AD_PACK.fullmatch(pack):
            return f"/{pack.lower()}"
        return "/" + pack.lstrip("/")

    return f"/ad{weekday_pack_number(now, tz)}"


def build_ad_pack(base: str, image_count: int = PACK_IMAGE_COUNT) -> AdPack:
    """Build the URL set for a pack folder."""
    ext8 = ".jpg" if base == "/ad1" else ".png"
    images = []
    for i in range(1, image_count + 1):
        ext = ext8 if i == 8 else ".png"
        images.append(f"{base}/{i}{ext}")
    return AdPack(base=base, front=f"{base}/logo.png", images=images)


def select_ad_pack(
    ad: str | None = None,
    pack: str | None = None,
    now: datetime | None = None,
    tz: str = DEFAULT_TIMEZONE,
) -> AdPack:
    """Choose today's pack (or the override) and resolve its URLs."""
    return build_ad_pack(choose_base(ad=ad, pack=pack, now=now, tz=tz))
