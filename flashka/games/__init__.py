"""
Games module - Deployment presets and artwork selection.

- Variants: board size, attempt limits, persistence and tracking rules
- Ad packs: weekday sponsor artwork for the card faces
"""

from .variants import GameVariant, VARIANTS, get_variant
from .adpack import AdPack, select_ad_pack, choose_base, build_ad_pack

__all__ = [
    "GameVariant",
    "VARIANTS",
    "get_variant",
    "AdPack",
    "select_ad_pack",
    "choose_base",
    "build_ad_pack",
]
