"""
Flashka - Memory Match Kiosk

A promotional flip-card memory game and the small server that hosts it.
The package provides:
- A deterministic turn resolver over a shuffled deck of pairs
- A session controller that talks to storage, tracking and renderers
- Game variants and weekday ad-pack selection
- A static file server with image upload/shuffle admin endpoints
"""

__version__ = "0.1.0"
