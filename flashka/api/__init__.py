"""
API Module - HTTP surface of the kiosk.

Serves the static game site and the admin operations:
1. Upload card images
2. Shuffle image positions
3. Pick the day's ad pack
4. Receive play/win tracking calls

The game itself runs on the device; no board state lives on the server.
"""

from .service import AdminService, UploadRejected
from .app import create_app

__all__ = [
    "AdminService",
    "UploadRejected",
    "create_app",
]
