"""
SMS Share - Deep link that opens the phone's message composer.
"""

from __future__ import annotations
from urllib.parse import quote


def compose_sms_link(message: str, recipient: str | None = None) -> str:
    """
    Build an sms: link with a prefilled body.

    "?&body=" is understood by both iOS and Android composers.
    """
    number = quote(recipient.strip(), safe="+") if recipient else ""
    return f"sms:{number}?&body={quote(message, safe='')}"
