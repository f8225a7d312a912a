
import asyncio

from google.auth.exceptions import GoogleAuthError
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

GOOGLE_PROVIDER = "google"


class GoogleProfile:
    def __init__(self, subject: str, email: str, name: str | None = None) -> None:
        self.subject = subject
        self.email = email.strip().lower()
        self.name = name


def _verify(token: str, client_id: str) -> dict:
    return id_token.verify_oauth2_token(token, google_requests.Request(), client_id)


async def verify_google_id_token(token: str, client_id: str) -> GoogleProfile | None:
    """Check signature, audience and expiry of a Google ID token.

    Returns None when the token is rejected or lacks the subject or email.
    The certificate fetch is blocking, so it runs in a worker thread.
    """
    try:
        claims = await asyncio.to_thread(_verify, token, client_id)
    except (ValueError, GoogleAuthError):
        return None
    subject, email = claims.get("sub"), claims.get("email")
    if not subject or not email:
        return None
    return GoogleProfile(subject=subject, email=email, name=claims.get("name"))
