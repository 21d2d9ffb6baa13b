import base64
import binascii
from typing import Optional

from fastapi.security import HTTPBasicCredentials
from fastapi.security.utils import get_authorization_scheme_param
from starlette.requests import HTTPConnection


def extract_credentials(request: HTTPConnection) -> Optional[HTTPBasicCredentials]:
    """
    Read a Basic credential pair from the Authorization header.

    Returns None when the header is missing, uses another scheme, is not valid
    base64/UTF-8, or has no ':' separator. Never raises: a missing or broken
    header is an ordinary unauthenticated request.

    The username is everything before the first ':' and the password is the
    rest, so passwords may themselves contain ':'.
    """
    authorization = request.headers.get("Authorization")
    scheme, param = get_authorization_scheme_param(authorization)
    if not authorization or scheme.lower() != "basic" or not param:
        return None

    try:
        decoded = base64.b64decode(param.strip(), validate=True).decode("utf-8")
    except (ValueError, UnicodeDecodeError, binascii.Error):
        return None

    username, separator, password = decoded.partition(":")
    if not separator:
        return None
    return HTTPBasicCredentials(username=username, password=password)
