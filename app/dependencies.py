import hmac
from typing import Optional

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader

from app.config import settings

# auto_error=False so a missing header gets the same 401 as a wrong one
operator_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def verify_api_key(api_key: Optional[str] = Security(operator_key_header)) -> str:
    """Operator endpoints share one key, sent in the X-API-Key header."""
    if api_key is None or not hmac.compare_digest(api_key.encode(), settings.API_KEY.encode()):
        raise HTTPException(
            status_code=401,
            detail="Invalid or missing API key",
            headers={"WWW-Authenticate": "APIKey"},
        )
    return api_key
