import hmac
import os
from fastapi import Header, HTTPException
from medhelper.core.env import load_env
load_env()

def verify_internal_service(x_internal_key: str = Header(...)) -> None:
    """Guards routes that reach outside the service (remote catalog import)."""
    secret = os.getenv("INTERNAL_SERVICE_SECRET")
    if not secret:
        raise HTTPException(status_code=500, detail="Internal service secret not configured.")

    if not hmac.compare_digest(x_internal_key.encode(), secret.encode()):
        raise HTTPException(status_code=401, detail="Unauthorized service call.")
