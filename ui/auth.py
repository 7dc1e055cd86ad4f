import os
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

basic_security = HTTPBasic()

API_USERNAME = os.environ.get("LIFE_API_USERNAME", "admin")
API_PASSWORD = os.environ.get("LIFE_API_PASSWORD", "admin123")


def verify_basic_auth(credentials: HTTPBasicCredentials = Depends(basic_security)):
    """Guard for routes that mutate the universe."""
    correct_username = secrets.compare_digest(credentials.username.encode(), API_USERNAME.encode())
    correct_password = secrets.compare_digest(credentials.password.encode(), API_PASSWORD.encode())
    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
