from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer
from crewledger.core.config import settings
from crewledger.db.mongo import get_db
from crewledger.models.crew import CrewMember
from crewledger.repositories.crew_repo import CrewRepository

security = HTTPBearer()

def create_access_token(member_id: str, expires_delta: timedelta | None = None) -> str:
    """Create JWT access token for a crew member."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    now = datetime.now(timezone.utc)
    expire = now + expires_delta

    payload = {
        "sub": member_id,
        "exp": int(expire.timestamp()),
        "iat": int(now.timestamp())
    }

    return jwt.encode(
        payload,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )

def decode_access_token(token: str) -> str:
    """Return the crew member id carried by a token."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )

    member_id = payload.get("sub")
    if member_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )
    return member_id

async def get_current_member(
    credentials = Depends(security),
    db = Depends(get_db)
) -> CrewMember:
    """Get current crew member from JWT token."""
    member_id = decode_access_token(credentials.credentials)

    member = await CrewRepository(db).get(member_id)
    if member is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Crew member not found"
        )
    return member

async def require_captain(member: CrewMember = Depends(get_current_member)) -> CrewMember:
    """Only captains may award score points."""
    if not member.is_captain:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Captain privilege required"
        )
    return member
