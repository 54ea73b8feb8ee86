"""
User CRUD endpoints.

Endpoints:
    GET     /users       - List all users
    GET     /users/{id}  - Get a user
    POST    /users       - Create a user
    PUT     /users/{id}  - Replace name and email of a user
    DELETE  /users/{id}  - Delete a user
    OPTIONS /users, /users/{id} - CORS preflight (204)

Check order is fixed so error responses are deterministic:
body decoding -> name -> email -> id parsing -> store call.
Bodies are read and decoded by hand (not as FastAPI body params) so that
this order holds and errors use the {"error": ...} shape.
"""

import re

from fastapi import APIRouter, Depends, Request, Response
from loguru import logger

from ..deps import get_user_repository
from ...errors import InvalidUserID, UserNotFound
from ...models import User, UserPayload
from ...services.repositories import UserRepository
from ...utils.validators import validate_user

router = APIRouter(tags=["users"])

USER_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
MAX_USER_ID = 2**63 - 1
MAX_USER_ID_DIGITS = len(str(MAX_USER_ID))


def parse_user_id(raw: str) -> int:
    """
    Parse a path id as a positive base-10 integer.

    Raises:
        InvalidUserID: If not an integer, not positive, or beyond 64 bits
    """
    if USER_ID_PATTERN.fullmatch(raw) is None:
        raise InvalidUserID()
    # leading zeros are allowed, so bound the significant digits before int()
    if len(raw.lstrip("+-").lstrip("0")) > MAX_USER_ID_DIGITS:
        raise InvalidUserID()
    user_id = int(raw)
    if user_id <= 0 or user_id > MAX_USER_ID:
        raise InvalidUserID()
    return user_id


# =============================================================================
# Collection
# =============================================================================


@router.get("/users", response_model=list[User])
async def list_users(
    repo: UserRepository = Depends(get_user_repository),
) -> list[User]:
    """List all users (empty list when there are none)."""
    return await repo.list()


@router.post("/users", response_model=User, status_code=201)
async def create_user(
    request: Request,
    repo: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Create a user.

    Returns:
        Created user including its generated id
    """
    payload = UserPayload.from_json(await request.body())
    name, email = validate_user(payload.name, payload.email)

    user = await repo.create(name, email)
    logger.info(f"User created: id={user.id}")
    return user


@router.options("/users", status_code=204)
async def users_preflight() -> Response:
    return Response(status_code=204, media_type="application/json")


# =============================================================================
# Item
# =============================================================================


@router.get("/users/{user_id}", response_model=User)
async def get_user(
    user_id: str,
    repo: UserRepository = Depends(get_user_repository),
) -> User:
    """Get a single user by id."""
    uid = parse_user_id(user_id)

    user = await repo.get(uid)
    if user is None:
        raise UserNotFound()
    return user


@router.put("/users/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    request: Request,
    repo: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Replace name and email of an existing user.

    The response echoes the submitted (trimmed) fields with the path id; the
    row is not read back from the store.
    """
    payload = UserPayload.from_json(await request.body())
    name, email = validate_user(payload.name, payload.email)
    uid = parse_user_id(user_id)

    user = await repo.update(uid, name, email)
    if user is None:
        raise UserNotFound()

    logger.info(f"User updated: id={uid}")
    return user


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    repo: UserRepository = Depends(get_user_repository),
) -> dict[str, str]:
    """Delete a user by id."""
    uid = parse_user_id(user_id)

    if not await repo.delete(uid):
        raise UserNotFound()

    logger.info(f"User deleted: id={uid}")
    return {"message": "User deleted successfully"}


@router.options("/users/{user_id}", status_code=204)
async def user_preflight(user_id: str) -> Response:
    return Response(status_code=204, media_type="application/json")
