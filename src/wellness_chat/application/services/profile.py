"""
application.services.profile - User profile management.

Registration, lookup, partial updates and onboarding completion.
Validation lives here so every adapter gets the same rules.
"""

from __future__ import annotations

import logging
from typing import Any

from wellness_chat.application.dto import CreateUserRequest
from wellness_chat.domain.entities import User
from wellness_chat.domain.exceptions import InvalidRecordError, UserNotFoundError
from wellness_chat.domain.ports import UserRepository

logger = logging.getLogger(__name__)

GENDERS = ("male", "female", "other")
ACTIVITY_LEVELS = (
    "sedentary",
    "lightly_active",
    "moderately_active",
    "very_active",
    "extremely_active",
)


def validate_profile_fields(fields: dict[str, Any]) -> None:
    """Raise InvalidRecordError for the first field that breaks a rule."""
    if "name" in fields and not str(fields["name"] or "").strip():
        raise InvalidRecordError("name must not be empty")
    if "email" in fields:
        email = str(fields["email"] or "")
        if "@" not in email or email.startswith("@") or email.endswith("@"):
            raise InvalidRecordError(f"invalid email address: {email!r}")
    if fields.get("age") is not None and int(fields["age"]) <= 0:
        raise InvalidRecordError(f"age must be positive, got {fields['age']}")
    for name in ("height", "weight"):
        if fields.get(name) is not None and float(fields[name]) <= 0:
            raise InvalidRecordError(f"{name} must be positive, got {fields[name]}")
    if fields.get("gender") is not None and fields["gender"] not in GENDERS:
        raise InvalidRecordError(f"gender must be one of {GENDERS}, got {fields['gender']!r}")
    level = fields.get("activity_level")
    if level is not None and level not in ACTIVITY_LEVELS:
        raise InvalidRecordError(f"activity_level must be one of {ACTIVITY_LEVELS}, got {level!r}")


class ProfileService:
    """Manages user profiles."""

    def __init__(self, user_repo: UserRepository):
        self._user_repo = user_repo

    async def register(self, request: CreateUserRequest) -> User:
        """Create a profile.

        Raises:
            InvalidRecordError:  on bad field values.
            DuplicateEmailError: if the email is already registered.
        """
        fields = {
            "name": request.name,
            "email": request.email,
            "age": request.age,
            "gender": request.gender,
            "height": request.height,
            "weight": request.weight,
            "activity_level": request.activity_level,
        }
        validate_profile_fields(fields)
        user = User(
            name=request.name.strip(),
            email=request.email.strip().lower(),
            age=request.age,
            gender=request.gender,
            height=request.height,
            weight=request.weight,
            activity_level=request.activity_level,
            goals=(request.goals or "").strip() or None,
        )
        created = await self._user_repo.create(user)
        logger.info("Registered user %d", created.id)
        return created

    async def get(self, user_id: int) -> User:
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def update(self, user_id: int, **changes: Any) -> User:
        """Apply a partial update. Only the given fields change."""
        validate_profile_fields(changes)
        if "email" in changes:
            changes["email"] = str(changes["email"]).strip().lower()
        updated = await self._user_repo.update(user_id, changes)
        if updated is None:
            raise UserNotFoundError(user_id)
        logger.debug("Updated user %d: %s", user_id, sorted(changes))
        return updated

    async def complete_onboarding(self, user_id: int) -> User:
        return await self.update(user_id, onboarding_completed=True)
