# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Default profile construction and the store-over-default merge policy."""

from pydantic import ValidationError

from learnhub.domains.identity.provider import IdentityHandle
from learnhub.domains.profile.store import Document, StoreError
from learnhub.models.user import UserProfile, UserRole
from learnhub.utils.datetime import utc_now_iso


def new_profile(uid: str, name: str = "", email: str = "") -> UserProfile:
    """Fresh profile: role user, empty collections, timestamps set to now."""
    now = utc_now_iso()
    return UserProfile(
        id=uid,
        name=name,
        email=email,
        role=UserRole.USER,
        created_at=now,
        last_active=now,
    )


def build_default_profile(handle: IdentityHandle) -> UserProfile:
    """Default profile for a signed-in principal.

    Missing display name or email become empty strings.
    """
    return new_profile(handle.uid, handle.display_name or "", handle.email or "")


def merge_profile(default: UserProfile, stored: Document) -> UserProfile:
    """Overlay a stored document onto the default skeleton.

    Stored fields win on every overlapping key; keys only the store knows are
    kept. The id always stays the default's (the signed-in subject id).

    Raises:
        StoreError: If the merged document is not a valid profile.
    """
    merged = {**default.to_document(), **stored, "id": default.id}
    try:
        return UserProfile.model_validate(merged)
    except ValidationError as e:
        raise StoreError(f"Stored profile {default.id} is malformed", e) from e
