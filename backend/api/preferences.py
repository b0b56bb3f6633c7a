"""
Preferences API Routes

Reads and updates the per-user encryption preferences. Submitted values
go through the same validation callbacks the preference form declares.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from api.dependencies import HooksDep, PreferencesDep, TokenDep
from preferences import ENABLE_OPTION, KEY_OPTION

logger = logging.getLogger(__name__)
router = APIRouter()

CALLBACK_FIELD = "validation-callback"


class PreferenceUpdate(BaseModel):
    enabled: bool
    key: str = ""


class PreferencesResponse(BaseModel):
    user: str
    fields: Dict[str, Dict[str, Any]]
    values: Dict[str, Any]


def _public_fields(definitions: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    return {
        name: {k: v for k, v in field.items() if k != CALLBACK_FIELD}
        for name, field in definitions.items()
    }


@router.get("/{user}", response_model=PreferencesResponse)
async def get_preferences(user: str, token: TokenDep, store: PreferencesDep, hooks: HooksDep):
    definitions = hooks.on_get_preferences(user, {})
    return PreferencesResponse(
        user=user,
        fields=_public_fields(definitions),
        values=store.get_options(user),
    )


@router.put("/{user}", response_model=PreferencesResponse)
async def update_preferences(
    user: str,
    update: PreferenceUpdate,
    token: TokenDep,
    store: PreferencesDep,
    hooks: HooksDep,
):
    definitions = hooks.on_get_preferences(user, {})
    submitted = {ENABLE_OPTION: update.enabled, KEY_OPTION: update.key}

    for name, field in definitions.items():
        callback = field.get(CALLBACK_FIELD)
        if callback is None:
            continue
        outcome = callback(submitted.get(name), submitted)
        if outcome is not True:
            logger.info("Rejected %s for user %s", name, user)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=outcome,
            )

    for name, value in submitted.items():
        store.set_option(user, name, value)

    return PreferencesResponse(
        user=user,
        fields=_public_fields(definitions),
        values=store.get_options(user),
    )
