"""Callbacks invoked by the OAuth gateway and the admin settings page.

Inputs are validated with pydantic; a payload that does not validate raises
``SocialMetaError(INVALID_INPUT)``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from socialmeta.errors import ErrorCode, SocialMetaError
from socialmeta.models.callbacks import AppSettingsOutput, SaveAppDataInput, SyncPagesInput

if TYPE_CHECKING:
    from socialmeta.state import AppState

log = structlog.get_logger()

HIDDEN_TOKEN = "(hidden)"


def _validation_error(exc: ValidationError) -> SocialMetaError:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return SocialMetaError(ErrorCode.INVALID_INPUT, f"{location}: {first['msg']}")


async def sync_pages(state: AppState, data: Any) -> bool:
    """Replace the page registry with *data*.

    An empty or missing list deletes the registry and returns False, which the
    settings page reports as "choose at least one page".
    """
    try:
        payload = SyncPagesInput.model_validate({"data": data or None})
    except ValidationError as exc:
        raise _validation_error(exc) from exc

    if not payload.data:
        await state.pages.clear()
        return False

    await state.pages.replace(payload.data)
    return True


async def get_page_options(state: AppState) -> list[dict[str, Any]]:
    """The page registry with every access token replaced by a placeholder."""
    pages = await state.pages.all()
    return [page.model_copy(update={"access_token": HIDDEN_TOKEN}).model_dump() for page in pages]


async def save_app_data(state: AppState, data: dict[str, Any]) -> bool:
    try:
        payload = SaveAppDataInput.model_validate(data)
    except ValidationError as exc:
        raise _validation_error(exc) from exc

    await state.app_config.save(payload.app_id, payload.app_secret, payload.gateway_url)
    return True


async def get_app_settings(state: AppState) -> AppSettingsOutput:
    """Values the settings page needs to start the OAuth flow."""
    config = await state.app_config.load()
    if config.use_gateway:
        gateway_url = config.gateway_url
    else:
        gateway_url = state.settings.gateway.local_url
    return AppSettingsOutput(
        app_id=config.app_id,
        gateway_url=gateway_url,
        use_gateway=config.use_gateway,
    )


async def clear_cache(state: AppState) -> bool:
    await state.cache.clear()
    return True
