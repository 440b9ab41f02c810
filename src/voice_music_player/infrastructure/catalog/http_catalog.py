"""httpx client for the remote music catalog API."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from voice_music_player.application.interfaces.remote_catalog import RemoteCatalog
from voice_music_player.config.settings import CatalogSettings
from voice_music_player.domain.catalog.entities import (
    ActivityStreamPage,
    CatalogUser,
    TrackDetail,
    TrackPage,
)
from voice_music_player.domain.catalog.exceptions import RemoteFetchError, TrackNotStreamableError
from voice_music_player.domain.playback.value_objects import TrackReference
from voice_music_player.domain.shared.constants import CatalogEndpoints, CatalogParams
from voice_music_player.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class HttpRemoteCatalog(RemoteCatalog):
    """Catalog adapter issuing one request per call, without retries.

    Continuation cursors are the absolute ``next_href`` URLs handed out by the
    catalog; the client id is merged into every request's query string.
    """

    def __init__(
        self,
        settings: CatalogSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or CatalogSettings()
        self._client = http_client
        self._owns_client = http_client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client

        self._client = httpx.AsyncClient(timeout=self._settings.timeout_s)
        logger.info(
            LogTemplates.CATALOG_CLIENT_CREATED, self._settings.api_base_url, self._settings.timeout_s
        )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            logger.info(LogTemplates.CATALOG_CLIENT_CLOSED)
        self._client = None

    # === Pages ===

    async def fetch_page(self, cursor: str) -> TrackPage:
        payload = await self._get_json(cursor)
        return self._decode(TrackPage, cursor, payload)

    async def fetch_stream_page(self, cursor: str, auth_token: str) -> ActivityStreamPage:
        payload = await self._get_json(cursor, auth_token=auth_token)
        return self._decode(ActivityStreamPage, cursor, payload)

    async def get_favorites(self, auth_token: str) -> TrackPage:
        url = self._endpoint(CatalogEndpoints.FAVORITES)
        payload = await self._get_json(
            url, auth_token=auth_token, params={CatalogParams.LINKED_PARTITIONING: "1"}
        )
        return self._decode(TrackPage, url, payload)

    async def get_activity_stream(self, auth_token: str) -> ActivityStreamPage:
        url = self._endpoint(CatalogEndpoints.ACTIVITY_STREAM)
        payload = await self._get_json(url, auth_token=auth_token)
        return self._decode(ActivityStreamPage, url, payload)

    # === Tracks ===

    async def resolve_track(self, reference: TrackReference) -> TrackDetail:
        url = reference.value
        payload = await self._get_json(url)
        return self._decode(TrackDetail, url, payload)

    async def to_playable_url(self, track: TrackDetail) -> str:
        """Ask for the track's stream and return where the catalog redirects to."""
        reference = track.reference.value
        if not track.streamable or track.stream_url is None:
            raise TrackNotStreamableError(track.uri, reference)

        url = track.stream_url
        response = await self._send(url, follow_redirects=False)

        location = response.headers.get(CatalogParams.LOCATION)
        if not response.is_redirect or not location:
            raise TrackNotStreamableError(url, reference, status=response.status_code)

        logger.debug(LogTemplates.CATALOG_STREAM_REDIRECT, reference)
        return location

    # === Feedback ===

    async def like_track(self, auth_token: str, track: TrackDetail) -> None:
        url = self._endpoint(CatalogEndpoints.FAVORITE_TRACK.format(track_id=track.id))
        response = await self._send(url, method="PUT", auth_token=auth_token)
        self._raise_for_status(url, response)
        logger.info(LogTemplates.CATALOG_TRACK_LIKED, track.reference)

    async def follow_user(self, auth_token: str, user: CatalogUser) -> bool:
        url = self._endpoint(CatalogEndpoints.FOLLOWING.format(user_id=user.id))

        # The followings entry answers 404 until the user is followed.
        lookup = await self._send(url, auth_token=auth_token)
        if lookup.is_success:
            logger.info(LogTemplates.CATALOG_ALREADY_FOLLOWING, user.username)
            return False
        if lookup.status_code != httpx.codes.NOT_FOUND:
            self._raise_for_status(url, lookup)

        response = await self._send(url, method="PUT", auth_token=auth_token)
        self._raise_for_status(url, response)
        logger.info(LogTemplates.CATALOG_USER_FOLLOWED, user.username)
        return True

    # === Helpers ===

    def _endpoint(self, path: str) -> str:
        return f"{self._settings.api_base_url}{path}"

    async def _send(
        self,
        url: str,
        *,
        method: str = "GET",
        auth_token: str | None = None,
        params: dict[str, str] | None = None,
        follow_redirects: bool = True,
    ) -> httpx.Response:
        merged = {CatalogParams.CLIENT_ID: self._settings.client_id.get_secret_value()}
        if params:
            merged.update(params)

        headers: dict[str, str] = {}
        if auth_token:
            headers[CatalogParams.AUTHORIZATION] = f"{CatalogParams.OAUTH_PREFIX} {auth_token}"

        logger.debug(LogTemplates.CATALOG_REQUEST, method, url)
        try:
            request_url = httpx.URL(url).copy_merge_params(merged)
            return await self._get_client().request(
                method, request_url, headers=headers, follow_redirects=follow_redirects
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RemoteFetchError(
                url, ErrorMessages.REMOTE_REQUEST_FAILED.format(url=url, reason=e)
            ) from e

    async def _get_json(
        self,
        url: str,
        *,
        auth_token: str | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        response = await self._send(url, auth_token=auth_token, params=params)
        self._raise_for_status(url, response)

        try:
            return response.json()
        except ValueError as e:
            raise RemoteFetchError(
                url, ErrorMessages.REMOTE_BAD_PAYLOAD.format(url=url), status=response.status_code
            ) from e

    def _raise_for_status(self, url: str, response: httpx.Response) -> None:
        if not response.is_success:
            raise RemoteFetchError(
                url,
                ErrorMessages.REMOTE_BAD_STATUS.format(url=url, status=response.status_code),
                status=response.status_code,
            )

    def _decode(self, model: type[ModelT], url: str, payload: Any) -> ModelT:
        try:
            return model.model_validate(payload)
        except PydanticValidationError as e:
            raise RemoteFetchError(url, ErrorMessages.REMOTE_BAD_PAYLOAD.format(url=url)) from e
