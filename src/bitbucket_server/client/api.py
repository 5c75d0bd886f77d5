"""Entry point for talking to a Bitbucket Server instance."""

import base64
import logging

import aiohttp
from pydantic import SecretStr
from yarl import URL

from . import AuthenticationConfigError
from . import BitbucketException
from . import EndpointConfigError
from .config import settings
from .file import FileApi
from .lib.utils import JSON_ACCEPT

logger = logging.getLogger(__name__)


def _reveal(value: SecretStr | str | None) -> str | None:
    if isinstance(value, SecretStr):
        return value.get_secret_value()
    return value


class BitbucketApi:
    """
    Scoped client for one Bitbucket Server endpoint.

    The client owns a single HTTP session that is shared by every call and
    released by `close()`. Use it as an async context manager so the session
    is closed on every exit path:

        async with BitbucketApi("https://bitbucket.example.com") as api:
            content = await api.file_api().raw("PRJ", "repo", "README.md")

    An existing `aiohttp.ClientSession` may be passed in; it is then used as
    the transport and closed together with the client. Ownership only passes
    to the client once construction succeeds: if `__init__` raises, the caller
    still owns the session and must close it.
    """

    def __init__(
        self,
        endpoint: str | None = None,
        token: SecretStr | str | None = None,
        username: str | None = None,
        password: SecretStr | str | None = None,
        api_version: str | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        """
        Initialize the client.

        Args:
            endpoint: Base URL of the server (defaults to settings)
            token: Personal access token (defaults to settings)
            username: Username for basic authentication (defaults to settings)
            password: Password for basic authentication (defaults to settings)
            api_version: REST API version (defaults to settings)
            session: Optional externally created HTTP session

        Raises:
            EndpointConfigError: If no endpoint is configured
            AuthenticationConfigError: If a username is given without a password
        """
        endpoint = endpoint or settings.bitbucket_endpoint
        if not endpoint:
            raise EndpointConfigError
        self.endpoint = endpoint.rstrip("/")
        self.api_version = api_version or settings.bitbucket_api_version
        self._token = _reveal(token if token is not None else settings.bitbucket_token)
        self._username = username if username is not None else settings.bitbucket_username
        self._password = _reveal(password if password is not None else settings.bitbucket_password)
        self._auth_headers = self.get_auth_headers()
        self._session = session
        self._closed = False
        self._file_api: FileApi | None = None

    def get_auth_headers(self) -> dict[str, str]:
        """
        Get authentication headers for HTTP requests.

        Priority: token authentication > basic authentication > anonymous

        Returns:
            Dictionary with the Authorization header, empty when anonymous

        Raises:
            AuthenticationConfigError: If a username is configured without a password
        """
        if self._token:
            return {"Authorization": f"Bearer {self._token}"}

        if self._username:
            if not self._password:
                raise AuthenticationConfigError
            credentials = f"{self._username}:{self._password}"
            encoded = base64.b64encode(credentials.encode()).decode()
            return {"Authorization": f"Basic {encoded}"}

        logger.debug("no credentials configured, using anonymous access")
        return {}

    def get_session(self) -> aiohttp.ClientSession:
        """Return the shared HTTP session, creating it on first use."""
        if self._closed:
            raise BitbucketException("BitbucketApi is closed")
        if self._session is None:
            timeout = aiohttp.ClientTimeout(
                total=settings.http_timeout_total,
                connect=settings.http_timeout_connect,
                sock_read=settings.http_timeout_sock_read,
            )
            connector = aiohttp.TCPConnector(ssl=settings.ssl_verify)
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": settings.user_agent},
                connector=connector,
                timeout=timeout,
            )
        return self._session

    def build_url(self, path: str) -> str:
        """
        Build a URL relative to the endpoint root.

        Args:
            path: Path below the endpoint

        Returns:
            Full URL
        """
        path = path.lstrip("/")
        return f"{self.endpoint}/{path}"

    def rest_url(self, path: str) -> str:
        """Build a URL relative to the versioned REST root."""
        path = path.lstrip("/")
        return self.build_url(f"rest/api/{self.api_version}/{path}")

    async def request(
        self,
        method: str,
        url: str,
        params: dict | None = None,
        data: aiohttp.FormData | None = None,
        accept: str = JSON_ACCEPT,
    ) -> tuple[int, str]:
        """
        Send a single request and read the whole body.

        Args:
            method: HTTP method
            url: Full URL
            params: Query parameters
            data: Optional request body
            accept: Value of the Accept header

        Returns:
            Tuple of status code and body text
        """
        session = self.get_session()
        headers = {"Accept": accept, **self._auth_headers}
        logger.debug(f"{method} {url} params={params}")
        # already percent-encoded, aiohttp must not parse it again
        target = URL(url, encoded=True)
        async with session.request(method, target, params=params, data=data, headers=headers) as response:
            body = await response.text()
            logger.debug(f"{method} {url} returned {response.status}")
            return response.status, body

    def file_api(self) -> FileApi:
        if self._file_api is None:
            self._file_api = FileApi(self)
        return self._file_api

    async def close(self) -> None:
        """Release the HTTP session. Safe to call more than once."""
        self._closed = True
        if self._session is not None:
            session, self._session = self._session, None
            await session.close()

    async def __aenter__(self) -> "BitbucketApi":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
