"""Application-default credentials for Google Workspace APIs.

The bridge runs under a service identity (Cloud Run service account, a key
file named by GOOGLE_APPLICATION_CREDENTIALS, or gcloud user credentials),
resolved with ``google.auth.default``. Access tokens are refreshed on demand.
"""

import asyncio
import logging

import google.auth
from google.auth.credentials import Credentials
from google.auth.exceptions import DefaultCredentialsError, RefreshError
from google.auth.transport.requests import Request

from workspace_bridge.errors import CredentialsError

logger = logging.getLogger(__name__)

# Google Workspace OAuth scopes
WORKSPACE_SCOPES = [
    "https://www.googleapis.com/auth/documents",
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive.readonly",
]


class ApplicationDefaultCredentials:
    """Lazily resolved, auto-refreshing Google credentials.

    Attributes:
        scopes: OAuth scopes requested for the service identity.
        project_id: Project reported by google.auth, once resolved.

    Example:
        ```python
        credentials = ApplicationDefaultCredentials()
        token = await credentials.get_access_token()
        ```
    """

    def __init__(self, scopes: list[str] | None = None) -> None:
        self.scopes = scopes or WORKSPACE_SCOPES
        self.project_id: str | None = None
        self._credentials: Credentials | None = None
        self._lock = asyncio.Lock()

    def resolve(self) -> Credentials:
        """Resolve credentials from the environment.

        Returns:
            google-auth Credentials scoped for Workspace APIs.

        Raises:
            CredentialsError: If no application-default credentials exist.
        """
        if self._credentials is None:
            try:
                credentials, project_id = google.auth.default(scopes=self.scopes)
            except DefaultCredentialsError as e:
                raise CredentialsError(
                    "No Google credentials found. Attach a service account or set "
                    "GOOGLE_APPLICATION_CREDENTIALS."
                ) from e
            logger.info("Resolved Google credentials (project: %s)", project_id or "unknown")
            self._credentials = credentials
            self.project_id = project_id
        return self._credentials

    async def get_access_token(self) -> str:
        """Get a valid access token, refreshing if necessary.

        Returns:
            Bearer access token.

        Raises:
            CredentialsError: If credentials are missing or refresh fails.
        """
        loop = asyncio.get_running_loop()
        async with self._lock:
            # Discovery may probe the metadata server; keep it off the event loop
            credentials = await loop.run_in_executor(None, self.resolve)
            if not credentials.valid:
                logger.info("Access token missing or expired, refreshing...")
                # Run refresh in executor (blocking)
                try:
                    await loop.run_in_executor(None, credentials.refresh, Request())
                except RefreshError as e:
                    raise CredentialsError(f"Token refresh failed: {e}") from e
            return credentials.token
