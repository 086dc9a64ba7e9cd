"""Google credentials for the workspace bridge.

Quick Start:
    ```python
    from workspace_bridge.auth import ApplicationDefaultCredentials

    credentials = ApplicationDefaultCredentials()
    token = await credentials.get_access_token()
    ```
"""

from workspace_bridge.auth.credentials import WORKSPACE_SCOPES, ApplicationDefaultCredentials

__all__ = ["ApplicationDefaultCredentials", "WORKSPACE_SCOPES"]
