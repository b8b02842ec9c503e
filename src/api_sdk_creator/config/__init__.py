"""Configuration resolution for SDK pipelines.

Example:
    ```python
    from api_sdk_creator.config import CredentialResolver

    resolver = CredentialResolver()
    api_key = resolver.resolve(env_var_name="API_KEY", required=True)
    ```
"""

from api_sdk_creator.config.credentials import CredentialResolver

__all__ = ["CredentialResolver"]
