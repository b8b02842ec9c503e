"""Multi-source configuration resolution for SDK pipelines.

SDK authors usually need a few values at pipeline assembly time: an API key
for a header, a client name, a base URL. This module resolves such values
from multiple sources with priority ordering and fallbacks.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv)
4. Default value

A missing required value is returned as an `SdkError` of kind
`configuration` rather than raised, so it can flow straight into a header
stage and fail every request through that pipeline.

Example:
    ```python
    from api_sdk_creator.config import CredentialResolver

    resolver = CredentialResolver()

    api_key = resolver.resolve(env_var_name="MY_API_KEY", required=True)
    # Success("...") or Failure(SdkError(ErrorKind.CONFIGURATION, ...))

    api_key = resolver.resolve_from_file(
        file_path="~/.config/myapp/api_key",
        env_var_name="MY_API_KEY_FILE",  # Path can come from env var
    )
    ```

Security Considerations:
    - Credentials are never logged in full (masked with ***)
    - Only source information is logged (env var name, file path, etc.)
    - File-based credentials have whitespace stripped
    - Thread-safe dotenv loading with lock
"""

import logging
import os
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from api_sdk_creator.either import Either, Failure, Success
from api_sdk_creator.errors.models import ErrorKind, SdkError

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Resolve configuration values from multiple sources with priority ordering.

    Explicitly provided values take precedence over environment variables,
    which take precedence over .env file values, which finally take
    precedence over defaults.

    Attributes:
        _dotenv_loaded: Whether .env file has been loaded.
        _dotenv_lock: Thread lock for safe dotenv loading.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """Initialize the resolver.

        Args:
            dotenv_path: Path to .env file. If None, searches parent directories
                for .env file (default behavior of python-dotenv).
            load_dotenv: Whether to load .env file. Set to False to skip
                .env file loading (useful for testing or when not using .env).
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        """Ensure .env file is loaded once (thread-safe)."""
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            # Double-check pattern for thread safety
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for credential resolution")
            except Exception as e:
                # Continue without .env
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def _mask_credential(self, value: str | None) -> str:
        """Mask a credential value for safe logging."""
        if value is None:
            return "None"
        return "***"

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> Either[str | None]:
        """Resolve a value from multiple sources.

        Resolution order (first match wins):
        1. Explicitly provided `value` parameter
        2. Environment variable (if `env_var_name` provided), which includes
           values loaded from the .env file
        3. Default value (if `default` provided)
        4. None (if not required) or a configuration error (if required)

        Args:
            value: Explicitly provided value (highest priority).
            env_var_name: Environment variable name to check.
            default: Default value if not found elsewhere.
            required: If True, a missing value is a configuration error.
            mask_in_logs: If True (default), masks values in log messages.
                Disable for non-sensitive values.

        Returns:
            Success with the value (None if not found and not required), or
            Failure with a configuration SdkError.
        """
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            shown = self._mask_credential(result) if mask_in_logs else result
            logger.debug(f"Resolved credential from {source}: {shown}")

        if required and result is None:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            return Failure(SdkError(ErrorKind.CONFIGURATION, error_msg))

        return Success(result)

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> Either[str | None]:
        """Resolve a value from a file.

        Supports `~` expansion and `$VAR` substitution in the path, which can
        be given directly or read from an environment variable. The file
        contents are stripped of leading/trailing whitespace.

        Args:
            file_path: Path to file containing the value.
            env_var_name: Environment variable containing the file path, used
                when `file_path` is None.
            required: If True, an unreadable or missing file is a
                configuration error.

        Returns:
            Success with the file contents (None if unavailable and not
            required), or Failure with a configuration SdkError.
        """
        path_to_use = None

        if file_path is not None:
            path_to_use = str(file_path)
        elif env_var_name:
            path_to_use = self.resolve(env_var_name=env_var_name).get_or_none()

        if not path_to_use:
            if required:
                error_msg = "No file path provided for credential resolution"
                if env_var_name:
                    error_msg += f" (env var '{env_var_name}' not set)"
                return Failure(SdkError(ErrorKind.CONFIGURATION, error_msg))
            return Success(None)

        path_obj = Path(os.path.expanduser(os.path.expandvars(path_to_use)))

        try:
            content = path_obj.read_text().strip()
            logger.debug(f"Resolved credential from file: {path_obj} (***)")
            return Success(content)

        except FileNotFoundError as e:
            error_msg = f"Credential file not found: {path_obj}"
            if required:
                return Failure(SdkError(ErrorKind.CONFIGURATION, error_msg, e))
            logger.debug(error_msg)

        except PermissionError as e:
            error_msg = f"Permission denied reading credential file: {path_obj}"
            if required:
                return Failure(SdkError(ErrorKind.CONFIGURATION, error_msg, e))
            logger.warning(error_msg)

        except Exception as e:
            error_msg = f"Error reading credential file {path_obj}: {e}"
            if required:
                return Failure(SdkError(ErrorKind.CONFIGURATION, error_msg, e))
            logger.warning(error_msg)

        return Success(None)
