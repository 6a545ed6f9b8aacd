"""
Persistence of the member's ParPass code between commands.
"""

import json
import os
from pathlib import Path
from typing import Protocol

from parpass.exceptions import CredentialError
from parpass.utils.logging_utils import LoggerMixin


CREDENTIAL_KEY = 'parpass_code'

class CredentialStore(Protocol):
    """A single opaque credential, readable, writable and clearable."""

    def get(self) -> str | None:
        ...

    def set(self, code: str) -> None:
        ...

    def clear(self) -> None:
        ...

class MemoryCredentialStore:
    """Credential held in memory for the life of the process."""

    def __init__(self, code: str | None = None) -> None:
        self._code = code

    def get(self) -> str | None:
        return self._code

    def set(self, code: str) -> None:
        self._code = code.upper()

    def clear(self) -> None:
        self._code = None

class FileCredentialStore(LoggerMixin):
    """Credential stored in a small JSON file under the ``parpass_code`` key.

    A missing, unreadable or malformed file reads as "no credential".
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path).expanduser()

    def get(self) -> str | None:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            self.warning(f"Ignoring unreadable credential file: {e}", path=str(self.path))
            return None

        code = data.get(CREDENTIAL_KEY) if isinstance(data, dict) else None
        if not isinstance(code, str) or not code.strip():
            return None
        return code.strip()

    def set(self, code: str) -> None:
        """Persist the code, upper-cased.

        Raises:
            CredentialError: If the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({CREDENTIAL_KEY: code.upper()}, f)
            # O_CREAT only applies the mode to new files
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise CredentialError(f"Could not store ParPass code: {e}", str(self.path)) from e

    def clear(self) -> None:
        """Remove the stored code; clearing an absent code is not an error."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise CredentialError(f"Could not clear ParPass code: {e}", str(self.path)) from e
