# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration loading for the Ambari MCP server."""

# Standard library imports
import os
from pathlib import Path

# Third-party imports
from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


DEFAULT_BASE_URL = 'http://localhost:8080/api/v1'
DEFAULT_USERNAME = 'admin'
DEFAULT_PASSWORD = 'admin'  # pragma: allowlist secret
DEFAULT_TIMEOUT_MS = 30000

ENV_PATH_KEY = 'AMBARI_ENV_PATH'
BASE_URL_KEY = 'AMBARI_BASE_URL'
USERNAME_KEY = 'AMBARI_USERNAME'
PASSWORD_KEY = 'AMBARI_PASSWORD'  # pragma: allowlist secret
TIMEOUT_KEY = 'TIMEOUT_MS'
ENV_DEBUG_KEY = 'ENV_DEBUG'

# Project root when running from a source checkout (awslabs/ambari_mcp_server/config.py)
PROJECT_ROOT = Path(__file__).resolve().parents[2]


class AmbariConfig(BaseModel):
    """Connection settings for the Ambari REST API, fixed for the process lifetime."""

    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_BASE_URL
    username: str = DEFAULT_USERNAME
    password: str = Field(default=DEFAULT_PASSWORD, repr=False)
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    env_path: Optional[str] = None

    @property
    def timeout_seconds(self) -> float:
        """Request timeout in seconds, as httpx expects it."""
        return self.timeout_ms / 1000

    def summary(self) -> Dict[str, Any]:
        """Return a loggable view of the configuration with the password masked."""
        return {
            'loadedEnvPath': self.env_path,
            BASE_URL_KEY: self.base_url,
            USERNAME_KEY: self.username,
            'AMBARI_PASSWORD_MASKED': '*' * len(self.password),
            TIMEOUT_KEY: self.timeout_ms,
        }


def candidate_env_paths() -> List[Path]:
    """List the .env locations to try, in priority order."""
    candidates = []
    explicit = os.getenv(ENV_PATH_KEY)
    if explicit:
        candidates.append(Path(explicit).resolve())
    candidates.append(PROJECT_ROOT / '.env')
    candidates.append(Path.cwd() / '.env')
    return candidates


def load_env_file() -> Optional[str]:
    """Load the first .env file found; existing environment variables win."""
    candidates = candidate_env_paths()
    for path in candidates:
        if path.is_file():
            load_dotenv(path, override=False)
            logger.info(f'Loaded .env from {path}')
            return str(path)

    logger.warning(f'.env file not found. Tried: {", ".join(str(p) for p in candidates)}')
    return None


def parse_timeout(raw: Optional[str]) -> int:
    """Parse TIMEOUT_MS into a positive integer number of milliseconds."""
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_MS
    try:
        timeout = int(raw.strip())
    except ValueError:
        raise ValueError(
            f'{TIMEOUT_KEY} must be an integer number of milliseconds, got {raw!r}'
        ) from None
    if timeout <= 0:
        raise ValueError(f'{TIMEOUT_KEY} must be positive, got {timeout}')
    return timeout


def load_config(load_dotenv_file: bool = True) -> AmbariConfig:
    """Build the Ambari configuration from the environment.

    Falling back to the development defaults for the base URL or the credentials
    is always reported as a warning, since the defaults are only meant for a
    local sandbox.
    """
    env_path = load_env_file() if load_dotenv_file else None

    base_url = os.getenv(BASE_URL_KEY)
    if not base_url:
        logger.warning(f'{BASE_URL_KEY} is not set; falling back to default {DEFAULT_BASE_URL}')
        base_url = DEFAULT_BASE_URL

    username = os.getenv(USERNAME_KEY)
    password = os.getenv(PASSWORD_KEY)
    if not username or not password:
        logger.warning(
            f'{USERNAME_KEY}/{PASSWORD_KEY} not set; using default development credentials. '
            'Do not run with default credentials against a production cluster.'
        )
    config = AmbariConfig(
        base_url=base_url.rstrip('/'),
        username=username or DEFAULT_USERNAME,
        password=password or DEFAULT_PASSWORD,
        timeout_ms=parse_timeout(os.getenv(TIMEOUT_KEY)),
        env_path=env_path,
    )

    if os.getenv(ENV_DEBUG_KEY) == '1':
        logger.info(f'Configuration summary: {config.summary()}')

    return config
