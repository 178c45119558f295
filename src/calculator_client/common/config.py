"""Client configuration loaded from the environment."""
import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError


BASE_URL_ENV: str = "CALCULATOR_API_URL"
TIMEOUT_ENV: str = "CALCULATOR_API_TIMEOUT"


class ClientSettings(BaseModel):
    """
    Connection settings for the calculation service.

    The base URL is used as given: it is neither validated nor normalized
    (a trailing slash is kept).
    """

    # Settings are shared by the client and the calculator, they must not change underneath them
    model_config = ConfigDict(frozen=True)

    base_url: str = Field(..., description="Base URL of the calculation service, e.g. http://localhost:8080/api")
    timeout: Optional[float] = Field(default=None, gt=0, description="Request timeout in seconds, None to wait indefinitely")

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "ClientSettings":
        """
        Build settings from ``CALCULATOR_API_URL`` and ``CALCULATOR_API_TIMEOUT``.

        :param bool dotenv: Load the ``.env`` file found from the working directory first (existing variables win)

        :return: Validated settings
        :rtype: ClientSettings
        :raises ValueError: If the base URL is not set or the timeout is invalid
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        base_url: Optional[str] = os.getenv(BASE_URL_ENV)
        if not base_url:
            raise ValueError(f"⚙️❌ {BASE_URL_ENV} is not set")

        timeout: Optional[str] = os.getenv(TIMEOUT_ENV) or None
        try:
            return cls(base_url=base_url, timeout=timeout)
        except ValidationError as exc:
            raise ValueError(f"⚙️❌ Invalid calculator settings: {exc}") from exc
