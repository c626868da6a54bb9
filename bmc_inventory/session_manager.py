"""
Session Manager - one authenticated HTTP session per BMC target.

Provides:
- requests.Session construction with the target's TLS trust policy
- Lazy login, token storage and per-call timeouts
- A single refresh-and-retry when the BMC rejects a stale session

Does NOT provide (intentionally):
- Retry/backoff for transport failures
- Thread-safety: a session belongs to one caller at a time
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

import requests
from urllib3 import disable_warnings
from urllib3.exceptions import InsecureRequestWarning

from .errors import AuthenticationError
from .models import Target

disable_warnings(InsecureRequestWarning)
logger = logging.getLogger(__name__)

# Status codes that mean "log in again"
REJECTED_STATUS_CODES = (401, 403)


class BmcSession(ABC):
    """
    Owns the authenticated transport for one Target.

    Vendor subclasses implement _authenticate() (returning the session
    token) and _logout(). The token is threaded into each request by the
    ``prepare`` callback given to call(), so dialects that carry it in the
    body (SOAP) and those that carry it in a cookie share the same logic.
    """

    def __init__(self, target: Target, timeout: int = 30, always_login: bool = False,
                 http: Optional[requests.Session] = None):
        """
        Args:
            target: BMC to talk to
            timeout: Per-request timeout in seconds
            always_login: Log in before every call (no session reuse)
            http: Pre-built transport, mainly for tests
        """
        self.target = target
        self.timeout = timeout
        self.always_login = always_login
        self._http = http
        self._token: Optional[str] = None

    @property
    def http(self) -> requests.Session:
        if self._http is None:
            self._http = requests.Session()
        self._http.verify = self.target.verify
        return self._http

    @property
    def token(self) -> Optional[str]:
        return self._token

    @abstractmethod
    def _authenticate(self) -> str:
        """Perform the vendor login and return the session token"""
        pass

    @abstractmethod
    def _logout(self, token: str) -> None:
        """Invalidate the token on the BMC"""
        pass

    def is_rejected(self, response: requests.Response) -> bool:
        """Whether the BMC refused the request because of the session"""
        return response.status_code in REJECTED_STATUS_CODES

    def ensure_session(self) -> str:
        """Return a usable session token, logging in if necessary"""
        if self._token and not self.always_login:
            return self._token

        logger.debug(f"Logging in to {self.target.host} as {self.target.username}")
        token = self._authenticate()
        if not token:
            raise AuthenticationError(f"Login to {self.target.host} returned no session token")
        self._token = token
        logger.info(f"Authenticated to {self.target.host}")
        return token

    def invalidate(self) -> None:
        """Forget the current token without contacting the BMC"""
        self._token = None

    def send(self, method: str, url: str, log_body: bool = True, **kwargs) -> requests.Response:
        """Send one raw request, without session handling"""
        kwargs.setdefault("timeout", self.timeout)
        logger.debug(f"{method} {url}")
        response = self.http.request(method, url, **kwargs)
        logger.debug(f"{method} {url} -> {response.status_code}")
        if log_body:
            logger.debug(f"response body: {response.content!r}")
        return response

    def call(self, method: str, url: str,
             prepare: Optional[Callable[[str], Dict]] = None, **kwargs) -> requests.Response:
        """
        Send a request with a valid session attached.

        Args:
            method: HTTP method
            url: Absolute URL
            prepare: Builds per-request kwargs from the session token
            **kwargs: Passed to requests unchanged

        Returns:
            The response, whatever its status

        Raises:
            AuthenticationError: Login failed, or the session was rejected twice
        """
        response = self._send_with_token(method, url, self.ensure_session(), prepare, kwargs)
        if not self.is_rejected(response):
            return response

        logger.info(f"Session on {self.target.host} rejected, logging in again")
        self.invalidate()
        response = self._send_with_token(method, url, self.ensure_session(), prepare, kwargs)
        if self.is_rejected(response):
            raise AuthenticationError(
                f"Session rejected by {self.target.host} after re-login",
                status_code=response.status_code
            )
        return response

    def _send_with_token(self, method, url, token, prepare, kwargs) -> requests.Response:
        request_kwargs = dict(kwargs)
        if prepare:
            request_kwargs.update(prepare(token))
        return self.send(method, url, **request_kwargs)

    def close(self) -> None:
        """Log out and release the transport"""
        if self._token:
            try:
                self._logout(self._token)
                logger.info(f"Logged out from {self.target.host}")
            except (requests.RequestException, AuthenticationError) as e:
                logger.warning(f"Error during logout from {self.target.host}: {e}")
            finally:
                self._token = None
        if self._http is not None:
            self._http.close()
            self._http = None
