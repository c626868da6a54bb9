from typing import Callable, Dict, List, Optional, Tuple, Union
from urllib.parse import urlsplit

import pytest
import requests
from requests.cookies import RequestsCookieJar

from bmc_inventory.models import Target
from bmc_inventory.providers import SupermicroXProvider, C7000Provider
from bmc_inventory.codecs import hpoa_soap


def make_response(status: int = 200, body: Union[str, bytes] = b"",
                  cookies: Optional[Dict[str, str]] = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = body.encode() if isinstance(body, str) else body
    for name, value in (cookies or {}).items():
        response.cookies.set(name, value)
    return response


def ipmi(inner: str) -> str:
    return f'<?xml version="1.0"?><IPMI>{inner}</IPMI>'


def soap(inner: str) -> str:
    return (
        f'<SOAP-ENV:Envelope xmlns:SOAP-ENV="{hpoa_soap.SOAP_ENV_NS}" xmlns:hpoa="hpoa.xsd">'
        f'<SOAP-ENV:Body>{inner}</SOAP-ENV:Body></SOAP-ENV:Envelope>'
    )


Handler = Union[requests.Response, List[requests.Response], Callable[..., requests.Response]]


class FakeHttp:
    """
    Stand-in for requests.Session.

    Routes by (method, path) and, for string bodies such as ipmi.cgi query
    keys, by (method, path, body). A list of responses is consumed in
    order, the last one repeating.
    """

    def __init__(self):
        self.routes: Dict[Tuple, Handler] = {}
        self.calls: List[Tuple[str, str, dict]] = []
        self.cookies = RequestsCookieJar()
        self.verify = True
        self.closed = False

    def route(self, method: str, path: str, handler: Handler, data: Optional[str] = None) -> None:
        key = (method, path, data) if data is not None else (method, path)
        self.routes[key] = handler

    def request(self, method: str, url: str, **kwargs) -> requests.Response:
        self.calls.append((method, url, kwargs))
        path = urlsplit(url).path
        data = kwargs.get("data")

        handler = None
        if isinstance(data, str):
            handler = self.routes.get((method, path, data))
        if handler is None:
            handler = self.routes.get((method, path))
        if handler is None:
            response = make_response(404, b"not found")
        elif callable(handler):
            response = handler(method, url, **kwargs)
        elif isinstance(handler, list):
            response = handler.pop(0) if len(handler) > 1 else handler[0]
        else:
            response = handler
        response.url = url
        return response

    def calls_to(self, path: str) -> List[Tuple[str, str, dict]]:
        return [call for call in self.calls if urlsplit(call[1]).path == path]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def target() -> Target:
    return Target(host="10.0.0.5", username="ADMIN", password="secret")


@pytest.fixture
def fake_http() -> FakeHttp:
    http = FakeHttp()
    http.route("POST", "/cgi/login.cgi", make_response(200, "<html>ok</html>", cookies={"SID": "sid-1"}))
    http.route("GET", "/cgi/logout.cgi", make_response(200))
    return http


@pytest.fixture
def supermicro(target, fake_http) -> SupermicroXProvider:
    return SupermicroXProvider(target, http=fake_http)


@pytest.fixture
def oa_http() -> FakeHttp:
    """
    FakeHttp answering HPOA SOAP calls by operation name.

    An answer is a body string, a Response, or a list of either consumed
    in order.
    """
    http = FakeHttp()
    http.answers = {
        "userLogIn": soap(
            "<hpoa:userLogInResponse><hpoa:HpOaSessionKeyToken>"
            "<hpoa:oaSessionKey>key-1</hpoa:oaSessionKey>"
            "</hpoa:HpOaSessionKeyToken></hpoa:userLogInResponse>"
        ),
        "userLogOut": soap("<hpoa:userLogOutResponse/>"),
    }

    def answer(method, url, **kwargs):
        body = kwargs["data"].decode()
        for operation, reply in http.answers.items():
            if f"<hpoa:{operation}>" in body or f"<hpoa:{operation} />" in body:
                if isinstance(reply, list):
                    reply = reply.pop(0) if len(reply) > 1 else reply[0]
                if isinstance(reply, requests.Response):
                    return reply
                return make_response(200, reply)
        return make_response(500, soap(
            "<SOAP-ENV:Fault><SOAP-ENV:Reason><SOAP-ENV:Text>Unknown operation</SOAP-ENV:Text>"
            "</SOAP-ENV:Reason></SOAP-ENV:Fault>"
        ))

    http.route("POST", "/hpoa", answer)
    return http


@pytest.fixture
def c7000(target, oa_http) -> C7000Provider:
    return C7000Provider(target, http=oa_http)
