"""Integração com ``requests``: reassina cada requisição preparada."""

from urllib.parse import urlsplit, urlunsplit

from requests import PreparedRequest
from requests.auth import AuthBase

from ..config import SignerConfig
from ..handler import SignatureHandler
from ..params import HttpRequest


class HmacSignatureAuth(AuthBase):
    """Autenticação que recalcula o parâmetro ``signature`` antes do envio.

    Uso::

        session = requests.Session()
        session.auth = HmacSignatureAuth(SignerConfig(secret="..."))
    """

    def __init__(self, handler: SignatureHandler | SignerConfig):
        if isinstance(handler, SignerConfig):
            handler = SignatureHandler(handler)
        self.handler = handler

    def __call__(self, r: PreparedRequest) -> PreparedRequest:
        scheme, netloc, path, query, fragment = urlsplit(r.url)
        target = f"{path}?{query}" if query else path

        body = r.body or ""
        body_is_bytes = isinstance(body, bytes)
        if body_is_bytes:
            body = body.decode("utf-8", "surrogateescape")
        elif not isinstance(body, str):
            # Corpos em streaming não podem ser reescritos
            body = ""

        request = HttpRequest.from_parts(
            r.method or "GET",
            target,
            body=body,
            content_type=r.headers.get("Content-Type"),
            cookie=r.headers.get("Cookie"),
        )
        signed = self.handler.handle_request(request)
        if signed is request:
            return r

        r.url = urlunsplit(
            (scheme, netloc, signed.path, signed.query_string(), fragment),
        )

        if signed.form_body:
            new_body = signed.body_text()
            if new_body != body:
                r.body = (
                    new_body.encode("utf-8", "surrogateescape")
                    if body_is_bytes
                    else new_body
                )
                r.headers["Content-Length"] = str(
                    len(new_body.encode("utf-8", "surrogateescape")),
                )

        cookie = signed.cookie_header()
        if cookie != request.cookie_header():
            if cookie is not None:
                r.headers["Cookie"] = cookie
            else:
                del r.headers["Cookie"]

        return r
