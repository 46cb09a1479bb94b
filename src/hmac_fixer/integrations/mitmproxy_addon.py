"""Addon do mitmproxy que corrige a assinatura HMAC das requisições.

Uso: ``mitmdump -s src/hmac_fixer/integrations/mitmproxy_addon.py
--set hmac_fixer_secret=...``
"""

from mitmproxy import ctx, http

from hmac_fixer.config import ConfigError, SignerConfig
from hmac_fixer.handler import SignatureHandler
from hmac_fixer.logging_config import get_logger
from hmac_fixer.params import HttpRequest

logger = get_logger(__name__)


def _config_from_env() -> SignerConfig:
    try:
        return SignerConfig.from_env()
    except ConfigError as e:
        logger.error(f"❌ Configuração do ambiente inválida, assinatura inativa: {e}")
        return SignerConfig()


class HmacSignatureAddon:
    def __init__(self, handler: SignatureHandler | None = None):
        self.handler = handler

    def load(self, loader) -> None:
        if self.handler is None:
            self.handler = SignatureHandler(_config_from_env())
        loader.add_option(
            name="hmac_fixer_enabled",
            typespec=bool,
            default=self.handler.config.enabled,
            help="Recalcula o parâmetro signature das requisições.",
        )
        loader.add_option(
            name="hmac_fixer_secret",
            typespec=str,
            default="",
            help="Segredo compartilhado do HMAC-SHA256.",
        )
        logger.info("✓ HMAC Signature Fixer carregado")

    def configure(self, updated: set[str]) -> None:
        if "hmac_fixer_enabled" in updated:
            self.handler.set_enabled(ctx.options.hmac_fixer_enabled)
        # Opção vazia mantém o segredo vindo do ambiente
        if "hmac_fixer_secret" in updated and ctx.options.hmac_fixer_secret:
            self.handler.set_secret(ctx.options.hmac_fixer_secret)

    def sign_request(self, request: http.Request) -> None:
        """Reassina a requisição do mitmproxy no próprio objeto."""
        content = request.content or b""
        body = content.decode("utf-8", "surrogateescape")

        original = HttpRequest.from_parts(
            request.method,
            request.path,
            body=body,
            content_type=request.headers.get("content-type"),
            cookie=request.headers.get("cookie"),
        )
        signed = self.handler.handle_request(original)
        if signed is original:
            return

        request.path = signed.target
        if signed.form_body:
            new_body = signed.body_text()
            if new_body != body:
                request.content = new_body.encode("utf-8", "surrogateescape")

        cookie = signed.cookie_header()
        if cookie != original.cookie_header():
            if cookie is not None:
                request.headers["cookie"] = cookie
            else:
                del request.headers["cookie"]

    def request(self, flow: http.HTTPFlow) -> None:
        self.sign_request(flow.request)


addons = [HmacSignatureAddon()]
