"""Ferramenta de linha de comando para assinar uma requisição manualmente.

Exemplos:
    hmac-fixer "https://loja.exemplo/app?shop=a&timestamp=1" --secret s3cr3t
    hmac-fixer "https://loja.exemplo/app" -X POST --data "b=2&a=1" --show-canonical
"""

import argparse
import logging
import sys
from urllib.parse import urlsplit, urlunsplit

from .config import ConfigError, SignerConfig
from .logging_config import setup_logging
from .params import FORM_CONTENT_TYPE, HttpRequest
from .signer import CryptoInitFailure, sign_with_details

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hmac-fixer",
        description="Recalcula o parâmetro signature (HMAC-SHA256) de uma requisição",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("url", help="URL completa, com a query string")
    parser.add_argument("--method", "-X", default="GET", help="Método HTTP")
    parser.add_argument("--data", "-d", default="", help="Corpo x-www-form-urlencoded")
    parser.add_argument("--cookie", "-b", help="Cabeçalho Cookie (não é assinado)")
    parser.add_argument("--secret", "-s", help="Segredo (ou HMAC_FIXER_SECRET)")
    parser.add_argument(
        "--show-canonical",
        action="store_true",
        help="Mostra o texto canônico usado no HMAC",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Nível de logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level)

    try:
        if args.secret is not None:
            config = SignerConfig().with_secret(args.secret)
        else:
            config = SignerConfig.from_env(require_secret=True)
    except ConfigError as e:
        print(f"Erro de configuração: {e}", file=sys.stderr)
        return 2

    scheme, netloc, path, query, fragment = urlsplit(args.url)
    request = HttpRequest.from_parts(
        args.method,
        f"{path}?{query}" if query else path,
        body=args.data,
        content_type=FORM_CONTENT_TYPE if args.data else None,
        cookie=args.cookie,
    )

    try:
        result = sign_with_details(request, config.secret)
    except CryptoInitFailure as e:
        logging.exception(f"Falha ao assinar a requisição: {e}")
        return 1

    signed = result.request
    if args.show_canonical:
        print(f"canonical: {result.canonical}")
    if result.decode_failures:
        logging.warning(
            f"⚠️ {result.decode_failures} valor(es) assinados sem decodificação",
        )
    print(f"signature: {result.signature}")
    print(urlunsplit((scheme, netloc, signed.path, signed.query_string(), fragment)))
    if signed.form_body:
        print(signed.body_text())
    if signed.cookie_header():
        print(f"Cookie: {signed.cookie_header()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
