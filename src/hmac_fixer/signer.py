"""Módulo de assinatura HMAC-SHA256 das requisições interceptadas.

Os parâmetros QUERY e BODY são decodificados, ordenados por nome e concatenados
no formato ``nome1=v1,v1bnome2=v2`` (sem separador entre os grupos). O HMAC
desse texto substitui qualquer parâmetro ``signature`` já presente.
"""

import hashlib
import hmac
import re
import threading
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import unquote_plus

from .params import HttpRequest, Parameter, ParameterType

SIGNATURE_PARAM = "signature"

SIGNED_SOURCES = (ParameterType.QUERY, ParameterType.BODY)

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class SignerError(Exception):
    """Exceção base do assinador."""


class DecodeFailure(SignerError, ValueError):
    """Valor com sequência de escape percentual inválida."""


class CryptoInitFailure(SignerError):
    """O HMAC não pôde ser inicializado com a chave informada."""


@dataclass(frozen=True)
class SignatureResult:
    """Resultado completo de uma assinatura."""

    request: HttpRequest
    canonical: str
    signature: str
    decode_failures: int = 0


def decode_value(value: str) -> str:
    """Decodifica um valor ``application/x-www-form-urlencoded``.

    Args:
        value (str): Valor como transmitido.

    Returns:
        str: Valor com ``%XX`` e ``+`` decodificados (UTF-8).

    Raises:
        DecodeFailure: Se houver um ``%`` sem dois dígitos hexadecimais.

    """
    match = _MALFORMED_ESCAPE.search(value)
    if match:
        raise DecodeFailure(
            f"Sequência de escape inválida na posição {match.start()}: {value!r}",
        )
    return unquote_plus(value, encoding="utf-8", errors="replace")


def canonicalize(
    parameters: tuple[Parameter, ...] | list[Parameter],
) -> tuple[dict[str, list[str]], list[Parameter], int]:
    """Monta o conjunto canônico de parâmetros.

    Args:
        parameters: Parâmetros da requisição na ordem original.

    Returns:
        tuple: Mapa nome -> valores decodificados (ordenado por nome), lista de
        parâmetros ``signature`` a remover e número de valores mantidos crus
        por falha de decodificação.

    """
    collected: dict[str, list[str]] = {}
    to_remove: list[Parameter] = []
    failures = 0

    for param in parameters:
        if param.name == SIGNATURE_PARAM:
            to_remove.append(param)
            continue
        if param.type not in SIGNED_SOURCES:
            continue
        try:
            value = decode_value(param.value)
        except DecodeFailure:
            value = param.value
            failures += 1
        collected.setdefault(param.name, []).append(value)

    canonical = {name: collected[name] for name in sorted(collected)}
    return canonical, to_remove, failures


def canonical_string(canonical: dict[str, list[str]]) -> str:
    """Concatena o conjunto canônico; espera o mapa já ordenado por nome."""
    return "".join(f"{name}={','.join(values)}" for name, values in canonical.items())


def compute_signature(data: str, secret: str) -> str:
    """Calcula o HMAC-SHA256 de ``data`` em hexadecimal minúsculo.

    Raises:
        CryptoInitFailure: Se o segredo não puder ser usado como chave ou o
            SHA-256 não estiver disponível.

    """
    try:
        mac = hmac.new(secret.encode("utf-8"), digestmod=hashlib.sha256)
    except (ValueError, TypeError) as e:
        raise CryptoInitFailure(f"Falha ao inicializar HMAC-SHA256: {e}") from e
    # Bytes não UTF-8 recebidos via surrogateescape são assinados como enviados
    mac.update(data.encode("utf-8", "surrogateescape"))
    return mac.hexdigest()


def sign_with_details(request: HttpRequest, secret: str) -> SignatureResult:
    """Assina a requisição e devolve também o texto canônico e a assinatura."""
    canonical, to_remove, failures = canonicalize(request.parameters)
    data = canonical_string(canonical)
    signature = compute_signature(data, secret)

    signed = request.with_removed_parameters(to_remove).with_added_parameters(
        [Parameter(SIGNATURE_PARAM, signature, ParameterType.QUERY)],
    )
    return SignatureResult(
        request=signed,
        canonical=data,
        signature=signature,
        decode_failures=failures,
    )


def sign(request: HttpRequest, secret: str) -> HttpRequest:
    """Substitui a assinatura da requisição por uma recém calculada.

    Args:
        request (HttpRequest): Requisição interceptada.
        secret (str): Segredo compartilhado (qualquer texto, inclusive vazio).

    Returns:
        HttpRequest: Nova requisição com um único parâmetro ``signature`` QUERY.

    """
    return sign_with_details(request, secret).request


class Signer:
    """Assinador com gancho de observação e contador de diagnóstico.

    O contador registra quantos valores foram assinados crus por não serem
    decodificáveis, o que indica entrada malformada.
    """

    def __init__(self, on_signed: Callable[[str, str], None] | None = None):
        """Inicializa o assinador.

        Args:
            on_signed (Callable, optional): Chamado com o texto canônico e a
                assinatura após cada assinatura bem-sucedida.

        """
        self.on_signed = on_signed
        self._decode_failures = 0
        self._lock = threading.Lock()

    @property
    def decode_failures(self) -> int:
        with self._lock:
            return self._decode_failures

    def sign(self, request: HttpRequest, secret: str) -> HttpRequest:
        result = sign_with_details(request, secret)
        if result.decode_failures:
            with self._lock:
                self._decode_failures += result.decode_failures
        if self.on_signed is not None:
            self.on_signed(result.canonical, result.signature)
        return result.request
