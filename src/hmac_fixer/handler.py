"""Interceptador do lado do host: decide se assina e trata falhas."""

import threading

from .config import SignerConfig
from .logging_config import get_logger, log_error, log_signature
from .params import HttpRequest
from .signer import CryptoInitFailure, Signer

logger = get_logger(__name__)


class SignatureHandler:
    """Aplica a assinatura às requisições de saída conforme a configuração.

    Requisições passam intactas quando o assinador está desabilitado ou sem
    segredo, e também quando o HMAC não pode ser inicializado.
    """

    def __init__(self, config: SignerConfig | None = None, signer: Signer | None = None):
        """Inicializa o interceptador.

        Args:
            config (SignerConfig, optional): Configuração inicial.
            signer (Signer, optional): Assinador; por padrão loga cada assinatura.

        """
        self._config = config or SignerConfig()
        self._lock = threading.Lock()
        self.signer = signer or Signer(on_signed=log_signature)

    @property
    def config(self) -> SignerConfig:
        with self._lock:
            return self._config

    @property
    def decode_failures(self) -> int:
        return self.signer.decode_failures

    def set_enabled(self, enabled: bool) -> None:
        with self._lock:
            self._config = self._config.with_enabled(enabled)
        logger.info(f"HMAC Fixer {'ENABLED' if enabled else 'DISABLED'}")

    def set_secret(self, secret: str) -> None:
        """Atualiza o segredo compartilhado.

        Raises:
            ConfigError: Se o segredo for vazio.

        """
        with self._lock:
            self._config = self._config.with_secret(secret)
            length = len(self._config.secret)
        logger.info(f"Segredo atualizado (tamanho: {length})")

    def clear_secret(self) -> None:
        with self._lock:
            self._config = self._config.cleared()
        logger.info("Segredo removido")

    def handle_request(self, request: HttpRequest) -> HttpRequest:
        """Assina a requisição ou a devolve sem alterações.

        Args:
            request (HttpRequest): Requisição prestes a ser enviada.

        Returns:
            HttpRequest: Requisição assinada, ou a original se o assinador
            estiver inativo ou falhar.

        """
        config = self.config
        if not config.is_active:
            return request

        try:
            return self.signer.sign(request, config.secret)
        except CryptoInitFailure as e:
            log_error(e, f"assinatura de {request.method} {request.path}")
            return request

    def handle_response(self, response):
        # Respostas não são modificadas
        return response
