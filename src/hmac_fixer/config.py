"""Módulo de configuração do assinador: habilitação e segredo compartilhado."""

import os
from dataclasses import dataclass, replace

from dotenv import load_dotenv

ENV_SECRET = "HMAC_FIXER_SECRET"
ENV_ENABLED = "HMAC_FIXER_ENABLED"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Exceção para erros de configuração."""


def parse_flag(raw: str) -> bool:
    """Converte o texto de uma variável de ambiente em booleano.

    Raises:
        ConfigError: Se o valor não for reconhecido.

    """
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"Valor booleano inválido: {raw!r}")


@dataclass(frozen=True)
class SignerConfig:
    """Configuração do assinador, pertencente ao host e passada por valor."""

    enabled: bool = True
    secret: str = ""

    def __repr__(self) -> str:
        return f"SignerConfig(enabled={self.enabled}, secret=<{len(self.secret)} chars>)"

    @property
    def is_active(self) -> bool:
        """Indica se as requisições devem ser assinadas."""
        return self.enabled and bool(self.secret)

    def with_secret(self, secret: str) -> "SignerConfig":
        """Retorna uma cópia com o novo segredo.

        Args:
            secret (str): Segredo informado; espaços nas pontas são removidos.

        Raises:
            ConfigError: Se o segredo ficar vazio.

        """
        if not isinstance(secret, str):
            raise ConfigError("O segredo deve ser um texto.")
        secret = secret.strip()
        if not secret:
            raise ConfigError("Informe um segredo válido.")
        return replace(self, secret=secret)

    def with_enabled(self, enabled: bool) -> "SignerConfig":
        return replace(self, enabled=bool(enabled))

    def cleared(self) -> "SignerConfig":
        return replace(self, secret="")

    @classmethod
    def from_env(cls, require_secret: bool = False) -> "SignerConfig":
        """Cria uma configuração a partir de variáveis de ambiente (e do ``.env``).

        Args:
            require_secret (bool): Exige que HMAC_FIXER_SECRET esteja definida.

        Raises:
            ConfigError: Se HMAC_FIXER_ENABLED for inválida ou se o segredo for
                exigido e não estiver definido.

        Returns:
            SignerConfig: Uma instância da configuração.

        """
        load_dotenv()

        raw_enabled = os.getenv(ENV_ENABLED)
        enabled = True if raw_enabled is None else parse_flag(raw_enabled)
        secret = (os.getenv(ENV_SECRET) or "").strip()

        if require_secret and not secret:
            raise ConfigError(
                f"A variável de ambiente {ENV_SECRET} não está definida.",
            )

        return cls(enabled=enabled, secret=secret)
