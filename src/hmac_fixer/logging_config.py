"""Módulo de configuração centralizada de logging do HMAC Signature Fixer.
Implementa logging estruturado com rotação de arquivos opcional.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

SIGNING_LOGGER = "hmac_fixer.signing"
PREVIEW_LENGTH = 16


class FixerLogger:
    """Sistema de logging centralizado do assinador.
    Console sempre ativo; arquivos com rotação apenas quando solicitado.
    """

    def __init__(
        self,
        log_dir: str = "logs",
        log_level: str = "INFO",
        log_to_file: bool = False,
    ) -> None:
        """Inicializa o sistema de logging.

        Args:
            log_dir: Diretório para armazenar os logs
            log_level: Nível de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_to_file: Grava também em arquivos com rotação diária

        """
        self.log_dir = Path(log_dir)
        self.log_level = getattr(logging, log_level.upper())
        self.log_to_file = log_to_file

        if self.log_to_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self._setup_logging()

    def _setup_logging(self) -> None:
        """Configura o sistema de logging."""
        # Remove handlers existentes
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)

        logging.root.setLevel(self.log_level)

        detailed_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(funcName)s - %(message)s",
        )
        simple_formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(message)s",
        )
        json_formatter = logging.Formatter(
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}',
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(simple_formatter)
        logging.root.addHandler(console_handler)

        if not self.log_to_file:
            return

        # File Handler - Geral (rotação diária)
        general_handler = logging.handlers.TimedRotatingFileHandler(
            self.log_dir / "hmac_fixer.log",
            when="midnight",
            interval=1,
            backupCount=30,
            encoding="utf-8",
        )
        general_handler.setLevel(logging.DEBUG)
        general_handler.setFormatter(detailed_formatter)
        logging.root.addHandler(general_handler)

        # File Handler - Erros (rotação diária)
        error_handler = logging.handlers.TimedRotatingFileHandler(
            self.log_dir / "errors.log",
            when="midnight",
            interval=1,
            backupCount=30,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(detailed_formatter)
        logging.root.addHandler(error_handler)

        # File Handler - Assinaturas (rotação por hora)
        signing_handler = logging.handlers.TimedRotatingFileHandler(
            self.log_dir / "signing.log",
            when="H",
            interval=1,
            backupCount=168,  # 7 dias
            encoding="utf-8",
        )
        signing_handler.setLevel(logging.DEBUG)
        signing_handler.setFormatter(json_formatter)
        signing_handler.addFilter(SigningFilter())
        logging.root.addHandler(signing_handler)

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)

    def shutdown(self) -> None:
        """Fecha todos os handlers de logging."""
        for handler in logging.root.handlers[:]:
            handler.close()
            logging.root.removeHandler(handler)


class SigningFilter(logging.Filter):
    """Filtro para logs de assinatura."""

    def filter(self, record: logging.LogRecord) -> bool:
        return "SIGNED:" in record.getMessage() or record.name == SIGNING_LOGGER


_fixer_logger: FixerLogger | None = None


def setup_logging(
    log_dir: str = "logs",
    log_level: str = "INFO",
    log_to_file: bool = False,
) -> FixerLogger:
    """Configura o sistema de logging global.

    Returns:
        Instância do FixerLogger

    """
    global _fixer_logger
    _fixer_logger = FixerLogger(log_dir, log_level, log_to_file)
    return _fixer_logger


def get_logger(name: str) -> logging.Logger:
    """Obtém um logger; não altera handlers se o logging não foi configurado."""
    if _fixer_logger is None:
        return logging.getLogger(name)
    return _fixer_logger.get_logger(name)


def log_signature(canonical: str, signature: str) -> None:
    """Loga o texto assinado e um prefixo da assinatura.

    Args:
        canonical: Texto canônico usado no HMAC
        signature: Assinatura em hexadecimal

    """
    logger = logging.getLogger(SIGNING_LOGGER)
    logger.info(f"SIGNED: {canonical} → {signature[:PREVIEW_LENGTH]}...")


def log_error(error: Exception, context: str = "") -> None:
    """Loga erros com contexto."""
    logger = logging.getLogger("hmac_fixer.errors")
    logger.error(f"ERROR in {context}: {error}", exc_info=error)
