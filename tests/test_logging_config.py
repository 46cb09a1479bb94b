"""Testes da configuração de logging."""

import logging

from hmac_fixer import logging_config
from hmac_fixer.logging_config import (
    SIGNING_LOGGER,
    SigningFilter,
    get_logger,
    log_error,
    log_signature,
    setup_logging,
)


def _record(name: str, msg: str) -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, msg, None, None)


class TestSigningFilter:
    def test_accepts_signing_logger(self) -> None:
        assert SigningFilter().filter(_record(SIGNING_LOGGER, "qualquer")) is True

    def test_accepts_signed_marker(self) -> None:
        assert SigningFilter().filter(_record("outro", "SIGNED: a=1 → abc...")) is True

    def test_rejects_other_records(self) -> None:
        assert SigningFilter().filter(_record("hmac_fixer.handler", "Segredo removido")) is False


class TestSetupLogging:
    def test_console_only_by_default(self, tmp_path, restore_root_logger) -> None:
        fixer_logger = setup_logging(log_dir=str(tmp_path / "logs"), log_level="debug")
        try:
            assert restore_root_logger.level == logging.DEBUG
            assert len(restore_root_logger.handlers) == 1
            assert not (tmp_path / "logs").exists()
        finally:
            fixer_logger.shutdown()

    def test_file_handlers(self, tmp_path, restore_root_logger) -> None:
        log_dir = tmp_path / "logs"
        fixer_logger = setup_logging(log_dir=str(log_dir), log_to_file=True)
        try:
            log_signature("foo=bar", "e8dd201559dd71514b6d2acfd07754b3")
            get_logger("hmac_fixer.handler").info("Segredo removido")
            log_error(RuntimeError("falhou"), "teste")
        finally:
            fixer_logger.shutdown()

        signing = (log_dir / "signing.log").read_text(encoding="utf-8")
        assert "SIGNED: foo=bar → e8dd201559dd7151..." in signing
        assert "Segredo removido" not in signing

        general = (log_dir / "hmac_fixer.log").read_text(encoding="utf-8")
        assert "Segredo removido" in general

        errors = (log_dir / "errors.log").read_text(encoding="utf-8")
        assert "ERROR in teste: falhou" in errors

    def test_get_logger_without_setup(self, monkeypatch) -> None:
        monkeypatch.setattr(logging_config, "_fixer_logger", None)
        assert get_logger("hmac_fixer.x") is logging.getLogger("hmac_fixer.x")
