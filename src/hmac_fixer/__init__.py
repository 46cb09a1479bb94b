"""
HMAC Signature Fixer - Core Modules
"""

from .config import ConfigError, SignerConfig
from .handler import SignatureHandler
from .logging_config import setup_logging
from .params import HttpRequest, Parameter, ParameterType
from .signer import (
    CryptoInitFailure,
    DecodeFailure,
    Signer,
    SignerError,
    sign,
    sign_with_details,
)

__version__ = "1.0.0"

__all__ = [
    'ConfigError',
    'CryptoInitFailure',
    'DecodeFailure',
    'HttpRequest',
    'Parameter',
    'ParameterType',
    'SignatureHandler',
    'Signer',
    'SignerConfig',
    'SignerError',
    'setup_logging',
    'sign',
    'sign_with_details',
]
