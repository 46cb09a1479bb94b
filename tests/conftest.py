import logging

import pytest

from hmac_fixer.params import HttpRequest, Parameter, ParameterType

SECRET = "secret"

# HMAC-SHA256 com a chave "secret"
SIG_FOO_BAR = "e8dd201559dd71514b6d2acfd07754b364ea8461d3860ab7b722691d2b8fd09b"
SIG_A1_B2 = "285d7d8c87512c888505195b1f9dee0a100de25cb36c500ab8a9ae0fa042576e"
SIG_X5 = "bc970130817143e8906f6551c2f6af266c3861e5939c317eda75fa06e01d9114"
SIG_NAME_A_SPACE_B = "00de315c04ad099d08584e73901783a073fc916a360fb1061a7ab91f8e27de0a"
SIG_TAG_1_2 = "4dd42527b2b65551dc0d8ecff7ac751f021048b93e5e0b24f695a4e2384a01c2"
SIG_TAG_2_1 = "894650469c7fffcd15f2c793fc1e74d7a7c4baa82c2c4ab9dd3f74775477b187"
SIG_EMPTY = "f9e66e179b6747ae54108f82f8ade8b3c25d76fd30afde6c395822c530196169"
SIG_Q_CAFE = "036651790f98941513d17f4e1fec1277051c6c227b648309d63571403f850969"
# Bytes crus b"a=\xe9", b"\xff=1" e b"a=1b=2flag="
SIG_RAW_A_E9 = "3c5eb759e10666db69c84cc8706ed90aca8c897ad5bcd9876b2eafb60eb0bd6c"
SIG_RAW_FF_1 = "ff8ae15bf81ec3390bf307fd9f59ed588940b22f3e6c18aff40bf5fcb2556e9f"
SIG_A1_B2_FLAG = "238bd1c60f3c80f49e40614eb1d388443fdc4b1cce733ae8235fb57205767cb9"


def make_request(*params: tuple[str, str, ParameterType], method: str = "GET") -> HttpRequest:
    return HttpRequest(
        method=method,
        path="/app",
        parameters=tuple(Parameter(n, v, t) for n, v, t in params),
    )


@pytest.fixture
def restore_root_logger():
    """Restaura handlers e nível do logger raiz após testes que chamam setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
