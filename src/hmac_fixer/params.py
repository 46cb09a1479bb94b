"""Modelo de requisição HTTP usado pelo assinador.

Uma requisição é representada pela lista ordenada de parâmetros extraídos da
query string, do corpo (formulário) e dos cookies. As operações de alteração
devolvem sempre uma nova requisição; apenas a tupla de parâmetros é copiada.

O texto original de cada origem é preservado: ao reconstruir a query, o corpo
ou o cabeçalho Cookie, os trechos de parâmetros mantidos saem byte a byte como
chegaram (``flag`` sem ``=``, segmentos vazios, espaços entre cookies).
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class ParameterType(Enum):
    """Origem de um parâmetro dentro da requisição."""

    QUERY = "QUERY"  # Query string da URL
    BODY = "BODY"  # Corpo application/x-www-form-urlencoded
    OTHER = "OTHER"  # Cookies e demais origens, nunca assinados


_SEPARATORS = {
    ParameterType.QUERY: "&",
    ParameterType.BODY: "&",
    ParameterType.OTHER: ";",
}


@dataclass(frozen=True)
class Parameter:
    """Par nome/valor como transmitido (valor ainda codificado)."""

    name: str
    value: str
    type: ParameterType = ParameterType.QUERY


def _parse_segment(segment: str, source: ParameterType) -> Parameter | None:
    item = segment.strip() if source is ParameterType.OTHER else segment
    if not item:
        return None
    name, _, value = item.partition("=")
    return Parameter(name, value, source)


def _split_pairs(raw: str, source: ParameterType) -> list[Parameter]:
    params = []
    for segment in raw.split(_SEPARATORS[source]):
        param = _parse_segment(segment, source)
        if param is not None:
            params.append(param)
    return params


def _render(raw: str, source: ParameterType, params: list[Parameter]) -> str:
    """Reconstrói o texto de uma origem a partir do original.

    Trechos cujos parâmetros continuam presentes são copiados sem alteração;
    parâmetros novos são acrescentados ao final como ``nome=valor``.
    """
    separator = _SEPARATORS[source]
    remaining = Counter(params)
    kept = []
    for segment in raw.split(separator) if raw else []:
        param = _parse_segment(segment, source)
        if param is None:
            kept.append(segment)
        elif remaining[param] > 0:
            remaining[param] -= 1
            kept.append(segment)

    added = []
    for param in params:
        if remaining[param] > 0:
            remaining[param] -= 1
            added.append(f"{param.name}={param.value}")

    if added:
        # Separador final solto (``a=1&``) não vira segmento vazio
        if kept and not kept[-1].strip():
            kept.pop()
        if source is ParameterType.OTHER and kept:
            added = [f" {item}" for item in added]
        kept.extend(added)
    return separator.join(kept)


def _is_form(content_type: str | None) -> bool:
    if not content_type:
        return False
    return content_type.split(";", 1)[0].strip().lower() == FORM_CONTENT_TYPE


@dataclass(frozen=True)
class HttpRequest:
    """Requisição HTTP imutável vista pelo assinador."""

    method: str
    path: str
    parameters: tuple[Parameter, ...] = field(default_factory=tuple)
    body: str = ""
    form_body: bool = False
    raw_query: str = ""
    raw_cookie: str = ""

    @classmethod
    def from_parts(
        cls,
        method: str,
        target: str,
        body: str = "",
        content_type: str | None = None,
        cookie: str | None = None,
    ) -> "HttpRequest":
        """Monta a requisição a partir das partes cruas da mensagem HTTP.

        Args:
            method: Método HTTP.
            target: Caminho com a query string opcional (ex.: ``/p?a=1``).
            body: Corpo da requisição em texto.
            content_type: Valor do cabeçalho Content-Type.
            cookie: Valor do cabeçalho Cookie.

        Returns:
            HttpRequest: Requisição com os parâmetros na ordem de ocorrência.

        """
        path, _, query = target.partition("?")
        params = _split_pairs(query, ParameterType.QUERY)

        form_body = _is_form(content_type)
        if form_body:
            params.extend(_split_pairs(body, ParameterType.BODY))
        if cookie:
            params.extend(_split_pairs(cookie, ParameterType.OTHER))

        return cls(
            method=method.upper(),
            path=path,
            parameters=tuple(params),
            body=body,
            form_body=form_body,
            raw_query=query,
            raw_cookie=cookie or "",
        )

    def parameters_of(self, source: ParameterType) -> list[Parameter]:
        return [p for p in self.parameters if p.type is source]

    def parameters_named(self, name: str) -> list[Parameter]:
        return [p for p in self.parameters if p.name == name]

    def with_removed_parameters(self, params: Iterable[Parameter]) -> "HttpRequest":
        """Remove todas as ocorrências dos parâmetros informados."""
        to_remove = set(params)
        if not to_remove:
            return self
        kept = tuple(p for p in self.parameters if p not in to_remove)
        return replace(self, parameters=kept)

    def with_added_parameters(self, params: Iterable[Parameter]) -> "HttpRequest":
        """Acrescenta os parâmetros ao final, preservando os existentes."""
        return replace(self, parameters=self.parameters + tuple(params))

    def query_string(self) -> str:
        return _render(
            self.raw_query, ParameterType.QUERY, self.parameters_of(ParameterType.QUERY),
        )

    @property
    def target(self) -> str:
        """Caminho com a query string reconstruída."""
        query = self.query_string()
        return f"{self.path}?{query}" if query else self.path

    def body_text(self) -> str:
        """Corpo reconstruído; corpos que não são formulário passam intactos."""
        if not self.form_body:
            return self.body
        return _render(self.body, ParameterType.BODY, self.parameters_of(ParameterType.BODY))

    def cookie_header(self) -> str | None:
        """Cabeçalho Cookie reconstruído, ou None se não restar nenhum cookie."""
        cookie = _render(
            self.raw_cookie, ParameterType.OTHER, self.parameters_of(ParameterType.OTHER),
        )
        if not self.parameters_of(ParameterType.OTHER):
            return None
        # Remoção do primeiro cookie deixa o espaço que o separava do seguinte
        return cookie if cookie == self.raw_cookie else cookie.strip()
