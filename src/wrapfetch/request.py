"""Turn a target and per-call options into a wire-ready request."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping
from urllib.parse import (
    ParseResult,
    SplitResult,
    parse_qsl,
    quote,
    urlencode,
    urljoin,
    urlsplit,
)

from requests.structures import CaseInsensitiveDict

from .body import DEFAULT_CONTENT_TYPE, transform_body
from .errors import MissingBaseURLError
from .forms import FieldValue, MultipartForm
from .headers import HeadersLike, get_header, merge_headers, set_header
from .interceptors import Interceptors
from .retry import RetryControl, RetryDelay

if TYPE_CHECKING:
    from .config import HttpClientConfig

DEFAULT_ACCEPT = "application/json, text/plain, */*"

# Characters left unescaped by JavaScript's encodeURIComponent.
_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class CallOptions:
    """Options for a single call. Never modified by the client."""

    method: str | None = None
    headers: HeadersLike | None = None
    body: Any = None
    qs: Mapping[str, Any | None] | None = None
    form: Mapping[str, FieldValue] | None = None
    form_data: Mapping[str, FieldValue] | None = None
    timeout: float | None = None
    retry: int | None = None
    retry_delay: RetryDelay | None = None
    interceptors: Interceptors | None = None
    allow_redirects: bool = True


@dataclass(frozen=True)
class FormShape:
    fields: Mapping[str, FieldValue]


@dataclass(frozen=True)
class MultipartShape:
    fields: Mapping[str, FieldValue]


@dataclass(frozen=True)
class BodyShape:
    body: Any


@dataclass(frozen=True)
class EmptyShape:
    pass


RequestShape = MultipartShape | FormShape | BodyShape | EmptyShape


def resolve_shape(options: CallOptions) -> RequestShape:
    """Pick the body source; ``form_data`` beats ``form`` beats ``body``."""
    if options.form_data is not None:
        return MultipartShape(options.form_data)
    if options.form is not None:
        return FormShape(options.form)
    if options.body is not None:
        return BodyShape(options.body)
    return EmptyShape()


@dataclass(frozen=True)
class MaterializedRequest:
    """Fully resolved request handed to interceptors and the transport.

    ``headers`` is a fresh container owned by this request; hooks may edit it
    without affecting client defaults or other calls. ``retry_control`` is
    likewise private to this call.
    """

    url: SplitResult
    method: str = "GET"
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: Any = None
    timeout_seconds: float | None = None
    allow_redirects: bool = True
    retry_control: RetryControl = field(
        default_factory=RetryControl, compare=False, repr=False
    )

    @property
    def url_string(self) -> str:
        return self.url.geturl()


def normalize_target(target: Any, base_url: str | None) -> SplitResult:
    """Return ``target`` as an absolute, parsed URL.

    Request handles (anything with a ``url`` attribute) contribute their URL
    only.
    """
    if isinstance(target, str):
        raw = target
    elif isinstance(target, (SplitResult, ParseResult)):
        raw = target.geturl()
    elif hasattr(target, "url"):
        raw = str(target.url)
    else:
        raw = str(target)

    if "://" not in raw:
        if not base_url:
            raise MissingBaseURLError(raw)
        raw = urljoin(base_url, raw)
    return urlsplit(raw)


def encode_form(fields: Mapping[str, FieldValue]) -> str:
    """Encode ``fields`` as a urlencoded string; lists use ``key[]``."""
    parts: list[str] = []
    for name, value in fields.items():
        key = quote(name, safe=_COMPONENT_SAFE)
        if isinstance(value, str):
            parts.append(f"{key}={quote(value, safe=_COMPONENT_SAFE)}")
        else:
            for item in value:
                parts.append(f"{key}[]={quote(item, safe=_COMPONENT_SAFE)}")
    return "&".join(parts)


def apply_query(
    url: SplitResult, qs: Mapping[str, Any | None]
) -> SplitResult:
    """Set ``qs`` entries on the URL query, dropping None values."""
    updates = [
        (name, str(value)) for name, value in qs.items() if value is not None
    ]
    if not updates:
        return url
    params = parse_qsl(url.query, keep_blank_values=True)
    for name, value in updates:
        replaced = False
        kept: list[tuple[str, str]] = []
        for key, current in params:
            if key != name:
                kept.append((key, current))
            elif not replaced:
                kept.append((name, value))
                replaced = True
        if not replaced:
            kept.append((name, value))
        params = kept
    return url._replace(query=urlencode(params))


def resolve_timeout(
    override: float | None, default: float | None
) -> float | None:
    """Resolve timeout preference; None means no timeout."""
    if override is not None:
        if override <= 0:
            raise ValueError("timeout override must be > 0 when provided")
        return override
    return default


def build_request(
    target: Any, options: CallOptions, config: "HttpClientConfig"
) -> MaterializedRequest:
    """Expand ``options`` into a ``MaterializedRequest``.

    Args:
        target: URL string, parsed URL, or request handle.
        options: Per-call options.
        config: Client defaults.

    Returns:
        A new request; neither ``options`` nor ``config`` is modified.

    Raises:
        MissingBaseURLError: ``target`` is relative and no base URL is set.
        ValueError: The timeout override is not positive.
    """
    url = normalize_target(target, config.base_url)

    headers = merge_headers(config.default_headers, options.headers)
    if get_header(headers, "Accept") is None:
        set_header(headers, "Accept", DEFAULT_ACCEPT)
    if config.user_agent and get_header(headers, "User-Agent") is None:
        set_header(headers, "User-Agent", config.user_agent)

    method = options.method
    body: Any = None
    shape = resolve_shape(options)
    if isinstance(shape, FormShape):
        body = encode_form(shape.fields)
        if get_header(headers, "Content-Type") is None:
            set_header(headers, "Content-Type", DEFAULT_CONTENT_TYPE)
        method = method or "POST"
    elif isinstance(shape, MultipartShape):
        body = MultipartForm.from_fields(shape.fields)
        method = method or "POST"

    if options.qs is not None:
        url = apply_query(url, options.qs)

    if isinstance(shape, BodyShape):
        body, method = transform_body(shape.body, headers, method)

    return MaterializedRequest(
        url=url,
        method=method or "GET",
        headers=headers,
        body=body,
        timeout_seconds=resolve_timeout(
            options.timeout, config.timeout_seconds
        ),
        allow_redirects=options.allow_redirects,
    )
