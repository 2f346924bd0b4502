# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import threading
import time
from http.cookiejar import Cookie, CookieJar, domain_match
from types import TracebackType
from typing import (
    Any,
    Mapping,
    Optional,
    Protocol,
    TypeVar,
    overload,
)

import httpx
from pydantic import BaseModel
from pydantic_core import to_json

from rest_requests.config import RestSettings, load_rest_settings
from rest_requests.deserializers import (
    DecodableDeserializer,
    Deserializer,
    VoidDeserializer,
)
from rest_requests.errors import (
    BadResponseError,
    FailedRestCallError,
    InvalidMimeTypeError,
    InvalidQueryParameterError,
    MalformedResponseError,
    UnexpectedHttpStatusCodeError,
)
from rest_requests.http_util import (
    HTTPHeaderKeys,
    HTTPMethod,
    HTTPStatusCode,
    MimeType,
    StatusCode,
    is_success,
    parse_mime_type,
    status_type,
    to_status_code,
)
from rest_requests.interceptors.base import URLRequestInterceptor
from rest_requests.interceptors.log_network import LogNetworkInterceptor
from rest_requests.options import RestOptions
from rest_requests.security.authorizer_interceptor import AuthorizerInterceptor
from rest_requests.security.authorizers import URLRequestAuthorizer
from rest_requests.transport.base import (
    HTTPResponseLike,
    RestRequest,
    RestResponse,
    Transport,
)
from rest_requests.transport.httpx import HTTPXTransport

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_OPTIONS = RestOptions()


class HeaderGenerator(Protocol):
    """Produces extra headers for the final URL of each request"""

    def __call__(self, url: httpx.URL) -> Optional[Mapping[str, str]]: ...


def encode_payload(body: Any) -> Optional[bytes]:
    """JSON encode a request body, `bytes` are sent unchanged and None means no body"""
    if body is None:
        return None
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    if isinstance(body, BaseModel):
        return body.model_dump_json().encode()
    return to_json(body)


def _escape_path(relative_path: str) -> str:
    return relative_path.replace("?", "%3F").replace("#", "%23")


class RestApiCaller:
    """
    Typed REST client bound to one base URL.

    Each call builds the request, runs the interceptors, sends it through the
    transport, validates status and MIME type and deserializes the body.
    Failures are raised as `RestError` subclasses, transport errors propagate unchanged.

    An authorizer, when given, is installed as the first interceptor, followed
    by a `LogNetworkInterceptor`.
    """

    def __init__(
        self,
        base_url: str | httpx.URL,
        transport: Optional[Transport] = None,
        *,
        authorizer: Optional[URLRequestAuthorizer] = None,
        error_deserializer: Optional[Deserializer[Any]] = None,
        header_generator: Optional[HeaderGenerator] = None,
        enable_network_trace: Optional[bool] = None,
        cookie_store: Optional[CookieJar] = None,
        settings: Optional[RestSettings] = None,
    ):
        self.settings = settings or load_rest_settings()
        self.base_url = httpx.URL(base_url)
        self.error_deserializer = error_deserializer
        self.header_generator = header_generator
        self.authorizer = authorizer
        self.cookie_store = cookie_store

        self._owns_transport = transport is None
        self.transport: Transport = transport or HTTPXTransport(
            settings=self.settings, cookie_store=cookie_store
        )

        self._interceptor_lock = threading.Lock()
        self._interceptors: list[URLRequestInterceptor] = []

        if enable_network_trace is None:
            enable_network_trace = self.settings.network_trace

        if authorizer is not None:
            self.register_request_interceptor(AuthorizerInterceptor(authorizer))

        self.register_request_interceptor(LogNetworkInterceptor(enable_network_trace))

        logger.info(
            "Created RestApiCaller (base_url=%s; network_trace=%s)",
            self.base_url,
            enable_network_trace,
        )

    async def __aenter__(self) -> "RestApiCaller":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the transport when this caller created it"""
        if self._owns_transport:
            await self.transport.aclose()

    # Interceptors

    def register_request_interceptor(self, interceptor: URLRequestInterceptor) -> None:
        """
        Append an interceptor to the chain.
        Requests pass through interceptors in registration order, responses in reverse order.
        """
        logger.info("Registering request interceptor: %r", interceptor)

        with self._interceptor_lock:
            self._interceptors.append(interceptor)

    @property
    def interceptors(self) -> tuple[URLRequestInterceptor, ...]:
        with self._interceptor_lock:
            return tuple(self._interceptors)

    # Request building

    def _build_url(
        self, relative_path: Optional[str], query_parameters: Optional[Mapping[str, str]]
    ) -> httpx.URL:
        url = self.base_url
        if relative_path is not None:
            path = url.path.rstrip("/") + "/" + _escape_path(relative_path.lstrip("/"))
            url = url.copy_with(path=path)

        if query_parameters:
            try:
                url = url.copy_merge_params(query_parameters)
            except (httpx.InvalidURL, ValueError, TypeError) as err:
                raise InvalidQueryParameterError() from err

        return url

    def _insert_http_headers(
        self, request: RestRequest, accept: str, http_headers: Optional[Mapping[str, str]]
    ) -> None:
        request.set_header(HTTPHeaderKeys.ACCEPT.value, accept)

        for key, value in (http_headers or {}).items():
            request.set_header(key, value)

        if self.header_generator is not None:
            generated_headers = self.header_generator(request.url)
            for key, value in (generated_headers or {}).items():
                request.set_header(key, value)

    def _add_payload(self, request: RestRequest, payload: Optional[bytes]) -> None:
        if payload is not None:
            request.set_header(
                HTTPHeaderKeys.CONTENT_TYPE.value, MimeType.APPLICATION_JSON.value
            )
            request.body = payload

    # Response handling

    def _as_rest_response(self, data: bytes, response: Any) -> RestResponse:
        if not isinstance(response, HTTPResponseLike) or not isinstance(
            response.status_code, int
        ):
            raise BadResponseError(response, data)

        # any code of the 100-599 range is valid HTTP, registered in the status table or not
        try:
            status_type(response.status_code)
        except ValueError as err:
            raise BadResponseError(response, data) from err

        if isinstance(response, RestResponse):
            return response

        return RestResponse(
            status_code=response.status_code,
            headers=httpx.Headers(response.headers),
            url=httpx.URL(str(response.url)),
            elapsed_time=getattr(response, "elapsed_time", None),
        )

    def _validated_mime_type(self, response: RestResponse) -> MimeType:
        content_type = response.header(HTTPHeaderKeys.CONTENT_TYPE.value)
        mime_type = parse_mime_type(content_type)
        if mime_type is None:
            raise InvalidMimeTypeError(content_type)
        return mime_type

    def _decode_successful_response(
        self,
        data: bytes,
        response: RestResponse,
        status: StatusCode,
        deserializer: Deserializer[T],
    ) -> Optional[T]:
        # only the canonical success code carries a body worth decoding
        if status != HTTPStatusCode.OK:
            return None
        try:
            return deserializer.deserialize(data)
        except Exception as err:
            raise MalformedResponseError(response, data, err) from err

    def _build_error_response(
        self, data: bytes, response: RestResponse, status: StatusCode
    ) -> FailedRestCallError:
        error_payload: Any = None
        if self.error_deserializer is not None:
            try:
                error_payload = self.error_deserializer.deserialize(data)
            except Exception as err:
                raise MalformedResponseError(response, data, err) from err
        return FailedRestCallError(response, status, error_payload)

    # Dispatch

    async def _data_task(
        self,
        relative_path: Optional[str],
        http_method: HTTPMethod,
        accept: str,
        payload: Optional[bytes],
        options: RestOptions,
    ) -> tuple[bytes, RestResponse]:
        logger.debug(
            "Data task %s %s started with timeout %s seconds",
            http_method.value,
            relative_path,
            options.request_timeout_seconds,
        )

        url = self._build_url(relative_path, options.query_parameters)

        request = RestRequest(
            url=url,
            method=http_method.value,
            timeout=options.request_timeout_seconds,
        )

        self._insert_http_headers(request, accept, options.http_headers)
        self._add_payload(request, payload)

        interceptors = self.interceptors

        for interceptor in interceptors:
            request = interceptor.invoke_request(request)

        data, raw_response = await self.transport.send(request)

        response = self._as_rest_response(data, raw_response)

        # most recently registered interceptor observes the response first
        for interceptor in reversed(interceptors):
            interceptor.receive_response(data, response)

        expected_status_codes = options.expected_status_codes
        if (
            expected_status_codes is not None
            and response.status_code not in expected_status_codes
        ):
            logger.debug(
                "Status %s not in expected status codes %s",
                response.status_code,
                sorted(int(code) for code in expected_status_codes),
            )
            raise UnexpectedHttpStatusCodeError(response.status_code)

        return data, response

    async def call(
        self,
        relative_path: Optional[str],
        http_method: HTTPMethod | str,
        payload: Optional[bytes],
        deserializer: Deserializer[T],
        options: Optional[RestOptions] = None,
    ) -> tuple[Optional[T], StatusCode]:
        """
        Execute one REST call and deserialize the response.

        Returns the deserialized body (only for `200 OK`, None otherwise) and the status.
        Raises a `RestError` subclass when the call fails.
        """
        options = options or DEFAULT_OPTIONS
        http_method = HTTPMethod(http_method)
        start_time = time.time()

        data, response = await self._data_task(
            relative_path, http_method, deserializer.accept_header, payload, options
        )

        status = to_status_code(response.status_code)
        logger.debug(
            "%s %s answered %s in %.3fs",
            http_method.value,
            response.url,
            int(status),
            time.time() - start_time,
        )

        if is_success(status) and (
            isinstance(deserializer, VoidDeserializer)
            or status == HTTPStatusCode.NO_CONTENT
        ):
            return None, status

        if not data:
            logger.warning("Empty body with status %s for %s", int(status), response.url)
            raise FailedRestCallError(response, status, None)

        self._validated_mime_type(response)

        if is_success(status):
            return (
                self._decode_successful_response(data, response, status, deserializer),
                status,
            )

        error = self._build_error_response(data, response, status)
        logger.warning("REST call failed with status %s for %s", int(status), response.url)
        raise error

    async def _typed_call(
        self,
        relative_path: Optional[str],
        http_method: HTTPMethod,
        body: Any,
        response_type: Any,
        options: Optional[RestOptions],
    ) -> Any:
        options = options or DEFAULT_OPTIONS
        payload = encode_payload(body)

        if response_type is None:
            _, status = await self.call(
                relative_path, http_method, payload, VoidDeserializer(), options
            )
            return status

        return await self.call(
            relative_path,
            http_method,
            payload,
            DecodableDeserializer(response_type, options.date_decoding_strategy),
            options,
        )

    # Public HTTP verbs

    @overload
    async def get(
        self,
        path: Optional[str] = None,
        response_type: None = None,
        *,
        options: Optional[RestOptions] = None,
    ) -> StatusCode: ...

    @overload
    async def get(
        self,
        path: Optional[str],
        response_type: type[T],
        *,
        options: Optional[RestOptions] = None,
    ) -> tuple[Optional[T], StatusCode]: ...

    async def get(
        self,
        path: Optional[str] = None,
        response_type: Any = None,
        *,
        options: Optional[RestOptions] = None,
    ) -> Any:
        """
        GET `path` (the base URL when None).
        With `response_type` returns `(value, status)`, the value being set only for `200 OK`.
        Without it, the body is ignored and only the status is returned.
        """
        return await self._typed_call(path, HTTPMethod.GET, None, response_type, options)

    @overload
    async def post(
        self,
        body: Any = None,
        path: Optional[str] = None,
        response_type: None = None,
        *,
        options: Optional[RestOptions] = None,
    ) -> StatusCode: ...

    @overload
    async def post(
        self,
        body: Any,
        path: Optional[str],
        response_type: type[T],
        *,
        options: Optional[RestOptions] = None,
    ) -> tuple[Optional[T], StatusCode]: ...

    async def post(
        self,
        body: Any = None,
        path: Optional[str] = None,
        response_type: Any = None,
        *,
        options: Optional[RestOptions] = None,
    ) -> Any:
        """POST `body` encoded as JSON, see `get` for the return value"""
        return await self._typed_call(path, HTTPMethod.POST, body, response_type, options)

    @overload
    async def put(
        self,
        body: Any = None,
        path: Optional[str] = None,
        response_type: None = None,
        *,
        options: Optional[RestOptions] = None,
    ) -> StatusCode: ...

    @overload
    async def put(
        self,
        body: Any,
        path: Optional[str],
        response_type: type[T],
        *,
        options: Optional[RestOptions] = None,
    ) -> tuple[Optional[T], StatusCode]: ...

    async def put(
        self,
        body: Any = None,
        path: Optional[str] = None,
        response_type: Any = None,
        *,
        options: Optional[RestOptions] = None,
    ) -> Any:
        return await self._typed_call(path, HTTPMethod.PUT, body, response_type, options)

    @overload
    async def patch(
        self,
        body: Any = None,
        path: Optional[str] = None,
        response_type: None = None,
        *,
        options: Optional[RestOptions] = None,
    ) -> StatusCode: ...

    @overload
    async def patch(
        self,
        body: Any,
        path: Optional[str],
        response_type: type[T],
        *,
        options: Optional[RestOptions] = None,
    ) -> tuple[Optional[T], StatusCode]: ...

    async def patch(
        self,
        body: Any = None,
        path: Optional[str] = None,
        response_type: Any = None,
        *,
        options: Optional[RestOptions] = None,
    ) -> Any:
        return await self._typed_call(
            path, HTTPMethod.PATCH, body, response_type, options
        )

    @overload
    async def delete(
        self,
        body: Any = None,
        path: Optional[str] = None,
        response_type: None = None,
        *,
        options: Optional[RestOptions] = None,
    ) -> StatusCode: ...

    @overload
    async def delete(
        self,
        body: Any,
        path: Optional[str],
        response_type: type[T],
        *,
        options: Optional[RestOptions] = None,
    ) -> tuple[Optional[T], StatusCode]: ...

    async def delete(
        self,
        body: Any = None,
        path: Optional[str] = None,
        response_type: Any = None,
        *,
        options: Optional[RestOptions] = None,
    ) -> Any:
        return await self._typed_call(
            path, HTTPMethod.DELETE, body, response_type, options
        )

    # Cookies

    def http_cookies(self) -> list[Cookie]:
        """Every cookie held by the cookie store, empty without a store"""
        if self.cookie_store is None:
            return []
        return list(self.cookie_store)

    def http_cookies_for(self, url: str | httpx.URL) -> Optional[list[Cookie]]:
        """Cookies that would be sent to `url`, None without a cookie store"""
        if self.cookie_store is None:
            return None

        target = httpx.URL(url)
        host = target.host.lower()
        path = target.path or "/"
        now = int(time.time())

        return [
            cookie
            for cookie in self.cookie_store
            if _cookie_matches(cookie, host, path, target.scheme, now)
        ]

    def delete_all_cookies(self) -> None:
        if self.cookie_store is not None:
            self.cookie_store.clear()


def _cookie_matches(cookie: Cookie, host: str, path: str, scheme: str, now: int) -> bool:
    if cookie.is_expired(now):
        return False
    if cookie.secure and scheme != "https":
        return False

    domain = cookie.domain.lower()
    if cookie.domain_specified or domain.startswith("."):
        if not (host == domain.lstrip(".") or domain_match(host, domain)):
            return False
    elif host != domain:
        return False

    cookie_path = cookie.path or "/"
    if path != cookie_path and not path.startswith(cookie_path.rstrip("/") + "/"):
        return False

    return True


__all__ = ["RestApiCaller", "HeaderGenerator", "encode_payload"]
