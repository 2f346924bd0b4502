from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rest_requests.caller import HeaderGenerator, RestApiCaller, encode_payload
    from rest_requests.config import RestSettings, load_rest_settings
    from rest_requests.deserializers import (
        DataDeserializer,
        DecodableDeserializer,
        Deserializer,
        ProblemDetails,
        VoidDeserializer,
    )
    from rest_requests.errors import (
        BadResponseError,
        FailedRestCallError,
        InvalidMimeTypeError,
        InvalidQueryParameterError,
        MalformedResponseError,
        RestError,
        RestErrorKind,
        UnexpectedHttpStatusCodeError,
        is_retryable,
    )
    from rest_requests.http_util import (
        HTTPHeaderKeys,
        HTTPMethod,
        HTTPStatusCode,
        MimeType,
        StatusCode,
        StatusType,
        is_client_error,
        is_server_error,
        is_success,
        status_type,
    )
    from rest_requests.interceptors.base import URLRequestInterceptor
    from rest_requests.interceptors.log_network import LogNetworkInterceptor
    from rest_requests.interceptors.otel import TracePropagationInterceptor
    from rest_requests.options import DateDecodingStrategy, RestOptions
    from rest_requests.security.authorizer_interceptor import AuthorizerInterceptor
    from rest_requests.security.authorizers import (
        BasicRequestAuthorizer,
        BearerRequestAuthorizer,
        NoneAuthorizer,
        URLRequestAuthorizer,
    )
    from rest_requests.security.pinning import ca_pinning_ssl_context
    from rest_requests.security.public_key_pinning import (
        PublicKeyPinningError,
        PublicKeyServerPinning,
        public_key_pin,
    )
    from rest_requests.transport.base import (
        HTTPResponseLike,
        RestRequest,
        RestResponse,
        Transport,
    )
    from rest_requests.transport.httpx import HTTPXTransport
    from rest_requests.utils.retry import RetryConfig, retry_with_backoff

__SPEC_PARENT__: str = __spec__.parent  # type: ignore
# A mapping of {<member name>: (package, <module name>, <real name>)} defining dynamic imports
_dynamic_imports: "dict[str, tuple[str, str, str | None]]" = {
    "RestApiCaller": (__SPEC_PARENT__, "caller", None),
    "HeaderGenerator": (__SPEC_PARENT__, "caller", None),
    "encode_payload": (__SPEC_PARENT__, "caller", None),
    "RestSettings": (__SPEC_PARENT__, "config", None),
    "load_rest_settings": (__SPEC_PARENT__, "config", None),
    "RestOptions": (__SPEC_PARENT__, "options", None),
    "DateDecodingStrategy": (__SPEC_PARENT__, "options", None),
    "Deserializer": (__SPEC_PARENT__, "deserializers", None),
    "DecodableDeserializer": (__SPEC_PARENT__, "deserializers", None),
    "VoidDeserializer": (__SPEC_PARENT__, "deserializers", None),
    "DataDeserializer": (__SPEC_PARENT__, "deserializers", None),
    "ProblemDetails": (__SPEC_PARENT__, "deserializers", None),
    "RestError": (__SPEC_PARENT__, "errors", None),
    "RestErrorKind": (__SPEC_PARENT__, "errors", None),
    "BadResponseError": (__SPEC_PARENT__, "errors", None),
    "FailedRestCallError": (__SPEC_PARENT__, "errors", None),
    "InvalidMimeTypeError": (__SPEC_PARENT__, "errors", None),
    "InvalidQueryParameterError": (__SPEC_PARENT__, "errors", None),
    "MalformedResponseError": (__SPEC_PARENT__, "errors", None),
    "UnexpectedHttpStatusCodeError": (__SPEC_PARENT__, "errors", None),
    "is_retryable": (__SPEC_PARENT__, "errors", None),
    "HTTPHeaderKeys": (__SPEC_PARENT__, "http_util", None),
    "HTTPMethod": (__SPEC_PARENT__, "http_util", None),
    "HTTPStatusCode": (__SPEC_PARENT__, "http_util", None),
    "MimeType": (__SPEC_PARENT__, "http_util", None),
    "StatusCode": (__SPEC_PARENT__, "http_util", None),
    "StatusType": (__SPEC_PARENT__, "http_util", None),
    "status_type": (__SPEC_PARENT__, "http_util", None),
    "is_success": (__SPEC_PARENT__, "http_util", None),
    "is_client_error": (__SPEC_PARENT__, "http_util", None),
    "is_server_error": (__SPEC_PARENT__, "http_util", None),
    "URLRequestInterceptor": (__SPEC_PARENT__, "interceptors.base", None),
    "LogNetworkInterceptor": (__SPEC_PARENT__, "interceptors.log_network", None),
    "TracePropagationInterceptor": (__SPEC_PARENT__, "interceptors.otel", None),
    "AuthorizerInterceptor": (__SPEC_PARENT__, "security.authorizer_interceptor", None),
    "URLRequestAuthorizer": (__SPEC_PARENT__, "security.authorizers", None),
    "NoneAuthorizer": (__SPEC_PARENT__, "security.authorizers", None),
    "BasicRequestAuthorizer": (__SPEC_PARENT__, "security.authorizers", None),
    "BearerRequestAuthorizer": (__SPEC_PARENT__, "security.authorizers", None),
    "ca_pinning_ssl_context": (__SPEC_PARENT__, "security.pinning", None),
    "PublicKeyServerPinning": (__SPEC_PARENT__, "security.public_key_pinning", None),
    "PublicKeyPinningError": (__SPEC_PARENT__, "security.public_key_pinning", None),
    "public_key_pin": (__SPEC_PARENT__, "security.public_key_pinning", None),
    "Transport": (__SPEC_PARENT__, "transport.base", None),
    "HTTPResponseLike": (__SPEC_PARENT__, "transport.base", None),
    "RestRequest": (__SPEC_PARENT__, "transport.base", None),
    "RestResponse": (__SPEC_PARENT__, "transport.base", None),
    "HTTPXTransport": (__SPEC_PARENT__, "transport.httpx", None),
    "RetryConfig": (__SPEC_PARENT__, "utils.retry", None),
    "retry_with_backoff": (__SPEC_PARENT__, "utils.retry", None),
}

__all__ = list(_dynamic_imports)


def __getattr__(attr_name: str) -> object:

    dynamic_attr = _dynamic_imports.get(attr_name)
    if dynamic_attr is None:
        raise AttributeError(f"module {__name__!r} has no attribute {attr_name!r}")

    package, module_name, realname = dynamic_attr

    module = import_module(f"{package}.{module_name}", package=package)
    result = getattr(module, attr_name if realname is None else realname)
    g = globals()
    g[attr_name] = result
    # cache every member of the same module, the optional otel and pinning modules stay lazy
    for k, (_, v_module_name, v_realname) in _dynamic_imports.items():
        if v_module_name == module_name:
            g[k] = getattr(module, k if v_realname is None else v_realname)
    return result


def __dir__() -> "list[str]":
    return list(__all__)
