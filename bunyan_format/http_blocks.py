"""Readable text blocks for the HTTP sub-objects of a record.

Each builder works on a copy of the sub-object and returns the rendered block
together with the keys it did not consume, which the caller promotes to the
top level of the record.
"""

from http import HTTPStatus

from bunyan_format.text import format_body, is_present, to_text


def reason_phrase(status_code) -> str:
    """Standard reason phrase for a status code, or '' when unknown."""
    try:
        return HTTPStatus(int(status_code)).phrase
    except (TypeError, ValueError):
        return ""


def _header_lines(headers: dict) -> str:
    return "\n".join(f"{name}: {to_text(value)}" for name, value in headers.items())


def _http_version(version) -> str:
    return to_text(version) if is_present(version) else "1.1"


def format_request(req: dict) -> tuple[str, dict]:
    """Render a server-side request ('req')."""
    rest = dict(req)
    method = rest.pop("method", None)
    url = rest.pop("url", None)
    version = rest.pop("httpVersion", None)
    headers = rest.pop("headers", None)
    body = rest.pop("body", None)
    trailers = rest.pop("trailers", None)

    block = f"{to_text(method)} {to_text(url)} HTTP/{_http_version(version)}"
    if isinstance(headers, dict):
        block += "\n" + _header_lines(headers)
    if is_present(body):
        block += "\n\n" + format_body(body)
    if isinstance(trailers, dict) and trailers:
        block += "\n" + _header_lines(trailers)
    return block, rest


def format_client_request(client_req: dict) -> tuple[str, dict]:
    """Render an outgoing request ('client_req'), with a Host line from address/port."""
    rest = dict(client_req)
    method = rest.pop("method", None)
    url = rest.pop("url", None)
    version = rest.pop("httpVersion", None)
    headers = rest.pop("headers", None)
    address = rest.pop("address", None)
    port = rest.pop("port", None)
    body = rest.pop("body", None)

    host_line = ""
    if is_present(address):
        host_line = f"Host: {to_text(address)}"
        if is_present(port):
            host_line += f":{to_text(port)}"
        host_line += "\n"

    header_text = _header_lines(headers) if isinstance(headers, dict) else ""
    block = (
        f"{to_text(method)} {to_text(url)} HTTP/{_http_version(version)}\n"
        f"{host_line}{header_text}"
    )
    if is_present(body):
        block += "\n\n" + format_body(body)
    return block, rest


def format_response(res: dict) -> tuple[str, dict]:
    """Render a response ('res' or 'client_res').

    A raw 'header' string wins over 'statusCode' + 'headers'. The block may be
    empty when the response carries none of these fields.
    """
    rest = dict(res)
    header = rest.pop("header", None)
    headers = rest.pop("headers", None)
    status_code = rest.pop("statusCode", None)
    body = rest.pop("body", None)
    trailer = rest.pop("trailer", None)

    block = ""
    if is_present(header):
        block += to_text(header).rstrip()
    elif is_present(headers):
        if is_present(status_code):
            block += f"HTTP/1.1 {to_text(status_code)} {reason_phrase(status_code)}\n"
        if isinstance(headers, dict):
            block += _header_lines(headers)
    if is_present(body):
        block += "\n\n" + format_body(body)
    if is_present(trailer):
        block += "\n" + to_text(trailer)
    return block, rest
