"""
Response body decoding.

Turns a raw provider response into a plain dict according to the
configured response type. Pure functions, no I/O.
"""

import csv
import io
import json
import urllib.parse
from typing import Any
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as ET

from oauth2_client.config import ResponseType
from oauth2_client.core.exceptions import MalformedResponseError


def decode_response(raw: str | bytes | None, response_type: ResponseType | str) -> dict[str, Any]:
    """
    Decode a response body.

    Args:
        raw: Raw response body
        response_type: json, csv, xml or string (query-string)

    Returns:
        Decoded mapping; an empty body decodes to {}

    Raises:
        MalformedResponseError: If the body cannot be parsed in that format
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedResponseError(f"Response is not valid UTF-8: {e}") from e

    if raw is None or not raw.strip():
        return {}

    if isinstance(response_type, str) and response_type == "query-string":
        response_type = ResponseType.STRING

    decoder = _DECODERS[ResponseType(response_type)]
    return decoder(raw)


def _decode_json(raw: str) -> dict[str, Any]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Invalid JSON response: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"JSON response must be an object, got {type(data).__name__}"
        )
    return data


def _decode_csv(raw: str) -> dict[str, Any]:
    try:
        rows = [row for row in csv.reader(io.StringIO(raw.strip())) if row]
    except csv.Error as e:
        raise MalformedResponseError(f"Invalid CSV response: {e}") from e

    header, records = rows[0], rows[1:]
    if not records:
        raise MalformedResponseError("CSV response has a header but no values")

    for record in records:
        if len(record) != len(header):
            raise MalformedResponseError(
                f"CSV row has {len(record)} fields, header has {len(header)}"
            )

    mapped = [dict(zip(header, record)) for record in records]
    if len(mapped) == 1:
        return mapped[0]
    return {"rows": mapped}


def _decode_xml(raw: str) -> dict[str, Any]:
    try:
        root = ET.fromstring(raw, forbid_dtd=True)
    except ET.ParseError as e:
        raise MalformedResponseError(f"Invalid XML response: {e}") from e
    except DefusedXmlException as e:
        raise MalformedResponseError(f"Forbidden XML construct in response: {e!r}") from e

    data = _xml_to_dict(root)
    if data is None:
        return {}
    if not isinstance(data, dict):
        # <access_token>abc</access_token> style single-element body
        return {root.tag: data}
    return data


def _xml_to_dict(element: Element) -> Any:
    """Convert an XML element to a dict, or to its text for leaf elements."""
    result: dict[str, Any] = {}

    if element.attrib:
        result.update(element.attrib)

    text = element.text.strip() if element.text else ""
    if text:
        if not result and len(element) == 0:
            return text
        result["_text"] = text

    for child in element:
        child_data = _xml_to_dict(child)
        if child.tag in result:
            # Repeated tags become a list
            if not isinstance(result[child.tag], list):
                result[child.tag] = [result[child.tag]]
            result[child.tag].append(child_data)
        else:
            result[child.tag] = child_data

    if not result and len(element) == 0:
        return None
    return result


def _decode_query_string(raw: str) -> dict[str, Any]:
    try:
        pairs = urllib.parse.parse_qsl(
            raw.strip(), keep_blank_values=True, strict_parsing=True
        )
    except ValueError as e:
        raise MalformedResponseError(f"Invalid query-string response: {e}") from e

    return dict(pairs)


_DECODERS = {
    ResponseType.JSON: _decode_json,
    ResponseType.CSV: _decode_csv,
    ResponseType.XML: _decode_xml,
    ResponseType.STRING: _decode_query_string,
}
