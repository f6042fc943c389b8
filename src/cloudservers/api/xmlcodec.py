"""Decoder for the XML server representation returned by ``/servers.xml``."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from cloudservers.api.exceptions import CloudServersAPIError
from cloudservers.api.models import Server


def _local(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tags."""
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def parse_server(content: str | bytes) -> Server:
    """Decode a ``<server>`` document into a :class:`Server`.

    Attributes map one-to-one onto the JSON field names; addresses are
    ``<ip addr=...>`` elements and metadata is ``<meta key=...>`` text.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        raise CloudServersAPIError(f"Malformed server XML: {exc}") from exc
    if _local(root.tag) != "server":
        raise CloudServersAPIError(f"Expected <server>, got <{_local(root.tag)}>")

    data: dict = dict(root.attrib)
    addresses: dict[str, list[str]] = {"public": [], "private": []}
    for block in _children(root, "addresses"):
        for kind in ("public", "private"):
            for group in _children(block, kind):
                addresses[kind].extend(
                    ip.get("addr", "") for ip in _children(group, "ip")
                )
    data["addresses"] = addresses

    metadata: dict[str, str] = {}
    for block in _children(root, "metadata"):
        for meta in _children(block, "meta"):
            metadata[meta.get("key", "")] = meta.text or ""
    data["metadata"] = metadata
    return Server(**data)
