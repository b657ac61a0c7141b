import xml.etree.ElementTree as ET
from typing import Any, Mapping

from werkzeug import Response


class XmlResponseFormatter:
    """
    xml response formatter

    serializes nested dictionaries into an xml document: mappings become
    child elements in insertion order, lists become repeated item elements
    """
    def __init__(self,
                 root_tag: str = 'xml',
                 item_tag: str = 'item',
                 content_type: str = 'text/html',
                 version: str = '1.0',
                 encoding: str = 'UTF-8'):
        self.root_tag = root_tag
        self.item_tag = item_tag
        self.content_type = content_type
        self.version = version
        self.encoding = encoding

    def format(self, data: Mapping[str, Any]) -> str:
        """
        format data to xml

        params:
            data: reply data, keys are used verbatim as tag names

        return:
            xml document string with declaration
        """
        root = ET.Element(self.root_tag)
        self._build(root, data)
        body = ET.tostring(root, encoding='unicode')
        return f'<?xml version="{self.version}" encoding="{self.encoding}"?>\n{body}'

    def build_response(self, data: Mapping[str, Any], status: int = 200) -> Response:
        """format data and wrap it in a response, body encoded with the declared encoding"""
        body = self.format(data).encode(self.encoding)
        return Response(body, status=status, content_type=self.content_type)

    def _build(self, element: ET.Element, data: Any) -> None:
        if isinstance(data, Mapping):
            for name, value in data.items():
                child = ET.SubElement(element, str(name))
                self._build(child, value)
        elif isinstance(data, (list, tuple)):
            for value in data:
                child = ET.SubElement(element, self.item_tag)
                self._build(child, value)
        elif isinstance(data, bool):
            element.text = 'true' if data else 'false'
        elif data is not None:
            element.text = str(data)
