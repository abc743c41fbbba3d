"""Shared test fixtures and configuration."""

from pathlib import Path

import pytest

from core.settings import ValidatorSettings


CATALOG_XSD = """<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:element name="catalog">
    <xs:complexType>
      <xs:sequence>
        <xs:element name="title" type="xs:string"/>
        <xs:element name="entry" minOccurs="0" maxOccurs="unbounded">
          <xs:complexType>
            <xs:sequence>
              <xs:element name="name" type="xs:string"/>
              <xs:element name="price" type="xs:decimal"/>
            </xs:sequence>
            <xs:attribute name="id" type="xs:string" use="required"/>
          </xs:complexType>
        </xs:element>
      </xs:sequence>
    </xs:complexType>
  </xs:element>
</xs:schema>
"""

CATALOG_JSON_SCHEMA = """{
  "$schema": "https://json-schema.org/draft/2020-12/schema",
  "type": "object",
  "required": ["catalog"],
  "properties": {
    "catalog": {
      "type": "object",
      "required": ["title"],
      "additionalProperties": false,
      "properties": {
        "title": {"type": "string"},
        "entry": {
          "type": "array",
          "items": {
            "type": "object",
            "required": ["id", "name", "price"],
            "properties": {
              "id": {"type": "string"},
              "name": {"type": "string"},
              "price": {"type": "number"}
            }
          }
        }
      }
    }
  }
}
"""

CATALOG_RULES = """<?xml version="1.0" encoding="UTF-8"?>
<schema xmlns="http://purl.oclc.org/dsdl/schematron">
  <pattern id="catalog-rules">
    <rule context="catalog">
      <report test="not(entry)" role="warning">The catalog has no entries.</report>
    </rule>
    <rule context="entry">
      <assert test="number(price) &gt;= 0">Entry price must not be negative.</assert>
    </rule>
  </pattern>
</schema>
"""

VALID_XML = """<?xml version="1.0" encoding="UTF-8"?>
<catalog>
  <title>Hardware</title>
  <entry id="b1">
    <name>Bolt</name>
    <price>0.25</price>
  </entry>
</catalog>
"""

# Same catalog without its required <title>
MISSING_TITLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<catalog>
  <entry id="b1">
    <name>Bolt</name>
    <price>0.25</price>
  </entry>
</catalog>
"""

NEGATIVE_PRICE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<catalog>
  <title>Hardware</title>
  <entry id="b1">
    <name>Bolt</name>
    <price>-3</price>
  </entry>
</catalog>
"""

VALID_JSON = """{
  "catalog": {
    "title": "Hardware",
    "entry": [{"id": "b1", "name": "Bolt", "price": 0.25}]
  }
}
"""

NEGATIVE_PRICE_JSON = """{
  "catalog": {
    "title": "Hardware",
    "entry": [{"id": "b1", "name": "Bolt", "price": -3}]
  }
}
"""

WRONG_TYPE_JSON = """{
  "catalog": {
    "title": "Hardware",
    "entry": [{"id": "b1", "name": "Bolt", "price": "cheap"}]
  }
}
"""

VALID_YAML = """catalog:
  title: Hardware
  entry:
    - id: b1
      name: Bolt
      price: 0.25
"""

NEGATIVE_PRICE_YAML = """catalog:
  title: Hardware
  entry:
    - id: b1
      name: Bolt
      price: -3
"""

WRONG_TYPE_YAML = """catalog:
  title: Hardware
  entry:
    - id: b1
      name: Bolt
      price: cheap
"""


@pytest.fixture
def write_file(tmp_path: Path):
    """Write text to a file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def schema_files(write_file) -> dict:
    return {
        "xsd": write_file("catalog.xsd", CATALOG_XSD),
        "json_schema": write_file("catalog.schema.json", CATALOG_JSON_SCHEMA),
        "schematron": write_file("catalog.sch", CATALOG_RULES),
    }


@pytest.fixture
def settings(schema_files) -> ValidatorSettings:
    return ValidatorSettings(
        xsd_files=[schema_files["xsd"]],
        json_schema_file=schema_files["json_schema"],
        schematron_file=schema_files["schematron"],
    )
