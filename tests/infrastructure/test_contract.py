"""Tests for the operation contract."""

from pathlib import Path

import pytest

from zuora.domain.errors import ConfigError, UnknownOperationError
from zuora.infrastructure.contract import DEFAULT_OPERATIONS, Contract

WSDL = """<?xml version="1.0"?>
<definitions xmlns="http://schemas.xmlsoap.org/wsdl/"
             xmlns:xsd="http://www.w3.org/2001/XMLSchema"
             xmlns:tns="http://api.zuora.com/"
             targetNamespace="http://api.zuora.com/"
             name="ZuoraService">
  <message name="loginRequest">
    <part name="username" type="xsd:string"/>
    <part name="password" type="xsd:string"/>
  </message>
  <message name="loginResponse">
    <part name="session" type="xsd:string"/>
  </message>
  <message name="queryRequest">
    <part name="queryString" type="xsd:string"/>
  </message>
  <message name="queryResponse">
    <part name="size" type="xsd:int"/>
  </message>
  <portType name="Soap">
    <operation name="login">
      <input message="tns:loginRequest"/>
      <output message="tns:loginResponse"/>
    </operation>
    <operation name="query">
      <input message="tns:queryRequest"/>
      <output message="tns:queryResponse"/>
    </operation>
  </portType>
</definitions>
"""


class TestContract:
    def test_default_operations(self) -> None:
        contract = Contract()
        for op in ("login", "create", "update", "delete", "query", "queryMore", "amend"):
            assert op in contract
        assert contract.operations == DEFAULT_OPERATIONS

    def test_validate_unknown(self) -> None:
        with pytest.raises(UnknownOperationError):
            Contract().validate("destroyEverything")


class TestFromWsdl:
    def test_reads_port_type_operations(self, tmp_path: Path) -> None:
        path = tmp_path / "zuora.a.63.0.wsdl"
        path.write_text(WSDL)
        contract = Contract.from_wsdl(path)
        assert contract.operations == frozenset({"login", "query"})
        with pytest.raises(UnknownOperationError):
            contract.validate("amend")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            Contract.from_wsdl(tmp_path / "nope.wsdl")

    def test_malformed_document(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.wsdl"
        path.write_text("<definitions")
        with pytest.raises(ConfigError, match="Cannot read WSDL"):
            Contract.from_wsdl(path)

    def test_no_operations(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.wsdl"
        path.write_text(
            '<definitions xmlns="http://schemas.xmlsoap.org/wsdl/" targetNamespace="http://api.zuora.com/"/>'
        )
        with pytest.raises(ConfigError, match="No operations"):
            Contract.from_wsdl(path)
