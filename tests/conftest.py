from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

COUNTERPARTY = "37617049457"

_LINE_TEMPLATE = """
  <cac:InvoiceLine>
    <cbc:ID>{id}</cbc:ID>
    <cbc:InvoicedQuantity unitCode="{unit}">{quantity}</cbc:InvoicedQuantity>
    <cbc:LineExtensionAmount currencyID="EUR">{amount}</cbc:LineExtensionAmount>
    <cac:Item>
      <cbc:Name>{name}</cbc:Name>
      <cac:SellersItemIdentification><cbc:ID>{item_id}</cbc:ID></cac:SellersItemIdentification>
      <cac:ClassifiedTaxCategory>
        <cbc:ID>S</cbc:ID>
        <cbc:Percent>{percent}</cbc:Percent>
        <cac:TaxScheme><cbc:ID>VAT</cbc:ID></cac:TaxScheme>
      </cac:ClassifiedTaxCategory>
    </cac:Item>
    <cac:Price><cbc:PriceAmount currencyID="EUR">{price}</cbc:PriceAmount></cac:Price>
  </cac:InvoiceLine>"""

_PARTY_TEMPLATE = """
    <cac:Party>
      <cbc:EndpointID schemeID="9934">{id}</cbc:EndpointID>
      <cac:PartyName><cbc:Name>{name}</cbc:Name></cac:PartyName>
      <cac:PostalAddress>
        <cbc:StreetName>{street}</cbc:StreetName>
        <cbc:CityName>{city}</cbc:CityName>
        <cbc:PostalZone>10000</cbc:PostalZone>
        <cac:AddressLine><cbc:Line>{street}, {city}</cbc:Line></cac:AddressLine>
        <cac:Country><cbc:IdentificationCode>HR</cbc:IdentificationCode></cac:Country>
      </cac:PostalAddress>
      <cac:PartyTaxScheme>
        <cbc:CompanyID>HR{id}</cbc:CompanyID>
        <cac:TaxScheme><cbc:ID>VAT</cbc:ID></cac:TaxScheme>
      </cac:PartyTaxScheme>
      <cac:Contact>
        <cbc:Name>Contact {id}</cbc:Name>
        <cbc:ElectronicMail>{id}@example.com</cbc:ElectronicMail>
      </cac:Contact>
    </cac:Party>"""

_INVOICE_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<Invoice xmlns="urn:oasis:names:specification:ubl:schema:xsd:Invoice-2"
         xmlns:cac="urn:oasis:names:specification:ubl:schema:xsd:CommonAggregateComponents-2"
         xmlns:cbc="urn:oasis:names:specification:ubl:schema:xsd:CommonBasicComponents-2">
  <cbc:ID>{id}</cbc:ID>
  <cbc:IssueDate>{issue_date}</cbc:IssueDate>
  <cbc:IssueTime>{issue_time}</cbc:IssueTime>
  <cbc:DueDate>{due_date}</cbc:DueDate>
  <cac:DespatchDocumentReference><cbc:ID>OTP-{id}</cbc:ID></cac:DespatchDocumentReference>
  <cac:AdditionalDocumentReference><cbc:ID>{id}.pdf</cbc:ID></cac:AdditionalDocumentReference>
  <cac:AccountingSupplierParty>{supplier}
  </cac:AccountingSupplierParty>
  <cac:AccountingCustomerParty>{customer}
  </cac:AccountingCustomerParty>
  <cac:TaxTotal><cbc:TaxAmount currencyID="EUR">{tax}</cbc:TaxAmount></cac:TaxTotal>
  <cac:LegalMonetaryTotal>
    <cbc:LineExtensionAmount currencyID="EUR">{net}</cbc:LineExtensionAmount>
    <cbc:TaxExclusiveAmount currencyID="EUR">{net}</cbc:TaxExclusiveAmount>
    <cbc:TaxInclusiveAmount currencyID="EUR">{payable}</cbc:TaxInclusiveAmount>
    <cbc:PayableAmount currencyID="EUR">{payable}</cbc:PayableAmount>
  </cac:LegalMonetaryTotal>{lines}
</Invoice>
"""

DEFAULT_LINES = (
    {"id": "1", "name": "Kava", "item_id": "K-01", "quantity": "2.000", "unit": "H87",
     "price": "5.00", "amount": "10.00", "percent": "25.00"},
)


def build_invoice_xml(
    invoice_id: str = "INV-1",
    supplier_id: str = "HR111",
    customer_id: str = "HR222",
    *,
    payable: str = "12.50",
    net: str = "10.00",
    tax: str = "2.50",
    issue_date: str = "2024-03-15",
    issue_time: str = "09:30:00",
    due_date: str = "2024-04-15",
    supplier_name: str = "Dobavljac d.o.o.",
    supplier_street: str = "Ilica 1",
    supplier_city: str = "Zagreb",
    customer_name: str = "Kupac d.d.",
    lines: tuple[dict[str, str], ...] = DEFAULT_LINES,
) -> bytes:
    """Return a UBL 2.1 invoice document as UTF-8 bytes."""

    supplier = _PARTY_TEMPLATE.format(
        id=supplier_id, name=supplier_name, street=supplier_street, city=supplier_city
    )
    customer = _PARTY_TEMPLATE.format(
        id=customer_id, name=customer_name, street="Vukovarska 2", city="Split"
    )
    text = _INVOICE_TEMPLATE.format(
        id=invoice_id,
        issue_date=issue_date,
        issue_time=issue_time,
        due_date=due_date,
        supplier=supplier,
        customer=customer,
        tax=tax,
        net=net,
        payable=payable,
        lines="".join(_LINE_TEMPLATE.format(**line) for line in lines),
    )
    return text.encode("utf-8")


@pytest.fixture
def invoice_xml() -> Callable[..., bytes]:
    return build_invoice_xml


@pytest.fixture
def ledger_file(tmp_path: Path) -> Callable[..., Path]:
    """Write a ledger file with the usual eight columns."""

    def _write(rows: list[tuple[str, str, str]], *, delimiter: str = ";") -> Path:
        header = ["Rb", "Broj", "Racun", "Datum", "Naziv", "Adresa", "Iznos", "OIB"]
        lines = [delimiter.join(header)]
        for number, invoice_id, supplier_id in rows:
            lines.append(
                delimiter.join(
                    ["1", number, invoice_id, "2024-03-15", "Dobavljac", "Ilica 1", "12.50", supplier_id]
                )
            )
        path = tmp_path / "ura.csv"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
