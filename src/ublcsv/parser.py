"""Converter um documento de fatura UBL em :class:`~ublcsv.invoices.Invoice`.

A extração é puramente estrutural: elementos ausentes ficam como texto vazio
e aqui não há deduplicação, enriquecimento nem formatação.
"""

from __future__ import annotations

from pathlib import Path

from lxml import etree

from .errors import DocumentError
from .invoices import Invoice, InvoiceLine, Party, Quantity
from .utils import find_attribute, find_path, find_text, iter_children, localname

ROOT_ELEMENT = "Invoice"

_PARTY_FIELDS = {
    "id": "EndpointID",
    "name": "PartyName/Name",
    "tax_number": "PartyTaxScheme/CompanyID",
    "address_line": "PostalAddress/AddressLine/Line",
    "street": "PostalAddress/StreetName",
    "city": "PostalAddress/CityName",
    "postal_zone": "PostalAddress/PostalZone",
    "country": "PostalAddress/Country/IdentificationCode",
    "contact_name": "Contact/Name",
    "contact_email": "Contact/ElectronicMail",
}

_LINE_FIELDS = {
    "id": "ID",
    "item_name": "Item/Name",
    "item_id": "Item/SellersItemIdentification/ID",
    "unit_price": "Price/PriceAmount",
    "amount": "LineExtensionAmount",
    "tax_percent": "Item/ClassifiedTaxCategory/Percent",
    "tax_id": "Item/ClassifiedTaxCategory/ID",
    "tax_scheme": "Item/ClassifiedTaxCategory/TaxScheme/ID",
}

_INVOICE_FIELDS = {
    "id": "ID",
    "issue_date": "IssueDate",
    "issue_time": "IssueTime",
    "due_date": "DueDate",
    "reference": "DespatchDocumentReference/ID",
    "reference_name": "AdditionalDocumentReference/ID",
    "line_extension": "LegalMonetaryTotal/LineExtensionAmount",
    "tax_exclusive": "LegalMonetaryTotal/TaxExclusiveAmount",
    "tax_inclusive": "LegalMonetaryTotal/TaxInclusiveAmount",
    "payable": "LegalMonetaryTotal/PayableAmount",
    "tax": "TaxTotal/TaxAmount",
}


def _xml_parser() -> etree.XMLParser:
    # instâncias do parser não podem ser partilhadas entre threads
    return etree.XMLParser(resolve_entities=False, no_network=True)


def _parse_party(root: etree._Element, path: str) -> Party:
    node = find_path(root, path)
    if node is None:
        return Party()
    return Party(**{name: find_text(node, field) for name, field in _PARTY_FIELDS.items()})


def _parse_line(node: etree._Element) -> InvoiceLine:
    values = {name: find_text(node, field) for name, field in _LINE_FIELDS.items()}
    quantity = Quantity(
        value=find_text(node, "InvoicedQuantity"),
        unit_code=find_attribute(node, "InvoicedQuantity", "unitCode"),
    )
    return InvoiceLine(quantity=quantity, **values)


def parse_invoice(data: bytes, *, source: str | None = None) -> Invoice:
    """Construir uma :class:`Invoice` a partir dos bytes de um documento XML."""

    try:
        root = etree.fromstring(data, parser=_xml_parser())
    except etree.XMLSyntaxError as exc:
        raise DocumentError(f"Malformed XML: {exc}", source=source) from exc

    if localname(root) != ROOT_ELEMENT:
        raise DocumentError(
            f"Expected <{ROOT_ELEMENT}> root element, found <{localname(root)}>",
            source=source,
        )

    values = {name: find_text(root, field) for name, field in _INVOICE_FIELDS.items()}
    return Invoice(
        supplier=_parse_party(root, "AccountingSupplierParty/Party"),
        customer=_parse_party(root, "AccountingCustomerParty/Party"),
        lines=[_parse_line(node) for node in iter_children(root, "InvoiceLine")],
        **values,
    )


def parse_invoice_file(path: Path) -> Invoice:
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise DocumentError(f"Cannot read {path}: {exc}", source=str(path)) from exc
    return parse_invoice(data, source=str(path))


__all__ = ["ROOT_ELEMENT", "parse_invoice", "parse_invoice_file"]
