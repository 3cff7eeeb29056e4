from __future__ import annotations

from pathlib import Path

import pytest

from ublcsv.errors import LedgerError
from ublcsv.ledger import Ledger, detect_delimiter, load_ledger


@pytest.mark.parametrize(
    ("sample", "expected"),
    [
        ("a;b;c\n1;2;3\n", ";"),
        ("a,b,c\n1,2,3\n", ","),
        ("a;b,c\n", ","),
        ("", ","),
        ("a;b\n1,2,3\n4;5;6;7;8;9", ";"),
    ],
)
def test_detect_delimiter(sample: str, expected: str) -> None:
    assert detect_delimiter(sample) == expected


def test_load_semicolon_ledger(ledger_file) -> None:
    path = ledger_file([("ref", "INV-2", "SUPX"), ("R-7", "12/1/1", "HR111")])

    ledger = load_ledger(path)

    assert isinstance(ledger, Ledger)
    assert len(ledger) == 2
    assert ledger["INV-2-SUPX"] == "ref"
    assert ledger.lookup("12/1/1", "HR111") == "R-7"
    assert ledger.lookup("INV-2", "OTHER") is None


def test_load_comma_ledger(ledger_file) -> None:
    path = ledger_file([("42", "INV-9", "HR999")], delimiter=",")

    ledger = load_ledger(path)

    assert dict(ledger) == {"INV-9-HR999": "42"}


def test_header_row_is_not_an_entry(ledger_file) -> None:
    ledger = load_ledger(ledger_file([]))

    assert len(ledger) == 0


def test_values_are_kept_as_text(tmp_path: Path) -> None:
    path = tmp_path / "ura.csv"
    path.write_text(
        "a;b;c;d;e;f;g;h\n1;007;0001;x;y;z;1.50;00123\n",
        encoding="utf-8",
    )

    ledger = load_ledger(path)

    assert ledger["0001-00123"] == "007"


def test_later_rows_overwrite_earlier(ledger_file) -> None:
    ledger = load_ledger(ledger_file([("1", "INV", "S"), ("2", "INV", "S")]))

    assert ledger["INV-S"] == "2"


def test_missing_file_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(LedgerError):
        load_ledger(tmp_path / "missing.csv")


def test_too_few_columns_is_fatal(tmp_path: Path) -> None:
    path = tmp_path / "ura.csv"
    path.write_text("a;b;c\n1;2;3\n", encoding="utf-8")

    with pytest.raises(LedgerError):
        load_ledger(path)


def test_inconsistent_rows_are_fatal(tmp_path: Path) -> None:
    path = tmp_path / "ura.csv"
    path.write_text(
        "a;b;c;d;e;f;g;h\n1;2;3;4;5;6;7;8\n1;2;3;4;5;6;7;8;9;10\n",
        encoding="utf-8",
    )

    with pytest.raises(LedgerError):
        load_ledger(path)


def test_ledger_is_read_only() -> None:
    ledger = Ledger({"A-B": "1"})

    with pytest.raises(TypeError):
        ledger["C-D"] = "2"  # type: ignore[index]


def test_trailing_delimiter_rows_keep_column_positions(tmp_path: Path) -> None:
    path = tmp_path / "ura.csv"
    path.write_text(
        "Rb;Broj;Racun;Datum;Naziv;Adresa;Iznos;OIB\n"
        "1;ref;INV-2;d;n;a;1.00;SUPX;\n"
        "2;R-7;INV-3;d;n;a;2.00;HR111;\n",
        encoding="utf-8",
    )

    ledger = load_ledger(path)

    assert dict(ledger) == {"INV-2-SUPX": "ref", "INV-3-HR111": "R-7"}


def test_short_rows_are_fatal(tmp_path: Path) -> None:
    path = tmp_path / "ura.csv"
    path.write_text("a;b;c;d;e;f;g;h\n1;2;3;4;5;6;7;8\n1;2;3\n", encoding="utf-8")

    with pytest.raises(LedgerError):
        load_ledger(path)


def test_cp1250_ledger_with_default_encoding(tmp_path: Path) -> None:
    path = tmp_path / "ura.csv"
    path.write_bytes(
        "Rb;Broj;Račun;Datum;Naziv;Adresa;Iznos;OIB\n"
        "1;15;INV-2;2024-03-15;Čakovec d.o.o.;Šenoina 3;1.00;HR111\n".encode("cp1250")
    )

    ledger = load_ledger(path)

    assert dict(ledger) == {"INV-2-HR111": "15"}


def test_cp1250_ledger_with_explicit_encoding(tmp_path: Path) -> None:
    path = tmp_path / "ura.csv"
    path.write_bytes(
        "Rb;Broj;Racun;Datum;Naziv;Adresa;Iznos;OIB\n"
        "1;15;Č-2;2024-03-15;Čakovec d.o.o.;Šenoina 3;1.00;HR111\n".encode("cp1250")
    )

    ledger = load_ledger(path, encoding="cp1250")

    assert ledger.lookup("Č-2", "HR111") == "15"
