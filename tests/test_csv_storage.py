import csv
import json

from storage.csv_backend import CSVStorage
from storage.schema import CSV_HEADERS


def _read(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def test_csv_header_and_rows(tmp_path):
    out = tmp_path / "wallet.csv"
    rec = {
        "Transaction Hash": "0x1",
        "Date & Time": "2020-09-13 12:26:40",
        "From Address": "0xa",
        "To Address": "0xb",
        "Transaction Type": "ETH transfer",
        "Asset Contract Address": "",
        "Asset Symbol / Name": "ETH",
        "Token ID": "",
        "Value / Amount": 1.0,
        "Gas Fee (ETH)": 0.000021,
    }
    assert CSVStorage(out).write_records([rec]) is True
    rows = _read(out)
    assert rows[0] == CSV_HEADERS
    assert rows[1] == ["0x1", "2020-09-13 12:26:40", "0xa", "0xb", "ETH transfer",
                       "", "ETH", "", "1.0", "0.000021"]


def test_csv_missing_values_are_empty_cells(tmp_path):
    out = tmp_path / "sparse.csv"
    CSVStorage(out).write_records([{"Transaction Hash": "0x1", "Token ID": None}])
    rows = _read(out)
    assert rows[1] == ["0x1"] + [""] * (len(CSV_HEADERS) - 1)


def test_csv_empty_export_has_header_only(tmp_path):
    out = tmp_path / "empty.csv"
    assert CSVStorage(out).write_records([]) is True
    assert _read(out) == [CSV_HEADERS]


def test_csv_creates_parent_dirs(tmp_path):
    out = tmp_path / "exports" / "2020" / "wallet.csv"
    assert CSVStorage(str(out)).write_records([]) is True
    assert out.exists()


def test_csv_write_failure_is_reported(tmp_path, caplog):
    # the target is a directory, so open() fails
    assert CSVStorage(tmp_path).write_records([{"Transaction Hash": "0x1"}]) is False
    assert "Failed to write CSV" in caplog.text


def test_csv_floats_written_fixed_point(tmp_path):
    out = tmp_path / "fees.csv"
    CSVStorage(out).write_records([{"Value / Amount": 1e-07, "Gas Fee (ETH)": 1e+20}])
    row = dict(zip(CSV_HEADERS, _read(out)[1]))
    assert row["Value / Amount"] == "0.0000001"
    assert row["Gas Fee (ETH)"] == "100000000000000000000"


def test_csv_lone_surrogate_is_escaped(tmp_path):
    out = tmp_path / "nft.csv"
    rec = json.loads('{"Transaction Hash": "0x1", "Asset Symbol / Name": "\\ud800spam"}')
    assert CSVStorage(out).write_records([rec, {"Transaction Hash": "0x2"}]) is True
    rows = _read(out)
    assert len(rows) == 3
    assert rows[1][CSV_HEADERS.index("Asset Symbol / Name")] == "\\ud800spam"
