"""Tests for reading rows from CSV and XLSX files."""

import zipfile

import pytest
from openpyxl import Workbook

from slidefolio.errors import TabularReadError
from slidefolio.models import RowRecord
from slidefolio.tabular import read_rows, read_rows_async

HEADER = ["Image", "Text", "Highlighted", "Style", "backgroundVoice"]


def _write_xlsx(path, rows):
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(HEADER)
    for row in rows:
        sheet.append(row)
    workbook.save(path)


class TestReadRows:

    def test_csv(self, temp_dir):
        path = temp_dir / "deck.csv"
        path.write_text(
            "Image,Text,Highlighted,Style,backgroundVoice\n"
            "a.png,Hello world,world,bold,Say hello\n"
            ",Only text,,,\n",
            encoding="utf-8",
        )

        rows = read_rows(path)

        assert rows == [
            RowRecord("a.png", "Hello world", "world", "bold", "Say hello"),
            RowRecord("", "Only text", "", "", ""),
        ]

    def test_csv_with_bom_and_missing_columns(self, temp_dir):
        path = temp_dir / "deck.csv"
        path.write_bytes("\ufeffText,Image\nhi,x.png\n".encode("utf-8"))

        assert read_rows(path) == [RowRecord(image="x.png", text="hi")]

    def test_xlsx(self, temp_dir):
        path = temp_dir / "deck.xlsx"
        _write_xlsx(path, [
            ["a.png", "Hello world", "world", "bold, h2", None],
            [None, None, None, None, None],
            ["b.png", 42, None, None, "forty two"],
        ])

        rows = read_rows(path)

        assert rows == [
            RowRecord("a.png", "Hello world", "world", "bold, h2", ""),
            RowRecord("b.png", "42", "", "", "forty two"),
        ]

    def test_blank_rows_skipped(self, temp_dir):
        path = temp_dir / "deck.csv"
        path.write_text("Image,Text\n,\n,  \nx.png,t\n", encoding="utf-8")
        assert len(read_rows(path)) == 1

    def test_header_only(self, temp_dir):
        path = temp_dir / "deck.csv"
        path.write_text("Image,Text\n", encoding="utf-8")
        assert read_rows(path) == []

    def test_empty_file(self, temp_dir):
        path = temp_dir / "deck.csv"
        path.write_text("", encoding="utf-8")
        assert read_rows(path) == []

    def test_xls_not_supported(self, temp_dir):
        path = temp_dir / "legacy.xls"
        path.write_bytes(b"\xd0\xcf\x11\xe0")
        with pytest.raises(TabularReadError):
            read_rows(path)

    def test_corrupt_xlsx(self, temp_dir):
        path = temp_dir / "broken.xlsx"
        path.write_bytes(b"not a zip")
        with pytest.raises(TabularReadError):
            read_rows(path)

    def test_malformed_xml_inside_xlsx(self, temp_dir):
        path = temp_dir / "deck.xlsx"
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr("[Content_Types].xml", "<not xml")
        with pytest.raises(TabularReadError):
            read_rows(path)

    def test_missing_file(self, temp_dir):
        with pytest.raises(TabularReadError):
            read_rows(temp_dir / "absent.csv")

    @pytest.mark.asyncio
    async def test_async_reader(self, temp_dir):
        path = temp_dir / "deck.csv"
        path.write_text("Image,Text\nx.png,t\n", encoding="utf-8")
        assert await read_rows_async(path) == [RowRecord(image="x.png", text="t")]
