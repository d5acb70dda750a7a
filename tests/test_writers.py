import io

import pytest

from timetracker.base import ReportRow
from trackwriters import WriterConfigError, WriterIOError, create_row_writer
from trackwriters.csv_writer import CsvRowWriter
from trackwriters.memory_writer import MemoryRowWriter


def test_csv_writer_quotes_multi_tag_fields():
    buf = io.StringIO()
    writer = CsvRowWriter(stream=buf)
    writer.write_rows([
        ReportRow("#pbi-47", "4h", "/j/a.md"),
        ReportRow("#pbi-123,#pbi-47", "1h30m", "/j/b.md"),
        ReportRow("", "1h30m", "/j/b.md"),
    ])
    writer.close()
    assert buf.getvalue() == (
        "#pbi-47,4h,/j/a.md\n"
        "\"#pbi-123,#pbi-47\",1h30m,/j/b.md\n"
        ",1h30m,/j/b.md\n"
    )


def test_csv_writer_to_file(tmp_path):
    out = tmp_path / "report.csv"
    with CsvRowWriter(target=str(out)) as writer:
        writer.write_row(ReportRow("#pbi-1", "7h", "a.md,b.md"))
    assert out.read_text(encoding="utf-8") == "#pbi-1,7h,\"a.md,b.md\"\n"


def test_csv_writer_unopenable_target(tmp_path):
    with pytest.raises(WriterIOError):
        CsvRowWriter(target=str(tmp_path / "missing-dir" / "out.csv"))


def test_memory_writer_collects_rows():
    writer = MemoryRowWriter()
    assert writer.write_rows([ReportRow("#a", "1h", "x.md")]) == 1
    assert writer.rows == [["#a", "1h", "x.md"]]


def test_factory_resolves_format_and_target(tmp_path):
    cfg = {"output": {"format": "memory"}}
    assert create_row_writer(cfg).name() == "memory"
    out = tmp_path / "o.csv"
    writer = create_row_writer({"output": {"format": "csv", "path": None}}, output_override=str(out))
    try:
        assert writer.name() == "csv"
        assert writer.target == str(out)
    finally:
        writer.close()


def test_factory_unknown_format():
    with pytest.raises(WriterConfigError):
        create_row_writer({"output": {"format": "xlsx"}})
