"""
Tests for the delimited-text reader / writer.

These exercise format mechanics only: quoting, verbatim cell values, empty
input and malformed input. Register semantics are covered in
test_data_collection.py.
"""

import io

import pytest

from wtr.data.schemas import MalformedTableError
from wtr.data.table_io import read_table, write_table


def test_read_table_keeps_every_value_as_source_text():
    header, rows = read_table(io.BytesIO(b"Frequency,Antenna Height,NGR\n0050,12.50,\n"))
    assert header == ["Frequency", "Antenna Height", "NGR"]
    assert rows == [{"Frequency": "0050", "Antenna Height": "12.50", "NGR": ""}]


def test_read_table_honours_quoting():
    text = 'Name,Comment\n"Smith, J","He said ""hi""\nover two lines"\n'
    header, rows = read_table(io.StringIO(text))
    assert header == ["Name", "Comment"]
    assert rows[0]["Name"] == "Smith, J"
    assert rows[0]["Comment"] == 'He said "hi"\nover two lines'


def test_read_table_empty_stream():
    assert read_table(io.BytesIO(b"")) == ([], [])


def test_read_table_header_only():
    header, rows = read_table(io.BytesIO(b"a,b\n"))
    assert header == ["a", "b"]
    assert rows == []


def test_read_table_does_not_treat_na_strings_as_missing():
    _, rows = read_table(io.StringIO("Status,Tradeable\nNA,N/A\n"))
    assert rows == [{"Status": "NA", "Tradeable": "N/A"}]


def test_read_table_decodes_with_given_encoding():
    data = "Licencee Company\nCafé Radio\n".encode("latin-1")
    _, rows = read_table(io.BytesIO(data), encoding="latin-1")
    assert rows[0]["Licencee Company"] == "Café Radio"


def test_read_table_unterminated_quote():
    with pytest.raises(MalformedTableError):
        read_table(io.StringIO('a,b\n"x,y\n'))


def test_read_table_row_with_extra_fields():
    with pytest.raises(MalformedTableError):
        read_table(io.StringIO("a,b\n1,2\n1,2,3\n"))


def test_read_table_first_row_with_extra_fields():
    with pytest.raises(MalformedTableError):
        read_table(io.BytesIO(b"Licence Number,NGR\nL1,SU12345 67890,EXTRA\n"))


def test_read_table_keeps_empty_and_repeated_labels():
    header, rows = read_table(io.StringIO("Licence Number,,NGR,NGR\nL1,x,AB1,CD2\n"))
    assert header == ["Licence Number", "", "NGR", "NGR"]
    # the rightmost of a repeated label wins
    assert rows == [{"Licence Number": "L1", "": "x", "NGR": "CD2"}]


def test_read_table_numeric_looking_header():
    header, rows = read_table(io.StringIO("2024,0050\n1,2\n"))
    assert header == ["2024", "0050"]
    assert rows == [{"2024": "1", "0050": "2"}]


def test_write_table_to_text_sink():
    sink = io.StringIO()
    write_table(sink, ["a", "b"], [["1", "x,y"], ["", 'q"q']])
    assert sink.getvalue() == 'a,b\n1,"x,y"\n,"q""q"\n'


def test_write_table_to_binary_sink():
    sink = io.BytesIO()
    write_table(sink, ["Licencee Company"], [["Café Radio"]], encoding="latin-1")
    assert sink.getvalue() == "Licencee Company\nCafé Radio\n".encode("latin-1")


def test_write_table_header_only():
    sink = io.StringIO()
    write_table(sink, ["a", "b"], [])
    assert sink.getvalue() == "a,b\n"


def test_write_table_empty_header_writes_nothing():
    sink = io.StringIO()
    write_table(sink, [], [])
    assert sink.getvalue() == ""


def test_write_table_repeated_labels():
    sink = io.StringIO()
    write_table(sink, ["NGR", "", "NGR"], [["AB1", "", "AB1"]])
    assert sink.getvalue() == "NGR,,NGR\nAB1,,AB1\n"
