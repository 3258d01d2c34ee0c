# tests/test_qm_io.py
import pytest

from implicant import Implicant
from qm_errors import InputFormatError, InvalidPatternCharacter
from qm_io import format_implicants, literal_count_of, parse_implicants, read_implicants, write_implicants


def test_parse_basic():
    terms, nvars, nterms = parse_implicants("3 4\n000\n001\n010\n100\n")
    assert (nvars, nterms) == (3, 4)
    assert [t.to_string() for t in terms] == ["000", "001", "010", "100"]


def test_parse_ignores_whitespace_inside_and_between_terms():
    terms, _, _ = parse_implicants("3 2\n0\n01 1-\n0")
    assert [t.to_string() for t in terms] == ["001", "1-0"]


def test_parse_zero_terms():
    assert parse_implicants("4 0\n") == ([], 4, 0)


@pytest.mark.parametrize("text", ["", "3", "three 2\n000 111", "3 x\n000", "-1 2\n"])
def test_parse_bad_header(text):
    with pytest.raises(InputFormatError):
        parse_implicants(text)


def test_parse_truncated_body():
    with pytest.raises(InputFormatError):
        parse_implicants("3 2\n000\n01")


def test_parse_invalid_character():
    with pytest.raises(InvalidPatternCharacter) as ei:
        parse_implicants("2 3\n01 1x 00")
    assert ei.value.term == 1
    assert ei.value.position == 1
    assert isinstance(ei.value, InputFormatError)


def test_format_and_write(tmp_path):
    answer = [Implicant.from_string(t) for t in ("-00", "0-0", "00-")]
    assert literal_count_of(answer) == 6
    assert format_implicants(answer) == "6\n3\n-00\n0-0\n00-\n"
    path = tmp_path / "out.txt"
    write_implicants(str(path), answer)
    assert path.read_text() == "6\n3\n-00\n0-0\n00-\n"


def test_format_empty_answer():
    assert format_implicants([]) == "0\n0\n"


def test_read_implicants(tmp_path):
    path = tmp_path / "in.txt"
    path.write_text("2 2\n1- 01\n")
    terms, nvars, nterms = read_implicants(str(path))
    assert (nvars, nterms) == (2, 2)
    assert terms == [Implicant.from_string("1-"), Implicant.from_string("01")]


def test_read_implicants_rejects_non_ascii(tmp_path):
    path = tmp_path / "in.txt"
    path.write_bytes(b"2 2\n00\n0\xff\n")
    with pytest.raises(InputFormatError):
        read_implicants(str(path))
