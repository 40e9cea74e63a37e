import pytest

from campus_directory.resolution.codes import expand_variants, extract_code, loose_code_regex


@pytest.mark.parametrize(
    "text, expected",
    [
        ("aula l-320", "L320"),
        ("L320", "L320"),
        ("donde esta el salon l 325?", "L325"),
        ("L - 101", "L101"),
        ("l3200", ""),
        ("salon 126", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_extract_code(text, expected):
    assert extract_code(text) == expected


def test_expand_variants_lists_prefixed_names_then_bare_code():
    assert expand_variants("L320") == ["Aula L320", "Salón L320", "Salon L320", "Sala L320", "L320"]
    assert expand_variants("") == []


def test_loose_code_regex_matches_separator_spellings():
    rx = loose_code_regex("L325")

    assert rx.search("L-325")
    assert rx.search("Laboratorio l 325")
    assert rx.search("L325")
    assert not rx.search("L3250")
    assert loose_code_regex("") is None
