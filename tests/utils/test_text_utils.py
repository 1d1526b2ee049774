import pytest

from fitplan.utils.text_utils import normalize_name, normalize_title, strip_accents


def test_strip_accents():
    assert strip_accents("Tríceps Glúteo Jalón") == "Triceps Gluteo Jalon"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  Sentadilla   Búlgara ", "sentadilla bulgara"),
        ("PRESS\tMILITAR", "press militar"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_name(raw, expected):
    assert normalize_name(raw) == expected


def test_normalize_title_drops_punctuation():
    assert normalize_title("Pollo, arroz & brócoli!") == "pollo arroz brocoli"
