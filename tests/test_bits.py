import pytest

torch = pytest.importorskip("torch")

from efuzz import BitEncoder, ConfigurationError, InputError


def test_bits_are_least_significant_first() -> None:
    bits = BitEncoder(8).encode(ord("a"))
    assert bits.dtype == torch.float32
    assert bits.tolist() == [1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 0.0]


def test_width_follows_text_encoding() -> None:
    assert BitEncoder.for_encoding("utf-8").width == 8
    assert BitEncoder.for_encoding("UTF_16").width == 16
    assert BitEncoder.for_encoding("utf-32").width == 32
    with pytest.raises(ConfigurationError):
        BitEncoder.for_encoding("latin-1")


def test_characters_are_code_units_of_the_encoding() -> None:
    text = "é😀"
    assert BitEncoder.for_encoding("utf-8").characters(text) == list(text.encode("utf-8"))
    assert BitEncoder.for_encoding("utf-16").characters(text) == [0xE9, 0xD83D, 0xDE00]
    assert BitEncoder.for_encoding("utf-32").characters(text) == [0xE9, 0x1F600]
    assert BitEncoder.for_encoding("utf-8").characters(b"\x00\xff") == [0, 255]


def test_wide_characters_are_rejected_and_negative_wrap() -> None:
    encoder = BitEncoder(8)
    with pytest.raises(InputError):
        encoder.encode(256)
    assert encoder.encode(-1).tolist() == [1.0] * 8
    assert BitEncoder(32).encode(0x1F600).sum().item() == bin(0x1F600).count("1")


@pytest.mark.parametrize("text_encoding", ["utf-8", "utf-16"])
def test_lone_surrogate_is_an_input_error(text_encoding) -> None:
    with pytest.raises(InputError):
        BitEncoder.for_encoding(text_encoding).characters("a\ud800")
