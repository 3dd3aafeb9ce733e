import math

import pytest

torch = pytest.importorskip("torch")

from efuzz import (
    ConfigurationError,
    EncoderConfig,
    NetworkConfig,
    NeuralNetwork,
    RecurrentEncoder,
)


def test_network_widths_follow_character_width_and_encoding_size() -> None:
    encoder = RecurrentEncoder("utf-8", 10)
    assert encoder.get_nn_input_size() == 18
    assert encoder.get_nn_output_size() == 10
    wide = RecurrentEncoder("utf-16", 4)
    assert wide.get_nn_input_size() == 20
    assert wide.get_nn_output_size() == 4
    assert RecurrentEncoder("utf-32", 3).get_nn_input_size() == 35


def test_encode_returns_bounded_vector_of_encoding_size() -> None:
    encoder = RecurrentEncoder("utf-8", 10)
    encoder.set_encoding_nn_layer_sizes([18, 10, 10], True)
    encoded = encoder.encode("a")
    assert encoded.shape == (10,)
    assert torch.all(encoded >= 0.0) and torch.all(encoded <= 1.0)


def test_encode_is_deterministic(encoder) -> None:
    first = encoder.encode("airplane")
    second = encoder.encode("airplane")
    assert torch.equal(first, second)


def test_encode_does_not_leak_previous_state(encoder) -> None:
    expected = encoder.encode("b")
    encoder.encode("a much longer string that leaves a hidden state behind")
    assert torch.equal(encoder.encode("b"), expected)


def test_encode_matches_manual_letter_folding(encoder) -> None:
    encoder.reset_encoding_result()
    for letter in b"abc":
        encoder.encode_letter(letter)
    folded = encoder.get_encoding_result()
    assert torch.equal(folded, encoder.encode("abc"))


def test_returned_vector_is_independent_of_scratch_state(encoder) -> None:
    encoded = encoder.encode("ab")
    snapshot = encoded.clone()
    encoder.encode("zzz")
    assert torch.equal(encoded, snapshot)


def test_empty_string_encodes_to_zero(encoder) -> None:
    assert torch.equal(encoder.encode(""), torch.zeros(10))


def test_encode_without_topology_is_a_configuration_error() -> None:
    encoder = RecurrentEncoder("utf-8", 10)
    with pytest.raises(ConfigurationError):
        encoder.encode("abc")
    with pytest.raises(ConfigurationError):
        encoder.encode_letter(ord("a"))


@pytest.mark.parametrize("layer_sizes", [[17, 10], [18, 9], [18, 12, 11], [18]])
def test_layer_size_mismatch_is_rejected(layer_sizes) -> None:
    encoder = RecurrentEncoder("utf-8", 10)
    with pytest.raises(ConfigurationError):
        encoder.set_encoding_nn_layer_sizes(layer_sizes)


def test_set_network_directly_validates_widths() -> None:
    encoder = RecurrentEncoder("utf-8", 4)
    encoder.set_word_vector_encoder_nn(NeuralNetwork([12, 4]))
    assert encoder.get_word_vector_encoder_nn().layer_sizes == (12, 4)
    with pytest.raises(ConfigurationError):
        encoder.set_word_vector_encoder_nn(NeuralNetwork([12, 5]))


def test_output_norm_max_is_root_of_encoding_size() -> None:
    assert RecurrentEncoder("utf-8", 10).output_norm_max() == pytest.approx(math.sqrt(10))


def test_dynamic_encoding_size_resolves_once() -> None:
    encoder = RecurrentEncoder("utf-8")
    assert encoder.is_dynamic
    with pytest.raises(ConfigurationError):
        encoder.get_nn_output_size()
    encoder.resolve_encoding_size(6)
    assert encoder.get_nn_input_size() == 14
    encoder.resolve_encoding_size(6)
    with pytest.raises(ConfigurationError):
        encoder.resolve_encoding_size(7)


def test_dynamic_encoding_size_resolves_from_network() -> None:
    encoder = RecurrentEncoder("utf-8", network=NeuralNetwork([13, 8, 5]))
    assert encoder.encoding_size == 5
    assert encoder.encode("xy").shape == (5,)
    with pytest.raises(ConfigurationError):
        encoder.resolve_encoding_size(4)


def test_fixed_encoding_size_cannot_change() -> None:
    encoder = RecurrentEncoder("utf-8", 10)
    assert not encoder.is_dynamic
    with pytest.raises(ConfigurationError):
        encoder.resolve_encoding_size(11)


def test_from_config_builds_tapered_network() -> None:
    encoder = RecurrentEncoder.from_config(
        EncoderConfig(encoding_size=10, hidden_layers=2),
        NetworkConfig(seed=0),
    )
    assert encoder.get_word_vector_encoder_nn().layer_sizes == (18, 15, 13, 10)
    with pytest.raises(ConfigurationError):
        RecurrentEncoder.from_config(EncoderConfig(encoding_size=None))
    with pytest.raises(ValueError):
        EncoderConfig(encoding_size=0)


def test_copy_is_independent(encoder) -> None:
    clone = encoder.copy()
    before = encoder.encode("pebble")
    clone.modify(clone.get_word_vector_encoder_nn().random_diff())
    assert torch.equal(encoder.encode("pebble"), before)
    assert not torch.equal(clone.encode("pebble"), before)
