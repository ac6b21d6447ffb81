import numpy as np
import pytest
import torch

from dkmeans.base.errors import LengthMismatchError
from dkmeans.spaces import CoordinateSpace, SymbolSpace, resolve_space
from dkmeans.utils.validation import (
    validate_data, check_n_clusters, check_max_iter, check_random_state
)


def test_encode_decode(four_strands):
    space = SymbolSpace()
    X = space.encode(four_strands)
    assert X.shape == (4, 4)
    assert X.dtype == torch.long
    assert space.decode(X) == four_strands


def test_encode_rejects_unknown_symbol():
    with pytest.raises(ValueError):
        SymbolSpace().encode(["ACGN"])


def test_encode_rejects_mixed_lengths():
    with pytest.raises(LengthMismatchError):
        SymbolSpace().encode(["ACGT", "ACG"])


def test_custom_alphabet():
    space = SymbolSpace("01")
    assert space.decode(space.encode(["0110"])[0]) == "0110"
    with pytest.raises(ValueError):
        SymbolSpace("00")


def test_coordinate_prepare_and_format():
    space = CoordinateSpace()
    X = space.prepare([(1, 2), (3.5, -4)])
    assert X.dtype == torch.float64
    assert space.format(X[0]) == "(1.0, 2.0)"
    assert space.format(X[1]) == "(3.5, -4.0)"


def test_coordinate_prepare_rejects_wrong_width():
    with pytest.raises(ValueError):
        CoordinateSpace().prepare([(1.0, 2.0, 3.0)])


def test_resolve_space_inference(four_points, four_strands):
    assert isinstance(resolve_space(None, four_strands), SymbolSpace)
    assert isinstance(resolve_space(None, four_points), CoordinateSpace)
    assert resolve_space(None, np.zeros((4, 3))).dimension == 3
    assert isinstance(resolve_space('dna'), SymbolSpace)
    with pytest.raises(ValueError):
        resolve_space('graphs')


def test_validate_data():
    X = validate_data(np.array([[1.0, 2.0]]))
    assert X.dtype == torch.float64
    with pytest.raises(ValueError):
        validate_data([[float('nan'), 1.0]])
    with pytest.raises(ValueError):
        validate_data([], ensure_min_samples=1)
    with pytest.raises(TypeError):
        validate_data("not data")


def test_check_n_clusters():
    check_n_clusters(2, 4)
    with pytest.raises(ValueError):
        check_n_clusters(0, 4)
    with pytest.raises(ValueError):
        check_n_clusters(5, 4)
    with pytest.raises(TypeError):
        check_n_clusters(2.0, 4)


def test_check_max_iter():
    check_max_iter(1)
    with pytest.raises(ValueError):
        check_max_iter(0)


def test_check_random_state():
    assert check_random_state(None) is None
    g = check_random_state(5)
    assert isinstance(g, torch.Generator)
    assert check_random_state(g) is g
    with pytest.raises(TypeError):
        check_random_state(True)
