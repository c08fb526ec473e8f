"""Shared fixtures: every protocol test runs on both pairing backends."""

import pytest

from bilinear_accumulator import (
    Accumulator,
    encode_element,
    generate_key_pair,
    get_backend,
)

CURVES = ["BN254", "MNT224"]


@pytest.fixture(params=CURVES)
def backend(request):
    return get_backend(request.param)


@pytest.fixture
def keys(backend):
    return generate_key_pair(backend)


@pytest.fixture
def setup_system(backend, keys):
    """
    Fresh accumulator with a key pair and two encoded messages.

    Returns
    -------
    dict
        backend, sk, pk, acc, elem (to be added), nonelem (never added)
    """
    sk, pk = keys
    return {
        'backend': backend,
        'sk': sk,
        'pk': pk,
        'acc': Accumulator(backend),
        'elem': encode_element(b"test_element", backend),
        'nonelem': encode_element(b"non_member_element", backend),
    }
