"""Tests for request ID selection."""

import pytest

from reelbase.middleware.request_id import resolve_request_id


@pytest.mark.parametrize("incoming", ["abc-123", "a1b2c3d4", "trace.01:edge_2"])
def test_usable_client_id_kept(incoming):
    assert resolve_request_id(incoming) == incoming


@pytest.mark.parametrize("incoming", ["", "x" * 65, "has space", "line\nbreak", "<script>"])
def test_unusable_client_id_replaced(incoming):
    rid = resolve_request_id(incoming)
    assert rid != incoming
    assert len(rid) == 8
