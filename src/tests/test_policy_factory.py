import pytest
from structlog.testing import capture_logs

from src.core.policy_factory import PolicyVariant, new_policy, resolve_variant
from src.core.replacement_policies import FIFOReplacement, LFUReplacement, LRUReplacement


@pytest.mark.parametrize('variant, cls', [
    ('LRU', LRUReplacement),
    ('fifo', FIFOReplacement),
    (' Lfu ', LFUReplacement),
    (PolicyVariant.LFU, LFUReplacement),
])
def test_new_policy_selects_variant(variant, cls):
    policy = new_policy(3, variant)
    assert type(policy) is cls
    assert policy.capacity == 3


def test_unknown_variant_falls_back_to_lru_with_warning():
    with capture_logs() as logs:
        policy = new_policy(2, 'ARC')
    assert isinstance(policy, LRUReplacement)
    assert logs == [{
        'event': 'unknown_policy_variant',
        'log_level': 'warning',
        'requested': 'ARC',
        'fallback': 'LRU',
    }]


def test_known_variant_logs_nothing():
    with capture_logs() as logs:
        assert resolve_variant('fifo') is PolicyVariant.FIFO
    assert logs == []


def test_default_variant_is_lru():
    assert isinstance(new_policy(1), LRUReplacement)
