"""Factory for creating replacement policies by name."""

from enum import Enum
from typing import Union

import structlog

from src.core.replacement_policies import (
    EvictionPolicy,
    FIFOReplacement,
    LFUReplacement,
    LRUReplacement,
)

logger = structlog.get_logger(__name__)


class PolicyVariant(str, Enum):
    """Enumeration of supported replacement policies."""

    LRU = "LRU"  # Least Recently Used
    FIFO = "FIFO"  # First In, First Out
    LFU = "LFU"  # Least Frequently Used


DEFAULT_VARIANT = PolicyVariant.LRU

_POLICY_CLASSES = {
    PolicyVariant.LRU: LRUReplacement,
    PolicyVariant.FIFO: FIFOReplacement,
    PolicyVariant.LFU: LFUReplacement,
}


def resolve_variant(variant: Union[PolicyVariant, str]) -> PolicyVariant:
    """
    Normalize a variant name to a PolicyVariant.

    Unknown names are not an error: a warning is logged and the default
    (LRU) is returned.
    """
    if isinstance(variant, PolicyVariant):
        return variant
    name = str(variant).strip().upper()
    try:
        return PolicyVariant(name)
    except ValueError:
        logger.warning(
            "unknown_policy_variant",
            requested=str(variant),
            fallback=DEFAULT_VARIANT.value,
        )
        return DEFAULT_VARIANT


def new_policy(capacity: int, variant: Union[PolicyVariant, str] = DEFAULT_VARIANT) -> EvictionPolicy:
    """
    Create a replacement policy instance.

    Args:
        capacity: Maximum number of resident keys (values below 1 become 1)
        variant: LRU, FIFO or LFU, as an enum member or a case-insensitive name

    Returns:
        A fresh policy implementing the EvictionPolicy contract
    """
    return _POLICY_CLASSES[resolve_variant(variant)](capacity)
