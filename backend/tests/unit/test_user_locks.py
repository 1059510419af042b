"""
Unit tests for the per-user lock registry.
"""

import pytest

from nutshell.services.user_locks import UserLockRegistry


def test_same_user_shares_lock_while_referenced():
    registry = UserLockRegistry()

    lock = registry.get("alice")

    assert registry.get("alice") is lock
    assert registry.get("bob") is not lock


@pytest.mark.asyncio
async def test_held_lock_blocks_second_request_of_same_user():
    registry = UserLockRegistry()

    async with registry.get("alice"):
        assert registry.get("alice").locked()
        assert not registry.get("bob").locked()
