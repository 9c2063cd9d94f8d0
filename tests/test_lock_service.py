from unittest.mock import MagicMock

import pytest
from redis.exceptions import RedisError

from storefront.services.lock_service import LockService, checkout_lock_key


@pytest.fixture
def redis_client():
    return MagicMock()


def test_acquire_sets_key_only_if_absent(redis_client):
    redis_client.set.return_value = True
    svc = LockService(client=redis_client)

    assert svc.acquire_checkout_lock(5, "tok", ttl=30) is True
    redis_client.set.assert_called_once_with(
        name="checkout:user:5:lock", value="tok", nx=True, ex=30
    )


def test_acquire_when_held_returns_false(redis_client):
    redis_client.set.return_value = None

    assert LockService(client=redis_client).acquire_checkout_lock(5, "tok", ttl=30) is False


def test_release_compares_token(redis_client):
    redis_client.eval.return_value = 1
    svc = LockService(client=redis_client)

    assert svc.release_checkout_lock(5, "tok") is True
    _, numkeys, key, token = redis_client.eval.call_args.args
    assert (numkeys, key, token) == (1, checkout_lock_key(5), "tok")


def test_redis_errors_are_retried(redis_client):
    redis_client.set.side_effect = [RedisError("timeout"), True]

    assert LockService(client=redis_client).acquire_checkout_lock(1, "tok", ttl=30) is True
    assert redis_client.set.call_count == 2


def test_redis_errors_surface_after_three_attempts(redis_client):
    redis_client.eval.side_effect = RedisError("down")

    with pytest.raises(RedisError):
        LockService(client=redis_client).release_checkout_lock(1, "tok")
    assert redis_client.eval.call_count == 3
