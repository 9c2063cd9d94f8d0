import redis

from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nie mozna wcisnac sie miedzy GET a DEL
#wiec lock zwalnia tylko ten, kto go zalozyl (token)


def checkout_lock_key(user_id: int) -> str:
    return f"checkout:user:{user_id}:lock"


class LockService:
    """
    -blokada checkoutu per uzytkownik (SET NX EX)
    -zwalnianie locka tylko przez wlasciciela tokenu
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @redis_retry()
    def acquire_checkout_lock(self, user_id: int, token: str, ttl: int) -> bool:
        key = checkout_lock_key(user_id)
        logger.info(f"Acquire lock {key}")
        #SET checkout:user:1:lock "<token>" NX EX 30
        return bool(
            self.redis.set(
                name=key,
                value=token,
                nx=True,  #tylko jesli klucz nie istnieje
                ex=ttl,  #wygasa sam, nawet jak proces padnie
            )
        )

    @redis_retry()
    def release_checkout_lock(self, user_id: int, token: str) -> bool:
        key = checkout_lock_key(user_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)
