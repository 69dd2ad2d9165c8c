from datetime import datetime
import secrets
import string
from typing import Awaitable, Callable

from src.platform.exception.exceptions import GenerationExhaustedError
from src.platform.logging.loguru_io import Logger


CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_RANDOM_LENGTH = 6


class ReservationCodeGenerator:
    """
    Human-shareable booking codes: PREFIX-YEAR-XXXXXX

    Uniqueness is checked through the `exists` callable against stored bookings;
    after `max_attempts` collisions the generator gives up.
    """

    def __init__(
        self,
        *,
        prefix: str = 'AL',
        max_attempts: int = 10,
        random_part: Callable[[], str] | None = None,
    ) -> None:
        self.prefix = prefix
        self.max_attempts = max_attempts
        self._random_part = random_part or self._default_random_part

    @staticmethod
    def _default_random_part() -> str:
        return ''.join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_RANDOM_LENGTH))

    def build(self, *, now: datetime) -> str:
        return f'{self.prefix}-{now.year}-{self._random_part()}'

    @Logger.io
    async def generate(self, *, exists: Callable[[str], Awaitable[bool]], now: datetime) -> str:
        for attempt in range(1, self.max_attempts + 1):
            code = self.build(now=now)
            if not await exists(code):
                return code
            Logger.base.warning(f'🔁 [RESERVATION_CODE] Collision on {code} (attempt {attempt})')
        raise GenerationExhaustedError(
            f'Could not generate a unique reservation code after {self.max_attempts} attempts'
        )
