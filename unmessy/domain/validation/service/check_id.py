"""Check identifiers: ``TTTTTT CCCCC KKK VVV`` (17 digits).

- TTTTTT  last six digits of the epoch second of the attempt
- CCCCC   client / tenant id
- KKK     checksum: digit_sum(TTTTTT) * int(CCCCC) mod 1000
- VVV     format version

TTTTTT is always the real second of the check, so ids issued by one client
within the same second are identical. The id ties a verdict to its moment and
tenant; rows are keyed by address, never by check id.
"""

import re
import time
from typing import Callable

from unmessy.domain.shared.error import ValidationError
from unmessy.domain.shared.service import Service
from unmessy.domain.validation.model import CheckIdParts

_CHECK_ID = re.compile(r"(\d{6})(\d{5})(\d{3})(\d{3})")


def _checksum(timestamp: str, client_id: str) -> str:
    digit_sum = sum(int(d) for d in timestamp)
    return f"{(digit_sum * int(client_id)) % 1000:03d}"


class CheckIdGenerator(Service):
    client_id: str = "00001"
    version: str = "100"
    clock: Callable[[], float] = time.time

    def generate(self, at: float | None = None) -> str:
        """Id for a check made at epoch ``at`` (defaults to the clock)."""
        second = int(self.clock() if at is None else at)
        timestamp = f"{second % 1_000_000:06d}"
        return f"{timestamp}{self.client_id}{_checksum(timestamp, self.client_id)}{self.version}"

    @staticmethod
    def parse(check_id: str) -> CheckIdParts:
        match = _CHECK_ID.fullmatch(check_id)
        if match is None:
            raise ValidationError(f"Malformed check id: {check_id!r}", field="check_id")
        timestamp, client_id, checksum, version = match.groups()
        return CheckIdParts(
            timestamp=timestamp, client_id=client_id, checksum=checksum, version=version
        )

    @classmethod
    def verify(cls, check_id: str) -> bool:
        """True if the id is well-formed and its checksum matches."""
        try:
            parts = cls.parse(check_id)
        except ValidationError:
            return False
        return parts.checksum == _checksum(parts.timestamp, parts.client_id)
