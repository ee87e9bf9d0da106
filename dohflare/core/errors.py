from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dohflare.modules.models import DohResponse


class DohError(Exception): ...


class InvalidSubnetError(DohError, ValueError):
    def __init__(self, subnet: str, reason: str = '') -> None:
        self.subnet = subnet
        message = f'doh: invalid client subnet {subnet!r}'
        if reason:
            message += f': {reason}'
        super().__init__(message)


class DohDecodeError(DohError): ...


class DohStatusError(DohError):
    '''
    Raised when the upstream answered with a non-zero DNS status.

    The decoded response is kept on the exception so callers
    can still inspect the partial answer.
    '''

    def __init__(self, response: DohResponse) -> None:
        self.response = response
        self.status = response.status
        super().__init__(f'doh: failed response code {response.status}')
