'''
Typed structures for the DNS JSON format served by DoH
upstreams (`accept: application/dns-json`).
'''
from __future__ import annotations

import dns.rcode
import dns.rdatatype
import msgspec
import msgspec.json


def _rdatatype_text(value: int) -> str:
    try:
        return dns.rdatatype.to_text(value)
    except ValueError:
        return str(value)


class DohQuestion(msgspec.Struct):
    name: str
    type: int

    @property
    def type_name(self) -> str:
        return _rdatatype_text(self.type)


class DohAnswer(msgspec.Struct):
    name: str
    type: int
    data: str
    ttl: int = msgspec.field(default=0, name='TTL')

    @property
    def type_name(self) -> str:
        return _rdatatype_text(self.type)


class DohResponse(msgspec.Struct):
    '''
    A decoded DoH JSON answer. Only `Status` is required, every
    other section defaults to empty when the upstream omits it.
    '''
    status: int = msgspec.field(name='Status')
    truncated: bool = msgspec.field(default=False, name='TC')
    recursion_desired: bool = msgspec.field(default=False, name='RD')
    recursion_available: bool = msgspec.field(default=False, name='RA')
    authenticated_data: bool = msgspec.field(default=False, name='AD')
    checking_disabled: bool = msgspec.field(default=False, name='CD')
    question: list[DohQuestion] = msgspec.field(default_factory=list, name='Question')
    answer: list[DohAnswer] = msgspec.field(default_factory=list, name='Answer')
    authority: list[DohAnswer] = msgspec.field(default_factory=list, name='Authority')
    additional: list[DohAnswer] = msgspec.field(default_factory=list, name='Additional')
    comment: str | list[str] | None = msgspec.field(default=None, name='Comment')
    edns_client_subnet: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == 0

    @property
    def status_text(self) -> str:
        try:
            return dns.rcode.to_text(self.status)
        except ValueError:
            return str(self.status)


def decode_response(body: bytes) -> DohResponse:
    return msgspec.json.decode(body, type=DohResponse)
