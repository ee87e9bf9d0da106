from __future__ import annotations

from typing import Protocol, TypeAlias, runtime_checkable

import dns.rdatatype

from dohflare.modules.models import DohResponse

Domain: TypeAlias = str
RecordType: TypeAlias = str | dns.rdatatype.RdataType
ECS: TypeAlias = str


@runtime_checkable
class DohProvider(Protocol):
    '''
    The surface every DoH provider exposes to an aggregator.
    '''

    @property
    def name(self) -> str: ...

    def set_provides(self, provides: int) -> None: ...

    async def query(
        self,
        domain: Domain,
        record_type: RecordType,
        *,
        timeout: float | None = None,
    ) -> DohResponse: ...

    async def ecs_query(
        self,
        domain: Domain,
        record_type: RecordType,
        ecs: ECS = '',
        *,
        timeout: float | None = None,
    ) -> DohResponse: ...


def record_type_text(record_type: RecordType) -> str:
    if isinstance(record_type, dns.rdatatype.RdataType):
        return dns.rdatatype.to_text(record_type)
    return record_type.strip()
