from __future__ import annotations

import asyncio
import sys
from enum import IntEnum
from typing import Final, Self

import httpx
import msgspec
from loguru import logger
from rich.console import Console
from rich.markup import escape

from dohflare.core._logging import disable_logging, enable_console_logging
from dohflare.core.errors import DohDecodeError, DohError, DohStatusError
from dohflare.core.httpx import ClientOptions, make_httpx_client
from dohflare.core.subnet import fix_subnet
from dohflare.modules.models import DohAnswer, DohResponse, decode_response
from dohflare.modules.provider import ECS, Domain, RecordType, record_type_text


class Provides(IntEnum):
    '''
    Upstream selector. Cloudflare only serves a single JSON
    endpoint, so there is exactly one member and every other
    selection is coerced to it.
    '''
    DEFAULT = 0


UPSTREAM: Final[dict[Provides, str]] = {
    Provides.DEFAULT: 'https://cloudflare-dns.com/dns-query',
}

DNS_JSON_HEADERS: Final[dict[str, str]] = {
    'accept': 'application/dns-json',
}


class CloudflareProvider:
    '''
    DoH provider client for the Cloudflare resolver.

    Parameters
    ----------
    *_ : str
        _Accepted for symmetry with other providers, unused_
    client : httpx.AsyncClient | None
        _Transport to use, the provider never closes an injected client_
    options : ClientOptions | None
        _Options for the client created when none is injected_
    '''
    NAME: Final[str] = 'cloudflare'

    def __init__(
        self,
        *_: str,
        client: httpx.AsyncClient | None = None,
        options: ClientOptions | None = None,
    ) -> None:
        self._provides = Provides.DEFAULT
        self._owns_client = client is None
        self.client: httpx.AsyncClient = client or make_httpx_client(options)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and not self.client.is_closed:
            await self.client.aclose()

    def __str__(self) -> str:
        return self.NAME

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def provides(self) -> Provides:
        return self._provides

    @property
    def upstream(self) -> str:
        return UPSTREAM[self._provides]

    def set_provides(self, provides: int) -> None:
        '''
        Cloudflare has no alternative upstreams, any value
        resolves to `Provides.DEFAULT`.
        '''
        if provides != Provides.DEFAULT:
            logger.debug(
                f'{self.NAME} only serves {Provides.DEFAULT!r}, ignoring provides={provides!r}'
            )
        self._provides = Provides.DEFAULT

    def build_params(
        self,
        domain: Domain,
        record_type: RecordType,
        ecs: ECS = '',
    ) -> dict[str, str]:
        '''
        Builds the query string for the upstream.

        Raises
        ------
        InvalidSubnetError
            _If the client subnet hint cannot be normalized_
        '''
        params = {
            'name': domain.strip(),
            'type': record_type_text(record_type),
        }
        if subnet := ecs.strip():
            params['edns_client_subnet'] = fix_subnet(subnet)
        return params

    async def _fetch(self, params: dict[str, str]) -> bytes:
        async with self.client.stream(
            'GET',
            self.upstream,
            params=params,
            headers=DNS_JSON_HEADERS,
        ) as response:
            response.raise_for_status()
            return await response.aread()

    async def query(
        self,
        domain: Domain,
        record_type: RecordType,
        *,
        timeout: float | None = None,
    ) -> DohResponse:
        '''
        Performs a plain DoH lookup, without a client subnet hint.
        '''
        return await self.ecs_query(domain, record_type, '', timeout=timeout)

    async def ecs_query(
        self,
        domain: Domain,
        record_type: RecordType,
        ecs: ECS = '',
        *,
        timeout: float | None = None,
    ) -> DohResponse:
        '''
        Performs a DoH lookup with an optional edns client subnet.

        Parameters
        ----------
        domain : Domain
        record_type : RecordType
            _e.g. "A", "AAAA" or a `dns.rdatatype.RdataType`_
        ecs : ECS, optional
            _An address or subnet, empty to omit the hint_, by default ''
        timeout : float | None, optional
            _Deadline in seconds for the whole exchange_, by default None

        Returns
        -------
        DohResponse

        Raises
        ------
        InvalidSubnetError
            _The hint is malformed, no request is sent_
        httpx.HTTPError
            _Transport failures and non 2xx responses_
        TimeoutError
            _The deadline elapsed_
        DohDecodeError
            _The body is not a DNS JSON document_
        DohStatusError
            _The upstream answered with a non-zero status, the
            decoded response is available on `.response`_
        '''
        params = self.build_params(domain, record_type, ecs)
        logger.debug(f'{self.NAME} query {params}')

        async with asyncio.timeout(timeout):
            body = await self._fetch(params)

        try:
            response = decode_response(body)
        except msgspec.DecodeError as exc:
            raise DohDecodeError(
                f'doh: invalid response from {self.upstream}: {exc}'
            ) from exc

        if not response.ok:
            logger.debug(
                f'{self.NAME} returned {response.status_text} for {params["name"]}'
            )
            raise DohStatusError(response)

        return response


def _render_section(title: str, records: list[DohAnswer]) -> str:
    if not records:
        return f'[bold underline]{title}:[/] None\n'

    lines = [f'[bold underline]{title}:[/]']
    for record in records:
        lines.append(
            f'  [cyan]{escape(record.name)}[/] [magenta]{record.type_name}[/] '
            f'ttl={record.ttl} [green]{escape(record.data)}[/]'
        )
    return '\n'.join(lines) + '\n'


def render_response(response: DohResponse) -> str:
    '''
    Renders a response as rich markup, every value taken from
    the upstream answer is escaped.
    '''
    questions = ', '.join(
        f'{escape(q.name)} {q.type_name}' for q in response.question
    ) or 'n/a'
    message = (
        f'[bold]Status:[/] {response.status} ({response.status_text})\n'
        f'[bold]Question:[/] {questions}\n'
    )
    if response.edns_client_subnet:
        message += f'[bold]Client Subnet:[/] {escape(response.edns_client_subnet)}\n'
    if comment := response.comment:
        if isinstance(comment, list):
            comment = '; '.join(comment)
        message += f'[bold]Comment:[/] {escape(comment)}\n'

    message += _render_section('Answer', response.answer)
    message += _render_section('Authority', response.authority)
    return message


def auto_run(provider: CloudflareProvider | None = None) -> None:
    console = Console()
    sink_id = enable_console_logging('INFO')

    if len(sys.argv) > 1:
        domain = sys.argv[1]
    else:
        domain = console.input('[bold yellow]Enter a domain name to resolve:[/] ')

    record_type = sys.argv[2] if len(sys.argv) > 2 else 'A'
    ecs = sys.argv[3] if len(sys.argv) > 3 else ''

    async def main() -> None:
        async with provider or CloudflareProvider() as doh:
            try:
                result = await doh.ecs_query(domain, record_type, ecs)
                console.print(render_response(result))
            except DohStatusError as se:
                console.print(f'[bold red]DNS Error:[/] {escape(str(se))}')
                console.print(render_response(se.response))
            except DohError as de:
                console.print(f'[bold red]Error:[/] {escape(str(de))}')
            except httpx.HTTPError as he:
                console.print(f'[bold red]HTTP Error:[/] {escape(str(he))}')

    try:
        asyncio.run(main())
    finally:
        disable_logging(sink_id)


if __name__ == '__main__':
    auto_run()
