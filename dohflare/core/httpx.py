import dataclasses as dc

import httpx

import dohflare

DEFAULT_USER_AGENT = f'dohflare/{dohflare.__version__}'


@dc.dataclass(slots=True, frozen=True)
class ClientOptions:
    '''
    Transport settings for DoH lookups. Every exchange is one
    small GET against a fixed endpoint, so the deadlines are short
    and redirects are never followed.
    '''
    timeout: float = 5.0
    connect_timeout: float = 2.0
    max_connections: int = 20
    http2: bool = True
    verify: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    headers: dict[str, str] = dc.field(default_factory=dict)

    @property
    def httpx_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.timeout, connect=self.connect_timeout)

    @property
    def httpx_limits(self) -> httpx.Limits:
        # one keepalive connection per slot, lookups come in bursts
        return httpx.Limits(
            max_connections=self.max_connections,
            max_keepalive_connections=self.max_connections,
        )

    @property
    def default_headers(self) -> dict[str, str]:
        return {
            'User-Agent': self.user_agent,
            'accept': 'application/dns-json',
            **self.headers,
        }


def make_httpx_client(options: ClientOptions | None = None) -> httpx.AsyncClient:
    options = options or ClientOptions()
    return httpx.AsyncClient(
        timeout=options.httpx_timeout,
        headers=options.default_headers,
        limits=options.httpx_limits,
        http2=options.http2,
        verify=options.verify,
        follow_redirects=False,
    )
