import ipaddress
from typing import Final

from dohflare.core.errors import InvalidSubnetError

IPV4_DEFAULT_PREFIX: Final[int] = 24
IPV6_DEFAULT_PREFIX: Final[int] = 64


def fix_subnet(raw: str) -> str:
    '''
    Normalizes an IP address or subnet into the canonical
    `network/prefix` form sent as the edns client subnet.

    A bare address is widened to /24 (IPv4) or /64 (IPv6), a
    deliberate ECS privacy default so a single host address is
    never forwarded upstream. Host bits are always masked off.

    Parameters
    ----------
    raw : str
        _An address such as `1.2.3.4` or a subnet such as `2001:db8::/48`_

    Returns
    -------
    str

    Raises
    ------
    InvalidSubnetError
        _If the value is not a valid address or subnet_
    '''
    subnet = raw.strip()
    if not subnet:
        raise InvalidSubnetError(raw, 'empty value')

    if '/' not in subnet:
        prefix = IPV6_DEFAULT_PREFIX if ':' in subnet else IPV4_DEFAULT_PREFIX
        subnet = f'{subnet}/{prefix}'

    try:
        network = ipaddress.ip_network(subnet, strict=False)
    except ValueError as exc:
        raise InvalidSubnetError(raw, str(exc)) from exc

    return network.with_prefixlen
