"""
RPC provider resolution - one AsyncWeb3 provider per supported chain.
"""

import os
from typing import Dict, Mapping, Optional

from web3 import AsyncWeb3

from config.chains import Chain

# Public RPCs used when use_public_rpcs is enabled and no env var is set
PUBLIC_RPCS = {
    Chain.Ethereum: 'https://eth.llamarpc.com',
    Chain.Optimism: 'https://mainnet.optimism.io',
    Chain.Bsc: 'https://bsc-dataseed.binance.org',
    Chain.Polygon: 'https://polygon-rpc.com',
    Chain.Base: 'https://mainnet.base.org',
    Chain.Arbitrum: 'https://arb1.arbitrum.io/rpc',
    Chain.Avalanche: 'https://api.avax.network/ext/bc/C/rpc',
    Chain.Linea: 'https://rpc.linea.build',
}


def get_rpc_url(
    chain: Chain,
    env_prefix: str = "DEFI_ADAPTERS_PROVIDER_",
    use_public_rpcs: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """
    Get RPC URL for a chain.

    Args:
        chain: Chain member
        env_prefix: env var prefix, the chain name is appended upper-cased
            (DEFI_ADAPTERS_PROVIDER_ETHEREUM)
        use_public_rpcs: fall back to PUBLIC_RPCS when the env var is unset
        environ: mapping to read instead of os.environ

    Returns:
        RPC URL, or None when the chain has no provider configured
    """
    environ = os.environ if environ is None else environ
    url = environ.get(f"{env_prefix}{chain.name.upper()}")
    if url:
        return url
    if use_public_rpcs:
        return PUBLIC_RPCS.get(chain)
    return None


def build_chain_providers(settings, environ: Optional[Mapping[str, str]] = None) -> Dict[Chain, AsyncWeb3]:
    """Build a provider for every chain that has an RPC URL; other chains are left out."""
    providers: Dict[Chain, AsyncWeb3] = {}
    for chain in Chain:
        url = get_rpc_url(chain, settings.provider_env_prefix, settings.use_public_rpcs, environ)
        if not url:
            continue
        providers[chain] = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(url, request_kwargs={'timeout': 60}))
    return providers
