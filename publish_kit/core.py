import os
import re
from dataclasses import dataclass
from typing import Optional

from rich.markup import escape
from web3 import Web3

from publish_kit.config import (
    NETWORKS,
    CONFIG_FILENAME,
    DEPLOYED_DIR,
    LOCAL_PROVIDER_URL,
    ConnectionSettings,
)
from publish_kit.errors import (
    InvalidNetworkError,
    InvalidDeploymentPathError,
    MissingConfigurationError,
    MissingAddressError,
)
from publish_kit.cli.style import print_status, color_map

MISSING_ADDRESS_PATTERN = re.compile(r"Missing address:\s[\w]+")


@dataclass
class Connections:
    provider_url: str
    private_key: Optional[str]
    etherscan_url: str
    explorer_link_prefix: str


def allow_zero_or_update_if_non_zero(param):
    """Predicate factory: a zero param accepts anything, otherwise the new value must be non-zero."""
    return lambda value: param == "0" or value != "0"


def ensure_network(network):
    if network not in NETWORKS:
        raise InvalidNetworkError(network, NETWORKS)


def ensure_deployment_path(deployment_path):
    if not os.path.exists(deployment_path):
        raise InvalidDeploymentPathError(deployment_path, CONFIG_FILENAME)


def get_path_to_network(network="mainnet", file="", use_ovm=False, base_path=None):
    folder = f"{network}-ovm" if use_ovm else network
    return os.path.join(base_path or DEPLOYED_DIR, folder, file)


def get_deployment_path_for_network(network, use_ovm=False, base_path=None):
    print_status("Loading default deployment for network", level="muted")
    return get_path_to_network(network=network, use_ovm=use_ovm, base_path=base_path)


def get_explorer_link_prefix(network, use_ovm=False) -> str:
    subdomain = "" if network == "mainnet" else network + ("-" if use_ovm else ".")
    host = "explorer.optimism" if use_ovm else "etherscan"
    return f"https://{subdomain}{host}.io"


def _resolve_provider_url(network, use_fork, use_ovm, settings: ConnectionSettings) -> str:
    # A fork is assumed to be served locally whatever network it was forked from
    if network == "local" or use_fork:
        return LOCAL_PROVIDER_URL

    if use_ovm:
        if network == "mainnet" and settings.ovm_provider_url:
            return settings.ovm_provider_url
        if settings.ovm_goerli_provider_url:
            return settings.ovm_goerli_provider_url
        expected = "OVM_PROVIDER_URL or OVM_GOERLI_PROVIDER_URL" if network == "mainnet" else "OVM_GOERLI_PROVIDER_URL"
        raise MissingConfigurationError(f"No OVM provider URL for {network}: set {expected}.")

    if network == "mainnet" and settings.provider_url_mainnet:
        return settings.provider_url_mainnet
    if settings.provider_url:
        return settings.provider_url.replace("network", network, 1)
    expected = "PROVIDER_URL_MAINNET or PROVIDER_URL" if network == "mainnet" else "PROVIDER_URL"
    raise MissingConfigurationError(f"No provider URL for {network}: set {expected}.")


def load_connections(network, use_fork=False, use_ovm=False, settings: Optional[ConnectionSettings] = None) -> Connections:
    """
    Resolve the RPC endpoint, deployer key and explorer URLs for a network.

    :param settings: environment values; read from the process environment when omitted
    :raises MissingConfigurationError: when no provider URL can be derived
    """
    if settings is None:
        settings = ConnectionSettings.from_env()

    provider_url = _resolve_provider_url(network, use_fork, use_ovm, settings)

    private_key = (
        settings.deploy_private_key if network == "mainnet" else settings.testnet_deploy_private_key
    )

    network_part = "" if network == "mainnet" else f"-{network}"
    ovm_part = "-optimistic" if use_ovm else ""
    etherscan_url = f"https://api{network_part}{ovm_part}.etherscan.io/api"

    return Connections(
        provider_url=provider_url,
        private_key=private_key,
        etherscan_url=etherscan_url,
        explorer_link_prefix=get_explorer_link_prefix(network, use_ovm),
    )


def get_target_address(deployment, name) -> str:
    target = deployment.get("targets", {}).get(name) or {}
    address = target.get("address")
    if not address:
        raise MissingAddressError(name)
    return address


def catch_missing_resolver_when_generating_solidity(contract, err, dry_run=False, generate_solidity=False):
    """
    Swallow a missing-address error while generating solidity or dry running.

    New contracts that still need their resolver cache rebuilt cannot read
    each other's addresses yet, so reads against them fail in those modes.
    Any other error, or any error outside those modes, is re-raised as is.
    """
    is_missing_address = isinstance(err, MissingAddressError) or bool(
        MISSING_ADDRESS_PATTERN.search(str(err))
    )
    if (generate_solidity or dry_run) and is_missing_address:
        print_status(
            f"WARNING: Error thrown reading state from [{color_map['warn']}]{escape(str(contract))}[/{color_map['warn']}] "
            "with missing resolver addresses (expected for new contracts that need their resolvers cached). "
            "Ignoring as this is generate-solidity mode.",
            level="muted",
        )
        return
    raise err


async def assign_gas_options(tx, w3, max_fee_per_gas=None, max_priority_fee_per_gas=None) -> dict:
    """
    Add EIP-1559 fee fields to ``tx`` when the chain supports them.

    ``w3`` is an ``AsyncWeb3`` instance. Fee caps are given in gwei. Fields
    already present in ``tx`` win over the computed ones.
    """
    gas_options = {}

    try:
        block = await w3.eth.get_block("latest")
    except Exception:
        # network does not support the fee query
        block = {}

    if block and block.get("baseFeePerGas") is not None:
        gas_options["type"] = 2
        if max_fee_per_gas:
            gas_options["maxFeePerGas"] = Web3.to_wei(max_fee_per_gas, "gwei")
        if max_priority_fee_per_gas:
            gas_options["maxPriorityFeePerGas"] = Web3.to_wei(max_priority_fee_per_gas, "gwei")

    return {**gas_options, **tx}
