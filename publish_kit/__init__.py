"""
publish-kit - helpers for a smart contract publishing pipeline.

Loads deployment directories, resolves network connections, records pending
owner actions and prepares gas options for transactions.
"""

from .config import NETWORKS, ConnectionSettings
from .errors import (
    PublishError,
    InvalidNetworkError,
    InvalidDeploymentPathError,
    MissingConfigurationError,
    NotConfirmedError,
    MissingAddressError,
)
from .core import (
    Connections,
    allow_zero_or_update_if_non_zero,
    ensure_network,
    ensure_deployment_path,
    get_path_to_network,
    get_deployment_path_for_network,
    get_explorer_link_prefix,
    load_connections,
    get_target_address,
    catch_missing_resolver_when_generating_solidity,
    assign_gas_options,
)
from .sources import RequiredSources, stringify, load_and_check_required_sources
from .ledger import OwnerActionLedger
from .cli.style import confirm_action, parameter_notice, report_deployed_contracts

__version__ = "0.1.0"
__all__ = [
    "NETWORKS",
    "ConnectionSettings",
    "PublishError",
    "InvalidNetworkError",
    "InvalidDeploymentPathError",
    "MissingConfigurationError",
    "NotConfirmedError",
    "MissingAddressError",
    "Connections",
    "allow_zero_or_update_if_non_zero",
    "ensure_network",
    "ensure_deployment_path",
    "get_path_to_network",
    "get_deployment_path_for_network",
    "get_explorer_link_prefix",
    "load_connections",
    "get_target_address",
    "catch_missing_resolver_when_generating_solidity",
    "assign_gas_options",
    "RequiredSources",
    "stringify",
    "load_and_check_required_sources",
    "OwnerActionLedger",
    "confirm_action",
    "parameter_notice",
    "report_deployed_contracts",
]
