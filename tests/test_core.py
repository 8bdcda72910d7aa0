import asyncio
import os

import pytest

from publish_kit.config import NETWORKS, ConnectionSettings
from publish_kit.core import (
    allow_zero_or_update_if_non_zero,
    assign_gas_options,
    catch_missing_resolver_when_generating_solidity,
    ensure_deployment_path,
    ensure_network,
    get_deployment_path_for_network,
    get_explorer_link_prefix,
    get_path_to_network,
    get_target_address,
    load_connections,
)
from publish_kit.errors import (
    InvalidDeploymentPathError,
    InvalidNetworkError,
    MissingAddressError,
    MissingConfigurationError,
)

SETTINGS = ConnectionSettings(
    provider_url="https://network.infura.io/v3/abc",
    provider_url_mainnet="https://mainnet.example/rpc",
    ovm_provider_url="https://optimism.example/rpc",
    ovm_goerli_provider_url="https://optimism-goerli.example/rpc",
    deploy_private_key="0xmainkey",
    testnet_deploy_private_key="0xtestkey",
)


# ─────────────────────────────────────────────
# Validation
# ─────────────────────────────────────────────
@pytest.mark.parametrize("network", NETWORKS)
def test_known_networks_pass(network):
    ensure_network(network)


def test_unknown_network_names_input_and_allowed_set():
    with pytest.raises(InvalidNetworkError) as excinfo:
        ensure_network("sepolia")

    message = str(excinfo.value)
    assert '"sepolia"' in message
    assert ", ".join(NETWORKS) in message


def test_deployment_path_must_exist(tmp_path):
    ensure_deployment_path(str(tmp_path))
    with pytest.raises(InvalidDeploymentPathError):
        ensure_deployment_path(str(tmp_path / "nope"))


def test_path_to_network(tmp_path):
    assert get_path_to_network("goerli", base_path=str(tmp_path)) == os.path.join(str(tmp_path), "goerli", "")
    assert get_path_to_network("goerli", file="config.json", use_ovm=True, base_path=str(tmp_path)) == os.path.join(
        str(tmp_path), "goerli-ovm", "config.json"
    )
    assert get_deployment_path_for_network("mainnet", base_path=str(tmp_path)).startswith(
        os.path.join(str(tmp_path), "mainnet")
    )


# ─────────────────────────────────────────────
# Connections
# ─────────────────────────────────────────────
def test_explorer_link_prefix():
    assert get_explorer_link_prefix("mainnet", False) == "https://etherscan.io"
    assert get_explorer_link_prefix("goerli", True) == "https://goerli-explorer.optimism.io"
    assert get_explorer_link_prefix("goerli", False) == "https://goerli.etherscan.io"
    assert get_explorer_link_prefix("mainnet", True) == "https://explorer.optimism.io"


@pytest.mark.parametrize("network,use_fork", [("local", False), ("mainnet", True), ("goerli", True)])
def test_local_and_fork_use_localhost(network, use_fork):
    conn = load_connections(network, use_fork=use_fork, use_ovm=True, settings=SETTINGS)
    assert conn.provider_url == "http://127.0.0.1:8545"


def test_mainnet_connection():
    conn = load_connections("mainnet", settings=SETTINGS)

    assert conn.provider_url == "https://mainnet.example/rpc"
    assert conn.private_key == "0xmainkey"
    assert conn.etherscan_url == "https://api.etherscan.io/api"
    assert conn.explorer_link_prefix == "https://etherscan.io"


def test_testnet_connection_templates_provider_url():
    conn = load_connections("goerli", settings=SETTINGS)

    assert conn.provider_url == "https://goerli.infura.io/v3/abc"
    assert conn.private_key == "0xtestkey"
    assert conn.etherscan_url == "https://api-goerli.etherscan.io/api"


def test_mainnet_falls_back_to_templated_url():
    settings = ConnectionSettings(provider_url="https://network.infura.io/v3/abc")

    conn = load_connections("mainnet", settings=settings)

    assert conn.provider_url == "https://mainnet.infura.io/v3/abc"
    assert conn.private_key is None


def test_ovm_connections():
    mainnet = load_connections("mainnet", use_ovm=True, settings=SETTINGS)
    goerli = load_connections("goerli", use_ovm=True, settings=SETTINGS)

    assert mainnet.provider_url == "https://optimism.example/rpc"
    assert mainnet.etherscan_url == "https://api-optimistic.etherscan.io/api"
    assert goerli.provider_url == "https://optimism-goerli.example/rpc"
    assert goerli.etherscan_url == "https://api-goerli-optimistic.etherscan.io/api"
    assert goerli.explorer_link_prefix == "https://goerli-explorer.optimism.io"


def test_ovm_mainnet_falls_back_to_goerli_url():
    settings = ConnectionSettings(ovm_goerli_provider_url="https://optimism-goerli.example/rpc")

    conn = load_connections("mainnet", use_ovm=True, settings=settings)

    assert conn.provider_url == "https://optimism-goerli.example/rpc"
    assert conn.explorer_link_prefix == "https://explorer.optimism.io"


def test_ovm_mainnet_missing_both_urls():
    with pytest.raises(MissingConfigurationError) as excinfo:
        load_connections("mainnet", use_ovm=True, settings=ConnectionSettings())

    assert str(excinfo.value) == "No OVM provider URL for mainnet: set OVM_PROVIDER_URL or OVM_GOERLI_PROVIDER_URL."


def test_missing_provider_url_fails_fast():
    with pytest.raises(MissingConfigurationError, match="PROVIDER_URL"):
        load_connections("goerli", settings=ConnectionSettings())
    with pytest.raises(MissingConfigurationError, match="OVM_GOERLI_PROVIDER_URL"):
        load_connections("goerli", use_ovm=True, settings=ConnectionSettings())


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("PROVIDER_URL", "https://network.example/rpc")
    monkeypatch.setenv("TESTNET_DEPLOY_PRIVATE_KEY", "0xenvkey")

    conn = load_connections("kovan")

    assert conn.provider_url == "https://kovan.example/rpc"
    assert conn.private_key == "0xenvkey"


# ─────────────────────────────────────────────
# Missing resolver classification
# ─────────────────────────────────────────────
@pytest.mark.parametrize("dry_run,generate_solidity", [(True, False), (False, True), (True, True)])
def test_missing_address_swallowed_in_generation_modes(dry_run, generate_solidity, capsys):
    err = Exception("Missing address: FeePool")

    catch_missing_resolver_when_generating_solidity(
        "Issuer", err, dry_run=dry_run, generate_solidity=generate_solidity
    )

    assert "Issuer" in capsys.readouterr().out


def test_missing_address_reraised_outside_generation_modes():
    err = Exception("Missing address: FeePool")

    with pytest.raises(Exception) as excinfo:
        catch_missing_resolver_when_generating_solidity("Issuer", err)

    assert excinfo.value is err


def test_other_errors_always_reraised():
    err = ValueError("execution reverted")

    with pytest.raises(ValueError) as excinfo:
        catch_missing_resolver_when_generating_solidity("Issuer", err, dry_run=True, generate_solidity=True)

    assert excinfo.value is err


def test_tagged_missing_address_error():
    deployment = {"targets": {"FeePool": {"address": "0x01"}}}

    assert get_target_address(deployment, "FeePool") == "0x01"
    with pytest.raises(MissingAddressError) as excinfo:
        get_target_address(deployment, "Issuer")

    assert str(excinfo.value) == "Missing address: Issuer"
    catch_missing_resolver_when_generating_solidity("Exchanger", excinfo.value, dry_run=True)


# ─────────────────────────────────────────────
# Gas options
# ─────────────────────────────────────────────
class FakeEth:
    def __init__(self, block=None, error=None):
        self.block = block
        self.error = error

    async def get_block(self, identifier):
        assert identifier == "latest"
        if self.error:
            raise self.error
        return self.block


class FakeWeb3:
    def __init__(self, **kwargs):
        self.eth = FakeEth(**kwargs)


def test_gas_options_on_eip1559_chain():
    w3 = FakeWeb3(block={"number": 1, "baseFeePerGas": 7})

    tx = asyncio.run(assign_gas_options({"gas": 21000}, w3, max_fee_per_gas=100, max_priority_fee_per_gas=2))

    assert tx == {
        "type": 2,
        "maxFeePerGas": 100 * 10**9,
        "maxPriorityFeePerGas": 2 * 10**9,
        "gas": 21000,
    }


def test_gas_options_without_fee_caps():
    w3 = FakeWeb3(block={"baseFeePerGas": 7})

    tx = asyncio.run(assign_gas_options({}, w3))

    assert tx == {"type": 2}


def test_legacy_chain_leaves_tx_untouched():
    w3 = FakeWeb3(block={"number": 1})

    tx = asyncio.run(assign_gas_options({"gasPrice": 5}, w3, max_fee_per_gas=100))

    assert tx == {"gasPrice": 5}


def test_fee_query_failure_is_ignored():
    w3 = FakeWeb3(error=ValueError("method not supported"))

    tx = asyncio.run(assign_gas_options({"gas": 1}, w3, max_fee_per_gas=100))

    assert tx == {"gas": 1}


def test_caller_fields_win():
    w3 = FakeWeb3(block={"baseFeePerGas": 7})

    tx = asyncio.run(assign_gas_options({"type": 0, "maxFeePerGas": 1}, w3, max_fee_per_gas=100))

    assert tx == {"type": 0, "maxFeePerGas": 1}


def test_allow_zero_or_update_if_non_zero():
    assert allow_zero_or_update_if_non_zero("0")("0")
    assert allow_zero_or_update_if_non_zero("0")("5")
    assert allow_zero_or_update_if_non_zero("5")("7")
    assert not allow_zero_or_update_if_non_zero("5")("0")
