import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

NETWORKS = ['local', 'kovan', 'rinkeby', 'ropsten', 'mainnet', 'goerli']

LOCAL_PROVIDER_URL = "http://127.0.0.1:8545"

# Deployment directory file names
CONFIG_FILENAME = "config.json"
PARAMS_FILENAME = "params.json"
DEPLOYMENT_FILENAME = "deployment.json"
OWNER_ACTIONS_FILENAME = "owner-actions.json"
SYNTHS_FILENAME = "synths.json"
STAKING_REWARDS_FILENAME = "rewards.json"
SHORTING_REWARDS_FILENAME = "shorting-rewards.json"
VERSIONS_FILENAME = "versions.json"
FEEDS_FILENAME = "feeds.json"
FUTURES_MARKETS_FILENAME = "futures-markets.json"

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEPLOYED_DIR = os.getenv("PUBLISH_DEPLOYED_DIR", os.path.join(BASE_DIR, "..", "publish", "deployed"))


@dataclass
class ConnectionSettings:
    """Environment values used to resolve RPC endpoints and deployer keys."""
    provider_url: Optional[str] = None
    provider_url_mainnet: Optional[str] = None
    ovm_provider_url: Optional[str] = None
    ovm_goerli_provider_url: Optional[str] = None
    deploy_private_key: Optional[str] = None
    testnet_deploy_private_key: Optional[str] = None

    @classmethod
    def from_env(cls):
        load_dotenv()
        return cls(
            provider_url=os.getenv("PROVIDER_URL"),
            provider_url_mainnet=os.getenv("PROVIDER_URL_MAINNET"),
            ovm_provider_url=os.getenv("OVM_PROVIDER_URL"),
            ovm_goerli_provider_url=os.getenv("OVM_GOERLI_PROVIDER_URL"),
            deploy_private_key=os.getenv("DEPLOY_PRIVATE_KEY"),
            testnet_deploy_private_key=os.getenv("TESTNET_DEPLOY_PRIVATE_KEY"),
        )
