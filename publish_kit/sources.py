"""
Readers for the JSON files of a deployment directory.

Everything is read fully into memory and written back wholesale. Only the
deployment record and the owner-action ledger are ever written; they are
created with an empty shape when missing.
"""
import os
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from web3 import Web3

from publish_kit.config import (
    CONFIG_FILENAME,
    PARAMS_FILENAME,
    DEPLOYMENT_FILENAME,
    OWNER_ACTIONS_FILENAME,
    SYNTHS_FILENAME,
    STAKING_REWARDS_FILENAME,
    SHORTING_REWARDS_FILENAME,
    VERSIONS_FILENAME,
    FEEDS_FILENAME,
    FUTURES_MARKETS_FILENAME,
)
from publish_kit.cli.style import print_status


def _is_big_number(value) -> bool:
    return isinstance(value, dict) and value.get("type") == "BigNumber" and "hex" in value


def _replace_big_numbers(value):
    if _is_big_number(value):
        return str(Web3.to_int(hexstr=value["hex"]))
    if isinstance(value, dict):
        return {k: _replace_big_numbers(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_replace_big_numbers(v) for v in value]
    return value


def stringify(data) -> str:
    """Tab-indented JSON with a trailing newline; BigNumber objects become decimal strings."""
    return json.dumps(_replace_big_numbers(data), indent="\t", ensure_ascii=False) + "\n"


def read_json(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path, data):
    """Serialize first, then swap the file in, so a failed write leaves the old contents."""
    text = stringify(data)
    tmp_path = f"{path}.tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        f.write(text)
    os.replace(tmp_path, path)


def get_feeds(deployment_path) -> Dict[str, dict]:
    feeds = read_json(os.path.join(deployment_path, FEEDS_FILENAME))
    return {asset: {"asset": asset, **entry} for asset, entry in feeds.items()}


def get_synths(deployment_path, feeds: Optional[Dict[str, dict]] = None) -> List[dict]:
    """
    Load the synth list, attaching the price feed address of each synth's asset.

    :param deployment_path: directory holding ``synths.json``
    :param feeds: feeds keyed by asset; read from ``feeds.json`` when omitted
    """
    synths = read_json(os.path.join(deployment_path, SYNTHS_FILENAME))
    if feeds is None:
        feeds = get_feeds(deployment_path)

    result = []
    for synth in synths:
        feed = feeds.get(synth.get("asset"), {}).get("feed")
        result.append({**synth, "feed": feed} if feed else dict(synth))
    return result


def get_staking_rewards(deployment_path):
    return read_json(os.path.join(deployment_path, STAKING_REWARDS_FILENAME))


def get_shorting_rewards(deployment_path):
    return read_json(os.path.join(deployment_path, SHORTING_REWARDS_FILENAME))


def get_versions(deployment_path):
    return read_json(os.path.join(deployment_path, VERSIONS_FILENAME))


@dataclass
class RequiredSources:
    config: Any
    config_file: str
    params: Any
    params_file: str
    synths: List[dict]
    synths_file: str
    staking_rewards: Any
    staking_rewards_file: str
    shorting_rewards: Any
    shorting_rewards_file: str
    futures_markets: Any
    futures_markets_file: str
    versions: Any
    versions_file: str
    feeds: Dict[str, dict]
    feeds_file: str
    deployment: dict
    deployment_file: str
    owner_actions: dict
    owner_actions_file: str


def _load_or_create(path, default):
    if not os.path.exists(path):
        write_json(path, default)
    return read_json(path)


def load_and_check_required_sources(deployment_path, network, fresh_deploy=False) -> RequiredSources:
    """
    Load every file a deployment run needs from ``deployment_path``.

    Read-only inputs must exist; their read or parse errors propagate. The
    deployment record and owner-action ledger are created empty when absent,
    after all inputs were read. ``fresh_deploy`` empties the in-memory
    deployment targets and sources without touching the file.
    """
    label = network.upper()

    print_status(f"Loading the list of synths for {label}...", level="muted")
    synths_file = os.path.join(deployment_path, SYNTHS_FILENAME)
    feeds_file = os.path.join(deployment_path, FEEDS_FILENAME)
    feeds = get_feeds(deployment_path)
    synths = get_synths(deployment_path, feeds=feeds)

    print_status(f"Loading the list of staking rewards to deploy on {label}...", level="muted")
    staking_rewards_file = os.path.join(deployment_path, STAKING_REWARDS_FILENAME)
    staking_rewards = get_staking_rewards(deployment_path)

    print_status(f"Loading the list of shorting rewards to deploy on {label}...", level="muted")
    shorting_rewards_file = os.path.join(deployment_path, SHORTING_REWARDS_FILENAME)
    shorting_rewards = get_shorting_rewards(deployment_path)

    print_status(f"Loading the list of contracts to deploy on {label}...", level="muted")
    config_file = os.path.join(deployment_path, CONFIG_FILENAME)
    config = read_json(config_file)

    print_status(f"Loading the list of deployment parameters on {label}...", level="muted")
    params_file = os.path.join(deployment_path, PARAMS_FILENAME)
    params = read_json(params_file)

    print_status(f"Loading the list of futures markets on {label}...", level="muted")
    futures_markets_file = os.path.join(deployment_path, FUTURES_MARKETS_FILENAME)
    futures_markets = read_json(futures_markets_file)

    versions_file = os.path.join(deployment_path, VERSIONS_FILENAME)
    versions = get_versions(deployment_path) if network != "local" else {}

    print_status(f"Loading the list of contracts already deployed for {label}...", level="muted")
    deployment_file = os.path.join(deployment_path, DEPLOYMENT_FILENAME)
    deployment = _load_or_create(deployment_file, {"targets": {}, "sources": {}})

    if fresh_deploy:
        deployment["targets"] = {}
        deployment["sources"] = {}

    owner_actions_file = os.path.join(deployment_path, OWNER_ACTIONS_FILENAME)
    owner_actions = _load_or_create(owner_actions_file, {})

    return RequiredSources(
        config=config,
        config_file=config_file,
        params=params,
        params_file=params_file,
        synths=synths,
        synths_file=synths_file,
        staking_rewards=staking_rewards,
        staking_rewards_file=staking_rewards_file,
        shorting_rewards=shorting_rewards,
        shorting_rewards_file=shorting_rewards_file,
        futures_markets=futures_markets,
        futures_markets_file=futures_markets_file,
        versions=versions,
        versions_file=versions_file,
        feeds=feeds,
        feeds_file=feeds_file,
        deployment=deployment,
        deployment_file=deployment_file,
        owner_actions=owner_actions,
        owner_actions_file=owner_actions_file,
    )
