import json

import pytest

from publish_kit.sources import stringify


INPUT_FILES = {
    "config.json": {"FeePool": {"deploy": True}, "Issuer": {"deploy": False}},
    "params.json": [{"name": "MINIMUM_STAKE_TIME", "value": "86400"}],
    "synths.json": [{"name": "sUSD", "asset": "USD"}, {"name": "sETH", "asset": "ETH"}],
    "rewards.json": [],
    "shorting-rewards.json": [],
    "versions.json": {"v2.0": {"tag": "v2.0", "contracts": {}}},
    "feeds.json": {"ETH": {"feed": "0x9326BFA02ADD2366b30bacB125260Af641031331"}},
    "futures-markets.json": [{"asset": "sETH", "marketKey": "sETH"}],
}


def write_inputs(path, files=INPUT_FILES):
    for name, content in files.items():
        (path / name).write_text(stringify(content), encoding="utf-8")


@pytest.fixture
def deployment_dir(tmp_path):
    folder = tmp_path / "goerli"
    folder.mkdir()
    write_inputs(folder)
    return folder


def read(path):
    return json.loads(path.read_text(encoding="utf-8"))
