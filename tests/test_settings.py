import pytest

from errors import ConfigError
from settings import load_settings

CONFIG = """
network: monad-testnet
networks:
  monad-testnet:
    rpc_url: https://rpc.monad.test
    chain_id: 10143
    symbol: MON
    tx_explorer: https://explorer.monad.test/tx/
  other:
    rpc_url: https://rpc.other.test
    chain_id: 1
gas_limit_min: 100000
gas_limit_max: 200000
wallets:
  - private_key: "0xaaa"
  - private_key: "0xbbb"
"""

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # set-then-delete so variables loaded from .env files are removed again on teardown
    for name in ("PRIVATE_KEY", "NETWORK", "RPC_URL"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)

def write(tmp_path, text=CONFIG):
    p = tmp_path / "config.yaml"
    p.write_text(text)
    return p, tmp_path / "missing.env"

def test_load(tmp_path):
    cfg, env = write(tmp_path)
    s = load_settings(cfg, env)
    assert s.network.name == "monad-testnet"
    assert s.network.chain_id == 10143
    assert s.network.symbol == "MON"
    assert s.network.tx_explorer == "https://explorer.monad.test/tx"
    assert (s.gas_limit_min, s.gas_limit_max) == (100000, 200000)
    assert s.private_keys == ["0xaaa", "0xbbb"]

def test_env_overrides(tmp_path, monkeypatch):
    cfg, env = write(tmp_path)
    monkeypatch.setenv("NETWORK", "other")
    monkeypatch.setenv("RPC_URL", "https://custom.rpc")
    monkeypatch.setenv("PRIVATE_KEY", "0xccc")
    s = load_settings(cfg, env)
    assert s.network.name == "other"
    assert s.network.rpc_url == "https://custom.rpc"
    assert s.network.symbol == "ETH"
    assert s.private_keys[0] == "0xccc"

def test_dotenv_file(tmp_path):
    cfg, _ = write(tmp_path)
    env = tmp_path / ".env"
    env.write_text("PRIVATE_KEY=0xddd\n")
    assert load_settings(cfg, env).private_keys[0] == "0xddd"

def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "nope.yaml", tmp_path / "missing.env")

def test_unknown_network(tmp_path):
    cfg, env = write(tmp_path, CONFIG.replace("network: monad-testnet", "network: mars"))
    with pytest.raises(ConfigError, match="Unknown network"):
        load_settings(cfg, env)

def test_bad_gas_range(tmp_path):
    cfg, env = write(tmp_path, CONFIG.replace("gas_limit_min: 100000", "gas_limit_min: 300000"))
    with pytest.raises(ConfigError, match="gas limit"):
        load_settings(cfg, env)

def test_no_wallets(tmp_path):
    cfg, env = write(tmp_path, CONFIG.split("wallets:")[0])
    assert load_settings(cfg, env).private_keys == []
