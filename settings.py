import os, yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import List
from dotenv import load_dotenv

from errors import ConfigError

DEFAULT_CONFIG = "config.yaml"
DEFAULT_GAS_LIMIT_MIN = 150_000
DEFAULT_GAS_LIMIT_MAX = 250_000

@dataclass(frozen=True)
class Network:
    name: str
    rpc_url: str
    chain_id: int
    symbol: str = "ETH"
    tx_explorer: str = ""

@dataclass(frozen=True)
class Settings:
    network: Network
    gas_limit_min: int = DEFAULT_GAS_LIMIT_MIN
    gas_limit_max: int = DEFAULT_GAS_LIMIT_MAX
    private_keys: List[str] = field(default_factory=list)

def load_cfg(path=DEFAULT_CONFIG):
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {path}")
    cfg = yaml.safe_load(p.read_text()) or {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")
    return cfg

def _parse_network(cfg):
    networks = cfg.get("networks") or {}
    name = os.getenv("NETWORK") or cfg.get("network")
    if not name:
        raise ConfigError("No network selected (set `network` or NETWORK)")
    if name not in networks:
        raise ConfigError(f"Unknown network: {name}")
    raw = networks[name] or {}
    rpc = os.getenv("RPC_URL") or raw.get("rpc_url")
    if not rpc:
        raise ConfigError(f"Missing rpc_url for network {name}")
    try:
        chain_id = int(raw["chain_id"])
    except (KeyError, TypeError, ValueError):
        raise ConfigError(f"Missing or bad chain_id for network {name}")
    return Network(
        name=name,
        rpc_url=rpc,
        chain_id=chain_id,
        symbol=str(raw.get("symbol", "ETH")),
        tx_explorer=str(raw.get("tx_explorer", "")).rstrip("/"),
    )

def _parse_wallets(cfg):
    keys = []
    env_pk = (os.getenv("PRIVATE_KEY") or "").strip()
    if env_pk:
        keys.append(env_pk)
    for w in cfg.get("wallets") or []:
        pk = w.get("private_key") if isinstance(w, dict) else w
        pk = str(pk or "").strip()
        if pk and pk not in keys:
            keys.append(pk)
    return keys

def load_settings(path=DEFAULT_CONFIG, env_file=".env") -> Settings:
    load_dotenv(env_file)
    cfg = load_cfg(path)
    try:
        gas_min = int(cfg.get("gas_limit_min", DEFAULT_GAS_LIMIT_MIN))
        gas_max = int(cfg.get("gas_limit_max", DEFAULT_GAS_LIMIT_MAX))
    except (TypeError, ValueError):
        raise ConfigError("gas_limit_min / gas_limit_max must be integers")
    if gas_min <= 0 or gas_min > gas_max:
        raise ConfigError(f"Bad gas limit range [{gas_min}, {gas_max}]")
    return Settings(
        network=_parse_network(cfg),
        gas_limit_min=gas_min,
        gas_limit_max=gas_max,
        private_keys=_parse_wallets(cfg),
    )
